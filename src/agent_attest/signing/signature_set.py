"""Signatures submitted alongside attestation bytes."""

from __future__ import annotations

from pydantic import Field

from agent_attest.types import Bytes32, Bytes64, StrictBaseModel


class SignatureEntry(StrictBaseModel):
    """One Ed25519 signature and the key that claims it."""

    pubkey: Bytes32
    """Signer's public key."""

    signature: Bytes64
    """Ed25519 signature."""


class SignatureSet(StrictBaseModel):
    """
    One or two signatures, read according to the schema's signature mode.

    In DualSignature mode the agent's entry comes first and the
    counterparty's second.
    """

    entries: tuple[SignatureEntry, ...] = Field(min_length=1, max_length=2)

    @classmethod
    def of(cls, *entries: SignatureEntry) -> SignatureSet:
        """Build a set from entries in role order."""
        return cls(entries=tuple(entries))

    @property
    def pubkeys(self) -> tuple[Bytes32, ...]:
        """Public keys in role order."""
        return tuple(entry.pubkey for entry in self.entries)
