"""Closed enumerations shared by every attestation kind."""

from __future__ import annotations

from enum import IntEnum


class Outcome(IntEnum):
    """
    Feedback outcome stored at offset 97 (ERC-8004 compatible).

    The counterparty's signature covers this value; the agent's does not.
    """

    NEGATIVE = 0
    NEUTRAL = 1
    POSITIVE = 2

    @property
    def label(self) -> str:
        """Label used in the human-readable signing message."""
        return self.name.capitalize()

    def to_score(self) -> int:
        """Map to an ERC-8004 score: Negative 0, Neutral 50, Positive 100."""
        return self.value * 50


class ContentType(IntEnum):
    """Determines how the variable-length content field is interpreted."""

    NONE = 0
    """Empty content."""

    JSON = 1
    """Inline JSON object."""

    UTF8 = 2
    """Plain UTF-8 text."""

    IPFS = 3
    """IPFS CIDv1 bytes."""

    ARWEAVE = 4
    """Arweave transaction ID (32 bytes)."""

    ENCRYPTED = 5
    """Serialized `EncryptedPayload` (see `agent_attest.encryption`)."""

    @property
    def label(self) -> str:
        return _CONTENT_TYPE_LABELS[self]


_CONTENT_TYPE_LABELS = {
    ContentType.NONE: "None",
    ContentType.JSON: "JSON",
    ContentType.UTF8: "UTF-8",
    ContentType.IPFS: "IPFS",
    ContentType.ARWEAVE: "Arweave",
    ContentType.ENCRYPTED: "Encrypted",
}


class SignatureMode(IntEnum):
    """
    How many signatures a schema requires and over what.

    `SINGLE_SIGNER` is an alias of `COUNTERPARTY_SIGNED`: one party signs on
    behalf of the record, e.g. a payer-submitted transaction or a reputation
    provider.
    """

    DUAL_SIGNATURE = 0
    """Agent signs the blind interaction hash, counterparty signs the outcome."""

    COUNTERPARTY_SIGNED = 1
    """Counterparty alone signs the human-readable message."""

    SINGLE_SIGNER = 1

    AGENT_OWNER_SIGNED = 2
    """The agent's owner (or a delegate) alone signs the interaction hash."""

    @property
    def signature_count(self) -> int:
        """Exact number of signatures the mode requires."""
        return 2 if self is SignatureMode.DUAL_SIGNATURE else 1


class StorageType(IntEnum):
    """Where a schema's attestations are stored."""

    COMPRESSED = 0
    REGULAR = 1


class DataType(IntEnum):
    """Attestation kind carried by a schema."""

    FEEDBACK = 0
    VALIDATION = 1
    REPUTATION_SCORE = 2


class ValidationType(IntEnum):
    """Validation method, used in Validation content sub-structures."""

    TEE = 0
    ZKML = 1
    REEXECUTION = 2
    CONSENSUS = 3

    @property
    def label(self) -> str:
        return "Re-execution" if self is ValidationType.REEXECUTION else self.name
