"""The attestation payload value type."""

from __future__ import annotations

from pydantic import Field
from typing_extensions import Self

from agent_attest.config import LAYOUT_VERSION
from agent_attest.schemas import ContentType, Outcome
from agent_attest.types import ZERO_HASH, Bytes32, StrictBaseModel


class AttestationPayload(StrictBaseModel):
    """
    One attestation in the universal layout.

    Frozen once built. Kind-specific detail (scores, validation method,
    free text) lives in `content`, typically as JSON.
    """

    version: int = Field(default=LAYOUT_VERSION, ge=0, le=255)
    """Layout version byte."""

    task_ref: Bytes32
    """CAIP-220 transaction hash or arbitrary task identifier."""

    subject_identity: Bytes32
    """Token identity of the agent the attestation is about."""

    counterparty_identity: Bytes32
    """Client, validator or provider making the attestation."""

    outcome: Outcome = Outcome.NEUTRAL
    """Outcome of the interaction. Excluded from the agent's blind hash."""

    data_hash: Bytes32 = ZERO_HASH
    """Agent's commitment to the interaction data. Zero for single-signer schemas."""

    content_type: ContentType = ContentType.NONE
    """How to interpret `content`."""

    content: bytes = b""
    """Variable-length content. Truncated to the configured ceiling on encode."""

    def encode_bytes(self) -> bytes:
        """Serialize with the default configuration."""
        from .codec import encode_payload

        return encode_payload(self)

    @classmethod
    def decode_bytes(cls, data: bytes) -> Self:
        """Deserialize with the default configuration."""
        from .codec import decode_payload

        return decode_payload(data)  # type: ignore[return-value]
