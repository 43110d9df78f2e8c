"""Schema configuration: the per-schema rules verification obeys."""

from __future__ import annotations

from pydantic import Field

from agent_attest.types import Bytes32, StrictBaseModel

from .enums import DataType, SignatureMode, StorageType


class SchemaConfig(StrictBaseModel):
    """
    Registered configuration for one attestation schema.

    The signature mode lives here, not in the payload, so a client can never
    pick a weaker verification path by editing the bytes it submits.
    """

    address: Bytes32
    """Schema address; the first field of every hash preimage."""

    name: str = Field(min_length=1)
    """Human-readable name, shown in the signing message header."""

    data_type: DataType
    """Attestation kind recorded under this schema."""

    signature_mode: SignatureMode
    """Which signatures verification requires."""

    storage_type: StorageType
    """Storage backend for attestations of this schema."""

    closeable: bool = False
    """Whether attestations may later be closed."""

    delegation_schema: Bytes32 | None = None
    """Schema whose attestations authorize delegates. None means owner only."""


def core_schemas(
    *,
    feedback: Bytes32,
    feedback_public: Bytes32,
    validation: Bytes32,
    reputation_score: Bytes32,
    delegation: Bytes32 | None = None,
) -> dict[str, SchemaConfig]:
    """
    Build the standard schema set from deployed schema addresses.

    Args:
        feedback: Address of the dual-signature Feedback schema.
        feedback_public: Address of the counterparty-signed Feedback schema.
        validation: Address of the dual-signature Validation schema.
        reputation_score: Address of the single-signer ReputationScore schema.
        delegation: Optional delegation schema enabling delegated agent signing.

    Returns:
        Schema configurations keyed by schema name.
    """
    return {
        "Feedback": SchemaConfig(
            address=feedback,
            name="Feedback",
            data_type=DataType.FEEDBACK,
            signature_mode=SignatureMode.DUAL_SIGNATURE,
            storage_type=StorageType.COMPRESSED,
            delegation_schema=delegation,
        ),
        "FeedbackPublic": SchemaConfig(
            address=feedback_public,
            name="FeedbackPublic",
            data_type=DataType.FEEDBACK,
            signature_mode=SignatureMode.COUNTERPARTY_SIGNED,
            storage_type=StorageType.COMPRESSED,
        ),
        "Validation": SchemaConfig(
            address=validation,
            name="Validation",
            data_type=DataType.VALIDATION,
            signature_mode=SignatureMode.DUAL_SIGNATURE,
            storage_type=StorageType.COMPRESSED,
            delegation_schema=delegation,
        ),
        "ReputationScore": SchemaConfig(
            address=reputation_score,
            name="ReputationScore",
            data_type=DataType.REPUTATION_SCORE,
            signature_mode=SignatureMode.SINGLE_SIGNER,
            storage_type=StorageType.REGULAR,
            closeable=True,
        ),
    }
