"""Exception hierarchy for the attestation protocol."""

from __future__ import annotations

from enum import Enum


class AttestationError(Exception):
    """
    Base exception for all attestation errors.

    Every error signals malformed or malicious input, never a transient
    condition. Callers decide whether to reject or surface it; nothing retries.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class FormatError(AttestationError):
    """
    Raised when bytes or field values violate a size, version or range rule.

    Attributes:
        type_name: The value being encoded, decoded or hashed.
        detail: Description of what went wrong.
        offset: The byte offset where the error occurred (if known).
    """

    def __init__(
        self,
        type_name: str,
        detail: str,
        *,
        offset: int | None = None,
    ) -> None:
        self.type_name = type_name
        self.detail = detail
        self.offset = offset

        msg = f"Invalid {type_name}: {detail}"
        if offset is not None:
            msg = f"{msg} (at byte offset {offset})"

        super().__init__(msg)


class CryptoError(AttestationError):
    """
    Raised on authentication failure or malformed key material.

    Decryption either returns the exact plaintext or raises this error.
    It never returns garbage.
    """


class ViolationReason(Enum):
    """Why a signature set was rejected."""

    SELF_ATTESTATION = "self_attestation"
    """The same party signed both roles, or the agent attests to itself."""

    MISSING_SIGNATURE = "missing_signature"
    """Fewer signatures than the signature mode requires."""

    UNEXPECTED_SIGNATURE = "unexpected_signature"
    """More signatures than the signature mode allows."""

    SIGNER_MISMATCH = "signer_mismatch"
    """A signature's public key is not the identity bound to its role."""

    SIGNATURE_MISMATCH = "signature_mismatch"
    """A signature does not verify over the recomputed hash or message."""

    OWNER_ONLY = "owner_only"
    """The schema accepts only the agent owner, but someone else signed."""

    DELEGATION_REQUIRED = "delegation_required"
    """A delegate signed without presenting a delegation."""

    DELEGATE_MISMATCH = "delegate_mismatch"
    """The delegation names a different delegate than the signer."""

    AGENT_MISMATCH = "agent_mismatch"
    """The delegation is for a different agent."""

    DELEGATION_OWNER_MISMATCH = "delegation_owner_mismatch"
    """The delegation was granted by a previous owner of the agent."""

    DELEGATION_EXPIRED = "delegation_expired"
    """The delegation's expiry has passed."""


class ProtocolViolation(AttestationError):
    """
    Raised when a signature set does not satisfy the schema's signature mode.

    Attributes:
        reason: Machine-readable rejection category.
        detail: Additional context about the rejection.
    """

    def __init__(self, reason: ViolationReason, detail: str | None = None) -> None:
        self.reason = reason
        self.detail = detail

        msg = reason.value.replace("_", " ")
        if detail:
            msg = f"{msg}: {detail}"

        super().__init__(msg)
