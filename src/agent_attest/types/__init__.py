"""Reusable type definitions for the attestation protocol."""

from .base import StrictBaseModel
from .byte_arrays import ZERO_HASH, BaseBytes, Bytes20, Bytes24, Bytes32, Bytes64
from .exceptions import (
    AttestationError,
    CryptoError,
    FormatError,
    ProtocolViolation,
    ViolationReason,
)

__all__ = [
    # Core types
    "BaseBytes",
    "Bytes20",
    "Bytes24",
    "Bytes32",
    "Bytes64",
    "ZERO_HASH",
    "StrictBaseModel",
    # Exceptions
    "AttestationError",
    "FormatError",
    "CryptoError",
    "ProtocolViolation",
    "ViolationReason",
]
