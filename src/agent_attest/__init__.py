"""
Agent attestation protocol.

Deterministic payload layout, domain-separated hashes, blind dual
signatures, content encryption and the counterparty signing message.
"""

from .config import DEFAULT_CONFIG, ProtocolConfig
from .layout import AttestationPayload, decode_payload, encode_payload
from .schemas import ContentType, Outcome, SchemaConfig, SignatureMode
from .types import AttestationError, CryptoError, FormatError, ProtocolViolation

__all__ = [
    "DEFAULT_CONFIG",
    "ProtocolConfig",
    "AttestationPayload",
    "encode_payload",
    "decode_payload",
    "ContentType",
    "Outcome",
    "SchemaConfig",
    "SignatureMode",
    "AttestationError",
    "FormatError",
    "CryptoError",
    "ProtocolViolation",
]
