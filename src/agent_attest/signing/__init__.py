"""
Blind Signature Protocol.

Two-phase signing and verification of attestations with Ed25519.
"""

from .delegation import Delegation, verify_agent_authorization
from .keys import SigningKeypair, verify_signature
from .protocol import (
    expected_messages,
    sign_as_agent,
    sign_as_counterparty,
    sign_reputation_score,
    sign_validation_response,
    verify_attestation,
    verify_reputation_score,
    verify_validation_response,
)
from .signature_set import SignatureEntry, SignatureSet

__all__ = [
    "SigningKeypair",
    "verify_signature",
    "SignatureEntry",
    "SignatureSet",
    "expected_messages",
    "sign_as_agent",
    "sign_as_counterparty",
    "verify_attestation",
    "sign_reputation_score",
    "verify_reputation_score",
    "sign_validation_response",
    "verify_validation_response",
    "Delegation",
    "verify_agent_authorization",
]
