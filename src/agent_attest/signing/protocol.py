"""
Blind dual-signature protocol.

The agent signs the interaction hash, which leaves the outcome out. It
commits to the interaction before it can know the verdict. The counterparty
then signs data that includes the outcome. A verifier recomputes every
signed message from the payload bytes and the registered schema alone;
nothing the submitter claims about the messages is trusted.

Signed data per signature mode:

    DualSignature        agent: interaction hash, counterparty: feedback hash
    CounterpartySigned   counterparty: human-readable message bytes
    AgentOwnerSigned     agent owner: interaction hash
"""

from __future__ import annotations

import logging

from agent_attest.config import DEFAULT_CONFIG, ProtocolConfig
from agent_attest.hashing import (
    compute_feedback_hash,
    compute_interaction_hash,
    compute_reputation_hash,
    compute_validation_hash,
)
from agent_attest.layout import (
    AttestationPayload,
    check_content_size,
    decode_payload,
    encode_payload,
)
from agent_attest.message import build_counterparty_message
from agent_attest.schemas import SchemaConfig, SignatureMode
from agent_attest.types import Bytes32, ProtocolViolation, ViolationReason

from .delegation import Delegation, verify_agent_authorization
from .keys import SigningKeypair, verify_signature
from .signature_set import SignatureEntry, SignatureSet

logger = logging.getLogger(__name__)

__all__ = [
    "expected_messages",
    "sign_as_agent",
    "sign_as_counterparty",
    "verify_attestation",
    "sign_reputation_score",
    "verify_reputation_score",
    "sign_validation_response",
    "verify_validation_response",
]


def _reject(reason: ViolationReason, detail: str) -> ProtocolViolation:
    logger.debug("Rejected attestation: %s (%s)", reason.value, detail)
    return ProtocolViolation(reason, detail)


def _interaction_hash(schema: SchemaConfig, payload: AttestationPayload) -> bytes:
    return compute_interaction_hash(
        schema.address, payload.task_ref, payload.subject_identity, payload.data_hash
    )


def _counterparty_message(
    schema: SchemaConfig, payload: AttestationPayload, config: ProtocolConfig
) -> bytes:
    if schema.signature_mode == SignatureMode.DUAL_SIGNATURE:
        return compute_feedback_hash(
            schema.address, payload.task_ref, payload.subject_identity, payload.outcome
        )
    data = encode_payload(payload, config)
    return build_counterparty_message(schema.name, data).message_bytes


def expected_messages(
    schema: SchemaConfig,
    payload: AttestationPayload,
    config: ProtocolConfig = DEFAULT_CONFIG,
) -> tuple[bytes, ...]:
    """
    Messages the schema's signers must sign, in role order.

    Returns:
        Two messages (agent, counterparty) for DualSignature, one otherwise.
    """
    match schema.signature_mode:
        case SignatureMode.DUAL_SIGNATURE:
            return (
                _interaction_hash(schema, payload),
                _counterparty_message(schema, payload, config),
            )
        case SignatureMode.COUNTERPARTY_SIGNED:
            return (_counterparty_message(schema, payload, config),)
        case SignatureMode.AGENT_OWNER_SIGNED:
            return (_interaction_hash(schema, payload),)
    raise ValueError(f"Unknown signature mode: {schema.signature_mode!r}")


def sign_as_agent(
    keypair: SigningKeypair, schema: SchemaConfig, payload: AttestationPayload
) -> SignatureEntry:
    """
    Sign the blind interaction hash as the agent (or agent owner).

    Only `task_ref`, `subject_identity` and `data_hash` enter the hash, so
    the agent can sign before the outcome exists.

    Raises:
        ProtocolViolation: If the schema has no agent signature.
    """
    if schema.signature_mode == SignatureMode.COUNTERPARTY_SIGNED:
        raise ProtocolViolation(
            ViolationReason.UNEXPECTED_SIGNATURE,
            f"{schema.name} is signed by the counterparty only",
        )
    signature = keypair.sign(_interaction_hash(schema, payload))
    return SignatureEntry(pubkey=keypair.public_key_bytes(), signature=signature)


def sign_as_counterparty(
    keypair: SigningKeypair,
    schema: SchemaConfig,
    payload: AttestationPayload,
    config: ProtocolConfig = DEFAULT_CONFIG,
) -> SignatureEntry:
    """
    Sign the outcome-bearing message as the counterparty.

    Raises:
        ProtocolViolation: If the schema has no counterparty signature.
    """
    if schema.signature_mode == SignatureMode.AGENT_OWNER_SIGNED:
        raise ProtocolViolation(
            ViolationReason.UNEXPECTED_SIGNATURE,
            f"{schema.name} is signed by the agent owner only",
        )
    signature = keypair.sign(_counterparty_message(schema, payload, config))
    return SignatureEntry(pubkey=keypair.public_key_bytes(), signature=signature)


def verify_attestation(
    data: bytes,
    schema: SchemaConfig,
    signatures: SignatureSet,
    agent_owner: Bytes32,
    config: ProtocolConfig = DEFAULT_CONFIG,
    *,
    delegation: Delegation | None = None,
    now: int = 0,
) -> AttestationPayload:
    """
    Verify attestation bytes against a schema and its signatures.

    Checks run in a fixed order: decode, content limit for the signature
    mode, signature count, self-attestation, counterparty binding, agent
    authorization, and finally the signatures themselves. Self-attestation
    is detected before any signature is checked.

    Args:
        data: Encoded attestation payload.
        schema: Registered schema the payload is attested under.
        signatures: Signatures in role order.
        agent_owner: Current owner of the agent token named by
            `subject_identity`. The agent role must be signed by this key or
            by a delegate it authorized.
        config: Layout parameters.
        delegation: Delegation record presented when a delegate signs the
            agent role.
        now: Current unix time in seconds, for delegation expiry.

    Returns:
        The decoded payload, only when every check passes.

    Raises:
        FormatError: If the bytes do not decode or the content exceeds the
            mode's limit.
        ProtocolViolation: If the signature set does not satisfy the mode.
    """
    payload = decode_payload(data, config)
    check_content_size(payload, schema.signature_mode, config)

    entries = signatures.entries
    required = schema.signature_mode.signature_count
    if len(entries) < required:
        raise _reject(
            ViolationReason.MISSING_SIGNATURE,
            f"{schema.signature_mode.name} requires {required} signatures, got {len(entries)}",
        )
    if len(entries) > required:
        raise _reject(
            ViolationReason.UNEXPECTED_SIGNATURE,
            f"{schema.signature_mode.name} requires {required} signatures, got {len(entries)}",
        )

    if payload.subject_identity == payload.counterparty_identity:
        raise _reject(
            ViolationReason.SELF_ATTESTATION, "subject and counterparty identities are equal"
        )
    pubkeys = signatures.pubkeys
    if len(set(pubkeys)) < len(pubkeys):
        raise _reject(
            ViolationReason.SELF_ATTESTATION, "agent and counterparty keys are equal"
        )

    # Whoever signs the counterparty role must be the counterparty the payload names.
    if schema.signature_mode != SignatureMode.AGENT_OWNER_SIGNED:
        if pubkeys[-1] != payload.counterparty_identity:
            raise _reject(
                ViolationReason.SIGNER_MISMATCH,
                "counterparty signature key does not match counterparty_identity",
            )

    # The agent role belongs to the token owner or one of its delegates.
    if schema.signature_mode != SignatureMode.COUNTERPARTY_SIGNED:
        verify_agent_authorization(
            pubkeys[0], payload.subject_identity, agent_owner, schema, delegation, now
        )

    messages = expected_messages(schema, payload, config)
    for role, entry, message in zip(_roles(schema.signature_mode), entries, messages, strict=True):
        if not verify_signature(entry.pubkey, message, entry.signature):
            raise _reject(ViolationReason.SIGNATURE_MISMATCH, f"{role} signature does not verify")

    logger.debug(
        "Verified %s attestation for subject %s", schema.name, payload.subject_identity.hex()[:16]
    )
    return payload


def _roles(mode: SignatureMode) -> tuple[str, ...]:
    match mode:
        case SignatureMode.DUAL_SIGNATURE:
            return ("agent", "counterparty")
        case SignatureMode.COUNTERPARTY_SIGNED:
            return ("counterparty",)
        case SignatureMode.AGENT_OWNER_SIGNED:
            return ("agent owner",)
    raise ValueError(f"Unknown signature mode: {mode!r}")


def sign_reputation_score(
    keypair: SigningKeypair, schema: SchemaConfig, subject_identity: bytes, score: int
) -> SignatureEntry:
    """Sign a reputation score as the provider holding `keypair`."""
    provider = keypair.public_key_bytes()
    message = compute_reputation_hash(schema.address, subject_identity, provider, score)
    return SignatureEntry(pubkey=provider, signature=keypair.sign(message))


def verify_reputation_score(
    schema: SchemaConfig, subject_identity: bytes, score: int, entry: SignatureEntry
) -> None:
    """
    Verify a provider's signature over a reputation score.

    Raises:
        FormatError: If an input has the wrong length or the score is out of range.
        ProtocolViolation: If the provider scores itself or the signature
            does not verify.
    """
    message = compute_reputation_hash(schema.address, subject_identity, entry.pubkey, score)
    if entry.pubkey == subject_identity:
        raise _reject(ViolationReason.SELF_ATTESTATION, "provider scores itself")
    if not verify_signature(entry.pubkey, message, entry.signature):
        raise _reject(ViolationReason.SIGNATURE_MISMATCH, "reputation signature does not verify")


def sign_validation_response(
    keypair: SigningKeypair,
    schema: SchemaConfig,
    task_ref: bytes,
    subject_identity: bytes,
    response: int,
) -> SignatureEntry:
    """Sign a validation response (0-100) as the validator holding `keypair`."""
    message = compute_validation_hash(schema.address, task_ref, subject_identity, response)
    return SignatureEntry(pubkey=keypair.public_key_bytes(), signature=keypair.sign(message))


def verify_validation_response(
    schema: SchemaConfig,
    task_ref: bytes,
    subject_identity: bytes,
    response: int,
    entry: SignatureEntry,
) -> None:
    """
    Verify a validator's signature over its response.

    Raises:
        FormatError: If an input has the wrong length or the response is out of range.
        ProtocolViolation: If the validator validates itself or the signature
            does not verify.
    """
    message = compute_validation_hash(schema.address, task_ref, subject_identity, response)
    if entry.pubkey == subject_identity:
        raise _reject(ViolationReason.SELF_ATTESTATION, "validator validates itself")
    if not verify_signature(entry.pubkey, message, entry.signature):
        raise _reject(ViolationReason.SIGNATURE_MISMATCH, "validation signature does not verify")
