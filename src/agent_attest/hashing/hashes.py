"""
Domain-separated keccak-256 hashes.

The agent signs the interaction hash, which leaves the outcome out. The
counterparty signs the feedback hash, which includes it. Both are recomputed
by verifiers from payload fields alone.

All inputs are checked for exact type and length before hashing. Nothing is
coerced: a 31-byte identity or a boolean outcome is a `FormatError`.
"""

from __future__ import annotations

from typing import TypeVar

from Crypto.Hash import keccak

from agent_attest.types import ZERO_HASH, BaseBytes, Bytes20, Bytes32, FormatError

from .domains import (
    DOMAIN_EVM_LINK,
    DOMAIN_FEEDBACK,
    DOMAIN_INTERACTION,
    DOMAIN_REPUTATION,
    DOMAIN_VALIDATION,
)

MAX_OUTCOME = 2
MAX_SCORE = 100

B = TypeVar("B", bound=BaseBytes)


def keccak256(*parts: bytes) -> Bytes32:
    """Keccak-256 over the concatenation of `parts`."""
    k = keccak.new(digest_bits=256)
    for part in parts:
        k.update(part)
    return Bytes32(k.digest())


def _require_bytes(name: str, value: object, kind: type[B]) -> B:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise FormatError(name, f"expected bytes, got {type(value).__name__}")
    data = bytes(value)
    if len(data) != kind.LENGTH:
        raise FormatError(name, f"expected {kind.LENGTH} bytes, got {len(data)}")
    return kind(data)


def _require_byte_value(name: str, value: object, maximum: int) -> bytes:
    # bool is an int subclass; True must not pass as 1.
    if isinstance(value, bool) or not isinstance(value, int):
        raise FormatError(name, f"expected an integer, got {type(value).__name__}")
    if not 0 <= value <= maximum:
        raise FormatError(name, f"{value} is outside 0..{maximum}")
    return bytes([value])


def compute_interaction_hash(
    schema: bytes, task_ref: bytes, subject_identity: bytes, data_hash: bytes
) -> Bytes32:
    """
    Hash the agent signs as a blind commitment.

    The outcome is deliberately absent, so the agent's signature is the same
    whatever the counterparty later decides.
    """
    return keccak256(
        DOMAIN_INTERACTION,
        _require_bytes("schema", schema, Bytes32),
        _require_bytes("task_ref", task_ref, Bytes32),
        _require_bytes("subject_identity", subject_identity, Bytes32),
        _require_bytes("data_hash", data_hash, Bytes32),
    )


def compute_feedback_hash(
    schema: bytes, task_ref: bytes, subject_identity: bytes, outcome: int
) -> Bytes32:
    """Hash the counterparty signs, binding the outcome."""
    return keccak256(
        DOMAIN_FEEDBACK,
        _require_bytes("schema", schema, Bytes32),
        _require_bytes("task_ref", task_ref, Bytes32),
        _require_bytes("subject_identity", subject_identity, Bytes32),
        _require_byte_value("outcome", outcome, MAX_OUTCOME),
    )


def compute_validation_hash(
    schema: bytes, task_ref: bytes, subject_identity: bytes, response: int
) -> Bytes32:
    """Hash a validator signs over its response score (0-100)."""
    return keccak256(
        DOMAIN_VALIDATION,
        _require_bytes("schema", schema, Bytes32),
        _require_bytes("task_ref", task_ref, Bytes32),
        _require_bytes("subject_identity", subject_identity, Bytes32),
        _require_byte_value("response", response, MAX_SCORE),
    )


def compute_reputation_hash(
    schema: bytes, subject_identity: bytes, provider_identity: bytes, score: int
) -> Bytes32:
    """Hash a reputation provider signs over its score (0-100)."""
    return keccak256(
        DOMAIN_REPUTATION,
        _require_bytes("schema", schema, Bytes32),
        _require_bytes("subject_identity", subject_identity, Bytes32),
        _require_bytes("provider_identity", provider_identity, Bytes32),
        _require_byte_value("score", score, MAX_SCORE),
    )


def compute_attestation_nonce(
    task_ref: bytes, schema: bytes, subject_identity: bytes, counterparty_identity: bytes
) -> Bytes32:
    """
    Storage-address nonce for one attestation.

    Unique per (task_ref, schema, subject, counterparty), so the same
    counterparty cannot attest twice to the same task.
    """
    return keccak256(
        _require_bytes("task_ref", task_ref, Bytes32),
        _require_bytes("schema", schema, Bytes32),
        _require_bytes("subject_identity", subject_identity, Bytes32),
        _require_bytes("counterparty_identity", counterparty_identity, Bytes32),
    )


def compute_reputation_nonce(provider_identity: bytes, subject_identity: bytes) -> Bytes32:
    """Nonce enforcing one reputation score per (provider, subject) pair."""
    return keccak256(
        _require_bytes("provider_identity", provider_identity, Bytes32),
        _require_bytes("subject_identity", subject_identity, Bytes32),
    )


def compute_delegation_nonce(
    delegation_schema: bytes, delegate: bytes, agent_identity: bytes
) -> Bytes32:
    """Nonce for one delegation record per (schema, delegate, agent)."""
    return keccak256(
        _require_bytes("delegation_schema", delegation_schema, Bytes32),
        _require_bytes("delegate", delegate, Bytes32),
        _require_bytes("agent_identity", agent_identity, Bytes32),
    )


def compute_evm_link_hash(agent_identity: bytes, evm_address: bytes, chain_id: str) -> Bytes32:
    """
    Hash signed by an EVM key to prove control when linking it to an agent.

    Args:
        agent_identity: 32-byte agent identity.
        evm_address: 20-byte EVM address, without any 0x prefix.
        chain_id: CAIP-2 chain identifier such as ``"eip155:1"``.
    """
    if not isinstance(chain_id, str) or not chain_id:
        raise FormatError("chain_id", "expected a non-empty string")
    return keccak256(
        DOMAIN_EVM_LINK,
        _require_bytes("agent_identity", agent_identity, Bytes32),
        _require_bytes("evm_address", evm_address, Bytes20),
        chain_id.encode("utf-8"),
    )


# Data hash helpers.
#
# The data hash is the agent's commitment to the interaction content.


def compute_data_hash(request: bytes, response: bytes) -> Bytes32:
    """Commit to raw request and response content."""
    if not isinstance(request, (bytes, bytearray)) or not isinstance(
        response, (bytes, bytearray)
    ):
        raise FormatError("data", "request and response must be bytes")
    return keccak256(bytes(request), bytes(response))


def compute_data_hash_from_hashes(request_hash: bytes, response_hash: bytes) -> Bytes32:
    """Commit to separately hashed request and response, for large or streamed content."""
    return keccak256(
        _require_bytes("request_hash", request_hash, Bytes32),
        _require_bytes("response_hash", response_hash, Bytes32),
    )


def compute_data_hash_from_strings(request: str, response: str) -> Bytes32:
    """Commit to request and response text, encoded as UTF-8."""
    if not isinstance(request, str) or not isinstance(response, str):
        raise FormatError("data", "request and response must be str")
    return keccak256(request.encode("utf-8"), response.encode("utf-8"))


def zero_data_hash() -> Bytes32:
    """Placeholder commitment for schemas that carry no data hash."""
    return ZERO_HASH
