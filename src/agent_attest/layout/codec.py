"""
Universal Base Layout v1 codec.

Encoding writes the fixed 131-byte prefix followed by the content. Decoding
is all-or-nothing: it returns a fully validated payload or raises
`FormatError`.

The one deliberate non-error is content truncation on encode: content
longer than the configured ceiling is cut to the ceiling, not rejected.
Callers that need a hard limit use `check_content_size` first.
"""

from __future__ import annotations

import logging
from typing import Any

from agent_attest.config import DEFAULT_CONFIG, ProtocolConfig
from agent_attest.schemas import ContentType, Outcome, SignatureMode
from agent_attest.types import Bytes32, FormatError

from . import offsets
from .payload import AttestationPayload

logger = logging.getLogger(__name__)

_TYPE_NAME = "AttestationPayload"


def parse_outcome(value: Any, *, offset: int | None = None) -> Outcome:
    """
    Re-validate an outcome discriminant against the closed set.

    An `Outcome` typed value can still hold an out-of-range integer when a
    payload is built with `model_construct`, so nothing trusts the type alone.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise FormatError(_TYPE_NAME, f"outcome must be an integer, got {type(value).__name__}")
    try:
        return Outcome(value)
    except ValueError:
        raise FormatError(
            _TYPE_NAME, f"outcome {int(value)} is not one of 0, 1, 2", offset=offset
        ) from None


def parse_content_type(value: Any, *, offset: int | None = None) -> ContentType:
    """Re-validate a content type discriminant against the closed set."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise FormatError(
            _TYPE_NAME, f"content_type must be an integer, got {type(value).__name__}"
        )
    try:
        return ContentType(value)
    except ValueError:
        raise FormatError(
            _TYPE_NAME,
            f"content_type {int(value)} exceeds the declared range 0-{int(max(ContentType))}",
            offset=offset,
        ) from None


def _fixed_field(payload: AttestationPayload, name: str) -> bytes:
    value = getattr(payload, name)
    if not isinstance(value, bytes) or len(value) != Bytes32.LENGTH:
        raise FormatError(_TYPE_NAME, f"{name} must be exactly {Bytes32.LENGTH} bytes")
    return bytes(value)


def encode_payload(payload: AttestationPayload, config: ProtocolConfig = DEFAULT_CONFIG) -> bytes:
    """
    Serialize a payload to the universal layout.

    Args:
        payload: The payload to encode.
        config: Layout version and content ceiling.

    Returns:
        `131 + min(len(content), config.max_content_size)` bytes.

    Raises:
        FormatError: If the version is unsupported or a discriminant or fixed
            field is invalid (possible only for payloads built without validation).
    """
    if payload.version != config.layout_version:
        raise FormatError(
            _TYPE_NAME,
            f"cannot encode version {payload.version}, supported: {config.layout_version}",
        )
    outcome = parse_outcome(payload.outcome)
    content_type = parse_content_type(payload.content_type)

    content = bytes(payload.content)
    if len(content) > config.max_content_size:
        logger.debug(
            "Truncating content from %d to %d bytes", len(content), config.max_content_size
        )
        content = content[: config.max_content_size]

    return b"".join(
        [
            bytes([config.layout_version]),
            _fixed_field(payload, "task_ref"),
            _fixed_field(payload, "subject_identity"),
            _fixed_field(payload, "counterparty_identity"),
            bytes([outcome]),
            _fixed_field(payload, "data_hash"),
            bytes([content_type]),
            content,
        ]
    )


def decode_payload(data: bytes, config: ProtocolConfig = DEFAULT_CONFIG) -> AttestationPayload:
    """
    Parse universal layout bytes into a validated payload.

    Args:
        data: Encoded payload.
        config: Layout version and content ceiling.

    Raises:
        FormatError: If the data is shorter than the base layout, carries an
            unsupported version, an outcome above 2, an undeclared content
            type, or content above the ceiling.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise FormatError(_TYPE_NAME, f"expected bytes, got {type(data).__name__}")
    data = bytes(data)

    if len(data) < offsets.BASE_LAYOUT_SIZE:
        raise FormatError(
            _TYPE_NAME,
            f"{len(data)} bytes is below the {offsets.BASE_LAYOUT_SIZE}-byte minimum",
        )

    version = data[offsets.VERSION]
    if version != config.layout_version:
        raise FormatError(
            _TYPE_NAME,
            f"unsupported layout version {version} (supported: {config.layout_version})",
            offset=offsets.VERSION,
        )

    outcome = parse_outcome(data[offsets.OUTCOME], offset=offsets.OUTCOME)
    content_type = parse_content_type(data[offsets.CONTENT_TYPE], offset=offsets.CONTENT_TYPE)

    content = data[offsets.CONTENT :]
    if len(content) > config.max_content_size:
        raise FormatError(
            _TYPE_NAME,
            f"content of {len(content)} bytes exceeds the {config.max_content_size}-byte maximum",
            offset=offsets.CONTENT,
        )

    return AttestationPayload(
        version=version,
        task_ref=Bytes32(data[offsets.TASK_REF : offsets.SUBJECT_IDENTITY]),
        subject_identity=Bytes32(data[offsets.SUBJECT_IDENTITY : offsets.COUNTERPARTY_IDENTITY]),
        counterparty_identity=Bytes32(data[offsets.COUNTERPARTY_IDENTITY : offsets.OUTCOME]),
        outcome=outcome,
        data_hash=Bytes32(data[offsets.DATA_HASH : offsets.CONTENT_TYPE]),
        content_type=content_type,
        content=content,
    )


def max_content_size(mode: SignatureMode, config: ProtocolConfig = DEFAULT_CONFIG) -> int:
    """Content ceiling for a signature mode, bounded by outer transaction size."""
    if mode is SignatureMode.DUAL_SIGNATURE:
        return config.dual_signature_content_size
    return config.single_signer_content_size


def check_content_size(
    payload: AttestationPayload,
    mode: SignatureMode,
    config: ProtocolConfig = DEFAULT_CONFIG,
) -> None:
    """
    Reject content that would not fit a transaction in the given mode.

    Raises:
        FormatError: If the content exceeds `max_content_size(mode, config)`.
    """
    limit = max_content_size(mode, config)
    if len(payload.content) > limit:
        raise FormatError(
            _TYPE_NAME,
            f"content of {len(payload.content)} bytes exceeds the "
            f"{limit}-byte limit for {mode.name}",
            offset=offsets.CONTENT,
        )
