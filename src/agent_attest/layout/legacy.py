"""
Legacy per-kind Feedback layout.

Before the universal layout, Feedback used its own layout with two
variable-length tag strings between the fixed fields and the content. Bytes
in that format are framed by a leading version byte of 0 and decode only
through this module. `decode_any` dispatches on the version byte; nothing
ever migrates one layout into the other implicitly.

Legacy wire format (after the version byte):

    task_ref(32) | subject(32) | counterparty(32) | data_hash(32) |
    content_type(1) | outcome(1) | tag1_len(1) tag1 | tag2_len(1) tag2 |
    content_len(u32 LE) content
"""

from __future__ import annotations

import io
import logging
import struct
from typing import IO, Final

from pydantic import Field

from agent_attest.config import DEFAULT_CONFIG, ProtocolConfig
from agent_attest.schemas import ContentType, Outcome
from agent_attest.types import ZERO_HASH, Bytes32, FormatError, StrictBaseModel

from .codec import decode_payload, parse_content_type, parse_outcome
from .payload import AttestationPayload

logger = logging.getLogger(__name__)

LEGACY_LAYOUT_VERSION: Final = 0
"""Version byte framing legacy Feedback bytes."""

MAX_TAG_LENGTH: Final = 32
"""Maximum tag length in characters."""

LEGACY_MIN_SIZE: Final = 1 + 4 * 32 + 1 + 1 + 1 + 1 + 4
"""Version, fixed fields, two empty tags and a zero content length."""

_TYPE_NAME = "LegacyFeedbackLayout"


class LegacyFeedbackLayout(StrictBaseModel):
    """A Feedback attestation in the legacy layout."""

    task_ref: Bytes32
    subject_identity: Bytes32
    counterparty_identity: Bytes32
    data_hash: Bytes32 = ZERO_HASH
    content_type: ContentType = ContentType.NONE
    outcome: Outcome = Outcome.NEUTRAL
    tag1: str = Field(default="", max_length=MAX_TAG_LENGTH)
    tag2: str = Field(default="", max_length=MAX_TAG_LENGTH)
    content: bytes = b""


def encode_legacy_feedback(
    legacy: LegacyFeedbackLayout, config: ProtocolConfig = DEFAULT_CONFIG
) -> bytes:
    """Serialize to version-0 framed legacy bytes, truncating content to the ceiling."""
    tag1 = legacy.tag1.encode("utf-8")
    tag2 = legacy.tag2.encode("utf-8")
    content = legacy.content[: config.max_content_size]

    return b"".join(
        [
            bytes([LEGACY_LAYOUT_VERSION]),
            legacy.task_ref,
            legacy.subject_identity,
            legacy.counterparty_identity,
            legacy.data_hash,
            bytes([parse_content_type(legacy.content_type)]),
            bytes([parse_outcome(legacy.outcome)]),
            bytes([len(tag1)]),
            tag1,
            bytes([len(tag2)]),
            tag2,
            struct.pack("<I", len(content)),
            content,
        ]
    )


def _read(stream: IO[bytes], size: int, field: str) -> bytes:
    offset = stream.tell()
    data = stream.read(size)
    if len(data) != size:
        raise FormatError(
            _TYPE_NAME, f"{field} needs {size} bytes, {len(data)} remain", offset=offset
        )
    return data


def _read_tag(stream: IO[bytes], field: str) -> str:
    length = _read(stream, 1, f"{field} length")[0]
    offset = stream.tell()
    raw = _read(stream, length, field)
    try:
        tag = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(_TYPE_NAME, f"{field} is not valid UTF-8", offset=offset) from e
    if len(tag) > MAX_TAG_LENGTH:
        raise FormatError(
            _TYPE_NAME, f"{field} exceeds {MAX_TAG_LENGTH} characters", offset=offset
        )
    return tag


def decode_legacy_feedback(
    data: bytes, config: ProtocolConfig = DEFAULT_CONFIG
) -> LegacyFeedbackLayout:
    """
    Parse version-0 framed legacy Feedback bytes.

    Raises:
        FormatError: On a wrong version byte, truncated fields, invalid tags,
            out-of-range discriminants, oversize content or trailing bytes.
    """
    data = bytes(data)
    if len(data) < LEGACY_MIN_SIZE:
        raise FormatError(
            _TYPE_NAME, f"{len(data)} bytes is below the {LEGACY_MIN_SIZE}-byte minimum"
        )
    if data[0] != LEGACY_LAYOUT_VERSION:
        raise FormatError(
            _TYPE_NAME,
            f"version {data[0]} is not the legacy version {LEGACY_LAYOUT_VERSION}",
            offset=0,
        )

    with io.BytesIO(data) as stream:
        stream.seek(1)
        task_ref = Bytes32(_read(stream, 32, "task_ref"))
        subject = Bytes32(_read(stream, 32, "subject_identity"))
        counterparty = Bytes32(_read(stream, 32, "counterparty_identity"))
        data_hash = Bytes32(_read(stream, 32, "data_hash"))

        offset = stream.tell()
        content_type = parse_content_type(_read(stream, 1, "content_type")[0], offset=offset)
        offset = stream.tell()
        outcome = parse_outcome(_read(stream, 1, "outcome")[0], offset=offset)

        tag1 = _read_tag(stream, "tag1")
        tag2 = _read_tag(stream, "tag2")

        offset = stream.tell()
        (content_len,) = struct.unpack("<I", _read(stream, 4, "content length"))
        if content_len > config.max_content_size:
            raise FormatError(
                _TYPE_NAME,
                f"content length {content_len} exceeds {config.max_content_size}",
                offset=offset,
            )
        content = _read(stream, content_len, "content")

        trailing = len(data) - stream.tell()
        if trailing:
            raise FormatError(_TYPE_NAME, f"{trailing} trailing bytes", offset=stream.tell())

    return LegacyFeedbackLayout(
        task_ref=task_ref,
        subject_identity=subject,
        counterparty_identity=counterparty,
        data_hash=data_hash,
        content_type=content_type,
        outcome=outcome,
        tag1=tag1,
        tag2=tag2,
        content=content,
    )


def decode_any(
    data: bytes, config: ProtocolConfig = DEFAULT_CONFIG
) -> AttestationPayload | LegacyFeedbackLayout:
    """
    Decode either layout, selected by the leading version byte.

    The result keeps its own type. Use `upgrade_legacy_feedback` to convert
    a legacy value explicitly.
    """
    if len(data) == 0:
        raise FormatError("AttestationPayload", "empty input has no version byte")

    version = data[0]
    if version == LEGACY_LAYOUT_VERSION:
        return decode_legacy_feedback(data, config)
    if version == config.layout_version:
        return decode_payload(data, config)
    raise FormatError("AttestationPayload", f"unknown layout version {version}", offset=0)


def upgrade_legacy_feedback(
    legacy: LegacyFeedbackLayout, config: ProtocolConfig = DEFAULT_CONFIG
) -> AttestationPayload:
    """
    Convert a legacy Feedback value to the universal layout.

    The conversion is lossy: tags have no place in the universal layout and
    are dropped. The result is a new payload; any signatures over the legacy
    bytes do not carry over.

    Raises:
        FormatError: If the content exceeds the configured ceiling.
    """
    if len(legacy.content) > config.max_content_size:
        raise FormatError(
            _TYPE_NAME,
            f"content of {len(legacy.content)} bytes exceeds {config.max_content_size}",
        )
    if legacy.tag1 or legacy.tag2:
        logger.debug("Dropping legacy tags %r, %r during upgrade", legacy.tag1, legacy.tag2)

    return AttestationPayload(
        version=config.layout_version,
        task_ref=legacy.task_ref,
        subject_identity=legacy.subject_identity,
        counterparty_identity=legacy.counterparty_identity,
        outcome=legacy.outcome,
        data_hash=legacy.data_hash,
        content_type=legacy.content_type,
        content=legacy.content,
    )
