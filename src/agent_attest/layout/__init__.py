"""
Universal Layout Codec.

One canonical byte layout shared by every attestation kind, plus the
version-gated legacy Feedback layout.
"""

from . import offsets
from .codec import (
    check_content_size,
    decode_payload,
    encode_payload,
    max_content_size,
    parse_content_type,
    parse_outcome,
)
from .legacy import (
    LEGACY_LAYOUT_VERSION,
    MAX_TAG_LENGTH,
    LegacyFeedbackLayout,
    decode_any,
    decode_legacy_feedback,
    encode_legacy_feedback,
    upgrade_legacy_feedback,
)
from .payload import AttestationPayload

__all__ = [
    "offsets",
    "AttestationPayload",
    "encode_payload",
    "decode_payload",
    "check_content_size",
    "max_content_size",
    "parse_outcome",
    "parse_content_type",
    # Legacy layout
    "LEGACY_LAYOUT_VERSION",
    "MAX_TAG_LENGTH",
    "LegacyFeedbackLayout",
    "encode_legacy_feedback",
    "decode_legacy_feedback",
    "decode_any",
    "upgrade_legacy_feedback",
]
