"""
Human-readable counterparty signing message.

In single-signer schemas the counterparty signs with an ordinary wallet.
Wallets display the message before signing, so instead of an opaque hash
the counterparty signs a short text rendered from the attestation bytes.
Verifiers rebuild the same text and check the signature against its UTF-8
encoding, so the rendering must match other implementations byte for byte.

Message format::

    SATI {schema_name}

    Agent: {base58(subject_identity)}
    Task: {base58(task_ref)}
    Outcome: {Negative|Neutral|Positive}
    Details: {details}

    Sign to create this attestation.
"""

from __future__ import annotations

import logging

from agent_attest.layout import AttestationPayload, encode_payload, offsets
from agent_attest.schemas import ContentType, Outcome
from agent_attest.types import FormatError, StrictBaseModel

from .base58 import Base58

logger = logging.getLogger(__name__)

__all__ = [
    "SigningMessage",
    "build_counterparty_message",
    "render_counterparty_message",
    "render_details",
]


class SigningMessage(StrictBaseModel):
    """A message ready for a wallet to display and sign."""

    text: str
    """Text shown to the signer."""

    message_bytes: bytes
    """UTF-8 encoding of `text`; the exact bytes that get signed."""


def render_details(content: bytes, content_type: int) -> str:
    """
    Render the content field for the Details line.

    Text content appears verbatim, including any newlines it carries.
    Content types without a text form render as a byte count.
    """
    if not content or content_type == ContentType.NONE:
        return "(none)"

    if content_type in (ContentType.JSON, ContentType.UTF8):
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError:
            return f"({len(content)} bytes)"
    if content_type == ContentType.IPFS:
        return f"ipfs://{Base58.encode(content)}"
    if content_type == ContentType.ARWEAVE:
        return f"ar://{Base58.encode(content)}"
    if content_type == ContentType.ENCRYPTED:
        return "(encrypted)"
    return f"({len(content)} bytes)"


def build_counterparty_message(schema_name: str, data: bytes) -> SigningMessage:
    """
    Build the counterparty message from encoded attestation bytes.

    Only the fields shown to the signer are read, so this works on any
    bytes in the universal layout.

    Raises:
        FormatError: If `data` is shorter than the base layout or the
            outcome byte is out of range.
    """
    if len(data) < offsets.CONTENT:
        raise FormatError(
            "AttestationPayload",
            f"{len(data)} bytes is below the {offsets.CONTENT}-byte minimum",
        )

    data = bytes(data)
    task_ref = data[offsets.TASK_REF : offsets.SUBJECT_IDENTITY]
    subject = data[offsets.SUBJECT_IDENTITY : offsets.COUNTERPARTY_IDENTITY]
    outcome = data[offsets.OUTCOME]
    content_type = data[offsets.CONTENT_TYPE]
    content = data[offsets.CONTENT :]

    if outcome > max(Outcome):
        raise FormatError(
            "AttestationPayload",
            f"outcome {outcome} is not one of 0, 1, 2",
            offset=offsets.OUTCOME,
        )

    text = (
        f"SATI {schema_name}\n"
        "\n"
        f"Agent: {Base58.encode(subject)}\n"
        f"Task: {Base58.encode(task_ref)}\n"
        f"Outcome: {Outcome(outcome).label}\n"
        f"Details: {render_details(content, content_type)}\n"
        "\n"
        "Sign to create this attestation."
    )
    logger.debug("Built %s counterparty message (%d bytes)", schema_name, len(text))
    return SigningMessage(text=text, message_bytes=text.encode("utf-8"))


def render_counterparty_message(
    schema_name: str, payload: AttestationPayload
) -> SigningMessage:
    """Build the counterparty message for a payload, via its encoded bytes."""
    return build_counterparty_message(schema_name, encode_payload(payload))
