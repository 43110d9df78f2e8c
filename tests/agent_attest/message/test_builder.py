"""Tests for the counterparty signing message."""

import pytest

from agent_attest.layout import encode_payload, offsets
from agent_attest.message import (
    Base58,
    build_counterparty_message,
    render_counterparty_message,
    render_details,
)
from agent_attest.schemas import ContentType, Outcome
from agent_attest.types import FormatError
from tests.agent_attest.helpers import make_payload


class TestTemplate:
    """The message text has a fixed shape."""

    def test_full_message(self) -> None:
        """Header, fields, details and footer in order."""
        payload = make_payload(
            outcome=Outcome.POSITIVE, content_type=ContentType.JSON, content=b'{"score":95}'
        )
        message = render_counterparty_message("Feedback", payload)

        assert message.text == (
            "SATI Feedback\n"
            "\n"
            f"Agent: {Base58.encode(payload.subject_identity)}\n"
            f"Task: {Base58.encode(payload.task_ref)}\n"
            "Outcome: Positive\n"
            'Details: {"score":95}\n'
            "\n"
            "Sign to create this attestation."
        )
        assert message.message_bytes == message.text.encode("utf-8")

    def test_counterparty_and_data_hash_not_shown(self) -> None:
        """Only the subject, task and outcome identify the attestation."""
        first = render_counterparty_message("Feedback", make_payload())
        second = render_counterparty_message(
            "Feedback", make_payload(counterparty_identity=b"\x09" * 32, data_hash=b"\x08" * 32)
        )
        assert first == second

    @pytest.mark.parametrize("outcome", list(Outcome))
    def test_outcome_labels(self, outcome: Outcome) -> None:
        """Each outcome renders its label."""
        message = render_counterparty_message("Feedback", make_payload(outcome=outcome))
        assert f"\nOutcome: {outcome.label}\n" in message.text


class TestDetails:
    """Rendering of the content field."""

    @pytest.mark.parametrize(
        "content,content_type,expected",
        [
            (b"", ContentType.JSON, "(none)"),
            (b"anything", ContentType.NONE, "(none)"),
            (b'{"a":1}', ContentType.JSON, '{"a":1}'),
            ("héllo".encode(), ContentType.UTF8, "héllo"),
            (b"\xff\xfe\xfd", ContentType.UTF8, "(3 bytes)"),
            (b"\x00\x01", ContentType.IPFS, "ipfs://12"),
            (b"\x00\x01", ContentType.ARWEAVE, "ar://12"),
            (b"\x01" * 80, ContentType.ENCRYPTED, "(encrypted)"),
            (b"\x01\x02", 9, "(2 bytes)"),
        ],
    )
    def test_render(self, content: bytes, content_type: int, expected: str) -> None:
        """Each content type has its own rendering."""
        assert render_details(content, content_type) == expected

    def test_embedded_newline_passes_through(self) -> None:
        """Text content is shown verbatim, newlines included."""
        payload = make_payload(content_type=ContentType.UTF8, content=b"a\nb")
        assert "\nDetails: a\nb\n\n" in render_counterparty_message("X", payload).text


class TestRawBytes:
    """Building from encoded bytes."""

    def test_too_short(self) -> None:
        """Bytes shorter than the base layout are rejected."""
        with pytest.raises(FormatError, match="130 bytes is below the 131-byte minimum"):
            build_counterparty_message("Feedback", b"\x01" * 130)

    def test_outcome_out_of_range(self) -> None:
        """An outcome byte above 2 is rejected."""
        data = bytearray(encode_payload(make_payload()))
        data[offsets.OUTCOME] = 3

        with pytest.raises(FormatError, match="outcome 3") as exc_info:
            build_counterparty_message("Feedback", bytes(data))
        assert exc_info.value.offset == offsets.OUTCOME

    def test_matches_payload_rendering(self) -> None:
        """Bytes and payload paths agree."""
        payload = make_payload(content_type=ContentType.UTF8, content=b"ok")
        assert build_counterparty_message(
            "Validation", encode_payload(payload)
        ) == render_counterparty_message("Validation", payload)
