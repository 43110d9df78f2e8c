"""Tests for the strict base model."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from agent_attest.types import StrictBaseModel


class _Record(StrictBaseModel):
    task_ref: bytes
    score: int


class TestStrictBaseModel:
    """Shared configuration of every attestation value."""

    def test_field_names_dump_in_camel_case(self) -> None:
        """Aliases follow the SDK's camel-case field names."""
        record = _Record(task_ref=b"\x01", score=7)
        assert record.model_dump(by_alias=True) == {"taskRef": b"\x01", "score": 7}

    def test_accepts_alias_and_field_name(self) -> None:
        """Both spellings populate the same field."""
        assert _Record(taskRef=b"\x01", score=7) == _Record(task_ref=b"\x01", score=7)

    def test_no_coercion(self) -> None:
        """A numeric string is not an integer."""
        with pytest.raises(ValidationError):
            _Record(task_ref=b"\x01", score="7")

    def test_unknown_field_rejected(self) -> None:
        """Extra fields are errors."""
        with pytest.raises(ValidationError):
            _Record(task_ref=b"\x01", score=7, outcome=2)

    def test_frozen(self) -> None:
        """Instances cannot be mutated."""
        record = _Record(task_ref=b"\x01", score=7)
        with pytest.raises(ValidationError):
            record.score = 8  # type: ignore[misc]
