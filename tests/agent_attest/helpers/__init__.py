"""Test helpers for building attestation values."""

from .builders import (
    AGENT_SEED,
    COUNTERPARTY_SEED,
    FIXTURES_DIR,
    identity,
    make_payload,
    make_schema,
)

__all__ = [
    "AGENT_SEED",
    "COUNTERPARTY_SEED",
    "FIXTURES_DIR",
    "identity",
    "make_payload",
    "make_schema",
]
