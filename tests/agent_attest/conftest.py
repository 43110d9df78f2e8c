"""Shared fixtures for attestation tests."""

from __future__ import annotations

import pytest

from agent_attest.schemas import SchemaConfig, SignatureMode
from agent_attest.signing import SigningKeypair
from tests.agent_attest.helpers import AGENT_SEED, COUNTERPARTY_SEED, make_schema


@pytest.fixture
def agent() -> SigningKeypair:
    """Keypair signing for the agent."""
    return SigningKeypair.from_seed(AGENT_SEED)


@pytest.fixture
def counterparty() -> SigningKeypair:
    """Keypair of the client giving feedback."""
    return SigningKeypair.from_seed(COUNTERPARTY_SEED)


@pytest.fixture
def dual_schema() -> SchemaConfig:
    """Feedback schema requiring agent and counterparty signatures."""
    return make_schema(SignatureMode.DUAL_SIGNATURE, name="Feedback")


@pytest.fixture
def counterparty_schema() -> SchemaConfig:
    """Feedback schema signed by the counterparty alone."""
    return make_schema(SignatureMode.COUNTERPARTY_SIGNED, name="FeedbackPublic")


@pytest.fixture
def owner_schema() -> SchemaConfig:
    """Schema signed by the agent owner alone."""
    return make_schema(SignatureMode.AGENT_OWNER_SIGNED, name="Certification")
