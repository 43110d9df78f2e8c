"""
Domain separators for attestation hashes.

Every preimage starts with one of these ASCII literals. The fields that
follow are all fixed-width, so no delimiter is needed between them.
"""

from __future__ import annotations

from typing import Final

DOMAIN_INTERACTION: Final[bytes] = b"SATI:interaction:v1"
"""Blind interaction hash signed by the agent."""

DOMAIN_FEEDBACK: Final[bytes] = b"SATI:feedback:v1"
"""Feedback hash signed by the counterparty, binds the outcome."""

DOMAIN_VALIDATION: Final[bytes] = b"SATI:validation:v1"
"""Validation hash signed by the validator, binds the response score."""

DOMAIN_REPUTATION: Final[bytes] = b"SATI:reputation:v1"
"""Reputation hash signed by the provider, binds the score."""

DOMAIN_EVM_LINK: Final[bytes] = b"SATI:evm_link:v1"
"""EVM address link proof."""

ALL_DOMAINS: Final[tuple[bytes, ...]] = (
    DOMAIN_INTERACTION,
    DOMAIN_FEEDBACK,
    DOMAIN_VALIDATION,
    DOMAIN_REPUTATION,
    DOMAIN_EVM_LINK,
)
