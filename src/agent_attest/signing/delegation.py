"""
Agent authorization: owner fast path or delegation.

The agent identity is a token, not a key. Whoever currently owns the token
may sign for the agent. The owner may also delegate signing to another key
through a delegation record, which stays valid only while:

- it names the signer as delegate,
- it is for the same agent,
- it was granted by the current owner (a transfer revokes it),
- it has not expired (expiry 0 never expires).
"""

from __future__ import annotations

import logging

from pydantic import Field

from agent_attest.hashing import compute_delegation_nonce
from agent_attest.schemas import SchemaConfig
from agent_attest.types import Bytes32, ProtocolViolation, StrictBaseModel, ViolationReason

logger = logging.getLogger(__name__)

__all__ = [
    "Delegation",
    "verify_agent_authorization",
]


class Delegation(StrictBaseModel):
    """A grant letting `delegate` sign on behalf of an agent."""

    delegate: Bytes32
    """Key allowed to sign for the agent."""

    agent_identity: Bytes32
    """Agent token identity the grant covers."""

    delegator: Bytes32
    """Owner of the agent when the grant was made."""

    expiry: int = Field(default=0, ge=0)
    """Unix timestamp after which the grant lapses. 0 means never."""

    def nonce(self, delegation_schema: Bytes32) -> Bytes32:
        """Storage nonce of this record under `delegation_schema`."""
        return compute_delegation_nonce(delegation_schema, self.delegate, self.agent_identity)


def _reject(reason: ViolationReason, detail: str) -> ProtocolViolation:
    logger.debug("Rejected agent authorization: %s (%s)", reason.value, detail)
    return ProtocolViolation(reason, detail)


def verify_agent_authorization(
    signer: Bytes32,
    agent_identity: Bytes32,
    agent_owner: Bytes32,
    schema: SchemaConfig,
    delegation: Delegation | None,
    now: int,
) -> None:
    """
    Check that `signer` may sign for the agent under `schema`.

    Args:
        signer: Key that produced the agent signature.
        agent_identity: Agent token identity from the payload.
        agent_owner: Current owner of the agent token.
        schema: Schema being attested; its delegation reference enables delegates.
        delegation: Delegation record presented by a non-owner signer.
        now: Current unix time in seconds.

    Raises:
        ProtocolViolation: With a reason naming the first failed check.
    """
    if signer == agent_owner:
        return

    if schema.delegation_schema is None:
        raise _reject(ViolationReason.OWNER_ONLY, f"{schema.name} accepts only the agent owner")
    if delegation is None:
        raise _reject(ViolationReason.DELEGATION_REQUIRED, "signer is not the owner")
    if delegation.delegate != signer:
        raise _reject(ViolationReason.DELEGATE_MISMATCH, "delegation names a different delegate")
    if delegation.agent_identity != agent_identity:
        raise _reject(ViolationReason.AGENT_MISMATCH, "delegation covers a different agent")
    if delegation.delegator != agent_owner:
        raise _reject(
            ViolationReason.DELEGATION_OWNER_MISMATCH,
            "delegation was granted by a previous owner",
        )
    if delegation.expiry != 0 and delegation.expiry <= now:
        raise _reject(
            ViolationReason.DELEGATION_EXPIRED, f"expired at {delegation.expiry}, now {now}"
        )
