"""
Protocol configuration.

Layout version and content limits are carried in an explicit, immutable
`ProtocolConfig` value passed into every operation that needs them. There is
no process-wide table to patch at runtime.
"""

from typing import Final

from pydantic import model_validator
from typing_extensions import Self

from agent_attest.types import StrictBaseModel

LAYOUT_VERSION: Final = 1
"""Universal base layout version written at offset 0."""

MAX_CONTENT_SIZE: Final = 512
"""Absolute content ceiling. Larger content belongs on IPFS or Arweave."""

DUAL_SIGNATURE_CONTENT_SIZE: Final = 70
"""Content ceiling when two signatures share the outer transaction."""

SINGLE_SIGNER_CONTENT_SIZE: Final = 240
"""Content ceiling for single-signer modes."""


class ProtocolConfig(StrictBaseModel):
    """Layout and size parameters for one protocol deployment."""

    layout_version: int = LAYOUT_VERSION
    """The only universal layout version `decode_payload` accepts."""

    max_content_size: int = MAX_CONTENT_SIZE
    """Content is truncated to this many bytes on encode."""

    dual_signature_content_size: int = DUAL_SIGNATURE_CONTENT_SIZE
    """Maximum content length for DualSignature schemas."""

    single_signer_content_size: int = SINGLE_SIGNER_CONTENT_SIZE
    """Maximum content length for CounterpartySigned and AgentOwnerSigned schemas."""

    @model_validator(mode="after")
    def _check_limits(self) -> Self:
        if not 0 < self.layout_version < 256:
            raise ValueError(f"layout_version must fit in one byte, got {self.layout_version}")
        for name in ("dual_signature_content_size", "single_signer_content_size"):
            limit = getattr(self, name)
            if not 0 <= limit <= self.max_content_size:
                raise ValueError(f"{name} must be within [0, {self.max_content_size}], got {limit}")
        return self


DEFAULT_CONFIG: Final = ProtocolConfig()
"""Configuration matching the deployed on-chain program."""
