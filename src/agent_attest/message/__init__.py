"""Human-Readable Message Builder."""

from .base58 import Base58
from .builder import (
    SigningMessage,
    build_counterparty_message,
    render_counterparty_message,
    render_details,
)

__all__ = [
    "Base58",
    "SigningMessage",
    "build_counterparty_message",
    "render_counterparty_message",
    "render_details",
]
