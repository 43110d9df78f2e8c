"""
Ed25519 to X25519 key conversion.

A recipient's encryption key is derived from its existing signing key, so
no separate encryption keypair has to be published.

Private side (RFC 8032 section 5.1.5):
    scalar = clamp(SHA-512(seed)[:32])

Public side (RFC 7748 section 4.1 birational map):
    u = (1 + y) / (1 - y) mod 2^255 - 19

Both sides agree: the X25519 public key of the derived scalar equals the
map of the Ed25519 public key.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Final

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import x25519

from agent_attest.types import Bytes32, CryptoError

__all__ = [
    "EncryptionKeypair",
    "derive_encryption_keypair",
    "derive_encryption_public_key",
    "x25519_public_key",
]

FIELD_PRIME: Final = 2**255 - 19
"""Curve25519 field prime."""

ED25519_SEED_SIZE: Final = 32
ED25519_SECRET_KEY_SIZE: Final = 64
"""Seed followed by public key, as many Ed25519 libraries store it."""


@dataclass(frozen=True, slots=True)
class EncryptionKeypair:
    """
    X25519 keypair derived from an Ed25519 identity.

    Attributes:
        private_key: Clamped 32-byte X25519 scalar.
        public_key: 32-byte X25519 public key (Montgomery u-coordinate).
    """

    private_key: Bytes32
    public_key: Bytes32


def _clamp(scalar: bytearray) -> None:
    scalar[0] &= 248
    scalar[31] &= 127
    scalar[31] |= 64


def x25519_public_key(private_key: bytes) -> Bytes32:
    """Compute the X25519 public key for a 32-byte private scalar."""
    if len(private_key) != 32:
        raise CryptoError(f"X25519 private key must be 32 bytes, got {len(private_key)}")
    key = x25519.X25519PrivateKey.from_private_bytes(bytes(private_key))
    return Bytes32(
        key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
    )


def derive_encryption_keypair(ed25519_private_key: bytes) -> EncryptionKeypair:
    """
    Derive an X25519 keypair from an Ed25519 private key.

    Args:
        ed25519_private_key: 32-byte seed, or 64-byte secret key whose first
            half is the seed.

    Raises:
        CryptoError: If the key is neither 32 nor 64 bytes.
    """
    if len(ed25519_private_key) not in (ED25519_SEED_SIZE, ED25519_SECRET_KEY_SIZE):
        raise CryptoError(
            f"Ed25519 private key must be {ED25519_SEED_SIZE} or {ED25519_SECRET_KEY_SIZE} "
            f"bytes, got {len(ed25519_private_key)}"
        )

    digest = bytearray(hashlib.sha512(bytes(ed25519_private_key[:ED25519_SEED_SIZE])).digest())
    scalar = digest[:32]
    try:
        _clamp(scalar)
        private_key = Bytes32(scalar)
        return EncryptionKeypair(private_key=private_key, public_key=x25519_public_key(scalar))
    finally:
        # The upper half of the digest is the Ed25519 signing prefix.
        digest[:] = bytes(len(digest))
        scalar[:] = bytes(len(scalar))


def derive_encryption_public_key(ed25519_public_key: bytes) -> Bytes32:
    """
    Map an Ed25519 public key to the matching X25519 public key.

    Raises:
        CryptoError: If the key is not 32 bytes or encodes y = 1, which has
            no Montgomery image.
    """
    if len(ed25519_public_key) != 32:
        raise CryptoError(f"Ed25519 public key must be 32 bytes, got {len(ed25519_public_key)}")

    # The top bit carries the sign of x; the map only needs y.
    y = int.from_bytes(ed25519_public_key, "little") & ((1 << 255) - 1)
    denominator = (1 - y) % FIELD_PRIME
    if denominator == 0:
        raise CryptoError("Ed25519 public key has no X25519 equivalent")

    u = (1 + y) * pow(denominator, FIELD_PRIME - 2, FIELD_PRIME) % FIELD_PRIME
    return Bytes32(u.to_bytes(32, "little"))
