"""
Ed25519 signing keypair.

Agents, counterparties, validators and reputation providers all sign with
Ed25519. The same key can also receive encrypted content through its
derived X25519 keypair.
"""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from agent_attest.encryption import EncryptionKeypair, derive_encryption_keypair
from agent_attest.types import Bytes32, Bytes64, CryptoError

__all__ = [
    "SigningKeypair",
    "verify_signature",
]


@dataclass(frozen=True, slots=True)
class SigningKeypair:
    """
    Ed25519 keypair.

    Attributes:
        private_key: The Ed25519 private key.
    """

    private_key: ed25519.Ed25519PrivateKey

    @classmethod
    def generate(cls) -> SigningKeypair:
        """Generate a new random keypair."""
        return cls(private_key=ed25519.Ed25519PrivateKey.generate())

    @classmethod
    def from_seed(cls, seed: bytes) -> SigningKeypair:
        """
        Load a keypair from its 32-byte seed.

        Raises:
            CryptoError: If the seed is not 32 bytes.
        """
        if len(seed) != 32:
            raise CryptoError(f"Ed25519 seed must be 32 bytes, got {len(seed)}")
        return cls(private_key=ed25519.Ed25519PrivateKey.from_private_bytes(bytes(seed)))

    def seed(self) -> bytes:
        """Return the raw 32-byte seed."""
        return self.private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def public_key_bytes(self) -> Bytes32:
        """Return the 32-byte public key, which doubles as the signer's identity."""
        return Bytes32(
            self.private_key.public_key().public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
        )

    def sign(self, message: bytes) -> Bytes64:
        """Sign a message."""
        return Bytes64(self.private_key.sign(bytes(message)))

    def to_encryption_keypair(self) -> EncryptionKeypair:
        """Derive the X25519 keypair used to receive encrypted content."""
        seed = bytearray(self.seed())
        try:
            return derive_encryption_keypair(seed)
        finally:
            seed[:] = bytes(len(seed))


def verify_signature(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """
    Verify an Ed25519 signature.

    Returns:
        True if the signature is valid, False otherwise, including when the
        key or signature has the wrong length.
    """
    if len(public_key) != 32 or len(signature) != 64:
        return False

    key = ed25519.Ed25519PublicKey.from_public_bytes(bytes(public_key))
    try:
        key.verify(bytes(signature), bytes(message))
        return True
    except InvalidSignature:
        return False
