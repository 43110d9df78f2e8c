"""
Content Encryption Module.

X25519 key agreement, HKDF-SHA256 key derivation and XChaCha20-Poly1305
authenticated encryption for the optional content field.
"""

from .content import (
    ENCRYPTION_VERSION,
    HKDF_INFO,
    MAX_PLAINTEXT_SIZE,
    MIN_ENCRYPTED_SIZE,
    NONCE_SIZE,
    TAG_SIZE,
    EncryptedPayload,
    decrypt_content,
    deserialize_encrypted_payload,
    encrypt_content,
    serialize_encrypted_payload,
)
from .keys import (
    EncryptionKeypair,
    derive_encryption_keypair,
    derive_encryption_public_key,
    x25519_public_key,
)

__all__ = [
    "ENCRYPTION_VERSION",
    "HKDF_INFO",
    "MAX_PLAINTEXT_SIZE",
    "MIN_ENCRYPTED_SIZE",
    "NONCE_SIZE",
    "TAG_SIZE",
    "EncryptedPayload",
    "EncryptionKeypair",
    "encrypt_content",
    "decrypt_content",
    "serialize_encrypted_payload",
    "deserialize_encrypted_payload",
    "derive_encryption_keypair",
    "derive_encryption_public_key",
    "x25519_public_key",
]
