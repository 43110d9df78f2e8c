"""
End-to-end encryption of attestation content.

Content is encrypted to a single recipient with an ephemeral-static scheme:

1. Generate a fresh X25519 ephemeral keypair for every call.
2. shared = X25519(ephemeral_private, recipient_public)
3. key = HKDF-SHA256(shared, salt=ephemeral_public, info="sati-v1", 32 bytes)
4. XChaCha20-Poly1305 with a random 24-byte nonce, 16-byte tag appended.

A fresh ephemeral key per call gives forward secrecy between ciphertexts.
The 24-byte nonce is large enough to pick at random without collision risk.

Wire format::

    version(1) | ephemeral_public_key(32) | nonce(24) | ciphertext + tag(16+)
"""

from __future__ import annotations

import logging
import os
from typing import Final

from Crypto.Cipher import ChaCha20_Poly1305
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import x25519
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from pydantic import Field

from agent_attest.config import MAX_CONTENT_SIZE
from agent_attest.types import Bytes24, Bytes32, CryptoError, FormatError, StrictBaseModel

logger = logging.getLogger(__name__)

ENCRYPTION_VERSION: Final = 1
"""Only supported encrypted-content version."""

PUBKEY_SIZE: Final = 32
PRIVKEY_SIZE: Final = 32
NONCE_SIZE: Final = 24
TAG_SIZE: Final = 16

HKDF_INFO: Final[bytes] = b"sati-v1"
"""HKDF info string binding derived keys to this protocol."""

MIN_ENCRYPTED_SIZE: Final = 1 + PUBKEY_SIZE + NONCE_SIZE + TAG_SIZE
"""Serialized size of an encrypted empty plaintext (73 bytes)."""

MAX_PLAINTEXT_SIZE: Final = MAX_CONTENT_SIZE - MIN_ENCRYPTED_SIZE
"""Largest plaintext whose serialized form still fits the content ceiling (439 bytes)."""

_TYPE_NAME = "EncryptedPayload"


class EncryptedPayload(StrictBaseModel):
    """Encrypted content addressed to one recipient."""

    version: int = Field(default=ENCRYPTION_VERSION, ge=0, le=255)
    """Encryption scheme version."""

    ephemeral_public_key: Bytes32
    """Sender's one-time X25519 public key, also the HKDF salt."""

    nonce: Bytes24
    """Random XChaCha20 nonce."""

    ciphertext: bytes
    """Ciphertext with the 16-byte Poly1305 tag appended."""


def _derive_key(shared_secret: bytes, ephemeral_public_key: bytes) -> bytearray:
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=32,
        salt=ephemeral_public_key,
        info=HKDF_INFO,
    )
    return bytearray(hkdf.derive(shared_secret))


def _exchange(private_key: x25519.X25519PrivateKey, public_key: bytes) -> bytearray:
    try:
        peer = x25519.X25519PublicKey.from_public_bytes(bytes(public_key))
        return bytearray(private_key.exchange(peer))
    except ValueError as e:
        # Low-order points produce an all-zero shared secret.
        raise CryptoError(f"key exchange failed: {e}") from e


def encrypt_content(
    plaintext: bytes,
    recipient_public_key: bytes,
    max_plaintext: int = MAX_PLAINTEXT_SIZE,
) -> EncryptedPayload:
    """
    Encrypt content for a recipient's X25519 public key.

    Args:
        plaintext: Content to encrypt.
        recipient_public_key: 32-byte X25519 public key, usually from
            `derive_encryption_public_key`.
        max_plaintext: Plaintext ceiling. Pass a tighter value when the
            schema's signature mode allows less content.

    Raises:
        FormatError: If the plaintext exceeds `max_plaintext`.
        CryptoError: If the recipient key is malformed.
    """
    if len(plaintext) > max_plaintext:
        raise FormatError(
            "plaintext", f"{len(plaintext)} bytes exceeds the {max_plaintext}-byte maximum"
        )
    if len(recipient_public_key) != PUBKEY_SIZE:
        raise CryptoError(
            f"recipient public key must be {PUBKEY_SIZE} bytes, got {len(recipient_public_key)}"
        )

    ephemeral = x25519.X25519PrivateKey.generate()
    ephemeral_public = ephemeral.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )

    shared = _exchange(ephemeral, recipient_public_key)
    key = bytearray()
    try:
        key = _derive_key(bytes(shared), ephemeral_public)
        nonce = os.urandom(NONCE_SIZE)
        cipher = ChaCha20_Poly1305.new(key=bytes(key), nonce=nonce)
        ciphertext, tag = cipher.encrypt_and_digest(bytes(plaintext))
    finally:
        shared[:] = bytes(len(shared))
        key[:] = bytes(len(key))

    return EncryptedPayload(
        version=ENCRYPTION_VERSION,
        ephemeral_public_key=Bytes32(ephemeral_public),
        nonce=Bytes24(nonce),
        ciphertext=ciphertext + tag,
    )


def decrypt_content(payload: EncryptedPayload, recipient_private_key: bytes) -> bytes:
    """
    Decrypt content with the recipient's X25519 private key.

    Returns the exact plaintext or raises. A wrong key and a tampered
    ciphertext are indistinguishable to the caller.

    Raises:
        CryptoError: On an unsupported version, malformed field lengths, a
            malformed private key or any authentication failure.
    """
    if payload.version != ENCRYPTION_VERSION:
        raise CryptoError(f"unsupported encryption version {payload.version}")
    if len(recipient_private_key) != PRIVKEY_SIZE:
        raise CryptoError(
            f"private key must be {PRIVKEY_SIZE} bytes, got {len(recipient_private_key)}"
        )
    # Field lengths are rechecked for payloads built with model_construct.
    if len(payload.ephemeral_public_key) != PUBKEY_SIZE:
        raise CryptoError(f"ephemeral public key must be {PUBKEY_SIZE} bytes")
    if len(payload.nonce) != NONCE_SIZE:
        raise CryptoError(f"nonce must be {NONCE_SIZE} bytes")
    if len(payload.ciphertext) < TAG_SIZE:
        raise CryptoError(f"ciphertext must include the {TAG_SIZE}-byte tag")

    secret = bytearray(recipient_private_key)
    shared = bytearray()
    key = bytearray()
    try:
        private_key = x25519.X25519PrivateKey.from_private_bytes(bytes(secret))
        shared = _exchange(private_key, payload.ephemeral_public_key)
        key = _derive_key(bytes(shared), bytes(payload.ephemeral_public_key))

        cipher = ChaCha20_Poly1305.new(key=bytes(key), nonce=bytes(payload.nonce))
        body, tag = payload.ciphertext[:-TAG_SIZE], payload.ciphertext[-TAG_SIZE:]
        try:
            return cipher.decrypt_and_verify(body, tag)
        except ValueError as e:
            logger.debug("Rejected encrypted content: authentication failed")
            raise CryptoError("decryption failed: authentication tag mismatch") from e
    finally:
        secret[:] = bytes(len(secret))
        shared[:] = bytes(len(shared))
        key[:] = bytes(len(key))


def serialize_encrypted_payload(payload: EncryptedPayload) -> bytes:
    """Lay out an encrypted payload as content bytes. No cryptography runs here."""
    return b"".join(
        [
            bytes([payload.version]),
            payload.ephemeral_public_key,
            payload.nonce,
            payload.ciphertext,
        ]
    )


def deserialize_encrypted_payload(data: bytes) -> EncryptedPayload:
    """
    Parse content bytes into an encrypted payload. No cryptography runs here.

    Raises:
        FormatError: If the data is shorter than 73 bytes or has an
            unsupported version.
    """
    if len(data) < MIN_ENCRYPTED_SIZE:
        raise FormatError(
            _TYPE_NAME, f"{len(data)} bytes is below the {MIN_ENCRYPTED_SIZE}-byte minimum"
        )
    if data[0] != ENCRYPTION_VERSION:
        raise FormatError(
            _TYPE_NAME,
            f"unsupported version {data[0]} (supported: {ENCRYPTION_VERSION})",
            offset=0,
        )

    nonce_start = 1 + PUBKEY_SIZE
    ciphertext_start = nonce_start + NONCE_SIZE
    return EncryptedPayload(
        version=data[0],
        ephemeral_public_key=Bytes32(data[1:nonce_start]),
        nonce=Bytes24(data[nonce_start:ciphertext_start]),
        ciphertext=bytes(data[ciphertext_start:]),
    )
