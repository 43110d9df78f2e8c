"""Tests for end-to-end content encryption."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from agent_attest.encryption import (
    ENCRYPTION_VERSION,
    MAX_PLAINTEXT_SIZE,
    MIN_ENCRYPTED_SIZE,
    EncryptedPayload,
    EncryptionKeypair,
    decrypt_content,
    derive_encryption_keypair,
    deserialize_encrypted_payload,
    encrypt_content,
    serialize_encrypted_payload,
)
from agent_attest.types import Bytes24, Bytes32, CryptoError, FormatError


@pytest.fixture
def recipient() -> EncryptionKeypair:
    """Encryption keypair of the intended reader."""
    return derive_encryption_keypair(b"\x11" * 32)


@pytest.fixture
def outsider() -> EncryptionKeypair:
    """Encryption keypair of someone else."""
    return derive_encryption_keypair(b"\x22" * 32)


class TestConstants:
    """Sizes of the encrypted wire format."""

    def test_sizes(self) -> None:
        """Overhead is 73 bytes, leaving 439 of the 512-byte ceiling."""
        assert MIN_ENCRYPTED_SIZE == 73
        assert MAX_PLAINTEXT_SIZE == 439


class TestRoundTrip:
    """decrypt(encrypt(m)) == m."""

    @pytest.mark.parametrize("size", [0, 1, MAX_PLAINTEXT_SIZE])
    def test_sizes(self, recipient: EncryptionKeypair, size: int) -> None:
        """Empty, one-byte and maximum plaintexts round-trip."""
        plaintext = bytes(i % 251 for i in range(size))
        encrypted = encrypt_content(plaintext, recipient.public_key)

        assert len(encrypted.ciphertext) == size + 16
        assert decrypt_content(encrypted, recipient.private_key) == plaintext

    def test_through_wire_format(self, recipient: EncryptionKeypair) -> None:
        """Serialized content decrypts after deserialization."""
        encrypted = encrypt_content(b'{"secret": true}', recipient.public_key)
        restored = deserialize_encrypted_payload(serialize_encrypted_payload(encrypted))

        assert restored == encrypted
        assert decrypt_content(restored, recipient.private_key) == b'{"secret": true}'

    @settings(max_examples=25)
    @given(plaintext=st.binary(max_size=MAX_PLAINTEXT_SIZE))
    def test_property(self, plaintext: bytes) -> None:
        """Any allowed plaintext round-trips."""
        recipient = derive_encryption_keypair(b"\x33" * 32)
        encrypted = encrypt_content(plaintext, recipient.public_key)
        assert decrypt_content(encrypted, recipient.private_key) == plaintext

    def test_fresh_randomness(self, recipient: EncryptionKeypair) -> None:
        """Encrypting twice yields different keys, nonces and ciphertexts."""
        first = encrypt_content(b"same", recipient.public_key)
        second = encrypt_content(b"same", recipient.public_key)

        assert first.ephemeral_public_key != second.ephemeral_public_key
        assert first.nonce != second.nonce
        assert first.ciphertext != second.ciphertext


class TestRejection:
    """Decryption returns the exact plaintext or raises."""

    def test_wrong_recipient(
        self, recipient: EncryptionKeypair, outsider: EncryptionKeypair
    ) -> None:
        """Another recipient's key cannot decrypt."""
        encrypted = encrypt_content(b"for recipient only", recipient.public_key)
        with pytest.raises(CryptoError, match="authentication"):
            decrypt_content(encrypted, outsider.private_key)

    @pytest.mark.parametrize(
        "position",
        [1, 16, 32, 33, 45, 56, 57, 60, 57 + 11, 57 + 12, 57 + 27],
        ids=[
            "eph-first",
            "eph-mid",
            "eph-last",
            "nonce-first",
            "nonce-mid",
            "nonce-last",
            "ct-first",
            "ct-mid",
            "ct-last",
            "tag-first",
            "tag-last",
        ],
    )
    def test_single_byte_tamper(self, recipient: EncryptionKeypair, position: int) -> None:
        """Changing any byte of key, nonce, ciphertext or tag fails decryption."""
        encrypted = encrypt_content(b"twelve bytes", recipient.public_key)
        data = bytearray(serialize_encrypted_payload(encrypted))
        assert len(data) == 57 + 12 + 16
        data[position] ^= 0x01

        with pytest.raises(CryptoError):
            decrypt_content(deserialize_encrypted_payload(bytes(data)), recipient.private_key)

    def test_plaintext_too_large(self, recipient: EncryptionKeypair) -> None:
        """440 bytes does not fit the content ceiling once encrypted."""
        with pytest.raises(FormatError, match="440 bytes exceeds the 439-byte maximum"):
            encrypt_content(b"a" * 440, recipient.public_key)

    def test_mode_limit(self, recipient: EncryptionKeypair) -> None:
        """Callers can pass a tighter limit for their signature mode."""
        limit = 240 - MIN_ENCRYPTED_SIZE
        encrypt_content(b"a" * limit, recipient.public_key, max_plaintext=limit)
        with pytest.raises(FormatError):
            encrypt_content(b"a" * (limit + 1), recipient.public_key, max_plaintext=limit)

    @pytest.mark.parametrize("size", [0, 31, 33, 64])
    def test_bad_recipient_key_length(self, size: int) -> None:
        """Recipient keys must be 32 bytes."""
        with pytest.raises(CryptoError, match="recipient public key must be 32 bytes"):
            encrypt_content(b"x", b"\x01" * size)

    def test_low_order_recipient_key(self) -> None:
        """An all-zero recipient key yields no usable shared secret."""
        with pytest.raises(CryptoError, match="key exchange failed"):
            encrypt_content(b"x", b"\x00" * 32)

    def test_bad_private_key_length(self, recipient: EncryptionKeypair) -> None:
        """Private keys must be 32 bytes."""
        encrypted = encrypt_content(b"x", recipient.public_key)
        with pytest.raises(CryptoError, match="private key must be 32 bytes"):
            decrypt_content(encrypted, b"\x01" * 64)

    def test_unsupported_version(self, recipient: EncryptionKeypair) -> None:
        """Only version 1 decrypts."""
        encrypted = encrypt_content(b"x", recipient.public_key)
        future = EncryptedPayload(
            version=2,
            ephemeral_public_key=encrypted.ephemeral_public_key,
            nonce=encrypted.nonce,
            ciphertext=encrypted.ciphertext,
        )
        with pytest.raises(CryptoError, match="unsupported encryption version 2"):
            decrypt_content(future, recipient.private_key)

    def test_malformed_fields_bypass(self, recipient: EncryptionKeypair) -> None:
        """Field lengths are rechecked on payloads built without validation."""
        encrypted = encrypt_content(b"x", recipient.public_key)
        short_nonce = EncryptedPayload.model_construct(
            **(dict(encrypted) | {"nonce": b"\x00" * 12})
        )
        short_ciphertext = EncryptedPayload.model_construct(
            **(dict(encrypted) | {"ciphertext": b"\x00" * 15})
        )

        with pytest.raises(CryptoError, match="nonce must be 24 bytes"):
            decrypt_content(short_nonce, recipient.private_key)
        with pytest.raises(CryptoError, match="16-byte tag"):
            decrypt_content(short_ciphertext, recipient.private_key)


class TestWireFormat:
    """serialize and deserialize are pure layout transforms."""

    def test_layout(self) -> None:
        """version | ephemeral key | nonce | ciphertext."""
        payload = EncryptedPayload(
            ephemeral_public_key=Bytes32(b"\x01" * 32),
            nonce=Bytes24(b"\x02" * 24),
            ciphertext=b"\x03" * 20,
        )
        data = serialize_encrypted_payload(payload)

        assert data[0] == ENCRYPTION_VERSION
        assert data[1:33] == b"\x01" * 32
        assert data[33:57] == b"\x02" * 24
        assert data[57:] == b"\x03" * 20
        assert deserialize_encrypted_payload(data) == payload

    def test_too_small(self) -> None:
        """72 bytes cannot hold a tag."""
        with pytest.raises(FormatError, match="72 bytes is below the 73-byte minimum"):
            deserialize_encrypted_payload(b"\x01" * 72)

    def test_wrong_version(self) -> None:
        """Unknown versions are rejected before any parsing."""
        with pytest.raises(FormatError, match="unsupported version 2"):
            deserialize_encrypted_payload(b"\x02" + b"\x00" * 80)
