"""Base58 text encoding for identities and content addresses."""

from __future__ import annotations

from typing import Final


class Base58:
    """
    Base58 with the Bitcoin alphabet.

    Identities are shown to wallet users in this form, so the output must
    match other implementations character for character.
    """

    ALPHABET: Final[str] = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
    """Bitcoin alphabet, without 0, O, I and l."""

    @classmethod
    def encode(cls, data: bytes) -> str:
        """
        Encode bytes as a Base58 string.

        Each leading zero byte becomes a leading '1'. Empty input encodes to
        the empty string.
        """
        zeros = len(data) - len(bytes(data).lstrip(b"\x00"))

        num = int.from_bytes(data, "big")
        digits: list[str] = []
        while num:
            num, remainder = divmod(num, 58)
            digits.append(cls.ALPHABET[remainder])

        return cls.ALPHABET[0] * zeros + "".join(reversed(digits))

    @classmethod
    def decode(cls, text: str) -> bytes:
        """
        Decode a Base58 string to bytes.

        Raises:
            ValueError: If the string contains a character outside the alphabet.
        """
        zeros = len(text) - len(text.lstrip(cls.ALPHABET[0]))

        num = 0
        for char in text:
            index = cls.ALPHABET.find(char)
            if index < 0:
                raise ValueError(f"Invalid Base58 character: {char!r}")
            num = num * 58 + index

        body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
        return b"\x00" * zeros + body
