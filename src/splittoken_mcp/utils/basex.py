"""Fixed-alphabet base-N encoding of byte strings.

The input is read as one big-endian unsigned integer and rewritten in base
``len(alphabet)``. Each leading zero byte becomes one leading copy of the
first alphabet character, so the encoding is length-preserving for leading
zeros and needs no padding::

    b"\\x00\\x00\\x01"  ->  "001"    (base 62)

This is the scheme popularised by Bitcoin's base58 and the ``base-x``
family of libraries.
"""

from __future__ import annotations

BASE62_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


class BaseXEncoding:
    """Encoder/decoder for a single alphabet.

    Instances are immutable after construction and safe to share between
    threads.
    """

    def __init__(self, alphabet: str) -> None:
        if len(alphabet) < 2:
            raise ValueError("alphabet must contain at least 2 characters")
        if len(set(alphabet)) != len(alphabet):
            raise ValueError(f"alphabet contains repeated characters: {alphabet!r}")
        self._alphabet = alphabet
        self._base = len(alphabet)
        self._leader = alphabet[0]
        self._index = {char: i for i, char in enumerate(alphabet)}

    @property
    def alphabet(self) -> str:
        return self._alphabet

    @property
    def base(self) -> int:
        return self._base

    def encode(self, data: bytes) -> str:
        """Encode *data* to a string over this alphabet.

        An empty input encodes to an empty string.
        """
        if not data:
            return ""

        zeros = len(data) - len(data.lstrip(b"\x00"))
        value = int.from_bytes(data, "big")

        digits: list[str] = []
        while value:
            value, rem = divmod(value, self._base)
            digits.append(self._alphabet[rem])

        return self._leader * zeros + "".join(reversed(digits))

    def decode(self, text: str) -> bytes:
        """Decode *text* back to bytes.

        Raises:
            ValueError: If *text* contains a character outside the alphabet.
        """
        if not text:
            return b""

        value = 0
        for pos, char in enumerate(text):
            digit = self._index.get(char)
            if digit is None:
                raise ValueError(
                    f"invalid character {char!r} at position {pos} "
                    f"for base-{self._base} alphabet"
                )
            value = value * self._base + digit

        zeros = len(text) - len(text.lstrip(self._leader))
        body = value.to_bytes((value.bit_length() + 7) // 8, "big")
        return b"\x00" * zeros + body

    def __repr__(self) -> str:
        return f"BaseXEncoding(base={self._base}, alphabet={self._alphabet!r})"


BASE62 = BaseXEncoding(BASE62_ALPHABET)
