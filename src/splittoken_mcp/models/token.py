"""Token value type and serial helpers."""

from __future__ import annotations

import hashlib
import uuid

from ..errors import SplitTokenError
from ..protocol.parser import TokenParts, parse_token

NIL_SERIAL = uuid.UUID(int=0)
NIL_USAGE = "nil"


class Token(str):
    """A split token string, ``<usage>_<base62 payload>``.

    ``Token`` is a plain immutable string; constructing one does not validate
    it. The :attr:`usage`, :attr:`serial` and :attr:`secret` accessors are
    lossy conveniences: each re-parses the token and returns a sentinel
    (``"nil"``, the nil UUID, ``b""``) on *any* failure, hiding whether the
    syntax or the checksum was wrong. Use :meth:`parts` or
    :func:`~splittoken_mcp.protocol.parser.verify` when that distinction
    matters.
    """

    __slots__ = ()

    def parts(self) -> TokenParts:
        """Parse the token, raising on invalid syntax or checksum."""
        return parse_token(self)

    def verify(self) -> None:
        parse_token(self)

    @property
    def usage(self) -> str:
        try:
            return parse_token(self).usage
        except SplitTokenError:
            return NIL_USAGE

    @property
    def serial(self) -> uuid.UUID:
        try:
            return parse_token(self).serial
        except SplitTokenError:
            return NIL_SERIAL

    @property
    def secret(self) -> bytes:
        try:
            return parse_token(self).secret
        except SplitTokenError:
            return b""

    def __repr__(self) -> str:
        return f"Token({str.__repr__(self)})"


def new_serial() -> uuid.UUID:
    """Return a fresh random (version 4) serial."""
    return uuid.uuid4()


def serial_from_seed(namespace: uuid.UUID, seed: str | bytes) -> uuid.UUID:
    """Derive a reproducible (version 5, SHA-1) serial from *namespace* and *seed*.

    Intended for tests and fixtures that need stable serials.
    """
    if isinstance(seed, str):
        seed = seed.encode("utf-8")
    digest = hashlib.sha1(namespace.bytes + seed).digest()
    return uuid.UUID(bytes=digest[:16], version=5)
