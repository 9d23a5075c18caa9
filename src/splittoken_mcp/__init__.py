"""Split tokens: ``<usage>_<base62(serial || secret || crc32)>``.

A split token carries a lookup identifier (the serial) next to a secret, so
an application can store only a hash of the secret and still find the record
by serial. These tokens follow GitHub's 2021 token format and the split-token
approach described by Paragon Initiative.

Example::

    >>> tk = generate("email-verify", 32)
    >>> verify(tk)
    >>> tk.usage
    'email-verify'
"""

from .errors import InvalidChecksumError, InvalidSyntaxError, SplitTokenError
from .models.token import NIL_SERIAL, Token, new_serial, serial_from_seed
from .protocol.builder import generate, new_token
from .protocol.parser import SEPARATOR, TokenParts, parse_token, verify

__all__ = [
    "Token",
    "TokenParts",
    "new_token",
    "generate",
    "parse_token",
    "verify",
    "new_serial",
    "serial_from_seed",
    "NIL_SERIAL",
    "SEPARATOR",
    "SplitTokenError",
    "InvalidSyntaxError",
    "InvalidChecksumError",
]
