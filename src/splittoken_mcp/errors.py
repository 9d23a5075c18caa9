"""Errors raised while building or parsing split tokens.

Only two kinds exist. Structural problems raise :class:`InvalidSyntaxError`;
a well-formed token whose checksum does not match raises
:class:`InvalidChecksumError`. Both derive from :class:`SplitTokenError`, so
callers that only need "reject this token" can catch the base class.
"""

from __future__ import annotations


class SplitTokenError(ValueError):
    """Base class for token codec failures."""

    code = "invalid_token"
    message = "invalid token"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidSyntaxError(SplitTokenError):
    """Malformed token: bad separator count, bad alphabet, or too short."""

    code = "invalid_syntax"
    message = "invalid syntax"


class InvalidChecksumError(SplitTokenError):
    """Well-formed token whose stored CRC-32 does not match its payload."""

    code = "invalid_checksum"
    message = "invalid checksum"
