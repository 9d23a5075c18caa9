"""Token string parsing and verification."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from ..errors import InvalidSyntaxError, SplitTokenError
from ..utils.basex import BASE62
from .framing import parse_payload

logger = logging.getLogger(__name__)

SEPARATOR = "_"


@dataclass(frozen=True)
class TokenParts:
    """The three fields carried by a split token."""

    usage: str
    serial: uuid.UUID
    secret: bytes

    def __repr__(self) -> str:
        return (
            f"TokenParts(usage={self.usage!r}, serial={self.serial}, "
            f"secret=<{len(self.secret)} bytes>)"
        )


def parse_token(token: str) -> TokenParts:
    """Decode a token string into its usage, serial and secret.

    Steps, each with its own failure:

    1. The string must split on ``_`` into exactly two segments.
    2. The second segment must be valid base-62.
    3. The decoded payload must be at least 21 bytes.
    4. The stored CRC-32 must match (constant-time comparison).

    The usage segment is taken as-is; it is only validated on encode.

    Raises:
        InvalidSyntaxError: Steps 1-3 fail.
        InvalidChecksumError: Step 4 fails.
    """
    segments = token.split(SEPARATOR)
    if len(segments) != 2:
        raise InvalidSyntaxError()
    usage, body = segments

    try:
        data = BASE62.decode(body)
    except ValueError as e:
        raise InvalidSyntaxError() from e

    payload = parse_payload(data)
    return TokenParts(usage=usage, serial=payload.serial, secret=payload.secret)


def verify(token: str) -> None:
    """Check that *token* is well-formed and its checksum matches.

    Raises the same errors as :func:`parse_token`; returns ``None`` on success.
    """
    try:
        parse_token(token)
    except SplitTokenError as e:
        logger.debug("Token rejected: %s", e.code)
        raise
