"""Token construction.

:func:`new_token` encodes caller-supplied fields; :func:`generate` draws a
fresh serial and secret from the operating system's CSPRNG first.
"""

from __future__ import annotations

import logging
import secrets
import uuid

from ..errors import InvalidSyntaxError
from ..models.token import Token, new_serial
from ..utils.basex import BASE62
from .framing import build_payload
from .parser import SEPARATOR

logger = logging.getLogger(__name__)


def new_token(usage: str, serial: uuid.UUID, secret: bytes) -> Token:
    """Encode *usage*, *serial* and *secret* into a token.

    Args:
        usage: Non-empty purpose tag without ``_``, e.g. ``"email-verify"``.
        serial: 128-bit identifier used to look the token up.
        secret: Secret bytes, at least one byte long. Copied, not retained.

    Returns:
        A :class:`Token` that :func:`~.parser.parse_token` accepts and that
        decodes back to the same three fields.

    Raises:
        InvalidSyntaxError: Empty usage, usage containing ``_``, or empty
            secret (checked in that order).
    """
    if len(usage) < 1:
        raise InvalidSyntaxError()
    if SEPARATOR in usage:
        raise InvalidSyntaxError()

    payload = build_payload(serial, secret)
    return Token(f"{usage}{SEPARATOR}{BASE62.encode(payload)}")


def generate(usage: str, secret_length: int) -> Token:
    """Build a token with a random serial and *secret_length* random bytes.

    Raises:
        ValueError: If *secret_length* is negative.
        OSError: If the randomness source is unavailable.
        InvalidSyntaxError: If *usage* is invalid or *secret_length* is 0.
    """
    if secret_length < 0:
        raise ValueError(f"secret_length must be non-negative, got {secret_length}")

    serial = new_serial()
    try:
        secret = secrets.token_bytes(secret_length)
    except OSError as e:
        raise OSError(f"reading random bytes: {e}") from e

    token = new_token(usage, serial, secret)
    logger.debug("Generated %r token %s (%d secret bytes)", usage, serial, secret_length)
    return token
