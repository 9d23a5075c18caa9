"""Binary payload builder and parser.

Payload layout (before base-62 encoding)::

    +-----------------+--------------------+-------------+
    |     Serial      |       Secret       |  Checksum   |
    |    16 bytes     |  variable, >= 1 B  |   4 bytes   |
    +-----------------+--------------------+-------------+

- Serial: UUID in RFC 4122 byte order (``uuid.UUID.bytes``)
- Secret: opaque application bytes
- Checksum: CRC-32/IEEE over (serial + secret), big-endian

The shortest valid payload is 16 + 1 + 4 = 21 bytes.
"""

from __future__ import annotations

import hmac
import uuid
from dataclasses import dataclass

from ..errors import InvalidChecksumError, InvalidSyntaxError
from ..utils.crc import CRC_SIZE, crc32_bytes

SERIAL_SIZE = 16
CHECKSUM_SIZE = CRC_SIZE
MIN_SECRET_SIZE = 1
MIN_PAYLOAD_SIZE = SERIAL_SIZE + MIN_SECRET_SIZE + CHECKSUM_SIZE  # 21


@dataclass(frozen=True)
class Payload:
    """A parsed, checksum-verified token payload."""

    serial: uuid.UUID
    secret: bytes

    def __repr__(self) -> str:
        return f"Payload(serial={self.serial}, secret=<{len(self.secret)} bytes>)"


def build_payload(serial: uuid.UUID, secret: bytes) -> bytes:
    """Assemble serial, secret and checksum into one byte string.

    Args:
        serial: 128-bit token identifier.
        secret: Secret bytes, at least one byte long.

    Returns:
        ``16 + len(secret) + 4`` bytes ready for base-62 encoding.

    Raises:
        InvalidSyntaxError: If *secret* is empty.
    """
    if len(secret) < MIN_SECRET_SIZE:
        raise InvalidSyntaxError()
    body = serial.bytes + bytes(secret)
    return body + crc32_bytes(body)


def parse_payload(data: bytes) -> Payload:
    """Split a decoded payload into serial and secret, verifying the checksum.

    The stored and recomputed checksums are compared with
    :func:`hmac.compare_digest` so the comparison time does not depend on
    which bytes differ.

    Raises:
        InvalidSyntaxError: If *data* is shorter than ``MIN_PAYLOAD_SIZE``.
        InvalidChecksumError: If the stored checksum does not match.
    """
    if len(data) < MIN_PAYLOAD_SIZE:
        raise InvalidSyntaxError()

    body = data[:-CHECKSUM_SIZE]
    stored_checksum = data[-CHECKSUM_SIZE:]
    if not hmac.compare_digest(stored_checksum, crc32_bytes(body)):
        raise InvalidChecksumError()

    return Payload(
        serial=uuid.UUID(bytes=bytes(body[:SERIAL_SIZE])),
        secret=bytes(body[SERIAL_SIZE:]),
    )
