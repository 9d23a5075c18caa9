"""CRC-32 checksum used to seal token payloads.

Uses the IEEE 802.3 polynomial (0x04C11DB7, reflected), the same variant as
zlib, PNG and Ethernet. The checksum is stored big-endian.
"""

from __future__ import annotations

import zlib

CRC_SIZE = 4


def crc32(data: bytes) -> int:
    """Calculate CRC-32/IEEE over *data*.

    Args:
        data: Bytes to checksum.

    Returns:
        Unsigned 32-bit CRC value.
    """
    return zlib.crc32(data) & 0xFFFFFFFF


def crc32_bytes(data: bytes) -> bytes:
    """Return the CRC-32 of *data* as 4 big-endian bytes."""
    return crc32(data).to_bytes(CRC_SIZE, "big")
