"""Low-level helpers: CRC-32 checksum and base-N encoding."""

from .basex import BASE62, BASE62_ALPHABET, BaseXEncoding
from .crc import crc32, crc32_bytes
