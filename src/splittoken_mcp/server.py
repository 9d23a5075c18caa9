"""MCP server entry point for split tokens.

Exposes token generation, encoding, verification and inspection as tools
via the Model Context Protocol using the official Python MCP SDK with stdio
transport.
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from typing import Any

from mcp.server.fastmcp import FastMCP

from .errors import SplitTokenError
from .models.token import Token
from .protocol.builder import generate, new_token
from .protocol.framing import CHECKSUM_SIZE, MIN_PAYLOAD_SIZE, SERIAL_SIZE
from .protocol.parser import SEPARATOR, parse_token
from .utils.basex import BASE62_ALPHABET

logger = logging.getLogger(__name__)

DEFAULT_SECRET_BYTES = 32

mcp = FastMCP(
    "splittoken",
    instructions="Issue and check split tokens: <usage>_<base62 payload>.",
)


def _default_secret_length() -> int:
    """Read the default secret length from ``SPLITTOKEN_SECRET_BYTES``."""
    raw = os.getenv("SPLITTOKEN_SECRET_BYTES")
    if not raw:
        return DEFAULT_SECRET_BYTES
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(
            f"SPLITTOKEN_SECRET_BYTES must be an integer, got {raw!r}"
        ) from None
    if value < 1:
        raise ValueError(f"SPLITTOKEN_SECRET_BYTES must be positive, got {value}")
    return value


# ─── TOKEN TOOLS ─────────────────────────────────────────────────────

@mcp.tool()
def generate_token(usage: str, secret_length: int | None = None) -> dict[str, Any]:
    """Issue a new token with a random serial and a random secret.

    Store the serial and a hash of ``secret_hex``; hand the token itself
    to the user.

    Args:
        usage: Purpose tag, e.g. "email-verify". Must be non-empty and
            must not contain "_".
        secret_length: Number of random secret bytes. Defaults to
            SPLITTOKEN_SECRET_BYTES (32).
    """
    if secret_length is None:
        secret_length = _default_secret_length()
    token = generate(usage, secret_length)
    serial = token.serial
    logger.info("Issued %r token %s", usage, serial)
    return {
        "token": str(token),
        "usage": usage,
        "serial": str(serial),
        "secret_hex": token.secret.hex(),
    }


@mcp.tool()
def encode_token(usage: str, serial: str, secret_hex: str) -> dict[str, Any]:
    """Encode a token from explicit fields.

    Args:
        usage: Purpose tag without "_".
        serial: UUID string, e.g. "123c3af9-6eac-4392-b673-481cfe3c6d6d".
        secret_hex: Secret bytes as a hex string.
    """
    try:
        serial_id = uuid.UUID(serial)
    except ValueError:
        raise ValueError(f"serial is not a valid UUID: {serial!r}") from None
    try:
        secret = bytes.fromhex(secret_hex)
    except ValueError:
        raise ValueError("secret_hex is not a valid hex string") from None

    token = new_token(usage, serial_id, secret)
    return {"token": str(token)}


@mcp.tool()
def verify_token(token: str) -> dict[str, Any]:
    """Check a token's structure and checksum.

    Returns ``valid`` and, when invalid, an ``error`` of either
    "invalid_syntax" or "invalid_checksum".
    """
    try:
        parse_token(token)
    except SplitTokenError as e:
        logger.info("Token rejected: %s", e.code)
        return {"valid": False, "error": e.code}
    return {"valid": True, "error": None}


@mcp.tool()
def inspect_token(token: str) -> dict[str, Any]:
    """Show the usage tag and serial of a token without revealing its secret."""
    try:
        parts = parse_token(token)
    except SplitTokenError as e:
        tk = Token(token)
        return {
            "valid": False,
            "error": e.code,
            "usage": tk.usage,
            "serial": str(tk.serial),
            "secret_length": 0,
        }
    return {
        "valid": True,
        "error": None,
        "usage": parts.usage,
        "serial": str(parts.serial),
        "secret_length": len(parts.secret),
    }


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("splittoken://format")
def resource_format() -> str:
    """Wire format of a split token."""
    return json.dumps({
        "format": f"<usage>{SEPARATOR}<base62(serial || secret || checksum)>",
        "separator": SEPARATOR,
        "alphabet": BASE62_ALPHABET,
        "serial_bytes": SERIAL_SIZE,
        "checksum_bytes": CHECKSUM_SIZE,
        "checksum": "CRC-32/IEEE, big-endian, over serial + secret",
        "min_payload_bytes": MIN_PAYLOAD_SIZE,
    })


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def issue_token(purpose: str) -> str:
    """Guide the AI through issuing a token for a given purpose.

    Args:
        purpose: What the token is for, e.g. "email verification".
    """
    return f"""Issue a split token for {purpose}.
Steps:
- Pick a short usage tag without underscores (e.g. "email-verify")
- Call generate_token with that usage tag
- Persist the serial and a hash of the secret, never the raw token
- Deliver the token to the user

Use verify_token to reject malformed or corrupted tokens before looking
up the serial, and inspect_token to read the serial for the lookup."""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=os.getenv("SPLITTOKEN_LOG_LEVEL", "INFO").upper())
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
