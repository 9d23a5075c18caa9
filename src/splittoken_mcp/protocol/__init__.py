"""Protocol layer: payload framing, token parsing, and token construction."""

from .framing import build_payload, parse_payload
from .parser import TokenParts, parse_token, verify
