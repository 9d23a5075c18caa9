"""Data models for tokens and their serials."""

from .token import NIL_SERIAL, Token, new_serial, serial_from_seed
