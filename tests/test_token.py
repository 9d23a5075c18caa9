"""Tests for token encoding, parsing and verification."""

import uuid
from unittest.mock import patch

import pytest

from splittoken_mcp import (
    NIL_SERIAL,
    InvalidChecksumError,
    InvalidSyntaxError,
    SplitTokenError,
    Token,
    TokenParts,
    generate,
    new_token,
    parse_token,
    serial_from_seed,
    verify,
)
from splittoken_mcp.utils.basex import BASE62
from splittoken_mcp.utils.crc import crc32_bytes

SERIAL = uuid.UUID("123c3af9-6eac-4392-b673-481cfe3c6d6d")
SECRET = b"autogenerated secret"
KNOWN_TOKEN = "myu_1X2QxxKglFic3TYI90p9zF7979gWIltsjQ9t2PJCaEK8WjBBt9XaZ8"

NAMESPACE_TESTING = uuid.UUID("2034963f-6992-4349-9dcd-91178ddbf7c5")


# ─── ENCODING ────────────────────────────────────────────────────────

def test_known_token():
    """Fixed inputs encode to a fixed, stable token."""
    tk = new_token("myu", SERIAL, SECRET)
    assert tk == KNOWN_TOKEN
    assert isinstance(tk, Token)
    assert isinstance(tk, str)


def test_new_token_roundtrip():
    """A fresh token exposes its serial and secret and verifies."""
    secret = bytes(range(24))
    serial = uuid.uuid4()
    tk = new_token("test", serial, secret)
    assert tk.serial == serial
    assert tk.secret == secret
    assert tk.usage == "test"
    verify(tk)


def test_new_token_empty_usage():
    with pytest.raises(InvalidSyntaxError):
        new_token("", SERIAL, SECRET)


def test_new_token_usage_with_separator():
    with pytest.raises(InvalidSyntaxError):
        new_token("a_b", SERIAL, SECRET)


def test_new_token_empty_secret():
    with pytest.raises(InvalidSyntaxError):
        new_token("u", SERIAL, b"")


def test_new_token_usage_checked_before_secret():
    """Usage validation runs first, but both fail as syntax errors."""
    with pytest.raises(InvalidSyntaxError):
        new_token("", SERIAL, b"")


def test_new_token_leading_zero_serial():
    """Serials starting with zero bytes survive the base-62 round trip."""
    serial = uuid.UUID(int=1)
    tk = new_token("zero", serial, b"\x00")
    assert tk.split("_")[1].startswith("0" * 15)
    assert parse_token(tk) == TokenParts(usage="zero", serial=serial, secret=b"\x00")


@pytest.mark.parametrize(
    "usage,seed,secret",
    [
        ("a", "", b"\x00"),
        ("email-verify", "alice", b"\xff" * 64),
        ("api.key", "bob", bytes(range(256))),
        ("ÄÖÜ", "ünïcode", b"s"),
        ("x" * 100, "long usage", b"\x00\x00\x00\x01"),
        ("api-key", "trailing zeros", b"\x01\x00\x00\x00"),
    ],
)
def test_roundtrip(usage, seed, secret):
    """Decode(Encode(usage, serial, secret)) reproduces all three fields."""
    serial = serial_from_seed(NAMESPACE_TESTING, seed)
    tk = new_token(usage, serial, secret)
    parts = parse_token(tk)
    assert parts.usage == usage
    assert parts.serial == serial
    assert parts.secret == secret


# ─── VERIFICATION ────────────────────────────────────────────────────

def test_verify_valid():
    assert verify(Token(KNOWN_TOKEN)) is None


def test_verify_invalid_checksum():
    """Changing the last character corrupts the checksum."""
    with pytest.raises(InvalidChecksumError, match="invalid checksum"):
        verify(KNOWN_TOKEN[:-1] + "9")


def test_verify_invalid_syntax():
    """A token without the '_' separator is a syntax error."""
    with pytest.raises(InvalidSyntaxError, match="invalid syntax"):
        verify(KNOWN_TOKEN.replace("_", "."))


def test_error_kinds_are_distinct():
    assert not issubclass(InvalidSyntaxError, InvalidChecksumError)
    assert not issubclass(InvalidChecksumError, InvalidSyntaxError)
    assert issubclass(InvalidSyntaxError, SplitTokenError)
    assert issubclass(InvalidChecksumError, SplitTokenError)
    assert InvalidSyntaxError.code != InvalidChecksumError.code


@pytest.mark.parametrize(
    "token",
    [
        "",
        "myu",
        "myu__" + KNOWN_TOKEN[4:],
        "a_b_" + KNOWN_TOKEN[4:],
        KNOWN_TOKEN + "_",
    ],
)
def test_separator_count(token):
    """Zero or two-or-more separators are rejected as syntax errors."""
    with pytest.raises(InvalidSyntaxError):
        parse_token(token)


@pytest.mark.parametrize("bad", ["-", "+", "/", "=", " ", "é"])
def test_body_outside_alphabet(bad):
    """Any non-alphanumeric character in the body is a syntax error."""
    with pytest.raises(InvalidSyntaxError) as excinfo:
        parse_token(KNOWN_TOKEN[:10] + bad + KNOWN_TOKEN[10:])
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_empty_usage_accepted_on_decode():
    """Usage is not re-validated when parsing."""
    parts = parse_token(KNOWN_TOKEN[3:])
    assert parts.usage == ""
    assert parts.serial == SERIAL


def test_empty_body():
    with pytest.raises(InvalidSyntaxError):
        parse_token("myu_")


def test_minimum_length_boundary():
    """20 decoded bytes fail as syntax; 21 with a valid checksum succeed."""
    short = SERIAL.bytes + crc32_bytes(SERIAL.bytes)
    with pytest.raises(InvalidSyntaxError):
        parse_token("u_" + BASE62.encode(short))

    body = SERIAL.bytes + b"k"
    parts = parse_token("u_" + BASE62.encode(body + crc32_bytes(body)))
    assert parts.secret == b"k"


@pytest.mark.parametrize("bit", range(0, 40 * 8, 7))
def test_single_bit_flip_rejected(bit):
    """Flipping any bit of the decoded payload never yields a valid token."""
    data = bytearray(BASE62.decode(KNOWN_TOKEN.split("_")[1]))
    data[bit // 8] ^= 1 << (bit % 8)
    with pytest.raises(SplitTokenError):
        parse_token("myu_" + BASE62.encode(bytes(data)))


def test_usage_not_checksummed():
    """The usage tag sits outside the checksum."""
    retagged = "other" + KNOWN_TOKEN[3:]
    assert parse_token(retagged).usage == "other"


# ─── ACCESSORS ───────────────────────────────────────────────────────

def test_accessors_on_invalid_token():
    """Lossy accessors return sentinels instead of raising."""
    for raw in (KNOWN_TOKEN[:-1] + "9", KNOWN_TOKEN.replace("_", ".")):
        tk = Token(raw)
        assert tk.usage == "nil"
        assert tk.serial == NIL_SERIAL
        assert tk.secret == b""


def test_token_parts_method():
    tk = Token(KNOWN_TOKEN)
    assert tk.parts() == TokenParts(usage="myu", serial=SERIAL, secret=SECRET)
    with pytest.raises(InvalidChecksumError):
        Token(KNOWN_TOKEN[:-1] + "9").parts()
    with pytest.raises(InvalidSyntaxError):
        Token("nope").verify()


def test_token_parts_repr_hides_secret():
    r = repr(parse_token(KNOWN_TOKEN))
    assert "autogenerated" not in r
    assert "myu" in r


# ─── SERIALS ─────────────────────────────────────────────────────────

def test_serial_from_seed_deterministic():
    a = serial_from_seed(NAMESPACE_TESTING, "seed")
    assert a == serial_from_seed(NAMESPACE_TESTING, b"seed")
    assert a != serial_from_seed(NAMESPACE_TESTING, "other")
    assert a.version == 5


def test_serial_from_seed_matches_uuid5():
    assert serial_from_seed(uuid.NAMESPACE_DNS, "python.org") == uuid.uuid5(
        uuid.NAMESPACE_DNS, "python.org"
    )


def test_serial_from_seed_non_utf8_bytes():
    """Arbitrary byte seeds are accepted."""
    assert serial_from_seed(NAMESPACE_TESTING, b"\xff\xfe").version == 5


# ─── GENERATION ──────────────────────────────────────────────────────

def test_generate():
    """Generated tokens verify and carry the requested secret length."""
    tk = generate("email-verify", 32)
    verify(tk)
    assert tk.usage == "email-verify"
    assert len(tk.secret) == 32
    assert tk.serial.version == 4


def test_generate_unique():
    assert generate("u", 16) != generate("u", 16)


def test_generate_zero_length():
    with pytest.raises(InvalidSyntaxError):
        generate("u", 0)


def test_generate_negative_length():
    with pytest.raises(ValueError):
        generate("u", -1)


def test_generate_invalid_usage():
    with pytest.raises(InvalidSyntaxError):
        generate("a_b", 16)


def test_generate_random_source_failure():
    """A failing entropy source surfaces as OSError."""
    with patch(
        "splittoken_mcp.protocol.builder.secrets.token_bytes",
        side_effect=OSError("no entropy"),
    ):
        with pytest.raises(OSError, match="reading random bytes"):
            generate("u", 16)
