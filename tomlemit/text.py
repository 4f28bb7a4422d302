"""Low-level text formatting for TOML strings, keys, floats and comments."""

from __future__ import annotations

import math
import string
import struct
from decimal import Decimal

__all__ = [
    "needs_quoting",
    "encode_literal_string",
    "encode_quoted_string",
    "encode_string",
    "encode_key",
    "format_float",
    "format_comment",
]

LITERAL_QUOTE = "'"

_BARE_KEY_CHARS = frozenset(string.ascii_letters + string.digits + "-_")

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
    "\r": "\\r",
    "\t": "\\t",
}

_MAX_FLOAT32 = 3.4028234663852886e38


def _is_invalid_ascii(char: str) -> bool:
    """Return True for ASCII control characters not allowed raw in TOML."""
    code = ord(char)
    return code <= 0x08 or 0x0A <= code <= 0x1F or code == 0x7F


def needs_quoting(value: str) -> bool:
    """Return True if ``value`` cannot be written as a literal string."""
    return any(
        char in "'\r\n" or _is_invalid_ascii(char) for char in value
    )


def encode_literal_string(value: str) -> str:
    """Wrap ``value`` in single quotes; it must not need quoting."""
    return f"{LITERAL_QUOTE}{value}{LITERAL_QUOTE}"


def _escape_char(char: str, multiline: bool) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    if char == "\n":
        return char if multiline else "\\n"
    if _is_invalid_ascii(char):
        return f"\\u00{ord(char):02X}"
    return char


def encode_quoted_string(value: str, multiline: bool = False) -> str:
    """Encode ``value`` as a basic (or multi-line basic) TOML string."""
    quote = '"""' if multiline else '"'
    opening = quote + "\n" if multiline else quote
    body = "".join(_escape_char(char, multiline) for char in value)
    return f"{opening}{body}{quote}"


def encode_string(value: str, multiline: bool = False) -> str:
    """Encode ``value`` as a literal string when possible, quoted otherwise."""
    if needs_quoting(value):
        return encode_quoted_string(value, multiline)
    return encode_literal_string(value)


def encode_key(key: str) -> str:
    """Encode a single key part, bare if possible, quoted when required."""
    if not key:
        return "''"

    needs_quotation = False
    cannot_use_literal = False
    for char in key:
        if char in _BARE_KEY_CHARS:
            continue
        if char == LITERAL_QUOTE:
            cannot_use_literal = True
        needs_quotation = True

    if needs_quotation and needs_quoting(key):
        cannot_use_literal = True

    if cannot_use_literal:
        return encode_quoted_string(key, False)
    if needs_quotation:
        return encode_literal_string(key)
    return key


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _shortest_float32_digits(value: float) -> str:
    packed = struct.pack("<f", value)
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        if struct.pack("<f", float(text)) == packed:
            return text
    return repr(value)


def format_float(value: float, single: bool = False) -> str:
    """Format a float as TOML, using float32 precision when ``single``."""
    limit = _MAX_FLOAT32 if single else 1.7976931348623157e308
    if math.isnan(value):
        return "nan"
    if value > limit:
        return "inf"
    if value < -limit:
        return "-inf"

    if single:
        value = _to_float32(value)

    if math.trunc(value) == value:
        return f"{value:.1f}"

    digits = _shortest_float32_digits(value) if single else repr(value)
    return format(Decimal(digits), "f")


def format_comment(comment: str, indent: str = "") -> str:
    """Render ``comment`` as TOML comment lines, each prefixed by ``indent``."""
    lines = []
    rest = comment
    while rest:
        line, _, rest = rest.partition("\n")
        lines.append(f"{indent}# {line}\n")
    return "".join(lines)