"""Code normalization: heterogeneous input to a canonical signed 64-bit value."""

from __future__ import annotations

import re
from typing import Any, NamedTuple

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]+$")
_DECIMAL_RE = re.compile(r"^[+-]?[0-9]+$")

# Input kinds
INTEGER = "integer"
UNSIGNED = "unsigned"
DECIMAL = "decimal"
HEX = "hex"
EMPTY = "empty"
UNSUPPORTED = "unsupported"


class CodeParseError(ValueError):
    """Raised when input cannot be interpreted as a result code."""


class RawCode(NamedTuple):
    """Classified input: a kind tag plus the payload that kind carries."""

    kind: str
    payload: Any = None


def classify_input(value: Any) -> RawCode:
    """Tag *value* with the input kind that decides how it is parsed."""
    if value is None:
        return RawCode(EMPTY)
    # bool is an int subclass but never a result code
    if isinstance(value, bool):
        return RawCode(UNSUPPORTED, value)
    if isinstance(value, int):
        if INT64_MAX < value <= UINT64_MAX:
            return RawCode(UNSIGNED, value)
        return RawCode(INTEGER, value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return RawCode(EMPTY)
        if _HEX_RE.match(text):
            return RawCode(HEX, text[2:])
        return RawCode(DECIMAL, text)
    return RawCode(UNSUPPORTED, value)


def _to_signed64(value: int) -> int:
    value &= UINT64_MAX
    return value - (1 << 64) if value > INT64_MAX else value


def normalize_code(value: Any) -> int | None:
    """Normalize *value* to a signed 64-bit integer.

    Returns ``None`` when there is nothing to translate (``None`` or a
    whitespace-only string). Raises :class:`CodeParseError` for malformed or
    unsupported input. Strings are base-10 unless they carry a ``0x``/``0X``
    prefix; hex strings of up to 16 digits are read as two's complement.
    """
    raw = classify_input(value)

    if raw.kind == EMPTY:
        return None

    if raw.kind == INTEGER:
        if raw.payload < INT64_MIN or raw.payload > INT64_MAX:
            raise CodeParseError(f"Result code out of 64-bit range: {raw.payload}")
        return raw.payload

    if raw.kind == UNSIGNED:
        return _to_signed64(raw.payload)

    if raw.kind == HEX:
        digits = raw.payload.lstrip("0")
        if len(digits) > 16:
            raise CodeParseError(f"Hex result code wider than 64 bits: 0x{raw.payload}")
        return _to_signed64(int(raw.payload, 16))

    if raw.kind == DECIMAL:
        if not _DECIMAL_RE.match(raw.payload):
            raise CodeParseError(f"Not a decimal or 0x-prefixed hex code: {raw.payload!r}")
        number = int(raw.payload, 10)
        if number < INT64_MIN or number > INT64_MAX:
            raise CodeParseError(f"Result code out of 64-bit range: {raw.payload}")
        return number

    if raw.kind == UNSUPPORTED:
        raise CodeParseError(f"Unsupported result code type: {type(raw.payload).__name__}")

    raise AssertionError(f"Unhandled input kind: {raw.kind}")
