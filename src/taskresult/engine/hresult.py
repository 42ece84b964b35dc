"""HRESULT bit decomposition and hex rendering."""

from __future__ import annotations

from typing import NamedTuple

INT32_MIN = -(1 << 31)


class HResultParts(NamedTuple):
    """Severity, facility and error number from the low 32 bits of a code."""

    is_failure: bool
    facility_code: int
    error_code: int


def low32(value: int) -> int:
    return value & 0xFFFFFFFF


def decompose(value: int) -> HResultParts:
    """Split *value* into HRESULT fields. Wider values are masked to 32 bits."""
    bits = low32(value)
    return HResultParts(
        is_failure=bool(bits >> 31),
        facility_code=(bits >> 16) & 0x1FFF,
        error_code=bits & 0xFFFF,
    )


def format_hex(value: int) -> str:
    """Render *value* as ``0x`` plus uppercase hex digits.

    Values that fit in 32 bits, and negatives in the signed 32-bit range, use
    8 digits. Everything else uses 16 digits (64-bit two's complement for
    negatives).
    """
    if 0 <= value <= 0xFFFFFFFF:
        return f"0x{value:08X}"
    if value > 0xFFFFFFFF:
        return f"0x{value:016X}"
    if value >= INT32_MIN:
        return f"0x{value & 0xFFFFFFFF:08X}"
    return f"0x{value & 0xFFFFFFFFFFFFFFFF:016X}"
