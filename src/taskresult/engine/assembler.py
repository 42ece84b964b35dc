"""Assemble the final TranslationResult from decomposed parts and meanings."""

from __future__ import annotations

from taskresult.contracts.results import Meaning, TranslationResult
from taskresult.data.facilities import facility_name
from taskresult.engine.hresult import HResultParts, format_hex

PARSE_FAILURE_MESSAGE = "Unable to parse result code"
UNKNOWN_PREFIX = "Unknown result code: "


def assemble_result(value: int, parts: HResultParts, meanings: list[Meaning]) -> TranslationResult:
    """Build the result; the first meaning is the primary interpretation."""
    hex_code = format_hex(value)
    common = {
        "result_code": value,
        "hex_code": hex_code,
        "facility": facility_name(parts.facility_code),
        "facility_code": parts.facility_code,
        "meanings": list(meanings),
    }
    if meanings:
        primary = meanings[0]
        return TranslationResult(
            message=primary.message,
            source=primary.source,
            constant_name=primary.constant_name,
            is_success=primary.is_success,
            **common,
        )
    # Best-effort guess from the severity bit only.
    return TranslationResult(
        message=UNKNOWN_PREFIX + hex_code,
        source="Unknown",
        constant_name=None,
        is_success=not parts.is_failure,
        **common,
    )


def unparseable_result() -> TranslationResult:
    """Degraded result for input that could not be normalized."""
    return TranslationResult(message=PARSE_FAILURE_MESSAGE, source="Unknown")
