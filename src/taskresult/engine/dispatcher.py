"""Response envelope helpers, output rendering, and exit codes."""

from __future__ import annotations

import sys
from typing import Any

import orjson

from taskresult.contracts.common import (
    ErrorDetail,
    Metrics,
    ResponseEnvelope,
    WarningDetail,
)

# Exit code mapping
EXIT_CODES = {
    "success": 0,
    "validation": 10,
    "io": 50,
    "internal": 90,
}

VALIDATION_CODE_MARKERS = (
    "USAGE",
    "INVALID_ARGUMENT",
    "INPUT_INVALID",
    "CONFIG_INVALID",
)

IO_CODE_MARKERS = ("NOT_FOUND", "ERR_IO")


def success_envelope(
    command: str,
    result: Any,
    *,
    warnings: list[WarningDetail] | None = None,
    duration_ms: int = 0,
    inputs: int = 0,
    translated: int = 0,
) -> ResponseEnvelope:
    return ResponseEnvelope(
        ok=True,
        command=command,
        result=result,
        warnings=warnings or [],
        metrics=Metrics(duration_ms=duration_ms, inputs=inputs, translated=translated),
    )


def error_envelope(
    command: str,
    code: str,
    message: str,
    *,
    details: dict | None = None,
    duration_ms: int = 0,
) -> ResponseEnvelope:
    return ResponseEnvelope(
        ok=False,
        command=command,
        errors=[ErrorDetail(code=code, message=message, details=details)],
        metrics=Metrics(duration_ms=duration_ms),
    )


def output_json(envelope: ResponseEnvelope) -> str:
    """Serialize envelope to JSON string using orjson."""
    data = envelope.model_dump(mode="json")
    return orjson.dumps(data, option=orjson.OPT_INDENT_2).decode()


def output_toon(envelope: ResponseEnvelope) -> str:
    """Serialize envelope to TOON text."""
    from taskresult.help.toon import to_toon

    return to_toon(envelope.model_dump(mode="json"))


def print_response(envelope: ResponseEnvelope, fmt: str = "json") -> None:
    """Print response to stdout as JSON (default) or TOON."""
    text = output_toon(envelope) if fmt == "toon" else output_json(envelope)
    sys.stdout.write(text + "\n")


def exit_code_for(envelope: ResponseEnvelope) -> int:
    """Determine exit code from envelope errors."""
    if envelope.ok:
        return 0
    if not envelope.errors:
        return EXIT_CODES["internal"]
    code = envelope.errors[0].code.upper()
    if any(marker in code for marker in VALIDATION_CODE_MARKERS):
        return EXIT_CODES["validation"]
    if any(marker in code for marker in IO_CODE_MARKERS):
        return EXIT_CODES["io"]
    return EXIT_CODES["internal"]
