"""Reading batch input: plain text, JSON arrays, and NDJSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

# Object fields that carry a result code, in priority order.
CODE_FIELDS = ("ResultCode", "LastTaskResult", "result_code", "last_task_result", "code")


class InputFormatError(ValueError):
    """Raised when batch input cannot be parsed."""


def read_text_safe(path: str | Path) -> str:
    """Read a text file with UTF-8 BOM tolerance.

    Uses ``utf-8-sig`` encoding which silently strips a leading BOM when
    present, while reading plain UTF-8 correctly.
    """
    return Path(path).read_text(encoding="utf-8-sig")


def extract_code(item: Any) -> Any:
    """Pull the result code out of a task-info object; scalars pass through.

    Objects without a known code field are returned unchanged and later
    translate as unparseable.
    """
    if isinstance(item, dict):
        for field in CODE_FIELDS:
            if field in item:
                return item[field]
    return item


def parse_codes(text: str) -> list[Any]:
    """Parse batch input into raw code values, preserving order.

    A document starting with ``[`` is a JSON array, and a document holding a
    single JSON object (possibly pretty-printed) is one entry. Otherwise each
    line is one entry: lines starting with ``{`` are JSON objects, anything
    else is taken verbatim. Blank lines become ``None`` (no input).
    """
    stripped = text.strip()
    if stripped.startswith("["):
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError as e:
            raise InputFormatError(f"Invalid JSON array: {e}") from e
        return [extract_code(item) for item in data]
    if stripped.startswith("{"):
        try:
            return [extract_code(json.loads(stripped))]
        except json.JSONDecodeError:
            pass  # one object per line

    codes: list[Any] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            codes.append(None)
            continue
        if line.startswith("{"):
            try:
                codes.append(extract_code(json.loads(line)))
            except json.JSONDecodeError as e:
                raise InputFormatError(f"Invalid JSON on line {lineno}: {e}") from e
            continue
        codes.append(line)
    return codes


def read_codes(path: str | Path) -> list[Any]:
    """Read and parse a batch input file."""
    return parse_codes(read_text_safe(path))
