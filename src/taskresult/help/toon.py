"""TOON (Token-Oriented Object Notation) rendering of response envelopes.

Compact text format for LLM consumers:
- key: value for scalars; None is omitted
- key[N]: v1,v2 for scalar arrays
- Uniform object arrays (such as Meanings) → header row + value rows
- Nested dicts → indented key:value blocks
"""

from __future__ import annotations

from typing import Any


def to_toon(data: dict[str, Any], *, indent: int = 0) -> str:
    """Convert a dict to TOON text."""
    lines: list[str] = []
    prefix = "  " * indent
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            lines.append(f"{prefix}{key}:")
            if value:
                lines.append(to_toon(value, indent=indent + 1))
        elif isinstance(value, list):
            lines.extend(_format_list(key, value, indent))
        else:
            lines.append(f"{prefix}{key}: {_format_scalar(value)}")
    return "\n".join(lines)


def _format_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    s = str(value)
    if any(ch in s for ch in ',\n"'):
        return '"' + s.replace('"', '\\"').replace("\n", "\\n") + '"'
    return s


def _format_list(key: str, items: list, indent: int) -> list[str]:
    prefix = "  " * indent
    if not items:
        return [f"{prefix}{key}[0]:"]
    if _is_tabular(items):
        headers = list(items[0].keys())
        lines = [f"{prefix}{key}[{len(items)}]:", f"{prefix}  {','.join(headers)}"]
        for item in items:
            lines.append(f"{prefix}  {','.join(_format_scalar(item[h]) for h in headers)}")
        return lines
    if all(isinstance(v, (str, int, float, bool)) for v in items):
        return [f"{prefix}{key}[{len(items)}]: {','.join(_format_scalar(v) for v in items)}"]
    lines = [f"{prefix}{key}[{len(items)}]:"]
    for item in items:
        if isinstance(item, dict):
            lines.append(f"{prefix}  -")
            lines.append(to_toon(item, indent=indent + 2))
        else:
            lines.append(f"{prefix}  {_format_scalar(item)}")
    return lines


def _is_tabular(items: list) -> bool:
    """Dicts sharing the same keys with only scalar values."""
    if not all(isinstance(item, dict) for item in items):
        return False
    keys = list(items[0].keys())
    for item in items:
        if list(item.keys()) != keys:
            return False
        if any(isinstance(v, (dict, list)) for v in item.values()):
            return False
    return True
