"""OS error message lookups.

A lookup is any callable ``lookup(code) -> str | None`` returning the
platform description for a Win32 error number, or ``None`` when the code has
no mapping. The engine only ever calls it; tests inject plain dict-backed
fakes.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from typing import Callable

from taskresult.data.win32 import WIN32_MESSAGES

LOOKUP_MODES = ("auto", "system", "table")

_NO_DESCRIPTION = "<no description>"


class TableMessageLookup:
    """Lookup backed by the bundled Win32 message table plus optional extras."""

    def __init__(
        self,
        messages: Mapping[int, str] | None = None,
        *,
        extra: Mapping[int, str] | None = None,
    ) -> None:
        self._messages: dict[int, str] = dict(WIN32_MESSAGES if messages is None else messages)
        if extra:
            self._messages.update(extra)

    def __call__(self, code: int) -> str | None:
        return self._messages.get(code)

    def __len__(self) -> int:
        return len(self._messages)


class SystemMessageLookup:
    """Windows system message table (``FormatMessage`` via ``ctypes``)."""

    def __init__(self) -> None:
        if sys.platform != "win32":
            raise OSError("The system message table is only available on Windows")

    def __call__(self, code: int) -> str | None:
        import ctypes

        message = ctypes.FormatError(code).strip()
        if not message or message == _NO_DESCRIPTION:
            return None
        return message


class ChainedMessageLookup:
    """Try each lookup in order; the first non-empty message wins."""

    def __init__(self, lookups: Iterable[Callable[[int], str | None]]) -> None:
        self.lookups = list(lookups)

    def __call__(self, code: int) -> str | None:
        for lookup in self.lookups:
            message = lookup(code)
            if message:
                return message
        return None


def default_lookup(
    mode: str = "auto",
    *,
    extra: Mapping[int, str] | None = None,
) -> Callable[[int], str | None]:
    """Build the lookup for *mode* (``auto``, ``system`` or ``table``).

    ``auto`` uses the system table on Windows and the bundled table elsewhere.
    Configured *extra* messages take priority over the system table.
    """
    if mode not in LOOKUP_MODES:
        raise ValueError(f"Unknown lookup mode: '{mode}'. Supported: {', '.join(LOOKUP_MODES)}")
    if mode == "table" or (mode == "auto" and sys.platform != "win32"):
        return TableMessageLookup(extra=extra)
    system = SystemMessageLookup()
    if extra:
        return ChainedMessageLookup([TableMessageLookup(messages=extra), system])
    return system
