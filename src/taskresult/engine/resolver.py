"""Tiered resolution of a normalized code into ordered candidate meanings.

Tiers run in priority order and each may contribute one meaning:

1. Domain taxonomy (exact key, then the alternate 32-bit representation).
2. Win32 facility decode: the low 16 bits through the OS message lookup.
3. Direct decode of small positive codes through the OS message lookup,
   only when the taxonomy had no entry.
4. ``ERROR_SUCCESS`` synthesis for a bare zero.

A meaning whose message text already appears is dropped.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Callable

from taskresult.contracts.results import Meaning, TaxonomyEntry
from taskresult.data.facilities import FACILITY_WIN32
from taskresult.data.taxonomy import TAXONOMY
from taskresult.engine.hresult import HResultParts
from taskresult.observe.events import EventEmitter

SMALL_CODE_MAX = 0xFFFF

SUCCESS_MEANING = Meaning(
    source="OSError",
    constant_name="ERROR_SUCCESS",
    message="The operation completed successfully",
    is_success=True,
)


def alternate_key(value: int) -> int | None:
    """The other 32-bit representation of *value*, if it has one.

    Negative int32 values map to their unsigned form and values in
    ``[2**31, 2**32)`` map to their signed form.
    """
    if -(1 << 31) <= value < 0:
        return value & 0xFFFFFFFF
    if (1 << 31) <= value < (1 << 32):
        return value - (1 << 32)
    return None


def lookup_taxonomy(value: int, taxonomy: Mapping[int, TaxonomyEntry] = TAXONOMY) -> TaxonomyEntry | None:
    entry = taxonomy.get(value)
    if entry is None:
        alt = alternate_key(value)
        if alt is not None:
            entry = taxonomy.get(alt)
    return entry


def is_restatement(message: str, code: int) -> bool:
    """True when *message* only repeats the code instead of describing it."""
    text = message.strip().rstrip(".").lower()
    if text.startswith("unknown error"):
        text = text[len("unknown error"):].strip(" :()#")
    return text in {"", str(code), f"0x{code:x}", f"0x{code:08x}"}


def _os_message(
    lookup: Callable[[int], str | None] | None,
    code: int,
    events: EventEmitter | None,
) -> str | None:
    if lookup is None:
        return None
    try:
        message = lookup(code)
    except Exception as e:
        # A failed lookup only removes this tier's contribution.
        if events is not None:
            events.emit("lookup.failed", {"code": code, "error": str(e)})
        return None
    if not isinstance(message, str):
        return None
    return message.strip() or None


def resolve_meanings(
    value: int,
    parts: HResultParts,
    lookup: Callable[[int], str | None] | None,
    *,
    taxonomy: Mapping[int, TaxonomyEntry] = TAXONOMY,
    events: EventEmitter | None = None,
) -> list[Meaning]:
    """Collect meanings for *value* in tier-priority order."""
    meanings: list[Meaning] = []

    def _add(meaning: Meaning) -> None:
        if all(m.message != meaning.message for m in meanings):
            meanings.append(meaning)

    entry = lookup_taxonomy(value, taxonomy)
    if entry is not None:
        _add(Meaning(
            source="DomainTaxonomy",
            constant_name=entry.canonical_name,
            message=entry.message,
            is_success=entry.is_success,
        ))

    if parts.facility_code == FACILITY_WIN32:
        message = _os_message(lookup, parts.error_code, events)
        if message:
            _add(Meaning(source="OSError", message=message, is_success=not parts.is_failure))

    if entry is None and 0 < value <= SMALL_CODE_MAX:
        message = _os_message(lookup, value, events)
        if message and not is_restatement(message, value):
            _add(Meaning(source="OSError", message=message, is_success=value == 0))

    if value == 0 and not meanings:
        meanings.append(SUCCESS_MEANING)

    return meanings
