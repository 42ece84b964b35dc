"""Translation pipeline: normalize → decompose → resolve → assemble."""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from taskresult.adapters.oslookup import default_lookup
from taskresult.contracts.results import TranslationResult
from taskresult.engine.assembler import assemble_result, unparseable_result
from taskresult.engine.hresult import decompose
from taskresult.engine.normalizer import CodeParseError, normalize_code
from taskresult.engine.resolver import resolve_meanings
from taskresult.observe.events import EventEmitter


def translate(
    value: Any,
    *,
    lookup: Callable[[int], str | None] | None = None,
    events: EventEmitter | None = None,
) -> TranslationResult | None:
    """Translate one result code.

    Returns ``None`` when there is no input (``None`` or blank string).
    Malformed input yields a degraded result rather than an exception.
    """
    try:
        code = normalize_code(value)
    except CodeParseError as e:
        if events is not None:
            events.emit("translate.parse_failure", {"input": repr(value), "reason": str(e)})
        return unparseable_result()
    if code is None:
        return None

    if lookup is None:
        lookup = default_lookup()
    parts = decompose(code)
    meanings = resolve_meanings(code, parts, lookup, events=events)
    return assemble_result(code, parts, meanings)


def translate_many(
    values: Iterable[Any],
    *,
    lookup: Callable[[int], str | None] | None = None,
    workers: int = 1,
    events: EventEmitter | None = None,
) -> list[TranslationResult]:
    """Translate a batch, keeping input order and dropping empty inputs."""
    if lookup is None:
        lookup = default_lookup()

    def _one(value: Any) -> TranslationResult | None:
        return translate(value, lookup=lookup, events=events)

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(_one, values))
    else:
        results = [_one(v) for v in values]
    return [r for r in results if r is not None]
