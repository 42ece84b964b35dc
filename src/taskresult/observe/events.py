"""Structured event emission and timing."""

from __future__ import annotations

import json
import os
import sys
import threading
import time
from datetime import datetime, timezone
from typing import Any, TextIO

EVENTS_ENV = "TASKRESULT_EVENTS"


class Timer:
    """Simple context-manager timer for measuring duration_ms."""

    def __init__(self) -> None:
        self.start: float = 0
        self.elapsed_ms: int = 0

    def __enter__(self) -> "Timer":
        self.start = time.perf_counter()
        return self

    def __exit__(self, *args: Any) -> None:
        self.elapsed_ms = int((time.perf_counter() - self.start) * 1000)


class EventEmitter:
    """Emits NDJSON lifecycle events to stderr (or *stream*)."""

    def __init__(self, enabled: bool = False, *, stream: TextIO | None = None) -> None:
        self.enabled = enabled
        self._stream = stream
        self._lock = threading.Lock()

    @classmethod
    def from_env(cls, enabled: bool = False) -> "EventEmitter":
        """Enabled if *enabled* is set or ``TASKRESULT_EVENTS=true``."""
        return cls(enabled or os.environ.get(EVENTS_ENV, "").lower() == "true")

    def emit(self, event: str, data: dict[str, Any] | None = None) -> None:
        if not self.enabled:
            return
        payload = {
            "event": event,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "data": data or {},
        }
        stream = self._stream or sys.stderr
        # translate_many may emit from worker threads
        with self._lock:
            stream.write(json.dumps(payload, default=str) + "\n")
            stream.flush()
