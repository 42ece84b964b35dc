"""Shared test fixtures."""

from __future__ import annotations

import pytest

FAKE_OS_MESSAGES = {
    0: "The operation completed successfully.",
    2: "The system cannot find the file specified.",
    5: "Access is denied.",
    1234: "1234",
    4320: "The operator or administrator has refused the request.",
}


class FakeLookup:
    """Dict-backed OS message lookup that records every requested code."""

    def __init__(self, messages: dict[int, str] | None = None) -> None:
        self.messages = dict(FAKE_OS_MESSAGES if messages is None else messages)
        self.calls: list[int] = []

    def __call__(self, code: int) -> str | None:
        self.calls.append(code)
        return self.messages.get(code)


class RaisingLookup:
    """Lookup that always fails, like an unavailable platform API."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, code: int) -> str | None:
        self.calls += 1
        raise OSError(f"lookup unavailable for {code}")


@pytest.fixture()
def fake_lookup() -> FakeLookup:
    return FakeLookup()


@pytest.fixture()
def raising_lookup() -> RaisingLookup:
    return RaisingLookup()


@pytest.fixture()
def no_config(tmp_path, monkeypatch):
    """Run from an empty directory so no taskresult.yaml is picked up."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TASKRESULT_EVENTS", raising=False)
    return tmp_path
