"""Shared fixtures: isolate every test from the process-wide registry."""
from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone

import pytest

from buildinfo import registry
from buildinfo.config import ENV_VARS, GENERATED_MODULE

STARTED = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime = STARTED) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(registry, "_registry", None)
    monkeypatch.delitem(sys.modules, GENERATED_MODULE, raising=False)
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
