import threading
from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from config import load_config
from selector import ModelProfile
from session import RouterSession


class FakeClock:
    """Clock that advances instantly by the requested sleep."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, tzinfo=timezone.utc)):
        self.current = start
        self.sleeps: List[float] = []
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            return self.current

    def sleep(self, seconds: float, cancel=None) -> bool:
        if cancel is not None and cancel.is_set():
            return False
        with self._lock:
            self.sleeps.append(seconds)
            self.current += timedelta(seconds=seconds)
        return True


class ScriptedRandom:
    """Returns the given draws in order, cycling."""

    def __init__(self, *values: float):
        self.values = values
        self.calls = 0
        self._lock = threading.Lock()

    def random(self) -> float:
        with self._lock:
            value = self.values[self.calls % len(self.values)]
            self.calls += 1
        return value


def make_model(model_id: str, cost: float, latency: float, quality: float) -> ModelProfile:
    return ModelProfile(
        id=model_id,
        name=model_id,
        quality=quality,
        base_latency_ms=latency,
        cost_per_1k_tokens=cost,
    )


@pytest.fixture
def loader():
    return load_config()


@pytest.fixture
def catalog(loader):
    return loader.get_catalog()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(loader, clock):
    return RouterSession.from_config(loader, clock=clock, random_source=ScriptedRandom(0.0, 0.5))
