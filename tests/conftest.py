from __future__ import annotations

from datetime import datetime

import pytest

from timesheet.container import build_container
from timesheet.main import create_app
from timesheet.storage.key_value import InMemoryKeyValueStore


class FixedClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2026, 2, 2, 8, 5, 30)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def container(kv_store, clock):
    return build_container(kv_store=kv_store, clock=clock, seed_default_workers=False)


@pytest.fixture
def app(container):
    return create_app({"TESTING": True, "STORAGE_BACKEND": "memory", "LOG_FILE": ""}, container=container)


@pytest.fixture
def client(app):
    return app.test_client()
