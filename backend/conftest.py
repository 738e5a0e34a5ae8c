"""Shared pytest fixtures: in-memory store, controllable clock, API client."""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Keep `import main` from creating a data/ directory while tests run.
os.environ.setdefault("PETCARE_STORAGE", "memory")

from fastapi.testclient import TestClient  # noqa: E402

from repositories import MemoryStore  # noqa: E402
from store import PetStore  # noqa: E402


class FakeClock:
    def __init__(self, start: datetime = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def backend():
    return MemoryStore()


@pytest.fixture
def store(backend, clock):
    return PetStore(backend, clock=clock)


@pytest.fixture
def client(store):
    from main import create_app

    with TestClient(create_app(store)) as c:
        yield c
