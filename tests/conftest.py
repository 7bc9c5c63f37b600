"""
Shared fixtures.

Every fixture builds on the fakes in ``tests.fakes`` so no test touches a
database or the wall clock.
"""
import time

import pytest

from tests.fakes import (
    TODAY,
    FakeKeyValueStore,
    FixedClock,
    create_program,
    create_training_store,
)


@pytest.fixture
def program():
    return create_program()


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def kv_store():
    store = FakeKeyValueStore()
    yield store
    store.reset()


@pytest.fixture
def training_store(program, kv_store, clock):
    return create_training_store(program=program, kv_store=kv_store, clock=clock)


@pytest.fixture
def eastern_time(monkeypatch):
    """Run with the host's local time zone set to US Eastern (UTC-5 in January)."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset() is not available on this platform")
    monkeypatch.setenv("TZ", "EST+05EDT,M3.2.0,M11.1.0")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
