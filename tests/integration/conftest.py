"""Fixtures for API integration tests; ``kv_store`` and ``clock`` come from tests/conftest.py."""
import pytest
from fastapi.testclient import TestClient

from backend.main import create_app
from backend.settings import Settings
from tests.fakes import create_program


@pytest.fixture
def settings():
    return Settings(
        environment="test",
        secondary_session_template_id="evening-cardio",
        persistence_min_wait_seconds=0,
        persistence_max_wait_seconds=0,
        _env_file=None,
    )


@pytest.fixture
def app(settings, kv_store, clock):
    return create_app(settings=settings, kv_store=kv_store, clock=clock, program=create_program())


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def store(app):
    return app.state.training_store
