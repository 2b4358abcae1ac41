# tests/conftest.py
from datetime import datetime, timedelta, UTC

import pytest
from fastapi.testclient import TestClient

from processflow.deps import get_store
from processflow.main import app
from processflow.models import ImpactLevel, StepTemplate
from processflow.services import catalog
from processflow.services.store import FlowStore


class FakeClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start=datetime(2020, 1, 1, tzinfo=UTC)):
        self.now = start

    def __call__(self):
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(clock):
    """Empty store per test, with a deterministic clock."""
    return FlowStore(clock=clock)


@pytest.fixture()
def client(store):
    """HTTP test client wired to the per-test store."""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def cvd():
    return catalog.get_template("cvd_oxide")


@pytest.fixture()
def make_template():
    def _make(env_impact=ImpactLevel.low, **overrides):
        fields = dict(
            id="t",
            name="Test Step",
            duration_minutes=10,
            power_watts=600,
            chemicals=(),
            temperature_c=25,
            env_impact=env_impact,
        )
        fields.update(overrides)
        return StepTemplate(**fields)
    return _make
