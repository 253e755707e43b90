"""Root conftest — shared fixtures for contract tests.

Invariants:
    - Every test starts with an empty log sink registry
    - Settings built fresh per test, never from the cached process instance
"""

import os

import pytest

import route_contract.infrastructure.log_sink as sink_module
from route_contract.config import Settings, get_settings

# Keep a developer's .env or shell overrides out of the wire-format assertions
for _key in list(os.environ):
    if _key.startswith("ROUTE_CONTRACT_"):
        del os.environ[_key]


@pytest.fixture(autouse=True)
def _isolated_sink_registry(monkeypatch):
    monkeypatch.setattr(sink_module, "_active_sink", None)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def recording_sink():
    """Async sink that records every delivery.

    Returns (sink, deliveries): deliveries is a list of event lists, one per call.
    """
    deliveries = []

    async def sink(events):
        deliveries.append(events)

    return sink, deliveries
