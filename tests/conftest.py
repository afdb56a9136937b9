# tests/conftest.py
import random

import pytest
import structlog

from bracket_engine.bracket.models import Player
from bracket_engine.utils.observability import MetricsRegistry, StructlogConfig


# Markers for test categorization
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")


class IdentityRandom(random.Random):
    """Random source whose shuffle keeps the roster order."""
    
    def shuffle(self, x):
        return None


@pytest.fixture(autouse=True)
def quiet_structlog(monkeypatch):
    """Keep structured logs out of captured stdout/stderr."""
    monkeypatch.setattr(StructlogConfig, "configure", staticmethod(lambda *args, **kwargs: None))
    with structlog.testing.capture_logs() as logs:
        yield logs


@pytest.fixture
def make_players():
    """Factory for rosters: make_players(3) -> p1, p2, p3."""
    def _make(n):
        return [Player(id=f"p{i}", name=f"Player {i}") for i in range(1, n + 1)]
    return _make


@pytest.fixture
def identity_rng():
    """Seeding without shuffling, so slots follow roster order."""
    return IdentityRandom()


@pytest.fixture
def metrics():
    """Isolated metrics registry per test."""
    return MetricsRegistry()


@pytest.fixture
def repository():
    from bracket_engine.core.storage import InMemoryTournamentRepository
    return InMemoryTournamentRepository()


@pytest.fixture
def service(repository, metrics):
    from bracket_engine.bracket.service import TournamentService
    return TournamentService(repository=repository, metrics=metrics, lock_timeout_s=0.05)
