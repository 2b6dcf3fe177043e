"""Shared test fixtures for cricket scoring engine tests."""

from __future__ import annotations

import pytest

from cricket_scorer.config import InningsConfig, MatchFormat
from cricket_scorer.state.innings_state import InningsState
from cricket_scorer.store.state_store import InMemoryStateStore
from cricket_scorer.tests.helpers import make_ready_state


@pytest.fixture
def ready_state() -> InningsState:
    """Striker S, non-striker N, bowler B; nothing bowled yet."""
    return make_ready_state()


@pytest.fixture
def t20_config() -> InningsConfig:
    return InningsConfig(match_format=MatchFormat.T20, total_overs=20, players_per_side=11)


@pytest.fixture
def memory_store() -> InMemoryStateStore:
    return InMemoryStateStore()
