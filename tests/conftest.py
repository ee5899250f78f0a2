"""
Shared pytest fixtures for the FlagBot test suite.

This module provides common fixtures used across all test modules. The
HostWorld double itself lives in tests/fakes.py.

Fixtures:
    default_config: Default FlagbotConfig instance
    fast_config: FlagbotConfig with no setup phase
    fake_world: FakeWorld with the agent spawned at the origin
    first_choice_rng: Random stand-in that always picks the first option
    moat_arena: Arena built from the "moat" map
"""
from __future__ import annotations

import pytest

from flagbot.world import Team
from tests.fakes import FakeWorld, FirstChoice

# =============================================================================
# CONFIGURATION FIXTURES
# =============================================================================

@pytest.fixture
def default_config():
    """Default FlagbotConfig."""
    from flagbot.config import FlagbotConfig
    return FlagbotConfig()


@pytest.fixture
def fast_config():
    """
    FlagbotConfig with the setup phase disabled.

    Agents go straight to hunting enemy flags, which keeps arena matches
    short.
    """
    from flagbot.config import FlagbotConfig
    return FlagbotConfig(setup_rounds=0, max_turns=200)


# =============================================================================
# WORLD FIXTURES
# =============================================================================

@pytest.fixture
def fake_world() -> FakeWorld:
    """FakeWorld with the agent spawned at (0, 0) on an open plane."""
    return FakeWorld()


@pytest.fixture
def first_choice_rng() -> FirstChoice:
    """Deterministic random source for spawn and exploration choices."""
    return FirstChoice()


@pytest.fixture
def moat_arena(fast_config):
    """Arena on the "moat" map with no setup phase, agent not yet spawned."""
    from flagbot.arena import Arena
    from flagbot.maps import get_map
    return Arena.from_rows(get_map("moat"), team=Team.A, config=fast_config)
