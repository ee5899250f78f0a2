"""Tests for the pre-dispatch guard in flagbot.agent.states."""
import pytest

from flagbot.agent.states import (
    SETUP_STATES,
    AgentState,
    ObstacleNavigation,
    check_overrides,
)
from flagbot.geometry import Direction
from tests.fakes import FakeWorld

SETUP_ROUNDS = 200


def test_no_state_yet_forces_not_spawned():
    assert check_overrides(None, FakeWorld(), SETUP_ROUNDS) is AgentState.NOT_SPAWNED


@pytest.mark.parametrize("state", list(AgentState))
def test_not_spawned_always_wins(state):
    world = FakeWorld(location=None, round_num=500)
    assert check_overrides(state, world, SETUP_ROUNDS) is AgentState.NOT_SPAWNED


@pytest.mark.parametrize("state", sorted(SETUP_STATES, key=lambda s: s.value))
def test_setup_phase_is_time_boxed(state):
    assert check_overrides(state, FakeWorld(round_num=199), SETUP_ROUNDS) is None
    assert (
        check_overrides(state, FakeWorld(round_num=200), SETUP_ROUNDS)
        is AgentState.LOOKING_FOR_ENEMY_FLAG
    )


@pytest.mark.parametrize("state", [s for s in AgentState if s not in SETUP_STATES])
def test_other_states_proceed_after_setup(state):
    assert check_overrides(state, FakeWorld(round_num=1000), SETUP_ROUNDS) is None


def test_obstacle_record_defaults_to_no_preference():
    nav = ObstacleNavigation(resume_state=AgentState.TRAVELING_TO_ENEMY_FLAG)
    assert nav.preferred_side is Direction.CENTER
