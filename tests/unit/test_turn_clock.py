"""Tests for the campaign calendar."""

from __future__ import annotations

from datetime import date, timedelta

from hypothesis import given
from hypothesis import strategies as st

from undersea.domain import turn_clock
from undersea.domain.enums import GamePhase
from undersea.domain.models import Activation, TurnState

START = date(2030, 6, 2)


def _state(turn: int = 1, day: int = 1, *, on: date | None = None) -> TurnState:
    return TurnState(
        current_date=on or START + timedelta(days=(turn - 1) * 7 + day - 1),
        day_of_week=day,
        turn_number=turn,
    )


class TestAdvance:
    def test_mid_week_step(self):
        step = turn_clock.advance(_state(2, 3))
        assert step.state.day_of_week == 4
        assert step.state.turn_number == 2
        assert step.state.current_date == _state(2, 3).current_date + timedelta(days=1)
        assert not step.week_completed

    def test_week_wrap(self):
        step = turn_clock.advance(_state(2, 7))
        assert step.state.day_of_week == 1
        assert step.state.turn_number == 3
        assert step.week_completed

    def test_planning_transition_goes_to_turn_one(self):
        planning = turn_clock.initial_turn_state()
        step = turn_clock.advance(planning)
        assert step.planning_transition
        assert not step.week_completed
        assert step.state == TurnState(current_date=START, day_of_week=1, turn_number=1)

    def test_pre_planning_moves_to_planning(self):
        pre = turn_clock.initial_turn_state(pre_planning=True)
        step = turn_clock.advance(pre)
        assert step.pre_planning_transition
        assert step.state.is_planning_phase
        assert not step.state.is_pre_planning_phase
        assert step.state.turn_number == 0

    @given(turn=st.integers(min_value=1, max_value=50))
    def test_seven_steps_complete_exactly_one_week(self, turn):
        state = _state(turn, 1)
        completions = 0
        for _ in range(7):
            step = turn_clock.advance(state)
            completions += step.week_completed
            state = step.state
        assert state.day_of_week == 1
        assert state.turn_number == turn + 1
        assert completions == 1


class TestActivation:
    def test_planning_ignores_delay(self):
        planning = turn_clock.initial_turn_state()
        assert turn_clock.compute_activation(planning, 5) == Activation(turn=0, day=1)

    def test_delay_within_week(self):
        assert turn_clock.compute_activation(_state(1, 2), 2) == Activation(turn=1, day=4)

    def test_delay_wraps_week(self):
        assert turn_clock.compute_activation(_state(1, 6), 3) == Activation(turn=2, day=2)

    def test_zero_delay_is_now(self):
        assert turn_clock.compute_activation(_state(3, 5), 0) == Activation(turn=3, day=5)

    def test_is_active_rules(self):
        now = _state(2, 4)
        assert turn_clock.is_active(Activation(1, 7), now)
        assert turn_clock.is_active(Activation(2, 4), now)
        assert not turn_clock.is_active(Activation(2, 5), now)
        assert not turn_clock.is_active(Activation(3, 1), now)
        assert turn_clock.is_active(Activation(9, 9), turn_clock.initial_turn_state())

    @given(
        turn=st.integers(min_value=1, max_value=20),
        day=st.integers(min_value=1, max_value=7),
        delay=st.integers(min_value=0, max_value=30),
    )
    def test_activation_reached_after_delay_steps(self, turn, day, delay):
        state = _state(turn, day)
        activation = turn_clock.compute_activation(state, delay)
        for step_index in range(delay):
            assert not turn_clock.is_active(activation, state), step_index
            state = turn_clock.advance(state).state
        assert turn_clock.is_active(activation, state)


class TestHelpers:
    def test_format_turn_display(self):
        assert turn_clock.format_turn_display(_state(2, 3)) == "Week 2, Wednesday (2030-06-11)"
        assert turn_clock.format_turn_display(turn_clock.initial_turn_state()) == "Planning Phase"
        pre = turn_clock.initial_turn_state(pre_planning=True)
        assert turn_clock.format_turn_display(pre) == "Pre-Planning Phase"

    def test_week_boundaries(self):
        assert turn_clock.is_start_of_week(_state(1, 1))
        assert not turn_clock.is_start_of_week(turn_clock.initial_turn_state())
        assert turn_clock.is_end_of_week(_state(1, 7))
        assert not turn_clock.is_end_of_week(_state(1, 6))

    def test_is_turn_change(self):
        assert not turn_clock.is_turn_change(None, _state(1, 1))
        assert turn_clock.is_turn_change(_state(1, 1), _state(1, 2))
        assert turn_clock.is_turn_change(_state(1, 7), _state(2, 1))
        assert not turn_clock.is_turn_change(_state(1, 3), _state(1, 3))

    def test_days_between(self):
        assert turn_clock.days_between(_state(1, 1), _state(2, 3)) == 9
        assert turn_clock.days_between(turn_clock.initial_turn_state(), _state(2, 3)) == 0

    def test_game_phase(self):
        assert turn_clock.game_phase(turn_clock.initial_turn_state()) == GamePhase.PLANNING
        assert turn_clock.game_phase(_state(1, 1)) == GamePhase.EARLY_GAME
        assert turn_clock.game_phase(_state(4, 1)) == GamePhase.MID_GAME
        assert turn_clock.game_phase(_state(8, 1)) == GamePhase.LATE_GAME
