"""Campaign calendar: turn advancement and activation timing.

A turn is one week of seven days.  Turn 0 is the planning turn, optionally
preceded by a pre-planning step; leaving planning starts turn 1 on day 1 at
the campaign start date.  Pending deployments carry an :class:`Activation`
(turn, day) computed here and become operational once :func:`is_active`
says so.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from undersea.domain.enums import GamePhase
from undersea.domain.models import Activation, TurnState
from undersea.domain.rules_config import DEFAULT_RULES, RulesConfig

DAY_NAMES: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


@dataclass(frozen=True, slots=True)
class TurnAdvance:
    """Result of advancing the clock by one step."""

    state: TurnState
    week_completed: bool = False
    planning_transition: bool = False
    pre_planning_transition: bool = False


def initial_turn_state(
    *,
    pre_planning: bool = False,
    rules: RulesConfig = DEFAULT_RULES,
) -> TurnState:
    """Return the planning-turn state a new campaign starts from."""

    return TurnState(
        current_date=rules.calendar.start_date,
        day_of_week=1,
        turn_number=0,
        is_planning_phase=not pre_planning,
        is_pre_planning_phase=pre_planning,
    )


def advance(turn_state: TurnState, *, rules: RulesConfig = DEFAULT_RULES) -> TurnAdvance:
    """Advance the campaign by one day."""

    if turn_state.is_pre_planning_phase:
        return TurnAdvance(
            state=TurnState(
                current_date=turn_state.current_date,
                day_of_week=turn_state.day_of_week or 1,
                turn_number=0,
                is_planning_phase=True,
            ),
            pre_planning_transition=True,
        )

    if turn_state.is_planning_phase:
        return TurnAdvance(
            state=TurnState(
                current_date=rules.calendar.start_date,
                day_of_week=1,
                turn_number=1,
            ),
            planning_transition=True,
        )

    days_per_week = rules.calendar.days_per_week
    next_day = turn_state.day_of_week % days_per_week + 1
    week_completed = turn_state.day_of_week == days_per_week
    return TurnAdvance(
        state=TurnState(
            current_date=turn_state.current_date + timedelta(days=1),
            day_of_week=next_day,
            turn_number=turn_state.turn_number + (1 if week_completed else 0),
        ),
        week_completed=week_completed,
    )


def compute_activation(
    turn_state: TurnState,
    delay_days: int,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Activation:
    """Return the (turn, day) at which something queued now becomes active.

    During planning the delay is ignored and activation is immediate.
    """

    if turn_state.is_planning_phase or turn_state.is_pre_planning_phase:
        return Activation(turn=0, day=turn_state.day_of_week)

    day = turn_state.day_of_week
    turn = turn_state.turn_number
    for _ in range(max(0, delay_days)):
        day += 1
        if day > rules.calendar.days_per_week:
            day = 1
            turn += 1
    return Activation(turn=turn, day=day)


def is_active(activation: Activation, turn_state: TurnState) -> bool:
    """Return ``True`` once ``activation`` has been reached."""

    if turn_state.is_planning_phase:
        return True
    if activation.turn < turn_state.turn_number:
        return True
    return activation.turn == turn_state.turn_number and activation.day <= turn_state.day_of_week


def current_activation(turn_state: TurnState) -> Activation:
    return Activation(turn=turn_state.turn_number, day=turn_state.day_of_week)


def is_turn_change(previous: TurnState | None, current: TurnState) -> bool:
    """Return ``True`` when the clock moved between two observed states."""

    if previous is None:
        return False
    if previous.turn_number != current.turn_number:
        return True
    if previous.day_of_week != current.day_of_week:
        return True
    return previous.is_planning_phase and not current.is_planning_phase


def is_start_of_week(turn_state: TurnState) -> bool:
    return turn_state.day_of_week == 1 and not turn_state.is_planning_phase


def is_end_of_week(turn_state: TurnState, *, rules: RulesConfig = DEFAULT_RULES) -> bool:
    return turn_state.day_of_week == rules.calendar.days_per_week and not turn_state.is_planning_phase


def days_between(start: TurnState, end: TurnState) -> int:
    """Calendar days from ``start`` to ``end``; 0 if either is a planning state."""

    if start.is_planning_phase or end.is_planning_phase:
        return 0
    return (end.current_date - start.current_date).days


def game_phase(turn_state: TurnState, *, rules: RulesConfig = DEFAULT_RULES) -> GamePhase:
    if turn_state.is_pre_planning_phase:
        return GamePhase.PRE_PLANNING
    if turn_state.is_planning_phase:
        return GamePhase.PLANNING
    if turn_state.turn_number <= rules.calendar.early_game_last_turn:
        return GamePhase.EARLY_GAME
    if turn_state.turn_number <= rules.calendar.mid_game_last_turn:
        return GamePhase.MID_GAME
    return GamePhase.LATE_GAME


def format_turn_display(turn_state: TurnState) -> str:
    """Human-readable clock, e.g. ``Week 2, Wednesday (2030-06-11)``."""

    if turn_state.is_pre_planning_phase:
        return "Pre-Planning Phase"
    if turn_state.is_planning_phase:
        return "Planning Phase"
    if 1 <= turn_state.day_of_week <= len(DAY_NAMES):
        day_name = DAY_NAMES[turn_state.day_of_week - 1]
    else:
        day_name = f"Day {turn_state.day_of_week}"
    return f"Week {turn_state.turn_number}, {day_name} ({turn_state.current_date.isoformat()})"
