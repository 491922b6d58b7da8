"""Tests for the attack phase."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta

import pytest

from undersea.domain import attack
from undersea.domain import models as dm
from undersea.domain.dice import FixedDiceRoller
from undersea.domain.enums import (
    EventType,
    Faction,
    OrderStatus,
    OrderType,
    TargetType,
    UnitKind,
    UnitStatus,
)

TURN = dm.TurnState(current_date=date(2030, 6, 6), day_of_week=5, turn_number=1)
GUAM = dm.Base(dm.BaseID("guam"), "Andersen AFB", Faction.US, 3, (False, False, False), 30)


def _attacker(*, execute_on: date | None = TURN.current_date, target: str = "guam", **overrides):
    order = dm.Order(
        id=dm.OrderID("order-sub-cn-1"),
        unit_id=dm.UnitID("sub-cn-1"),
        order_type=OrderType.ATTACK,
        target_id=target,
        target_type=TargetType.BASE,
        assigned_turn=1,
        assigned_on=TURN.current_date - timedelta(days=2),
        execute_on=execute_on,
        execution_turn=1,
    )
    unit = dm.SubmarineUnit(
        dm.UnitID("sub-cn-1"),
        "Changzheng 18",
        dm.CardID("china-001"),
        "Type 093B SSN",
        Faction.CHINA,
        UnitKind.SUBMARINE,
        current_order=order,
    )
    return replace(unit, **overrides)


def test_hit_deals_damage_and_returns_to_patrol():
    dice = FixedDiceRoller([5, 1])

    result = attack.resolve_attacks((_attacker(),), TURN, (GUAM,), dice=dice)

    assert result.bases[0].damage_taken == 1
    attacker_event, defender_event = result.events
    assert attacker_event.faction == Faction.CHINA
    assert attacker_event.event_type == EventType.SUCCESS
    assert attacker_event.target.damage_dealt is None
    assert "launched" in attacker_event.description
    assert defender_event.faction == Faction.US
    assert defender_event.target.damage_dealt == 1
    assert defender_event.description == "Andersen AFB hit by a missile strike, 1 damage point"

    unit = result.roster[0]
    assert unit.current_order.order_type == OrderType.PATROL
    assert unit.current_order.target_id == "south-china-sea"
    assert unit.current_order.status == OrderStatus.PENDING
    assert unit.missions_completed == 1
    assert unit.total_kills == 0
    assert dice.remaining == 0


def test_miss_is_reported_to_attacker_only():
    result = attack.resolve_attacks((_attacker(),), TURN, (GUAM,), dice=FixedDiceRoller([11]))

    assert len(result.events) == 1
    assert result.events[0].faction == Faction.CHINA
    assert result.events[0].event_type == EventType.FAILURE
    assert "launched" in result.events[0].description
    assert result.bases[0].damage_taken == 0
    assert result.roster[0].current_order.order_type == OrderType.PATROL
    assert result.roster[0].missions_completed == 1


def test_saturating_a_base_scores_a_kill():
    battered = replace(GUAM, damage=(True, True, False))

    result = attack.resolve_attacks((_attacker(),), TURN, (battered,), dice=FixedDiceRoller([1, 2]))

    assert result.bases[0].is_destroyed
    assert result.events[1].target.damage_dealt == 1
    assert result.roster[0].total_kills == 1


def test_already_destroyed_base_scores_nothing():
    ruined = replace(GUAM, damage=(True, True, True))

    result = attack.resolve_attacks((_attacker(),), TURN, (ruined,), dice=FixedDiceRoller([1, 2]))

    assert result.events[1].target.damage_dealt == 0
    assert result.roster[0].total_kills == 0


@pytest.mark.parametrize(
    ("damage", "amount", "expected", "applied"),
    [
        ((), 2, (True, True, False), 2),
        ((True, False, False), 1, (True, True, False), 1),
        ((True, True, False), 2, (True, True, True), 1),
        ((True, True, True, True), 1, (True, True, True), 0),
    ],
)
def test_apply_base_damage(damage, amount, expected, applied):
    base, marked = attack.apply_base_damage(replace(GUAM, damage=damage), amount)
    assert base.damage == expected
    assert marked == applied


def test_attack_waits_for_arrival():
    early = _attacker(execute_on=TURN.current_date + timedelta(days=1))
    dice = FixedDiceRoller([])

    result = attack.resolve_attacks((early,), TURN, (GUAM,), dice=dice)

    assert result.events == ()
    assert result.roster[0] == early


def test_undated_order_waits_out_travel_time_within_the_week():
    assigned = dm.TurnState(current_date=date(2030, 6, 2), day_of_week=1, turn_number=1)
    order = replace(
        _attacker().current_order,
        assigned_on=assigned.current_date,
        execute_on=None,
        execution_turn=1,
    )
    day_two = dm.TurnState(current_date=date(2030, 6, 3), day_of_week=2, turn_number=1)
    day_three = dm.TurnState(current_date=date(2030, 6, 4), day_of_week=3, turn_number=1)

    assert not attack.is_due(order, assigned)
    assert not attack.is_due(order, day_two)
    assert attack.is_due(order, day_three)
    assert not attack.is_due(replace(order, execution_turn=None), assigned)


def test_undated_attack_does_not_fire_on_confirmation_day():
    order = replace(_attacker().current_order, execute_on=None, assigned_on=TURN.current_date)
    early = _attacker(current_order=order)
    dice = FixedDiceRoller([])

    result = attack.resolve_attacks((early,), TURN, (GUAM,), dice=dice)

    assert result.events == ()
    assert result.roster[0] == early


def test_missing_base_drops_attack_without_rolling():
    dice = FixedDiceRoller([])

    result = attack.resolve_attacks((_attacker(target="atlantis"),), TURN, (GUAM,), dice=dice)

    assert result.events == ()
    assert result.attacks == 0
    assert result.roster[0].current_order.order_type == OrderType.PATROL
    assert result.roster[0].missions_completed == 0


def test_destroyed_submarine_does_not_strike():
    sunk = _attacker(status=UnitStatus.DESTROYED)
    result = attack.resolve_attacks((sunk,), TURN, (GUAM,), dice=FixedDiceRoller([]))
    assert result.events == ()
    assert result.roster[0] is sunk


def test_open_ocean_patrol_id_encodes_clock():
    order = attack.open_ocean_patrol(_attacker(), TURN)
    assert order.id == "order-sub-cn-1-patrol-t1d5"
    assert order.target_type == TargetType.AREA
