"""Tests for the patrol phase."""

from __future__ import annotations

from datetime import date

from hypothesis import given
from hypothesis import strategies as st

from undersea.domain import models as dm
from undersea.domain import patrol
from undersea.domain.dice import FixedDiceRoller
from undersea.domain.enums import (
    EventType,
    Faction,
    OrderResult,
    OrderStatus,
    OrderType,
    TargetType,
    UnitKind,
)

TURN = dm.TurnState(current_date=date(2030, 6, 3), day_of_week=2, turn_number=1)
AREAS = (dm.OperationalArea(dm.AreaID("taiwan-strait"), "Taiwan Strait"),)


def _patroller(
    target: str = "taiwan-strait",
    *,
    status: OrderStatus = OrderStatus.PENDING,
    kind: UnitKind = UnitKind.SUBMARINE,
) -> dm.SubmarineUnit:
    order = dm.Order(
        id=dm.OrderID("order-sub-us-1"),
        unit_id=dm.UnitID("sub-us-1"),
        order_type=OrderType.PATROL,
        target_id=target,
        target_type=TargetType.AREA,
        assigned_turn=1,
        assigned_on=TURN.current_date,
        status=status,
    )
    return dm.SubmarineUnit(
        dm.UnitID("sub-us-1"),
        "USS Minnesota",
        dm.CardID("us-001"),
        "Virginia Class SSN",
        Faction.US,
        kind,
        current_order=order,
        missions_completed=4,
    )


def test_failed_patrol_is_silent():
    points = dm.CommandPoints(us=20, china=20)

    result = patrol.resolve_patrols((_patroller(),), TURN, points, AREAS, dice=FixedDiceRoller([15]))

    assert result.events == ()
    assert result.points == points
    unit = result.roster[0]
    assert unit.missions_completed == 5
    assert unit.current_order.status == OrderStatus.PENDING
    assert unit.current_order.result == OrderResult.FAILURE
    assert unit.current_order.resolved_turn == 1


def test_successful_patrol_drains_enemy_points():
    points = dm.CommandPoints(us=20, china=30)

    result = patrol.resolve_patrols((_patroller(),), TURN, points, AREAS, dice=FixedDiceRoller([2, 7]))

    assert result.points == dm.CommandPoints(us=20, china=23)
    attacker, defender = result.events
    assert attacker.faction == Faction.US
    assert attacker.event_type == EventType.SUCCESS
    assert attacker.target.name == "Taiwan Strait"
    assert attacker.target.damage_dealt is None
    assert defender.faction == Faction.CHINA
    assert defender.target.damage_dealt == 7
    assert defender.description == "Enemy submarine activity cost 7 command points"
    assert result.roster[0].current_order.result == OrderResult.SUCCESS


@given(
    available=st.integers(min_value=0, max_value=40),
    damage=st.integers(min_value=1, max_value=20),
)
def test_drain_never_goes_negative(available, damage):
    points = dm.CommandPoints(us=5, china=available)

    result = patrol.resolve_patrols(
        (_patroller(),), TURN, points, AREAS, dice=FixedDiceRoller([1, damage])
    )

    assert result.points.china == max(0, available - damage)
    assert result.points.us == 5


def test_open_ocean_and_unknown_zone_names():
    assert patrol.zone_name("south-china-sea", AREAS) == "South China Sea"
    assert patrol.zone_name("taiwan-strait", AREAS) == "Taiwan Strait"
    assert patrol.zone_name("nowhere", AREAS) == "Unknown zone"


def test_completed_patrols_go_back_on_station():
    done = _patroller(status=OrderStatus.COMPLETED)
    dice = FixedDiceRoller([9])

    result = patrol.resolve_patrols((done,), TURN, dm.CommandPoints(), AREAS, dice=dice)

    assert result.patrols == 1
    assert result.roster[0].current_order.status == OrderStatus.PENDING


def test_asw_cards_never_patrol():
    dice = FixedDiceRoller([])
    card = _patroller(kind=UnitKind.ASW)

    result = patrol.resolve_patrols((card,), TURN, dm.CommandPoints(), AREAS, dice=dice)

    assert result.patrols == 0
    assert result.roster[0] is card
