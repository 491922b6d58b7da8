"""Tests for the command point ledger."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from undersea.domain import command_points as cp
from undersea.domain.enums import Faction, OrderType
from undersea.domain.models import Base, BaseID, CommandPoints, SurfaceUnit, SurfaceUnitID


def _base(faction: Faction, points: int, capacity: int = 4, damaged: int = 0) -> Base:
    return Base(
        id=BaseID(f"{faction}-{points}-{damaged}"),
        name="Base",
        faction=faction,
        damage_points=capacity,
        damage=tuple(i < damaged for i in range(capacity)),
        command_points=points,
    )


@given(
    start=st.integers(min_value=0, max_value=500),
    delta=st.integers(min_value=-1000, max_value=1000),
    faction=st.sampled_from(list(Faction)),
)
def test_adjust_clamps_at_zero(start, delta, faction):
    points = CommandPoints(us=start, china=start)
    updated = cp.adjust(points, faction, delta)
    assert updated.for_faction(faction) == max(0, start + delta)
    assert updated.for_faction(faction.opponent) == start


def test_spend_deducts():
    assert cp.spend(CommandPoints(us=10, china=4), Faction.US, 3) == CommandPoints(us=7, china=4)


def test_spend_refuses_without_partial_deduction():
    points = CommandPoints(us=2, china=9)
    with pytest.raises(cp.InsufficientCommandPointsError) as excinfo:
        cp.spend(points, Faction.US, 5)
    assert excinfo.value.available == 2
    assert excinfo.value.cost == 5
    assert points == CommandPoints(us=2, china=9)


def test_insufficient_points_is_a_value_error():
    assert issubclass(cp.InsufficientCommandPointsError, ValueError)


def test_base_yield_scales_with_damage():
    assert cp.base_yield(_base(Faction.US, 20, capacity=4, damaged=0)) == 20
    assert cp.base_yield(_base(Faction.US, 20, capacity=4, damaged=1)) == 15
    assert cp.base_yield(_base(Faction.US, 10, capacity=3, damaged=1)) == 6
    assert cp.base_yield(_base(Faction.US, 20, capacity=4, damaged=4)) == 0


def test_calculate_without_influence():
    bases = [_base(Faction.US, 30), _base(Faction.US, 20, damaged=2), _base(Faction.CHINA, 25)]
    assert cp.calculate_from_bases(bases, influence=3) == CommandPoints(us=40, china=25)


def test_calculate_with_positive_influence_favours_us():
    bases = [_base(Faction.US, 100), _base(Faction.CHINA, 100)]
    points = cp.calculate_from_bases(bases, influence=2, apply_influence=True)
    assert points == CommandPoints(us=110, china=90)


def test_calculate_with_negative_influence_favours_china():
    bases = [_base(Faction.US, 20), _base(Faction.CHINA, 20)]
    points = cp.calculate_from_bases(bases, influence=-3, apply_influence=True)
    assert points == CommandPoints(us=17, china=23)


def test_extreme_influence_never_goes_negative():
    bases = [_base(Faction.US, 20), _base(Faction.CHINA, 20)]
    points = cp.calculate_from_bases(bases, influence=-30, apply_influence=True)
    assert points.us == 0


def test_order_costs():
    assert cp.order_cost(OrderType.PATROL) == 3
    assert cp.order_cost(OrderType.ATTACK) == 5
    assert cp.order_cost(OrderType.DEPLOY) == 0


def test_deployment_cost_sums_units():
    units = [
        SurfaceUnit(SurfaceUnitID("a"), "A", "DDG", Faction.US, 2, deployment_cost=10),
        SurfaceUnit(SurfaceUnitID("b"), "B", "LCS", Faction.US, 1, deployment_cost=4),
    ]
    assert cp.deployment_cost(units) == 14
