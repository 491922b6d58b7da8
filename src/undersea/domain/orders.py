"""Order confirmation and cancellation for roster units."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import timedelta

from undersea.domain import command_points
from undersea.domain.enums import OrderStatus, OrderType, TargetType, UnitKind
from undersea.domain.models import (
    CommandPoints,
    Order,
    OrderID,
    SubmarineUnit,
    TurnState,
)
from undersea.domain.rules_config import DEFAULT_RULES, RulesConfig
from undersea.domain.turn_clock import compute_activation


class OrderError(ValueError):
    """Raised when a unit cannot take the requested order."""


@dataclass(frozen=True, slots=True)
class OrderConfirmation:
    unit: SubmarineUnit
    points: CommandPoints
    cost: int


_TARGET_TYPES = {
    OrderType.PATROL: TargetType.AREA,
    OrderType.ATTACK: TargetType.BASE,
    OrderType.DEPLOY: TargetType.AREA,
}


def _validate(unit: SubmarineUnit, order_type: OrderType) -> None:
    if not unit.is_active:
        raise OrderError(f"unit {unit.id} is destroyed and cannot take orders")
    if unit.kind == UnitKind.ASW:
        raise OrderError(f"ASW card {unit.id} operates without orders")
    if order_type == OrderType.DEPLOY and unit.kind != UnitKind.ASSET:
        raise OrderError(f"only assets can be deployed, {unit.id} is a {unit.kind}")
    if order_type != OrderType.DEPLOY and unit.kind == UnitKind.ASSET:
        raise OrderError(f"asset {unit.id} only accepts deploy orders")


def new_order(
    unit: SubmarineUnit,
    order_type: OrderType,
    target_id: str,
    turn_state: TurnState,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Order:
    """Build a pending order; attacks get their arrival date and turn."""

    execute_on = None
    execution_turn = None
    if order_type == OrderType.ATTACK:
        travel = rules.attack.travel_days
        execute_on = turn_state.current_date + timedelta(days=travel)
        execution_turn = compute_activation(turn_state, travel, rules=rules).turn
    return Order(
        id=OrderID(f"order-{unit.id}-{uuid.uuid4().hex[:12]}"),
        unit_id=unit.id,
        order_type=order_type,
        target_id=target_id,
        target_type=_TARGET_TYPES[order_type],
        assigned_turn=turn_state.turn_number,
        assigned_on=turn_state.current_date,
        status=OrderStatus.PENDING,
        execute_on=execute_on,
        execution_turn=execution_turn,
    )


def confirm_order(
    unit: SubmarineUnit,
    order_type: OrderType,
    target_id: str,
    turn_state: TurnState,
    points: CommandPoints,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> OrderConfirmation:
    """Pay for and attach a new order, replacing any existing one.

    Raises :class:`OrderError` for units that cannot take the order and
    :class:`~undersea.domain.command_points.InsufficientCommandPointsError`
    when the faction cannot pay; in both cases nothing is deducted.
    """

    _validate(unit, order_type)
    cost = command_points.order_cost(order_type, rules=rules)
    remaining = command_points.spend(points, unit.faction, cost)
    order = new_order(unit, order_type, target_id, turn_state, rules=rules)
    return OrderConfirmation(unit=replace(unit, current_order=order), points=remaining, cost=cost)


def cancel_order(unit: SubmarineUnit) -> SubmarineUnit:
    """Clear the unit's order. Points already spent are not refunded."""

    if unit.current_order is None:
        return unit
    return replace(unit, current_order=None)
