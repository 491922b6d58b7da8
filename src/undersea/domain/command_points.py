"""Per-faction command point ledger."""

from __future__ import annotations

from collections.abc import Iterable

from undersea.domain.enums import Faction, OrderType
from undersea.domain.models import Base, CommandPoints, SurfaceUnit
from undersea.domain.rules_config import DEFAULT_RULES, RulesConfig


class InsufficientCommandPointsError(ValueError):
    """Raised when a faction cannot afford a spend action."""

    def __init__(self, faction: Faction, cost: int, available: int) -> None:
        super().__init__(
            f"{faction} needs {cost} command points but only has {available}"
        )
        self.faction = faction
        self.cost = cost
        self.available = available


def with_points(points: CommandPoints, faction: Faction, value: int) -> CommandPoints:
    """Return ``points`` with ``faction``'s pool set to ``value`` clamped at zero."""

    value = max(0, value)
    if faction == Faction.US:
        return CommandPoints(us=value, china=points.china)
    return CommandPoints(us=points.us, china=value)


def adjust(points: CommandPoints, faction: Faction, delta: int) -> CommandPoints:
    return with_points(points, faction, points.for_faction(faction) + delta)


def spend(points: CommandPoints, faction: Faction, cost: int) -> CommandPoints:
    """Deduct ``cost`` or raise without touching the pool."""

    if cost < 0:
        raise ValueError(f"cost must be non-negative, got {cost}")
    available = points.for_faction(faction)
    if available < cost:
        raise InsufficientCommandPointsError(faction, cost, available)
    return with_points(points, faction, available - cost)


def base_yield(base: Base) -> int:
    """Command points a base generates given its damage."""

    if base.damage_points <= 0:
        return base.command_points
    intact = base.damage_points - min(base.damage_taken, base.damage_points)
    return base.command_points * intact // base.damage_points


def calculate_from_bases(
    bases: Iterable[Base],
    influence: int = 0,
    *,
    apply_influence: bool = False,
    rules: RulesConfig = DEFAULT_RULES,
) -> CommandPoints:
    """Recompute both pools from base control.

    Positive influence favours the US, negative favours China.  Each point
    moves the favoured side up and the other down by ``influence_percent``
    percent, rounding down.
    """

    totals = {Faction.US: 0, Faction.CHINA: 0}
    for base in bases:
        totals[base.faction] += base_yield(base)

    if apply_influence and influence != 0:
        shift = rules.command_points.influence_percent * abs(influence)
        favoured = Faction.US if influence > 0 else Faction.CHINA
        other = favoured.opponent
        totals[favoured] = totals[favoured] * (100 + shift) // 100
        totals[other] = totals[other] * (100 - shift) // 100

    return CommandPoints(us=max(0, totals[Faction.US]), china=max(0, totals[Faction.CHINA]))


def order_cost(order_type: OrderType, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    costs = rules.command_points
    if order_type == OrderType.PATROL:
        return costs.patrol_order_cost
    if order_type == OrderType.ATTACK:
        return costs.attack_order_cost
    return costs.deploy_order_cost


def deployment_cost(units: Iterable[SurfaceUnit]) -> int:
    return sum(unit.deployment_cost for unit in units)
