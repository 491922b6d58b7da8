"""Patrol phase: standing patrols raid enemy logistics."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from undersea.domain import command_points as ledger
from undersea.domain import events as templates
from undersea.domain.dice import DiceRoller, at_most
from undersea.domain.enums import (
    EventType,
    Faction,
    OrderResult,
    OrderStatus,
    OrderType,
    TargetType,
    UnitKind,
)
from undersea.domain.events import EventBuilder
from undersea.domain.models import (
    CampaignEvent,
    CommandPoints,
    OperationalArea,
    SubmarineUnit,
    TurnState,
)
from undersea.domain.rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PatrolPhaseResult:
    events: tuple[CampaignEvent, ...]
    roster: tuple[SubmarineUnit, ...]
    points: CommandPoints
    patrols: int = 0
    successes: int = 0


def zone_name(
    area_id: str,
    areas: Sequence[OperationalArea],
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> str:
    if area_id == rules.patrol.open_ocean_area_id:
        return rules.patrol.open_ocean_area_name
    for area in areas:
        if area.id == area_id:
            return area.name
    return rules.patrol.unknown_area_name


def reset_completed_patrols(roster: Sequence[SubmarineUnit]) -> tuple[SubmarineUnit, ...]:
    """Standing patrols that were marked completed go back on station."""

    reset = []
    for unit in roster:
        order = unit.current_order
        if (
            unit.is_active
            and order is not None
            and order.order_type == OrderType.PATROL
            and order.status == OrderStatus.COMPLETED
        ):
            unit = replace(unit, current_order=replace(order, status=OrderStatus.PENDING))
        reset.append(unit)
    return tuple(reset)


def _on_patrol(unit: SubmarineUnit) -> bool:
    order = unit.current_order
    return (
        unit.is_active
        and unit.kind != UnitKind.ASW
        and order is not None
        and order.order_type == OrderType.PATROL
        and order.status == OrderStatus.PENDING
    )


def resolve_patrols(
    roster: Sequence[SubmarineUnit],
    turn_state: TurnState,
    points: CommandPoints,
    areas: Sequence[OperationalArea],
    *,
    dice: DiceRoller,
    rules: RulesConfig = DEFAULT_RULES,
) -> PatrolPhaseResult:
    """Roll each pending patrol; a success drains enemy command points.

    A failed patrol is silent for both sides.  Either way the mission counter
    advances and the order stays pending for the next turn.
    """

    patrol = rules.patrol
    updated: list[SubmarineUnit] = []
    events: list[CampaignEvent] = []
    drained = {Faction.US: 0, Faction.CHINA: 0}
    patrols = 0
    successes = 0

    for unit in reset_completed_patrols(roster):
        if not _on_patrol(unit):
            updated.append(unit)
            continue

        patrols += 1
        order = unit.current_order
        patrol_roll = dice.roll(patrol.die_sides)
        result = OrderResult.FAILURE

        if at_most(patrol_roll, patrol.success_threshold):
            successes += 1
            result = OrderResult.SUCCESS
            damage_roll = dice.roll(patrol.damage_die_sides)
            enemy = unit.faction.opponent
            points = ledger.adjust(points, enemy, -damage_roll)
            drained[enemy] += damage_roll

            where = zone_name(order.target_id, areas, rules=rules)
            attacker = (
                EventBuilder()
                .from_unit(unit)
                .turn(turn_state)
                .event_type(EventType.SUCCESS)
                .target(order.target_id, where, TargetType.AREA)
                .description(templates.patrol_success(where))
                .rolls(patrol_roll, patrol.success_threshold, damage_roll, patrol.damage_die_sides)
            )
            defender = (
                attacker.clone_for_opponent()
                .damage(damage_roll)
                .description(templates.patrol_damage(damage_roll))
            )
            events.append(attacker.build())
            events.append(defender.build())

        updated.append(
            replace(
                unit,
                current_order=replace(
                    order, resolved_turn=turn_state.turn_number, result=result
                ),
                missions_completed=unit.missions_completed + 1,
            )
        )

    if successes:
        logger.info(
            "patrol phase: %d/%d successful (us -%d, china -%d)",
            successes,
            patrols,
            drained[Faction.US],
            drained[Faction.CHINA],
        )
    return PatrolPhaseResult(
        events=tuple(events),
        roster=tuple(updated),
        points=points,
        patrols=patrols,
        successes=successes,
    )
