"""Attack phase: submarine missile strikes against enemy bases."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import timedelta

from undersea.domain import events as templates
from undersea.domain.dice import DiceRoller, at_most
from undersea.domain.enums import (
    EventType,
    OrderStatus,
    OrderType,
    TargetType,
)
from undersea.domain.events import EventBuilder
from undersea.domain.models import (
    Base,
    CampaignEvent,
    Order,
    OrderID,
    SubmarineUnit,
    TurnState,
)
from undersea.domain.rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AttackPhaseResult:
    events: tuple[CampaignEvent, ...]
    roster: tuple[SubmarineUnit, ...]
    bases: tuple[Base, ...]
    attacks: int = 0
    hits: int = 0


def is_due(order: Order, turn_state: TurnState, *, rules: RulesConfig = DEFAULT_RULES) -> bool:
    """An attack is due once the current date reaches its arrival date.

    Orders without an explicit arrival date arrive ``travel_days`` after they
    were assigned.
    """

    arrives_on = order.execute_on
    if arrives_on is None:
        arrives_on = order.assigned_on + timedelta(days=rules.attack.travel_days)
    return arrives_on <= turn_state.current_date


def _ready_to_strike(unit: SubmarineUnit, turn_state: TurnState, rules: RulesConfig) -> bool:
    order = unit.current_order
    return (
        unit.is_active
        and order is not None
        and order.order_type == OrderType.ATTACK
        and order.status == OrderStatus.PENDING
        and is_due(order, turn_state, rules=rules)
    )


def apply_base_damage(base: Base, amount: int) -> tuple[Base, int]:
    """Mark up to ``amount`` empty slots, never beyond capacity.

    Returns the updated base and the number of slots actually marked.
    """

    slots = list(base.damage[: base.damage_points])
    slots.extend([False] * (base.damage_points - len(slots)))
    applied = 0
    for index, marked in enumerate(slots):
        if applied >= amount:
            break
        if not marked:
            slots[index] = True
            applied += 1
    return replace(base, damage=tuple(slots)), applied


def open_ocean_patrol(
    unit: SubmarineUnit,
    turn_state: TurnState,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> Order:
    """Standing patrol a submarine falls back to once its strike is spent."""

    return Order(
        id=OrderID(f"order-{unit.id}-patrol-t{turn_state.turn_number}d{turn_state.day_of_week}"),
        unit_id=unit.id,
        order_type=OrderType.PATROL,
        target_id=rules.patrol.open_ocean_area_id,
        target_type=TargetType.AREA,
        assigned_turn=turn_state.turn_number,
        assigned_on=turn_state.current_date,
    )


def resolve_attacks(
    roster: Sequence[SubmarineUnit],
    turn_state: TurnState,
    bases: Sequence[Base],
    *,
    dice: DiceRoller,
    rules: RulesConfig = DEFAULT_RULES,
) -> AttackPhaseResult:
    """Resolve every attack order whose travel time has elapsed.

    On a hit the defender learns the damage taken; the attacker only learns
    that the strike was launched.  A miss is reported to the attacker only.
    Whatever the outcome, the submarine returns to an open-ocean patrol.
    """

    bases_by_id = {base.id: base for base in bases}
    attack = rules.attack
    updated: list[SubmarineUnit] = []
    events: list[CampaignEvent] = []
    attacks = 0
    hits = 0

    for unit in roster:
        if not _ready_to_strike(unit, turn_state, rules):
            updated.append(unit)
            continue

        order = unit.current_order
        patrol = open_ocean_patrol(unit, turn_state, rules=rules)
        base = bases_by_id.get(order.target_id)
        if base is None:
            logger.warning("attack by %s on unknown base %s dropped", unit.id, order.target_id)
            updated.append(replace(unit, current_order=patrol))
            continue

        attacks += 1
        attack_roll = dice.roll(attack.die_sides)
        builder = (
            EventBuilder()
            .from_unit(unit)
            .turn(turn_state)
            .target(base.id, base.name, TargetType.BASE)
            .execution_turn(order.execution_turn)
            .description(templates.attack_launched(base.name))
        )
        kills = unit.total_kills

        if at_most(attack_roll, attack.success_threshold):
            hits += 1
            damage_roll = dice.roll(attack.damage_die_sides)
            was_destroyed = base.is_destroyed
            damaged_base, applied = apply_base_damage(base, damage_roll)
            bases_by_id[base.id] = damaged_base
            if damaged_base.is_destroyed and not was_destroyed:
                kills += 1

            builder.event_type(EventType.SUCCESS).rolls(
                attack_roll, attack.success_threshold, damage_roll, attack.damage_die_sides
            )
            defender = (
                builder.clone_for_opponent()
                .damage(applied)
                .description(templates.attack_hit(base.name, applied))
            )
            events.append(builder.build())
            events.append(defender.build())
        else:
            events.append(
                builder.event_type(EventType.FAILURE)
                .rolls(attack_roll, attack.success_threshold)
                .build()
            )

        updated.append(
            replace(
                unit,
                current_order=patrol,
                missions_completed=unit.missions_completed + 1,
                total_kills=kills,
            )
        )

    if attacks:
        logger.info("attack phase: %d strikes, %d hits", attacks, hits)
    return AttackPhaseResult(
        events=tuple(events),
        roster=tuple(updated),
        bases=tuple(bases_by_id.values()),
        attacks=attacks,
        hits=hits,
    )
