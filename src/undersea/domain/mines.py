"""Mine phase: naval minefields against enemy submarines and surface ships."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from undersea.domain import events as templates
from undersea.domain.deployments import card_id_of_instance
from undersea.domain.dice import DiceRoller
from undersea.domain.enums import (
    EventType,
    Faction,
    OrderStatus,
    OrderType,
    TargetType,
    UnitCategory,
    UnitKind,
    UnitStatus,
)
from undersea.domain.events import EventBuilder
from undersea.domain.models import (
    CampaignEvent,
    Card,
    OperationalArea,
    SubmarineUnit,
    SurfaceUnit,
    TaskForce,
    TurnState,
)
from undersea.domain.rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Minefield:
    """One mine laid in a zone."""

    id: str
    name: str
    faction: Faction
    area_id: str
    area_name: str


@dataclass(frozen=True, slots=True)
class _Exposure:
    id: str
    name: str
    unit_type: str
    faction: Faction
    is_submarine: bool


@dataclass(frozen=True, slots=True)
class MinePhaseResult:
    events: tuple[CampaignEvent, ...]
    roster: tuple[SubmarineUnit, ...]
    units: tuple[SurfaceUnit, ...]
    eliminated_ids: tuple[str, ...] = ()
    eliminated_unit_ids: tuple[str, ...] = ()
    attempts: int = 0


def find_minefields(
    areas: Iterable[OperationalArea],
    roster: Sequence[SubmarineUnit],
    cards: Sequence[Card],
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[Minefield]:
    """Collect every mine in play, zone by zone.

    A mine is either a deployed asset whose deploy order has completed on the
    zone, or a mine card instance assigned directly to the zone.
    """

    cards_by_id = {card.id: card for card in cards}
    minefields: list[Minefield] = []
    for area in areas:
        laid_here: list[Minefield] = []
        for unit in roster:
            order = unit.current_order
            if (
                unit.kind == UnitKind.ASSET
                and unit.is_active
                and order is not None
                and order.order_type == OrderType.DEPLOY
                and order.status == OrderStatus.COMPLETED
                and order.target_id == area.id
            ):
                laid_here.append(Minefield(unit.id, unit.name, unit.faction, area.id, area.name))

        known = {mine.id for mine in laid_here}
        for instance_id in area.assigned_cards:
            card_id = card_id_of_instance(instance_id)
            if card_id not in rules.mines.mine_card_ids or instance_id in known:
                continue
            card = cards_by_id.get(card_id)
            if card is None:
                logger.warning("mine card %s in zone %s is not in the catalogue", card_id, area.id)
                continue
            laid_here.append(Minefield(instance_id, card.name, card.faction, area.id, area.name))
            known.add(instance_id)
        minefields.extend(laid_here)
    return minefields


def _is_exposed_submarine(unit: SubmarineUnit) -> bool:
    order = unit.current_order
    return (
        unit.is_active
        and unit.kind == UnitKind.SUBMARINE
        and order is not None
        and order.order_type in (OrderType.ATTACK, OrderType.PATROL)
    )


def _exposures(
    mine: Minefield,
    roster: Sequence[SubmarineUnit],
    task_forces: Sequence[TaskForce],
    units: Sequence[SurfaceUnit],
) -> list[_Exposure]:
    exposed = [
        _Exposure(sub.id, sub.name, "Submarine", sub.faction, True)
        for sub in roster
        if sub.faction != mine.faction and _is_exposed_submarine(sub)
    ]

    forces_here = {
        tf.id: tf
        for tf in task_forces
        if tf.area_id == mine.area_id and tf.faction != mine.faction and not tf.is_pending_deployment
    }
    for unit in units:
        task_force = forces_here.get(unit.task_force_id) if unit.task_force_id else None
        if task_force is None:
            continue
        if unit.category != UnitCategory.NAVAL or unit.is_destroyed or unit.is_pending_deployment:
            continue
        exposed.append(
            _Exposure(unit.id, unit.name, unit.unit_type, task_force.faction, False)
        )
    return exposed


def resolve_mines(
    roster: Sequence[SubmarineUnit],
    turn_state: TurnState,
    areas: Sequence[OperationalArea],
    task_forces: Sequence[TaskForce],
    units: Sequence[SurfaceUnit],
    cards: Sequence[Card],
    *,
    dice: DiceRoller,
    rules: RulesConfig = DEFAULT_RULES,
) -> MinePhaseResult:
    """Roll every mine against every exposed enemy unit.

    Each (mine, unit) pair rolls once; a hit destroys the unit outright and
    no later mine rolls against it.  Only the defender learns of either
    outcome.
    """

    roster = tuple(roster)
    units = tuple(units)
    minefields = find_minefields(areas, roster, cards, rules=rules)
    if not minefields:
        return MinePhaseResult(events=(), roster=roster, units=units)

    roster_by_id = {unit.id: unit for unit in roster}
    units_by_id = {unit.id: unit for unit in units}
    events: list[CampaignEvent] = []
    sunk: list[str] = []
    wrecked: list[str] = []
    attempts = 0
    mine_rules = rules.mines

    for mine in minefields:
        exposed = _exposures(
            mine, tuple(roster_by_id.values()), task_forces, tuple(units_by_id.values())
        )
        for target in exposed:
            if target.id in sunk or target.id in wrecked:
                continue
            attempts += 1
            roll = dice.roll(mine_rules.die_sides)
            hit = roll == mine_rules.hit_roll

            builder = (
                EventBuilder()
                .actor(
                    target.id,
                    target.name,
                    card_id=target.id,
                    card_name=target.name,
                    kind=target.unit_type,
                )
                .faction(target.faction)
                .turn(turn_state)
                .target(mine.id, mine.name, TargetType.UNIT)
                .rolls(roll, mine_rules.hit_roll)
            )
            if hit:
                if target.is_submarine:
                    sunk.append(target.id)
                    roster_by_id[target.id] = replace(
                        roster_by_id[target.id], status=UnitStatus.DESTROYED
                    )
                else:
                    wrecked.append(target.id)
                    ship = units_by_id[target.id]
                    slots = ship.damage_points if ship.damage_points > 0 else 1
                    units_by_id[target.id] = replace(ship, damage=(True,) * slots)
                builder.event_type(EventType.DESTROYED).description(
                    templates.mine_hit(target.name, target.unit_type, mine.area_name)
                )
            else:
                builder.event_type(EventType.DETECTED).description(
                    templates.mine_passed(target.name, target.unit_type, mine.area_name)
                )
            events.append(builder.build())

    if sunk or wrecked:
        logger.info(
            "mine phase: %d hits from %d rolls against %d minefields",
            len(sunk) + len(wrecked),
            attempts,
            len(minefields),
        )
    return MinePhaseResult(
        events=tuple(events),
        roster=tuple(roster_by_id.values()),
        units=tuple(units_by_id.values()),
        eliminated_ids=tuple(sunk),
        eliminated_unit_ids=tuple(wrecked),
        attempts=attempts,
    )
