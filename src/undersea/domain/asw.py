"""Anti-submarine warfare phase.

Three classes of detector hunt enemy submarines that are at sea on attack or
patrol orders:

* ASW cards, either on the submarine roster or played into a zone;
* ASW-capable surface ships, locked in by :func:`snapshot_asw_ships` at the
  start of the turn;
* friendly submarines on a pending patrol, which only search their own zone.

Each detector makes at most one attempt per turn: pick a target, roll for
detection against its class threshold, then roll for elimination.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from undersea.domain import events as templates
from undersea.domain.deployments import card_id_of_instance
from undersea.domain.dice import DiceRoller, at_most
from undersea.domain.enums import (
    DetectorType,
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
    AswShipSnapshot,
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
class Detector:
    """One ASW element able to make a detection attempt this turn."""

    id: str
    name: str
    faction: Faction
    type: DetectorType
    area_id: str | None = None
    area_name: str | None = None
    card_id: str = ""
    card_name: str = ""
    # patrol submarines only search their own zone
    restricted_to_zone: bool = False


@dataclass(frozen=True, slots=True)
class AswPhaseResult:
    events: tuple[CampaignEvent, ...]
    roster: tuple[SubmarineUnit, ...]
    eliminated_ids: tuple[str, ...] = ()
    attempts: int = 0
    detections: int = 0


def snapshot_asw_ships(
    units: Iterable[SurfaceUnit],
    task_forces: Iterable[TaskForce],
    areas: Iterable[OperationalArea],
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> tuple[AswShipSnapshot, ...]:
    """Lock in the ASW-capable ships deployed at the start of a turn."""

    area_names = {area.id: area.name for area in areas}
    deployed_forces = {
        tf.id: tf
        for tf in task_forces
        if tf.area_id is not None and not tf.is_pending_deployment
    }
    snapshot: list[AswShipSnapshot] = []
    for unit in units:
        task_force = deployed_forces.get(unit.task_force_id) if unit.task_force_id else None
        if task_force is None or unit.category != UnitCategory.NAVAL:
            continue
        if unit.is_destroyed or unit.is_pending_deployment:
            continue
        if unit.unit_type not in rules.asw.asw_ship_types.get(task_force.faction, frozenset()):
            continue
        snapshot.append(
            AswShipSnapshot(
                unit_id=unit.id,
                unit_name=unit.name,
                unit_type=unit.unit_type,
                task_force_id=task_force.id,
                task_force_name=task_force.name,
                area_id=task_force.area_id,
                area_name=area_names.get(task_force.area_id, task_force.area_id),
                faction=task_force.faction,
            )
        )
    return tuple(snapshot)


def is_at_sea(unit: SubmarineUnit) -> bool:
    """Submarines on attack or patrol orders are exposed to ASW and mines."""

    order = unit.current_order
    return (
        unit.is_active
        and unit.kind == UnitKind.SUBMARINE
        and order is not None
        and order.order_type in (OrderType.ATTACK, OrderType.PATROL)
    )


def submarine_zone(unit: SubmarineUnit, *, rules: RulesConfig = DEFAULT_RULES) -> str:
    """Zone a submarine at sea operates in: its patrol zone, else open ocean."""

    order = unit.current_order
    if order is not None and order.order_type == OrderType.PATROL:
        return order.target_id
    return rules.patrol.open_ocean_area_id


def gather_detectors(
    roster: Sequence[SubmarineUnit],
    areas: Sequence[OperationalArea],
    cards: Sequence[Card],
    asw_ships: Sequence[AswShipSnapshot],
    destroyed_unit_ids: Iterable[str] = (),
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[Detector]:
    """Collect the detectors active this turn, deduplicated by id."""

    area_names = {area.id: area.name for area in areas}
    cards_by_id = {card.id: card for card in cards}
    destroyed_unit_ids = set(destroyed_unit_ids)
    found: dict[str, Detector] = {}

    def add(detector: Detector) -> None:
        found.setdefault(detector.id, detector)

    for unit in roster:
        if unit.kind == UnitKind.ASW and unit.is_active:
            add(
                Detector(
                    id=unit.id,
                    name=unit.name,
                    faction=unit.faction,
                    type=DetectorType.CARD,
                    area_id=unit.area_id,
                    area_name=area_names.get(unit.area_id, rules.asw.campaign_area_name),
                    card_id=unit.card_id,
                    card_name=unit.card_name,
                )
            )

    for area in areas:
        for instance_id in area.assigned_cards:
            card = cards_by_id.get(card_id_of_instance(instance_id))
            if card is None or card.submarine_type != UnitKind.ASW:
                continue
            add(
                Detector(
                    id=instance_id,
                    name=card.name,
                    faction=card.faction,
                    type=DetectorType.CARD,
                    area_id=area.id,
                    area_name=area.name,
                    card_id=card.id,
                    card_name=card.name,
                )
            )

    for ship in asw_ships:
        if ship.unit_id in destroyed_unit_ids:
            continue
        add(
            Detector(
                id=ship.unit_id,
                name=ship.unit_name,
                faction=ship.faction,
                type=DetectorType.SHIP,
                area_id=ship.area_id,
                area_name=ship.area_name,
                card_id=ship.task_force_id,
                card_name=ship.task_force_name,
            )
        )

    for unit in roster:
        order = unit.current_order
        if not is_at_sea(unit) or order.order_type != OrderType.PATROL:
            continue
        if order.status != OrderStatus.PENDING:
            continue
        zone = submarine_zone(unit, rules=rules)
        add(
            Detector(
                id=unit.id,
                name=unit.name,
                faction=unit.faction,
                type=DetectorType.SUBMARINE,
                area_id=zone,
                area_name=area_names.get(zone, zone),
                card_id=unit.card_id,
                card_name=unit.card_name,
                restricted_to_zone=True,
            )
        )

    return list(found.values())


def detection_threshold(detector: Detector, *, rules: RulesConfig = DEFAULT_RULES) -> int:
    if detector.type == DetectorType.CARD:
        return rules.asw.card_detection_threshold
    if detector.type == DetectorType.SHIP:
        return rules.asw.ship_detection_threshold
    return rules.asw.submarine_detection_threshold


def _candidates(
    detector: Detector,
    roster_by_id: dict[str, SubmarineUnit],
    eliminated: Sequence[str],
    rules: RulesConfig,
) -> list[SubmarineUnit]:
    candidates = []
    for unit in roster_by_id.values():
        if unit.faction == detector.faction or unit.id in eliminated or not is_at_sea(unit):
            continue
        if detector.restricted_to_zone and submarine_zone(unit, rules=rules) != detector.area_id:
            continue
        candidates.append(unit)
    return candidates


def _choose(candidates: list[SubmarineUnit], dice: DiceRoller) -> SubmarineUnit:
    if len(candidates) == 1:
        return candidates[0]
    return candidates[dice.roll(len(candidates)) - 1]


def _attempt_builder(
    detector: Detector, target: SubmarineUnit, turn_state: TurnState
) -> EventBuilder:
    return (
        EventBuilder()
        .actor(
            detector.id,
            detector.name,
            card_id=detector.card_id,
            card_name=detector.card_name,
            kind=str(detector.type),
        )
        .faction(detector.faction)
        .turn(turn_state)
        .target(target.id, "Enemy submarine", TargetType.UNIT)
        .detector(
            detector.id,
            detector.name,
            detector.type,
            area_id=detector.area_id,
            area_name=detector.area_name,
        )
    )


def resolve_asw(
    roster: Sequence[SubmarineUnit],
    turn_state: TurnState,
    areas: Sequence[OperationalArea],
    cards: Sequence[Card],
    asw_ships: Sequence[AswShipSnapshot],
    *,
    dice: DiceRoller,
    destroyed_unit_ids: Iterable[str] = (),
    rules: RulesConfig = DEFAULT_RULES,
) -> AswPhaseResult:
    """Run every detector once against the enemy submarines at sea.

    ``destroyed_unit_ids`` lists surface ships sunk earlier this turn; their
    snapshot entries no longer search.
    """

    roster = tuple(roster)
    if not any(is_at_sea(unit) for unit in roster):
        return AswPhaseResult(events=(), roster=roster)

    detectors = gather_detectors(
        roster, areas, cards, asw_ships, destroyed_unit_ids, rules=rules
    )
    roster_by_id = {unit.id: unit for unit in roster}
    events: list[CampaignEvent] = []
    eliminated: list[str] = []
    attempts = 0
    detections = 0
    asw = rules.asw

    for detector in detectors:
        if detector.id in eliminated:
            continue
        candidates = _candidates(detector, roster_by_id, eliminated, rules)
        if not candidates:
            continue

        target = _choose(candidates, dice)
        threshold = detection_threshold(detector, rules=rules)
        attempts += 1
        detection_roll = dice.roll(asw.die_sides)
        builder = _attempt_builder(detector, target, turn_state)

        if not at_most(detection_roll, threshold):
            events.append(
                builder.event_type(EventType.FAILURE)
                .description(templates.asw_no_contact(detector.area_name or asw.campaign_area_name))
                .rolls(detection_roll, threshold)
                .audit_only()
                .build()
            )
            continue

        detections += 1
        elimination_roll = dice.roll(asw.die_sides)
        builder.rolls(detection_roll, threshold, elimination_roll, asw.elimination_threshold)

        if not at_most(elimination_roll, asw.elimination_threshold):
            events.append(
                builder.event_type(EventType.DETECTED)
                .description(templates.asw_evaded(detector.area_name))
                .build()
            )
            continue

        eliminated.append(target.id)
        roster_by_id[target.id] = replace(target, status=UnitStatus.DESTROYED)
        hunter = roster_by_id.get(detector.id)
        if hunter is not None:
            roster_by_id[detector.id] = replace(
                hunter,
                total_kills=hunter.total_kills + 1,
                missions_completed=hunter.missions_completed + 1,
            )

        builder.event_type(EventType.SUCCESS).description(
            templates.asw_eliminated(detector.type, detector.name)
        )
        defender = (
            builder.clone_for_opponent()
            .from_unit(target)
            .event_type(EventType.DESTROYED)
            .target(detector.id, detector.name, TargetType.UNIT)
            .description(templates.asw_destroyed(target.name, detector.type, detector.name))
        )
        events.append(builder.build())
        events.append(defender.build())

    logger.info(
        "asw phase: %d eliminated from %d attempts (%d detections)",
        len(eliminated),
        attempts,
        detections,
    )
    return AswPhaseResult(
        events=tuple(events),
        roster=tuple(roster_by_id.values()),
        eliminated_ids=tuple(eliminated),
        attempts=attempts,
        detections=detections,
    )
