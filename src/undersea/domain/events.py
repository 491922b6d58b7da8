"""Fog-of-war event construction.

Every resolved action is logged from the perspective of one faction.  When
both sides learn about it, the action is built once and cloned for the
opponent, typically with a different event type, description or damage
visibility.  :class:`EventBuilder` accumulates the fields and refuses to
produce an incomplete record.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime

from undersea.domain.enums import DetectorType, EventType, Faction, TargetType
from undersea.domain.models import (
    CampaignEvent,
    DetectorInfo,
    EventActor,
    EventID,
    EventTarget,
    RollDetails,
    SubmarineUnit,
    TurnState,
)


class EventBuildError(RuntimeError):
    """Raised when an event is built without its required fields."""


@dataclass(slots=True)
class _Draft:
    actor: EventActor | None = None
    faction: Faction | None = None
    turn: int | None = None
    day_of_week: int | None = None
    current_date: date | None = None
    event_type: EventType | None = None
    target: EventTarget | None = None
    description: str | None = None
    rolls: RollDetails | None = None
    detector: DetectorInfo | None = None
    execution_turn: int | None = None
    audit_only: bool = False


class EventBuilder:
    """Fluent builder for :class:`CampaignEvent` records."""

    def __init__(self) -> None:
        self._draft = _Draft()

    # -- actor / perspective ----------------------------------------------

    def actor(
        self,
        actor_id: str,
        name: str,
        *,
        card_id: str = "",
        card_name: str = "",
        kind: str | None = None,
    ) -> EventBuilder:
        self._draft.actor = EventActor(
            id=actor_id, name=name, card_id=card_id, card_name=card_name, kind=kind
        )
        return self

    def from_unit(self, unit: SubmarineUnit) -> EventBuilder:
        """Use a roster unit as actor and its faction as perspective."""

        self.actor(
            unit.id,
            unit.name,
            card_id=unit.card_id,
            card_name=unit.card_name,
            kind=str(unit.kind),
        )
        self._draft.faction = unit.faction
        return self

    def faction(self, faction: Faction) -> EventBuilder:
        self._draft.faction = faction
        return self

    def turn(self, turn_state: TurnState) -> EventBuilder:
        self._draft.turn = turn_state.turn_number
        self._draft.day_of_week = turn_state.day_of_week
        self._draft.current_date = turn_state.current_date
        return self

    # -- payload ----------------------------------------------------------

    def event_type(self, event_type: EventType) -> EventBuilder:
        self._draft.event_type = event_type
        return self

    def target(self, target_id: str, name: str, target_type: TargetType) -> EventBuilder:
        self._draft.target = EventTarget(id=target_id, name=name, type=target_type)
        return self

    def damage(self, amount: int | None) -> EventBuilder:
        """Set (or hide, with ``None``) the damage shown on the target."""

        if self._draft.target is None:
            raise EventBuildError("damage requires a target")
        self._draft.target = replace(self._draft.target, damage_dealt=amount)
        return self

    def description(self, text: str) -> EventBuilder:
        self._draft.description = text
        return self

    def rolls(
        self,
        primary_roll: int,
        primary_threshold: int,
        secondary_roll: int | None = None,
        secondary_threshold: int | None = None,
    ) -> EventBuilder:
        self._draft.rolls = RollDetails(
            primary_roll=primary_roll,
            primary_threshold=primary_threshold,
            secondary_roll=secondary_roll,
            secondary_threshold=secondary_threshold,
        )
        return self

    def detector(
        self,
        detector_id: str,
        name: str,
        detector_type: DetectorType,
        *,
        area_id: str | None = None,
        area_name: str | None = None,
    ) -> EventBuilder:
        self._draft.detector = DetectorInfo(
            id=detector_id, name=name, type=detector_type, area_id=area_id, area_name=area_name
        )
        return self

    def execution_turn(self, turn: int | None) -> EventBuilder:
        self._draft.execution_turn = turn
        return self

    def audit_only(self, flag: bool = True) -> EventBuilder:
        self._draft.audit_only = flag
        return self

    # -- output -----------------------------------------------------------

    def _missing_fields(self) -> list[str]:
        draft = self._draft
        missing: list[str] = []
        if draft.actor is None or not draft.actor.id:
            missing.append("actor id")
        if draft.actor is None or not draft.actor.name:
            missing.append("actor name")
        if draft.faction is None:
            missing.append("faction")
        if draft.turn is None or draft.day_of_week is None:
            missing.append("turn")
        if draft.event_type is None:
            missing.append("event type")
        if not draft.description:
            missing.append("description")
        return missing

    def build(self) -> CampaignEvent:
        missing = self._missing_fields()
        if missing:
            raise EventBuildError(f"cannot build event, missing: {', '.join(missing)}")

        draft = self._draft

        rolls = draft.rolls
        if rolls is not None:
            rolls = replace(rolls, execution_turn=draft.execution_turn, detector=draft.detector)

        return CampaignEvent(
            id=EventID(f"event-{draft.actor.id}-{uuid.uuid4().hex}"),
            faction=draft.faction,
            actor=draft.actor,
            turn=draft.turn,
            day_of_week=draft.day_of_week,
            current_date=draft.current_date,
            event_type=draft.event_type,
            description=draft.description,
            timestamp=datetime.now(UTC),
            target=draft.target,
            rolls=rolls,
            audit_only=draft.audit_only,
        )

    def clone_for_opponent(self) -> EventBuilder:
        """Return an independent builder seen from the opposing faction."""

        if self._draft.faction is None:
            raise EventBuildError("cannot clone an event without a faction")
        clone = EventBuilder()
        clone._draft = replace(self._draft, faction=self._draft.faction.opponent)
        return clone


# --- Description templates ------------------------------------------------------


def _points(amount: int, noun: str) -> str:
    return f"{amount} {noun}" if amount == 1 else f"{amount} {noun}s"


def mine_hit(unit_name: str, unit_type: str, area_name: str) -> str:
    return f"{unit_type} {unit_name} lost to a naval mine in {area_name}"


def mine_passed(unit_name: str, unit_type: str, area_name: str) -> str:
    return f"{unit_type} {unit_name} crossed a minefield in {area_name} without contact"


def asset_deployed(asset_name: str, area_name: str) -> str:
    return f"{asset_name} deployed and operational in {area_name}"


def asw_eliminated(detector_type: DetectorType, detector_name: str) -> str:
    return f"ASW {detector_type} {detector_name} eliminated an enemy submarine"


def asw_destroyed(submarine_name: str, detector_type: DetectorType, detector_name: str) -> str:
    return f"Submarine {submarine_name} sunk by enemy ASW {detector_type} ({detector_name})"


def asw_evaded(area_name: str | None = None) -> str:
    if area_name:
        return f"Enemy submarine contact in {area_name} evaded pursuit"
    return "Enemy submarine contact evaded pursuit"


def asw_no_contact(area_name: str) -> str:
    return f"ASW sweep of {area_name} found no submarine contact"


def attack_launched(target_name: str) -> str:
    return f"Missile strike launched against {target_name}"


def attack_hit(target_name: str, damage: int) -> str:
    return f"{target_name} hit by a missile strike, {_points(damage, 'damage point')}"


def patrol_success(area_name: str) -> str:
    return f"Patrol in {area_name} disrupted enemy logistics"


def patrol_damage(damage: int) -> str:
    return f"Enemy submarine activity cost {_points(damage, 'command point')}"
