"""Tests for the fog-of-war event builder."""

from __future__ import annotations

from datetime import date

import pytest

from undersea.domain import events
from undersea.domain.enums import DetectorType, EventType, Faction, TargetType, UnitKind
from undersea.domain.events import EventBuilder, EventBuildError
from undersea.domain.models import CardID, SubmarineUnit, TurnState, UnitID

TURN = TurnState(current_date=date(2030, 6, 10), day_of_week=2, turn_number=2)


def _sub() -> SubmarineUnit:
    return SubmarineUnit(
        id=UnitID("sub-1"),
        name="USS Minnesota",
        card_id=CardID("us-001"),
        card_name="Virginia Class SSN",
        faction=Faction.US,
        kind=UnitKind.SUBMARINE,
    )


def _complete() -> EventBuilder:
    return (
        EventBuilder()
        .from_unit(_sub())
        .turn(TURN)
        .event_type(EventType.SUCCESS)
        .target("guam", "Andersen AFB", TargetType.BASE)
        .description("Missile strike launched")
    )


def test_build_populates_event():
    event = _complete().rolls(5, 10, 1, 2).execution_turn(2).build()

    assert event.faction == Faction.US
    assert event.actor.id == "sub-1"
    assert event.actor.card_name == "Virginia Class SSN"
    assert event.turn == 2
    assert event.day_of_week == 2
    assert event.current_date == date(2030, 6, 10)
    assert event.event_type == EventType.SUCCESS
    assert event.target.type == TargetType.BASE
    assert event.rolls.primary_roll == 5
    assert event.rolls.secondary_threshold == 2
    assert event.rolls.execution_turn == 2
    assert not event.audit_only
    assert event.id.startswith("event-sub-1-")


def test_event_ids_are_unique():
    builder = _complete()
    assert builder.build().id != builder.build().id


@pytest.mark.parametrize(
    ("builder", "missing"),
    [
        (EventBuilder().faction(Faction.US).turn(TURN).event_type(EventType.SUCCESS).description("x"),
         "actor id"),
        (EventBuilder().actor("a", "A").turn(TURN).event_type(EventType.SUCCESS).description("x"),
         "faction"),
        (EventBuilder().actor("a", "A").faction(Faction.US).event_type(EventType.SUCCESS).description("x"),
         "turn"),
        (EventBuilder().actor("a", "A").faction(Faction.US).turn(TURN).description("x"),
         "event type"),
        (EventBuilder().actor("a", "A").faction(Faction.US).turn(TURN).event_type(EventType.FAILURE),
         "description"),
        (EventBuilder().actor("a", "").faction(Faction.US).turn(TURN).event_type(EventType.FAILURE).description("x"),
         "actor name"),
    ],
)
def test_build_refuses_incomplete_events(builder, missing):
    with pytest.raises(EventBuildError, match=missing):
        builder.build()


def test_damage_requires_target():
    with pytest.raises(EventBuildError, match="target"):
        EventBuilder().damage(3)


def test_clone_for_opponent_is_independent():
    attacker = _complete()
    defender = attacker.clone_for_opponent().damage(2).description("Base hit")

    attacker_event = attacker.build()
    defender_event = defender.build()

    assert attacker_event.faction == Faction.US
    assert defender_event.faction == Faction.CHINA
    assert attacker_event.target.damage_dealt is None
    assert defender_event.target.damage_dealt == 2
    assert attacker_event.description == "Missile strike launched"
    assert defender_event.description == "Base hit"


def test_clone_requires_faction():
    with pytest.raises(EventBuildError):
        EventBuilder().actor("a", "A").clone_for_opponent()


def test_detector_and_audit_flag_travel_with_rolls():
    event = (
        EventBuilder()
        .actor("asw-1", "VP-5")
        .faction(Faction.US)
        .turn(TURN)
        .event_type(EventType.FAILURE)
        .description("no contact")
        .rolls(14, 3)
        .detector("asw-1", "VP-5", DetectorType.CARD, area_name="Submarine Campaign")
        .audit_only()
        .build()
    )
    assert event.audit_only
    assert event.rolls.detector.type == DetectorType.CARD
    assert event.rolls.detector.area_name == "Submarine Campaign"


def test_templates_pluralise():
    assert events.attack_hit("Guam", 1).endswith("1 damage point")
    assert events.attack_hit("Guam", 2).endswith("2 damage points")
    assert events.patrol_damage(1) == "Enemy submarine activity cost 1 command point"
    assert "Taiwan Strait" in events.asw_evaded("Taiwan Strait")
    assert events.asw_evaded() == "Enemy submarine contact evaded pursuit"
