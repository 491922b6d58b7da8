"""Enumerations used across the submarine campaign rules layer."""

from __future__ import annotations

from enum import StrEnum


class Faction(StrEnum):
    """The two sides of the campaign."""

    US = "us"
    CHINA = "china"

    @property
    def opponent(self) -> Faction:
        return Faction.CHINA if self is Faction.US else Faction.US


class UnitKind(StrEnum):
    """Kinds of card that can sit on the submarine campaign roster."""

    SUBMARINE = "submarine"
    ASW = "asw"
    ASSET = "asset"


class UnitStatus(StrEnum):
    """Roster unit state; ``DESTROYED`` is terminal."""

    ACTIVE = "active"
    DESTROYED = "destroyed"


class OrderType(StrEnum):
    """Orders a roster unit may carry."""

    PATROL = "patrol"
    ATTACK = "attack"
    DEPLOY = "deploy"


class OrderStatus(StrEnum):
    """Order lifecycle states."""

    PENDING = "pending"
    COMPLETED = "completed"


class OrderResult(StrEnum):
    """Outcome recorded on an order after it resolves."""

    SUCCESS = "success"
    FAILURE = "failure"


class EventType(StrEnum):
    """Kinds of campaign event."""

    SUCCESS = "success"
    FAILURE = "failure"
    DETECTED = "detected"
    DESTROYED = "destroyed"
    DEPLOYED = "deployed"


class TargetType(StrEnum):
    """What an order or event is aimed at."""

    AREA = "area"
    BASE = "base"
    UNIT = "unit"


class DetectorType(StrEnum):
    """Classes of anti-submarine detector."""

    CARD = "card"
    SHIP = "ship"
    SUBMARINE = "submarine"


class UnitCategory(StrEnum):
    """Surface unit categories from the unit catalogue."""

    GROUND = "ground"
    NAVAL = "naval"
    ARTILLERY = "artillery"
    INTERCEPTION = "interception"
    SUPPLY = "supply"


class GamePhase(StrEnum):
    """Coarse campaign phase derived from the turn clock."""

    PRE_PLANNING = "pre-planning"
    PLANNING = "planning"
    EARLY_GAME = "early-game"
    MID_GAME = "mid-game"
    LATE_GAME = "late-game"
