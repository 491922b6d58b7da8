"""Declarative rule configuration for the submarine campaign."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .enums import Faction


@dataclass(frozen=True, slots=True)
class CalendarRules:
    """Campaign calendar constants."""

    start_date: date = date(2030, 6, 2)
    days_per_week: int = 7
    early_game_last_turn: int = 2
    mid_game_last_turn: int = 5


@dataclass(frozen=True, slots=True)
class MineRules:
    """Maritime mine detection."""

    die_sides: int = 20
    hit_roll: int = 1  # exact match, 5%
    mine_card_ids: frozenset[str] = frozenset({"us-020", "china-020"})


@dataclass(frozen=True, slots=True)
class AswRules:
    """Anti-submarine detection and elimination thresholds (roll at or under)."""

    die_sides: int = 20
    card_detection_threshold: int = 3
    ship_detection_threshold: int = 2
    submarine_detection_threshold: int = 1
    elimination_threshold: int = 10
    campaign_area_name: str = "Submarine Campaign"
    asw_ship_types: dict[Faction, frozenset[str]] = field(
        default_factory=lambda: {
            Faction.US: frozenset({"ARLEIGH BURKE CLASS DDG", "DDG(X)"}),
            Faction.CHINA: frozenset({"TYPE 052D", "TYPE 055 DDG", "TYPE 054 FFG"}),
        }
    )


@dataclass(frozen=True, slots=True)
class AttackRules:
    """Missile attacks against bases."""

    die_sides: int = 20
    success_threshold: int = 10
    damage_die_sides: int = 2
    travel_days: int = 2


@dataclass(frozen=True, slots=True)
class PatrolRules:
    """Patrols against enemy logistics."""

    die_sides: int = 20
    success_threshold: int = 2
    damage_die_sides: int = 20
    open_ocean_area_id: str = "south-china-sea"
    open_ocean_area_name: str = "South China Sea"
    unknown_area_name: str = "Unknown zone"


@dataclass(frozen=True, slots=True)
class CommandPointRules:
    """Command point economy."""

    influence_percent: int = 5  # per influence point
    patrol_order_cost: int = 3
    attack_order_cost: int = 5
    deploy_order_cost: int = 0


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    calendar: CalendarRules = CalendarRules()
    mines: MineRules = MineRules()
    asw: AswRules = AswRules()
    attack: AttackRules = AttackRules()
    patrol: PatrolRules = PatrolRules()
    command_points: CommandPointRules = CommandPointRules()


DEFAULT_RULES = RulesConfig()
