"""Submarine campaign orchestration.

One call to :func:`run_campaign_turn` resolves the five phases in their fixed
order, Mine, AssetDeploy, ASW, Attack then Patrol, handing each phase the
roster produced by the previous one so a unit sunk early in the turn never
acts later in it.  The function is pure apart from logging; the caller
persists and broadcasts the returned delta and must invoke it at most once
per clock advance.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter

from undersea.domain.assets import resolve_asset_deployments
from undersea.domain.asw import resolve_asw
from undersea.domain.attack import resolve_attacks
from undersea.domain.dice import DiceRoller
from undersea.domain.mines import resolve_mines
from undersea.domain.models import (
    Base,
    CampaignEvent,
    Card,
    CommandPoints,
    OperationalArea,
    SubmarineCampaign,
    SubmarineUnit,
    SurfaceUnit,
    TaskForce,
    TurnState,
)
from undersea.domain.patrol import resolve_patrols
from undersea.domain.rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CampaignTurnResult:
    """Everything a turn of submarine warfare changed."""

    events: tuple[CampaignEvent, ...]
    roster: tuple[SubmarineUnit, ...]
    units: tuple[SurfaceUnit, ...]
    bases: tuple[Base, ...]
    areas: tuple[OperationalArea, ...]
    points: CommandPoints
    eliminated_ids: tuple[str, ...] = ()
    eliminated_unit_ids: tuple[str, ...] = ()
    deployed_assets: tuple[str, ...] = ()

    def events_for(self, faction: str, *, include_audit: bool = False) -> list[CampaignEvent]:
        """Events visible to one faction, hiding audit-only records by default."""

        return [
            event
            for event in self.events
            if event.faction == faction and (include_audit or not event.audit_only)
        ]

    def to_payload(self) -> dict[str, Any]:
        """JSON-compatible dump for the caller to persist or broadcast."""

        return _RESULT_ADAPTER.dump_python(self, mode="json")


_RESULT_ADAPTER = TypeAdapter(CampaignTurnResult)


def run_campaign_turn(
    campaign: SubmarineCampaign | None,
    turn_state: TurnState,
    points: CommandPoints,
    areas: Sequence[OperationalArea],
    task_forces: Sequence[TaskForce],
    units: Sequence[SurfaceUnit],
    cards: Sequence[Card],
    bases: Sequence[Base],
    *,
    dice: DiceRoller,
    rules: RulesConfig = DEFAULT_RULES,
) -> CampaignTurnResult:
    """Resolve one turn of submarine warfare."""

    if campaign is None:
        return CampaignTurnResult(
            events=(),
            roster=(),
            units=tuple(units),
            bases=tuple(bases),
            areas=tuple(areas),
            points=points,
        )

    events: list[CampaignEvent] = []

    mines = resolve_mines(
        campaign.roster, turn_state, areas, task_forces, units, cards, dice=dice, rules=rules
    )
    events.extend(mines.events)

    assets = resolve_asset_deployments(mines.roster, turn_state, areas)
    events.extend(assets.events)

    asw = resolve_asw(
        assets.roster,
        turn_state,
        areas,
        cards,
        campaign.asw_ships,
        dice=dice,
        destroyed_unit_ids=mines.eliminated_unit_ids,
        rules=rules,
    )
    events.extend(asw.events)

    attacks = resolve_attacks(asw.roster, turn_state, bases, dice=dice, rules=rules)
    events.extend(attacks.events)

    patrols = resolve_patrols(attacks.roster, turn_state, points, areas, dice=dice, rules=rules)
    events.extend(patrols.events)

    logger.info(
        "turn %d day %d resolved: %d events, %d submarines lost, %d ships lost",
        turn_state.turn_number,
        turn_state.day_of_week,
        len(events),
        len(mines.eliminated_ids) + len(asw.eliminated_ids),
        len(mines.eliminated_unit_ids),
    )
    return CampaignTurnResult(
        events=tuple(events),
        roster=patrols.roster,
        units=mines.units,
        bases=attacks.bases,
        areas=tuple(areas),
        points=patrols.points,
        eliminated_ids=mines.eliminated_ids + asw.eliminated_ids,
        eliminated_unit_ids=mines.eliminated_unit_ids,
        deployed_assets=assets.deployed_ids,
    )
