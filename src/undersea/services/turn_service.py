"""Turn advancement service for the submarine campaign.

This service drives one clock step end to end:
- Advancing the calendar (including the planning transitions)
- Pruning and activating pending deployments
- Locking in the turn's ASW ship snapshot
- Resolving the five combat phases
- Recalculating command points from bases at the end of each week

The domain functions it calls are pure; this module only threads their
results into a new :class:`CampaignSnapshot`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from undersea.domain import command_points, deployments, turn_clock
from undersea.domain.asw import snapshot_asw_ships
from undersea.domain.campaign import CampaignTurnResult, run_campaign_turn
from undersea.domain.dice import DiceRoller, SeededDiceRoller
from undersea.domain.models import CampaignSnapshot, PendingDeployments, TurnState
from undersea.domain.rules_config import DEFAULT_RULES, RulesConfig
from undersea.utils.rng import generate_seed

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TurnReport:
    """Outcome of :func:`advance_turn`."""

    snapshot: CampaignSnapshot
    advance: turn_clock.TurnAdvance
    arrivals: PendingDeployments = field(default_factory=PendingDeployments)
    combat: CampaignTurnResult | None = None

    @property
    def week_completed(self) -> bool:
        return self.advance.week_completed


def dice_for(snapshot: CampaignSnapshot, context: str = "combat") -> SeededDiceRoller:
    """Replayable dice for the day the snapshot's clock points at."""

    state = snapshot.turn_state
    seed = generate_seed(int(snapshot.id), state.turn_number, state.day_of_week, context)
    return SeededDiceRoller(seed)


def advance_turn(
    snapshot: CampaignSnapshot,
    *,
    dice: DiceRoller | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> TurnReport:
    """Advance the campaign by one day and resolve everything that day brings.

    Args:
        snapshot: Current campaign state
        dice: Dice source; defaults to one seeded from the new clock position
        rules: Rule constants

    Returns:
        TurnReport with the updated snapshot and what happened along the way
    """
    step = turn_clock.advance(snapshot.turn_state, rules=rules)
    state = step.state

    if step.pre_planning_transition:
        logger.info("campaign %s entering planning", snapshot.id)
        return TurnReport(snapshot=replace(snapshot, turn_state=state), advance=step)

    if step.planning_transition:
        advanced, arrived = _bring_in_arrivals(snapshot, state)
        points = command_points.calculate_from_bases(
            advanced.bases, advanced.influence, apply_influence=False, rules=rules
        )
        logger.info(
            "campaign %s leaving planning with %d/%d command points",
            snapshot.id,
            points.us,
            points.china,
        )
        return TurnReport(
            snapshot=replace(advanced, command_points=points), advance=step, arrivals=arrived
        )

    advanced, arrived = _bring_in_arrivals(snapshot, state)

    combat: CampaignTurnResult | None = None
    submarines = snapshot.submarine_campaign
    if submarines is not None:
        submarines = replace(
            submarines,
            asw_ships=snapshot_asw_ships(
                advanced.units, advanced.task_forces, advanced.areas, rules=rules
            ),
        )
        combat = run_campaign_turn(
            submarines,
            state,
            snapshot.command_points,
            advanced.areas,
            advanced.task_forces,
            advanced.units,
            snapshot.cards,
            snapshot.bases,
            dice=dice if dice is not None else dice_for(advanced),
            rules=rules,
        )
        advanced = replace(
            advanced,
            units=combat.units,
            bases=combat.bases,
            command_points=combat.points,
            submarine_campaign=replace(
                submarines,
                roster=combat.roster,
                events=submarines.events + combat.events,
                current_turn=state.turn_number,
            ),
        )

    if step.week_completed:
        points = command_points.calculate_from_bases(
            advanced.bases, advanced.influence, apply_influence=True, rules=rules
        )
        logger.info(
            "week %d complete, command points now us=%d china=%d",
            state.turn_number - 1,
            points.us,
            points.china,
        )
        advanced = replace(advanced, command_points=points)

    return TurnReport(snapshot=advanced, advance=step, arrivals=arrived, combat=combat)


def _bring_in_arrivals(
    snapshot: CampaignSnapshot, state: TurnState
) -> tuple[CampaignSnapshot, PendingDeployments]:
    """Prune the pending queues and make everything due at ``state`` operational."""

    pending = deployments.prune_invalid(
        snapshot.pending, snapshot.areas, snapshot.task_forces, snapshot.units
    )
    split = deployments.collect_arrivals(pending, state)
    forces = deployments.activate_arrivals(
        split.arrived, snapshot.areas, snapshot.task_forces, snapshot.units
    )
    if split.has_arrivals:
        logger.info(
            "arrivals: %d cards, %d task forces, %d units",
            len(split.arrived.cards),
            len(split.arrived.task_forces),
            len(split.arrived.units),
        )
    advanced = replace(
        snapshot,
        turn_state=state,
        pending=split.remaining,
        areas=forces.areas,
        task_forces=forces.task_forces,
        units=forces.units,
    )
    return advanced, split.arrived
