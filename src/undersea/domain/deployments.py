"""Pending deployment queues: enqueueing, arrival and pruning.

Cards, task forces and reinforcement units bought during play are not
operational immediately.  They sit in :class:`PendingDeployments` with an
activation time from :func:`compute_activation` until a clock advance
reaches it.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace

from undersea.domain import command_points
from undersea.domain.enums import Faction
from undersea.domain.models import (
    Activation,
    AreaID,
    Card,
    CommandPoints,
    OperationalArea,
    PendingCardDeployment,
    PendingDeployments,
    PendingTaskForceDeployment,
    PendingUnitDeployment,
    SurfaceUnit,
    TaskForce,
    TurnState,
)
from undersea.domain.rules_config import DEFAULT_RULES, RulesConfig
from undersea.domain.turn_clock import compute_activation, current_activation, is_active

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Arrivals:
    """Partition of the pending queues at a given clock position."""

    arrived: PendingDeployments
    remaining: PendingDeployments

    @property
    def has_arrivals(self) -> bool:
        return not self.arrived.is_empty()


@dataclass(frozen=True, slots=True)
class ActivatedForces:
    """Map state after arrived deployments have been made operational."""

    areas: tuple[OperationalArea, ...]
    task_forces: tuple[TaskForce, ...]
    units: tuple[SurfaceUnit, ...]


@dataclass(frozen=True, slots=True)
class DeploymentReceipt:
    """Outcome of a successful spend-and-enqueue action."""

    points: CommandPoints
    pending: PendingDeployments
    activates_at: Activation
    task_forces: tuple[TaskForce, ...] = ()
    units: tuple[SurfaceUnit, ...] = ()
    card_instance_id: str | None = None
    cost: int = 0


def card_id_of_instance(instance_id: str) -> str:
    """Card instances are stored as ``<card id>_<suffix>``."""

    card_id, _, _ = instance_id.rpartition("_")
    return card_id or instance_id


def _partition(entries: Iterable, turn_state: TurnState, faction: Faction | None):
    arrived, remaining = [], []
    for entry in entries:
        if (faction is None or entry.faction == faction) and is_active(
            entry.activates_at, turn_state
        ):
            arrived.append(entry)
        else:
            remaining.append(entry)
    return tuple(arrived), tuple(remaining)


def collect_arrivals(
    pending: PendingDeployments,
    turn_state: TurnState,
    faction: Faction | None = None,
) -> Arrivals:
    """Split every queue into entries that are now active and the rest."""

    cards_in, cards_out = _partition(pending.cards, turn_state, faction)
    forces_in, forces_out = _partition(pending.task_forces, turn_state, faction)
    units_in, units_out = _partition(pending.units, turn_state, faction)
    return Arrivals(
        arrived=PendingDeployments(cards=cards_in, task_forces=forces_in, units=units_in),
        remaining=PendingDeployments(cards=cards_out, task_forces=forces_out, units=units_out),
    )


def _fully_destroyed_task_forces(
    task_forces: Iterable[TaskForce], units: Sequence[SurfaceUnit]
) -> set[str]:
    destroyed: set[str] = set()
    for task_force in task_forces:
        members = [unit for unit in units if unit.task_force_id == task_force.id]
        if members and all(unit.is_destroyed for unit in members):
            destroyed.add(task_force.id)
    return destroyed


def prune_invalid(
    pending: PendingDeployments,
    areas: Iterable[OperationalArea],
    task_forces: Iterable[TaskForce],
    units: Iterable[SurfaceUnit],
) -> PendingDeployments:
    """Drop entries whose zone, task force or unit no longer exists.

    Pruning ignores activation time entirely.
    """

    area_ids = {area.id for area in areas}
    task_forces = tuple(task_forces)
    units = tuple(units)
    task_force_ids = {tf.id for tf in task_forces}
    destroyed_forces = _fully_destroyed_task_forces(task_forces, units)
    live_unit_ids = {unit.id for unit in units if not unit.is_destroyed}

    cards = tuple(entry for entry in pending.cards if entry.area_id in area_ids)
    forces = tuple(
        entry
        for entry in pending.task_forces
        if entry.task_force_id in task_force_ids and entry.task_force_id not in destroyed_forces
    )
    reinforcements = tuple(
        entry
        for entry in pending.units
        if entry.unit_id in live_unit_ids and entry.task_force_id in task_force_ids
    )

    dropped = (
        len(pending.cards) - len(cards)
        + len(pending.task_forces) - len(forces)
        + len(pending.units) - len(reinforcements)
    )
    if dropped:
        logger.info("pruned %d pending deployments with dangling references", dropped)
    return PendingDeployments(cards=cards, task_forces=forces, units=reinforcements)


def activate_arrivals(
    arrived: PendingDeployments,
    areas: Iterable[OperationalArea],
    task_forces: Iterable[TaskForce],
    units: Iterable[SurfaceUnit],
) -> ActivatedForces:
    """Flip arrived deployments to operational.

    Arrived card instances join their zone's ``assigned_cards``; arrived task
    forces and reinforcement units lose their pending flag, and so do the
    members of an arrived task force.
    """

    cards_by_area: dict[str, list[str]] = {}
    for entry in arrived.cards:
        cards_by_area.setdefault(entry.area_id, []).append(entry.card_instance_id)

    updated_areas = tuple(
        replace(area, assigned_cards=area.assigned_cards + tuple(cards_by_area[area.id]))
        if area.id in cards_by_area
        else area
        for area in areas
    )
    missing_areas = set(cards_by_area) - {area.id for area in updated_areas}
    for area_id in sorted(missing_areas):
        logger.warning("card arrival for unknown zone %s ignored", area_id)

    arrived_forces = {entry.task_force_id for entry in arrived.task_forces}
    arrived_units = {entry.unit_id for entry in arrived.units}

    updated_forces = tuple(
        replace(tf, is_pending_deployment=False) if tf.id in arrived_forces else tf
        for tf in task_forces
    )
    updated_units = tuple(
        replace(unit, is_pending_deployment=False)
        if unit.id in arrived_units or unit.task_force_id in arrived_forces
        else unit
        for unit in units
    )
    return ActivatedForces(areas=updated_areas, task_forces=updated_forces, units=updated_units)


# --- Spend actions --------------------------------------------------------------


def deploy_task_force(
    points: CommandPoints,
    task_force: TaskForce,
    members: Sequence[SurfaceUnit],
    area_id: AreaID,
    turn_state: TurnState,
    pending: PendingDeployments,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> DeploymentReceipt:
    """Pay for a task force and queue it for deployment to ``area_id``.

    The task force arrives when its slowest member does.
    """

    cost = command_points.deployment_cost(members)
    remaining = command_points.spend(points, task_force.faction, cost)
    delay = max((unit.deployment_time for unit in members), default=0)
    activates_at = compute_activation(turn_state, delay, rules=rules)
    entry = PendingTaskForceDeployment(
        task_force_id=task_force.id,
        faction=task_force.faction,
        deployed_at=current_activation(turn_state),
        activates_at=activates_at,
    )
    return DeploymentReceipt(
        points=remaining,
        pending=replace(pending, task_forces=pending.task_forces + (entry,)),
        activates_at=activates_at,
        task_forces=(replace(task_force, area_id=area_id, is_pending_deployment=True),),
        units=tuple(
            replace(unit, task_force_id=task_force.id, is_pending_deployment=True)
            for unit in members
        ),
        cost=cost,
    )


def reinforce_task_force(
    points: CommandPoints,
    task_force: TaskForce,
    unit: SurfaceUnit,
    turn_state: TurnState,
    pending: PendingDeployments,
    *,
    rules: RulesConfig = DEFAULT_RULES,
) -> DeploymentReceipt:
    """Pay for one reinforcement unit and queue it for ``task_force``."""

    if unit.is_destroyed:
        raise ValueError(f"unit {unit.id} is destroyed and cannot reinforce")
    cost = command_points.deployment_cost((unit,))
    remaining = command_points.spend(points, task_force.faction, cost)
    activates_at = compute_activation(turn_state, unit.deployment_time, rules=rules)
    entry = PendingUnitDeployment(
        unit_id=unit.id,
        task_force_id=task_force.id,
        faction=task_force.faction,
        deployed_at=current_activation(turn_state),
        activates_at=activates_at,
    )
    return DeploymentReceipt(
        points=remaining,
        pending=replace(pending, units=pending.units + (entry,)),
        activates_at=activates_at,
        units=(replace(unit, task_force_id=task_force.id, is_pending_deployment=True),),
        cost=cost,
    )


def deploy_card(
    points: CommandPoints,
    card: Card,
    area_id: AreaID,
    turn_state: TurnState,
    pending: PendingDeployments,
    *,
    instance_suffix: str | None = None,
    rules: RulesConfig = DEFAULT_RULES,
) -> DeploymentReceipt:
    """Pay for a card and queue a new instance of it for ``area_id``."""

    remaining = command_points.spend(points, card.faction, card.cost)
    suffix = instance_suffix or uuid.uuid4().hex[:12]
    instance_id = f"{card.id}_{suffix}"
    activates_at = compute_activation(turn_state, card.deployment_time, rules=rules)
    entry = PendingCardDeployment(
        card_id=card.id,
        card_instance_id=instance_id,
        area_id=area_id,
        faction=card.faction,
        deployed_at=current_activation(turn_state),
        activates_at=activates_at,
    )
    return DeploymentReceipt(
        points=remaining,
        pending=replace(pending, cards=pending.cards + (entry,)),
        activates_at=activates_at,
        card_instance_id=instance_id,
        cost=card.cost,
    )
