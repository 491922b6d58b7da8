"""Dataclasses describing every submarine campaign entity.

The rules layer operates on these immutable records only.  Resolvers never
mutate their inputs; they build updated copies with ``dataclasses.replace``
and hand them back to the caller, which owns persistence and broadcasting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import NewType

from .enums import (
    DetectorType,
    EventType,
    Faction,
    OrderResult,
    OrderStatus,
    OrderType,
    TargetType,
    UnitCategory,
    UnitKind,
    UnitStatus,
)

# --- Strongly typed identifiers -------------------------------------------------

CampaignID = NewType("CampaignID", int)
UnitID = NewType("UnitID", str)
SurfaceUnitID = NewType("SurfaceUnitID", str)
TaskForceID = NewType("TaskForceID", str)
AreaID = NewType("AreaID", str)
BaseID = NewType("BaseID", str)
CardID = NewType("CardID", str)
OrderID = NewType("OrderID", str)
EventID = NewType("EventID", str)


# --- Clock ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TurnState:
    """Campaign calendar position.

    ``turn_number`` counts completed weeks; turn 0 is the planning turn.
    """

    current_date: date
    day_of_week: int
    turn_number: int
    is_planning_phase: bool = False
    is_pre_planning_phase: bool = False


@dataclass(frozen=True, slots=True)
class Activation:
    """(turn, day) pair at which a pending deployment becomes operational."""

    turn: int
    day: int


# --- Submarine campaign roster --------------------------------------------------


@dataclass(frozen=True, slots=True)
class Order:
    """Order carried by a roster unit."""

    id: OrderID
    unit_id: UnitID
    order_type: OrderType
    target_id: str
    target_type: TargetType
    assigned_turn: int
    assigned_on: date
    status: OrderStatus = OrderStatus.PENDING
    execute_on: date | None = None
    execution_turn: int | None = None
    resolved_turn: int | None = None
    result: OrderResult | None = None


@dataclass(frozen=True, slots=True)
class SubmarineUnit:
    """Submarine, ASW card or deployable asset on the campaign roster."""

    id: UnitID
    name: str
    card_id: CardID
    card_name: str
    faction: Faction
    kind: UnitKind
    status: UnitStatus = UnitStatus.ACTIVE
    current_order: Order | None = None
    area_id: AreaID | None = None
    missions_completed: int = 0
    total_kills: int = 0

    @property
    def is_active(self) -> bool:
        return self.status == UnitStatus.ACTIVE


@dataclass(frozen=True, slots=True)
class AswShipSnapshot:
    """ASW-capable surface ship locked in at the start of a turn."""

    unit_id: SurfaceUnitID
    unit_name: str
    unit_type: str
    task_force_id: TaskForceID
    task_force_name: str
    area_id: AreaID
    area_name: str
    faction: Faction


# --- Events ---------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EventActor:
    """Who performed (or suffered) the action from the event's perspective."""

    id: str
    name: str
    card_id: str
    card_name: str
    kind: str | None = None


@dataclass(frozen=True, slots=True)
class EventTarget:
    """Target descriptor; ``damage_dealt`` is only shown to the damaged side."""

    id: str
    name: str
    type: TargetType
    damage_dealt: int | None = None


@dataclass(frozen=True, slots=True)
class DetectorInfo:
    """Metadata about the ASW element that made a detection attempt."""

    id: str
    name: str
    type: DetectorType
    area_id: str | None = None
    area_name: str | None = None


@dataclass(frozen=True, slots=True)
class RollDetails:
    """Dice audit trail attached to an event."""

    primary_roll: int
    primary_threshold: int
    secondary_roll: int | None = None
    secondary_threshold: int | None = None
    execution_turn: int | None = None
    detector: DetectorInfo | None = None


@dataclass(frozen=True, slots=True)
class CampaignEvent:
    """One faction's view of a single action."""

    id: EventID
    faction: Faction
    actor: EventActor
    turn: int
    day_of_week: int
    current_date: date | None
    event_type: EventType
    description: str
    timestamp: datetime
    target: EventTarget | None = None
    rolls: RollDetails | None = None
    audit_only: bool = False


# --- Map, bases and surface forces ----------------------------------------------


@dataclass(frozen=True, slots=True)
class Base:
    """Base (location) with a fixed number of damage slots."""

    id: BaseID
    name: str
    faction: Faction
    damage_points: int
    damage: tuple[bool, ...] = ()
    command_points: int = 0

    @property
    def damage_taken(self) -> int:
        return sum(1 for slot in self.damage if slot)

    @property
    def is_destroyed(self) -> bool:
        return self.damage_points > 0 and self.damage_taken >= self.damage_points


@dataclass(frozen=True, slots=True)
class OperationalArea:
    """Named operational zone; ``assigned_cards`` holds card instance ids."""

    id: AreaID
    name: str
    assigned_cards: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TaskForce:
    """Group of surface units, deployed to at most one zone."""

    id: TaskForceID
    name: str
    faction: Faction
    area_id: AreaID | None = None
    is_pending_deployment: bool = False


@dataclass(frozen=True, slots=True)
class SurfaceUnit:
    """Surface unit from the unit roster."""

    id: SurfaceUnitID
    name: str
    unit_type: str
    faction: Faction
    damage_points: int
    damage: tuple[bool, ...] = ()
    category: UnitCategory | None = None
    task_force_id: TaskForceID | None = None
    deployment_cost: int = 0
    deployment_time: int = 2
    is_pending_deployment: bool = False

    @property
    def is_destroyed(self) -> bool:
        hits = sum(1 for slot in self.damage if slot)
        if self.damage_points <= 0:
            return hits > 0
        return hits >= self.damage_points


@dataclass(frozen=True, slots=True)
class Card:
    """Card catalogue entry."""

    id: CardID
    name: str
    faction: Faction
    cost: int = 0
    deployment_time: int = 0
    submarine_type: UnitKind | None = None


# --- Command points -------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CommandPoints:
    """Per-faction command point pools."""

    us: int = 0
    china: int = 0

    def for_faction(self, faction: Faction) -> int:
        return self.us if faction == Faction.US else self.china


# --- Pending deployments --------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PendingCardDeployment:
    """Card instance in transit to a zone."""

    card_id: CardID
    card_instance_id: str
    area_id: AreaID
    faction: Faction
    deployed_at: Activation
    activates_at: Activation


@dataclass(frozen=True, slots=True)
class PendingTaskForceDeployment:
    """Task force in transit."""

    task_force_id: TaskForceID
    faction: Faction
    deployed_at: Activation
    activates_at: Activation


@dataclass(frozen=True, slots=True)
class PendingUnitDeployment:
    """Reinforcement unit in transit to a task force."""

    unit_id: SurfaceUnitID
    task_force_id: TaskForceID
    faction: Faction
    deployed_at: Activation
    activates_at: Activation


@dataclass(frozen=True, slots=True)
class PendingDeployments:
    """The three pending deployment queues."""

    cards: tuple[PendingCardDeployment, ...] = ()
    task_forces: tuple[PendingTaskForceDeployment, ...] = ()
    units: tuple[PendingUnitDeployment, ...] = ()

    def is_empty(self) -> bool:
        return not (self.cards or self.task_forces or self.units)


# --- Aggregates -----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SubmarineCampaign:
    """Roster, event log and turn-start ASW snapshot of the submarine campaign."""

    roster: tuple[SubmarineUnit, ...] = ()
    events: tuple[CampaignEvent, ...] = ()
    asw_ships: tuple[AswShipSnapshot, ...] = ()
    current_turn: int = 0


@dataclass(frozen=True, slots=True)
class CampaignSnapshot:
    """Everything needed to advance a campaign by one day."""

    id: CampaignID
    name: str
    turn_state: TurnState
    command_points: CommandPoints = field(default_factory=CommandPoints)
    influence: int = 0
    areas: tuple[OperationalArea, ...] = ()
    task_forces: tuple[TaskForce, ...] = ()
    units: tuple[SurfaceUnit, ...] = ()
    cards: tuple[Card, ...] = ()
    bases: tuple[Base, ...] = ()
    pending: PendingDeployments = field(default_factory=PendingDeployments)
    submarine_campaign: SubmarineCampaign | None = None
