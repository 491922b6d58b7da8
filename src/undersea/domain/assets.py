"""Asset deployment phase: pending deploy orders take effect."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from undersea.domain import events as templates
from undersea.domain.enums import EventType, OrderStatus, OrderType, TargetType, UnitKind
from undersea.domain.events import EventBuilder
from undersea.domain.models import CampaignEvent, OperationalArea, SubmarineUnit, TurnState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AssetPhaseResult:
    events: tuple[CampaignEvent, ...]
    roster: tuple[SubmarineUnit, ...]
    deployed_ids: tuple[str, ...] = ()


def _awaiting_deployment(unit: SubmarineUnit) -> bool:
    order = unit.current_order
    return (
        unit.is_active
        and unit.kind == UnitKind.ASSET
        and order is not None
        and order.order_type == OrderType.DEPLOY
        and order.status == OrderStatus.PENDING
    )


def resolve_asset_deployments(
    roster: Sequence[SubmarineUnit],
    turn_state: TurnState,
    areas: Sequence[OperationalArea],
) -> AssetPhaseResult:
    """Complete every pending deploy order whose zone still exists."""

    areas_by_id = {area.id: area for area in areas}
    updated: list[SubmarineUnit] = []
    events: list[CampaignEvent] = []
    deployed: list[str] = []

    for unit in roster:
        if not _awaiting_deployment(unit):
            updated.append(unit)
            continue
        order = unit.current_order
        area = areas_by_id.get(order.target_id)
        if area is None:
            logger.warning("asset %s ordered to unknown zone %s", unit.id, order.target_id)
            updated.append(unit)
            continue

        completed = replace(
            order, status=OrderStatus.COMPLETED, resolved_turn=turn_state.turn_number
        )
        updated.append(replace(unit, current_order=completed, area_id=area.id))
        deployed.append(unit.id)
        events.append(
            EventBuilder()
            .from_unit(unit)
            .turn(turn_state)
            .event_type(EventType.DEPLOYED)
            .target(area.id, area.name, TargetType.AREA)
            .description(templates.asset_deployed(unit.card_name or unit.name, area.name))
            .build()
        )

    if deployed:
        logger.info("asset phase: %d assets deployed", len(deployed))
    return AssetPhaseResult(events=tuple(events), roster=tuple(updated), deployed_ids=tuple(deployed))
