"""Service layer for the submarine campaign.

Services wire the pure rules in :mod:`undersea.domain` into whole-campaign
operations on a :class:`~undersea.domain.models.CampaignSnapshot`:

    - advance_turn: one clock step, arrivals, combat phases, weekly income

Usage:
    from undersea.services import advance_turn
    report = advance_turn(snapshot)
    repository.save(report.snapshot)
"""

from undersea.services.turn_service import TurnReport, advance_turn, dice_for

__all__ = [
    "TurnReport",
    "advance_turn",
    "dice_for",
]
