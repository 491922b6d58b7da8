"""Development entrypoint for the Undersea campaign engine."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace

from undersea.config import get_settings
from undersea.domain.dice import SeededDiceRoller
from undersea.domain.enums import OrderType
from undersea.domain.models import CampaignID, CampaignSnapshot
from undersea.domain.orders import confirm_order
from undersea.domain.turn_clock import format_turn_display, game_phase
from undersea.repository import JsonCampaignRepository
from undersea.seed_data import demo_campaign
from undersea.services import advance_turn


def _print_status(snapshot: CampaignSnapshot) -> None:
    points = snapshot.command_points
    print(f"{snapshot.name} [{game_phase(snapshot.turn_state)}]")
    print(f"  {format_turn_display(snapshot.turn_state)}")
    print(f"  command points: us={points.us} china={points.china}")
    if snapshot.submarine_campaign is not None:
        for unit in snapshot.submarine_campaign.roster:
            order = unit.current_order
            doing = f"{order.order_type} -> {order.target_id}" if order else "idle"
            print(f"  {unit.faction:<5} {unit.id:<12} {unit.status:<9} {doing}")


def _cmd_new(repo: JsonCampaignRepository, args: argparse.Namespace) -> None:
    snapshot = demo_campaign(args.campaign_id)
    path = repo.save(snapshot)
    print(f"created campaign {args.campaign_id} at {path}")


def _cmd_show(repo: JsonCampaignRepository, args: argparse.Namespace) -> None:
    _print_status(repo.load(CampaignID(args.campaign_id)))


def _cmd_order(repo: JsonCampaignRepository, args: argparse.Namespace) -> None:
    snapshot = repo.load(CampaignID(args.campaign_id))
    campaign = snapshot.submarine_campaign
    if campaign is None:
        raise SystemExit("campaign has no submarine roster")
    unit = next((u for u in campaign.roster if u.id == args.unit), None)
    if unit is None:
        raise SystemExit(f"unknown unit {args.unit}")

    confirmation = confirm_order(
        unit, OrderType(args.type), args.target, snapshot.turn_state, snapshot.command_points
    )
    roster = tuple(confirmation.unit if u.id == unit.id else u for u in campaign.roster)
    repo.save(
        replace(
            snapshot,
            command_points=confirmation.points,
            submarine_campaign=replace(campaign, roster=roster),
        )
    )
    print(f"{unit.id}: {args.type} order on {args.target} confirmed for {confirmation.cost} CP")


def _cmd_advance(repo: JsonCampaignRepository, args: argparse.Namespace) -> None:
    snapshot = repo.load(CampaignID(args.campaign_id))
    seed = args.seed or get_settings().default_seed
    dice = SeededDiceRoller(seed) if seed else None

    for _ in range(args.days):
        report = advance_turn(snapshot, dice=dice)
        snapshot = report.snapshot
        print(format_turn_display(snapshot.turn_state))
        if report.combat is not None:
            for event in report.combat.events:
                if event.audit_only and not args.audit:
                    continue
                print(f"  [{event.faction}] {event.event_type}: {event.description}")

    repo.save(snapshot)
    _print_status(snapshot)


def main() -> None:
    parser = argparse.ArgumentParser(description="Drive an Undersea campaign from the shell")
    parser.add_argument("--campaign-id", type=int, default=1, help="Campaign snapshot to use")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("new", help="Create the demonstration campaign")
    sub.add_parser("show", help="Print the campaign clock, points and roster")

    order = sub.add_parser("order", help="Confirm an order for a roster unit")
    order.add_argument("unit", help="Roster unit id")
    order.add_argument("type", choices=[t.value for t in OrderType], help="Order type")
    order.add_argument("target", help="Target zone or base id")

    advance = sub.add_parser("advance", help="Advance the campaign clock")
    advance.add_argument("--days", type=int, default=1, help="Number of days to advance")
    advance.add_argument("--seed", default=None, help="Dice seed (default: derived per day)")
    advance.add_argument(
        "--audit",
        action="store_true",
        help="Include audit-only events in the output",
    )
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    repo = JsonCampaignRepository(settings.data_dir)

    commands = {
        "new": _cmd_new,
        "show": _cmd_show,
        "order": _cmd_order,
        "advance": _cmd_advance,
    }
    commands[args.command](repo, args)


if __name__ == "__main__":
    main()
