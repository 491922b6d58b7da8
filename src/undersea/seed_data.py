"""Seed data for a small demonstration theatre.

This module builds a self-contained :class:`CampaignSnapshot` with two zones,
four bases, a handful of cards and an opening submarine roster, so the
development CLI and the integration tests have something to advance.
"""

from __future__ import annotations

from undersea.domain.enums import Faction, UnitCategory, UnitKind
from undersea.domain.models import (
    AreaID,
    Base,
    BaseID,
    CampaignID,
    CampaignSnapshot,
    Card,
    CardID,
    OperationalArea,
    SubmarineCampaign,
    SubmarineUnit,
    SurfaceUnit,
    SurfaceUnitID,
    TaskForce,
    TaskForceID,
    UnitID,
)
from undersea.domain.rules_config import DEFAULT_RULES, RulesConfig
from undersea.domain.turn_clock import initial_turn_state


def seed_areas() -> tuple[OperationalArea, ...]:
    return (
        OperationalArea(id=AreaID("south-china-sea"), name="South China Sea"),
        OperationalArea(id=AreaID("taiwan-strait"), name="Taiwan Strait"),
        OperationalArea(id=AreaID("philippine-sea"), name="Philippine Sea"),
    )


def seed_bases() -> tuple[Base, ...]:
    return (
        Base(BaseID("guam"), "Andersen AFB, Guam", Faction.US, damage_points=4, command_points=30),
        Base(BaseID("okinawa"), "Kadena AB, Okinawa", Faction.US, damage_points=3, command_points=20),
        Base(BaseID("sanya"), "Yulin Naval Base", Faction.CHINA, damage_points=4, command_points=30),
        Base(BaseID("ningbo"), "Ningbo Naval Base", Faction.CHINA, damage_points=3, command_points=20),
    )


def seed_cards() -> tuple[Card, ...]:
    return (
        Card(CardID("us-001"), "Virginia Class SSN", Faction.US, cost=12, deployment_time=2,
             submarine_type=UnitKind.SUBMARINE),
        Card(CardID("us-010"), "P-8A Poseidon", Faction.US, cost=8, deployment_time=1,
             submarine_type=UnitKind.ASW),
        Card(CardID("us-020"), "Maritime Mines", Faction.US, cost=6, deployment_time=1,
             submarine_type=UnitKind.ASSET),
        Card(CardID("china-001"), "Type 093 SSN", Faction.CHINA, cost=10, deployment_time=2,
             submarine_type=UnitKind.SUBMARINE),
        Card(CardID("china-010"), "Y-8Q ASW Aircraft", Faction.CHINA, cost=7, deployment_time=1,
             submarine_type=UnitKind.ASW),
        Card(CardID("china-020"), "Maritime Mines", Faction.CHINA, cost=6, deployment_time=1,
             submarine_type=UnitKind.ASSET),
    )


def seed_task_forces() -> tuple[TaskForce, ...]:
    return (
        TaskForce(TaskForceID("tf-us-1"), "Task Force 70", Faction.US, area_id=AreaID("philippine-sea")),
        TaskForce(TaskForceID("tf-cn-1"), "South Sea Fleet", Faction.CHINA, area_id=AreaID("taiwan-strait")),
    )


def seed_units() -> tuple[SurfaceUnit, ...]:
    return (
        SurfaceUnit(SurfaceUnitID("us-ddg-1"), "USS Halsey", "ARLEIGH BURKE CLASS DDG", Faction.US,
                    damage_points=2, category=UnitCategory.NAVAL, task_force_id=TaskForceID("tf-us-1"),
                    deployment_cost=10),
        SurfaceUnit(SurfaceUnitID("us-lcs-1"), "USS Tulsa", "LCS", Faction.US,
                    damage_points=1, category=UnitCategory.NAVAL, task_force_id=TaskForceID("tf-us-1"),
                    deployment_cost=5),
        SurfaceUnit(SurfaceUnitID("cn-ddg-1"), "Lhasa", "TYPE 055 DDG", Faction.CHINA,
                    damage_points=2, category=UnitCategory.NAVAL, task_force_id=TaskForceID("tf-cn-1"),
                    deployment_cost=10),
        SurfaceUnit(SurfaceUnitID("cn-ffg-1"), "Huangshan", "TYPE 054 FFG", Faction.CHINA,
                    damage_points=1, category=UnitCategory.NAVAL, task_force_id=TaskForceID("tf-cn-1"),
                    deployment_cost=6),
    )


def seed_roster() -> tuple[SubmarineUnit, ...]:
    return (
        SubmarineUnit(UnitID("sub-us-1"), "USS Minnesota", CardID("us-001"), "Virginia Class SSN",
                      Faction.US, UnitKind.SUBMARINE),
        SubmarineUnit(UnitID("asw-us-1"), "VP-5 Mad Foxes", CardID("us-010"), "P-8A Poseidon",
                      Faction.US, UnitKind.ASW),
        SubmarineUnit(UnitID("mine-us-1"), "Mine Group Alpha", CardID("us-020"), "Maritime Mines",
                      Faction.US, UnitKind.ASSET),
        SubmarineUnit(UnitID("sub-cn-1"), "Changzheng 11", CardID("china-001"), "Type 093 SSN",
                      Faction.CHINA, UnitKind.SUBMARINE),
        SubmarineUnit(UnitID("asw-cn-1"), "Y-8Q Flight 3", CardID("china-010"), "Y-8Q ASW Aircraft",
                      Faction.CHINA, UnitKind.ASW),
    )


def demo_campaign(
    campaign_id: int = 1,
    *,
    name: str = "Western Pacific 2030",
    influence: int = 0,
    rules: RulesConfig = DEFAULT_RULES,
) -> CampaignSnapshot:
    """Return a fresh demonstration campaign in its planning turn."""

    return CampaignSnapshot(
        id=CampaignID(campaign_id),
        name=name,
        turn_state=initial_turn_state(rules=rules),
        influence=influence,
        areas=seed_areas(),
        task_forces=seed_task_forces(),
        units=seed_units(),
        cards=seed_cards(),
        bases=seed_bases(),
        submarine_campaign=SubmarineCampaign(roster=seed_roster()),
    )
