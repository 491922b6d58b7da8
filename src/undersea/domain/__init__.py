"""Rules layer for the submarine campaign.

This package holds every combat-resolution rule as pure functions over
immutable dataclasses.  It exposes:

* Dataclasses describing every campaign entity (see :mod:`models`).
* Enumerations and strongly-typed identifiers used across the rules layer.
* Rule configuration objects (see :mod:`rules_config`).
* The turn clock, deployment scheduler and command point ledger.
* One module per combat phase, sequenced by :mod:`campaign`.

Nothing here performs I/O; callers persist the returned deltas through a
thin repository adapter.
"""

from . import (
    assets,
    asw,
    attack,
    campaign,
    command_points,
    deployments,
    dice,
    enums,
    events,
    mines,
    models,
    orders,
    patrol,
    rules_config,
    turn_clock,
)

__all__ = [
    "assets",
    "asw",
    "attack",
    "campaign",
    "command_points",
    "deployments",
    "dice",
    "enums",
    "events",
    "mines",
    "models",
    "orders",
    "patrol",
    "rules_config",
    "turn_clock",
]
