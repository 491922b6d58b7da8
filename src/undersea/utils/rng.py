"""Deterministic random number helpers for the submarine campaign.

Every roll in a campaign turn is derived from a seed string built from the
campaign state (campaign id, turn, day, context).  The same seed always
produces the same stream of rolls, which makes a turn replayable:

- Reproducibility: the same seed yields the same results
- Bug reproduction: a reported turn can be replayed exactly
- Audit trail: the seed travels with the result

Examples:
    >>> seed = generate_seed(campaign_id=1, turn=3, day=4, context="turn")
    >>> seed
    '1:3:4:turn'
    >>> seed_to_int(seed) == seed_to_int("1:3:4:turn")
    True
"""

import hashlib


def generate_seed(campaign_id: int, turn: int, day: int, context: str) -> str:
    """Generate a deterministic seed from the campaign clock.

    Format: "campaign_id:turn:day:context"

    Args:
        campaign_id: Campaign identifier
        turn: Turn (week) number
        day: Day of week (1-7)
        context: What the rolls are for (e.g., 'turn', 'asw_phase')

    Returns:
        Seed string in the format "campaign_id:turn:day:context"

    Examples:
        >>> generate_seed(1, 0, 1, "turn")
        '1:0:1:turn'

    Raises:
        ValueError: If campaign_id, turn or day is negative
    """
    if campaign_id < 0:
        raise ValueError(f"campaign_id must be non-negative, got {campaign_id}")
    if turn < 0:
        raise ValueError(f"turn must be non-negative, got {turn}")
    if day < 0:
        raise ValueError(f"day must be non-negative, got {day}")

    return f"{campaign_id}:{turn}:{day}:{context}"


def seed_to_int(seed: str) -> int:
    """Convert a seed string to a stable 64-bit integer for random.Random().

    Args:
        seed: Seed string

    Returns:
        64-bit integer derived from SHA-256(seed)
    """
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    # Use first 8 bytes for a 64-bit integer
    return int.from_bytes(digest[:8], "big", signed=False)

