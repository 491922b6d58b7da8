"""Pluggable dice sources for the phase resolvers.

Resolvers never touch a global random generator; they receive a
:class:`DiceRoller` and ask it for one die at a time.  Production code uses a
:class:`SeededDiceRoller` (replayable from a seed string), tests and replays
use a :class:`FixedDiceRoller` with a scripted sequence of faces.
"""

from __future__ import annotations

import random
from collections import deque
from collections.abc import Iterable
from typing import Protocol

from undersea.utils.rng import seed_to_int


class DiceRoller(Protocol):
    """Source of uniformly distributed die faces."""

    def roll(self, sides: int) -> int:
        """Return a face in ``1..sides``."""
        ...


class DiceExhaustedError(RuntimeError):
    """Raised when a scripted dice source runs out of faces."""


class SeededDiceRoller:
    """Deterministic roller backed by ``random.Random`` seeded from a string."""

    def __init__(self, seed: str) -> None:
        self.seed = seed
        self._rng = random.Random(seed_to_int(seed))

    def roll(self, sides: int) -> int:
        if sides <= 0:
            raise ValueError(f"Number of sides must be positive, got {sides}")
        return self._rng.randint(1, sides)


class FixedDiceRoller:
    """Roller returning a scripted sequence of faces, in order."""

    def __init__(self, faces: Iterable[int]) -> None:
        self._faces: deque[int] = deque(faces)
        self.history: list[tuple[int, int]] = []

    @property
    def remaining(self) -> int:
        return len(self._faces)

    def roll(self, sides: int) -> int:
        if not self._faces:
            raise DiceExhaustedError(f"no scripted face left for a d{sides}")
        face = self._faces.popleft()
        if not 1 <= face <= sides:
            raise ValueError(f"scripted face {face} is not valid for a d{sides}")
        self.history.append((sides, face))
        return face


def at_most(roll: int, threshold: int) -> bool:
    """Success test used by every phase: roll at or under the threshold."""

    return roll <= threshold
