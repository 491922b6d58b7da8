"""Tests for the pluggable dice sources."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from undersea.domain.dice import (
    DiceExhaustedError,
    FixedDiceRoller,
    SeededDiceRoller,
    at_most,
)


def test_fixed_roller_returns_faces_in_order():
    dice = FixedDiceRoller([5, 1, 20])
    assert [dice.roll(20), dice.roll(2), dice.roll(20)] == [5, 1, 20]
    assert dice.remaining == 0
    assert dice.history == [(20, 5), (2, 1), (20, 20)]


def test_fixed_roller_exhaustion():
    dice = FixedDiceRoller([3])
    dice.roll(20)
    with pytest.raises(DiceExhaustedError):
        dice.roll(20)


def test_fixed_roller_rejects_impossible_face():
    dice = FixedDiceRoller([3])
    with pytest.raises(ValueError, match="not valid for a d2"):
        dice.roll(2)


def test_seeded_roller_is_replayable():
    first = SeededDiceRoller("1:1:1:combat")
    second = SeededDiceRoller("1:1:1:combat")
    assert [first.roll(20) for _ in range(10)] == [second.roll(20) for _ in range(10)]


def test_seeded_roller_rejects_bad_sides():
    with pytest.raises(ValueError):
        SeededDiceRoller("x").roll(0)


@given(seed=st.text(min_size=1), sides=st.integers(min_value=1, max_value=100))
def test_seeded_roller_within_range(seed, sides):
    roller = SeededDiceRoller(seed)
    assert all(1 <= roller.roll(sides) <= sides for _ in range(5))


@given(roll=st.integers(min_value=1, max_value=20), threshold=st.integers(min_value=1, max_value=20))
def test_at_most_is_total_over_thresholds(roll, threshold):
    assert at_most(roll, threshold) is (roll <= threshold)
