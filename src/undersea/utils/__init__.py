"""Utility functions for the submarine campaign engine."""

from undersea.utils.rng import generate_seed, seed_to_int

__all__ = [
    "generate_seed",
    "seed_to_int",
]
