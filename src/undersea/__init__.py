"""Undersea: combat resolution for a submarine campaign wargame."""

__version__ = "0.1.0"
