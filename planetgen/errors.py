"""
Clast Planets: planetgen/errors.py
Error hierarchy for the generation core and its collaborators.
==============================================================
Version:     0.2 (Five-tier content tables)
Stack:       Python 3.12+
Status:      Stable.

Every error raised on purpose by this repository derives from PlanetGenError.
Content-table problems are configuration errors: they are raised while the
tables are loaded, never half-way through a generation.
"""

from __future__ import annotations
from typing import List, Optional


class PlanetGenError(Exception):
    """Base exception for planet generation errors."""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None):
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        formatted = f"{self.message}"
        if self.suggestions:
            formatted += "\n\nSuggestions:"
            for suggestion in self.suggestions:
                formatted += f"\n  - {suggestion}"
        return formatted


class TableConfigError(PlanetGenError):
    """Raised when a content table is malformed (detected at load time)."""

    def __init__(self, table: str, reason: str, tier: Optional[str] = None):
        self.table = table
        self.tier = tier
        self.reason = reason
        where = f"table '{table}'" if tier is None else f"table '{table}', tier '{tier}'"
        message = f"Malformed content in {where}: {reason}"
        suggestions = [
            "Check the TOML files under data/",
            "Chances inside one tier must sum to 1.0 and every band needs at least one value",
        ]
        super().__init__(message, suggestions)


class InvalidDistanceError(PlanetGenError, ValueError):
    """Raised when a caller passes a negative or non-finite distance."""

    def __init__(self, distance: float):
        self.distance = distance
        message = f"Distance must be a non-negative number, got {distance!r}"
        suggestions = ["Distances are never clamped: fix the progress value at its source"]
        super().__init__(message, suggestions)


class InvalidSeedError(PlanetGenError, ValueError):
    """Raised when a seed is not an integer or does not fit in a signed 64-bit integer."""

    def __init__(self, seed: int):
        self.seed = seed
        message = f"Seed must fit in a signed 64-bit integer, got {seed!r}"
        super().__init__(message)


class PersistenceError(PlanetGenError):
    """Raised when a stored document cannot be read back."""

    def __init__(self, path: str, reason: str):
        self.path = path
        message = f"Could not read planet store at {path}: {reason}"
        suggestions = [
            "Restore the file from a backup or delete it to start a fresh collection",
        ]
        super().__init__(message, suggestions)
