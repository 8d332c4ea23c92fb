"""
Clast Planets: galaxy/display.py
Display order: planet id -> orbit slot for the galaxy view.
==========================================================
Version:     0.1
Stack:       Python 3.12+
Status:      Stable.

Display bookkeeping only. Planets themselves never change when they are
re-ordered; the mapping is owned by the orchestrating layer.
"""

from __future__ import annotations
from typing import Dict, Iterable, List
from uuid import UUID

from planetgen.models import Planet


class DisplayOrder:
    def __init__(self) -> None:
        self._index: Dict[UUID, int] = {}

    def assign(self, planets: Iterable[Planet]) -> None:
        """Reset slots: innermost orbit goes to the earliest discovery."""
        ordered = sorted(planets, key=lambda p: p.distance_discovered_at)
        self._index = {planet.id: i for i, planet in enumerate(ordered)}

    def swap(self, first: UUID, second: UUID) -> None:
        """Exchange the slots of two displayed planets."""
        if first not in self._index:
            raise KeyError(first)
        if second not in self._index:
            raise KeyError(second)
        self._index[first], self._index[second] = self._index[second], self._index[first]

    def index_of(self, planet_id: UUID) -> int:
        return self._index[planet_id]

    def ordered_ids(self) -> List[UUID]:
        return sorted(self._index, key=self._index.__getitem__)

    def __contains__(self, planet_id: object) -> bool:
        return planet_id in self._index

    def __len__(self) -> int:
        return len(self._index)
