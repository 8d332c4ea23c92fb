"""
Clast Planets: galaxy/collection.py
Galaxy Collection: discovered planets, favorites, galaxy display selection.
==========================================================================
Version:     0.2
Stack:       Python 3.12+
Status:      Orchestration layer over the generation core.

Mutations follow "change in memory, then save" explicitly; the store is
injected, there is no shared persistence singleton.

Design Variables
----------------
  GALAXY_MAX_PLANETS        10  - planets shown in the galaxy view at once
  GALAXY_AUTOSELECT_COUNT    6  - auto-selected on load when nothing is selected
"""

from __future__ import annotations
import logging
import math
from typing import Any, Dict, List, Optional, Set
from uuid import UUID

from galaxy.display import DisplayOrder
from galaxy.persistence import (
    ACTIVE_PLANET_ID_KEY,
    FAVORITED_PLANET_IDS_KEY,
    GALAXY_PLANET_IDS_KEY,
    TOTAL_DISTANCE_KEY,
    PlanetStore,
)
from planetgen.errors import InvalidDistanceError
from planetgen.models import Planet, Rarity, category_of
from planetgen.planet_factory import PlanetFactory
from planetgen.rarity import collectible_traits

logger = logging.getLogger(__name__)

GALAXY_MAX_PLANETS: int = 10
GALAXY_AUTOSELECT_COUNT: int = 6


class GalaxyCollection:
    """
    Central state for the discovery loop.

    Usage:
        collection = GalaxyCollection(store=JsonFileStore(Path("save/planets.json")))
        collection.travel(2500.0)
        planet = collection.discover()
    """

    def __init__(self, store: PlanetStore, factory: Optional[PlanetFactory] = None) -> None:
        self.store = store
        self.factory = factory if factory is not None else PlanetFactory()
        self.display_order = DisplayOrder()
        self.preview: Optional[Planet] = None

        self.total_distance: float = 0.0
        self.planets: List[Planet] = []
        self.active_planet_id: Optional[UUID] = None
        self.favorite_ids: Set[UUID] = set()
        self.galaxy_ids: Set[UUID] = set()

        self._load()
        self.generate_preview()

    # ----------------------------------------------------------
    # Persistence
    # ----------------------------------------------------------

    def _load(self) -> None:
        self.total_distance = self.store.load_scalar(TOTAL_DISTANCE_KEY)
        self.planets = self.store.load()
        self.active_planet_id = self.store.load_id(ACTIVE_PLANET_ID_KEY)
        self.favorite_ids = self.store.load_id_set(FAVORITED_PLANET_IDS_KEY)
        self.galaxy_ids = self.store.load_id_set(GALAXY_PLANET_IDS_KEY)

        if self.active_planet_id is None and self.planets:
            self.active_planet_id = self.planets[0].id
            self.store.save_id(ACTIVE_PLANET_ID_KEY, self.active_planet_id)

        if not self.galaxy_ids and self.planets:
            self.galaxy_ids = {p.id for p in self.sorted_planets[:GALAXY_AUTOSELECT_COUNT]}
            self.store.save_id_set(GALAXY_PLANET_IDS_KEY, self.galaxy_ids)

        self.display_order.assign(self.galaxy_planets)

    # ----------------------------------------------------------
    # Progress & discovery
    # ----------------------------------------------------------

    def travel(self, amount: float) -> float:
        """Adds distance travelled, rerolls the preview there and returns the new total."""
        if not math.isfinite(amount) or amount < 0:
            raise InvalidDistanceError(amount)
        self.total_distance += amount
        self.store.save_scalar(TOTAL_DISTANCE_KEY, self.total_distance)
        self.generate_preview()
        return self.total_distance

    def generate_preview(self) -> Planet:
        """Rolls a not-yet-discovered planet at the current distance."""
        self.preview = self.factory.generate(self.total_distance)
        return self.preview

    def discover(self) -> Optional[Planet]:
        """Adds the preview to the collection and rolls a new preview."""
        planet = self.preview
        if planet is None:
            return None

        if self.get(planet.id) is None:
            self.planets.append(planet)
            self.store.save(self.planets)
            logger.info("Discovered %s (%s) at distance %.1f", planet.name, planet.rarity.value, planet.distance_discovered_at)

            if self.active_planet_id is None:
                self.set_active(planet.id)

        self.generate_preview()
        return planet

    def get(self, planet_id: UUID) -> Optional[Planet]:
        for planet in self.planets:
            if planet.id == planet_id:
                return planet
        return None

    def _require(self, planet_id: UUID) -> Planet:
        planet = self.get(planet_id)
        if planet is None:
            raise KeyError(f"Unknown planet id: {planet_id}")
        return planet

    # ----------------------------------------------------------
    # Active planet
    # ----------------------------------------------------------

    @property
    def active_planet(self) -> Optional[Planet]:
        if self.active_planet_id is None:
            return None
        return self.get(self.active_planet_id)

    def set_active(self, planet_id: UUID) -> None:
        self._require(planet_id)
        self.active_planet_id = planet_id
        self.store.save_id(ACTIVE_PLANET_ID_KEY, planet_id)

    # ----------------------------------------------------------
    # Favorites
    # ----------------------------------------------------------

    def toggle_favorite(self, planet_id: UUID) -> bool:
        """Flips the favorite flag and returns the new state."""
        self._require(planet_id)
        if planet_id in self.favorite_ids:
            self.favorite_ids.remove(planet_id)
        else:
            self.favorite_ids.add(planet_id)
        self.store.save_id_set(FAVORITED_PLANET_IDS_KEY, self.favorite_ids)
        return planet_id in self.favorite_ids

    def is_favorite(self, planet_id: UUID) -> bool:
        return planet_id in self.favorite_ids

    # ----------------------------------------------------------
    # Galaxy selection & display order
    # ----------------------------------------------------------

    @property
    def galaxy_planets(self) -> List[Planet]:
        return [p for p in self.planets if p.id in self.galaxy_ids]

    def add_to_galaxy(self, planet_id: UUID) -> bool:
        """Returns False when the galaxy is already full."""
        self._require(planet_id)
        if planet_id in self.galaxy_ids:
            return True
        if len(self.galaxy_ids) >= GALAXY_MAX_PLANETS:
            return False
        self.galaxy_ids.add(planet_id)
        self._galaxy_changed()
        return True

    def remove_from_galaxy(self, planet_id: UUID) -> None:
        self.galaxy_ids.discard(planet_id)
        self._galaxy_changed()

    def toggle_galaxy(self, planet_id: UUID) -> bool:
        if planet_id in self.galaxy_ids:
            self.remove_from_galaxy(planet_id)
            return False
        return self.add_to_galaxy(planet_id)

    def is_in_galaxy(self, planet_id: UUID) -> bool:
        return planet_id in self.galaxy_ids

    def swap_display(self, first: UUID, second: UUID) -> None:
        self.display_order.swap(first, second)

    def _galaxy_changed(self) -> None:
        self.store.save_id_set(GALAXY_PLANET_IDS_KEY, self.galaxy_ids)
        self.display_order.assign(self.galaxy_planets)

    # ----------------------------------------------------------
    # Statistics
    # ----------------------------------------------------------

    @property
    def total_discovered(self) -> int:
        return len(self.planets)

    @property
    def sorted_planets(self) -> List[Planet]:
        return sorted(self.planets, key=lambda p: p.distance_discovered_at)

    def planets_by_rarity(self) -> Dict[Rarity, int]:
        counts = {rarity: 0 for rarity in Rarity}
        for planet in self.planets:
            counts[planet.rarity] += 1
        return counts

    def rarest_planet(self) -> Optional[Planet]:
        """Highest rolled rarity; the earliest discovery wins ties."""
        if not self.planets:
            return None
        return max(self.planets, key=lambda p: p.rarity.sort_order)

    # ----------------------------------------------------------
    # Trait dictionary
    # ----------------------------------------------------------

    def has_discovered_trait(self, value: Any) -> bool:
        category = category_of(value)
        return any(getattr(p, category) is value for p in self.planets)

    def collected_traits_count(self, rarity: Rarity) -> int:
        return sum(
            1 for _, value in collectible_traits(rarity, self.factory.content.catalog)
            if self.has_discovered_trait(value)
        )

    def total_traits_count(self, rarity: Rarity) -> int:
        return len(collectible_traits(rarity, self.factory.content.catalog))

    @property
    def total_collected_traits(self) -> int:
        return sum(self.collected_traits_count(r) for r in Rarity)

    @property
    def total_traits(self) -> int:
        return sum(self.total_traits_count(r) for r in Rarity)
