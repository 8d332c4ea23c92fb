"""
Clast Planets: planetgen/planet_factory.py
Planet Factory: turns (distance, seed) into a fully specified Planet.
=====================================================================
Version:     0.2 (Five-tier content tables)
Stack:       Python 3.12+ | Pydantic v2
Status:      Deterministic generation core.

Draw order (fixed; changing it changes every planet for a given seed):
   1. rarity            (distance-conditioned curve)
   2. base type
   3. surface type
   4. ring type
   5. moon count
   6. atmosphere type
   7. size class
   8. size              (uniform inside the size class range)
   9. ozone density
  10. ring tilt
  11. ring width
  12. primary, secondary, accent colors (R, G, B each)
  13. name              (prefix, suffix, number)

Categorical traits take one roll against the rarity's weighted table, plus
one uniform choice when the selected band lists several values.
"""

from __future__ import annotations
import logging
import math
import secrets
import uuid
from typing import Any, List, Optional, Sequence, Tuple

from planetgen.data_loader import (
    GenerationContent,
    NamesDef,
    RarityCurveDef,
    TraitTablesDef,
    WeightedBand,
    get_content,
)
from planetgen.errors import InvalidDistanceError, InvalidSeedError
from planetgen.models import SEED_MAX, SEED_MIN, Planet, Rarity
from planetgen.rng import SeededRandom

logger = logging.getLogger(__name__)

COLOR_CHANNEL_MAX: int = 255

def draw_seed() -> int:
    """Fresh seed from system entropy. The only non-deterministic step."""
    return secrets.randbelow(SEED_MAX + 1)

def normalize_distance(distance: float, max_distance: float) -> float:
    """Progress factor in [0, 1]; distances past the maximum clamp to 1.0."""
    return min(distance / max_distance, 1.0)

def _pick(rng: SeededRandom, values: Sequence[Any]) -> Any:
    if len(values) == 1:
        return values[0]
    return rng.choose(values)

def roll_weighted(rng: SeededRandom, bands: List[WeightedBand[Any]]) -> Any:
    """Walk the cumulative table top-down; first threshold above the roll wins."""
    roll = rng.next_double()
    cumulative = 0.0
    for band in bands:
        cumulative += band.chance
        if roll < cumulative:
            return _pick(rng, band.values)
    # Float sums can land a hair under 1.0
    return _pick(rng, bands[-1].values)

def roll_rarity(distance: float, rng: SeededRandom, curve: RarityCurveDef) -> Rarity:
    """
    Determines planet rarity from distance travelled.
    Near 0 -> mostly common. Past the last threshold -> legendary/mythic odds.
    """
    band = curve.band_for(normalize_distance(distance, curve.max_distance))
    return roll_weighted(rng, band.weights)

def roll_ozone_density(rarity: Rarity, rng: SeededRandom, tables: TraitTablesDef) -> float:
    if tables.ozone.free_range:
        return rng.next_double()
    lo, hi = tables.ozone.ranges[rarity]
    return rng.next_double(lo, hi)

def roll_color_hex(rng: SeededRandom) -> str:
    r = rng.next_int(0, COLOR_CHANNEL_MAX)
    g = rng.next_int(0, COLOR_CHANNEL_MAX)
    b = rng.next_int(0, COLOR_CHANNEL_MAX)
    return f"{r:02X}{g:02X}{b:02X}"

def roll_name(rng: SeededRandom, names: NamesDef) -> str:
    prefix = rng.choose(names.prefixes)
    suffix = rng.choose(names.suffixes)
    number = rng.next_int(*names.number_range)
    return f"{prefix}-{suffix}-{number}"

def _check_inputs(distance: float, seed: Optional[int]) -> None:
    if not isinstance(distance, (int, float)) or not math.isfinite(distance) or distance < 0:
        raise InvalidDistanceError(distance)
    if seed is None:
        return
    # bool is an int subclass but never a meaningful seed
    if not isinstance(seed, int) or isinstance(seed, bool) or not SEED_MIN <= seed <= SEED_MAX:
        raise InvalidSeedError(seed)

class PlanetFactory:
    """
    Generates planets from one validated set of content tables.

    Content is loaded (and validated) when the factory is built, so a broken
    table fails at startup instead of on the first discovery.
    """

    def __init__(self, content: Optional[GenerationContent] = None):
        self.content = content if content is not None else get_content()

    def generate(self, distance: float, seed: Optional[int] = None) -> Planet:
        _check_inputs(distance, seed)
        actual_seed = seed if seed is not None else draw_seed()
        rng = SeededRandom(actual_seed)

        tables = self.content.tables
        catalog = self.content.catalog

        # 1. Rarity
        rarity = roll_rarity(distance, rng, self.content.curve)

        # 2. Components, conditioned on rarity
        base_type = roll_weighted(rng, tables.base_type[rarity])
        surface_type = roll_weighted(rng, tables.surface_type[rarity])
        ring_type = roll_weighted(rng, tables.ring_type[rarity])
        moon_count = roll_weighted(rng, tables.moon_count[rarity])
        atmosphere_type = roll_weighted(rng, tables.atmosphere_type[rarity])
        size_class = roll_weighted(rng, tables.size_class[rarity])
        size = rng.next_double(*catalog.size_range(size_class))
        ozone_density = roll_ozone_density(rarity, rng, tables)

        # 3. Ring geometry
        ring_tilt = rng.next_double(*tables.rings.tilt_range)
        ring_width = rng.next_double(*tables.rings.width_range)

        # 4. Colors (full RGB spectrum)
        primary, secondary, accent = _roll_colors(rng)

        # 5. Name
        name = roll_name(rng, self.content.names)

        planet = Planet(
            id=uuid.uuid4(),
            name=name,
            distance_discovered_at=float(distance),
            seed=actual_seed,
            rarity=rarity,
            base_type=base_type,
            surface_type=surface_type,
            ring_type=ring_type,
            moon_count=moon_count,
            atmosphere_type=atmosphere_type,
            size_class=size_class,
            size=size,
            ozone_density=ozone_density,
            ring_tilt=ring_tilt,
            ring_width=ring_width,
            primary_color_hex=primary,
            secondary_color_hex=secondary,
            accent_color_hex=accent,
        )
        logger.debug("Generated %s (seed=%d, distance=%.1f, rarity=%s)", name, actual_seed, distance, rarity.value)
        return planet

def _roll_colors(rng: SeededRandom) -> Tuple[str, str, str]:
    return roll_color_hex(rng), roll_color_hex(rng), roll_color_hex(rng)

def generate_planet(distance: float, seed: Optional[int] = None, content: Optional[GenerationContent] = None) -> Planet:
    """Generates a planet at a distance. Same (distance, seed) -> same planet, id aside."""
    return PlanetFactory(content).generate(distance, seed)
