"""
Clast Planets: planetgen/rarity.py
Derived rarity and display projections of a Planet.
===================================================
Version:     0.2 (Five-tier content tables)
Stack:       Python 3.12+
Status:      Stable.

Pure functions over a Planet and the trait catalogue. Nothing here is cached
on the planet: rebalancing traits.toml changes every derived value at once.
"""

from __future__ import annotations
from typing import Any, List, Optional, Tuple

from planetgen.data_loader import TraitCatalogDef, get_content
from planetgen.models import (
    AtmosphereType,
    Planet,
    Rarity,
    RingType,
    TRAIT_CATEGORIES,
    highest_rarity,
    is_neutral,
)

DESCRIPTION_SEPARATOR: str = " • "

def _catalog(catalog: Optional[TraitCatalogDef]) -> TraitCatalogDef:
    return catalog if catalog is not None else get_content().catalog

def trait_values(planet: Planet) -> List[Any]:
    """The planet's categorical trait values, in catalogue order."""
    return [getattr(planet, category) for category in TRAIT_CATEGORIES]

def trait_rarity(value: Any, catalog: Optional[TraitCatalogDef] = None) -> Rarity:
    return _catalog(catalog).rarity_of(value)

def trait_rarities(planet: Planet, catalog: Optional[TraitCatalogDef] = None) -> List[Rarity]:
    cat = _catalog(catalog)
    return [cat.rarity_of(value) for value in trait_values(planet)]

def aggregate_rarity(planet: Planet, catalog: Optional[TraitCatalogDef] = None) -> Rarity:
    """Highest static rarity among the planet's traits."""
    return highest_rarity(*trait_rarities(planet, catalog))

def dominant_trait_count(planet: Planet, catalog: Optional[TraitCatalogDef] = None) -> int:
    """How many traits sit exactly at the aggregate rarity."""
    rarities = trait_rarities(planet, catalog)
    top = highest_rarity(*rarities)
    return sum(1 for r in rarities if r is top)

def rarity_display_name(planet: Planet, catalog: Optional[TraitCatalogDef] = None) -> str:
    """e.g. 'Legendary 2'."""
    cat = _catalog(catalog)
    return f"{aggregate_rarity(planet, cat).display_name} {dominant_trait_count(planet, cat)}"

def describe(planet: Planet) -> str:
    """
    Human-readable summary. Neutral traits (no rings, no moons, no
    atmosphere) are left out.
    """
    parts = [
        f"Base: {planet.base_type.display_name}",
        f"Surface: {planet.surface_type.display_name}",
    ]

    if planet.ring_type is not RingType.NONE:
        parts.append(f"Rings: {planet.ring_type.display_name}")

    if planet.moon_count > 0:
        parts.append(f"Moons: {planet.moon_count}")

    if planet.atmosphere_type is not AtmosphereType.NONE:
        parts.append(f"Atmosphere: {planet.atmosphere_type.display_name}")

    return DESCRIPTION_SEPARATOR.join(parts)

def collectible_traits(rarity: Rarity, catalog: Optional[TraitCatalogDef] = None) -> List[Tuple[str, Any]]:
    """
    (category, value) pairs classified at a rarity, for the trait dictionary.
    Neutral values are not collectible.
    """
    cat = _catalog(catalog)
    found = []
    for category, enum_cls in TRAIT_CATEGORIES.items():
        for value in enum_cls:
            if is_neutral(value):
                continue
            if cat.rarity_of(value) is rarity:
                found.append((category, value))
    return found
