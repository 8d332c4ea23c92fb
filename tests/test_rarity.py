import uuid
import pytest
from planetgen.models import (
    AtmosphereType,
    BaseType,
    Planet,
    Rarity,
    RingType,
    SizeClass,
    SurfaceType,
)
from planetgen.planet_factory import generate_planet
from planetgen.rarity import (
    aggregate_rarity,
    collectible_traits,
    describe,
    dominant_trait_count,
    rarity_display_name,
    trait_rarity,
)

def make_planet(**overrides) -> Planet:
    fields = dict(
        id=uuid.uuid4(),
        name="Nova-prime-1",
        distance_discovered_at=0.0,
        seed=1,
        rarity=Rarity.COMMON,
        base_type=BaseType.SOLID,
        surface_type=SurfaceType.SMOOTH,
        ring_type=RingType.NONE,
        moon_count=0,
        atmosphere_type=AtmosphereType.NONE,
        size_class=SizeClass.MEDIUM,
        size=1.0,
        ozone_density=0.1,
        ring_tilt=10.0,
        ring_width=1.0,
        primary_color_hex="808080",
        secondary_color_hex="A0A0A0",
        accent_color_hex="696969",
    )
    fields.update(overrides)
    return Planet(**fields)

def test_all_common_planet():
    planet = make_planet()
    assert aggregate_rarity(planet) is Rarity.COMMON
    assert dominant_trait_count(planet) == 5
    assert rarity_display_name(planet) == "Common 5"

def test_aggregate_is_max_not_average():
    # Only one trait is mythic, four are common
    planet = make_planet(size_class=SizeClass.TITANIC, size=2.2)
    assert aggregate_rarity(planet) is Rarity.MYTHIC
    assert dominant_trait_count(planet) == 1

def test_dominant_count_at_legendary():
    planet = make_planet(
        base_type=BaseType.VOLCANIC,            # legendary
        surface_type=SurfaceType.CRYSTALLINE,   # legendary
        ring_type=RingType.RAINBOW,             # legendary
        atmosphere_type=AtmosphereType.GLOW,    # uncommon
        size_class=SizeClass.HUGE,              # rare
    )
    assert aggregate_rarity(planet) is Rarity.LEGENDARY
    assert dominant_trait_count(planet) == 3
    assert rarity_display_name(planet) == "Legendary 3"

def test_aggregate_independent_of_rolled_rarity():
    planet = make_planet(rarity=Rarity.MYTHIC)
    assert aggregate_rarity(planet) is Rarity.COMMON

def test_same_tag_in_different_categories():
    # "volcanic" is legendary as a base type but rare as a surface
    assert trait_rarity(BaseType.VOLCANIC) is Rarity.LEGENDARY
    assert trait_rarity(SurfaceType.VOLCANIC) is Rarity.RARE

def test_description_omits_neutral_traits():
    assert describe(make_planet()) == "Base: Solid • Surface: Smooth"

def test_description_full():
    planet = make_planet(
        ring_type=RingType.DOUBLE,
        moon_count=2,
        atmosphere_type=AtmosphereType.AURORA,
    )
    assert describe(planet) == "Base: Solid • Surface: Smooth • Rings: Double • Moons: 2 • Atmosphere: Aurora"

def test_derived_properties_are_pure():
    planet = generate_planet(90_000.0, seed=2024)
    assert aggregate_rarity(planet) is aggregate_rarity(planet)
    assert dominant_trait_count(planet) == dominant_trait_count(planet)
    assert describe(planet) == describe(planet)
    assert planet == planet.model_copy()

def test_collectible_traits_skip_neutral_values():
    common = collectible_traits(Rarity.COMMON)
    assert ("base_type", BaseType.SOLID) in common
    assert ("size_class", SizeClass.MEDIUM) in common
    assert all(value is not RingType.NONE and value is not AtmosphereType.NONE for _, value in common)
    assert len(common) == 4

def test_collectible_traits_mythic():
    mythic = collectible_traits(Rarity.MYTHIC)
    assert ("surface_type", SurfaceType.VOIDLIKE) in mythic
    assert ("ring_type", RingType.CROSSED) in mythic
    assert ("size_class", SizeClass.MINISCULE) in mythic
