import uuid
import pytest
from pydantic import ValidationError
from planetgen.models import (
    BaseType,
    Planet,
    Rarity,
    SizeClass,
    category_of,
    hex_to_rgb,
    highest_rarity,
    is_neutral,
    RingType,
    SurfaceType,
)
from planetgen.planet_factory import generate_planet

EXPECTED_KEYS = {
    "id", "name", "distanceDiscoveredAt", "seed", "rarity",
    "baseType", "surfaceType", "ringType", "moonCount", "atmosphereType",
    "sizeClass", "size", "ozoneDensity", "ringTilt", "ringWidth",
    "primaryColorHex", "secondaryColorHex", "accentColorHex",
}

def test_rarity_ordering():
    assert [r.sort_order for r in Rarity] == [0, 1, 2, 3, 4]
    assert highest_rarity(Rarity.RARE, Rarity.COMMON, Rarity.LEGENDARY) is Rarity.LEGENDARY
    assert Rarity.MYTHIC.display_name == "Mythic"

def test_size_class_order():
    assert SizeClass.MINISCULE.sort_order == 0
    assert SizeClass.TITANIC.sort_order == 7

def test_record_shape():
    planet = generate_planet(0, seed=42)
    record = planet.to_record()

    assert set(record) == EXPECTED_KEYS
    assert record["id"] == str(planet.id)
    assert str(uuid.UUID(record["id"])) == record["id"]
    assert record["rarity"] == "common"
    assert record["baseType"] == "solid"
    assert record["ringType"] == "none"
    assert record["primaryColorHex"] == "CB64C9"
    assert record["seed"] == 42

def test_record_reads_back():
    planet = generate_planet(77_000.0, seed=31337)
    assert Planet.from_record(planet.to_record()) == planet

def test_invalid_color_rejected():
    record = generate_planet(0, seed=1).to_record()
    for bad in ("12345G", "abcdef", "FFFFFFFF", "FFF"):
        with pytest.raises(ValidationError):
            Planet.from_record({**record, "primaryColorHex": bad})

def test_unknown_enum_tag_rejected():
    record = generate_planet(0, seed=1).to_record()
    with pytest.raises(ValidationError):
        Planet.from_record({**record, "ringType": "triple"})

def test_planet_is_frozen():
    planet = generate_planet(0, seed=1)
    with pytest.raises(ValidationError):
        planet.moon_count = 4

def test_hex_to_rgb():
    assert hex_to_rgb("CB64C9") == (203, 100, 201)

def test_category_lookup_uses_enum_type():
    assert category_of(BaseType.VOLCANIC) == "base_type"
    assert category_of(SurfaceType.VOLCANIC) == "surface_type"
    with pytest.raises(TypeError):
        category_of(Rarity.COMMON)

def test_neutral_values():
    assert is_neutral(RingType.NONE)
    assert not is_neutral(RingType.SIMPLE)
