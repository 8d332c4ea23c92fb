"""
Clast Planets: planetgen/models.py
Planet value record and trait enumerations.
===========================================
Version:     0.2 (Five-tier content tables)
Stack:       Python 3.12+ | Pydantic v2
Status:      Stable.

The Planet is an immutable value: it carries no persistence hooks and is
never mutated after the generator builds it. Derived rarity lives in
planetgen/rarity.py so it is always recomputed from the current tables.

Serialized form (to_record / from_record) is a flat camelCase record:
enumerations as their string tag, colors as 6 hex digits, id as a UUID string.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ================================================================================
# RARITY
# ================================================================================

class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"
    MYTHIC = "mythic"

    @property
    def sort_order(self) -> int:
        return _RARITY_ORDER.index(self)

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

_RARITY_ORDER = list(Rarity)

def highest_rarity(*rarities: Rarity) -> Rarity:
    """Simple max over the rarity scale. Ties are irrelevant, there is no averaging."""
    return max(rarities, key=lambda r: r.sort_order)

# ================================================================================
# TRAIT ENUMERATIONS
# ================================================================================

class _TraitEnum(str, Enum):
    @property
    def display_name(self) -> str:
        return self.value.capitalize()

class BaseType(_TraitEnum):
    SOLID = "solid"
    STRIPED = "striped"
    CRATERED = "cratered"
    SWIRLED = "swirled"
    VOLCANIC = "volcanic"
    CRYSTALLINE = "crystalline"
    NEBULOUS = "nebulous"
    PRISMATIC = "prismatic"

class SurfaceType(_TraitEnum):
    SMOOTH = "smooth"
    ROCKY = "rocky"
    ICY = "icy"
    DESERT = "desert"
    OCEANIC = "oceanic"
    VOLCANIC = "volcanic"
    CRYSTALLINE = "crystalline"
    MOLTEN = "molten"
    PRISMATIC = "prismatic"
    VOIDLIKE = "voidlike"

class RingType(_TraitEnum):
    NONE = "none"
    SIMPLE = "simple"
    DOUBLE = "double"
    CHUNKY = "chunky"
    RAINBOW = "rainbow"
    CROSSED = "crossed"

class AtmosphereType(_TraitEnum):
    NONE = "none"
    GLOW = "glow"
    HALO = "halo"
    AURORA = "aurora"
    COSMIC = "cosmic"
    STORM = "storm"
    ETHEREAL = "ethereal"

class SizeClass(_TraitEnum):
    MINISCULE = "miniscule"
    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    HUGE = "huge"
    GIGANTIC = "gigantic"
    TITANIC = "titanic"

    @property
    def sort_order(self) -> int:
        return list(SizeClass).index(self)

# Trait category name (the Planet field holding it) -> enumeration.
# The categorical traits that carry a static rarity classification.
TRAIT_CATEGORIES: Dict[str, type] = {
    "base_type": BaseType,
    "surface_type": SurfaceType,
    "ring_type": RingType,
    "atmosphere_type": AtmosphereType,
    "size_class": SizeClass,
}

# Values that mean "trait absent". Skipped by descriptions and the trait dictionary.
NEUTRAL_TRAITS = (RingType.NONE, AtmosphereType.NONE)

def category_of(value: _TraitEnum) -> str:
    """Return the Planet field name owning a trait value."""
    for category, enum_cls in TRAIT_CATEGORIES.items():
        if type(value) is enum_cls:
            return category
    raise TypeError(f"Not a trait value: {value!r}")

def is_neutral(value: _TraitEnum) -> bool:
    # Identity check: str-valued enums of different categories compare equal by tag
    return any(value is neutral for neutral in NEUTRAL_TRAITS)

# ================================================================================
# PLANET
# ================================================================================

HEX_COLOR_PATTERN = r"^[0-9A-F]{6}$"
SEED_MIN: int = -(1 << 63)
SEED_MAX: int = (1 << 63) - 1

class Planet(BaseModel):
    """One generated, immutable collectible planet."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: UUID
    name: str
    distance_discovered_at: float = Field(ge=0.0)
    seed: int = Field(ge=SEED_MIN, le=SEED_MAX)
    rarity: Rarity

    # Visual components
    base_type: BaseType
    surface_type: SurfaceType
    ring_type: RingType
    moon_count: int = Field(ge=0, le=4)
    atmosphere_type: AtmosphereType
    size_class: SizeClass
    size: float = Field(gt=0.0)             # within the size class range
    ozone_density: float = Field(ge=0.0, le=1.0)
    ring_tilt: float = Field(ge=0.0, lt=360.0)   # degrees
    ring_width: float = Field(ge=0.5, le=2.0)    # line width multiplier

    # RGB, no alpha
    primary_color_hex: str = Field(pattern=HEX_COLOR_PATTERN)
    secondary_color_hex: str = Field(pattern=HEX_COLOR_PATTERN)
    accent_color_hex: str = Field(pattern=HEX_COLOR_PATTERN)

    @property
    def colors(self) -> tuple[str, str, str]:
        return (self.primary_color_hex, self.secondary_color_hex, self.accent_color_hex)

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the flat JSON-safe record used for persistence."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Planet":
        return cls.model_validate(record)

def hex_to_rgb(color_hex: str) -> tuple[int, int, int]:
    """Decode a 6-digit hex color for renderers."""
    value = int(color_hex, 16)
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
