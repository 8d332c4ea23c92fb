"""
Clast Planets: planetgen/data_loader.py
Content table loaders for TOML seed data powered by Pydantic.
=============================================================
Version:     0.2 (Five-tier content tables)
Stack:       Python 3.12+ | Pydantic v2 | tomllib
Status:      Core data validation and loading layer.

Content lives under data/:
  rarity_curve.toml   distance -> rarity bands
  trait_tables.toml   per-trait weighted tables keyed by rarity
  traits.toml         static rarity of every trait value, size class ranges
  names.toml          name word lists

Tables are validated eagerly when loaded. A malformed table raises
TableConfigError naming the table and rarity tier; generation never
substitutes a default trait.
"""

from __future__ import annotations
import logging
import math
import tomllib
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from planetgen.errors import TableConfigError
from planetgen.models import (
    AtmosphereType,
    BaseType,
    Rarity,
    RingType,
    SizeClass,
    SurfaceType,
    TRAIT_CATEGORIES,
    category_of,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Cumulative chances must land within this distance of 1.0
NORMALIZATION_TOLERANCE: float = 1e-6
MIN_RARITY_BANDS: int = 4
MOON_COUNT_MAX: int = 4

# ================================================================================
# SCHEMAS
# ================================================================================

class WeightedBand(BaseModel, Generic[T]):
    """One slice of a cumulative table. Several values split it uniformly."""
    model_config = ConfigDict(frozen=True)
    chance: float = Field(ge=0.0, le=1.0)
    values: List[T]

class RarityBandDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    upper: Optional[float] = None # None marks the open-ended last band
    weights: List[WeightedBand[Rarity]]

class RarityCurveDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    max_distance: float = Field(gt=0.0)
    bands: List[RarityBandDef]

    def band_for(self, normalized_distance: float) -> RarityBandDef:
        for band in self.bands:
            if band.upper is None or normalized_distance < band.upper:
                return band
        return self.bands[-1]

class OzoneDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    free_range: bool = False
    ranges: Dict[Rarity, Tuple[float, float]]

class RingsDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    tilt_range: Tuple[float, float] = (0.0, 360.0)
    width_range: Tuple[float, float] = (0.5, 2.0)

class TraitTablesDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    base_type: Dict[Rarity, List[WeightedBand[BaseType]]]
    surface_type: Dict[Rarity, List[WeightedBand[SurfaceType]]]
    ring_type: Dict[Rarity, List[WeightedBand[RingType]]]
    moon_count: Dict[Rarity, List[WeightedBand[int]]]
    atmosphere_type: Dict[Rarity, List[WeightedBand[AtmosphereType]]]
    size_class: Dict[Rarity, List[WeightedBand[SizeClass]]]
    ozone: OzoneDef
    rings: RingsDef = Field(default_factory=RingsDef)

    def weighted_tables(self) -> Dict[str, Dict[Rarity, List[WeightedBand[Any]]]]:
        return {
            "base_type": self.base_type,
            "surface_type": self.surface_type,
            "ring_type": self.ring_type,
            "moon_count": self.moon_count,
            "atmosphere_type": self.atmosphere_type,
            "size_class": self.size_class,
        }

    def moon_bracket(self, rarity: Rarity) -> Tuple[int, int]:
        """Inclusive (min, max) moon count reachable at a rarity."""
        counts = [v for band in self.moon_count[rarity] for v in band.values]
        return min(counts), max(counts)

class SizeClassDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    rarity: Rarity
    range: Tuple[float, float]

class TraitCatalogDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    base_type: Dict[BaseType, Rarity]
    surface_type: Dict[SurfaceType, Rarity]
    ring_type: Dict[RingType, Rarity]
    atmosphere_type: Dict[AtmosphereType, Rarity]
    size_class: Dict[SizeClass, SizeClassDef]

    def rarity_of(self, value: Any) -> Rarity:
        """Static rarity classification of a trait value."""
        entry = getattr(self, category_of(value))[value]
        if isinstance(entry, SizeClassDef):
            return entry.rarity
        return entry

    def size_range(self, size_class: SizeClass) -> Tuple[float, float]:
        return self.size_class[size_class].range

class NamesDef(BaseModel):
    model_config = ConfigDict(frozen=True)
    prefixes: List[str]
    suffixes: List[str]
    number_range: Tuple[int, int] = (1, 999)

class GenerationContent(BaseModel):
    """Everything the generator reads. Immutable once loaded."""
    model_config = ConfigDict(frozen=True)
    curve: RarityCurveDef
    tables: TraitTablesDef
    catalog: TraitCatalogDef
    names: NamesDef

# ================================================================================
# LOADERS & CACHE
# ================================================================================

DATA_DIR = Path(__file__).parent.parent / "data"

_CONTENT_CACHE: Optional[GenerationContent] = None

def _load_toml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Content table not found: {path}")

    with open(path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise TableConfigError(path.stem, f"invalid TOML ({e})") from e

def _parse(model: type[BaseModel], path: Path) -> Any:
    data = _load_toml(path)
    try:
        return model(**data)
    except ValidationError as e:
        raise TableConfigError(path.stem, str(e)) from e

def load_rarity_curve(data_dir: Path = DATA_DIR) -> RarityCurveDef:
    return _parse(RarityCurveDef, data_dir / "rarity_curve.toml")

def load_trait_tables(data_dir: Path = DATA_DIR) -> TraitTablesDef:
    return _parse(TraitTablesDef, data_dir / "trait_tables.toml")

def load_trait_catalog(data_dir: Path = DATA_DIR) -> TraitCatalogDef:
    return _parse(TraitCatalogDef, data_dir / "traits.toml")

def load_names(data_dir: Path = DATA_DIR) -> NamesDef:
    return _parse(NamesDef, data_dir / "names.toml")

def load_content(data_dir: Path = DATA_DIR) -> GenerationContent:
    """Loads and validates every content table from a data directory."""
    content = GenerationContent(
        curve=load_rarity_curve(data_dir),
        tables=load_trait_tables(data_dir),
        catalog=load_trait_catalog(data_dir),
        names=load_names(data_dir),
    )
    validate_content(content)
    logger.info(
        "Loaded generation content from %s (%d rarity bands, %d trait tables)",
        data_dir, len(content.curve.bands), len(content.tables.weighted_tables()),
    )
    return content

def get_content() -> GenerationContent:
    """Loads the default content tables. Cached globally."""
    global _CONTENT_CACHE
    if _CONTENT_CACHE is not None:
        return _CONTENT_CACHE

    _CONTENT_CACHE = load_content(DATA_DIR)
    return _CONTENT_CACHE

def clear_content_cache() -> None:
    global _CONTENT_CACHE
    _CONTENT_CACHE = None

# ================================================================================
# VALIDATION
# ================================================================================

def check_bands(table: str, tier: str, bands: List[WeightedBand[Any]]) -> None:
    """A tier's bands must be non-empty, carry values, and sum to 1.0."""
    if not bands:
        raise TableConfigError(table, "no bands defined", tier=tier)

    total = 0.0
    for i, band in enumerate(bands):
        if not band.values:
            raise TableConfigError(table, f"band {i} has no candidate values", tier=tier)
        total += band.chance

    if not math.isclose(total, 1.0, abs_tol=NORMALIZATION_TOLERANCE):
        raise TableConfigError(table, f"chances sum to {total:.6f}, expected 1.0", tier=tier)

def _check_range(table: str, tier: str, bounds: Tuple[float, float], low: float, high: float) -> None:
    lo, hi = bounds
    if lo > hi:
        raise TableConfigError(table, f"range {list(bounds)} is inverted", tier=tier)
    if lo < low or hi > high:
        raise TableConfigError(table, f"range {list(bounds)} leaves [{low}, {high}]", tier=tier)

def _validate_curve(curve: RarityCurveDef) -> None:
    if len(curve.bands) < MIN_RARITY_BANDS:
        raise TableConfigError("rarity_curve", f"needs at least {MIN_RARITY_BANDS} distance bands, found {len(curve.bands)}")

    previous = 0.0
    for i, band in enumerate(curve.bands):
        tier = f"band {i}"
        is_last = i == len(curve.bands) - 1
        if band.upper is None and not is_last:
            raise TableConfigError("rarity_curve", "only the last band may omit 'upper'", tier=tier)
        if band.upper is not None:
            if is_last:
                raise TableConfigError("rarity_curve", "the last band must be open-ended", tier=tier)
            if not previous < band.upper <= 1.0:
                raise TableConfigError("rarity_curve", f"upper bound {band.upper} must increase within (0, 1]", tier=tier)
            previous = band.upper
        check_bands("rarity_curve", tier, band.weights)

def _validate_tables(tables: TraitTablesDef) -> None:
    for table, by_rarity in tables.weighted_tables().items():
        for rarity in Rarity:
            if rarity not in by_rarity:
                raise TableConfigError(table, "tier is missing", tier=rarity.value)
            check_bands(table, rarity.value, by_rarity[rarity])

    for rarity, bands in tables.moon_count.items():
        for band in bands:
            for count in band.values:
                if not 0 <= count <= MOON_COUNT_MAX:
                    raise TableConfigError("moon_count", f"moon count {count} outside 0..{MOON_COUNT_MAX}", tier=rarity.value)

    for rarity in Rarity:
        if rarity not in tables.ozone.ranges:
            raise TableConfigError("ozone", "tier is missing", tier=rarity.value)
        _check_range("ozone", rarity.value, tables.ozone.ranges[rarity], 0.0, 1.0)

    _check_range("rings", "tilt_range", tables.rings.tilt_range, 0.0, 360.0)
    _check_range("rings", "width_range", tables.rings.width_range, 0.5, 2.0)

def _validate_catalog(catalog: TraitCatalogDef) -> None:
    for category, enum_cls in TRAIT_CATEGORIES.items():
        classified = getattr(catalog, category)
        missing = [member.value for member in enum_cls if member not in classified]
        if missing:
            raise TableConfigError("traits", f"no rarity for {category} values {missing}")

    for size_class, definition in catalog.size_class.items():
        lo, hi = definition.range
        if not 0.0 < lo < hi:
            raise TableConfigError("traits", f"size range {list(definition.range)} must satisfy 0 < min < max", tier=size_class.value)

def _validate_names(names: NamesDef) -> None:
    if not names.prefixes:
        raise TableConfigError("names", "prefix list is empty")
    if not names.suffixes:
        raise TableConfigError("names", "suffix list is empty")
    lo, hi = names.number_range
    if lo > hi:
        raise TableConfigError("names", f"number range {list(names.number_range)} is inverted")

def validate_content(content: GenerationContent) -> None:
    """Raises TableConfigError on the first malformed table found."""
    _validate_curve(content.curve)
    _validate_catalog(content.catalog)
    _validate_tables(content.tables)
    _validate_names(content.names)
