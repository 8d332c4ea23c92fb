import math
import shutil
import pytest
from planetgen.data_loader import (
    DATA_DIR,
    MIN_RARITY_BANDS,
    check_bands,
    get_content,
    load_content,
    clear_content_cache,
)
from planetgen.errors import TableConfigError
from planetgen.models import Rarity, TRAIT_CATEGORIES

@pytest.fixture
def data_copy(tmp_path):
    target = tmp_path / "data"
    shutil.copytree(DATA_DIR, target)
    return target

def _rewrite(path, old, new):
    text = path.read_text(encoding="utf-8")
    assert old in text
    path.write_text(text.replace(old, new, 1), encoding="utf-8")

def test_default_content_loads():
    content = load_content()
    assert content.curve.max_distance == 100000.0
    assert len(content.curve.bands) == 5
    assert content.curve.bands[-1].upper is None
    assert len(content.names.prefixes) == 15
    assert len(content.names.suffixes) == 14

def test_get_content_is_cached():
    clear_content_cache()
    assert get_content() is get_content()

def test_every_weighted_table_is_normalized():
    content = get_content()
    for table, by_rarity in content.tables.weighted_tables().items():
        for rarity in Rarity:
            bands = by_rarity[rarity]
            assert math.isclose(sum(b.chance for b in bands), 1.0, abs_tol=1e-9), (table, rarity)
            assert all(b.values for b in bands)
            check_bands(table, rarity.value, bands)

def test_rarity_curve_bands_are_normalized():
    for band in get_content().curve.bands:
        assert math.isclose(sum(w.chance for w in band.weights), 1.0, abs_tol=1e-9)

def test_catalog_classifies_every_trait_value():
    catalog = get_content().catalog
    for category, enum_cls in TRAIT_CATEGORIES.items():
        for value in enum_cls:
            assert isinstance(catalog.rarity_of(value), Rarity), (category, value)

def test_moon_brackets():
    tables = get_content().tables
    assert tables.moon_bracket(Rarity.COMMON) == (0, 1)
    assert tables.moon_bracket(Rarity.UNCOMMON) == (0, 2)
    assert tables.moon_bracket(Rarity.RARE) == (1, 3)
    assert tables.moon_bracket(Rarity.LEGENDARY) == (2, 3)
    assert tables.moon_bracket(Rarity.MYTHIC) == (3, 4)

def test_unnormalized_tier_names_table_and_tier(data_copy):
    _rewrite(data_copy / "trait_tables.toml",
             '{ chance = 0.1, values = ["double"] },',
             '{ chance = 0.2, values = ["double"] },')
    with pytest.raises(TableConfigError) as exc:
        load_content(data_copy)
    assert exc.value.table == "ring_type"
    assert exc.value.tier == "uncommon"
    assert "sum" in exc.value.reason

def test_empty_candidate_list_rejected(data_copy):
    _rewrite(data_copy / "trait_tables.toml",
             'mythic = [{ chance = 1.0, values = ["crossed"] }]',
             'mythic = [{ chance = 1.0, values = [] }]')
    with pytest.raises(TableConfigError) as exc:
        load_content(data_copy)
    assert exc.value.table == "ring_type"
    assert exc.value.tier == "mythic"

def test_unknown_trait_value_rejected(data_copy):
    _rewrite(data_copy / "trait_tables.toml", '["crossed"]', '["triple"]')
    with pytest.raises(TableConfigError) as exc:
        load_content(data_copy)
    assert exc.value.table == "trait_tables"

def test_rarity_curve_band_must_sum_to_one(data_copy):
    _rewrite(data_copy / "rarity_curve.toml",
             '{ chance = 0.03, values = ["mythic"] },',
             '{ chance = 0.30, values = ["mythic"] },')
    with pytest.raises(TableConfigError) as exc:
        load_content(data_copy)
    assert exc.value.table == "rarity_curve"
    assert exc.value.tier == "band 4"

def test_inverted_size_range_rejected(data_copy):
    _rewrite(data_copy / "traits.toml", "range = [2.0, 2.5]", "range = [2.5, 2.0]")
    with pytest.raises(TableConfigError) as exc:
        load_content(data_copy)
    assert exc.value.tier == "titanic"

def test_missing_catalog_entry_rejected(data_copy):
    _rewrite(data_copy / "traits.toml", 'voidlike    = "mythic"\n', "")
    with pytest.raises(TableConfigError) as exc:
        load_content(data_copy)
    assert "voidlike" in str(exc.value)

def test_missing_table_file(data_copy):
    (data_copy / "names.toml").unlink()
    with pytest.raises(FileNotFoundError):
        load_content(data_copy)

def test_missing_rarity_tier_rejected(data_copy):
    _rewrite(data_copy / "trait_tables.toml",
             'mythic    = [{ chance = 1.0, values = ["crystalline", "nebulous", "prismatic"] }]\n',
             "")
    with pytest.raises(TableConfigError) as exc:
        load_content(data_copy)
    assert exc.value.table == "base_type"
    assert exc.value.tier == "mythic"

def test_rarity_curve_needs_enough_bands(data_copy):
    (data_copy / "rarity_curve.toml").write_text(
        "max_distance = 100000.0\n"
        "[[bands]]\nupper = 0.3\nweights = [{ chance = 1.0, values = [\"common\"] }]\n"
        "[[bands]]\nupper = 0.6\nweights = [{ chance = 1.0, values = [\"rare\"] }]\n"
        "[[bands]]\nweights = [{ chance = 1.0, values = [\"mythic\"] }]\n",
        encoding="utf-8",
    )
    with pytest.raises(TableConfigError) as exc:
        load_content(data_copy)
    assert exc.value.table == "rarity_curve"
    assert str(MIN_RARITY_BANDS) in exc.value.reason

def test_rarity_curve_upper_bounds_must_increase(data_copy):
    _rewrite(data_copy / "rarity_curve.toml", "upper = 0.8", "upper = 0.4")
    with pytest.raises(TableConfigError) as exc:
        load_content(data_copy)
    assert exc.value.table == "rarity_curve"
    assert exc.value.tier == "band 2"

def test_rarity_curve_open_band_must_be_last(data_copy):
    _rewrite(data_copy / "rarity_curve.toml", "upper = 0.5\n", "")
    with pytest.raises(TableConfigError) as exc:
        load_content(data_copy)
    assert exc.value.tier == "band 1"
    assert "last band" in exc.value.reason
