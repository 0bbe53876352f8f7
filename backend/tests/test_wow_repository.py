"""Tests for the WoW item database and weight tables."""
import json
import logging

import pytest

from gamecalc.config import REPO_ROOT
from gamecalc.repositories.json_cache import JsonCache
from gamecalc.repositories.wow_repository import WowRepository


def _write_wow_data(tmp_path, items=None, weights=None, priorities=None):
    """Helper to create wow/*.json knowledge files."""
    knowledge_dir = tmp_path / "knowledge"
    wow_dir = knowledge_dir / "wow"
    wow_dir.mkdir(parents=True, exist_ok=True)
    if items is not None:
        (wow_dir / "items.json").write_text(json.dumps(items))
    if weights is not None:
        (wow_dir / "stats_weights.json").write_text(json.dumps(weights))
    if priorities is not None:
        (wow_dir / "spec_priorities.json").write_text(json.dumps(priorities))
    return knowledge_dir


WEIGHTS = {
    "version": 3,
    "specs": {
        "full": {
            "mplus": {"st": {"CRIT_RATING": 0.5}, "aoe": {"CRIT_RATING": 0.6}},
            "raid": {"st": {"CRIT_RATING": 0.7}, "aoe": {"CRIT_RATING": 0.8}},
        },
        "raid_st_only": {
            "mplus": {"st": {"CRIT_RATING": 0.5}, "aoe": {"CRIT_RATING": 0.6}},
            "raid": {"st": {"CRIT_RATING": 0.7}},
        },
        "mplus_only": {
            "mplus": {"st": {"CRIT_RATING": 0.5}, "aoe": {"CRIT_RATING": 0.6}},
        },
        "mplus_st_only": {
            "mplus": {"st": {"CRIT_RATING": 0.5, "HASTE_RATING": "0.4", "NOTE": "n/a"}},
        },
        "broken": "not a mapping",
    },
}


@pytest.fixture
def weights_repository(tmp_path):
    knowledge_dir = _write_wow_data(tmp_path, weights=WEIGHTS)
    return WowRepository(knowledge_dir=knowledge_dir, cache=JsonCache())


# ======================================================================
# pick_weights fallback chain
# ======================================================================


def test_pick_weights_exact_match(weights_repository):
    assert weights_repository.pick_weights("full", "raid", "aoe") == {"CRIT_RATING": 0.8}


def test_pick_weights_falls_back_to_focus_st(weights_repository, caplog):
    with caplog.at_level(logging.WARNING):
        assert weights_repository.pick_weights("raid_st_only", "raid", "aoe") == {"CRIT_RATING": 0.7}
    assert "using raid/st" in caplog.text


def test_pick_weights_falls_back_to_mplus_profile(weights_repository):
    assert weights_repository.pick_weights("mplus_only", "raid", "aoe") == {"CRIT_RATING": 0.6}


def test_pick_weights_falls_back_to_mplus_st(weights_repository):
    weights = weights_repository.pick_weights("mplus_st_only", "raid", "aoe")
    # Non-numeric weights are dropped, numeric strings kept
    assert weights == {"CRIT_RATING": 0.5, "HASTE_RATING": 0.4}


def test_pick_weights_unknown_spec(weights_repository):
    assert weights_repository.pick_weights("nope") == {}
    assert weights_repository.pick_weights("broken") == {}


def test_pick_weights_missing_file(tmp_path):
    repository = WowRepository(knowledge_dir=tmp_path, cache=JsonCache())
    assert repository.pick_weights("full") == {}
    assert repository.weights_version is None


def test_weights_version(weights_repository):
    assert weights_repository.weights_version == "3"


# ======================================================================
# Spec priorities
# ======================================================================


PRIORITIES = {
    "version": "v1-starter",
    "specs": {
        "mage_fire": {"group": "Mage", "label": "Fire",
                      "raid_st": {"haste": 0.9, "crit": 1.05, "mastery": 0.65, "vers": 0.8}},
        "dk_frost": {"group": "Death Knight", "label": "Frost",
                     "raid_st": {"haste": 0.85, "crit": 0.9, "mastery": 1.0, "vers": 0.85}},
        "mage_arcane": {"group": "Mage", "label": "Arcane"},
        "orphan": {},
    },
}


@pytest.fixture
def priority_repository(tmp_path):
    knowledge_dir = _write_wow_data(tmp_path, priorities=PRIORITIES)
    return WowRepository(knowledge_dir=knowledge_dir, cache=JsonCache())


def test_list_specs_grouped_and_sorted(priority_repository):
    specs = priority_repository.list_specs()
    assert [s["key"] for s in specs] == ["dk_frost", "mage_arcane", "mage_fire", "orphan"]
    assert specs[-1] == {"key": "orphan", "group": "Other", "label": "orphan"}


def test_get_priority_weights(priority_repository):
    assert priority_repository.get_priority_weights("mage_fire")["crit"] == 1.05
    assert priority_repository.get_priority_weights("mage_fire", "mplus_aoe") == {}
    assert priority_repository.get_priority_weights("mage_arcane") == {}
    assert priority_repository.get_priority_weights("nope") == {}


# ======================================================================
# Items
# ======================================================================


ITEM_ROWS = [
    {"id": 1, "name": "Signet of Priory", "slot": "FINGER", "ilvl": 636,
     "stats": [{"type": "CRIT_RATING", "value": 612}]},
    {"id": "2", "name": "Devout Zealot's Ring", "level": 636, "statBag": {"HASTE_RATING": 588}},
    {"id": 3, "name": "Ring of Earthen Craftsmanship", "stats": {"MASTERY_RATING": "400"}},
    {"id": 0, "name": "Placeholder"},
]


@pytest.mark.parametrize(
    "items",
    [
        ITEM_ROWS,
        {"items": ITEM_ROWS},
        {str(row["id"]): {k: v for k, v in row.items() if k != "id"} for row in ITEM_ROWS},
    ],
)
def test_items_accept_all_container_shapes(tmp_path, items):
    repository = WowRepository(knowledge_dir=_write_wow_data(tmp_path, items=items), cache=JsonCache())
    assert sorted(item.id for item in repository.list_items()) == [1, 2, 3]


@pytest.fixture
def item_repository(tmp_path):
    return WowRepository(knowledge_dir=_write_wow_data(tmp_path, items=ITEM_ROWS), cache=JsonCache())


def test_get_item(item_repository):
    item = item_repository.get_item("2")
    assert item.name == "Devout Zealot's Ring"
    assert item.ilvl == 636
    assert item.stats == {"HASTE_RATING": 588.0}
    assert item_repository.get_item(99) is None
    assert item_repository.get_item("abc") is None


def test_search_items(item_repository):
    assert [i.id for i in item_repository.search_items("RING")] == [2, 3]
    assert [i.id for i in item_repository.search_items("ring", limit=1)] == [2]
    assert item_repository.search_items("  ") == []


def test_shipped_wow_datasets():
    """The wow knowledge files in the repo load and agree with each other."""
    repository = WowRepository(knowledge_dir=REPO_ROOT / "knowledge", cache=JsonCache())

    assert len(repository.list_specs()) == 26
    assert repository.get_priority_weights("mage_fire") == {
        "haste": 0.9, "crit": 1.05, "mastery": 0.65, "vers": 0.8,
    }
    assert repository.pick_weights("prot_paladin", "raid", "aoe")["STAMINA"] == 0.75
    assert repository.get_item(212456).stats["AGILITY"] == 1325.0
