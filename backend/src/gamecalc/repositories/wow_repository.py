"""Item database and stat weight tables for the WoW calculators."""
import logging
from pathlib import Path
from typing import Optional

from gamecalc.config import settings
from gamecalc.models.records import ItemRecord
from gamecalc.repositories.json_cache import JsonCache
from gamecalc.utils.normalizers import normalize_upstream_record, to_number, to_text

logger = logging.getLogger(__name__)


def _numeric_weights(weights: dict) -> dict[str, float]:
    out = {}
    for key, value in weights.items():
        number = to_number(value)
        if number is not None:
            out[str(key)] = number
    return out


class WowRepository:
    """Reads the WoW static datasets.

    Layout under the knowledge directory:
        wow/items.json            list of items (or {"items": [...]}, or {id: item})
        wow/stats_weights.json    {"version", "notes", "specs": {spec: {focus: {profile: {STAT: w}}}}}
        wow/spec_priorities.json  {"version", "specs": {spec: {group, label, raid_st, mplus_aoe}}}
    """

    def __init__(self, knowledge_dir: Optional[Path] = None, cache: Optional[JsonCache] = None):
        if knowledge_dir is None:
            knowledge_dir = settings.knowledge_path
        self.knowledge_dir = Path(knowledge_dir)
        self.cache = cache or JsonCache(production=settings.is_production)

    @property
    def data_dir(self) -> Path:
        return self.knowledge_dir / "wow"

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def _raw_items(self) -> list:
        data = self.cache.load(self.data_dir / "items.json")
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            if isinstance(data.get("items"), list):
                return data["items"]
            # Keyed by id: {"12345": {...}}
            rows = []
            for key, value in data.items():
                if isinstance(value, dict):
                    rows.append({"id": key, **value})
            return rows
        return []

    def list_items(self) -> list[ItemRecord]:
        items = []
        for raw in self._raw_items():
            normalized = normalize_upstream_record(raw, "item")
            if normalized is None or normalized["id"] <= 0:
                continue
            items.append(ItemRecord(**normalized))
        return items

    def get_item(self, item_id: int | str) -> Optional[ItemRecord]:
        """Look up an item by id."""
        number = to_number(item_id)
        if number is None:
            return None
        for item in self.list_items():
            if item.id == int(number):
                return item
        return None

    def search_items(self, query: str, limit: int = 10) -> list[ItemRecord]:
        """Case-insensitive substring search on item names."""
        wanted = (query or "").strip().lower()
        if not wanted:
            return []
        matches = [item for item in self.list_items() if wanted in item.name.lower()]
        return matches[:limit]

    # ------------------------------------------------------------------
    # Upgrade checker weights
    # ------------------------------------------------------------------

    @property
    def weights_version(self) -> Optional[str]:
        data = self.cache.load(self.data_dir / "stats_weights.json")
        if isinstance(data, dict) and data.get("version") is not None:
            return to_text(data["version"])
        return None

    def pick_weights(self, spec: str, focus: str = "mplus", profile: str = "st") -> dict[str, float]:
        """Weights for a spec/content focus/damage profile.

        Fallback chain, first hit wins:
            specs[spec][focus][profile]
            specs[spec][focus]["st"]
            specs[spec]["mplus"][profile]
            specs[spec]["mplus"]["st"]

        Returns an empty dict if nothing matches.
        """
        data = self.cache.load(self.data_dir / "stats_weights.json")
        specs = data.get("specs") if isinstance(data, dict) else None
        spec_data = specs.get(spec) if isinstance(specs, dict) else None
        if not isinstance(spec_data, dict):
            return {}

        for focus_key, profile_key in (
            (focus, profile),
            (focus, "st"),
            ("mplus", profile),
            ("mplus", "st"),
        ):
            focus_data = spec_data.get(focus_key)
            if not isinstance(focus_data, dict):
                continue
            weights = focus_data.get(profile_key)
            if isinstance(weights, dict):
                if (focus_key, profile_key) != (focus, profile):
                    logger.warning(
                        f"No weights for {spec}/{focus}/{profile}, using {focus_key}/{profile_key}"
                    )
                return _numeric_weights(weights)
        return {}

    # ------------------------------------------------------------------
    # Stat priority weights
    # ------------------------------------------------------------------

    def _priority_specs(self) -> dict:
        data = self.cache.load(self.data_dir / "spec_priorities.json")
        specs = data.get("specs") if isinstance(data, dict) else None
        return specs if isinstance(specs, dict) else {}

    def list_specs(self) -> list[dict]:
        """Specs with priority weights as {key, group, label}, grouped by class."""
        out = []
        for key, definition in self._priority_specs().items():
            if not isinstance(definition, dict):
                continue
            out.append({
                "key": key,
                "group": to_text(definition.get("group")) or "Other",
                "label": to_text(definition.get("label")) or key,
            })
        return sorted(out, key=lambda s: (s["group"], s["label"]))

    def get_priority_weights(self, spec: str, content_type: str = "raid_st") -> dict[str, float]:
        """Secondary stat weights (crit/haste/mastery/vers) for a spec; {} if unknown."""
        definition = self._priority_specs().get(spec)
        if not isinstance(definition, dict):
            return {}
        weights = definition.get(content_type)
        if not isinstance(weights, dict):
            return {}
        return _numeric_weights(weights)
