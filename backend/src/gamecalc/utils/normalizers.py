"""Normalization helpers for upstream JSON shapes.

Scraped datasets come from several third-party APIs and wikis, so the same
field can show up as a number, a numeric string, ``{"value": ...}`` or a
one-element list depending on the source. Everything that reaches the
calculators passes through here first.
"""

import json
import math
import re
from typing import Any, Optional


RULESET_KEYS = frozenset({"gen1", "gen2", "gen34", "gen5plus", "letsgo", "pla"})
DEFAULT_RULESET = "gen5plus"

# Canonical status keys used by the capture engine
STATUS_KEYS = frozenset({"none", "paralysis", "poison", "burn", "sleep", "freeze"})

STATUS_ALIASES: dict[str, str] = {
    # No status
    "": "none",
    "none": "none",
    "healthy": "none",
    "ok": "none",
    # Paralysis
    "par": "paralysis",
    "paralyze": "paralysis",
    "paralyzed": "paralysis",
    "paralysis": "paralysis",
    # Poison
    "psn": "poison",
    "tox": "poison",
    "toxic": "poison",
    "poisoned": "poison",
    "badly poisoned": "poison",
    "poison": "poison",
    # Burn
    "brn": "burn",
    "burned": "burn",
    "burnt": "burn",
    "burn": "burn",
    # Sleep
    "slp": "sleep",
    "asleep": "sleep",
    "drowsy": "sleep",
    "sleep": "sleep",
    # Freeze
    "frz": "freeze",
    "frozen": "freeze",
    "frostbite": "freeze",
    "freeze": "freeze",
}


def to_text(value: Any) -> str:
    """Flatten an arbitrary JSON value into display text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return " ".join(t for t in (to_text(v) for v in value) if t)
    if isinstance(value, dict):
        if "value" in value:
            return to_text(value["value"])
        return json.dumps(value, sort_keys=True)
    return str(value)


def to_number(value: Any) -> Optional[float]:
    """Convert a JSON scalar to a finite float, or None.

    Accepts numbers, numeric strings, ``{"value": x}`` wrappers and
    single-element lists. Booleans are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    if isinstance(value, dict) and "value" in value:
        return to_number(value["value"])
    if isinstance(value, (list, tuple)) and len(value) == 1:
        return to_number(value[0])
    return None


def get_stat_number(value: Any) -> float:
    """Best-effort numeric read of a stat value; unreadable values are 0.

    Falls back to stripping everything but digits, dots and minus signs from
    the text form, so "+1,234 Haste" reads as 1234.
    """
    number = to_number(value)
    if number is not None:
        return number

    cleaned = re.sub(r"[^\d.-]", "", to_text(value))
    try:
        number = float(cleaned)
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def normalize_stats(stats: Any) -> dict[str, float]:
    """Convert an item's stats field into a flat stat bag.

    Supports the two shapes seen in item dumps:
        - list of ``{"type": "CRIT_RATING", "value": 120}`` entries
        - mapping of ``{"CRIT_RATING": 120}``

    Repeated stat types are summed.
    """
    out: dict[str, float] = {}
    if not stats:
        return out

    if isinstance(stats, list):
        for entry in stats:
            if not isinstance(entry, dict):
                continue
            stat_type = entry.get("type")
            if not isinstance(stat_type, str):
                stat_type = to_text(stat_type)
            if not stat_type:
                continue
            out[stat_type] = out.get(stat_type, 0.0) + get_stat_number(entry.get("value"))
        return out

    if isinstance(stats, dict):
        for key, value in stats.items():
            out[str(key)] = out.get(str(key), 0.0) + get_stat_number(value)

    return out


def normalize_status(status: Optional[str]) -> str:
    """Normalize a status condition name to a canonical status key.

    Examples:
        >>> normalize_status("PAR")
        'paralysis'
        >>> normalize_status("asleep")
        'sleep'
        >>> normalize_status(None)
        'none'

    Unknown names normalize to "none".
    """
    if status is None:
        return "none"
    key = str(status).strip().lower()
    return STATUS_ALIASES.get(key, "none")


def normalize_ruleset_key(key: Optional[str]) -> str:
    """Return a known ruleset key, defaulting to the modern formula."""
    value = (key or "").strip().lower()
    if value in RULESET_KEYS:
        return value
    return DEFAULT_RULESET


def coerce_name(value: Any) -> str:
    """Some builds put numeric ids into name fields; treat those as no name."""
    if isinstance(value, str):
        return value.strip()
    return ""


def normalize_slug(value: str) -> str:
    """Lowercase, hyphen-separated slug ("Mr. Mime" -> "mr-mime")."""
    slug = re.sub(r"[^a-z0-9]+", "-", (value or "").strip().lower())
    return slug.strip("-")


def title_case(value: str) -> str:
    """Title-case a slug-like name ("mr-mime" -> "Mr Mime")."""
    words = re.sub(r"[_-]+", " ", value or "").split()
    return " ".join(w[0].upper() + w[1:].lower() for w in words)


# Capture-rate field names in lookup order; anything else falls through
# to the substring scan in _find_capture_rate.
CAPTURE_RATE_FIELDS = ("capture_rate", "captureRate", "catch_rate")

BASE_STAT_ALIASES: dict[str, str] = {
    "hp": "hp",
    "atk": "atk",
    "attack": "atk",
    "def": "def",
    "defense": "def",
    "spa": "spa",
    "special-attack": "spa",
    "special_attack": "spa",
    "spd": "spd",
    "special-defense": "spd",
    "special_defense": "spd",
    "spe": "spe",
    "speed": "spe",
}


def _find_capture_rate(raw: dict) -> float:
    for field in CAPTURE_RATE_FIELDS:
        if field in raw:
            number = to_number(raw[field])
            if number is not None:
                return number

    for key, value in raw.items():
        lowered = str(key).lower()
        if "flee" in lowered:
            continue
        if "capture" in lowered or "catch" in lowered:
            number = to_number(value)
            if number is not None:
                return number

    return 0.0


def _normalize_base_stats(raw: Any) -> dict[str, int]:
    out = {key: 0 for key in ("hp", "atk", "def", "spa", "spd", "spe")}
    if isinstance(raw, list):
        # PokeAPI shape: [{"stat": {"name": "attack"}, "base_stat": 49}, ...]
        pairs = []
        for entry in raw:
            if not isinstance(entry, dict):
                continue
            stat = entry.get("stat")
            name = stat.get("name") if isinstance(stat, dict) else stat
            pairs.append((to_text(name), entry.get("base_stat")))
    elif isinstance(raw, dict):
        pairs = list(raw.items())
    else:
        return out

    for name, value in pairs:
        key = BASE_STAT_ALIASES.get(str(name).strip().lower())
        if key:
            out[key] = int(get_stat_number(value))
    return out


def _species_display_name(raw: dict, species_id: int) -> str:
    display = coerce_name(raw.get("displayName") or raw.get("display_name"))
    if display:
        return display
    name = coerce_name(raw.get("name"))
    if name:
        return title_case(name)
    slug = coerce_name(raw.get("slug"))
    if slug:
        return title_case(slug)
    return f"#{species_id}"


def _normalize_species(raw: dict) -> dict:
    species_id = int(to_number(raw.get("id")) or 0)
    name = coerce_name(raw.get("name")) or coerce_name(raw.get("slug"))
    display_name = _species_display_name(raw, species_id)
    slug = normalize_slug(coerce_name(raw.get("slug")) or name or display_name)
    return {
        "id": species_id,
        "name": name or slug,
        "slug": slug,
        "display_name": display_name,
        "capture_rate": _find_capture_rate(raw),
        "base_stats": _normalize_base_stats(raw.get("base_stats") or raw.get("stats")),
        "sprite": coerce_name(raw.get("sprite")) or None,
    }


def _normalize_item(raw: dict) -> dict:
    stats = raw.get("stats")
    if stats is None:
        stats = raw.get("statBag", raw.get("stat_bag"))
    ilvl = to_number(raw.get("ilvl", raw.get("level")))
    required_level = to_number(raw.get("required_level"))
    return {
        "id": int(to_number(raw.get("id")) or 0),
        "name": to_text(raw.get("name")).strip(),
        "slot": to_text(raw.get("slot")).strip() or None,
        "ilvl": int(ilvl) if ilvl is not None else None,
        "required_level": int(required_level) if required_level is not None else None,
        "stats": normalize_stats(stats),
    }


def normalize_upstream_record(raw: Any, kind: str) -> Optional[dict]:
    """Normalize one upstream record into the fixed internal shape.

    This is the only place that guesses at field meaning. Fallback order:

    species:
        capture rate  -> ``capture_rate``, ``captureRate``, ``catch_rate``,
                         then the first key containing "capture" or "catch"
                         (keys containing "flee" are skipped), else 0
        display name  -> ``displayName``/``display_name``, title-cased
                         ``name``, title-cased ``slug``, then ``#<id>``
        base stats    -> ``base_stats`` mapping, or PokeAPI ``stats`` list
    item:
        stats         -> ``stats``, ``statBag``, ``stat_bag``
                         (list of {type, value} or mapping; duplicates summed)
        item level    -> ``ilvl``, then ``level``

    Args:
        raw: Record as decoded from JSON
        kind: "species" or "item"

    Returns:
        Normalized dict, or None if ``raw`` isn't a JSON object.

    Raises:
        ValueError: If ``kind`` is not a known record kind
    """
    if kind not in ("species", "item"):
        raise ValueError(f"Unknown record kind: {kind}")
    if not isinstance(raw, dict):
        return None
    if kind == "species":
        return _normalize_species(raw)
    return _normalize_item(raw)
