"""Pokémon GO catch probability per throw.

    P = 1 - (1 - BCR / (2 * CPM)) ** M

where BCR is the species base capture rate (0-1), CPM the CP multiplier for
the encounter level, and M the product of ball, berry, throw, curveball and
medal multipliers.
"""

import math
from typing import Any, Iterable, Optional

MEDAL_MULTIPLIERS: dict[str, float] = {
    "none": 1.0,
    "bronze": 1.1,
    "silver": 1.2,
    "gold": 1.3,
    "platinum": 1.4,
}

BALL_MULTIPLIERS: dict[str, float] = {
    "poke": 1.0,
    "great": 1.5,
    "ultra": 2.0,
}

BERRY_MULTIPLIERS: dict[str, float] = {
    "none": 1.0,
    "razz": 1.5,
    "golden razz": 2.5,
    "silver pinap": 1.8,
    "pinap": 1.0,
}

THROW_MULTIPLIERS: dict[str, float] = {
    "none": 1.0,
    "nice": 1.3,
    "great": 1.5,
    "excellent": 1.7,
}

CURVEBALL_MULTIPLIER = 1.7


def _clamp01(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return max(0.0, min(1.0, value))


def _as_float(value: Any, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def _lookup(table: dict[str, float], key: Optional[str]) -> float:
    normalized = (key or "none").strip().lower().replace("é", "e")
    for suffix in (" ball", " berry", " throw"):
        if normalized.endswith(suffix):
            normalized = normalized[: -len(suffix)]
    if normalized in ("", "no bonus"):
        normalized = "none"
    return table.get(normalized, 1.0)


def medal_multiplier(medals: Iterable[Optional[str]]) -> float:
    """Type-medal bonus; dual-type encounters average the two medals."""
    values = [_lookup(MEDAL_MULTIPLIERS, medal) for medal in medals]
    if not values:
        return 1.0
    return sum(values) / len(values)


def throw_multiplier(
    ball: Optional[str] = "poke",
    berry: Optional[str] = None,
    throw: Optional[str] = None,
    curveball: bool = False,
    medals: Iterable[Optional[str]] = (),
) -> float:
    """Combined multiplier M; unknown names count as 1.0."""
    return (
        _lookup(BALL_MULTIPLIERS, ball)
        * _lookup(BERRY_MULTIPLIERS, berry)
        * _lookup(THROW_MULTIPLIERS, throw)
        * (CURVEBALL_MULTIPLIER if curveball else 1.0)
        * medal_multiplier(medals)
    )


def catch_chance_per_throw(base_capture_rate: Any, cpm: Any, multiplier: Any) -> float:
    """Single-throw catch probability, clamped to [0, 1]."""
    bcr = _as_float(base_capture_rate, 0.0)
    cp_mult = _as_float(cpm, 0.0)
    m = max(0.0, _as_float(multiplier, 1.0))
    if bcr <= 0 or cp_mult <= 0:
        return 0.0

    base = 1 - bcr / (2 * cp_mult)
    if base <= 0:
        return 1.0
    return _clamp01(1 - base**m)


def cumulative_chance(per_throw: Any, throws: Any) -> float:
    """Chance of catching within ``throws`` balls (at least one)."""
    p = _clamp01(_as_float(per_throw, 0.0))
    n = max(1, int(min(_as_float(throws, 1.0), 10**6)))
    return 1 - (1 - p) ** n


def pick_cpm(level: Any, table: list[tuple[float, float]]) -> float:
    """CP multiplier for the nearest half level in ``table``.

    Args:
        level: Encounter level (rounded to the nearest 0.5)
        table: (level, cpm) pairs

    Returns:
        The matching cpm, or 0.0 for an empty table.
    """
    if not table:
        return 0.0
    target = round(_as_float(level, 1.0) * 2) / 2
    _, best_cpm = min(table, key=lambda row: abs(row[0] - target))
    return best_cpm
