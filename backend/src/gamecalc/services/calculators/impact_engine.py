"""Weighted stat comparison for the upgrade checker and stat priority views."""

import math
from typing import Any, Mapping, Optional

from gamecalc.models.impact import (
    ImpactResult,
    PriorityEntry,
    PriorityResult,
    StatDelta,
    Verdict,
)
from gamecalc.utils.normalizers import get_stat_number
from gamecalc.utils.stat_labels import label_for_stat

DEFAULT_THRESHOLD = 0.5


def _clean_bag(stats: Optional[Mapping[str, Any]]) -> dict[str, float]:
    if not stats:
        return {}
    return {str(key): get_stat_number(value) for key, value in stats.items()}


def _label_sort_key(label: str) -> tuple[str, str]:
    return (label.casefold(), label)


def classify(
    score: float, has_weights: bool, threshold: float = DEFAULT_THRESHOLD
) -> Verdict:
    """Classify a score delta against a symmetric dead zone.

    No weights at all means the comparison carries no information, which is
    reported separately from a genuine zero-score sidegrade.
    """
    if not has_weights:
        return Verdict.INSUFFICIENT_DATA
    limit = abs(threshold)
    if score > limit:
        return Verdict.UPGRADE
    if score < -limit:
        return Verdict.DOWNGRADE
    return Verdict.SIDEGRADE


def weighted_score(stats: Optional[Mapping[str, Any]], weights: Optional[Mapping[str, Any]]) -> float:
    """Sum of stat * weight over stats that carry a non-zero weight."""
    clean_weights = _clean_bag(weights)
    return math.fsum(
        value * clean_weights[key]
        for key, value in _clean_bag(stats).items()
        if clean_weights.get(key)
    )


def compute_impact(
    current_stats: Optional[Mapping[str, Any]],
    candidate_stats: Optional[Mapping[str, Any]],
    weights: Optional[Mapping[str, Any]],
    threshold: float = DEFAULT_THRESHOLD,
) -> ImpactResult:
    """Compare a candidate stat bag against the current one.

    Args:
        current_stats: Stat name -> magnitude for what is equipped now
        candidate_stats: Stat name -> magnitude for the replacement
        weights: Stat name -> per-point weight for the scoring profile
        threshold: Dead zone for the sidegrade verdict

    Returns:
        ImpactResult with rows ordered by |weighted delta|, then |delta|,
        then label. Stats that are zero on both sides are omitted.
    """
    current = _clean_bag(current_stats)
    candidate = _clean_bag(candidate_stats)
    clean_weights = _clean_bag(weights)

    rows: list[StatDelta] = []
    for key in set(current) | set(candidate):
        current_value = current.get(key, 0.0)
        candidate_value = candidate.get(key, 0.0)
        delta = candidate_value - current_value
        if current_value == 0 and candidate_value == 0 and delta == 0:
            continue
        weight = clean_weights.get(key, 0.0)
        rows.append(
            StatDelta(
                key=key,
                label=label_for_stat(key),
                current=current_value,
                candidate=candidate_value,
                delta=delta,
                weight=weight,
                weighted_delta=delta * weight,
            )
        )

    rows.sort(
        key=lambda r: (-abs(r.weighted_delta), -abs(r.delta), *_label_sort_key(r.label), r.key)
    )

    aggregate = math.fsum(row.weighted_delta for row in rows)
    return ImpactResult(
        rows=rows,
        aggregate_score=aggregate,
        current_score=weighted_score(current, clean_weights),
        candidate_score=weighted_score(candidate, clean_weights),
        verdict=classify(aggregate, bool(clean_weights), threshold),
        threshold=threshold,
    )


def compute_priority(
    ratings: Optional[Mapping[str, Any]],
    weights: Optional[Mapping[str, Any]],
) -> PriorityResult:
    """Rank which stat to invest in next.

    Ratings are normalized by the largest current rating so an existing
    distribution doesn't drown out the profile's weights, then multiplied
    by weight. Only weighted stats are ranked, using the same tie-break
    order as ``compute_impact``. No threshold applies: ranking has no
    upgrade/downgrade outcome, so ``verdict`` is only set
    (``insufficient-data``) when there are no weights.
    """
    clean_weights = _clean_bag(weights)
    if not clean_weights:
        return PriorityResult(verdict=Verdict.INSUFFICIENT_DATA)

    clean_ratings = _clean_bag(ratings)
    max_rating = max([*clean_ratings.values(), 1.0])

    raw_entries = []
    for stat, weight in clean_weights.items():
        rating = clean_ratings.get(stat, 0.0)
        raw_entries.append((stat, label_for_stat(stat), rating, weight, (rating / max_rating) * weight))

    raw_entries.sort(key=lambda e: (-e[4], -abs(e[2]), *_label_sort_key(e[1]), e[0]))

    top_value = raw_entries[0][4]
    entries = [
        PriorityEntry(
            stat=stat,
            label=label,
            rating=rating,
            weight=weight,
            value=value,
            score100=(value / top_value) * 100 if top_value > 0 else 0.0,
        )
        for stat, label, rating, weight, value in raw_entries
    ]

    per100 = sorted(
        ((stat, weight * 100) for stat, weight in clean_weights.items()),
        key=lambda item: (-item[1], *_label_sort_key(label_for_stat(item[0]))),
    )

    return PriorityResult(
        entries=entries,
        per100=per100,
        best_stat=entries[0].stat,
    )
