"""Upgrade checker and stat priority backed by the WoW datasets."""
from typing import Any, Mapping, Optional

from gamecalc.config import settings
from gamecalc.models.impact import ImpactResult, PriorityResult
from gamecalc.models.records import ItemRecord
from gamecalc.repositories.wow_repository import WowRepository
from gamecalc.services.calculators.impact_engine import compute_impact, compute_priority
from gamecalc.services.errors import UnknownItemError


class UpgradeService:
    """Scores gear swaps and stat investments for a spec."""

    def __init__(self, repository: Optional[WowRepository] = None, threshold: Optional[float] = None):
        self.repository = repository or WowRepository()
        self.threshold = settings.verdict_threshold if threshold is None else threshold

    def _require_item(self, item_id: int) -> ItemRecord:
        item = self.repository.get_item(item_id)
        if item is None:
            raise UnknownItemError(f"Unknown item: {item_id}")
        return item

    def compare_stats(
        self,
        current_stats: Optional[Mapping[str, Any]],
        candidate_stats: Optional[Mapping[str, Any]],
        spec: str,
        focus: str = "mplus",
        profile: str = "st",
    ) -> ImpactResult:
        """Compare two raw stat bags with the spec's weights."""
        weights = self.repository.pick_weights(spec, focus, profile)
        return compute_impact(current_stats, candidate_stats, weights, self.threshold)

    def compare_items(
        self,
        current_item_id: int,
        candidate_item_id: int,
        spec: str,
        focus: str = "mplus",
        profile: str = "st",
    ) -> tuple[ImpactResult, ItemRecord, ItemRecord]:
        """Compare two items from the item database.

        Raises:
            UnknownItemError: If either item id is not in items.json
        """
        current = self._require_item(current_item_id)
        candidate = self._require_item(candidate_item_id)
        result = self.compare_stats(current.stats, candidate.stats, spec, focus, profile)
        return result, current, candidate

    def stat_priority(
        self,
        ratings: Optional[Mapping[str, Any]],
        spec: str,
        content_type: str = "raid_st",
    ) -> PriorityResult:
        """Rank secondary stats for a spec given current ratings."""
        weights = self.repository.get_priority_weights(spec, content_type)
        return compute_priority(ratings, weights)
