"""Stat impact and upgrade comparison models."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional


class Verdict(str, Enum):
    """Classification of a weighted score delta."""

    UPGRADE = "upgrade"
    DOWNGRADE = "downgrade"
    SIDEGRADE = "sidegrade"
    INSUFFICIENT_DATA = "insufficient-data"


@dataclass(frozen=True)
class StatDelta:
    """One stat row of a current-vs-candidate comparison."""

    key: str
    label: str
    current: float
    candidate: float
    delta: float  # candidate - current
    weight: float
    weighted_delta: float  # delta * weight


@dataclass
class ImpactResult:
    """Weighted comparison of two stat bags."""

    rows: list[StatDelta] = field(default_factory=list)
    aggregate_score: float = 0.0  # sum of weighted deltas
    current_score: float = 0.0
    candidate_score: float = 0.0
    verdict: Verdict = Verdict.INSUFFICIENT_DATA
    threshold: float = 0.5

    @property
    def summary(self) -> str:
        """Short score text for display, e.g. "+50.0 score"."""
        if self.verdict == Verdict.INSUFFICIENT_DATA:
            return "No weights found for this profile"
        sign = "+" if self.aggregate_score > 0 else ""
        return f"{sign}{self.aggregate_score:.1f} score"

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON response."""
        return {
            "rows": [asdict(row) for row in self.rows],
            "aggregate_score": self.aggregate_score,
            "current_score": self.current_score,
            "candidate_score": self.candidate_score,
            "verdict": self.verdict.value,
            "summary": self.summary,
            "threshold": self.threshold,
        }


@dataclass(frozen=True)
class PriorityEntry:
    """A stat ranked by "what should I invest into next"."""

    stat: str
    label: str
    rating: float
    weight: float
    value: float  # (rating / max rating) * weight
    score100: float  # value relative to the top entry, 0 - 100


@dataclass
class PriorityResult:
    """Ranked stat priority for a single stat bag."""

    entries: list[PriorityEntry] = field(default_factory=list)
    per100: list[tuple[str, float]] = field(default_factory=list)  # (stat, weight * 100)
    best_stat: Optional[str] = None
    verdict: Optional[Verdict] = None  # INSUFFICIENT_DATA when no weights

    @property
    def priority_line(self) -> str:
        """Priority as "HASTE > CRIT > ..." text."""
        return " > ".join(entry.stat.upper() for entry in self.entries)

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON response."""
        return {
            "entries": [asdict(entry) for entry in self.entries],
            "per100": [{"stat": stat, "units": units} for stat, units in self.per100],
            "best_stat": self.best_stat,
            "priority_line": self.priority_line,
            "verdict": self.verdict.value if self.verdict else None,
        }
