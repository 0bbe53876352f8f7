"""Data models for the game calculators."""

from gamecalc.models.capture import BallConditions, BallKey, CaptureResult
from gamecalc.models.impact import (
    ImpactResult,
    PriorityEntry,
    PriorityResult,
    StatDelta,
    Verdict,
)
from gamecalc.models.records import GameDef, GoSpeciesRecord, ItemRecord, SpeciesRecord

__all__ = [
    "BallConditions",
    "BallKey",
    "CaptureResult",
    "ImpactResult",
    "PriorityEntry",
    "PriorityResult",
    "StatDelta",
    "Verdict",
    "GameDef",
    "GoSpeciesRecord",
    "ItemRecord",
    "SpeciesRecord",
]
