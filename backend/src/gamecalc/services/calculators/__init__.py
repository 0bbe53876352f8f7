"""Pure calculators: no I/O, no retained state."""
from gamecalc.services.calculators.capture_engine import (
    GUARANTEED,
    ball_multiplier,
    compute_capture_probability,
    compute_catch_chance,
    status_multiplier,
)
from gamecalc.services.calculators.go_capture import catch_chance_per_throw, throw_multiplier
from gamecalc.services.calculators.impact_engine import classify, compute_impact, compute_priority

__all__ = [
    "GUARANTEED",
    "ball_multiplier",
    "compute_capture_probability",
    "compute_catch_chance",
    "status_multiplier",
    "catch_chance_per_throw",
    "throw_multiplier",
    "classify",
    "compute_impact",
    "compute_priority",
]
