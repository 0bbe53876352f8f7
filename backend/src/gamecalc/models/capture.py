"""Capture calculator models."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BallKey(str, Enum):
    """Containment devices understood by the capture engine."""

    POKE = "poke"
    GREAT = "great"
    ULTRA = "ultra"
    MASTER = "master"
    PREMIER = "premier"
    LUXURY = "luxury"
    QUICK = "quick"
    DUSK = "dusk"
    REPEAT = "repeat"
    TIMER = "timer"
    NEST = "nest"
    NET = "net"
    DIVE = "dive"


@dataclass(frozen=True)
class BallConditions:
    """Situational flags that unlock conditional ball bonuses.

    Every flag defaults to "unknown", in which case the matching ball falls
    back to a neutral 1.0 multiplier.
    """

    is_dark_location: bool = False  # night or cave (Dusk Ball)
    already_caught: bool = False  # species registered (Repeat Ball)
    target_is_water_or_bug: bool = False  # Net Ball
    is_underwater: bool = False  # surfing/fishing/diving (Dive Ball)
    target_level: Optional[int] = None  # Nest Ball


@dataclass(frozen=True)
class CaptureResult:
    """Outcome of a single-throw capture calculation."""

    probability: float  # 0.0 - 1.0
    a_value: float  # modified catch rate, 0 - 255
    shake_probability: float  # per-shake success, 0.0 - 1.0
    ball_multiplier: float
    status_multiplier: float
    ruleset_key: str = "gen5plus"
    guaranteed: bool = False

    @property
    def expected_throws(self) -> float:
        """Mean throws until capture (geometric); inf when capture is impossible."""
        if self.probability <= 0:
            return math.inf
        return 1.0 / self.probability

    def cumulative_probability(self, throws: int) -> float:
        """Chance of at least one capture within ``throws`` attempts."""
        n = max(1, int(throws))
        return 1.0 - (1.0 - self.probability) ** n
