"""Shake-check capture probability for the mainline games.

Uses the Gen 3+ modified catch rate on a normalized HP bar:

    a = ((3 * MaxHP - 2 * CurHP) * CatchRate * Ball * Status) / (3 * MaxHP)

with MaxHP = 1 and CurHP = remaining HP fraction. Four shake checks must
pass, each with probability b / 65535 where

    b = 1048560 / sqrt(sqrt(16711680 / a))

Every input is clamped into range instead of rejected; a calculator fed
from sliders should never fail on odd input.
"""

import logging
import math
import re
from typing import Any, Optional, Union

from gamecalc.models.capture import BallConditions, BallKey, CaptureResult
from gamecalc.utils.normalizers import normalize_ruleset_key, normalize_status

logger = logging.getLogger(__name__)

# Master Ball and friends: skips the shake checks entirely
GUARANTEED = math.inf

MAX_A_VALUE = 255.0
SHAKE_RANGE = 65535.0

STATUS_MULTIPLIERS: dict[str, float] = {
    "none": 1.0,
    "paralysis": 1.5,
    "poison": 1.5,
    "burn": 1.5,
    "sleep": 2.0,
    "freeze": 2.0,
}

FIXED_BALL_MULTIPLIERS: dict[str, float] = {
    "poke": 1.0,
    "premier": 1.0,
    "luxury": 1.0,
    "great": 1.5,
    "ultra": 2.0,
    "master": GUARANTEED,
}

QUICK_BALL_FIRST_TURN = 5.0
TIMER_BALL_STEP = 0.3
TIMER_BALL_CAP = 4.0
DUSK_BALL_BONUS = 3.0
REPEAT_BALL_BONUS = 3.0
NET_BALL_BONUS = 3.5
DIVE_BALL_BONUS = 3.5

# Rulesets with their own (unimplemented) mechanics; they use the modern formula
APPROXIMATED_RULESETS = frozenset({"gen1", "gen2", "letsgo", "pla"})


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def _as_float(value: Any, default: float) -> float:
    """Coerce to float; None, NaN and unparseable values become ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    return number


def _as_turn(turn: Any) -> int:
    number = _as_float(turn, 1.0)
    if math.isinf(number):
        return 1 if number < 0 else 10**6
    return max(1, int(number))


def is_guaranteed(multiplier: Any) -> bool:
    """True if ``multiplier`` is the guaranteed-capture sentinel."""
    number = _as_float(multiplier, 1.0)
    return math.isinf(number) and number > 0


def normalize_ball_key(ball: Union[BallKey, str, None]) -> str:
    """Map "Great Ball", "great_ball", BallKey.GREAT etc. to "great"."""
    if isinstance(ball, BallKey):
        return ball.value
    key = str(ball or "").strip().lower().replace("é", "e")
    key = re.sub(r"[\s_-]*ball$", "", key)
    return key.strip()


def status_multiplier(status: Optional[str]) -> float:
    """Status bonus: sleep/freeze 2.0, paralysis/poison/burn 1.5, else 1.0."""
    return STATUS_MULTIPLIERS.get(normalize_status(status), 1.0)


def ball_multiplier(
    ball: Union[BallKey, str, None],
    turn: Any = 1,
    conditions: Optional[BallConditions] = None,
) -> float:
    """Resolve a ball's catch multiplier for the given turn.

    Args:
        ball: Ball key ("poke", "great", ...); display names are accepted
        turn: Battle turn, 1-based. Only Quick and Timer balls use it.
        conditions: Situational flags for conditional balls. When omitted,
            Dusk/Repeat/Net/Dive/Nest balls use a neutral 1.0 because their
            bonus condition can't be known.

    Returns:
        The multiplier, or GUARANTEED for the Master Ball. Unknown balls are 1.0.
    """
    key = normalize_ball_key(ball)
    turn_index = _as_turn(turn)
    cond = conditions or BallConditions()

    if key in FIXED_BALL_MULTIPLIERS:
        return FIXED_BALL_MULTIPLIERS[key]

    if key == "quick":
        # Strong on the opening turn only
        return QUICK_BALL_FIRST_TURN if turn_index <= 1 else 1.0

    if key == "timer":
        return _clamp(1.0 + (turn_index - 1) * TIMER_BALL_STEP, 1.0, TIMER_BALL_CAP)

    if key == "dusk":
        return DUSK_BALL_BONUS if cond.is_dark_location else 1.0

    if key == "repeat":
        return REPEAT_BALL_BONUS if cond.already_caught else 1.0

    if key == "net":
        return NET_BALL_BONUS if cond.target_is_water_or_bug else 1.0

    if key == "dive":
        return DIVE_BALL_BONUS if cond.is_underwater else 1.0

    if key == "nest":
        if cond.target_level is None:
            return 1.0
        return max(1.0, (41 - _as_float(cond.target_level, 41.0)) / 10.0)

    return 1.0


def compute_a_value(
    capture_rate: Any,
    hp_fraction: Any,
    ball_mult: Any,
    status_mult: Any,
) -> float:
    """Compute the modified catch rate ``a``, clamped to [0, 255].

    A guaranteed ball yields 255.
    """
    if is_guaranteed(ball_mult):
        return MAX_A_VALUE

    rate = _clamp(_as_float(capture_rate, 0.0), 0.0, MAX_A_VALUE)
    hp = _clamp(_as_float(hp_fraction, 1.0), 0.0, 1.0)
    ball_bonus = max(0.0, _as_float(ball_mult, 1.0))
    status_bonus = _as_float(status_mult, 1.0)
    # Only the ball can guarantee a catch
    if not math.isfinite(status_bonus):
        status_bonus = 1.0
    status_bonus = max(0.0, status_bonus)

    a = ((3 * 1 - 2 * hp) * rate * ball_bonus * status_bonus) / (3 * 1)
    if math.isnan(a):
        return 0.0
    return _clamp(a, 0.0, MAX_A_VALUE)


def shake_probability_from_a(a: Any) -> float:
    """Per-shake success probability ``b / 65535`` for a given ``a``."""
    a_value = _clamp(_as_float(a, 0.0), 0.0, MAX_A_VALUE)
    if a_value >= MAX_A_VALUE:
        return 1.0
    if a_value <= 0:
        return 0.0

    b = 1048560 / math.sqrt(math.sqrt(16711680 / a_value))
    return _clamp(b / SHAKE_RANGE, 0.0, 1.0)


def capture_probability_from_a(a: Any) -> float:
    """Convert ``a`` into the chance that all four shake checks pass."""
    a_value = _clamp(_as_float(a, 0.0), 0.0, MAX_A_VALUE)
    if a_value >= MAX_A_VALUE:
        return 1.0
    # Prevent division by 0
    if a_value <= 0:
        return 0.0
    return shake_probability_from_a(a_value) ** 4


def compute_capture_probability(
    capture_rate: Any,
    health_fraction: Any,
    device_mult: Any,
    status_mult: Any,
) -> float:
    """Probability in [0, 1] that a single throw captures the target.

    Args:
        capture_rate: Species catch rate, 0-255 (higher = easier)
        health_fraction: Remaining HP as a fraction of max, 0-1
        device_mult: Ball multiplier, or GUARANTEED
        status_mult: Status multiplier (1.0 / 1.5 / 2.0)
    """
    if is_guaranteed(device_mult):
        return 1.0
    a = compute_a_value(capture_rate, health_fraction, device_mult, status_mult)
    return capture_probability_from_a(a)


def compute_catch_chance(
    ruleset_key: Optional[str],
    capture_rate: Any,
    hp_fraction: Any,
    ball: Union[BallKey, str, None],
    status: Optional[str] = None,
    turn: Any = 1,
    conditions: Optional[BallConditions] = None,
) -> CaptureResult:
    """Full catch calculation from ball/status names.

    gen34 and gen5plus share the same shake math. Gen 1/2, Let's Go and
    Legends: Arceus have their own mechanics, which are not implemented;
    they reuse the gen5plus formula so the calculator still answers.
    """
    ruleset = normalize_ruleset_key(ruleset_key)
    if ruleset in APPROXIMATED_RULESETS:
        logger.debug(f"Ruleset {ruleset} approximated with gen5plus capture formula")

    ball_mult = ball_multiplier(ball, turn, conditions)
    status_mult = status_multiplier(status)

    if is_guaranteed(ball_mult):
        return CaptureResult(
            probability=1.0,
            a_value=MAX_A_VALUE,
            shake_probability=1.0,
            ball_multiplier=ball_mult,
            status_multiplier=status_mult,
            ruleset_key=ruleset,
            guaranteed=True,
        )

    a = compute_a_value(capture_rate, hp_fraction, ball_mult, status_mult)
    return CaptureResult(
        probability=capture_probability_from_a(a),
        a_value=a,
        shake_probability=shake_probability_from_a(a),
        ball_multiplier=ball_mult,
        status_multiplier=status_mult,
        ruleset_key=ruleset,
        guaranteed=False,
    )


def expected_throws(probability: Any) -> float:
    """Mean number of throws to capture; inf when the chance is 0."""
    p = _clamp(_as_float(probability, 0.0), 0.0, 1.0)
    if p <= 0:
        return math.inf
    return 1.0 / p


def cumulative_chance(probability: Any, throws: Any) -> float:
    """Chance of at least one capture within ``throws`` attempts (min 1)."""
    p = _clamp(_as_float(probability, 0.0), 0.0, 1.0)
    n = _as_turn(throws)
    return 1.0 - (1.0 - p) ** n
