"""
Score rules and half-life mapping.

Half-lives span ~1e-17 s to ~1e9 s, so they are mapped onto a turn
scale with a curve fitted to give the 7Be, 8Be and 56Ni countdowns the
feel of the classic game. Past THETA the curve is continued linearly
with its derivative at THETA, since the fitted branch explodes there.
"""

from __future__ import annotations
import math
import random

from .elements import ElementTable, DecayRule


# Fitted curve: log10(t) = -c + b*ln(m)^(1/25) + a*ln(m)^(2/25)
CURVE_A = 1.40957
CURVE_B = 21.249
CURVE_C = 16.0867

# Switch point (log10 seconds) and slope of the linear continuation
THETA = 8.0
SLOPE_D = 274.448763451


def point_value(table: ElementTable, nuclide: str) -> float:
    """Points awarded for producing a nuclide."""
    return table.point_value(nuclide)


def _curve(log_half_life: float) -> float:
    discriminant = CURVE_B * CURVE_B + 4 * CURVE_A * (CURVE_C + log_half_life)
    root = (-CURVE_B + math.sqrt(max(discriminant, 0.0))) / (2 * CURVE_A)
    return math.exp(root ** 25)


def half_life_to_turns(half_life_seconds: float) -> float:
    """
    Map a half-life in seconds to a turn scale m.

    Decay countdowns are drawn from [ceil(4m), ceil(8m)].
    """
    if half_life_seconds <= 0:
        raise ValueError(f"Half-life must be positive, got {half_life_seconds}")

    ell = math.log10(half_life_seconds)
    if ell <= THETA:
        return _curve(ell)
    return _curve(THETA) + SLOPE_D * (ell - THETA)


def decay_window(half_life_seconds: float) -> tuple[int, int]:
    """Inclusive (min, max) countdown for a half-life."""
    m = half_life_to_turns(half_life_seconds)
    return math.ceil(4 * m), math.ceil(8 * m)


def draw_decay_countdown(rule: DecayRule, rng: random.Random) -> int:
    low, high = decay_window(rule.half_life_seconds)
    return rng.randint(low, high)
