"""Comfort score: a 0-100 rating of how pleasant current weather is."""

from __future__ import annotations

import math

IDEAL_TEMPERATURE_C = 22.0
IDEAL_HUMIDITY_PCT = 45.0

TEMPERATURE_PENALTY_PER_DEGREE = 4.0
HUMIDITY_PENALTY_PER_PERCENT = 1.0
WIND_PENALTY_PER_MS = 5.0

TEMPERATURE_WEIGHT = 0.5
HUMIDITY_WEIGHT = 0.3
WIND_WEIGHT = 0.2


def _round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (72.5 -> 73)."""
    return int(math.floor(value + 0.5))


def component_scores(temp_c: float, humidity_pct: float, wind_ms: float) -> tuple[float, float, float]:
    """Return the (temperature, humidity, wind) sub-scores, each floored at 0."""
    temp_score = max(0.0, 100.0 - abs(temp_c - IDEAL_TEMPERATURE_C) * TEMPERATURE_PENALTY_PER_DEGREE)
    humidity_score = max(0.0, 100.0 - abs(humidity_pct - IDEAL_HUMIDITY_PCT) * HUMIDITY_PENALTY_PER_PERCENT)
    wind_score = max(0.0, 100.0 - wind_ms * WIND_PENALTY_PER_MS)
    return temp_score, humidity_score, wind_score


def comfort_score(temp_c: float, humidity_pct: float, wind_ms: float) -> int:
    """
    Weighted comfort score for one observation.

    22 °C, 45 % humidity and still air score 100. Each component loses points
    linearly with distance from its ideal and bottoms out at 0, and the
    weights sum to 1, so the result is always within [0, 100].
    """
    temp_score, humidity_score, wind_score = component_scores(temp_c, humidity_pct, wind_ms)
    final = (
        temp_score * TEMPERATURE_WEIGHT
        + humidity_score * HUMIDITY_WEIGHT
        + wind_score * WIND_WEIGHT
    )
    return _round_half_up(final)
