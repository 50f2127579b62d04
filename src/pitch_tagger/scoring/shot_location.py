"""Shot location helpers in canonical pitch percentages.

Canonical coordinates do not depend on how the pitch is drawn:
x ∈ [0, 100] with our team attacking towards x = 100, y ∈ [0, 100]
with 0 at the top touchline.
"""

from __future__ import annotations

import math

from pitch_tagger.models import ShotEvent

# "1T" zone: the central strip in front of goal, where one-touch
# finishes are expected.
ONE_TOUCH_Y = (39.0, 61.0)
ONE_TOUCH_DEPTH = 10.0


def canonical_xy(shot: ShotEvent) -> tuple[float, float]:
    """(x, y) as finite floats; anything unparseable becomes 0."""
    return _finite_or_zero(shot.x), _finite_or_zero(shot.y)


def in_one_touch_zone(shot: ShotEvent) -> bool:
    """True if the shot was taken in our 1T zone (x ≥ 90, central y)."""
    x, y = canonical_xy(shot)
    return _in_band(y) and 100.0 - ONE_TOUCH_DEPTH <= x <= 100.0


def in_opponent_one_touch_zone(shot: ShotEvent) -> bool:
    """True if the shot was taken in the opponent's 1T zone (x ≤ 10)."""
    x, y = canonical_xy(shot)
    return _in_band(y) and 0.0 <= x <= ONE_TOUCH_DEPTH


def is_on_pitch(shot: ShotEvent) -> bool:
    x, y = canonical_xy(shot)
    return 0.0 <= x <= 100.0 and 0.0 <= y <= 100.0


def _in_band(y: float) -> bool:
    lo, hi = ONE_TOUCH_Y
    return lo <= y <= hi


def _finite_or_zero(value) -> float:
    try:
        n = float(value)
    except (TypeError, ValueError):
        return 0.0
    return n if math.isfinite(n) else 0.0
