"""Angle helpers shared by every engine module.

None of these functions raise for out-of-range longitudes; callers are
expected to normalise on ingestion, but the helpers fold whatever they get.
"""

from __future__ import annotations

import math
from typing import Sequence

from .constants import sign_name_from_lon


def norm360(x: float) -> float:
    v = float(x) % 360.0
    return 0.0 if math.isclose(v, 360.0) else v


def normalize_angle_diff(a: float, b: float) -> float:
    """Return the shortest distance between two longitudes, in [0, 180]."""

    diff = abs(a - b) % 360.0
    return min(diff, 360.0 - diff)


def circular_midpoint(a: float, b: float) -> float:
    """Average two longitudes along the short arc.

    A plain mean of 350° and 10° gives 180°; when the inputs are more than
    half a circle apart the mean is flipped to the opposite point.
    """

    mid = (a + b) / 2.0
    if abs(a - b) > 180.0:
        mid += 180.0
    return mid % 360.0


def longitude_to_sign(lon: float) -> str:
    return sign_name_from_lon(lon)


def in_arc(lon: float, start: float, end: float) -> bool:
    if start <= end:
        return start <= lon < end
    # arc crosses 0°
    return lon >= start or lon < end


def longitude_to_house(lon: float, cusps: Sequence[float]) -> int:
    """Return the house (1..12) whose cusp arc contains ``lon``.

    ``cusps`` holds the twelve cusp longitudes in house order. House 12
    wraps back to the first cusp. Degenerate cusp tables that match no arc
    fall back to house 1.
    """

    count = len(cusps)
    for i in range(count):
        if in_arc(lon, cusps[i], cusps[(i + 1) % count]):
            return i + 1
    return 1


def digit_sum(n: int) -> int:
    return sum(int(ch) for ch in str(abs(int(n))))


def digital_root(n: int) -> int:
    """Sum digits repeatedly until a single digit remains."""

    n = abs(int(n))
    while n > 9:
        n = digit_sum(n)
    return n


def round_half_up(x: float) -> int:
    # Math.round semantics; Python's round() uses banker's rounding.
    return int(math.floor(x + 0.5))


__all__ = [
    "circular_midpoint",
    "digit_sum",
    "digital_root",
    "in_arc",
    "longitude_to_house",
    "longitude_to_sign",
    "norm360",
    "normalize_angle_diff",
    "round_half_up",
]
