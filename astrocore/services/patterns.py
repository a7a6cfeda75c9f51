"""Three-body chart patterns: grand trine, T-square and yod."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .chart import BodyPosition
from .constants import ELEMENT
from .geometry import normalize_angle_diff


@dataclass(frozen=True)
class ChartPattern:
    type: str
    bodies: Tuple[str, ...]
    strength: float
    element: Optional[str] = None

    @property
    def description(self) -> str:
        if self.type == "grand_trine":
            text = "Grand Trine: " + ", ".join(self.bodies)
            return f"{text} ({self.element})" if self.element else text
        label = "T-Square" if self.type == "t_square" else "Yod"
        a, b, apex = self.bodies
        return f"{label}: {a} / {b}, apex {apex}"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "bodies": list(self.bodies),
            "element": self.element,
            "strength": self.strength,
            "description": self.description,
        }


Positions = Union[Mapping[str, float], Iterable[BodyPosition]]


def _as_positions(positions: Positions) -> List[BodyPosition]:
    if isinstance(positions, Mapping):
        return [BodyPosition.from_longitude(name, lon) for name, lon in positions.items()]
    return list(positions)


def _deviation(a: BodyPosition, b: BodyPosition, angle: float) -> float:
    return abs(normalize_angle_diff(a.longitude, b.longitude) - angle)


def _unique_by_bodies(patterns: List[ChartPattern]) -> List[ChartPattern]:
    seen = set()
    out = []
    for p in patterns:
        key = frozenset(p.bodies)
        if key in seen:
            continue
        seen.add(key)
        out.append(p)
    return out


def _by_strength(patterns: List[ChartPattern]) -> List[ChartPattern]:
    return sorted(patterns, key=lambda p: p.strength, reverse=True)


def detect_grand_trines(positions: Positions, max_orb: float = 8.0) -> List[ChartPattern]:
    """Three bodies in mutual trine. The element is read from the first body's sign."""

    found = []
    for p1, p2, p3 in combinations(_as_positions(positions), 3):
        orbs = [_deviation(p1, p2, 120.0), _deviation(p1, p3, 120.0), _deviation(p2, p3, 120.0)]
        if all(o <= max_orb for o in orbs):
            found.append(
                ChartPattern(
                    type="grand_trine",
                    bodies=(p1.name, p2.name, p3.name),
                    strength=1 - (sum(orbs) / 3) / max_orb,
                    element=ELEMENT.get(p1.sign),
                )
            )
    return _by_strength(found)


def _apex_patterns(
    positions: Positions,
    kind: str,
    base_angle: float,
    base_orb: float,
    apex_angle: float,
    apex_orb: float,
) -> List[ChartPattern]:
    # a base pair in one aspect, with a third body in another aspect to both
    found = []
    scale = max(base_orb, apex_orb)
    for p1, p2, p3 in combinations(_as_positions(positions), 3):
        for (a, b), apex in (((p1, p2), p3), ((p1, p3), p2), ((p2, p3), p1)):
            base_dev = _deviation(a, b, base_angle)
            if base_dev > base_orb:
                continue
            dev_a = _deviation(apex, a, apex_angle)
            dev_b = _deviation(apex, b, apex_angle)
            if dev_a <= apex_orb and dev_b <= apex_orb:
                found.append(
                    ChartPattern(
                        type=kind,
                        bodies=(a.name, b.name, apex.name),
                        strength=1 - ((base_dev + dev_a + dev_b) / 3) / scale,
                    )
                )
    return _by_strength(_unique_by_bodies(found))


def detect_t_squares(positions: Positions, max_orb_opposition: float = 8.0, max_orb_square: float = 8.0) -> List[ChartPattern]:
    return _apex_patterns(positions, "t_square", 180.0, max_orb_opposition, 90.0, max_orb_square)


def detect_yods(positions: Positions, max_orb_sextile: float = 6.0, max_orb_quincunx: float = 3.0) -> List[ChartPattern]:
    return _apex_patterns(positions, "yod", 60.0, max_orb_sextile, 150.0, max_orb_quincunx)


def detect_all_patterns(positions: Positions) -> Dict[str, List[ChartPattern]]:
    bodies = _as_positions(positions)
    grand_trines = detect_grand_trines(bodies)
    t_squares = detect_t_squares(bodies)
    yods = detect_yods(bodies)
    return {
        "grand_trines": grand_trines,
        "t_squares": t_squares,
        "yods": yods,
        "all": _by_strength(grand_trines + t_squares + yods),
    }


__all__ = [
    "ChartPattern",
    "detect_all_patterns",
    "detect_grand_trines",
    "detect_t_squares",
    "detect_yods",
]
