"""Stellium detection.

Clusters are built by run clustering over bodies sorted by longitude: a body
joins the current run while it lies within ``max_orb`` of the run's last
member. Proximity is therefore not transitive; the two ends of a long run may
be further apart than ``max_orb``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .chart import BodyPosition
from .constants import STELLIUM_MAX_ORB, STELLIUM_MIN_BODIES
from .geometry import normalize_angle_diff


@dataclass(frozen=True)
class Stellium:
    bodies: Tuple[str, ...]
    dominant_sign: Optional[str]
    average_longitude: float
    spread: float
    strength: float

    def as_dict(self) -> Dict[str, Any]:
        return {
            "bodies": list(self.bodies),
            "dominant_sign": self.dominant_sign,
            "average_longitude": self.average_longitude,
            "spread": self.spread,
            "strength": self.strength,
        }


Positions = Union[Mapping[str, float], Iterable[BodyPosition]]


def _as_positions(positions: Positions) -> List[BodyPosition]:
    if isinstance(positions, Mapping):
        return [BodyPosition.from_longitude(name, lon) for name, lon in positions.items()]
    return list(positions)


def _dominant_sign(members: List[BodyPosition]) -> Optional[str]:
    counts: Dict[str, int] = {}
    for m in members:
        if m.sign:
            counts[m.sign] = counts.get(m.sign, 0) + 1
    if not counts:
        return None
    # max() keeps the first key on ties; dicts preserve member order
    return max(counts, key=lambda s: counts[s])


def stellium_strength(size: int, spread: float, max_orb: float) -> float:
    count_strength = (size - 2) * 0.5
    tightness = 1 - spread / max_orb if max_orb > 0 else 1.0
    return count_strength * (0.5 + 0.5 * tightness)


def detect_stelliums(
    positions: Positions,
    max_orb: float = STELLIUM_MAX_ORB,
    min_bodies: int = STELLIUM_MIN_BODIES,
) -> List[Stellium]:
    """Find runs of at least ``min_bodies`` bodies packed within ``max_orb``.

    ``positions`` is either a name -> longitude mapping or an iterable of
    :class:`BodyPosition`. The result is sorted by strength, strongest first.

    >>> [s.bodies for s in detect_stelliums({"Sun": 45, "Mercury": 50, "Venus": 52})]
    [('Sun', 'Mercury', 'Venus')]
    """

    ordered = sorted(_as_positions(positions), key=lambda p: p.longitude)
    used = set()
    found: List[Stellium] = []

    for i, start in enumerate(ordered):
        if start.name in used:
            continue
        run = [start]
        for candidate in ordered[i + 1:]:
            if candidate.name in used:
                continue
            if normalize_angle_diff(run[-1].longitude, candidate.longitude) <= max_orb:
                run.append(candidate)
            else:
                break

        if len(run) < min_bodies:
            continue

        lons = [p.longitude for p in run]
        spread = max(lons) - min(lons)
        found.append(
            Stellium(
                bodies=tuple(p.name for p in run),
                dominant_sign=_dominant_sign(run),
                average_longitude=sum(lons) / len(lons),
                spread=spread,
                strength=stellium_strength(len(run), spread, max_orb),
            )
        )
        used.update(p.name for p in run)

    found.sort(key=lambda s: s.strength, reverse=True)
    return found


def has_stellium(positions: Positions, max_orb: float = STELLIUM_MAX_ORB) -> bool:
    return len(detect_stelliums(positions, max_orb)) > 0


__all__ = ["Stellium", "detect_stelliums", "has_stellium", "stellium_strength"]
