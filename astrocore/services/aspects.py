"""Aspect detection between ecliptic longitudes.

For every pair at most one aspect is reported: the types are tried in the
canonical order conjunction, sextile, square, trine, opposition and the
first whose exact angle lies within its own orb wins. Minor aspects, when
requested, are tried only after all majors.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Mapping, Optional

from .constants import DEFAULT_ORBS, MAJOR_ASPECTS, MINOR_ASPECTS, AspectType
from .geometry import normalize_angle_diff


@dataclass(frozen=True)
class AspectMatch:
    type: AspectType
    angle: float
    orb: float
    strength: float


@dataclass(frozen=True)
class Aspect:
    body_a: str
    body_b: str
    type: AspectType
    angle: float
    orb: float
    strength: float

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def aspect_strength(orb: float, max_orb: float) -> float:
    if max_orb <= 0:
        return 1.0
    return max(0.0, 1.0 - orb / max_orb)


def calculate_aspect(
    lon_a: float,
    lon_b: float,
    orbs: Optional[Mapping[str, float]] = None,
    include_minors: bool = False,
) -> Optional[AspectMatch]:
    """Return the aspect formed by two longitudes, or ``None``.

    ``orbs`` overrides the default orb of individual aspect types.

    >>> calculate_aspect(45, 135)
    AspectMatch(type='square', angle=90.0, orb=0.0, strength=1.0)
    """

    diff = normalize_angle_diff(lon_a, lon_b)
    allowed = dict(DEFAULT_ORBS)
    if orbs:
        allowed.update(orbs)

    catalog = list(MAJOR_ASPECTS)
    if include_minors:
        catalog += MINOR_ASPECTS

    for name, angle in catalog:
        max_orb = allowed[name]
        delta = abs(diff - angle)
        if delta <= max_orb:
            return AspectMatch(
                type=name,
                angle=angle,
                orb=delta,
                strength=aspect_strength(delta, max_orb),
            )
    return None


def calculate_aspects(
    longitudes: Mapping[str, float],
    orbs: Optional[Mapping[str, float]] = None,
    include_minors: bool = False,
) -> List[Aspect]:
    """Aspects for every unordered pair of bodies within one chart."""

    names = list(longitudes.keys())
    out: List[Aspect] = []
    for i in range(len(names)):
        for j in range(i + 1, len(names)):
            a, b = names[i], names[j]
            hit = calculate_aspect(longitudes[a], longitudes[b], orbs, include_minors)
            if hit:
                out.append(Aspect(a, b, hit.type, hit.angle, hit.orb, hit.strength))
    return out


def synastry_aspects(
    longitudes_a: Mapping[str, float],
    longitudes_b: Mapping[str, float],
    orbs: Optional[Mapping[str, float]] = None,
    include_minors: bool = False,
) -> List[Aspect]:
    """Aspects for every ordered (chart A body, chart B body) pair.

    Same-named bodies are compared as well: Sun A to Sun B is a valid
    synastry contact.
    """

    out: List[Aspect] = []
    for a, lon_a in longitudes_a.items():
        for b, lon_b in longitudes_b.items():
            hit = calculate_aspect(lon_a, lon_b, orbs, include_minors)
            if hit:
                out.append(Aspect(a, b, hit.type, hit.angle, hit.orb, hit.strength))
    return out


__all__ = [
    "Aspect",
    "AspectMatch",
    "aspect_strength",
    "calculate_aspect",
    "calculate_aspects",
    "synastry_aspects",
]
