"""Midpoint composite charts.

Composite houses are read off chart A's cusps; they are not computed
independently for the pair.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from .aspects import Aspect, calculate_aspects
from .chart import Chart
from .constants import sign_name_from_lon
from .geometry import circular_midpoint


@dataclass(frozen=True)
class CompositePoint:
    name: str
    longitude: float
    sign: str
    house: Optional[int] = None

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CompositeChart:
    points: Tuple[CompositePoint, ...]
    aspects: Tuple[Aspect, ...] = ()

    def point(self, name: str) -> Optional[CompositePoint]:
        return next((p for p in self.points if p.name == name), None)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "points": [p.as_dict() for p in self.points],
            "aspects": [a.as_dict() for a in self.aspects],
        }


def composite_chart(chart_a: Chart, chart_b: Chart) -> CompositeChart:
    """Average the bodies both charts share along the short arc."""

    lons_b = chart_b.longitudes()
    points = []
    for body in chart_a.bodies:
        if body.name not in lons_b:
            continue
        lon = circular_midpoint(body.longitude, lons_b[body.name])
        points.append(
            CompositePoint(
                name=body.name,
                longitude=lon,
                sign=sign_name_from_lon(lon),
                house=chart_a.house_of(lon),
            )
        )

    aspects = calculate_aspects({p.name: p.longitude for p in points})
    return CompositeChart(points=tuple(points), aspects=tuple(aspects))


__all__ = ["CompositeChart", "CompositePoint", "composite_chart"]
