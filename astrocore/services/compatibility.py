from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .aspects import Aspect, synastry_aspects
from .chart import Chart
from .constants import (
    CHALLENGING_ASPECTS,
    COMPATIBILITY_WEIGHTS,
    DEFAULT_COMPATIBILITY_WEIGHT,
    HARMONIOUS_ASPECTS,
)
from .geometry import round_half_up


@dataclass(frozen=True)
class CompatibilityResult:
    score: int
    aspects: Tuple[Aspect, ...]
    harmonious_count: int
    challenging_count: int
    summary: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "aspects": [a.as_dict() for a in self.aspects],
            "harmonious_count": self.harmonious_count,
            "challenging_count": self.challenging_count,
            "summary": self.summary,
        }


def aspect_weight(aspect_type: str) -> float:
    return COMPATIBILITY_WEIGHTS.get(aspect_type, DEFAULT_COMPATIBILITY_WEIGHT)


def compatibility_score(aspects: Sequence[Aspect]) -> int:
    """Weighted mean of aspect strengths as a 0..100 percentage.

    No aspects means no measurable compatibility, which scores 0.
    """

    if not aspects:
        return 0
    total = sum(a.strength * aspect_weight(a.type) for a in aspects)
    return round_half_up(total / len(aspects) * 100)


def count_by_nature(aspects: Sequence[Aspect]) -> Tuple[int, int]:
    harmonious = sum(1 for a in aspects if a.type in HARMONIOUS_ASPECTS)
    challenging = sum(1 for a in aspects if a.type in CHALLENGING_ASPECTS)
    return harmonious, challenging


def summarize(aspects: Sequence[Aspect], score: int) -> str:
    harmonious, challenging = count_by_nature(aspects)
    lines = [f"Compatibility: {score}%"]
    if harmonious:
        lines.append(f"Harmonious aspects: {harmonious}")
    if challenging:
        lines.append(f"Challenging aspects: {challenging}")
    return "\n".join(lines)


def compatibility_from_longitudes(
    longitudes_a: Mapping[str, float],
    longitudes_b: Mapping[str, float],
    orbs: Optional[Mapping[str, float]] = None,
) -> CompatibilityResult:
    aspects: List[Aspect] = synastry_aspects(longitudes_a, longitudes_b, orbs)
    score = compatibility_score(aspects)
    harmonious, challenging = count_by_nature(aspects)
    return CompatibilityResult(
        score=score,
        aspects=tuple(aspects),
        harmonious_count=harmonious,
        challenging_count=challenging,
        summary=summarize(aspects, score),
    )


def synastry(chart_a: Chart, chart_b: Chart, orbs: Optional[Mapping[str, float]] = None) -> CompatibilityResult:
    """Cross-chart aspects of ``chart_a`` against ``chart_b`` and their score."""

    return compatibility_from_longitudes(chart_a.longitudes(), chart_b.longitudes(), orbs)


__all__ = [
    "CompatibilityResult",
    "aspect_weight",
    "compatibility_from_longitudes",
    "compatibility_score",
    "count_by_nature",
    "summarize",
    "synastry",
]
