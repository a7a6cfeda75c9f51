"""Shared tables consumed by every engine module.

Aspect angles, orbs and compatibility weights live here and nowhere else so
the aspect, stellium, synastry and pattern code always agree on the numbers.
"""

from typing import Dict, List, Literal, Tuple

SIGN_NAMES = ["Aries","Taurus","Gemini","Cancer","Leo","Virgo","Libra","Scorpio","Sagittarius","Capricorn","Aquarius","Pisces"]

BODY_NAMES: Tuple[str, ...] = (
    "Sun",
    "Moon",
    "Mercury",
    "Venus",
    "Mars",
    "Jupiter",
    "Saturn",
    "Uranus",
    "Neptune",
    "Pluto",
)

ELEMENT = {
  "Aries":"fire","Leo":"fire","Sagittarius":"fire",
  "Taurus":"earth","Virgo":"earth","Capricorn":"earth",
  "Gemini":"air","Libra":"air","Aquarius":"air",
  "Cancer":"water","Scorpio":"water","Pisces":"water",
}

# ---------------------------------------------------------------------------
# Aspects
# ---------------------------------------------------------------------------

AspectType = Literal[
    "conjunction",
    "sextile",
    "square",
    "trine",
    "opposition",
    "semi-sextile",
    "semi-square",
    "sesquiquadrate",
    "quincunx",
    "quintile",
    "biquintile",
]

# Canonical evaluation order. The first type within its own orb wins.
MAJOR_ASPECTS: List[Tuple[str, float]] = [
    ("conjunction", 0.0),
    ("sextile", 60.0),
    ("square", 90.0),
    ("trine", 120.0),
    ("opposition", 180.0),
]

MINOR_ASPECTS: List[Tuple[str, float]] = [
    ("semi-sextile", 30.0),
    ("semi-square", 45.0),
    ("sesquiquadrate", 135.0),
    ("quincunx", 150.0),
    ("quintile", 72.0),
    ("biquintile", 144.0),
]

DEFAULT_ORBS: Dict[str, float] = {
    "conjunction": 8.0,
    "sextile": 6.0,
    "square": 8.0,
    "trine": 8.0,
    "opposition": 8.0,
    "semi-sextile": 2.0,
    "semi-square": 2.0,
    "sesquiquadrate": 2.0,
    "quincunx": 3.0,
    "quintile": 2.0,
    "biquintile": 2.0,
}

COMPATIBILITY_WEIGHTS: Dict[str, float] = {
    "conjunction": 0.8,
    "sextile": 0.9,
    "square": 0.3,
    "trine": 1.0,
    "opposition": 0.5,
}
DEFAULT_COMPATIBILITY_WEIGHT = 0.5

HARMONIOUS_ASPECTS = frozenset({"sextile", "trine", "conjunction"})
CHALLENGING_ASPECTS = frozenset({"square", "opposition"})

# ---------------------------------------------------------------------------
# Stelliums
# ---------------------------------------------------------------------------

STELLIUM_MAX_ORB = 8.0
STELLIUM_MIN_BODIES = 3

# ---------------------------------------------------------------------------
# Lunar cycle
# ---------------------------------------------------------------------------

SYNODIC_MONTH_DAYS = 29.53
VOID_OF_COURSE_DEGREE = 28.0
NEW_MOON_SCAN_DAYS = 30
NEW_MOON_THRESHOLD = 0.05
NEW_MOON_RISE = 0.02

# (lower bound in degrees, phase name); new_moon also covers [337.5, 360).
PHASE_BANDS: List[Tuple[float, str]] = [
    (22.5, "waxing_crescent"),
    (67.5, "first_quarter"),
    (112.5, "waxing_gibbous"),
    (157.5, "full_moon"),
    (202.5, "waning_gibbous"),
    (247.5, "last_quarter"),
    (292.5, "waning_crescent"),
    (337.5, "new_moon"),
]

# Key phases as fractions of the synodic cycle, in the order they are reached.
KEY_PHASES: List[Tuple[float, str]] = [
    (0.25, "first_quarter"),
    (0.5, "full_moon"),
    (0.75, "last_quarter"),
    (0.0, "new_moon"),
]

LUNAR_DAYS: Dict[int, Tuple[str, str]] = {
    1: ("Beginning", "positive"),
    9: ("Cleansing", "challenging"),
    15: ("Fullness", "positive"),
    23: ("Crocodile", "challenging"),
    29: ("Darkness", "challenging"),
}

# ---------------------------------------------------------------------------
# Personal code
# ---------------------------------------------------------------------------

CODE_IMPORTANCE_SCALE: Dict[str, float] = {
    "primary": 1.0,
    "secondary": 1.5,
    "supporting": 0.7,
}
RETROGRADE_OFFSET_DEG = 180.0
STRONG_ASPECT_THRESHOLD = 0.7
MASTER_NUMBERS = frozenset({11, 22, 33})
MIN_CODE_DIGITS = 3
MAX_CODE_DIGITS = 9

# purpose -> (primary, secondary, supporting, houses)
PURPOSES: Dict[str, Dict[str, object]] = {
    "luck": {"primary": "Jupiter", "secondary": "Sun", "supporting": ["Venus", "Mercury"], "houses": [1, 5, 9, 11]},
    "health": {"primary": "Sun", "secondary": "Moon", "supporting": ["Mars", "Venus"], "houses": [1, 6]},
    "wealth": {"primary": "Jupiter", "secondary": "Venus", "supporting": ["Sun", "Pluto"], "houses": [2, 8, 10, 11]},
    "love": {"primary": "Venus", "secondary": "Moon", "supporting": ["Mars", "Neptune"], "houses": [5, 7]},
    "career": {"primary": "Saturn", "secondary": "Sun", "supporting": ["Mars", "Jupiter"], "houses": [10, 6, 2]},
    "creativity": {"primary": "Venus", "secondary": "Neptune", "supporting": ["Sun", "Mercury"], "houses": [5, 3, 12]},
    "protection": {"primary": "Saturn", "secondary": "Mars", "supporting": ["Pluto", "Jupiter"], "houses": [4, 8, 12]},
    "intuition": {"primary": "Neptune", "secondary": "Moon", "supporting": ["Uranus", "Pluto"], "houses": [8, 9, 12]},
    "harmony": {"primary": "Venus", "secondary": "Jupiter", "supporting": ["Moon", "Neptune"], "houses": [4, 7, 11]},
    "energy": {"primary": "Mars", "secondary": "Sun", "supporting": ["Jupiter", "Uranus"], "houses": [1, 5, 9]},
}

# ---------------------------------------------------------------------------
# Biorhythm
# ---------------------------------------------------------------------------

BIORHYTHM_PERIODS: Dict[str, int] = {
    "physical": 23,
    "emotional": 28,
    "intellectual": 33,
}


def sign_index_from_lon(lon: float) -> int:
    return int(lon // 30) % 12

def sign_name_from_lon(lon: float) -> str:
    return SIGN_NAMES[sign_index_from_lon(lon)]

def fmt_deg(lon: float) -> str:
    # 0..360 to "sign 12°34′"
    sidx = sign_index_from_lon(lon)
    within = lon % 30.0
    deg = int(within)
    minutes_float = (within - deg) * 60
    mins = int(minutes_float)
    secs = int((minutes_float - mins) * 60)
    return f"{SIGN_NAMES[sidx]} {deg:02d}°{mins:02d}′{secs:02d}″"
