from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field

from .charts import ChartInput

Purpose = Literal[
    "luck",
    "health",
    "wealth",
    "love",
    "career",
    "creativity",
    "protection",
    "intuition",
    "harmony",
    "energy",
]


class PersonalCodeRequest(BaseModel):
    chart: ChartInput
    purpose: Purpose
    digit_count: int = Field(4, ge=3, le=9)


class CompatibilityRequest(BaseModel):
    person_a: ChartInput
    person_b: ChartInput
    include_composite: bool = True


class LunarCalendarRequest(BaseModel):
    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)
    natal: Optional[ChartInput] = None


class BiorhythmRequest(BaseModel):
    birth_date: date
    target_date: date
