from datetime import date, datetime
from typing import Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

HouseSystem = Literal["placidus", "koch", "whole_sign", "regiomontanus", "campanus"]


class Place(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)
    tz: str = "UTC"
    query: Optional[str] = None

    @field_validator("tz")
    @classmethod
    def _known_zone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown time zone: {v}") from exc
        return v


class ChartInput(BaseModel):
    date: str  # YYYY-MM-DD
    time: str = "12:00:00"  # HH:MM or HH:MM:SS
    time_known: bool = True
    place: Place
    house_system: HouseSystem = "placidus"

    @field_validator("date")
    @classmethod
    def _valid_date(cls, v: str) -> str:
        try:
            date.fromisoformat(v)
        except ValueError as exc:
            raise ValueError(f"invalid date {v!r}, expected YYYY-MM-DD") from exc
        return v

    @field_validator("time")
    @classmethod
    def _valid_time(cls, v: str) -> str:
        for fmt in ("%H:%M:%S", "%H:%M"):
            try:
                datetime.strptime(v, fmt)
                return v
            except ValueError:
                continue
        raise ValueError(f"invalid time {v!r}, expected HH:MM or HH:MM:SS")
