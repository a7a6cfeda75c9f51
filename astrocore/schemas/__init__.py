from .charts import ChartInput, HouseSystem, Place

from .requests import (
    BiorhythmRequest,
    CompatibilityRequest,
    LunarCalendarRequest,
    PersonalCodeRequest,
    Purpose,
)
