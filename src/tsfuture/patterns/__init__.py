"""Pattern inspectors for recurring absences in a history index."""

from .seasonal import SeasonalProfile, SeasonalWindow, inspect_seasons
from .weekday import WeekdayProfile, WeekdayRule, inspect_weekdays

__all__ = [
    "WeekdayProfile",
    "WeekdayRule",
    "inspect_weekdays",
    "SeasonalProfile",
    "SeasonalWindow",
    "inspect_seasons",
]
