"""Time utilities for index validation, calendar fields and frequency handling."""

from .calendar import calendar_signature, wall_clock
from .frequency import (
    Frequency,
    estimate_frequency,
    frequency_from,
    normalize_pandas_freq,
    resolve_offset,
)
from .index import Granularity, TimeIndex, as_time_index

__all__ = [
    # Index
    "TimeIndex",
    "Granularity",
    "as_time_index",
    # Calendar
    "calendar_signature",
    "wall_clock",
    # Frequency
    "Frequency",
    "estimate_frequency",
    "frequency_from",
    "normalize_pandas_freq",
    "resolve_offset",
]
