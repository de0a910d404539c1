"""Calendar signature helpers.

Thin adapters over pandas' datetime accessors. All calendar fields are
computed on local wall-clock time, so a tz-aware index is bucketed by the
dates its users actually see.
"""

from __future__ import annotations

import numpy as np
import pandas as pd


def wall_clock(index: pd.DatetimeIndex) -> pd.DatetimeIndex:
    """Drop timezone information, keeping local wall-clock time."""
    if index.tz is not None:
        return index.tz_localize(None)
    return index


def calendar_days(index: pd.DatetimeIndex) -> pd.DatetimeIndex:
    """Return the distinct calendar days touched by ``index``."""
    return wall_clock(index).normalize().unique()


def week_anchor(day: pd.Timestamp) -> pd.Timestamp:
    """Return the Monday of the week containing ``day``."""
    day = day.normalize()
    return day - pd.Timedelta(days=day.dayofweek)


def week_ordinals(index: pd.DatetimeIndex, anchor: pd.Timestamp) -> np.ndarray:
    """Whole weeks elapsed between ``anchor`` and each timestamp's day."""
    days = wall_clock(index).normalize()
    return np.asarray((days - anchor).days, dtype=np.int64) // 7


def iso_weeks(index: pd.DatetimeIndex) -> np.ndarray:
    """ISO week-of-year (1-53) for each timestamp."""
    return wall_clock(index).isocalendar()["week"].to_numpy(dtype=np.int64)


def calendar_signature(index: pd.DatetimeIndex) -> pd.DataFrame:
    """Decompose timestamps into calendar fields.

    Args:
        index: Timestamps to decompose

    Returns:
        DataFrame indexed by ``index`` with columns
        ``year, iso_year, month, week, weekday``. ``weekday`` is 0 for
        Monday through 6 for Sunday; ``week`` is the ISO week number.
    """
    local = wall_clock(index)
    iso = local.isocalendar()
    return pd.DataFrame(
        {
            "year": np.asarray(local.year, dtype=np.int64),
            "iso_year": iso["year"].to_numpy(dtype=np.int64),
            "month": np.asarray(local.month, dtype=np.int64),
            "week": iso["week"].to_numpy(dtype=np.int64),
            "weekday": np.asarray(local.dayofweek, dtype=np.int64),
        },
        index=index,
    )
