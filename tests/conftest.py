from __future__ import annotations

from collections.abc import Callable

import pandas as pd
import pytest


def _drop_iso_weeks(days: pd.DatetimeIndex, weeks: set[int]) -> pd.DatetimeIndex:
    iso_week = days.isocalendar()["week"].to_numpy()
    return days[~pd.Series(iso_week).isin(weeks).to_numpy()]


@pytest.fixture
def drop_iso_weeks() -> Callable[[pd.DatetimeIndex, set[int]], pd.DatetimeIndex]:
    """Helper removing every day whose ISO week number is in a given set."""
    return _drop_iso_weeks


@pytest.fixture
def business_days() -> pd.DatetimeIndex:
    """Eight weeks of Monday-Friday history ending on Friday 2024-02-23."""
    return pd.bdate_range("2024-01-01", periods=40)


@pytest.fixture
def biweekly_fridays() -> pd.DatetimeIndex:
    """Twelve weeks of weekdays where Friday is closed every other week."""
    days = pd.bdate_range("2024-01-01", periods=60)
    ordinal = (days - pd.Timestamp("2024-01-01")).days // 7
    closed = (days.dayofweek == 4) & (ordinal % 2 == 1)
    return days[~closed]


@pytest.fixture
def year_end_blackout() -> pd.DatetimeIndex:
    """Three years of daily history with ISO weeks 51-53 missing every year."""
    days = pd.date_range("2021-01-04", "2023-12-31", freq="D")
    return _drop_iso_weeks(days, {51, 52, 53})
