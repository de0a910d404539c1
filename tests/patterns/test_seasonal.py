"""Tests for patterns/seasonal.py."""

from __future__ import annotations

import logging

import pandas as pd
import pytest

from tsfuture.core.config import DetectionThresholds
from tsfuture.patterns import SeasonalProfile, SeasonalWindow, inspect_seasons
from tsfuture.time import estimate_frequency


class TestInspectSeasons:
    """Tests for inspect_seasons."""

    def test_year_end_blackout(self, year_end_blackout: pd.DatetimeIndex) -> None:
        profile = inspect_seasons(year_end_blackout)
        assert profile.enabled
        assert profile.positions == frozenset({51, 52, 53})
        assert profile.ranges() == [(51, 53)]

    def test_week_53_inherits_from_week_52(self, year_end_blackout: pd.DatetimeIndex) -> None:
        profile = inspect_seasons(year_end_blackout)
        by_position = {w.position: w for w in profile.windows}
        assert by_position[53].inherited
        assert by_position[53].years_observed == 0
        assert not by_position[52].inherited
        assert by_position[52].years_observed == 2

    def test_regular_history_has_no_windows(self) -> None:
        history = pd.date_range("2021-01-01", "2023-12-31", freq="D")
        profile = inspect_seasons(history)
        assert profile.enabled
        assert profile.windows == ()

    def test_absence_in_one_year_only_is_not_seasonal(self) -> None:
        days = pd.date_range("2021-01-04", "2023-12-31", freq="D")
        history = days[~((days.year == 2022) & (days.isocalendar()["week"].to_numpy() == 30))]
        assert 30 not in inspect_seasons(history).positions

    def test_business_days_with_blackout(self, drop_iso_weeks) -> None:
        days = pd.bdate_range("2021-01-04", "2023-12-31")
        history = drop_iso_weeks(days, {1})
        profile = inspect_seasons(history)
        assert profile.positions == frozenset({1})

    def test_month_unit(self) -> None:
        days = pd.date_range("2021-01-01", "2023-12-31", freq="D")
        history = days[days.month != 8]
        profile = inspect_seasons(history, thresholds=DetectionThresholds(seasonal_unit="month"))
        assert profile.unit == "month"
        assert profile.positions == frozenset({8})
        assert profile.windows[0].years_observed == 3

    def test_short_history_disables(self, caplog: pytest.LogCaptureFixture) -> None:
        history = pd.date_range("2024-01-01", periods=100, freq="D")
        with caplog.at_level(logging.WARNING, logger="tsfuture.patterns.seasonal"):
            profile = inspect_seasons(history)
        assert not profile.enabled
        assert profile.notice is not None
        assert profile.notice.inspector == "seasonal"
        assert "seasonal filter disabled" in caplog.text

    def test_coarse_frequency_disables(self) -> None:
        history = pd.date_range("2020-01-01", periods=48, freq="MS")
        profile = inspect_seasons(history, frequency=estimate_frequency(history))
        assert not profile.enabled

    def test_min_seasonal_years(self, year_end_blackout: pd.DatetimeIndex) -> None:
        thresholds = DetectionThresholds(min_seasonal_years=3)
        profile = inspect_seasons(year_end_blackout, thresholds=thresholds)
        assert profile.windows == ()


class TestSeasonalProfileMask:
    """Tests for SeasonalProfile.mask and ranges."""

    def test_mask_by_iso_week(self) -> None:
        profile = SeasonalProfile(
            unit="week",
            windows=(SeasonalWindow(unit="week", position=52, presence_rate=0.0, years_observed=2),),
        )
        candidates = pd.DatetimeIndex(["2024-12-22", "2024-12-23", "2024-12-30"])
        # 2024-12-22 is week 51, 2024-12-23 week 52, 2024-12-30 week 1 of 2025
        assert list(profile.mask(candidates)) == [True, False, True]

    def test_ranges_split_runs(self) -> None:
        windows = tuple(
            SeasonalWindow(unit="week", position=p, presence_rate=0.0, years_observed=1)
            for p in (1, 2, 30, 52, 53)
        )
        profile = SeasonalProfile(unit="week", windows=windows)
        assert profile.ranges() == [(1, 2), (30, 30), (52, 53)]

    def test_empty_profile_keeps_everything(self) -> None:
        profile = SeasonalProfile(unit="week")
        candidates = pd.date_range("2024-12-01", periods=40, freq="D")
        assert profile.mask(candidates).all()
