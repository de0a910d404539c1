"""Seasonal pattern inspection.

Detects calendar buckets (ISO weeks or months) that are under-populated
in every year of history, such as end-of-year blackout periods, and turns
them into a filter for future candidates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from tsfuture.core.config import DEFAULT_THRESHOLDS, DetectionThresholds, SeasonalUnit
from tsfuture.core.errors import LowConfidenceDetection
from tsfuture.time.calendar import calendar_days, iso_weeks, wall_clock
from tsfuture.time.frequency import Frequency
from tsfuture.time.index import as_time_index

logger = logging.getLogger(__name__)

_PERIOD_FREQ: dict[str, str] = {"week": "W-SUN", "month": "M"}
_BUCKET_LENGTH: dict[str, pd.Timedelta] = {
    "week": pd.Timedelta(days=7),
    "month": pd.Timedelta(days=28),
}


@dataclass(frozen=True)
class SeasonalWindow:
    """A calendar bucket absent across observed years.

    Attributes:
        unit: Bucket unit ('week' or 'month')
        position: ISO week (1-53) or month (1-12)
        presence_rate: Share of covered periods that were populated
        years_observed: Number of covered periods for this position
        inherited: True when copied from an adjacent week never observed
    """

    unit: SeasonalUnit
    position: int
    presence_rate: float
    years_observed: int
    inherited: bool = False

    def __str__(self) -> str:
        return f"{self.unit} {self.position}"


@dataclass(frozen=True)
class SeasonalProfile:
    """Absent seasonal windows detected in a history."""

    unit: SeasonalUnit
    windows: tuple[SeasonalWindow, ...] = ()
    enabled: bool = True
    notice: LowConfidenceDetection | None = None

    @classmethod
    def disabled(cls, unit: SeasonalUnit, notice: LowConfidenceDetection) -> SeasonalProfile:
        return cls(unit=unit, windows=(), enabled=False, notice=notice)

    @property
    def positions(self) -> frozenset[int]:
        return frozenset(w.position for w in self.windows)

    def ranges(self) -> list[tuple[int, int]]:
        """Collapse absent positions into contiguous (start, end) runs."""
        runs: list[tuple[int, int]] = []
        for position in sorted(self.positions):
            if runs and runs[-1][1] == position - 1:
                runs[-1] = (runs[-1][0], position)
            else:
                runs.append((position, position))
        return runs

    def mask(self, index: pd.DatetimeIndex) -> np.ndarray:
        """Return a boolean array, True where a timestamp is kept."""
        if not self.windows:
            return np.ones(len(index), dtype=bool)
        positions = bucket_positions(index, self.unit)
        return ~np.isin(positions, list(self.positions))


def bucket_positions(index: pd.DatetimeIndex, unit: SeasonalUnit) -> np.ndarray:
    """Position of each timestamp within the year for the given unit."""
    if unit == "week":
        return iso_weeks(index)
    return np.asarray(wall_clock(index).month, dtype=np.int64)


def inspect_seasons(
    history: Any,
    frequency: Frequency | None = None,
    thresholds: DetectionThresholds | None = None,
) -> SeasonalProfile:
    """Build a SeasonalProfile from a history index.

    Calendar days are grouped into periods (concrete weeks or months).
    Only periods lying entirely inside the history span are considered.
    A period is populated when its observed day count reaches
    ``seasonal_fill_ratio`` of the median count. A bucket position whose
    share of populated periods falls below ``seasonal_absence_threshold``
    is recorded as a SeasonalWindow.

    Args:
        history: Strictly increasing timestamps
        frequency: Estimated frequency; buckets finer than it disable detection
        thresholds: Detection cutoffs (defaults to DetectionThresholds())

    Returns:
        SeasonalProfile (disabled when evidence is insufficient)
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    unit = thresholds.seasonal_unit
    index = as_time_index(history).index

    if len(index) == 0:
        return _low_confidence(unit, "history is empty", n_points=0)

    observed = calendar_days(index)
    span = observed[-1] - observed[0]
    min_span = pd.Timedelta(days=thresholds.min_seasonal_span_days)
    if span < min_span:
        return _low_confidence(
            unit,
            f"history spans {span.days} days, need at least {min_span.days}",
            span_days=span.days,
        )

    if frequency is not None and frequency.step > _BUCKET_LENGTH[unit]:
        return _low_confidence(
            unit,
            f"frequency {frequency.alias} is coarser than one {unit}",
            freq=frequency.alias,
        )

    slots = pd.date_range(observed[0], observed[-1], freq="D")
    periods = slots.to_period(_PERIOD_FREQ[unit])
    counts = (
        pd.DataFrame({"period": periods, "present": slots.isin(observed)})
        .groupby("period")["present"]
        .agg(["sum", "count"])
    )
    period_index = pd.PeriodIndex(counts.index)
    if unit == "week":
        full_length = np.full(len(period_index), 7)
        positions = iso_weeks(period_index.start_time)
    else:
        full_length = np.asarray(period_index.days_in_month)
        positions = np.asarray(period_index.month, dtype=np.int64)

    covered_mask = counts["count"].to_numpy() == full_length
    if not covered_mask.any():
        return _low_confidence(unit, f"no complete {unit} inside history span")

    covered = counts[covered_mask]
    expected = float(covered["sum"].median())
    if expected <= 0:
        return _low_confidence(unit, f"typical {unit} has no observations")

    populated = covered["sum"].to_numpy() >= thresholds.seasonal_fill_ratio * expected
    stats = (
        pd.DataFrame({"position": positions[covered_mask], "populated": populated})
        .groupby("position")["populated"]
        .agg(["mean", "count"])
    )

    absent = stats[
        (stats["count"] >= thresholds.min_seasonal_years)
        & (stats["mean"] < thresholds.seasonal_absence_threshold)
    ]
    windows = [
        SeasonalWindow(
            unit=unit,
            position=int(position),
            presence_rate=float(row["mean"]),
            years_observed=int(row["count"]),
        )
        for position, row in absent.iterrows()
    ]

    # Week 53 only exists in some ISO years.
    if unit == "week" and 53 not in stats.index and 52 in absent.index:
        anchor = next(w for w in windows if w.position == 52)
        windows.append(
            SeasonalWindow(
                unit=unit,
                position=53,
                presence_rate=anchor.presence_rate,
                years_observed=0,
                inherited=True,
            )
        )

    profile = SeasonalProfile(unit=unit, windows=tuple(windows))
    if windows:
        logger.debug("Seasonal windows (%s): %s", unit, profile.ranges())
    return profile


def _low_confidence(unit: SeasonalUnit, reason: str, **context: Any) -> SeasonalProfile:
    notice = LowConfidenceDetection(
        inspector="seasonal",
        reason=f"{reason}; seasonal filter disabled",
        context=context,
    )
    logger.warning("%s", notice)
    return SeasonalProfile.disabled(unit, notice)
