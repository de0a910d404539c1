"""Future index generation.

Extends a historical index by a requested number of points, reproducing
the weekday and seasonal gaps observed in history:

1. Estimate the base frequency from history.
2. Generate candidates one step after the last historical timestamp.
3. Drop candidates on absent weekdays (``inspect_weekdays``).
4. Drop candidates in absent seasonal windows (``inspect_months``).
   Steps 3 and 4 keep generating candidates until ``n_future`` survive.
5. Remove ``skip_values`` (not compensated).
6. Add ``insert_values`` (not compensated).
7. Re-sort and re-validate.

The two inspectors run independently. When both are enabled their errors
can compound: a day legitimately present in history may be removed by a
seasonal window, or kept although it should not be. This is a known
limitation of the heuristic; ``skip_values`` and ``insert_values`` are the
correction mechanism.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import Any

import numpy as np
import pandas as pd

from tsfuture.core.config import DEFAULT_THRESHOLDS, DetectionThresholds
from tsfuture.core.errors import (
    EContractViolation,
    EFilterExhausted,
    EInsufficientHistory,
    LowConfidenceDetection,
)
from tsfuture.core.results import FutureIndexResult
from tsfuture.overrides import OverrideSet
from tsfuture.patterns import seasonal, weekday
from tsfuture.patterns.seasonal import SeasonalProfile
from tsfuture.patterns.weekday import WeekdayProfile
from tsfuture.time.frequency import FreqLike, Frequency, estimate_frequency
from tsfuture.time.index import as_time_index, check_future_index

logger = logging.getLogger(__name__)

_SEASONAL_CYCLE = pd.Timedelta(days=366)
_MIN_CHUNK = 64


def build_future_index(
    history: Any,
    n_future: int,
    inspect_weekdays: bool = False,
    inspect_months: bool = False,
    skip_values: Iterable[Any] | None = None,
    insert_values: Iterable[Any] | None = None,
    *,
    default_freq: FreqLike | None = None,
    thresholds: DetectionThresholds | None = None,
) -> FutureIndexResult:
    """Generate a future index and return it with its diagnostics.

    Args:
        history: Strictly increasing historical timestamps
        n_future: Number of points to generate before overrides
        inspect_weekdays: Reproduce recurring weekday absences
        inspect_months: Reproduce recurring seasonal absences
        skip_values: Timestamps to force-exclude
        insert_values: Timestamps to force-include
        default_freq: Frequency used when history has a single point
        thresholds: Detection cutoffs (defaults to DetectionThresholds())

    Returns:
        FutureIndexResult

    Raises:
        EContractViolation: Invalid history, n_future or insert values
        EInsufficientHistory: No frequency can be derived
        ETypeMismatch: Override granularity differs from history
        EConflictingOverride: A timestamp is both skipped and inserted
        EFilterExhausted: Filters reject every candidate within the scan bound
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    _check_horizon(n_future, thresholds)

    time_index = as_time_index(history)
    if len(time_index) == 0:
        raise EInsufficientHistory("History is empty; there is no point to extend")
    index = time_index.index

    overrides = OverrideSet.from_values(
        skip_values,
        insert_values,
        granularity=time_index.granularity,
        after=time_index.last,
    )
    frequency = estimate_frequency(time_index, default_freq=default_freq)

    notices: list[LowConfidenceDetection] = []
    weekday_profile: WeekdayProfile | None = None
    seasonal_profile: SeasonalProfile | None = None
    if inspect_weekdays:
        weekday_profile = weekday.inspect_weekdays(time_index, thresholds)
        if weekday_profile.notice is not None:
            notices.append(weekday_profile.notice)
    if inspect_months:
        seasonal_profile = seasonal.inspect_seasons(time_index, frequency, thresholds)
        if seasonal_profile.notice is not None:
            notices.append(seasonal_profile.notice)

    candidates, dropped_by_weekday, dropped_by_season = _collect_candidates(
        time_index.last,
        frequency,
        n_future,
        weekday_profile,
        seasonal_profile,
        thresholds,
    )

    future, skipped, inserted = overrides.apply(candidates)
    check_future_index(future)
    future = future.rename(index.name)

    logger.debug(
        "Generated %d points (requested %d): %d dropped by weekday, "
        "%d dropped by season, %d skipped, %d inserted",
        len(future),
        n_future,
        dropped_by_weekday,
        dropped_by_season,
        len(skipped),
        len(inserted),
    )

    return FutureIndexResult(
        index=future,
        n_requested=n_future,
        frequency=frequency,
        overrides=overrides,
        weekday_profile=weekday_profile,
        seasonal_profile=seasonal_profile,
        dropped_by_weekday=dropped_by_weekday,
        dropped_by_season=dropped_by_season,
        skipped=skipped,
        inserted=inserted,
        notices=tuple(notices),
    )


def generate_future_index(
    history: Any,
    n_future: int,
    inspect_weekdays: bool = False,
    inspect_months: bool = False,
    skip_values: Iterable[Any] | None = None,
    insert_values: Iterable[Any] | None = None,
    *,
    default_freq: FreqLike | None = None,
    thresholds: DetectionThresholds | None = None,
) -> pd.DatetimeIndex:
    """Generate a future index mimicking the gaps of ``history``.

    See ``build_future_index`` for arguments and errors.

    Examples:
        >>> history = pd.bdate_range("2024-01-01", periods=40)
        >>> future = generate_future_index(history, 10, inspect_weekdays=True)
        >>> bool((future.dayofweek < 5).all())
        True
    """
    return build_future_index(
        history,
        n_future,
        inspect_weekdays=inspect_weekdays,
        inspect_months=inspect_months,
        skip_values=skip_values,
        insert_values=insert_values,
        default_freq=default_freq,
        thresholds=thresholds,
    ).index


def make_future_frame(
    panel: pd.DataFrame,
    h: int,
    inspect_weekdays: bool = False,
    inspect_months: bool = False,
    skip_values: Iterable[Any] | None = None,
    insert_values: Iterable[Any] | None = None,
    *,
    default_freq: FreqLike | None = None,
    thresholds: DetectionThresholds | None = None,
    id_col: str = "unique_id",
    ds_col: str = "ds",
    y_col: str = "y",
) -> pd.DataFrame:
    """Generate a future index per series of a long-format panel.

    Rows whose target is missing are not treated as observations. Overrides
    apply to every series.

    Returns:
        DataFrame with columns [id_col, ds_col]
    """
    missing = [c for c in (id_col, ds_col) if c not in panel.columns]
    if missing:
        raise EContractViolation(
            f"Missing required columns: {missing}",
            context={"required": [id_col, ds_col], "found": list(panel.columns)},
        )

    rows: list[pd.DataFrame] = []
    for uid in panel[id_col].unique():
        series = panel[panel[id_col] == uid]
        if y_col in series.columns and series[y_col].notna().any():
            series = series[series[y_col].notna()]
        history = pd.DatetimeIndex(series[ds_col]).sort_values()
        try:
            future = generate_future_index(
                history,
                h,
                inspect_weekdays=inspect_weekdays,
                inspect_months=inspect_months,
                skip_values=skip_values,
                insert_values=insert_values,
                default_freq=default_freq,
                thresholds=thresholds,
            )
        except EContractViolation as exc:
            exc.context.setdefault(id_col, uid)
            raise
        rows.append(pd.DataFrame({id_col: uid, ds_col: future}))

    if not rows:
        return pd.DataFrame(columns=[id_col, ds_col])

    return pd.concat(rows, ignore_index=True)


def _check_horizon(n_future: Any, thresholds: DetectionThresholds) -> None:
    if isinstance(n_future, bool) or not isinstance(n_future, (int, np.integer)):
        raise EContractViolation(
            "n_future must be an integer",
            context={"type": type(n_future).__name__},
        )
    if n_future < 1:
        raise EContractViolation(f"n_future must be positive, got {n_future}")
    if n_future > thresholds.max_future:
        raise EContractViolation(
            f"n_future={n_future} exceeds the maximum of {thresholds.max_future}",
            context={"n_future": int(n_future), "max_future": thresholds.max_future},
            fix_hint="Raise DetectionThresholds.max_future if the horizon is intended",
        )


def _collect_candidates(
    last: pd.Timestamp,
    frequency: Frequency,
    n_future: int,
    weekday_profile: WeekdayProfile | None,
    seasonal_profile: SeasonalProfile | None,
    thresholds: DetectionThresholds,
) -> tuple[pd.DatetimeIndex, int, int]:
    """Generate candidates until ``n_future`` survive the enabled filters.

    Returns:
        (survivors, dropped_by_weekday, dropped_by_season)
    """
    if weekday_profile is None and seasonal_profile is None:
        return frequency.candidates(last, n_future), 0, 0

    budget = n_future * thresholds.max_scan_factor + _scan_floor(
        frequency, weekday_profile, seasonal_profile, thresholds
    )
    chunks: list[pd.DatetimeIndex] = []
    kept = scanned = 0
    dropped_by_weekday = dropped_by_season = 0
    cursor = last

    while kept < n_future:
        if scanned >= budget:
            raise EFilterExhausted(
                f"Only {kept} of {n_future} candidates survived after scanning {scanned}",
                context={"kept": kept, "scanned": scanned, "frequency": frequency.alias},
            )
        need = n_future - kept
        chunk = frequency.candidates(cursor, min(max(2 * need, _MIN_CHUNK), budget - scanned))
        scanned += len(chunk)
        cursor = chunk[-1]

        by_weekday = (
            weekday_profile.mask(chunk)
            if weekday_profile is not None
            else np.ones(len(chunk), dtype=bool)
        )
        by_season = (
            seasonal_profile.mask(chunk)
            if seasonal_profile is not None
            else np.ones(len(chunk), dtype=bool)
        )
        keep = by_weekday & by_season

        survivors = np.flatnonzero(keep)
        cut = int(survivors[need - 1]) + 1 if len(survivors) >= need else len(chunk)
        dropped_by_weekday += int((~by_weekday[:cut]).sum())
        dropped_by_season += int((by_weekday[:cut] & ~by_season[:cut]).sum())

        taken = chunk[:cut][keep[:cut]]
        chunks.append(taken)
        kept += len(taken)

    return chunks[0].append(chunks[1:]), dropped_by_weekday, dropped_by_season


def _scan_floor(
    frequency: Frequency,
    weekday_profile: WeekdayProfile | None,
    seasonal_profile: SeasonalProfile | None,
    thresholds: DetectionThresholds,
) -> int:
    """Candidates needed to cross one full cycle of every enabled filter."""
    span = pd.Timedelta(0)
    if weekday_profile is not None and weekday_profile.rules:
        span = pd.Timedelta(weeks=max(thresholds.cycle_lengths))
    if seasonal_profile is not None and seasonal_profile.windows:
        span = _SEASONAL_CYCLE
    return math.ceil(span / frequency.step)
