"""Frequency estimation for irregular time indexes."""

from __future__ import annotations

import datetime as dt
import logging
import re
from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
import pandas as pd
from pandas.tseries.frequencies import to_offset

from tsfuture.core.errors import EContractViolation, EInsufficientHistory
from tsfuture.time.index import as_time_index

logger = logging.getLogger(__name__)

FreqLike = str | pd.Timedelta | dt.timedelta | pd.DateOffset

# A Monday, so business-day offsets measure a single day
_REFERENCE = pd.Timestamp("2000-01-03")
_DAY = pd.Timedelta(days=1)


@dataclass(frozen=True)
class Frequency:
    """Base step of a time index.

    Attributes:
        offset: pandas offset used to generate candidates
        step: Nominal duration of one step
        support: Share of historical gaps equal to the step (1.0 for defaults)
        source: Whether the step came from history or a caller default
    """

    offset: pd.DateOffset
    step: pd.Timedelta
    support: float = 1.0
    source: Literal["history", "default"] = "history"

    @property
    def alias(self) -> str:
        return self.offset.freqstr

    @property
    def whole_days(self) -> bool:
        """True when the step is a fixed multiple of one day."""
        return (
            isinstance(self.offset, (pd.offsets.Tick, pd.offsets.Day))
            and self.step >= _DAY
            and self.step % _DAY == pd.Timedelta(0)
        )

    def candidates(self, after: pd.Timestamp, periods: int) -> pd.DatetimeIndex:
        """Generate ``periods`` consecutive points strictly after ``after``.

        Whole-day steps on a tz-aware index advance by local calendar days,
        so the time of day survives DST changes.
        """
        if after.tz is not None and self.whole_days:
            local = pd.date_range(
                start=after.tz_localize(None) + self.offset,
                periods=periods,
                freq=self.offset,
            )
            return local.tz_localize(
                after.tz,
                ambiguous=np.zeros(len(local), dtype=bool),
                nonexistent="shift_forward",
            )
        return pd.date_range(start=after + self.offset, periods=periods, freq=self.offset)


def normalize_pandas_freq(freq: str) -> str:
    """Normalize pandas frequency aliases to avoid deprecation warnings.

    Month-end ``M`` (optionally with a multiplier) becomes ``ME``.
    """
    return re.sub(r"^(\d*)M$", r"\1ME", freq)


def resolve_offset(freq: FreqLike) -> pd.DateOffset:
    """Convert a frequency alias, timedelta or offset to a pandas offset."""
    if isinstance(freq, pd.DateOffset):
        return freq
    try:
        if isinstance(freq, str):
            offset = to_offset(normalize_pandas_freq(freq))
        elif isinstance(freq, (pd.Timedelta, dt.timedelta)):
            offset = to_offset(pd.Timedelta(freq))
        else:
            raise TypeError(type(freq).__name__)
    except (TypeError, ValueError) as exc:
        raise EContractViolation(
            f"Invalid frequency: {freq!r}",
            context={"freq": str(freq), "reason": str(exc)},
            fix_hint="Use a pandas offset alias ('D', 'h', 'B', 'MS') or a Timedelta",
        ) from exc
    if offset is None or (_REFERENCE + offset) <= _REFERENCE:
        raise EContractViolation(
            f"Frequency must be a positive step: {freq!r}",
            context={"freq": str(freq)},
        )
    return offset


def frequency_from(freq: FreqLike) -> Frequency:
    """Build a Frequency from a caller-supplied default."""
    offset = resolve_offset(freq)
    return Frequency(
        offset=offset,
        step=(_REFERENCE + offset) - _REFERENCE,
        support=1.0,
        source="default",
    )


def estimate_frequency(history: Any, default_freq: FreqLike | None = None) -> Frequency:
    """Estimate the dominant step of a history index.

    The step is the mode of the gaps between consecutive timestamps, with
    ties broken towards the smallest gap. It is never re-derived from
    filtered sub-ranges, so a gappy daily series still yields one day.

    Args:
        history: Strictly increasing timestamps
        default_freq: Fallback used when fewer than 2 points are available

    Returns:
        Frequency of the history (or of the default)

    Raises:
        EInsufficientHistory: Fewer than 2 points and no default given
    """
    index = as_time_index(history).index

    if len(index) < 2:
        if default_freq is None:
            raise EInsufficientHistory(
                "At least 2 historical timestamps are needed to estimate a frequency",
                context={"n_points": len(index)},
            )
        frequency = frequency_from(default_freq)
        logger.debug(
            "History has %d point(s); using default frequency %s",
            len(index),
            frequency.alias,
        )
        return frequency

    gaps = pd.Series(index[1:] - index[:-1])
    counts = gaps.value_counts()
    top = counts.max()
    step = pd.Timedelta(counts[counts == top].index.min())

    frequency = Frequency(
        offset=to_offset(step),
        step=step,
        support=float(top) / len(gaps),
    )
    logger.debug(
        "Estimated frequency %s from %d gaps (support=%.2f)",
        frequency.alias,
        len(gaps),
        frequency.support,
    )
    return frequency
