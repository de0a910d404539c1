"""Time index validation and granularity detection."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
import pandas as pd

from tsfuture.core.errors import EContractViolation, ETypeMismatch

GranularityKind = Literal["date", "datetime"]

# numpy datetime64 units without a time of day
_DATE_UNITS = frozenset({"Y", "M", "W", "D"})


@dataclass(frozen=True)
class Granularity:
    """Calendar granularity of a timestamp sequence.

    ``kind`` is ``"date"`` for pure ``datetime.date`` values and
    ``"datetime"`` for anything carrying a time of day. ``tz`` is the
    timezone name, or None for naive values.
    """

    kind: GranularityKind
    tz: str | None = None

    def __str__(self) -> str:
        return self.kind if self.tz is None else f"{self.kind}[{self.tz}]"


@dataclass(frozen=True)
class TimeIndex:
    """A validated, strictly increasing history index."""

    index: pd.DatetimeIndex
    granularity: Granularity

    def __len__(self) -> int:
        return len(self.index)

    @property
    def last(self) -> pd.Timestamp:
        return self.index[-1]


def _tz_name(tz: Any) -> str | None:
    return None if tz is None else str(tz)


def value_granularity(value: Any) -> Granularity | None:
    """Return the granularity of a single timestamp-like value.

    Returns None when the value is not a supported timestamp type.
    """
    if value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return Granularity("datetime", _tz_name(value.tz))
    if isinstance(value, dt.datetime):
        return Granularity("datetime", _tz_name(pd.Timestamp(value).tz))
    if isinstance(value, dt.date):
        return Granularity("date")
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            return None
        unit, _ = np.datetime_data(value.dtype)
        if unit in _DATE_UNITS:
            return Granularity("date")
        return Granularity("datetime")
    return None


def as_time_index(history: Any) -> TimeIndex:
    """Validate a history sequence and convert it to a TimeIndex.

    Accepts a DatetimeIndex, a datetime64 Series, or any iterable of
    ``datetime.date`` / ``datetime.datetime`` / ``pd.Timestamp`` /
    ``np.datetime64`` values. Input must already be strictly increasing.

    Raises:
        EContractViolation: On unsupported values, mixed granularity,
            missing values, unsorted or duplicated timestamps.
    """
    if isinstance(history, TimeIndex):
        return history

    name = getattr(history, "name", None)
    if isinstance(history, pd.Series) and pd.api.types.is_datetime64_any_dtype(history):
        history = pd.DatetimeIndex(history)

    if isinstance(history, pd.DatetimeIndex):
        if history.hasnans:
            raise EContractViolation(
                "History contains missing timestamps (NaT)",
                context={"nat_count": int(history.isna().sum())},
            )
        index = history
        granularity = Granularity("datetime", _tz_name(history.tz))
    else:
        index, granularity = _from_values(history)
        index.name = name

    _check_strictly_increasing(index, role="history")
    return TimeIndex(index=index, granularity=granularity)


def _from_values(values: Any) -> tuple[pd.DatetimeIndex, Granularity]:
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise EContractViolation(
            "History must be a sequence of timestamps",
            context={"type": type(values).__name__},
        )

    items = list(values)
    if not items:
        return pd.DatetimeIndex([]), Granularity("datetime")

    kinds: set[Granularity] = set()
    for position, value in enumerate(items):
        granularity = value_granularity(value)
        if granularity is None:
            raise EContractViolation(
                "History contains a value that is not a timestamp",
                context={"position": position, "type": type(value).__name__},
                fix_hint="Convert with pd.to_datetime() before generating a future index",
            )
        kinds.add(granularity)

    if len(kinds) > 1:
        raise EContractViolation(
            "History mixes timestamp granularities",
            context={"granularities": sorted(str(k) for k in kinds)},
        )

    granularity = kinds.pop()
    index = pd.DatetimeIndex([pd.Timestamp(v) for v in items])
    return index, granularity


def _check_strictly_increasing(index: pd.DatetimeIndex, role: str) -> None:
    if not index.is_unique:
        duplicated = index[index.duplicated()]
        raise EContractViolation(
            f"{role.capitalize()} contains duplicate timestamps",
            context={"duplicates": [str(ts) for ts in duplicated[:5]]},
            fix_hint="Drop duplicates before generating a future index",
        )
    if not index.is_monotonic_increasing:
        raise EContractViolation(
            f"{role.capitalize()} is not sorted ascending",
            context={"length": len(index)},
            fix_hint="Sort the history: index.sort_values()",
        )


def check_future_index(index: pd.DatetimeIndex) -> None:
    """Re-validate uniqueness and ordering of a generated index."""
    _check_strictly_increasing(index, role="future index")


def coerce_timestamps(
    values: Iterable[Any] | None,
    granularity: Granularity,
    role: str,
) -> frozenset[pd.Timestamp]:
    """Convert override values to Timestamps of the given granularity.

    Raises:
        ETypeMismatch: When a value is not a timestamp or its granularity
            differs from ``granularity``.
    """
    if values is None:
        return frozenset()
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise ETypeMismatch(
            f"{role} must be a collection of timestamps",
            context={"type": type(values).__name__},
        )

    out: set[pd.Timestamp] = set()
    for value in values:
        found = value_granularity(value)
        if found != granularity:
            raise ETypeMismatch(
                f"{role} value {value!r} does not match history granularity",
                context={
                    "expected": str(granularity),
                    "found": str(found) if found is not None else type(value).__name__,
                },
            )
        out.add(pd.Timestamp(value))
    return frozenset(out)
