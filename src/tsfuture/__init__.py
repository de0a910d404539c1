"""tsfuture - Future time indexes that keep the gaps of their history.

Extends an irregular timestamp sequence into the future, reproducing
recurring absences (weekends, every-other-Friday closures, end-of-year
blackouts) instead of extrapolating a fixed frequency.

Basic usage:
    >>> import pandas as pd
    >>> from tsfuture import generate_future_index
    >>> history = pd.bdate_range("2024-01-01", periods=40)
    >>> future = generate_future_index(history, 10, inspect_weekdays=True)

With diagnostics and manual corrections:
    >>> from tsfuture import DetectionThresholds, build_future_index
    >>> result = build_future_index(
    ...     history,
    ...     10,
    ...     inspect_weekdays=True,
    ...     skip_values=[pd.Timestamp("2024-02-27")],
    ...     thresholds=DetectionThresholds.strict(),
    ... )
    >>> result.summary()["skipped"]
    1

Panels in [unique_id, ds, y] format:
    >>> from tsfuture import make_future_frame
    >>> future_df = make_future_frame(panel, h=14, inspect_weekdays=True)
"""

__version__ = "0.3.0"

from tsfuture.builder import build_future_index, generate_future_index, make_future_frame
from tsfuture.core.config import DetectionThresholds
from tsfuture.core.errors import (
    EConflictingOverride,
    EContractViolation,
    EFilterExhausted,
    EInsufficientHistory,
    ETypeMismatch,
    LowConfidenceDetection,
    TSFutureError,
)
from tsfuture.core.results import FutureIndexResult
from tsfuture.overrides import OverrideSet
from tsfuture.patterns import (
    SeasonalProfile,
    SeasonalWindow,
    WeekdayProfile,
    WeekdayRule,
    inspect_seasons,
    inspect_weekdays,
)
from tsfuture.time import Frequency, calendar_signature, estimate_frequency

__all__ = [
    "__version__",
    # Main entry points
    "generate_future_index",
    "build_future_index",
    "make_future_frame",
    "FutureIndexResult",
    "DetectionThresholds",
    # Building blocks
    "estimate_frequency",
    "Frequency",
    "inspect_weekdays",
    "WeekdayProfile",
    "WeekdayRule",
    "inspect_seasons",
    "SeasonalProfile",
    "SeasonalWindow",
    "OverrideSet",
    "calendar_signature",
    # Errors
    "TSFutureError",
    "EContractViolation",
    "EInsufficientHistory",
    "ETypeMismatch",
    "EConflictingOverride",
    "EFilterExhausted",
    "LowConfidenceDetection",
]
