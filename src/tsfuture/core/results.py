"""Result types for future index generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import pandas as pd

from tsfuture.core.errors import LowConfidenceDetection

if TYPE_CHECKING:
    from tsfuture.overrides import OverrideSet
    from tsfuture.patterns.seasonal import SeasonalProfile
    from tsfuture.patterns.weekday import WeekdayProfile
    from tsfuture.time.frequency import Frequency


@dataclass(frozen=True)
class FutureIndexResult:
    """Generated future index with the evidence used to build it.

    Profiles are None when the corresponding inspector was not requested.
    ``skipped`` and ``inserted`` only hold overrides that changed the index.
    """

    index: pd.DatetimeIndex
    n_requested: int
    frequency: Frequency
    overrides: OverrideSet
    weekday_profile: WeekdayProfile | None = None
    seasonal_profile: SeasonalProfile | None = None
    dropped_by_weekday: int = 0
    dropped_by_season: int = 0
    skipped: tuple[pd.Timestamp, ...] = ()
    inserted: tuple[pd.Timestamp, ...] = ()
    notices: tuple[LowConfidenceDetection, ...] = ()

    def __len__(self) -> int:
        return len(self.index)

    @property
    def low_confidence(self) -> bool:
        """True when any requested inspector fell back to a no-op."""
        return bool(self.notices)

    def summary(self) -> dict[str, Any]:
        """Human-readable summary of the run."""
        return {
            "n_requested": self.n_requested,
            "n_generated": len(self.index),
            "frequency": self.frequency.alias,
            "frequency_source": self.frequency.source,
            "dropped_by_weekday": self.dropped_by_weekday,
            "dropped_by_season": self.dropped_by_season,
            "skipped": len(self.skipped),
            "inserted": len(self.inserted),
            "notices": [str(n) for n in self.notices],
        }
