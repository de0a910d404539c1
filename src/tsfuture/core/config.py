"""Detection thresholds for future index generation.

The cutoffs used to mark a weekday or a seasonal bucket as absent are
heuristic defaults, not guaranteed-correct rules. They live here as a
single JSON-serializable configuration object instead of constants
scattered across the inspectors.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

SeasonalUnit = Literal["week", "month"]


class BaseSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class DetectionThresholds(BaseSpec):
    """Cutoffs for weekday and seasonal absence detection.

    Args:
        weekday_absence_threshold: Presence rate below which a weekday phase is absent
        weekday_presence_threshold: Presence rate at or above which a phase is present
        cycle_lengths: Week cycles tested, shortest first
        min_cycle_samples: Minimum expected slots per phase for a cycle to count
        min_weekday_history: Minimum historical points for weekday detection
        seasonal_unit: Calendar bucket for seasonal detection ('week' or 'month')
        seasonal_fill_ratio: Share of the typical count a period needs to be populated
        seasonal_absence_threshold: Presence rate below which a bucket is absent
        min_seasonal_span_days: Minimum history span for seasonal detection
        min_seasonal_years: Minimum covered periods per bucket position
        max_future: Upper bound on requested future points
        max_scan_factor: Candidates scanned per requested point before giving up,
            on top of one full filter cycle
    """

    # Weekday inspection
    weekday_absence_threshold: float = Field(0.2, ge=0.0, le=1.0)
    weekday_presence_threshold: float = Field(0.8, ge=0.0, le=1.0)
    cycle_lengths: tuple[int, ...] = (1, 2, 3, 4)
    min_cycle_samples: int = Field(2, gt=0)
    min_weekday_history: int = Field(8, ge=2)

    # Seasonal inspection
    seasonal_unit: SeasonalUnit = "week"
    seasonal_fill_ratio: float = Field(0.5, gt=0.0, le=1.0)
    seasonal_absence_threshold: float = Field(0.2, ge=0.0, le=1.0)
    min_seasonal_span_days: int = Field(364, gt=0)
    min_seasonal_years: int = Field(1, gt=0)

    # Resource guardrails
    max_future: int = Field(100_000, gt=0)
    max_scan_factor: int = Field(20, gt=1)

    @model_validator(mode="after")
    def _check_consistency(self) -> DetectionThresholds:
        if self.weekday_absence_threshold > self.weekday_presence_threshold:
            raise ValueError(
                "weekday_absence_threshold must not exceed weekday_presence_threshold"
            )
        if not self.cycle_lengths:
            raise ValueError("cycle_lengths must include at least one cycle")
        if any(k < 1 for k in self.cycle_lengths):
            raise ValueError("cycle_lengths must be positive")
        if list(self.cycle_lengths) != sorted(set(self.cycle_lengths)):
            raise ValueError("cycle_lengths must be unique and ascending")
        return self

    @classmethod
    def strict(cls) -> DetectionThresholds:
        """Require clean, well-sampled evidence before filtering anything."""
        return cls(
            weekday_absence_threshold=0.05,
            weekday_presence_threshold=0.95,
            min_cycle_samples=4,
            min_weekday_history=28,
            seasonal_absence_threshold=0.05,
            min_seasonal_years=2,
        )

    @classmethod
    def lenient(cls) -> DetectionThresholds:
        """Filter on weaker evidence; useful for short or noisy histories."""
        return cls(
            weekday_absence_threshold=0.34,
            weekday_presence_threshold=0.66,
            min_cycle_samples=1,
            seasonal_absence_threshold=0.34,
        )


DEFAULT_THRESHOLDS = DetectionThresholds()
