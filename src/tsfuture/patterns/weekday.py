"""Weekday pattern inspection.

Detects weekdays that are systematically missing from a history, either
every week (weekends) or on a multi-week cycle (every 2nd, 3rd or 4th
week), and turns them into a filter for future candidates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd

from tsfuture.core.config import DEFAULT_THRESHOLDS, DetectionThresholds
from tsfuture.core.errors import LowConfidenceDetection
from tsfuture.time.calendar import calendar_days, wall_clock, week_anchor, week_ordinals
from tsfuture.time.index import as_time_index

logger = logging.getLogger(__name__)

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


@dataclass(frozen=True)
class WeekdayRule:
    """Absence rule for one weekday.

    Attributes:
        weekday: 0 (Monday) to 6 (Sunday)
        cycle_length: Authoritative cycle in weeks
        absent_phases: Cycle phases (week ordinal modulo cycle) that are absent
        presence_rates: Observed presence rate per phase
    """

    weekday: int
    cycle_length: int
    absent_phases: frozenset[int]
    presence_rates: tuple[float, ...]

    def is_absent(self, week_ordinal: int) -> bool:
        return week_ordinal % self.cycle_length in self.absent_phases

    def __str__(self) -> str:
        name = WEEKDAY_NAMES[self.weekday]
        if self.cycle_length == 1:
            return f"{name}: absent every week"
        phases = ",".join(str(p) for p in sorted(self.absent_phases))
        return f"{name}: absent in phase {phases} of a {self.cycle_length}-week cycle"


@dataclass(frozen=True)
class WeekdayProfile:
    """Resolved weekday absence rules for a history.

    Weekdays without a rule are present. Week ordinals are counted from
    ``anchor``, the Monday of the first historical week, for both history
    and future candidates.
    """

    anchor: pd.Timestamp | None
    rules: dict[int, WeekdayRule] = field(default_factory=dict)
    enabled: bool = True
    notice: LowConfidenceDetection | None = None

    @classmethod
    def disabled(cls, notice: LowConfidenceDetection) -> WeekdayProfile:
        return cls(anchor=None, rules={}, enabled=False, notice=notice)

    def is_present(self, weekday: int) -> bool:
        """Check if a weekday is never filtered."""
        return weekday not in self.rules

    @property
    def absent_weekdays(self) -> list[int]:
        """Weekdays absent every week."""
        return sorted(wd for wd, rule in self.rules.items() if rule.cycle_length == 1)

    def mask(self, index: pd.DatetimeIndex) -> np.ndarray:
        """Return a boolean array, True where a timestamp is kept."""
        keep = np.ones(len(index), dtype=bool)
        if not self.rules or self.anchor is None:
            return keep

        weekdays = np.asarray(wall_clock(index).dayofweek)
        ordinals = week_ordinals(index, self.anchor)
        for weekday, rule in self.rules.items():
            on_weekday = weekdays == weekday
            in_absent_phase = np.isin(ordinals % rule.cycle_length, list(rule.absent_phases))
            keep &= ~(on_weekday & in_absent_phase)
        return keep


def inspect_weekdays(
    history: Any,
    thresholds: DetectionThresholds | None = None,
) -> WeekdayProfile:
    """Build a WeekdayProfile from a history index.

    Every calendar day between the first and last historical day is an
    expected slot; a slot is present when at least one timestamp falls on
    it. For each weekday the shortest cycle length whose phases are all
    clearly present or clearly absent, and which has an absent phase,
    becomes the rule for that weekday.

    Args:
        history: Strictly increasing timestamps
        thresholds: Detection cutoffs (defaults to DetectionThresholds())

    Returns:
        WeekdayProfile (disabled when history is too short)
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    index = as_time_index(history).index

    if len(index) < thresholds.min_weekday_history:
        notice = LowConfidenceDetection(
            inspector="weekday",
            reason=(
                f"{len(index)} historical points, need at least "
                f"{thresholds.min_weekday_history}; weekday filter disabled"
            ),
            context={"n_points": len(index)},
        )
        logger.warning("%s", notice)
        return WeekdayProfile.disabled(notice)

    observed = calendar_days(index)
    slots = pd.date_range(observed[0], observed[-1], freq="D")
    anchor = week_anchor(observed[0])
    slot_frame = pd.DataFrame(
        {
            "weekday": np.asarray(slots.dayofweek),
            "ordinal": week_ordinals(slots, anchor),
            "present": slots.isin(observed),
        }
    )

    rules: dict[int, WeekdayRule] = {}
    for weekday, group in slot_frame.groupby("weekday"):
        rule = _resolve_rule(int(weekday), group, thresholds)
        if rule is not None:
            rules[rule.weekday] = rule
            logger.debug("Weekday rule: %s", rule)

    return WeekdayProfile(anchor=anchor, rules=rules)


def _resolve_rule(
    weekday: int,
    slots: pd.DataFrame,
    thresholds: DetectionThresholds,
) -> WeekdayRule | None:
    for cycle in thresholds.cycle_lengths:
        phases = slots["ordinal"] % cycle
        stats = (
            slots.groupby(phases)["present"]
            .agg(["sum", "count"])
            .reindex(range(cycle), fill_value=0)
        )
        if (stats["count"] < thresholds.min_cycle_samples).any():
            continue

        rates = stats["sum"] / stats["count"]
        absent = rates < thresholds.weekday_absence_threshold
        present = rates >= thresholds.weekday_presence_threshold
        if not (absent | present).all():
            continue
        if absent.any():
            return WeekdayRule(
                weekday=weekday,
                cycle_length=cycle,
                absent_phases=frozenset(int(p) for p in stats.index[absent]),
                presence_rates=tuple(float(r) for r in rates),
            )
    return None
