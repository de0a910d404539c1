"""Tests for DetectionThresholds.

Tests configuration validation, presets, and immutability.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tsfuture import DetectionThresholds


class TestDetectionThresholdsDefaults:
    """Test config defaults."""

    def test_weekday_defaults(self):
        """Default weekday cutoffs."""
        config = DetectionThresholds()
        assert config.weekday_absence_threshold == 0.2
        assert config.weekday_presence_threshold == 0.8
        assert config.cycle_lengths == (1, 2, 3, 4)
        assert config.min_weekday_history == 8

    def test_seasonal_defaults(self):
        """Default seasonal cutoffs."""
        config = DetectionThresholds()
        assert config.seasonal_unit == "week"
        assert config.min_seasonal_span_days == 364
        assert config.seasonal_fill_ratio == 0.5

    def test_guardrail_defaults(self):
        """Default resource guardrails."""
        config = DetectionThresholds()
        assert config.max_future == 100_000
        assert config.max_scan_factor == 20


class TestDetectionThresholdsValidation:
    """Test config validation."""

    def test_absence_above_presence(self):
        """Absence cutoff cannot exceed presence cutoff."""
        with pytest.raises(ValidationError, match="must not exceed"):
            DetectionThresholds(weekday_absence_threshold=0.9, weekday_presence_threshold=0.5)

    def test_threshold_out_of_range(self):
        """Rates must stay within [0, 1]."""
        with pytest.raises(ValidationError):
            DetectionThresholds(seasonal_absence_threshold=1.5)

    def test_unsorted_cycles(self):
        """Cycle lengths must be ascending."""
        with pytest.raises(ValidationError, match="ascending"):
            DetectionThresholds(cycle_lengths=(2, 1))

    def test_non_positive_cycle(self):
        """Cycle lengths must be positive."""
        with pytest.raises(ValidationError, match="positive"):
            DetectionThresholds(cycle_lengths=(0, 1))

    def test_empty_cycles(self):
        """At least one cycle is required."""
        with pytest.raises(ValidationError):
            DetectionThresholds(cycle_lengths=())

    def test_unknown_unit(self):
        """Only week and month buckets exist."""
        with pytest.raises(ValidationError):
            DetectionThresholds(seasonal_unit="quarter")

    def test_extra_fields_forbidden(self):
        """Typos are rejected rather than ignored."""
        with pytest.raises(ValidationError):
            DetectionThresholds(weekday_threshold=0.3)

    def test_frozen(self):
        """Config is immutable."""
        config = DetectionThresholds()
        with pytest.raises(ValidationError):
            config.max_future = 5


class TestDetectionThresholdsPresets:
    """Test preset configurations."""

    def test_strict_needs_more_evidence(self):
        strict = DetectionThresholds.strict()
        default = DetectionThresholds()
        assert strict.min_cycle_samples > default.min_cycle_samples
        assert strict.weekday_absence_threshold < default.weekday_absence_threshold
        assert strict.min_seasonal_years > default.min_seasonal_years

    def test_lenient_accepts_weaker_evidence(self):
        lenient = DetectionThresholds.lenient()
        default = DetectionThresholds()
        assert lenient.weekday_absence_threshold > default.weekday_absence_threshold
        assert lenient.weekday_presence_threshold < default.weekday_presence_threshold

    def test_round_trip_dump(self):
        config = DetectionThresholds(seasonal_unit="month")
        assert DetectionThresholds(**config.model_dump()) == config
