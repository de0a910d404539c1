"""Tests for OverrideSet validation and application."""

from __future__ import annotations

import datetime as dt

import pandas as pd
import pytest

from tsfuture import EConflictingOverride, EContractViolation, ETypeMismatch, OverrideSet
from tsfuture.time import Granularity

NAIVE = Granularity("datetime")


class TestOverrideSetFromValues:
    def test_deduplicates(self) -> None:
        overrides = OverrideSet.from_values(
            [pd.Timestamp("2024-03-01"), pd.Timestamp("2024-03-01")],
            None,
            granularity=NAIVE,
        )
        assert overrides.skip == frozenset({pd.Timestamp("2024-03-01")})
        assert overrides.insert == frozenset()

    def test_conflict_raises(self) -> None:
        ts = pd.Timestamp("2024-03-01")
        with pytest.raises(EConflictingOverride) as exc_info:
            OverrideSet.from_values([ts], [ts], granularity=NAIVE)
        assert exc_info.value.context["conflicts"] == ["2024-03-01 00:00:00"]

    def test_date_against_datetime_history_raises(self) -> None:
        with pytest.raises(ETypeMismatch):
            OverrideSet.from_values([dt.date(2024, 3, 1)], None, granularity=NAIVE)

    def test_datetime_against_date_history_raises(self) -> None:
        with pytest.raises(ETypeMismatch):
            OverrideSet.from_values(
                None, [pd.Timestamp("2024-03-01")], granularity=Granularity("date")
            )

    def test_tz_aware_against_naive_raises(self) -> None:
        with pytest.raises(ETypeMismatch):
            OverrideSet.from_values(
                [pd.Timestamp("2024-03-01", tz="UTC")], None, granularity=NAIVE
            )

    def test_string_values_raise(self) -> None:
        with pytest.raises(ETypeMismatch):
            OverrideSet.from_values(["2024-03-01"], None, granularity=NAIVE)

    def test_scalar_instead_of_collection_raises(self) -> None:
        with pytest.raises(ETypeMismatch):
            OverrideSet.from_values("2024-03-01", None, granularity=NAIVE)

    def test_insert_not_after_history_raises(self) -> None:
        with pytest.raises(EContractViolation):
            OverrideSet.from_values(
                None,
                [pd.Timestamp("2024-01-01")],
                granularity=NAIVE,
                after=pd.Timestamp("2024-01-31"),
            )


class TestOverrideSetApply:
    def test_empty_is_identity(self) -> None:
        index = pd.date_range("2024-03-01", periods=3, freq="D")
        result, skipped, inserted = OverrideSet().apply(index)
        assert result.equals(index)
        assert skipped == ()
        assert inserted == ()

    def test_skip_and_insert(self) -> None:
        index = pd.date_range("2024-03-01", periods=3, freq="D")
        overrides = OverrideSet(
            skip=frozenset({pd.Timestamp("2024-03-02"), pd.Timestamp("2024-04-01")}),
            insert=frozenset({pd.Timestamp("2024-02-28 12:00"), pd.Timestamp("2024-03-03")}),
        )
        result, skipped, inserted = overrides.apply(index)
        assert list(result) == [
            pd.Timestamp("2024-02-28 12:00"),
            pd.Timestamp("2024-03-01"),
            pd.Timestamp("2024-03-03"),
        ]
        assert skipped == (pd.Timestamp("2024-03-02"),)
        assert inserted == (pd.Timestamp("2024-02-28 12:00"),)
