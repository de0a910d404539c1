"""Manual skip/insert overrides for generated future indexes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import pandas as pd

from tsfuture.core.errors import EConflictingOverride, EContractViolation
from tsfuture.time.index import Granularity, coerce_timestamps


@dataclass(frozen=True)
class OverrideSet:
    """Timestamps to force out of (skip) or into (insert) a future index.

    Overrides are applied after pattern filtering and win over it. Neither
    side is compensated: skips shorten the index, inserts lengthen it.
    """

    skip: frozenset[pd.Timestamp] = frozenset()
    insert: frozenset[pd.Timestamp] = frozenset()

    @classmethod
    def from_values(
        cls,
        skip_values: Iterable[Any] | None,
        insert_values: Iterable[Any] | None,
        granularity: Granularity,
        after: pd.Timestamp | None = None,
    ) -> OverrideSet:
        """Validate and deduplicate override values.

        Args:
            skip_values: Timestamps to force-exclude
            insert_values: Timestamps to force-include
            granularity: Granularity of the history
            after: Last historical timestamp; inserts must be later

        Raises:
            ETypeMismatch: Granularity differs from history
            EConflictingOverride: A timestamp is in both sets
            EContractViolation: An insert is not after ``after``
        """
        skip = coerce_timestamps(skip_values, granularity, role="skip_values")
        insert = coerce_timestamps(insert_values, granularity, role="insert_values")

        conflicts = skip & insert
        if conflicts:
            raise EConflictingOverride(
                "Timestamps appear in both skip_values and insert_values",
                context={"conflicts": sorted(str(ts) for ts in conflicts)},
            )

        if after is not None:
            stale = sorted(ts for ts in insert if ts <= after)
            if stale:
                raise EContractViolation(
                    "insert_values must be after the last historical timestamp",
                    context={"last": str(after), "values": [str(ts) for ts in stale]},
                    fix_hint="Only future timestamps can be inserted",
                )

        return cls(skip=skip, insert=insert)

    def is_empty(self) -> bool:
        return not self.skip and not self.insert

    def apply(
        self,
        index: pd.DatetimeIndex,
    ) -> tuple[pd.DatetimeIndex, tuple[pd.Timestamp, ...], tuple[pd.Timestamp, ...]]:
        """Apply skips then inserts to ``index``.

        Returns:
            (result, effective_skips, effective_inserts), where the effective
            sets only hold values that actually changed the index.
        """
        if self.is_empty():
            return index, (), ()

        skip_mask = index.isin(list(self.skip))
        skipped = tuple(index[skip_mask])
        result = index[~skip_mask]

        present = set(result)
        inserted = tuple(sorted(ts for ts in self.insert if ts not in present))
        if inserted:
            result = result.append(pd.DatetimeIndex(list(inserted))).sort_values()

        return result, skipped, inserted
