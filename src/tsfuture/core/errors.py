"""Core error types with rich context.

Fatal failures raise one of a handful of error classes that share a single
base carrying an error code, a context dict and an actionable fix hint.
Low-confidence pattern detection is not an error: it is reported as a
``LowConfidenceDetection`` notice and resolves to a no-op filter.
"""

# ruff: noqa: N818

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class TSFutureError(Exception):
    """Base exception with rich context.

    Attributes:
        error_code: Unique error code string for programmatic handling
        message: Human-readable error message
        context: Additional context data for debugging
        fix_hint: Actionable hint for resolving the error
    """

    error_code: str = "E_UNKNOWN"
    fix_hint: str = ""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        fix_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        if fix_hint:
            self.fix_hint = fix_hint

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.context:
            parts.append(f"(context: {self.context})")
        if self.fix_hint:
            parts.append(f"[hint: {self.fix_hint}]")
        return " ".join(parts)

    def to_agent_dict(self) -> dict[str, Any]:
        """Return a structured dict suitable for agent consumption."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "fix_hint": self.fix_hint,
            "context": self.context,
        }


class EContractViolation(TSFutureError):
    """Input violates the time index or request contract."""

    error_code = "E_CONTRACT_VIOLATION"
    fix_hint = "History must be a sorted, duplicate-free sequence of timestamps"


class EInsufficientHistory(TSFutureError):
    """Too few historical points to derive a frequency."""

    error_code = "E_INSUFFICIENT_HISTORY"
    fix_hint = "Provide at least 2 historical timestamps or pass default_freq (e.g. 'D')"


class ETypeMismatch(TSFutureError):
    """Override values use a different timestamp granularity than history."""

    error_code = "E_TYPE_MISMATCH"
    fix_hint = (
        "Pass skip/insert values of the same kind as the history "
        "(datetime.date vs datetime/Timestamp, same timezone)"
    )


class EConflictingOverride(TSFutureError):
    """The same timestamp was asked to be both skipped and inserted."""

    error_code = "E_CONFLICTING_OVERRIDE"
    fix_hint = "Remove the timestamp from either skip_values or insert_values"


class EFilterExhausted(TSFutureError):
    """Pattern filters rejected every candidate within the scan bound."""

    error_code = "E_FILTER_EXHAUSTED"
    fix_hint = "Disable one of the inspectors or relax DetectionThresholds"


@dataclass(frozen=True)
class LowConfidenceDetection:
    """Soft notice: an inspector lacked evidence and was turned into a no-op.

    Never raised. Logged at WARNING and collected on the result.
    """

    inspector: str
    reason: str
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[LOW_CONFIDENCE:{self.inspector}] {self.reason}"


# Error registry for lookup
ERROR_REGISTRY: dict[str, type[TSFutureError]] = {
    "E_CONTRACT_VIOLATION": EContractViolation,
    "E_INSUFFICIENT_HISTORY": EInsufficientHistory,
    "E_TYPE_MISMATCH": ETypeMismatch,
    "E_CONFLICTING_OVERRIDE": EConflictingOverride,
    "E_FILTER_EXHAUSTED": EFilterExhausted,
}


def get_error_class(error_code: str) -> type[TSFutureError]:
    """Get error class by code."""
    return ERROR_REGISTRY.get(error_code, TSFutureError)
