"""Core module - configuration, errors and result types."""

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

__all__ = [
    # Config
    "DetectionThresholds",
    # Results
    "FutureIndexResult",
    # Errors
    "TSFutureError",
    "EContractViolation",
    "EInsufficientHistory",
    "ETypeMismatch",
    "EConflictingOverride",
    "EFilterExhausted",
    "LowConfidenceDetection",
]
