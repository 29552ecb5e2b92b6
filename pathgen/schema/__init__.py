"""Data models for scan results."""

from .models import (
    HTTP_METHODS,
    FieldFinding,
    FieldPathResult,
    FindingReporter,
    ScanContext,
    ScanLocation,
)

__all__ = [
    "HTTP_METHODS",
    "FieldFinding",
    "FieldPathResult",
    "FindingReporter",
    "ScanContext",
    "ScanLocation",
]
