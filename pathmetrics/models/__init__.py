"""Data models for pathmetrics."""

from pathmetrics.models.log import (
    CompletionEntry,
    Entry,
    EntryKind,
    RawRecord,
    RequestPair,
    StartEntry,
)
from pathmetrics.models.metrics import AnalysisResult, RouteMetrics, RouteSummary

__all__ = [
    # Log
    "EntryKind",
    "RawRecord",
    "StartEntry",
    "CompletionEntry",
    "Entry",
    "RequestPair",
    # Metrics
    "RouteMetrics",
    "RouteSummary",
    "AnalysisResult",
]
