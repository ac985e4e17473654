"""Per-route metric models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from pathmetrics.models.log import RequestPair


class RouteMetrics(BaseModel):
    """Running statistics for one normalized route."""

    route: str
    count: int = Field(default=0, ge=0)
    min_ms: int = 0
    max_ms: int = 0
    mean_ms: float = 0.0

    status_counts: dict[int, int] = Field(default_factory=dict)
    method_counts: dict[str, int] = Field(default_factory=dict)

    total_view_ms: float = 0.0
    total_db_ms: float = 0.0

    def add(self, pair: RequestPair) -> None:
        """Fold one completed request into the running statistics."""
        duration = pair.completion.duration_ms
        self.count += 1

        if self.count == 1:
            self.min_ms = duration
            self.max_ms = duration
            self.mean_ms = float(duration)
        else:
            self.min_ms = min(self.min_ms, duration)
            self.max_ms = max(self.max_ms, duration)
            self.mean_ms += (duration - self.mean_ms) / self.count

        status = pair.completion.status_code
        self.status_counts[status] = self.status_counts.get(status, 0) + 1
        method = pair.start.method
        self.method_counts[method] = self.method_counts.get(method, 0) + 1

        # Zero means "not reported" as far as the log line can tell us
        if pair.completion.view_ms > 0:
            self.total_view_ms += pair.completion.view_ms
        if pair.completion.db_ms > 0:
            self.total_db_ms += pair.completion.db_ms


class RouteSummary(BaseModel):
    """Flat output record for one route."""

    path: str
    count: int
    max_time_ms: int
    min_time_ms: int
    avg_time_ms: str


class AnalysisResult(BaseModel):
    """Outcome of a single analyzer run."""

    model_config = ConfigDict(frozen=True)

    window_start: datetime
    window_end: datetime
    total_input_records: int = 0
    metrics_by_route: dict[str, RouteMetrics] = Field(default_factory=dict)
