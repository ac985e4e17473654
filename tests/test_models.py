"""Tests for log and metric models."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from pathmetrics.models.log import CompletionEntry, Entry, RequestPair, StartEntry
from pathmetrics.models.metrics import RouteMetrics
from tests.helpers import make_completion, make_start


def test_entries_are_frozen() -> None:
    entry = make_start("/users/1", token="a")

    with pytest.raises(ValidationError):
        entry.path = "/other"  # type: ignore[misc]


def test_entry_union_discriminates_on_kind() -> None:
    adapter = TypeAdapter(Entry)

    start = adapter.validate_python(
        {
            "kind": "start",
            "method": "GET",
            "path": "/",
            "timestamp": "2025-07-10T17:28:13+09:00",
        }
    )
    completion = adapter.validate_python(
        {"kind": "completion", "status_code": 200, "status_text": "OK", "duration_ms": 5}
    )

    assert isinstance(start, StartEntry)
    assert isinstance(completion, CompletionEntry)
    assert completion.view_ms == 0.0


def test_route_metrics_first_sample() -> None:
    metrics = RouteMetrics(route="/a")

    metrics.add(RequestPair(start=make_start("/a", token="1"), completion=make_completion(42, "1")))

    assert metrics.count == 1
    assert (metrics.min_ms, metrics.max_ms, metrics.mean_ms) == (42, 42, 42.0)


def test_route_metrics_tracks_counters() -> None:
    metrics = RouteMetrics(route="/a")
    pairs = [
        RequestPair(start=make_start("/a", method="GET"), completion=make_completion(10, status=200)),
        RequestPair(start=make_start("/a", method="GET"), completion=make_completion(30, status=404)),
        RequestPair(start=make_start("/a", method="PUT"), completion=make_completion(20, status=200)),
    ]

    for pair in pairs:
        metrics.add(pair)

    assert metrics.count == 3
    assert metrics.min_ms == 10
    assert metrics.max_ms == 30
    assert metrics.mean_ms == pytest.approx(20.0)
    assert metrics.status_counts == {200: 2, 404: 1}
    assert metrics.method_counts == {"GET": 2, "PUT": 1}
