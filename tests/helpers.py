"""Test helpers for building log lines and entries."""

from __future__ import annotations

from datetime import UTC, datetime

from pathmetrics.models.log import CompletionEntry, RawRecord, StartEntry

DEFAULT_TIMESTAMP = "2025-07-10 17:28:13 +0900"


def start_line(
    path: str,
    token: str | None = None,
    method: str = "GET",
    timestamp: str = DEFAULT_TIMESTAMP,
    ip: str = "127.0.0.1",
) -> str:
    """Build a `Started ...` log line."""
    line = f'Started {method} "{path}" for {ip} at {timestamp}'
    if token is not None:
        line += f" [{token}]"
    return line


def completion_line(
    duration_ms: int,
    token: str | None = None,
    status: int = 200,
    status_text: str = "OK",
    view_ms: float | None = None,
    db_ms: float | None = None,
) -> str:
    """Build a `Completed ...` log line."""
    line = f"Completed {status} {status_text} in {duration_ms}ms"
    if view_ms is not None and db_ms is not None:
        line += f" (Views: {view_ms}ms | ActiveRecord: {db_ms}ms)"
    elif view_ms is not None:
        line += f" (Views: {view_ms}ms)"
    elif db_ms is not None:
        line += f" (ActiveRecord: {db_ms}ms)"
    if token is not None:
        line += f" [{token}]"
    return line


def make_start(
    path: str,
    token: str = "",
    method: str = "GET",
) -> StartEntry:
    return StartEntry(
        method=method,
        path=path,
        timestamp=datetime(2025, 7, 10, 8, 28, 13, tzinfo=UTC),
        session_token=token,
    )


def make_completion(
    duration_ms: int,
    token: str = "",
    status: int = 200,
    view_ms: float = 0.0,
    db_ms: float = 0.0,
) -> CompletionEntry:
    return CompletionEntry(
        status_code=status,
        status_text="OK",
        duration_ms=duration_ms,
        view_ms=view_ms,
        db_ms=db_ms,
        session_token=token,
    )


def make_records(*lines: str) -> list[RawRecord]:
    """Wrap text lines as raw records without timestamps."""
    return [RawRecord(id=f"line-{i}", text=line) for i, line in enumerate(lines, start=1)]
