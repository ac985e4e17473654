"""Tests for reading exported log files into raw records."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from pathmetrics.core.retrieve.log_reader import LogReader, filter_window
from pathmetrics.models.log import RawRecord
from tests.helpers import completion_line, start_line


def test_reads_cloudwatch_export(tmp_path: Path) -> None:
    payload = {
        "events": [
            {
                "logStreamName": "web-1",
                "timestamp": 1752136093000,
                "message": start_line("/users/123", token="session-123"),
                "ingestionTime": 1752136093500,
                "eventId": "evt-1",
            },
            {
                "timestamp": 1752136093150,
                "message": completion_line(150, token="session-123"),
                "eventId": "evt-2",
            },
        ],
        "searchedLogStreams": [],
    }
    path = tmp_path / "events.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    reader = LogReader()

    records = reader.read_file(path)

    assert [r.id for r in records] == ["evt-1", "evt-2"]
    assert records[0].text.startswith('Started GET "/users/123"')
    assert records[0].timestamp == datetime(2025, 7, 10, 8, 28, 13, tzinfo=UTC)
    assert reader.stats["imported"] == 2


def test_reads_event_list_and_skips_events_without_message(tmp_path: Path) -> None:
    payload = [
        {"eventId": "a", "message": "Completed 200 OK in 5ms [x]", "timestamp": 0},
        {"eventId": "b", "timestamp": 0},
        {"eventId": "c", "message": "   "},
    ]
    path = tmp_path / "events.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    reader = LogReader()

    records = reader.read_file(path)

    assert [r.id for r in records] == ["a"]
    assert reader.stats == {
        "total": 3,
        "imported": 1,
        "skipped_blank": 1,
        "skipped_invalid": 1,
    }
    assert reader.warnings == ["Event 2 has no message"]


def test_reads_ndjson(tmp_path: Path) -> None:
    lines = [
        json.dumps({"message": start_line("/a", token="1"), "timestamp": 1000}),
        "",
        json.dumps({"message": completion_line(10, token="1"), "timestamp": 2000}),
    ]
    path = tmp_path / "events.ndjson"
    path.write_text("\n".join(lines), encoding="utf-8")

    records = LogReader().read_file(path)

    assert [r.id for r in records] == ["event-1", "event-2"]
    assert records[1].timestamp == datetime(1970, 1, 1, 0, 0, 2, tzinfo=UTC)


def test_reads_plain_text(tmp_path: Path) -> None:
    path = tmp_path / "production.log"
    path.write_text(
        "\n".join(
            [
                start_line("/a", token="1"),
                "",
                "Processing by UsersController#show as HTML",
                completion_line(10, token="1"),
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    reader = LogReader()

    records = reader.read_file(path)

    assert [r.id for r in records] == ["line-1", "line-3", "line-4"]
    assert all(r.timestamp is None for r in records)
    assert reader.stats["skipped_blank"] == 1


def test_plain_text_with_tagged_lines_is_not_json(tmp_path: Path) -> None:
    path = tmp_path / "tagged.log"
    path.write_text(
        '[abc] Started GET "/" for 127.0.0.1 at 2025-07-10 17:28:13 +0900\n'
        "[abc] Completed 200 OK in 3ms\n",
        encoding="utf-8",
    )

    records = LogReader().read_file(path)

    assert len(records) == 2
    assert records[1].text == "[abc] Completed 200 OK in 3ms"


def test_read_lines_strips_newlines() -> None:
    records = LogReader().read_lines(["first\n", "\n", "second\r\n"])

    assert [(r.id, r.text) for r in records] == [("line-1", "first"), ("line-3", "second")]


def test_invalid_timestamp_is_dropped_with_warning(tmp_path: Path) -> None:
    path = tmp_path / "events.json"
    path.write_text(json.dumps([{"message": "x", "timestamp": "soon"}]), encoding="utf-8")
    reader = LogReader()

    records = reader.read_file(path)

    assert records[0].timestamp is None
    assert reader.warnings == ["Ignoring invalid event timestamp: 'soon'"]


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        LogReader().read_file(tmp_path / "missing.json")


def test_filter_window_keeps_bounds_and_untimed_records() -> None:
    start = datetime(2025, 7, 10, 0, 0, tzinfo=UTC)
    end = datetime(2025, 7, 10, 1, 0, tzinfo=UTC)
    records = [
        RawRecord(id="before", text="x", timestamp=datetime(2025, 7, 9, 23, 59, tzinfo=UTC)),
        RawRecord(id="start", text="x", timestamp=start),
        RawRecord(id="inside", text="x", timestamp=datetime(2025, 7, 10, 0, 30, tzinfo=UTC)),
        RawRecord(id="end", text="x", timestamp=end),
        RawRecord(id="after", text="x", timestamp=datetime(2025, 7, 10, 1, 0, 1, tzinfo=UTC)),
        RawRecord(id="untimed", text="x"),
    ]

    kept = filter_window(records, start, end)

    assert [r.id for r in kept] == ["start", "inside", "end", "untimed"]
