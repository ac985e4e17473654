"""Read exported log files into raw records.

Supported inputs:
- CloudWatch ``filter-log-events`` JSON output (``{"events": [...]}``)
- a JSON list of event objects, or NDJSON with one event per line
- plain text with one log line per record
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pathmetrics.models.log import RawRecord


class LogReader:
    """Turn exported log files or text streams into RawRecord lists."""

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.stats: dict[str, int] = {}
        self._reset_stats()

    def read_file(self, path: Path) -> list[RawRecord]:
        """Read a log export file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        self.warnings = []
        self._reset_stats()

        if not path.exists():
            raise FileNotFoundError(f"Log file not found: {path}")

        raw_text = path.read_text(encoding="utf-8")

        events = self._load_events(raw_text)
        if events is None:
            return self._records_from_lines(raw_text.splitlines())
        return self._records_from_events(events)

    def read_lines(self, lines: Iterable[str]) -> list[RawRecord]:
        """Read plain text lines, e.g. from stdin."""
        self.warnings = []
        self._reset_stats()
        return self._records_from_lines(lines)

    def _reset_stats(self) -> None:
        self.stats = {
            "total": 0,
            "imported": 0,
            "skipped_blank": 0,
            "skipped_invalid": 0,
        }

    def _load_events(self, raw_text: str) -> list[dict[str, Any]] | None:
        """Return event dicts for JSON/NDJSON input, or None for plain text."""
        stripped = raw_text.strip()
        if not stripped or stripped[0] not in "{[":
            return None

        try:
            loaded = json.loads(stripped)
        except json.JSONDecodeError:
            loaded = None

        if isinstance(loaded, dict):
            events = loaded.get("events")
            if isinstance(events, list):
                return [e for e in events if isinstance(e, dict)]
            return [loaded]
        if isinstance(loaded, list):
            return [e for e in loaded if isinstance(e, dict)]

        records: list[dict[str, Any]] = []
        for line_no, line in enumerate(stripped.splitlines(), start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                # Not NDJSON after all; treat the whole file as text
                return None
            if isinstance(record, dict):
                records.append(record)
            else:
                self.warnings.append(f"Ignoring non-object NDJSON line {line_no}")

        return records

    def _records_from_events(self, events: list[dict[str, Any]]) -> list[RawRecord]:
        records: list[RawRecord] = []

        for index, event in enumerate(events, start=1):
            self.stats["total"] += 1

            message = event.get("message")
            if not isinstance(message, str):
                self.stats["skipped_invalid"] += 1
                self.warnings.append(f"Event {index} has no message")
                continue
            if not message.strip():
                self.stats["skipped_blank"] += 1
                continue

            records.append(
                RawRecord(
                    id=str(event.get("eventId") or f"event-{index}"),
                    text=message,
                    timestamp=self._event_timestamp(event.get("timestamp")),
                )
            )
            self.stats["imported"] += 1

        return records

    def _records_from_lines(self, lines: Iterable[str]) -> list[RawRecord]:
        records: list[RawRecord] = []

        for line_no, line in enumerate(lines, start=1):
            self.stats["total"] += 1
            text = line.rstrip("\r\n")
            if not text.strip():
                self.stats["skipped_blank"] += 1
                continue

            records.append(RawRecord(id=f"line-{line_no}", text=text))
            self.stats["imported"] += 1

        return records

    def _event_timestamp(self, value: Any) -> datetime | None:
        """Convert an epoch-milliseconds timestamp to an aware datetime."""
        if value is None or isinstance(value, bool):
            return None
        try:
            millis = int(value)
        except (TypeError, ValueError):
            self.warnings.append(f"Ignoring invalid event timestamp: {value!r}")
            return None
        return datetime.fromtimestamp(millis / 1000, tz=UTC)


def filter_window(
    records: Iterable[RawRecord],
    start: datetime,
    end: datetime,
) -> list[RawRecord]:
    """Keep records whose timestamp lies within [start, end].

    Records without a timestamp are kept.
    """
    return [
        record
        for record in records
        if record.timestamp is None or start <= record.timestamp <= end
    ]
