"""Parser for Rails-style request lifecycle log lines."""

from __future__ import annotations

import re
from datetime import datetime

from pathmetrics.core.errors import MalformedFieldError, UnrecognizedFormatError
from pathmetrics.models.log import CompletionEntry, Entry, StartEntry

# Layout of the timestamp on start lines, e.g. "2023-01-01 12:00:00 +0900"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"

# strptime alone also accepts single-digit fields and "+09:00" offsets
_TIMESTAMP_SHAPE = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2} [+-][0-9]{4}"
)

# Tagged loggers may prefix lines with one or more "[tag]" groups
_TAG_PREFIX = r"(?:\[[^\]]*\]\s*)*"


class EntryParser:
    """Classify raw log lines and extract typed entries."""

    def __init__(self, orm_label: str = "ActiveRecord") -> None:
        """Initialize parser patterns.

        Args:
            orm_label: Label the framework uses for ORM time in the
                completion sub-timings, e.g. ``ActiveRecord``
        """
        self.orm_label = orm_label

        self.start_pattern = re.compile(
            rf"^{_TAG_PREFIX}Started\s+(?P<method>\w+)\s+\"(?P<path>[^\"]+)\"\s+"
            r"for\s+\S+\s+at\s+(?P<timestamp>.+?)(?:\s+\[[^\]]*\])*$"
        )
        self.completion_pattern = re.compile(
            rf"^{_TAG_PREFIX}Completed\s+(?P<status>\d+)\s+(?P<text>.+?)\s+"
            r"in\s+(?P<duration>\d+)ms\b"
        )
        self.view_pattern = re.compile(r"Views:\s+(\d+(?:\.\d+)?)ms")
        self.db_pattern = re.compile(rf"{re.escape(orm_label)}:\s+(\d+(?:\.\d+)?)ms")
        self.token_pattern = re.compile(r"\[([^\]]*)\]")

    def parse(self, line: str) -> Entry:
        """Parse a single log line.

        Args:
            line: Raw log text

        Returns:
            A StartEntry or CompletionEntry

        Raises:
            UnrecognizedFormatError: If the line has neither known shape
            MalformedFieldError: If a typed field fails to convert
        """
        line = line.strip()
        if not line:
            raise UnrecognizedFormatError("empty log line", line)

        if self.is_start(line):
            return self._parse_start(line)
        if self.is_completion(line):
            return self._parse_completion(line)

        raise UnrecognizedFormatError(f"unrecognized log format: {line}", line)

    def is_start(self, line: str) -> bool:
        return self.start_pattern.match(line) is not None

    def is_completion(self, line: str) -> bool:
        return self.completion_pattern.match(line) is not None

    def extract_session_token(self, line: str) -> str:
        """Return the content of the last ``[...]`` group, or "" if none."""
        tokens = self.token_pattern.findall(line)
        if not tokens:
            return ""
        return tokens[-1]

    def _parse_start(self, line: str) -> StartEntry:
        match = self.start_pattern.match(line)
        if match is None:
            raise UnrecognizedFormatError(f"invalid start line: {line}", line)

        raw_timestamp = match.group("timestamp")
        if _TIMESTAMP_SHAPE.fullmatch(raw_timestamp) is None:
            raise MalformedFieldError(
                f"timestamp {raw_timestamp!r} does not match YYYY-MM-DD HH:MM:SS +HHMM", line
            )
        try:
            timestamp = datetime.strptime(raw_timestamp, TIMESTAMP_FORMAT)
        except ValueError as exc:
            raise MalformedFieldError(
                f"failed to parse timestamp {raw_timestamp!r}: {exc}", line
            ) from exc

        return StartEntry(
            method=match.group("method"),
            path=match.group("path"),
            timestamp=timestamp,
            session_token=self.extract_session_token(line),
        )

    def _parse_completion(self, line: str) -> CompletionEntry:
        match = self.completion_pattern.match(line)
        if match is None:
            raise UnrecognizedFormatError(f"invalid completion line: {line}", line)

        view_ms = 0.0
        view_match = self.view_pattern.search(line)
        if view_match:
            view_ms = float(view_match.group(1))

        db_ms = 0.0
        db_match = self.db_pattern.search(line)
        if db_match:
            db_ms = float(db_match.group(1))

        return CompletionEntry(
            status_code=int(match.group("status")),
            status_text=match.group("text").strip(),
            duration_ms=int(match.group("duration")),
            view_ms=view_ms,
            db_ms=db_ms,
            session_token=self.extract_session_token(line),
        )
