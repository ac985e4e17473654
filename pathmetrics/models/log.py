"""Log record and parsed entry models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class EntryKind(StrEnum):
    """Kind of a parsed request-lifecycle line."""

    START = "start"
    COMPLETION = "completion"


class RawRecord(BaseModel):
    """A single physical log line handed over by the log reader."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    timestamp: datetime | None = None


class StartEntry(BaseModel):
    """A `Started GET "/path" for ... at ...` line."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["start"] = EntryKind.START.value
    method: str
    path: str  # Literal path, query string included
    timestamp: datetime
    session_token: str = ""


class CompletionEntry(BaseModel):
    """A `Completed 200 OK in 12ms ...` line."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["completion"] = EntryKind.COMPLETION.value
    status_code: int
    status_text: str
    duration_ms: int

    # Sub-timings; zero when the line does not report them
    view_ms: float = 0.0
    db_ms: float = 0.0

    session_token: str = ""


Entry = Annotated[StartEntry | CompletionEntry, Field(discriminator="kind")]


class RequestPair(BaseModel):
    """A start line matched with its completion line."""

    model_config = ConfigDict(frozen=True)

    start: StartEntry
    completion: CompletionEntry
