"""Analyze command implementation."""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import click

from pathmetrics.core.analyzer import Analyzer, render_json, render_summaries
from pathmetrics.core.errors import ConfigError
from pathmetrics.core.exclude.path_excluder import load_excluder
from pathmetrics.core.retrieve.log_reader import LogReader, filter_window
from pathmetrics.models.log import RawRecord
from pathmetrics.ui.console import console
from pathmetrics.ui.tables import route_summary_table, window_panel

logger = logging.getLogger(__name__)

WINDOW_FORMAT = "%Y-%m-%dT%H:%M:%S"


def parse_window_time(value: str, tz: ZoneInfo) -> datetime:
    """Parse a ``--start``/``--end`` value in ``tz`` and convert it to UTC.

    Raises:
        ValueError: If the value does not match ``WINDOW_FORMAT``
    """
    local = datetime.strptime(value, WINDOW_FORMAT).replace(tzinfo=tz)
    return local.astimezone(UTC)


def run_analyze(
    source: str,
    start: str,
    end: str,
    tz_name: str,
    config_path: str | None,
    output_format: str,
    ignore_window: bool,
) -> None:
    """Run the analyze command."""
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        click.echo(f"Error: unknown timezone: {tz_name}", err=True)
        sys.exit(1)

    try:
        window_start = parse_window_time(start, tz)
    except ValueError as e:
        click.echo(f"Error: failed to parse start time: {e}", err=True)
        sys.exit(1)
    try:
        window_end = parse_window_time(end, tz)
    except ValueError as e:
        click.echo(f"Error: failed to parse end time: {e}", err=True)
        sys.exit(1)

    if window_end < window_start:
        click.echo("Error: --end must not be earlier than --start", err=True)
        sys.exit(1)

    logger.info(
        "Analyzing window %s to %s (UTC)",
        window_start.isoformat(),
        window_end.isoformat(),
    )

    try:
        excluder = load_excluder(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    records = _read_records(source)
    if not ignore_window:
        before = len(records)
        records = filter_window(records, window_start, window_end)
        if len(records) != before:
            logger.info("Dropped %d records outside the window", before - len(records))

    analyzer = Analyzer(exclude=excluder)
    result = analyzer.run(records, window_start, window_end)

    if output_format == "table":
        console.print(window_panel(result))
        console.print(route_summary_table(render_summaries(result)))
        return

    click.echo(render_json(result), nl=False)


def _read_records(source: str) -> list[RawRecord]:
    reader = LogReader()

    if source == "-":
        records = reader.read_lines(sys.stdin)
    else:
        try:
            records = reader.read_file(Path(source))
        except FileNotFoundError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        except (OSError, UnicodeDecodeError) as e:
            click.echo(f"Error: failed to read {source}: {e}", err=True)
            sys.exit(1)

    for warning in reader.warnings:
        logger.warning(warning)
    logger.debug("Reader stats: %s", reader.stats)

    logger.info("Read %d log records", len(records))
    return records
