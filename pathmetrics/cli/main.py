"""Main CLI entry point for pathmetrics."""

from __future__ import annotations

import click

from pathmetrics import __version__
from pathmetrics.utils.logs import configure_logging

DEFAULT_TIMEZONE = "Asia/Tokyo"


@click.group()
@click.version_option(version=__version__, prog_name="pathmetrics")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Aggregate request metrics by route from Rails request logs.

    Reports request count and average, minimum, and maximum processing
    time for every normalized route.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)


@cli.command()
@click.argument("source", required=False, default="-")
@click.option(
    "--start",
    required=True,
    help="Window start, local to --timezone (format: 2006-01-02T15:04:05)",
)
@click.option(
    "--end",
    required=True,
    help="Window end, local to --timezone (format: 2006-01-02T15:04:05)",
)
@click.option(
    "--timezone",
    "tz_name",
    default=DEFAULT_TIMEZONE,
    show_default=True,
    help="IANA timezone used to interpret --start and --end",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    envvar="PATHMETRICS_CONFIG",
    help="Path exclusion rules file (default: search standard config locations)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "table"]),
    default="json",
    show_default=True,
    help="Output format",
)
@click.option(
    "--ignore-window",
    is_flag=True,
    help="Analyze every record regardless of its timestamp",
)
@click.pass_context
def analyze(
    ctx: click.Context,
    source: str,
    start: str,
    end: str,
    tz_name: str,
    config_path: str | None,
    output_format: str,
    ignore_window: bool,
) -> None:
    """Analyze exported request logs and print per-route metrics.

    SOURCE is a log export file (CloudWatch JSON, NDJSON, or plain text).
    Use '-' or omit it to read plain text lines from stdin.

    \b
    Examples:
      pathmetrics analyze events.json --start 2025-07-10T00:00:00 --end 2025-07-10T23:59:59
      cat production.log | pathmetrics analyze --start ... --end ... --format table
    """
    from pathmetrics.cli.analyze import run_analyze

    run_analyze(
        source=source,
        start=start,
        end=end,
        tz_name=tz_name,
        config_path=config_path,
        output_format=output_format,
        ignore_window=ignore_window,
    )


if __name__ == "__main__":
    cli()
