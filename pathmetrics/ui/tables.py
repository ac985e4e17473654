"""Rich table formatters for analysis output."""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pathmetrics.models.metrics import AnalysisResult, RouteSummary

# Average latency thresholds (ms) for row colouring
_FAST_MS = 200
_SLOW_MS = 1000


def route_summary_table(summaries: list[RouteSummary]) -> Table:
    """Build a table with one row per route, in the given order."""
    table = Table(title="Route Latency", show_lines=False, pad_edge=False)
    table.add_column("Path", style="bold")
    table.add_column("Count", justify="right")
    table.add_column("Avg (ms)", justify="right")
    table.add_column("Min (ms)", justify="right", style="muted")
    table.add_column("Max (ms)", justify="right")

    for summary in summaries:
        style = _latency_style(int(summary.avg_time_ms))
        table.add_row(
            Text(summary.path),
            str(summary.count),
            f"[{style}]{summary.avg_time_ms}[/{style}]",
            str(summary.min_time_ms),
            str(summary.max_time_ms),
        )

    return table


def window_panel(result: AnalysisResult) -> Panel:
    """Compact panel describing the analyzed window."""
    paired = sum(m.count for m in result.metrics_by_route.values())
    body = (
        f"{result.window_start.isoformat()} -> {result.window_end.isoformat()}\n"
        f"records: {result.total_input_records}  "
        f"requests: {paired}  "
        f"routes: {len(result.metrics_by_route)}"
    )
    return Panel(body, title="Window", expand=False)


def _latency_style(avg_ms: int) -> str:
    if avg_ms < _FAST_MS:
        return "latency.fast"
    if avg_ms < _SLOW_MS:
        return "latency.medium"
    return "latency.slow"
