"""Shared Rich consoles and style definitions.

Diagnostics and log output go to stderr via ``err_console``; stdout carries
only the analysis result.
"""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

PATHMETRICS_THEME = Theme(
    {
        "info": "cyan",
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "latency.fast": "green",
        "latency.medium": "yellow",
        "latency.slow": "red",
        "heading": "bold cyan",
        "muted": "dim",
    }
)

console = Console(theme=PATHMETRICS_THEME)
err_console = Console(stderr=True, theme=PATHMETRICS_THEME)
