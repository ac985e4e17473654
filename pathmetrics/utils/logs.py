"""Logging bootstrap for the command line."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from pathmetrics.ui.console import err_console


def configure_logging(verbose: bool = False) -> None:
    """Send ``pathmetrics`` log records to stderr through Rich."""
    handler = RichHandler(console=err_console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger("pathmetrics")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
