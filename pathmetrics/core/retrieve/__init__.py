"""Log retrieval adapters."""

from pathmetrics.core.retrieve.log_reader import LogReader, filter_window

__all__ = ["LogReader", "filter_window"]
