"""Log line parsing."""

from pathmetrics.core.parse.entry_parser import EntryParser

__all__ = ["EntryParser"]
