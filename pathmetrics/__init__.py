"""Per-route latency statistics from web-framework request logs."""

__version__ = "0.1.0"
