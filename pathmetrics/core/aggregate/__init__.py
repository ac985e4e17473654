"""Request pairing and aggregation."""

from pathmetrics.core.aggregate.aggregator import PairingAggregator, merge_metrics

__all__ = ["PairingAggregator", "merge_metrics"]
