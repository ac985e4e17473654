"""Start/completion pairing and per-route aggregation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from pathmetrics.core.normalize.route_normalizer import RouteNormalizer
from pathmetrics.models.log import CompletionEntry, Entry, RequestPair, StartEntry
from pathmetrics.models.metrics import RouteMetrics

logger = logging.getLogger(__name__)

ExclusionPredicate = Callable[[str], bool]


def _never_exclude(_path: str) -> bool:
    return False


class PairingAggregator:
    """Pair start and completion entries by session token and aggregate per route."""

    def match_pairs(self, entries: Iterable[Entry]) -> list[RequestPair]:
        """Match start and completion entries in a single pass.

        A later start with the same token replaces a pending one. A matched
        start is removed right away so it cannot pair with a second
        completion carrying the same token.

        Args:
            entries: Parsed entries in log order

        Returns:
            Request pairs in completion order
        """
        pairs: list[RequestPair] = []
        pending: dict[str, StartEntry] = {}
        unpaired_completions = 0

        for entry in entries:
            if isinstance(entry, StartEntry):
                if entry.session_token:
                    pending[entry.session_token] = entry
                continue

            if not isinstance(entry, CompletionEntry):
                continue

            start = pending.pop(entry.session_token, None) if entry.session_token else None
            if start is None:
                unpaired_completions += 1
                continue

            pairs.append(RequestPair(start=start, completion=entry))

        logger.debug(
            "Matched %d request pairs (%d orphaned starts, %d unpaired completions)",
            len(pairs),
            len(pending),
            unpaired_completions,
        )
        return pairs

    def aggregate(
        self,
        entries: Iterable[Entry],
        normalizer: RouteNormalizer,
        exclude: ExclusionPredicate | None = None,
    ) -> dict[str, RouteMetrics]:
        """Aggregate entries into per-route metrics.

        Args:
            entries: Parsed entries in log order
            normalizer: Maps literal paths to route templates
            exclude: Predicate on the literal path; matching pairs are dropped

        Returns:
            Fresh mapping of route template to RouteMetrics
        """
        exclude = exclude or _never_exclude
        metrics_by_route: dict[str, RouteMetrics] = {}
        excluded = 0

        for pair in self.match_pairs(entries):
            if exclude(pair.start.path):
                excluded += 1
                continue

            route = normalizer.normalize(pair.start.path)
            metrics = metrics_by_route.get(route)
            if metrics is None:
                metrics = RouteMetrics(route=route)
                metrics_by_route[route] = metrics

            metrics.add(pair)

        if excluded:
            logger.debug("Excluded %d request pairs by path rules", excluded)

        return metrics_by_route


def merge_metrics(
    left: dict[str, RouteMetrics],
    right: dict[str, RouteMetrics],
) -> dict[str, RouteMetrics]:
    """Merge two route maps produced by separate runs.

    The merge is associative and commutative; neither input is mutated.
    """
    merged = {route: metrics.model_copy(deep=True) for route, metrics in left.items()}

    for route, incoming in right.items():
        current = merged.get(route)
        if current is None or current.count == 0:
            merged[route] = incoming.model_copy(deep=True)
            continue
        if incoming.count == 0:
            continue

        total = current.count + incoming.count
        current.mean_ms = (
            current.mean_ms * current.count + incoming.mean_ms * incoming.count
        ) / total
        current.count = total
        current.min_ms = min(current.min_ms, incoming.min_ms)
        current.max_ms = max(current.max_ms, incoming.max_ms)

        for status, count in incoming.status_counts.items():
            current.status_counts[status] = current.status_counts.get(status, 0) + count
        for method, count in incoming.method_counts.items():
            current.method_counts[method] = current.method_counts.get(method, 0) + count

        current.total_view_ms += incoming.total_view_ms
        current.total_db_ms += incoming.total_db_ms

    return merged
