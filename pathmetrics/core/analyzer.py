"""Analysis pipeline: parse, pair, aggregate, and render."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import datetime

from pathmetrics.core.aggregate.aggregator import ExclusionPredicate, PairingAggregator
from pathmetrics.core.errors import ParseError
from pathmetrics.core.exclude.path_excluder import PathExcluder
from pathmetrics.core.normalize.route_normalizer import RouteNormalizer
from pathmetrics.core.parse.entry_parser import EntryParser
from pathmetrics.models.log import Entry, RawRecord
from pathmetrics.models.metrics import AnalysisResult, RouteSummary

logger = logging.getLogger(__name__)


class Analyzer:
    """Run the parse -> normalize -> aggregate pipeline over a batch of records."""

    def __init__(
        self,
        parser: EntryParser | None = None,
        normalizer: RouteNormalizer | None = None,
        aggregator: PairingAggregator | None = None,
        exclude: ExclusionPredicate | None = None,
    ) -> None:
        """Initialize the pipeline stages.

        Args:
            parser: Entry parser (default: EntryParser())
            normalizer: Route normalizer (default: RouteNormalizer())
            aggregator: Pairing aggregator (default: PairingAggregator())
            exclude: Exclusion predicate on literal paths
                (default: PathExcluder with the built-in rules)
        """
        self.parser = parser or EntryParser()
        self.normalizer = normalizer or RouteNormalizer()
        self.aggregator = aggregator or PairingAggregator()
        self.exclude = exclude if exclude is not None else PathExcluder()

    def run(
        self,
        records: Iterable[RawRecord],
        window_start: datetime,
        window_end: datetime,
    ) -> AnalysisResult:
        """Analyze a batch of raw records.

        Lines that fail to parse are skipped but still counted in
        ``total_input_records``.
        """
        entries: list[Entry] = []
        total = 0
        skipped = 0

        for record in records:
            total += 1
            try:
                entries.append(self.parser.parse(record.text))
            except ParseError as exc:
                skipped += 1
                logger.debug("Skipping record %s: %s", record.id, exc)

        logger.info("Parsed %d of %d log records", total - skipped, total)

        metrics_by_route = self.aggregator.aggregate(entries, self.normalizer, self.exclude)

        return AnalysisResult(
            window_start=window_start,
            window_end=window_end,
            total_input_records=total,
            metrics_by_route=metrics_by_route,
        )


def render_summaries(result: AnalysisResult) -> list[RouteSummary]:
    """Project route metrics to flat records sorted by count, highest first.

    Routes with equal counts keep the order in which they were first seen.
    """
    summaries = [
        RouteSummary(
            path=metrics.route,
            count=metrics.count,
            max_time_ms=metrics.max_ms,
            min_time_ms=metrics.min_ms,
            avg_time_ms=f"{metrics.mean_ms:.0f}",
        )
        for metrics in result.metrics_by_route.values()
    ]
    return sorted(summaries, key=lambda s: s.count, reverse=True)


def render_json(result: AnalysisResult) -> str:
    """Render the sorted summaries as a JSON array."""
    payload = [summary.model_dump() for summary in render_summaries(result)]
    return json.dumps(payload, indent=4) + "\n"
