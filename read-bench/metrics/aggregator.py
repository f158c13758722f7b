"""
Statistics aggregator turning a series of iteration results into summary statistics.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import pandas as pd

from common.metrics_utils import calculate_throughput_mbps, nearest_rank_percentile
from configuration import REPORTED_PERCENTILES
from metrics.record import BenchmarkResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateStats:
    """Summary of one run. Numeric fields are None when nothing succeeded."""

    attempted: int
    succeeded: int
    mean_ms: Optional[float] = None
    p50_ms: Optional[int] = None
    p90_ms: Optional[int] = None
    min_ms: Optional[int] = None
    max_ms: Optional[int] = None
    throughput_mbps: Optional[float] = None

    @property
    def has_statistics(self) -> bool:
        return self.succeeded > 0


class StatisticsAggregator:
    """Collects iteration results for one run and computes its statistics."""

    def __init__(self, object_size_bytes: int):
        self.object_size_bytes = object_size_bytes
        self.results: List[BenchmarkResult] = []

    def add_result(self, result: BenchmarkResult) -> None:
        """Record the outcome of one iteration."""
        self.results.append(result)

    def successful_durations(self) -> List[int]:
        return [r.duration_ms for r in self.results if r.succeeded]

    def compute(self) -> AggregateStats:
        """Compute statistics from the successful iterations only.

        Returns:
            AggregateStats; numeric fields stay None when no iteration succeeded
        """
        attempted = len(self.results)
        durations = self.successful_durations()
        succeeded = len(durations)

        if succeeded == 0:
            logger.debug(f"No successful iterations out of {attempted}")
            return AggregateStats(attempted=attempted, succeeded=0)

        series = pd.Series(sorted(durations), dtype="int64")
        mean_ms = float(series.mean())
        percentiles = {
            name: int(nearest_rank_percentile(series, p))
            for name, p in REPORTED_PERCENTILES.items()
        }

        return AggregateStats(
            attempted=attempted,
            succeeded=succeeded,
            mean_ms=mean_ms,
            p50_ms=percentiles["p50"],
            p90_ms=percentiles["p90"],
            min_ms=int(series.iloc[0]),
            max_ms=int(series.iloc[-1]),
            throughput_mbps=calculate_throughput_mbps(self.object_size_bytes, mean_ms),
        )
