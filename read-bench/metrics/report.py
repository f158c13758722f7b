"""
Report block emitted after every orchestrated run.
"""

from dataclasses import dataclass
from typing import List

from common.metrics_utils import bytes_to_kb, bytes_to_mb
from metrics.aggregator import AggregateStats
from metrics.record import BenchmarkConfig, ReadPattern

NO_STATISTICS_LINE = "No successful iterations. No statistics available."


@dataclass(frozen=True)
class RunReport:
    """Statistics of one run together with the configuration that produced them."""

    config: BenchmarkConfig
    object_size_bytes: int
    stats: AggregateStats

    def format_lines(self) -> List[str]:
        lines = [
            f"==== {self.config.label} Read Aggregate Benchmark Results ====",
            f"File size: {bytes_to_mb(self.object_size_bytes):.2f} MB ({self.object_size_bytes} bytes)",
        ]
        if self.config.pattern is ReadPattern.RANDOM:
            lines.append(f"Read size: {bytes_to_kb(self.config.chunk_size):.0f} KB")
        else:
            lines.append(f"Buffer size: {bytes_to_kb(self.config.buffer_size):.0f} KB")
        lines.append(
            f"Total successful iterations: {self.stats.succeeded} / {self.stats.attempted}"
        )

        if not self.stats.has_statistics:
            lines.append(NO_STATISTICS_LINE)
            return lines

        lines.extend([
            f"Average (mean) time: {self.stats.mean_ms:.2f} ms",
            f"P50 (median) time:   {self.stats.p50_ms} ms",
            f"P90 time:            {self.stats.p90_ms} ms",
            f"Min time:            {self.stats.min_ms} ms",
            f"Max time:            {self.stats.max_ms} ms",
            f"Average throughput:  {self.stats.throughput_mbps:.2f} MB/s",
        ])
        return lines
