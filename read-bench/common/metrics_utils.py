"""
Shared utilities for benchmark metrics calculations: sizes, throughput and percentiles.
"""

import math

import pandas as pd
from configuration import BYTES_PER_KB, BYTES_PER_MB, MILLISECONDS_PER_SECOND


def bytes_to_mb(total_bytes: float) -> float:
    """
    Convert bytes to megabytes (MB, 1024 * 1024 bytes).

    Args:
        total_bytes: Total bytes

    Returns:
        Size in megabytes (MB)
    """
    return total_bytes / BYTES_PER_MB


def bytes_to_kb(total_bytes: float) -> float:
    """Convert bytes to kilobytes (KB, 1024 bytes)."""
    return total_bytes / BYTES_PER_KB


def calculate_throughput_mbps(total_bytes: float, duration_ms: float) -> float:
    """
    Calculate throughput in megabytes per second (MB/s) from bytes and a duration in ms.

    Args:
        total_bytes: Total bytes transferred
        duration_ms: Duration in milliseconds

    Returns:
        Throughput in MB/s, or 0.0 when the duration is not positive
    """
    if duration_ms <= 0:
        return 0.0
    return bytes_to_mb(total_bytes) / (duration_ms / MILLISECONDS_PER_SECOND)


def nearest_rank_percentile(sorted_values: pd.Series, percentile: float):
    """
    Nearest-rank percentile using the lower index, without interpolation.

    Returns the value at position ``floor(percentile * (n - 1))`` of the sorted
    samples, clamped to ``[0, n - 1]``.

    Args:
        sorted_values: Non-empty series of samples sorted ascending
        percentile: Fraction in (0, 1)

    Returns:
        The selected sample
    """
    count = len(sorted_values)
    if count == 0:
        raise ValueError("Cannot compute a percentile of an empty series")
    index = math.floor(percentile * (count - 1))
    index = min(max(index, 0), count - 1)
    return sorted_values.iloc[index]


def elapsed_ms(start: float, end: float) -> int:
    """Whole milliseconds between two clock readings in seconds, truncated."""
    return int((end - start) * MILLISECONDS_PER_SECOND)
