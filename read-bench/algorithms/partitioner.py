"""
Range partitioner splitting an object into shuffled, non-overlapping byte ranges.
"""

import logging
import random
from typing import List, NamedTuple, Optional

from common.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class ReadRange(NamedTuple):
    """Contiguous byte interval ``[offset, offset + length)`` of an object."""

    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


def partition_ranges(
    object_size: int, chunk_size: int, rng: Optional[random.Random] = None
) -> List[ReadRange]:
    """Split ``[0, object_size)`` into ``chunk_size`` ranges in random order.

    The ranges are pairwise disjoint and cover the object exactly once; only the
    last range by offset may be shorter than ``chunk_size``.

    Args:
        object_size: Object size in bytes
        chunk_size: Size of each range in bytes
        rng: Random generator used for the shuffle; a fresh, process-seeded
            generator when omitted

    Returns:
        ``ceil(object_size / chunk_size)`` ranges, uniformly permuted

    Raises:
        InvalidArgumentError: If either size is not positive
    """
    if object_size <= 0:
        raise InvalidArgumentError(f"Object size must be positive, got {object_size}")
    if chunk_size <= 0:
        raise InvalidArgumentError(f"Chunk size must be positive, got {chunk_size}")

    ranges = [
        ReadRange(offset, min(chunk_size, object_size - offset))
        for offset in range(0, object_size, chunk_size)
    ]

    (rng or random.Random()).shuffle(ranges)

    logger.debug(f"Partitioned {object_size} bytes into {len(ranges)} ranges of {chunk_size} bytes")
    return ranges
