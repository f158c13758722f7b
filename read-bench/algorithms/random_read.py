"""
Random read: every chunk of an object read once, in shuffled order.
"""

import logging
import random
import time
from typing import Callable, Optional

from algorithms.partitioner import partition_ranges
from common.errors import ReadError, TransportError
from common.metrics_utils import elapsed_ms
from configuration import DEFAULT_BUFFER_SIZE
from metrics.record import BenchmarkResult
from systems.port import ObjectLocator, StorageReadPort

logger = logging.getLogger(__name__)


class RandomRead:
    """Read non-overlapping ranges at shuffled offsets and time the whole sequence."""

    def __init__(
        self,
        port: StorageReadPort,
        locator: ObjectLocator,
        object_size: int,
        chunk_size: int = DEFAULT_BUFFER_SIZE,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.port = port
        self.locator = locator
        self.object_size = object_size
        self.chunk_size = chunk_size
        self.rng = rng
        self.clock = clock

    async def execute(self) -> BenchmarkResult:
        """Run one iteration.

        Stops at the first range whose open or read fails and returns a failed
        result with the bytes read so far; remaining ranges are not attempted.
        A range that ends before its full length counts as a read failure.

        Raises:
            InvalidArgumentError: If the object or chunk size is zero (before any I/O)
        """
        ranges = partition_ranges(self.object_size, self.chunk_size, self.rng)

        total_bytes = 0
        start_time = self.clock()

        for read_range in ranges:
            if read_range.length == 0:
                continue

            range_bytes = 0
            try:
                async with self.port.open_range_read(
                    self.locator, read_range.offset, read_range.length
                ) as stream:
                    while range_bytes < read_range.length:
                        chunk = await stream.read(read_range.length - range_bytes)
                        if not chunk:
                            raise ReadError(
                                f"Stream ended after {range_bytes} of {read_range.length} bytes"
                            )
                        range_bytes += len(chunk)
            except TransportError as e:
                logger.error(f"Error during random read at offset {read_range.offset}: {e}")
                return BenchmarkResult.failed(total_bytes + range_bytes)

            total_bytes += range_bytes

        end_time = self.clock()
        return BenchmarkResult(
            duration_ms=elapsed_ms(start_time, end_time),
            bytes_read=total_bytes,
        )
