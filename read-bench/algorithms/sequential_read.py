"""
Sequential read: one full pass over an object through a single stream.
"""

import logging
import time
from typing import Callable

from common.errors import TransportError
from common.metrics_utils import elapsed_ms
from configuration import DEFAULT_BUFFER_SIZE
from metrics.record import BenchmarkResult
from systems.port import ObjectLocator, StorageReadPort

logger = logging.getLogger(__name__)


class SequentialRead:
    """Drain the whole object with fixed-size reads and time the pass."""

    def __init__(
        self,
        port: StorageReadPort,
        locator: ObjectLocator,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.port = port
        self.locator = locator
        self.buffer_size = buffer_size
        self.clock = clock

    async def execute(self) -> BenchmarkResult:
        """Run one iteration.

        The measured time spans opening the stream through reaching end-of-data.
        An open or read error yields a failed result carrying the bytes read
        before the error.
        """
        bytes_read = 0
        start_time = self.clock()

        try:
            async with self.port.open_full_read(self.locator) as stream:
                while True:
                    chunk = await stream.read(self.buffer_size)
                    if not chunk:
                        break
                    bytes_read += len(chunk)
        except TransportError as e:
            logger.error(f"Error during sequential read of {self.locator}: {e}")
            return BenchmarkResult.failed(bytes_read)

        end_time = self.clock()
        return BenchmarkResult(
            duration_ms=elapsed_ms(start_time, end_time),
            bytes_read=bytes_read,
        )
