"""
Run orchestrator: repeats one read pattern against one backend and reports statistics.
"""

import logging
import random
import time
from typing import Callable, Optional

from algorithms.random_read import RandomRead
from algorithms.sequential_read import SequentialRead
from common.errors import InvalidArgumentError
from common.metrics_utils import bytes_to_kb, bytes_to_mb
from configuration import BYTES_PER_MB
from metrics.aggregator import StatisticsAggregator
from metrics.record import BenchmarkConfig, ReadPattern
from metrics.report import RunReport
from systems.port import StorageReadPort

logger = logging.getLogger(__name__)


class RunOrchestrator:
    """Run a benchmark configuration for its number of iterations, strictly in sequence."""

    def __init__(
        self,
        port: StorageReadPort,
        config: BenchmarkConfig,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.port = port
        self.config = config
        self.rng = rng
        self.clock = clock

    def _create_benchmark(self, object_size: int):
        if self.config.pattern is ReadPattern.SEQUENTIAL:
            return SequentialRead(
                self.port, self.config.locator, self.config.buffer_size, clock=self.clock
            )
        return RandomRead(
            self.port,
            self.config.locator,
            object_size,
            self.config.chunk_size,
            rng=self.rng,
            clock=self.clock,
        )

    async def run(self) -> RunReport:
        """Execute every iteration and emit the report.

        Failed iterations are logged and counted but never stop the run.

        Raises:
            TransportError: If the object size cannot be fetched
            InvalidArgumentError: If a random read targets an empty object
        """
        config = self.config
        object_size = await self.port.get_size(config.locator)
        if config.pattern is ReadPattern.RANDOM and object_size == 0:
            raise InvalidArgumentError(f"Object {config.locator} is empty; random reads need data")

        if config.pattern is ReadPattern.RANDOM:
            size_label = f"Read size: {bytes_to_kb(config.chunk_size):.0f} KB"
        else:
            size_label = f"Buffer size: {bytes_to_kb(config.buffer_size):.0f} KB"
        logger.info(
            f"==== {config.pattern.display_name} reading {config.locator} with {config.backend_tag} "
            f"({bytes_to_mb(object_size):.2f} MB) {size_label} ===="
        )

        aggregator = StatisticsAggregator(object_size)

        for iteration in range(1, config.iterations + 1):
            result = await self._create_benchmark(object_size).execute()
            aggregator.add_result(result)

            if result.succeeded:
                logger.info(
                    f"Iteration {iteration}: {result.bytes_read // BYTES_PER_MB} MB "
                    f"in {result.duration_ms} ms"
                )
            else:
                logger.warning(
                    f"Iteration {iteration}: Failed. Read {bytes_to_mb(result.bytes_read):.2f} MB "
                    f"before failure."
                )

        report = RunReport(config=config, object_size_bytes=object_size, stats=aggregator.compute())
        for line in report.format_lines():
            logger.info(line)
        return report
