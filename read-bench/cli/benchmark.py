"""
Benchmark runner: builds the run plan for every backend and executes it.
"""

import asyncio
import logging
import random
from contextlib import AsyncExitStack
from typing import Dict, List, Optional, Sequence

from algorithms.orchestrator import RunOrchestrator
from common.errors import InvalidArgumentError, TransportError
from common.storage_factory import create_storage_system
from configuration import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_RANDOM_READ_SIZES,
    DEFAULT_STORAGE_TYPES,
)
from metrics.record import BenchmarkConfig, ReadPattern
from metrics.report import RunReport
from systems.port import ObjectLocator, StorageReadPort

logger = logging.getLogger(__name__)


def parse_iterations(value) -> int:
    """Parse the iteration count argument.

    Raises:
        InvalidArgumentError: If the value is not a positive integer
    """
    try:
        iterations = int(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Invalid number for times: {value}") from None
    if iterations <= 0:
        raise InvalidArgumentError("Number of times must be positive.")
    return iterations


def build_run_plan(
    locator: ObjectLocator,
    iterations: int,
    backend_tags: Sequence[str],
    patterns: Sequence[ReadPattern] = (ReadPattern.SEQUENTIAL, ReadPattern.RANDOM),
    read_sizes: Sequence[int] = DEFAULT_RANDOM_READ_SIZES,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> List[BenchmarkConfig]:
    """Expand the CLI selection into one config per pattern, read size and backend.

    Sequential runs come first, one per backend; random runs follow, grouped by
    read size with every backend run back to back for the same size.
    """
    plan: List[BenchmarkConfig] = []
    if ReadPattern.SEQUENTIAL in patterns:
        for tag in backend_tags:
            plan.append(BenchmarkConfig(
                backend_tag=tag,
                pattern=ReadPattern.SEQUENTIAL,
                iterations=iterations,
                locator=locator,
                buffer_size=buffer_size,
            ))
    if ReadPattern.RANDOM in patterns:
        for read_size in read_sizes:
            for tag in backend_tags:
                plan.append(BenchmarkConfig(
                    backend_tag=tag,
                    pattern=ReadPattern.RANDOM,
                    iterations=iterations,
                    locator=locator,
                    chunk_size=read_size,
                    buffer_size=buffer_size,
                ))
    return plan


class BenchmarkRunner:
    """Runs the read benchmark plan against one or more storage backends."""

    def __init__(
        self,
        bucket: str,
        object_key: str,
        iterations: int,
        storage_types: Sequence[str] = DEFAULT_STORAGE_TYPES,
        patterns: Sequence[ReadPattern] = (ReadPattern.SEQUENTIAL, ReadPattern.RANDOM),
        read_sizes: Sequence[int] = DEFAULT_RANDOM_READ_SIZES,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        credentials: Optional[Dict[str, str]] = None,
        parallel_runs: bool = False,
        seed: Optional[int] = None,
        verify: bool = False,
        storage_systems: Optional[Dict[str, StorageReadPort]] = None,
    ):
        if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations <= 0:
            raise InvalidArgumentError("Number of times must be positive.")

        self.locator = ObjectLocator(bucket, object_key)
        self.iterations = iterations
        self.patterns = list(patterns)
        self.read_sizes = list(read_sizes)
        self.buffer_size = buffer_size
        self.parallel_runs = parallel_runs
        self.seed = seed
        self.verify = verify
        self.failed_runs: List[BenchmarkConfig] = []

        # Keyed by backend tag
        if storage_systems is None:
            storage_systems = {}
            for storage_type in storage_types:
                system = create_storage_system(storage_type, credentials)
                storage_systems[system.tag] = system
        self.storage_systems = storage_systems

        self.plan = build_run_plan(
            self.locator,
            iterations,
            list(self.storage_systems),
            self.patterns,
            self.read_sizes,
            self.buffer_size,
        )

        logger.info(
            f"Initialized benchmark runner: {len(self.plan)} runs of {iterations} iterations "
            f"on {', '.join(self.storage_systems)}"
        )

    def _rng_for(self, index: int) -> Optional[random.Random]:
        if self.seed is None:
            return None
        return random.Random(self.seed + index)

    async def _run_config(self, index: int, config: BenchmarkConfig) -> Optional[RunReport]:
        port = self.storage_systems[config.backend_tag]
        orchestrator = RunOrchestrator(port, config, rng=self._rng_for(index))
        try:
            return await orchestrator.run()
        except (TransportError, InvalidArgumentError) as e:
            logger.error(f"Run {config.label} on {config.locator} aborted: {e}")
            self.failed_runs.append(config)
            return None

    async def _verify_systems(self) -> bool:
        results = []
        for system in self.storage_systems.values():
            results.append(await system.verify_connection(self.locator.bucket))
        return all(results)

    async def run_benchmark(self) -> List[RunReport]:
        """Execute the complete plan.

        Returns:
            Reports of the runs that completed; aborted runs are in ``failed_runs``

        Raises:
            Any unexpected error from a run, after every scheduled run has finished
            and the storage clients are closed
        """
        self.failed_runs = []
        logger.info(f"Starting benchmark of {self.locator}")

        async with AsyncExitStack() as stack:
            for system in self.storage_systems.values():
                if hasattr(system, "__aenter__"):
                    await stack.enter_async_context(system)

            if self.verify and not await self._verify_systems():
                raise TransportError("Connection verification failed")

            if self.parallel_runs:
                # Every run finishes before the clients are closed
                reports = await asyncio.gather(
                    *(self._run_config(i, config) for i, config in enumerate(self.plan)),
                    return_exceptions=True,
                )
            else:
                reports = []
                for i, config in enumerate(self.plan):
                    reports.append(await self._run_config(i, config))

        for report in reports:
            if isinstance(report, BaseException):
                raise report

        completed = [r for r in reports if r is not None]
        logger.info(
            f"=== Benchmark finished: {len(completed)}/{len(self.plan)} runs completed ==="
        )
        return completed
