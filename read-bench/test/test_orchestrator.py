"""
Tests for the run orchestrator and the report it emits.
"""

import os
import random
import sys
import unittest

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from algorithms.orchestrator import RunOrchestrator
from common.errors import InvalidArgumentError, ObjectNotFoundError
from configuration import BYTES_PER_MB
from metrics.record import BenchmarkConfig, ReadPattern
from metrics.report import NO_STATISTICS_LINE
from systems.port import ObjectLocator
from fakes import FakeClock, InMemoryStoragePort

LOCATOR = ObjectLocator("bench-bucket", "test-object")


def sequential_config(iterations=3):
    return BenchmarkConfig(
        backend_tag="FAKE",
        pattern=ReadPattern.SEQUENTIAL,
        iterations=iterations,
        locator=LOCATOR,
        buffer_size=4096,
    )


def random_config(iterations=3, chunk_size=1024):
    return BenchmarkConfig(
        backend_tag="FAKE",
        pattern=ReadPattern.RANDOM,
        iterations=iterations,
        locator=LOCATOR,
        chunk_size=chunk_size,
    )


class TestRunOrchestrator(unittest.IsolatedAsyncioTestCase):
    """Repeated iterations feeding the aggregator."""

    async def test_runs_every_iteration(self):
        port = InMemoryStoragePort(b"x" * BYTES_PER_MB)
        report = await RunOrchestrator(port, sequential_config(4), clock=FakeClock(0.125)).run()

        self.assertEqual(report.stats.attempted, 4)
        self.assertEqual(report.stats.succeeded, 4)
        self.assertEqual(report.stats.mean_ms, 125.0)
        self.assertAlmostEqual(report.stats.throughput_mbps, 8.0)
        self.assertEqual(report.object_size_bytes, BYTES_PER_MB)
        self.assertEqual(port.size_requests, 1)
        self.assertEqual(port.open_calls, 4)

    async def test_failed_iteration_does_not_abort_run(self):
        port = InMemoryStoragePort(b"x" * 10_000, fail_open_calls=[2])
        report = await RunOrchestrator(port, sequential_config(3)).run()

        self.assertEqual(report.stats.attempted, 3)
        self.assertEqual(report.stats.succeeded, 2)
        self.assertEqual(port.open_calls, 3)

    async def test_all_iterations_failing_reports_no_statistics(self):
        port = InMemoryStoragePort(b"x" * 10_000, fail_open_calls=[1, 2])
        report = await RunOrchestrator(port, sequential_config(2)).run()

        self.assertEqual(report.stats.succeeded, 0)
        lines = report.format_lines()
        self.assertIn(NO_STATISTICS_LINE, lines)
        self.assertFalse(any("Average throughput" in line for line in lines))

    async def test_random_run_reads_whole_object_each_iteration(self):
        port = InMemoryStoragePort(b"x" * 5000)
        report = await RunOrchestrator(port, random_config(2, 1000), rng=random.Random(5)).run()

        self.assertEqual(report.stats.succeeded, 2)
        self.assertEqual(port.open_calls, 10)

    async def test_missing_object_is_fatal(self):
        port = InMemoryStoragePort(b"", missing=True)
        with self.assertRaises(ObjectNotFoundError):
            await RunOrchestrator(port, sequential_config()).run()
        self.assertEqual(port.open_calls, 0)

    async def test_random_run_on_empty_object_rejected(self):
        port = InMemoryStoragePort(b"")
        with self.assertRaises(InvalidArgumentError):
            await RunOrchestrator(port, random_config()).run()
        self.assertEqual(port.open_calls, 0)

    async def test_repeated_runs_have_identical_success_counts(self):
        port = InMemoryStoragePort(b"x" * 3000, fail_open_calls=[2])
        first = await RunOrchestrator(port, sequential_config(3)).run()
        port.open_calls = 0
        second = await RunOrchestrator(port, sequential_config(3)).run()

        self.assertEqual(first.stats.succeeded, second.stats.succeeded)
        self.assertEqual(first.stats.attempted, second.stats.attempted)

    async def test_iteration_lines_are_logged(self):
        port = InMemoryStoragePort(b"x" * 3000, fail_open_calls=[2])
        with self.assertLogs("algorithms.orchestrator", level="INFO") as logs:
            await RunOrchestrator(port, sequential_config(2)).run()

        output = "\n".join(logs.output)
        self.assertIn("Iteration 1: 0 MB in", output)
        self.assertIn("Iteration 2: Failed. Read 0.00 MB before failure.", output)
        self.assertIn("Total successful iterations: 1 / 2", output)


class TestRunReport(unittest.IsolatedAsyncioTestCase):
    """Report block formatting."""

    async def test_random_report_lists_read_size(self):
        port = InMemoryStoragePort(b"x" * (2 * BYTES_PER_MB))
        report = await RunOrchestrator(
            port, random_config(1, 100 * 1024), rng=random.Random(1), clock=FakeClock(1.0)
        ).run()

        lines = report.format_lines()
        self.assertEqual(lines[0], "==== Random (FAKE) Read Aggregate Benchmark Results ====")
        self.assertEqual(lines[1], f"File size: 2.00 MB ({2 * BYTES_PER_MB} bytes)")
        self.assertEqual(lines[2], "Read size: 100 KB")
        self.assertEqual(lines[3], "Total successful iterations: 1 / 1")
        self.assertEqual(lines[-1], "Average throughput:  2.00 MB/s")

    async def test_sequential_report_lists_buffer_size(self):
        port = InMemoryStoragePort(b"x" * 1000)
        report = await RunOrchestrator(port, sequential_config(1)).run()
        self.assertIn("Buffer size: 4 KB", report.format_lines())


class TestBenchmarkConfig(unittest.TestCase):

    def test_non_positive_iterations_rejected(self):
        with self.assertRaises(InvalidArgumentError):
            sequential_config(0)

    def test_random_requires_chunk_size(self):
        with self.assertRaises(InvalidArgumentError):
            BenchmarkConfig("FAKE", ReadPattern.RANDOM, 1, LOCATOR)

    def test_sequential_rejects_chunk_size(self):
        with self.assertRaises(InvalidArgumentError):
            BenchmarkConfig("FAKE", ReadPattern.SEQUENTIAL, 1, LOCATOR, chunk_size=10)

    def test_label(self):
        self.assertEqual(random_config().label, "Random (FAKE)")


if __name__ == '__main__':
    unittest.main()
