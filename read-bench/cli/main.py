"""
Command line entry point for the object storage read benchmark.
"""

import argparse
import logging
import sys

import uvloop

from cli.benchmark import BenchmarkRunner, parse_iterations
from common.errors import BenchmarkError
from common.storage_factory import load_credentials_file
from configuration import (
    BYTES_PER_KB,
    CREDENTIALS_ENV_VAR,
    DEFAULT_BUFFER_SIZE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_RANDOM_READ_SIZES,
    DEFAULT_STORAGE_TYPES,
    LOG_FORMAT,
    SUPPORTED_STORAGE_TYPES,
)
from metrics.record import ReadPattern

logger = logging.getLogger(__name__)


class ReadBenchmarkCLI:
    """CLI interface for the sequential and random read benchmark."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self):
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            description='Object storage read benchmark',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=f"""
Examples:
  # Sequential and random reads against R2, 5 iterations each
  read-bench my-bucket test-object-1gb 5

  # Compare R2 and S3 with random reads of 1 MB and 256 KB only
  read-bench my-bucket test-object-1gb 10 --storage r2 s3 --pattern random --read-sizes-kb 1024 256

Credentials come from the environment, or from a JSON file passed with
--credentials or named by ${CREDENTIALS_ENV_VAR}.
            """
        )

        parser.add_argument('bucket', help='Bucket holding the test object')
        parser.add_argument('object_key', help='Key of the test object')
        parser.add_argument('iterations', help='Number of iterations per run (positive integer)')
        parser.add_argument('--credentials', type=str, default=None,
                            help=f'Path to a JSON credentials file (default: ${CREDENTIALS_ENV_VAR})')
        parser.add_argument('--storage', nargs='+', choices=SUPPORTED_STORAGE_TYPES,
                            default=DEFAULT_STORAGE_TYPES,
                            help=f'Storage backends to benchmark (default: {" ".join(DEFAULT_STORAGE_TYPES)})')
        parser.add_argument('--pattern', nargs='+', choices=[p.value for p in ReadPattern],
                            default=[p.value for p in ReadPattern],
                            help='Read patterns to run (default: sequential random)')
        parser.add_argument('--read-sizes-kb', nargs='+', type=int,
                            default=[size // BYTES_PER_KB for size in DEFAULT_RANDOM_READ_SIZES],
                            help='Chunk sizes for random reads in KB (default: 4096 2048 1024 100)')
        parser.add_argument('--buffer-size-kb', type=int, default=DEFAULT_BUFFER_SIZE // BYTES_PER_KB,
                            help=f'Buffer size for sequential reads in KB (default: {DEFAULT_BUFFER_SIZE // BYTES_PER_KB})')
        parser.add_argument('--parallel-runs', action='store_true',
                            help='Schedule independent runs concurrently instead of one after another')
        parser.add_argument('--seed', type=int, default=None,
                            help='Seed for the random read offsets (default: unseeded)')
        parser.add_argument('--verify', action='store_true',
                            help='Check bucket access on every backend before benchmarking')
        parser.add_argument('--log-level', default=DEFAULT_LOG_LEVEL,
                            choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                            help=f'Logging level (default: {DEFAULT_LOG_LEVEL})')

        return parser

    async def run_benchmark(self, args) -> int:
        """Run the benchmark plan and map the outcome to an exit status."""
        runner = BenchmarkRunner(
            bucket=args.bucket,
            object_key=args.object_key,
            iterations=parse_iterations(args.iterations),
            storage_types=args.storage,
            patterns=[ReadPattern(p) for p in args.pattern],
            read_sizes=[kb * BYTES_PER_KB for kb in args.read_sizes_kb],
            buffer_size=args.buffer_size_kb * BYTES_PER_KB,
            credentials=load_credentials_file(args.credentials),
            parallel_runs=args.parallel_runs,
            seed=args.seed,
            verify=args.verify,
        )

        await runner.run_benchmark()

        if runner.failed_runs:
            logger.error(f"{len(runner.failed_runs)} run(s) could not be executed")
            return 1
        return 0

    def run(self, args=None) -> int:
        """Run the CLI with the given arguments."""
        if args is None:
            args = sys.argv[1:]

        parsed_args = self.parser.parse_args(args)

        # Set up logging (only if not already configured)
        if not logging.root.handlers:
            logging.basicConfig(level=parsed_args.log_level, format=LOG_FORMAT)

        try:
            return uvloop.run(self.run_benchmark(parsed_args))
        except BenchmarkError as e:
            logger.error(f"Error: {e}")
            return 1
        except KeyboardInterrupt:
            logger.info("Benchmark interrupted by user")
            return 1


def main():
    """Main entry point."""
    cli = ReadBenchmarkCLI()
    sys.exit(cli.run())


if __name__ == '__main__':
    main()
