"""
Basic data structures for the read benchmark.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from common.errors import InvalidArgumentError
from configuration import DEFAULT_BUFFER_SIZE, FAILED_DURATION
from systems.port import ObjectLocator


class ReadPattern(str, Enum):
    """Access pattern exercised by a run."""

    SEQUENTIAL = "sequential"
    RANDOM = "random"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class BenchmarkResult:
    """Outcome of one iteration.

    ``duration_ms`` is ``FAILED_DURATION`` exactly when the iteration failed; in
    that case ``bytes_read`` holds what was transferred before the failure.
    """

    duration_ms: int = FAILED_DURATION
    bytes_read: int = 0

    @property
    def succeeded(self) -> bool:
        return self.duration_ms != FAILED_DURATION

    @classmethod
    def failed(cls, bytes_read: int = 0) -> "BenchmarkResult":
        return cls(duration_ms=FAILED_DURATION, bytes_read=bytes_read)


@dataclass(frozen=True)
class BenchmarkConfig:
    """Immutable description of one orchestrated run."""

    backend_tag: str
    pattern: ReadPattern
    iterations: int
    locator: ObjectLocator
    chunk_size: Optional[int] = None
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self):
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, int) or self.iterations <= 0:
            raise InvalidArgumentError(
                f"Number of iterations must be a positive integer, got {self.iterations!r}"
            )
        if self.pattern is ReadPattern.RANDOM:
            if not self.chunk_size or self.chunk_size <= 0:
                raise InvalidArgumentError("Random reads require a positive chunk size")
        elif self.chunk_size is not None:
            raise InvalidArgumentError("Chunk size only applies to random reads")
        if self.buffer_size <= 0:
            raise InvalidArgumentError("Buffer size must be positive")

    @property
    def label(self) -> str:
        """Report label such as ``Random (R2)``."""
        return f"{self.pattern.display_name} ({self.backend_tag})"
