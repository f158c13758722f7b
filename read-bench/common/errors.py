"""
Exception hierarchy for the read benchmark.
"""


class BenchmarkError(Exception):
    """Base class for all benchmark errors."""


class InvalidArgumentError(BenchmarkError, ValueError):
    """Raised before any I/O when a benchmark input is out of range."""


class TransportError(BenchmarkError):
    """A storage request failed on the wire or was rejected by the service."""


class ObjectNotFoundError(TransportError):
    """The requested object (or its bucket) does not exist."""

    def __init__(self, bucket: str, key: str):
        self.bucket = bucket
        self.key = key
        super().__init__(f"Object not found: {bucket}/{key}")


class OpenError(TransportError):
    """A read stream could not be opened."""


class ReadError(TransportError):
    """A read stream failed before reaching end-of-data."""
