"""
Common utilities for the read benchmark.
"""

from .errors import (
    BenchmarkError,
    InvalidArgumentError,
    ObjectNotFoundError,
    OpenError,
    ReadError,
    TransportError,
)

__all__ = [
    'BenchmarkError',
    'InvalidArgumentError',
    'ObjectNotFoundError',
    'OpenError',
    'ReadError',
    'TransportError',
]
