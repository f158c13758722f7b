"""
In-memory storage port and clock used by the tests.
"""

from contextlib import asynccontextmanager
from typing import Iterable, List, Optional, Tuple

from common.errors import ObjectNotFoundError, OpenError, ReadError


class FakeClock:
    """Clock that advances by a fixed step on every reading."""

    def __init__(self, step_seconds: float = 0.25):
        self.step_seconds = step_seconds
        self.now = 0.0

    def __call__(self) -> float:
        self.now += self.step_seconds
        return self.now


class FakeStream:
    """Stream over a byte slice that can fail after a given number of bytes."""

    def __init__(self, data: bytes, fail_after: Optional[int] = None, max_chunk: Optional[int] = None):
        self.data = data
        self.position = 0
        self.fail_after = fail_after
        self.max_chunk = max_chunk
        self.closed = False

    async def read(self, size: int) -> bytes:
        if self.fail_after is not None and self.position >= self.fail_after:
            raise ReadError(f"connection reset after {self.position} bytes")
        limit = size
        if self.max_chunk is not None:
            limit = min(limit, self.max_chunk)
        if self.fail_after is not None:
            limit = min(limit, self.fail_after - self.position)
        chunk = self.data[self.position:self.position + limit]
        self.position += len(chunk)
        return chunk


class InMemoryStoragePort:
    """Storage read port serving a single object from memory.

    Args:
        data: Object contents
        fail_open_calls: 1-based numbers of the open calls that raise OpenError
        fail_read_after: Bytes each stream serves before raising ReadError
        truncate_ranges: Serve range reads one byte short of the requested length
        missing: Make get_size raise ObjectNotFoundError
        max_chunk: Cap on the bytes returned by a single read call
    """

    tag = "FAKE"

    def __init__(
        self,
        data: bytes,
        fail_open_calls: Iterable[int] = (),
        fail_read_after: Optional[int] = None,
        truncate_ranges: bool = False,
        missing: bool = False,
        max_chunk: Optional[int] = None,
    ):
        self.data = data
        self.fail_open_calls = set(fail_open_calls)
        self.fail_read_after = fail_read_after
        self.truncate_ranges = truncate_ranges
        self.missing = missing
        self.max_chunk = max_chunk
        self.open_calls = 0
        self.opened_ranges: List[Tuple[int, int]] = []
        self.streams: List[FakeStream] = []
        self.size_requests = 0

    async def get_size(self, locator) -> int:
        self.size_requests += 1
        if self.missing:
            raise ObjectNotFoundError(locator.bucket, locator.key)
        return len(self.data)

    def open_full_read(self, locator):
        return self._open(0, len(self.data))

    def open_range_read(self, locator, offset: int, length: int):
        return self._open(offset, length)

    @asynccontextmanager
    async def _open(self, offset: int, length: int):
        self.open_calls += 1
        self.opened_ranges.append((offset, length))
        if self.open_calls in self.fail_open_calls:
            raise OpenError(f"open call {self.open_calls} rejected")

        end = offset + length
        if self.truncate_ranges:
            end -= 1
        stream = FakeStream(self.data[offset:end], self.fail_read_after, self.max_chunk)
        self.streams.append(stream)
        try:
            yield stream
        finally:
            stream.closed = True
