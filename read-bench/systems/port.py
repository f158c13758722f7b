"""
Storage read port: the capability the benchmark core needs from a backend.
"""

from typing import AsyncContextManager, NamedTuple, Protocol, runtime_checkable


class ObjectLocator(NamedTuple):
    """Address of an object in the storage service."""

    bucket: str
    key: str

    def __str__(self) -> str:
        return f"{self.bucket}/{self.key}"


@runtime_checkable
class ReadStream(Protocol):
    """Readable byte stream returned by the open calls.

    ``read`` returns at most ``size`` bytes; an empty result means end-of-data.
    Failures are raised as ``ReadError``.
    """

    async def read(self, size: int) -> bytes: ...


@runtime_checkable
class StorageReadPort(Protocol):
    """Read-only access to objects, implemented by every storage backend.

    The open calls return async context managers so the stream is released on
    every exit path. Implementations perform real I/O with no caching and no
    retries.
    """

    tag: str

    async def get_size(self, locator: ObjectLocator) -> int: ...

    def open_full_read(self, locator: ObjectLocator) -> AsyncContextManager[ReadStream]: ...

    def open_range_read(
        self, locator: ObjectLocator, offset: int, length: int
    ) -> AsyncContextManager[ReadStream]: ...
