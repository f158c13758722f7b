"""
Async base class for S3-compatible object storage systems.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import aioboto3
import psutil
from aiohttp import ClientError as AiohttpClientError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from common.errors import (
    InvalidArgumentError,
    ObjectNotFoundError,
    OpenError,
    ReadError,
    TransportError,
)
from configuration import (
    CLIENT_MAX_RETRIES,
    CONNECT_TIMEOUT_SECONDS,
    MAX_POOL_CONNECTIONS,
    READ_TIMEOUT_SECONDS,
)
from systems.port import ObjectLocator

logger = logging.getLogger(__name__)

# Errors raised by aiobotocore while a response body is being consumed
_STREAM_ERRORS = (BotoCoreError, AiohttpClientError, TimeoutError)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NoSuchBucket", "NotFound"}


class ObjectReadStream:
    """Readable view over a ``get_object`` response body."""

    def __init__(self, body, locator: ObjectLocator, offset: int = 0):
        self._body = body
        self.locator = locator
        self.offset = offset

    async def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes; ``b""`` means end-of-data."""
        try:
            return await self._body.read(size)
        except _STREAM_ERRORS as e:
            raise ReadError(
                f"Read failed for {self.locator} at offset {self.offset}: {e}"
            ) from e

    def close(self) -> None:
        self._body.close()


class ObjectStorageSystem:
    """Async S3-compatible storage backend implementing the storage read port."""

    tag = "S3-compatible"

    def __init__(self, endpoint: str, credentials: dict, addressing_style: str = "virtual"):
        self.endpoint = endpoint
        self.credentials = credentials
        self.addressing_style = addressing_style

        # Single source of truth for config
        self._config = self._create_config()

        self.session = aioboto3.Session(
            aws_access_key_id=credentials.get("access_key_id"),
            aws_secret_access_key=credentials.get("secret_access_key"),
            region_name=credentials.get("region_name", "auto"),
        )

        self.client = None

        logger.info(
            f"Initialized {self.tag} storage for {endpoint or 'default endpoint'} "
            f"(max_pool_connections={self._config.max_pool_connections})"
        )

    def _create_config(self) -> Config:
        """Create the botocore config shared by every request."""
        return Config(
            max_pool_connections=MAX_POOL_CONNECTIONS,
            connect_timeout=CONNECT_TIMEOUT_SECONDS,
            read_timeout=READ_TIMEOUT_SECONDS,
            retries={
                "max_attempts": CLIENT_MAX_RETRIES,
                "mode": "standard",
            },
            s3={
                "payload_signing_enabled": False,
                "addressing_style": self.addressing_style,
            },
            tcp_keepalive=True,
        )

    async def __aenter__(self):
        """Async context manager entry."""
        self.client = await self.session.client(
            "s3",
            endpoint_url=self.endpoint or None,
            config=self._config,
        ).__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.client:
            await self.client.__aexit__(exc_type, exc_val, exc_tb)
            self.client = None

    def _require_client(self):
        if not self.client:
            raise RuntimeError("Storage client not initialized. Use async context manager.")
        return self.client

    async def get_size(self, locator: ObjectLocator) -> int:
        """Fetch the object size in bytes from its metadata.

        Raises:
            ObjectNotFoundError: If the bucket or key does not exist
            TransportError: On any other request failure
        """
        client = self._require_client()
        try:
            response = await client.head_object(Bucket=locator.bucket, Key=locator.key)
        except ClientError as e:
            if _error_code(e) in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(locator.bucket, locator.key) from e
            raise TransportError(f"Metadata request failed for {locator}: {_describe(e)}") from e
        except (BotoCoreError, AiohttpClientError, TimeoutError) as e:
            raise TransportError(f"Metadata request failed for {locator}: {e}") from e

        return int(response["ContentLength"])

    def open_full_read(self, locator: ObjectLocator):
        """Open a stream over the whole object."""
        return self._open_stream(locator)

    def open_range_read(self, locator: ObjectLocator, offset: int, length: int):
        """Open a stream over ``length`` bytes starting at ``offset``."""
        if offset < 0 or length <= 0:
            raise InvalidArgumentError(
                f"Invalid range offset={offset} length={length} for {locator}"
            )
        return self._open_stream(locator, offset=offset, length=length)

    @asynccontextmanager
    async def _open_stream(
        self, locator: ObjectLocator, offset: int = 0, length: Optional[int] = None
    ) -> AsyncIterator[ObjectReadStream]:
        client = self._require_client()
        params: Dict[str, Any] = {"Bucket": locator.bucket, "Key": locator.key}
        if length is not None:
            params["Range"] = f"bytes={offset}-{offset + length - 1}"

        try:
            response = await client.get_object(**params)
        except ClientError as e:
            raise OpenError(
                f"Error opening {locator} at offset {offset}: {_describe(e)}"
            ) from e
        except (BotoCoreError, AiohttpClientError, TimeoutError) as e:
            raise OpenError(f"Error opening {locator} at offset {offset}: {e}") from e

        stream = ObjectReadStream(response["Body"], locator, offset)
        try:
            yield stream
        finally:
            stream.close()

    def get_connection_count(self) -> int:
        """Get number of established connections for this process."""
        try:
            process = psutil.Process(os.getpid())
            connections = process.net_connections(kind="inet")
        except psutil.Error as e:
            logger.debug(f"Failed to get connection count: {e}")
            return -1
        return sum(1 for c in connections if c.status == psutil.CONN_ESTABLISHED)

    async def verify_connection(self, bucket: str) -> bool:
        """Verify storage connection and bucket access."""
        client = self._require_client()
        try:
            await client.head_bucket(Bucket=bucket)
        except (ClientError, BotoCoreError, AiohttpClientError, TimeoutError) as e:
            logger.error(f"✗ Connection verification failed for {self.tag}: {e}")
            return False

        logger.info(f"✓ {self.tag}: connected to bucket {bucket} at {self.endpoint or 'default endpoint'}")
        conn_count = self.get_connection_count()
        if conn_count >= 0:
            logger.info(f"✓ Current established connections: {conn_count}")
        return True


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", "Unknown"))


def _describe(error: ClientError) -> str:
    status_code = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)
    return f"{_error_code(error)} (HTTP {status_code})"
