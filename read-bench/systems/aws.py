"""
AWS S3 object storage system implementation.
"""

from systems.base import ObjectStorageSystem
from configuration import S3_ENDPOINT
import logging

logger = logging.getLogger(__name__)


class AWSSystem(ObjectStorageSystem):
    """AWS S3 object storage system."""

    tag = "S3"

    def __init__(self, credentials: dict = None):
        if credentials is None:
            credentials = {}

        super().__init__(
            endpoint=credentials.get("endpoint", S3_ENDPOINT),
            credentials=credentials
        )
        logger.info("Initialized AWS S3 system")
