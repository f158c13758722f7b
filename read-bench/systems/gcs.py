"""
Google Cloud Storage system implementation over the S3-interoperable XML API.
"""

from systems.base import ObjectStorageSystem
from configuration import GCS_ENDPOINT
import logging

logger = logging.getLogger(__name__)


class GCSSystem(ObjectStorageSystem):
    """Google Cloud Storage accessed with HMAC keys."""

    tag = "GCS"

    def __init__(self, credentials: dict = None):
        if credentials is None:
            credentials = {}

        super().__init__(
            endpoint=credentials.get("endpoint", GCS_ENDPOINT),
            credentials=credentials,
            addressing_style="path"
        )
        logger.info("Initialized GCS interoperability system")
