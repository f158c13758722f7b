"""
Factory module for creating storage system instances.
"""

import json
import logging
import os
from typing import Dict, Optional

# Suppress boto3/botocore logging before importing any boto3-related modules
logging.getLogger('botocore').setLevel(logging.CRITICAL)
logging.getLogger('botocore.credentials').setLevel(logging.CRITICAL)
logging.getLogger('boto3').setLevel(logging.CRITICAL)
logging.getLogger('aioboto3').setLevel(logging.CRITICAL)
logging.getLogger('aiobotocore').setLevel(logging.CRITICAL)
logging.getLogger('urllib3').setLevel(logging.CRITICAL)

from common.errors import InvalidArgumentError
from systems.aws import AWSSystem
from systems.gcs import GCSSystem
from systems.r2 import R2System
from configuration import (
    R2_ACCESS_KEY_ID,
    R2_SECRET_ACCESS_KEY,
    AWS_ACCESS_KEY_ID,
    AWS_SECRET_ACCESS_KEY,
    AWS_REGION,
    GCS_HMAC_ACCESS_KEY_ID,
    GCS_HMAC_SECRET,
    CREDENTIALS_ENV_VAR,
    SUPPORTED_STORAGE_TYPES,
)

logger = logging.getLogger(__name__)

_CREDENTIAL_KEYS = ("access_key_id", "secret_access_key", "region_name", "endpoint")


def default_credentials(storage_type: str) -> Dict[str, str]:
    """Credentials for a storage type taken from the environment."""
    if storage_type == "r2":
        return {
            "access_key_id": R2_ACCESS_KEY_ID,
            "secret_access_key": R2_SECRET_ACCESS_KEY,
            "region_name": "auto",
        }
    if storage_type == "s3":
        return {
            "access_key_id": AWS_ACCESS_KEY_ID,
            "secret_access_key": AWS_SECRET_ACCESS_KEY,
            "region_name": AWS_REGION,
        }
    if storage_type == "gcs":
        return {
            "access_key_id": GCS_HMAC_ACCESS_KEY_ID,
            "secret_access_key": GCS_HMAC_SECRET,
            "region_name": "auto",
        }
    raise InvalidArgumentError(
        f"Unsupported storage type: {storage_type}. Must be one of {SUPPORTED_STORAGE_TYPES}."
    )


def load_credentials_file(path: Optional[str] = None) -> Optional[Dict[str, str]]:
    """Load credential overrides from a JSON file.

    Falls back to the path in ``READ_BENCH_CREDENTIALS`` when ``path`` is not
    given. Returns None when neither is set.

    Raises:
        InvalidArgumentError: If the file cannot be read or is not a JSON object
    """
    path = path or os.getenv(CREDENTIALS_ENV_VAR)
    if not path:
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidArgumentError(f"Cannot load credentials from {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidArgumentError(f"Credentials file {path} must contain a JSON object")

    logger.info(f"Loaded credentials from {path}")
    return {k: str(data[k]) for k in _CREDENTIAL_KEYS if k in data}


def create_storage_system(storage_type: str, credentials: Optional[Dict[str, str]] = None):
    """Create and return the appropriate storage system based on type.

    Args:
        storage_type: Storage type ('r2', 's3' or 'gcs')
        credentials: Overrides merged on top of the environment credentials

    Returns:
        Storage system instance (R2System, AWSSystem or GCSSystem)

    Raises:
        InvalidArgumentError: If storage_type is not supported
    """
    storage_type = storage_type.lower()
    merged = default_credentials(storage_type)
    if credentials:
        merged.update(credentials)

    if storage_type == "r2":
        return R2System(merged)
    elif storage_type == "s3":
        return AWSSystem(merged)
    return GCSSystem(merged)
