"""
Configuration constants for the object storage read benchmark.

This module contains all configuration parameters including:
- Cloud credentials and endpoints for every supported backend
- Read parameters (buffer size, random read sizes)
- Client connection settings (timeouts, pool size)
- File size constants and conversion factors
"""

import os
from typing import List

# =============================================================================
# CLOUD STORAGE CONFIGURATION
# =============================================================================

# Environment variable pointing at a JSON credentials file
CREDENTIALS_ENV_VAR: str = "READ_BENCH_CREDENTIALS"

# AWS S3 credentials and configuration
S3_ENDPOINT: str = os.getenv("S3_ENDPOINT", "")
AWS_ACCESS_KEY_ID: str = os.getenv("AWS_ACCESS_KEY_ID", "")
AWS_SECRET_ACCESS_KEY: str = os.getenv("AWS_SECRET_ACCESS_KEY", "")
AWS_REGION: str = os.getenv("AWS_REGION", "eu-north-1")

# Cloudflare R2 credentials and configuration
R2_ENDPOINT: str = os.getenv("R2_ENDPOINT", "")
R2_ACCESS_KEY_ID: str = os.getenv("R2_ACCESS_KEY_ID", "")
R2_SECRET_ACCESS_KEY: str = os.getenv("R2_SECRET_ACCESS_KEY", "")

# Google Cloud Storage through the S3-interoperable XML API (HMAC keys)
GCS_ENDPOINT: str = os.getenv("GCS_ENDPOINT", "https://storage.googleapis.com")
GCS_HMAC_ACCESS_KEY_ID: str = os.getenv("GCS_HMAC_ACCESS_KEY_ID", "")
GCS_HMAC_SECRET: str = os.getenv("GCS_HMAC_SECRET", "")

SUPPORTED_STORAGE_TYPES: List[str] = ["r2", "s3", "gcs"]
DEFAULT_STORAGE_TYPES: List[str] = ["r2"]

# =============================================================================
# FILE SIZE CONSTANTS
# =============================================================================

BYTES_PER_KB: int = 1024
BYTES_PER_MB: int = 1024 * 1024
MILLISECONDS_PER_SECOND: float = 1000.0

# =============================================================================
# READ PARAMETERS
# =============================================================================

# Buffer used to drain a full-object stream
DEFAULT_BUFFER_SIZE: int = 4 * BYTES_PER_MB

# Chunk sizes exercised by the random read pattern, largest first
DEFAULT_RANDOM_READ_SIZES: List[int] = [
    4 * BYTES_PER_MB,
    2 * BYTES_PER_MB,
    1 * BYTES_PER_MB,
    100 * BYTES_PER_KB,
]

# Duration recorded for an iteration that did not complete
FAILED_DURATION: int = -1

# Percentiles reported for every run
REPORTED_PERCENTILES = {"p50": 0.5, "p90": 0.9}

# =============================================================================
# CLIENT CONNECTION CONFIGURATION
# =============================================================================

# One stream is open at a time per run
MAX_POOL_CONNECTIONS: int = 10
CONNECT_TIMEOUT_SECONDS: int = 5
READ_TIMEOUT_SECONDS: int = 60

# Retries are left to callers wrapping the storage port
CLIENT_MAX_RETRIES: int = 0

# =============================================================================
# CLI DEFAULTS
# =============================================================================

DEFAULT_LOG_LEVEL: str = "INFO"
LOG_FORMAT: str = "%(asctime)s - %(levelname)s - %(message)s"
