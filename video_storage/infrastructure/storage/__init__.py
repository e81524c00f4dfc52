"""
Object storage integration for video uploads and signed URLs.

Supports R2 (Cloudflare) and S3 (AWS) via the S3-compatible API.
Includes mock mode for local development without credentials.
"""

from .client import (
    ConfigurationError,
    MockObjectStore,
    ObjectStore,
    S3ObjectStore,
    StorageConfig,
    StorageError,
    create_object_store,
)
from .signed_urls import DEFAULT_EXPIRES_IN, VideoUrlGenerator

__all__ = [
    "ConfigurationError",
    "DEFAULT_EXPIRES_IN",
    "MockObjectStore",
    "ObjectStore",
    "S3ObjectStore",
    "StorageConfig",
    "StorageError",
    "VideoUrlGenerator",
    "create_object_store",
]
