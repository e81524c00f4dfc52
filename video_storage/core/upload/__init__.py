"""
Batch upload planning and orchestration.

Contains the upload domain models, the directory walker, key mapping and
the sequential uploader.
"""

from .keys import build_object_key, content_type_for
from .models import (
    ConfigurationError,
    DiscoveredFile,
    Provider,
    UnsupportedProviderError,
    UploadJob,
    UploadRecord,
    UploadSummary,
)
from .uploader import BatchUploader, ProgressReporter, UploadTarget
from .walker import VIDEO_EXTENSIONS, walk_video_files

__all__ = [
    "BatchUploader",
    "ConfigurationError",
    "DiscoveredFile",
    "ProgressReporter",
    "Provider",
    "UnsupportedProviderError",
    "UploadJob",
    "UploadRecord",
    "UploadSummary",
    "UploadTarget",
    "VIDEO_EXTENSIONS",
    "build_object_key",
    "content_type_for",
    "walk_video_files",
]
