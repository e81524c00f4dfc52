"""
Video Storage Utilities - upload videos to object storage and sign playback URLs.

This package contains:
- core: Framework-agnostic upload planning (directory walk, key mapping)
- infrastructure: Object storage integration (R2/S3 via boto3)
- api: FastAPI routes for issuing signed URLs
- config: Application configuration
- cli: Command-line entry point
"""

__version__ = "0.1.0"
