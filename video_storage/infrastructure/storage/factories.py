"""
Wiring between Settings and the storage-backed services.

The CLI and the API both build their uploader and URL generator here, so
credential checks and mock-mode handling live in one place.
"""

from typing import Callable, Optional

from ...config.settings import Settings
from ...core.upload.models import Provider, UploadJob
from ...core.upload.uploader import BatchUploader, ProgressReporter
from .client import ObjectStore, StorageConfig, create_object_store
from .signed_urls import VideoUrlGenerator

StoreFactory = Callable[[StorageConfig], ObjectStore]


def default_store_factory(settings: Settings) -> StoreFactory:
    """Store factory honouring the settings' mock mode."""
    def factory(config: StorageConfig) -> ObjectStore:
        return create_object_store(config, mock_mode=settings.storage_mock_mode)
    return factory


def create_batch_uploader(
    settings: Settings,
    store_factory: Optional[StoreFactory] = None,
    reporter: Optional[ProgressReporter] = None,
) -> BatchUploader:
    """
    Build an uploader whose jobs connect using settings' credentials.

    The returned uploader resolves credentials when a job starts, so a
    ConfigurationError surfaces from run() before the directory is read.
    """
    factory = store_factory or default_store_factory(settings)

    def connect(job: UploadJob) -> ObjectStore:
        config = settings.storage_config(job.provider, bucket_name=job.bucket_name)
        return factory(config)

    return BatchUploader(connect=connect, reporter=reporter)


def create_video_url_generator(
    provider: "str | Provider",
    settings: Settings,
    expires_in: Optional[int] = None,
    store_factory: Optional[StoreFactory] = None,
) -> VideoUrlGenerator:
    """
    Build a signed URL generator for a provider.

    Args:
        provider: "r2" or "s3"
        settings: Credentials and the provider's bucket variable
        expires_in: Default lifetime; falls back to settings.signed_url_expires_in

    Raises:
        UnsupportedProviderError: provider is not r2 or s3
        ConfigurationError: credentials or the bucket variable are missing
    """
    resolved = Provider.parse(provider)
    config = settings.storage_config(resolved)
    factory = store_factory or default_store_factory(settings)

    return VideoUrlGenerator(
        factory(config),
        expires_in=settings.signed_url_expires_in if expires_in is None else expires_in,
    )
