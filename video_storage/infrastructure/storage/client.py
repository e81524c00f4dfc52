"""
Object storage client for video uploads and signed playback URLs.

Supports Cloudflare R2 and AWS S3 through boto3, since R2 speaks the S3 API.
The two providers differ only in endpoint, region and where credentials come
from; the request shape is identical.

Mock mode stores objects in memory, enabling CLI and API testing without
provisioning a bucket.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from ...core.upload.models import ConfigurationError, Provider  # noqa: F401 (re-exported)

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the store rejects or fails a put or sign operation."""
    pass


@dataclass(frozen=True)
class StorageConfig:
    """
    Connection details for one provider and bucket.

    Built explicitly by the caller (usually from Settings) and passed into
    the store factory, so nothing here reads the environment.

    For S3 the access keys are normally left as None: boto3 then resolves
    them through its own chain (environment, shared config, instance role).
    """
    provider: Provider
    bucket_name: str
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    account_id: Optional[str] = None
    region: str = "us-east-1"
    endpoint_url: Optional[str] = None
    public_base_url: Optional[str] = None

    @classmethod
    def for_r2(
        cls,
        account_id: str,
        access_key_id: str,
        secret_access_key: str,
        bucket_name: str,
        public_base_url: Optional[str] = None,
    ) -> "StorageConfig":
        """
        R2 configuration.

        R2 endpoints follow the pattern https://{account_id}.r2.cloudflarestorage.com
        and use 'auto' as the region.
        """
        return cls(
            provider=Provider.R2,
            bucket_name=bucket_name,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            account_id=account_id,
            region="auto",
            endpoint_url=f"https://{account_id}.r2.cloudflarestorage.com",
            public_base_url=public_base_url,
        )

    @classmethod
    def for_s3(
        cls,
        bucket_name: str,
        region: str = "us-east-1",
        public_base_url: Optional[str] = None,
    ) -> "StorageConfig":
        """S3 configuration with credentials left to boto3's resolution chain."""
        return cls(
            provider=Provider.S3,
            bucket_name=bucket_name,
            region=region or "us-east-1",
            public_base_url=public_base_url,
        )

    @property
    def has_public_address(self) -> bool:
        """Whether public_url can name a real host for this bucket."""
        if self.public_base_url:
            return True
        if self.provider is Provider.R2:
            return bool(self.bucket_name and self.account_id)
        return bool(self.bucket_name)

    def public_url(self, key: str) -> str:
        """
        URL reported for an uploaded object.

        Assumes virtual-hosted-style addressing. This is for display only and
        is not checked against the store, so buckets with custom domains or
        path-style addressing should set public_base_url instead.
        """
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        if self.provider is Provider.R2:
            return f"https://{self.bucket_name}.{self.account_id}.r2.cloudflarestorage.com/{key}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"


class ObjectStore(Protocol):
    """
    Protocol for object storage operations.

    Using a protocol means tests can provide fakes and the uploader and URL
    generator don't care which backend they're talking to.
    """

    def public_url(self, key: str) -> str:
        """URL reported for a key (not a signed URL)."""
        ...

    async def put_object(self, key: str, body: bytes, content_type: str) -> None:
        """Store bytes at key, unconditionally overwriting."""
        ...

    async def presigned_url(self, key: str, expires_in: int) -> str:
        """Generate a temporary GET URL for key."""
        ...


class S3ObjectStore:
    """
    boto3-backed store for R2 and S3.

    All methods are async to match the Protocol even though boto3 is
    synchronous. Calls are awaited one at a time by the uploader, so the
    blocking is sequential anyway.
    """

    def __init__(self, config: StorageConfig) -> None:
        import boto3
        from botocore.config import Config

        self._config = config

        # R2 requires v4 signatures and path-style addressing
        if config.provider is Provider.R2:
            boto_config = Config(
                signature_version="s3v4",
                s3={"addressing_style": "path"},
            )
        else:
            boto_config = Config(signature_version="s3v4")

        self._s3_client = boto3.client(
            "s3",
            endpoint_url=config.endpoint_url,
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key,
            region_name=config.region,
            config=boto_config,
        )

        logger.info(
            "Initialized object storage client",
            extra={
                "provider": config.provider.value,
                "bucket": config.bucket_name,
                "endpoint": config.endpoint_url or "aws",
            }
        )

    @property
    def config(self) -> StorageConfig:
        return self._config

    def public_url(self, key: str) -> str:
        return self._config.public_url(key)

    async def put_object(self, key: str, body: bytes, content_type: str) -> None:
        """Upload bytes with a single PutObject call."""
        try:
            self._s3_client.put_object(
                Bucket=self._config.bucket_name,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "Failed to upload object",
                extra={"object_key": key, "error": str(e)}
            )
            raise StorageError(f"Upload of '{key}' failed: {e}") from e

        logger.debug(
            "Uploaded object",
            extra={
                "object_key": key,
                "content_type": content_type,
                "size_bytes": len(body),
            }
        )

    async def presigned_url(self, key: str, expires_in: int) -> str:
        """
        Generate a temporary download URL.

        Signing happens locally; no request reaches the bucket and the
        object is not touched. The URL stays valid until it expires or the
        signing credential is rotated.
        """
        try:
            return self._s3_client.generate_presigned_url(
                "get_object",
                Params={
                    "Bucket": self._config.bucket_name,
                    "Key": key,
                },
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "Failed to generate presigned URL",
                extra={"object_key": key, "error": str(e)}
            )
            raise StorageError(f"Presigned URL generation for '{key}' failed: {e}") from e


# ---------------------------------------------------------------------------
# Mock Storage for Local Development
# ---------------------------------------------------------------------------

class MockObjectStore:
    """
    In-memory storage for local development.

    Objects live in a dict and "signed URLs" are mock URIs. Not suitable
    for production, but enough to exercise the CLI and API end to end.
    """

    def __init__(self, config: Optional[StorageConfig] = None) -> None:
        self._config = config
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}
        logger.info("Initialized mock storage client (in-memory)")

    def public_url(self, key: str) -> str:
        # Without an account id or bucket the real pattern would be a broken host
        if self._config is not None and self._config.has_public_address:
            return self._config.public_url(key)
        return f"mock://storage/{key}"

    async def put_object(self, key: str, body: bytes, content_type: str) -> None:
        self.objects[key] = bytes(body)
        self.content_types[key] = content_type

        logger.debug(
            "Stored object in mock storage",
            extra={"object_key": key, "size_bytes": len(body)}
        )

    async def presigned_url(self, key: str, expires_in: int) -> str:
        return f"mock://storage/{key}?expires_in={expires_in}"


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_object_store(
    config: Optional[StorageConfig] = None,
    mock_mode: bool = False,
) -> ObjectStore:
    """
    Create an object store for a configuration.

    Args:
        config: Storage configuration (required if not mock_mode)
        mock_mode: If True, return the in-memory store

    Returns:
        ObjectStore implementation (boto3 or mock)
    """
    if mock_mode:
        return MockObjectStore(config)

    if config is None:
        raise ValueError("config is required when not in mock mode")

    return S3ObjectStore(config)
