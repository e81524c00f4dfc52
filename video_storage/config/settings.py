"""
Application configuration using Pydantic settings.

Configuration is loaded from environment variables (and a .env file) with
sensible defaults. Using Pydantic's BaseSettings means we get:
- Type validation at startup (fail fast if config is wrong)
- Documentation of what's required vs optional
- Easy testing: construct Settings(...) with fake credentials

Settings is only read at the edges (CLI, API dependencies). Everything
below receives an explicit StorageConfig built from it.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.upload.models import Provider
from ..infrastructure.storage.client import ConfigurationError, StorageConfig


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Variable names are the upper-case field names (R2_ACCESS_KEY_ID etc).
    """

    # Cloudflare R2
    r2_account_id: str = Field(
        default="",
        description="Cloudflare account ID for R2"
    )
    r2_access_key_id: str = Field(
        default="",
        description="R2 access key ID"
    )
    r2_secret_access_key: str = Field(
        default="",
        description="R2 secret access key"
    )
    r2_bucket_name: str = Field(
        default="",
        description="R2 bucket used when issuing signed URLs"
    )
    r2_public_url: Optional[str] = Field(
        default=None,
        description="Public base URL for R2 objects (custom domain). Overrides the reported URL pattern."
    )

    # AWS S3 (access keys come from boto3's credential chain)
    aws_region: str = Field(
        default="us-east-1",
        description="AWS region for S3"
    )
    s3_bucket_name: str = Field(
        default="",
        description="S3 bucket used when issuing signed URLs"
    )
    s3_public_url: Optional[str] = Field(
        default=None,
        description="Public base URL for S3 objects (CloudFront etc). Overrides the reported URL pattern."
    )

    # Signed URLs
    signed_url_expires_in: int = Field(
        default=3600,
        ge=1,
        le=604800,
        description="Default signed URL lifetime in seconds. SigV4 caps this at 7 days."
    )

    # Local development
    storage_mock_mode: bool = Field(
        default=False,
        description="Use in-memory storage instead of a real bucket. Nothing leaves the machine."
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # CORS
    cors_origins: str = Field(
        default="*",
        description="Comma-separated origins allowed to call the signed URL API."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def log_level_number(self) -> int:
        """Numeric logging level; unknown names fall back to INFO."""
        level = logging.getLevelName(self.log_level.strip().upper())
        return level if isinstance(level, int) else logging.INFO

    def bucket_for(self, provider: Provider) -> str:
        """Bucket configured for signed URLs on a provider."""
        if provider is Provider.R2:
            return self.r2_bucket_name
        return self.s3_bucket_name

    def missing_fields(self, provider: Provider, require_bucket: bool = False) -> list[str]:
        """
        Environment variables that must be set for a provider but aren't.

        The uploader takes its bucket from the command line, so the bucket
        variable is only required when issuing signed URLs.
        Mock mode needs no credentials at all.
        """
        missing = []

        if self.storage_mock_mode:
            return missing

        if provider is Provider.R2:
            if not self.r2_account_id:
                missing.append("R2_ACCOUNT_ID")
            if not self.r2_access_key_id:
                missing.append("R2_ACCESS_KEY_ID")
            if not self.r2_secret_access_key:
                missing.append("R2_SECRET_ACCESS_KEY")
            if require_bucket and not self.r2_bucket_name:
                missing.append("R2_BUCKET_NAME")
        else:
            if require_bucket and not self.s3_bucket_name:
                missing.append("S3_BUCKET_NAME")

        return missing

    def storage_config(
        self,
        provider: Provider,
        bucket_name: Optional[str] = None,
    ) -> StorageConfig:
        """
        Build the explicit storage configuration for a provider.

        Args:
            provider: Target backend
            bucket_name: Bucket to use. If None, the provider's bucket
                variable is used and becomes required.

        Raises:
            ConfigurationError: listing every missing variable name
        """
        missing = self.missing_fields(provider, require_bucket=bucket_name is None)
        if missing:
            raise ConfigurationError(missing, provider)

        bucket = bucket_name or self.bucket_for(provider)

        if provider is Provider.R2:
            return StorageConfig.for_r2(
                account_id=self.r2_account_id,
                access_key_id=self.r2_access_key_id,
                secret_access_key=self.r2_secret_access_key,
                bucket_name=bucket,
                public_base_url=self.r2_public_url,
            )

        return StorageConfig.for_s3(
            bucket_name=bucket,
            region=self.aws_region,
            public_base_url=self.s3_public_url,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache means we only load settings once per process.
    For tests, you can call get_settings.cache_clear() to reset.
    """
    return Settings()
