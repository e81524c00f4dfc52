"""
Domain models for batch video uploads.

These models describe what an upload run is and what it produced. They have
no dependencies on boto3, FastAPI or the environment, so they can be built
and compared freely in tests.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePath
from typing import Iterable, Optional


class UnsupportedProviderError(ValueError):
    """Raised when a provider name is not one of the supported backends."""
    pass


class ConfigurationError(Exception):
    """Raised when credentials or bucket identifiers are missing."""

    def __init__(self, missing: list[str], provider: Optional["Provider"] = None) -> None:
        self.missing = list(missing)
        self.provider = provider
        label = f" for provider '{provider.value}'" if provider else ""
        super().__init__(
            f"Missing required configuration{label}: {', '.join(self.missing)}"
        )


class Provider(Enum):
    """S3-compatible storage backends we know how to talk to."""
    R2 = "r2"
    S3 = "s3"

    @classmethod
    def parse(cls, value: "str | Provider") -> "Provider":
        """Parse a provider name such as ``"r2"`` or ``" S3 "``."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for provider in cls:
            if provider.value == normalized:
                return provider
        supported = ", ".join(p.value for p in cls)
        raise UnsupportedProviderError(
            f"Unsupported provider: {value!r} (expected one of: {supported})"
        )


@dataclass(frozen=True)
class UploadJob:
    """
    Parameters for a single upload run.

    Frozen because a run must see the same job from start to finish.
    """
    provider: Provider
    source_directory: Path
    bucket_name: str
    key_prefix: str = ""
    dry_run: bool = False

    def __post_init__(self) -> None:
        if not self.bucket_name.strip():
            raise ConfigurationError(["bucket_name"], self.provider)


@dataclass(frozen=True)
class DiscoveredFile:
    """A video file found by the directory walk."""
    absolute_path: Path
    relative_path: PurePath

    @property
    def extension(self) -> str:
        """Lower-cased extension without the leading dot."""
        return self.absolute_path.suffix.lower().lstrip(".")


@dataclass(frozen=True)
class UploadRecord:
    """
    Outcome of processing one file.

    Produced in dry runs too, so a dry run shows exactly what a real run
    would do.
    """
    local_path: str
    object_key: str
    url: str
    size_bytes: int


@dataclass(frozen=True)
class UploadSummary:
    """Totals reported after a run."""
    count: int
    total_bytes: int
    dry_run: bool = False

    @classmethod
    def from_records(
        cls,
        records: Iterable[UploadRecord],
        dry_run: bool = False,
    ) -> "UploadSummary":
        records = list(records)
        return cls(
            count=len(records),
            total_bytes=sum(r.size_bytes for r in records),
            dry_run=dry_run,
        )


def url_map(records: Iterable[UploadRecord]) -> dict[str, str]:
    """Object key -> URL, in processing order."""
    return {record.object_key: record.url for record in records}


def format_size(size_bytes: int) -> str:
    """Human-readable byte count (``1.5 MB``)."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = float(size_bytes)
    for unit in ("KB", "MB", "GB"):
        size /= 1024
        if size < 1024:
            return f"{size:.1f} {unit}"
    return f"{size / 1024:.1f} TB"
