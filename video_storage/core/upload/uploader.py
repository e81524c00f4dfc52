"""
Batch upload orchestration.

The uploader walks a source directory, maps each video onto an object key
and hands the bytes to an upload target one file at a time. It knows nothing
about boto3 or environment variables: the caller supplies a `connect`
callable that turns a job into a target, and infrastructure code provides
the real one.

Processing is strictly sequential. A file's bytes are read, uploaded and
dropped before the next file is opened, so memory use is bounded by the
largest single file rather than the whole tree.

Failures are not retried. The first error from connecting, walking, stat,
read or put ends the run and reaches the caller unchanged. Re-running starts
over from the first file and overwrites keys that already exist.
"""

import logging
from typing import Callable, Optional, Protocol

from .keys import build_object_key, content_type_for, normalize_path
from .models import (
    DiscoveredFile,
    UploadJob,
    UploadRecord,
    UploadSummary,
    format_size,
)
from .walker import walk_video_files

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocols (interfaces)
# ---------------------------------------------------------------------------

class UploadTarget(Protocol):
    """
    Where the uploader sends bytes.

    Implemented by the object store clients in infrastructure.storage and
    by in-memory fakes in tests.
    """

    def public_url(self, key: str) -> str:
        """URL reported for an uploaded key."""
        ...

    async def put_object(self, key: str, body: bytes, content_type: str) -> None:
        """Store body at key, replacing any existing object."""
        ...


class ProgressReporter(Protocol):
    """Receives progress as the run advances."""

    def file_processed(self, record: UploadRecord, dry_run: bool) -> None:
        ...

    def finished(self, summary: UploadSummary) -> None:
        ...


class LoggingReporter:
    """Default reporter: progress goes to the module logger."""

    def file_processed(self, record: UploadRecord, dry_run: bool) -> None:
        logger.info(
            "Would upload video" if dry_run else "Uploaded video",
            extra={
                "local_path": record.local_path,
                "object_key": record.object_key,
                "size_bytes": record.size_bytes,
            }
        )

    def finished(self, summary: UploadSummary) -> None:
        logger.info(
            "Batch upload complete: %d files, %s",
            summary.count,
            format_size(summary.total_bytes),
            extra={
                "count": summary.count,
                "total_bytes": summary.total_bytes,
                "dry_run": summary.dry_run,
            }
        )


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------

class BatchUploader:
    """
    Upload every video under a directory to a bucket.

    Usage:
        uploader = BatchUploader(connect=lambda job: store)
        records = await uploader.run(job)
    """

    def __init__(
        self,
        connect: Callable[[UploadJob], UploadTarget],
        reporter: Optional[ProgressReporter] = None,
    ) -> None:
        self._connect = connect
        self._reporter = reporter or LoggingReporter()

    async def run(self, job: UploadJob) -> list[UploadRecord]:
        """
        Execute one upload run.

        Returns the records in discovery order. Dry runs return the same
        records a real run would, without transferring any bytes.

        Raises:
            ConfigurationError: credentials for the provider are missing
            FileNotFoundError: the source directory does not exist
            PermissionError: a directory or file cannot be read
            StorageError: the store rejected a put
            ValueError: a file name cannot be encoded as an object key
        """
        # Resolve credentials before touching the filesystem
        target = self._connect(job)

        logger.info(
            "Starting batch upload",
            extra={
                "provider": job.provider.value,
                "source_directory": str(job.source_directory),
                "bucket": job.bucket_name,
                "prefix": job.key_prefix,
                "dry_run": job.dry_run,
            }
        )

        records: list[UploadRecord] = []

        for discovered in walk_video_files(job.source_directory):
            record = await self._process(discovered, job, target)
            records.append(record)
            self._reporter.file_processed(record, job.dry_run)

        self._reporter.finished(UploadSummary.from_records(records, dry_run=job.dry_run))

        return records

    async def _process(
        self,
        discovered: DiscoveredFile,
        job: UploadJob,
        target: UploadTarget,
    ) -> UploadRecord:
        key = build_object_key(discovered.relative_path, job.key_prefix)
        content_type = content_type_for(discovered.absolute_path.name)
        size_bytes = discovered.absolute_path.stat().st_size

        if not job.dry_run:
            body = discovered.absolute_path.read_bytes()
            await target.put_object(key, body, content_type)

        return UploadRecord(
            local_path=normalize_path(discovered.relative_path),
            object_key=key,
            url=target.public_url(key),
            size_bytes=size_bytes,
        )
