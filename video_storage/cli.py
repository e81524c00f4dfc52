#!/usr/bin/env python3
"""
Command-line entry point.

Usage:
    video-storage upload <r2|s3> <source-dir> <bucket-name> [--prefix=videos/] [--dry-run]
    video-storage sign <r2|s3> <video-key> [--expires-in=3600]

Credentials come from the environment (or a .env file):
    r2: R2_ACCOUNT_ID, R2_ACCESS_KEY_ID, R2_SECRET_ACCESS_KEY
        (R2_BUCKET_NAME for `sign`)
    s3: AWS_REGION (default us-east-1), S3_BUCKET_NAME for `sign`;
        access keys via the standard AWS credential chain

Exit codes: 0 on success, 1 on bad arguments (usage on stdout) or on any
failure (message on stderr).
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from .config.settings import Settings, get_settings
from .core.upload.models import (
    Provider,
    UnsupportedProviderError,
    UploadJob,
    UploadRecord,
    UploadSummary,
    format_size,
    url_map,
)
from .infrastructure.storage.client import ConfigurationError, StorageError
from .infrastructure.storage.factories import (
    create_batch_uploader,
    create_video_url_generator,
)

logger = logging.getLogger(__name__)

# Failures reported as a one-line message instead of a traceback
RUN_ERRORS = (
    ConfigurationError,
    UnsupportedProviderError,
    StorageError,
    OSError,
    ValueError,
)


class UsageParser(argparse.ArgumentParser):
    """ArgumentParser that prints usage to stdout and exits with status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stdout)
        print(f"{self.prog}: error: {message}", file=sys.stdout)
        sys.exit(1)


class ConsoleReporter:
    """Prints upload progress for humans."""

    def __init__(self, stream=None) -> None:
        self._stream = stream or sys.stdout
        self._records: list[UploadRecord] = []

    def file_processed(self, record: UploadRecord, dry_run: bool) -> None:
        self._records.append(record)
        marker = "[dry-run] " if dry_run else ""
        print(
            f"{marker}{record.local_path} -> {record.object_key} ({format_size(record.size_bytes)})",
            file=self._stream,
        )

    def finished(self, summary: UploadSummary) -> None:
        verb = "Would upload" if summary.dry_run else "Uploaded"
        print(
            f"\n{verb} {summary.count} files, {format_size(summary.total_bytes)} "
            f"({summary.total_bytes} bytes)",
            file=self._stream,
        )
        urls = url_map(self._records)
        if urls:
            print("\nURLs:", file=self._stream)
            for key, url in urls.items():
                print(f"  {key}: {url}", file=self._stream)


def build_parser() -> argparse.ArgumentParser:
    parser = UsageParser(
        prog="video-storage",
        description="Upload videos to R2/S3 and issue signed playback URLs",
    )
    commands = parser.add_subparsers(dest="command", metavar="command")
    commands.required = True

    upload = commands.add_parser("upload", help="Upload every video under a directory")
    upload.add_argument("provider", help="Storage provider (r2 or s3)")
    upload.add_argument("source_dir", help="Directory to scan for videos")
    upload.add_argument("bucket_name", help="Destination bucket")
    upload.add_argument("--prefix", default="", help="Prepended verbatim to every object key")
    upload.add_argument("--dry-run", action="store_true", help="Plan and report, don't upload")

    sign = commands.add_parser("sign", help="Print a signed URL for a video key")
    sign.add_argument("provider", help="Storage provider (r2 or s3)")
    sign.add_argument("video_key", help="Object key of the video")
    sign.add_argument("--expires-in", type=int, default=None, help="Lifetime in seconds")

    return parser


async def run_upload(args: argparse.Namespace, settings: Settings) -> list[UploadRecord]:
    job = UploadJob(
        provider=Provider.parse(args.provider),
        source_directory=Path(args.source_dir),
        bucket_name=args.bucket_name,
        key_prefix=args.prefix,
        dry_run=args.dry_run,
    )

    if job.dry_run:
        print("Dry run: no files will be uploaded\n")

    uploader = create_batch_uploader(settings, reporter=ConsoleReporter())
    return await uploader.run(job)


async def run_sign(args: argparse.Namespace, settings: Settings) -> str:
    generator = create_video_url_generator(args.provider, settings)
    url = await generator(args.video_key, expires_in=args.expires_in)
    print(url)
    return url


def main(argv: Optional[Sequence[str]] = None, settings: Optional[Settings] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = settings or get_settings()

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=settings.log_level_number,
    )

    try:
        if args.command == "upload":
            asyncio.run(run_upload(args, settings))
        else:
            asyncio.run(run_sign(args, settings))
    except RUN_ERRORS as e:
        logger.debug("Command failed", exc_info=e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
