#!/usr/bin/env python3
"""
S3 Put CLI

Scans local file selections → resolves per-file metadata → uploads to S3
Content type and cache control can be set per file extension.
"""

import re
import sys
import logging
import argparse
from typing import List, Optional, Sequence

from .config_loader import load_credentials, load_job
from .core import (
    CacheControlRule,
    ContentTypeRule,
    Credentials,
    FileSelection,
    S3PutError,
    UploadJob,
    UploadSummary,
    get_logger,
)
from .core.factories import LoggerAdapter, UploadPipelineFactory
from .core.protocols import FileSelectionEngine, LoggerProtocol, S3ClientProtocol
from .core.services import UploadOrchestrator

_DRIVE = re.compile(r"[A-Za-z]:[\\/]")


def _fileset(value: str) -> FileSelection:
    """Parse DIR[:INCLUDES[:EXCLUDES]] with comma separated patterns.

    A leading drive letter such as ``C:\\build`` stays part of DIR.
    """
    drive = ""
    if _DRIVE.match(value):
        drive, value = value[:2], value[2:]
    parts = value.split(":", 2)
    parts[0] = drive + parts[0]
    if not parts[0]:
        raise argparse.ArgumentTypeError(f"fileset needs a directory: {value!r}")
    includes = parts[1] if len(parts) > 1 else ""
    excludes = parts[2] if len(parts) > 2 else ""
    return FileSelection(base_dir=parts[0], includes=includes, excludes=excludes)


def _content_type_mapping(value: str) -> ContentTypeRule:
    extension, sep, content_type = value.partition("=")
    if not sep or not extension or not content_type:
        raise argparse.ArgumentTypeError(f"expected EXT=TYPE, got {value!r}")
    return ContentTypeRule(extension=extension, content_type=content_type)


def _cache_control_mapping(value: str) -> CacheControlRule:
    extension, sep, max_age = value.partition("=")
    if not sep or not extension:
        raise argparse.ArgumentTypeError(f"expected EXT=SECONDS, got {value!r}")
    try:
        return CacheControlRule(extension=extension, max_age=max_age)
    except S3PutError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser for the put command.

    Returns:
        The configured `argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="s3-put",
        description="Upload local files to an S3 bucket",
    )

    parser.add_argument("--config", help="JSON file describing the upload job")
    parser.add_argument("--bucket", help="Target S3 bucket")
    parser.add_argument("--dest", help="Destination prefix inside the bucket")
    parser.add_argument("--content-type", help="Content-Type for every file")
    parser.add_argument(
        "--cache-control", help="Cache-Control max-age in seconds for every file"
    )
    parser.add_argument(
        "--public-read",
        action="store_true",
        default=None,
        help="Make uploaded objects publicly readable",
    )
    parser.add_argument(
        "--reduced-redundancy",
        action="store_true",
        default=None,
        help="Store objects with reduced redundancy",
    )
    parser.add_argument("--region", help="Region code or endpoint host")
    parser.add_argument(
        "--fileset",
        type=_fileset,
        action="append",
        default=[],
        metavar="DIR[:INCLUDES[:EXCLUDES]]",
        help="Directory to upload with comma separated patterns (repeatable)",
    )
    parser.add_argument(
        "--content-type-mapping",
        type=_content_type_mapping,
        action="append",
        default=[],
        metavar="EXT=TYPE",
        help="Content-Type for files ending in EXT (repeatable, first match wins)",
    )
    parser.add_argument(
        "--cache-control-mapping",
        type=_cache_control_mapping,
        action="append",
        default=[],
        metavar="EXT=SECONDS",
        help="Cache-Control max-age for files ending in EXT (repeatable, first match wins)",
    )
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        default=None,
        help="Keep uploading after a file fails instead of aborting",
    )
    parser.add_argument("--access-key", help="AWS access key id")
    parser.add_argument("--secret-key", help="AWS secret access key")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the put command."""
    return build_parser().parse_args(argv)


def build_job(args: argparse.Namespace) -> UploadJob:
    """
    Assemble the UploadJob from an optional job file and CLI overrides.

    Scalar flags replace values from the file; repeatable options are
    appended after the file's entries.
    """
    job = load_job(args.config) if args.config else UploadJob()

    for name in ("bucket", "dest", "content_type", "cache_control", "region"):
        value = getattr(args, name)
        if value is not None:
            setattr(job, name, value)
    for name in ("public_read", "reduced_redundancy", "continue_on_error"):
        if getattr(args, name):
            setattr(job, name, True)

    for selection in args.fileset:
        job.add_fileset(selection)
    for rule in args.content_type_mapping:
        job.add_content_type_mapping(rule)
    for rule in args.cache_control_mapping:
        job.add_cache_control_mapping(rule)
    return job


def run(
    job: UploadJob,
    credentials: Optional[Credentials] = None,
    s3_client: Optional[S3ClientProtocol] = None,
    logger: Optional[LoggerProtocol] = None,
    engine: Optional[FileSelectionEngine] = None,
) -> UploadSummary:
    """
    Validate the job and upload every selected file.

    Validation happens before any client is created, so a job without a
    bucket never reaches S3.
    """
    UploadOrchestrator.validate(job)
    pipeline = UploadPipelineFactory.create_pipeline(
        job=job,
        credentials=credentials,
        s3_client=s3_client,
        logger=logger,
        engine=engine,
    )
    return pipeline.execute(job)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the put command.

    Parses arguments, builds the job and runs it. Configuration and upload
    errors are logged and exit with status 1, as does a run that collected
    per-file failures with --continue-on-error.
    """
    logger = get_logger("s3-put")
    try:
        args = parse_args(argv)

        if args.debug:
            logger.setLevel(logging.DEBUG)

        job = build_job(args)
        credentials = load_credentials(args.access_key, args.secret_key)
        summary = run(job, credentials=credentials, logger=LoggerAdapter(logger))

        logger.info(
            f"Uploaded {len(summary.uploaded)} file(s) to s3://{summary.bucket} "
            f"in {summary.processing_time:.2f}s"
        )
        if not summary.success:
            logger.error(f"{len(summary.failed)} file(s) failed to upload")
            sys.exit(1)

    except KeyboardInterrupt:
        logger.warning("Upload interrupted by user.")
    except S3PutError as e:
        logger.error(f"Upload failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Upload failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
