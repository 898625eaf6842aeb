"""Service implementations for the upload task."""

import time
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .error_handling import BatchOperationContextManager, with_error_handling
from .exceptions import ConfigurationError, ScanError, TransportError
from .models import AccessControl, ResolvedUpload, StorageClass, UploadJob, UploadSummary
from .paths import build_destination_key, normalize_destination_prefix
from .protocols import FileSelectionEngine, LoggerProtocol, S3ClientProtocol


class MetadataResolver:
    """Computes the ACL, storage class and HTTP headers for one file.

    Extension rules are checked in declaration order and the first suffix
    match wins. The job-wide value is only used when no rule matched.
    """

    def resolve(self, local_path: Path, key: str, job: UploadJob) -> ResolvedUpload:
        filename = local_path.name

        content_type = next(
            (
                rule.content_type
                for rule in job.content_type_mappings
                if rule.matches(filename)
            ),
            job.content_type,
        )

        default_cache_control = (
            f"max-age={job.cache_control}" if job.cache_control is not None else None
        )
        cache_control = next(
            (
                rule.header_value
                for rule in job.cache_control_mappings
                if rule.matches(filename)
            ),
            default_cache_control,
        )

        return ResolvedUpload(
            key=key,
            local_path=local_path,
            content_type=content_type,
            cache_control=cache_control,
            access_control=(
                AccessControl.PUBLIC_READ if job.public_read else AccessControl.PRIVATE
            ),
            storage_class=(
                StorageClass.REDUCED_REDUNDANCY
                if job.reduced_redundancy
                else StorageClass.STANDARD
            ),
        )


@with_error_handling
def _put_object(
    s3_client: S3ClientProtocol,
    bucket: str,
    local_path: Path,
    *,
    key: str,
    extra_args: Dict[str, str],
) -> Dict[str, Any]:
    # The handle is released before the next file, on success or failure.
    with open(local_path, "rb") as body:
        return s3_client.put_object(Bucket=bucket, Key=key, Body=body, **extra_args)


class S3ObjectUploader:
    """Sends one resolved file to S3."""

    def __init__(self, s3_client: S3ClientProtocol, logger: LoggerProtocol):
        self._s3_client = s3_client
        self._logger = logger

    def upload(self, bucket: str, upload: ResolvedUpload) -> Dict[str, Any]:
        """Upload a file; raises TransportError when the client fails."""
        extra_args = upload.put_object_args()
        self._logger.debug(
            f"Uploading {upload.local_path} to s3://{bucket}/{upload.key} {extra_args}"
        )
        return _put_object(
            self._s3_client,
            bucket,
            upload.local_path,
            key=upload.key,
            extra_args=extra_args,
        )


class UploadOrchestrator:
    """Main orchestrator: expands the selections and uploads every file."""

    def __init__(
        self,
        engine: FileSelectionEngine,
        uploader: S3ObjectUploader,
        logger: LoggerProtocol,
        resolver: Optional[MetadataResolver] = None,
    ):
        self._engine = engine
        self._uploader = uploader
        self._logger = logger
        self._resolver = resolver or MetadataResolver()

    @staticmethod
    def validate(job: UploadJob) -> None:
        """Fail with ConfigurationError when the job cannot run at all."""
        if job.bucket is None or not job.bucket.strip():
            raise ConfigurationError("Target bucket not given. Cannot upload")

    def expand_selections(
        self, job: UploadJob, skipped: Optional[List[str]] = None
    ) -> Iterator[Tuple[Path, str]]:
        """
        Yield (base_dir, relative_path) pairs for every selected file.

        A selection whose directory cannot be scanned is logged and skipped;
        the remaining selections are still expanded.

        Args:
            job: Job whose filesets are expanded in declaration order
            skipped: Optional list receiving the base dirs that failed
        """
        for selection in job.filesets:
            base_dir = selection.base_dir
            try:
                files = self._engine.expand(
                    base_dir,
                    selection.includes,
                    selection.excludes,
                    selection.default_excludes,
                )
            except ScanError as e:
                self._logger.error("Could not upload file(s) to S3")
                self._logger.error(str(e))
                if skipped is not None:
                    skipped.append(str(base_dir))
                continue

            if files:
                self._logger.info(
                    f"Uploading {len(files)} file(s) from {base_dir.absolute()}"
                )
            for relative_path in files:
                yield base_dir, relative_path

    def resolve(
        self, job: UploadJob, base_dir: Path, relative_path: str, prefix: str
    ) -> ResolvedUpload:
        key = build_destination_key(prefix, relative_path)
        return self._resolver.resolve(base_dir / relative_path, key, job)

    def execute(self, job: UploadJob) -> UploadSummary:
        """
        Upload every selected file of the job, one at a time.

        Upload failures raise TransportError and stop the run, unless the
        job sets continue_on_error, in which case they are collected in the
        returned summary.
        """
        self.validate(job)
        job = job.model_copy(deep=True)
        start_time = time.time()

        bucket = job.bucket or ""
        prefix = normalize_destination_prefix(job.dest)
        summary = UploadSummary(bucket=bucket)

        with BatchOperationContextManager(f"Upload to s3://{bucket}", self._logger) as batch:
            for base_dir, relative_path in self.expand_selections(
                job, summary.skipped_selections
            ):
                upload = self.resolve(job, base_dir, relative_path, prefix)
                try:
                    self._uploader.upload(bucket, upload)
                except TransportError as e:
                    if not job.continue_on_error:
                        raise
                    batch.add_error(e, upload.key)
                    continue

                summary.uploaded.append(upload.key)
                clean_path = relative_path.replace("\\", "/")
                self._logger.info(
                    f"File: {clean_path} copied to bucket: {bucket} destination: {prefix}"
                )

        summary.failed = batch.error_map()
        summary.processing_time = time.time() - start_time
        return summary
