"""Testing utilities and fakes for s3-put."""

from .fakes import (
    FakeS3Client,
    FakeLogger,
    FakeSelectionEngine,
    S3Object,
    S3Bucket,
    create_file_tree,
    setup_test_upload_environment,
)

__all__ = [
    "FakeS3Client",
    "FakeLogger",
    "FakeSelectionEngine",
    "S3Object",
    "S3Bucket",
    "create_file_tree",
    "setup_test_upload_environment",
]
