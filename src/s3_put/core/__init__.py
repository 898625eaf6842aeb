"""Core utilities and shared components for s3-put."""

from .endpoints import REGION_TO_ENDPOINT, resolve_endpoint
from .exceptions import (
    S3PutError,
    ConfigurationError,
    ScanError,
    S3Error,
    TransportError,
)
from .logging_config import get_logger, setup_logger
from .models import (
    AccessControl,
    CacheControlRule,
    ContentTypeRule,
    Credentials,
    ExtensionRule,
    FileSelection,
    ResolvedUpload,
    StorageClass,
    UploadJob,
    UploadSummary,
)
from .paths import build_destination_key, normalize_destination_prefix
from .scanner import DEFAULT_EXCLUDES, DirectoryScanner, match_path

__all__ = [
    "UploadJob",
    "FileSelection",
    "ExtensionRule",
    "ContentTypeRule",
    "CacheControlRule",
    "ResolvedUpload",
    "AccessControl",
    "StorageClass",
    "Credentials",
    "UploadSummary",
    "REGION_TO_ENDPOINT",
    "resolve_endpoint",
    "normalize_destination_prefix",
    "build_destination_key",
    "DEFAULT_EXCLUDES",
    "DirectoryScanner",
    "match_path",
    "setup_logger",
    "get_logger",
    "S3PutError",
    "ConfigurationError",
    "ScanError",
    "S3Error",
    "TransportError",
]
