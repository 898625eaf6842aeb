"""Custom exceptions for the s3-put task."""

from __future__ import annotations


class S3PutError(Exception):
    """Base exception for all s3-put errors."""


class ConfigurationError(S3PutError):
    """Error raised for invalid or incomplete job configuration."""


class ScanError(S3PutError):
    """Error raised when a file selection cannot be scanned."""


class S3Error(S3PutError):
    """Error raised for S3 related failures."""


class TransportError(S3Error):
    """Error raised when uploading a single file fails."""

    def __init__(self, message: str, key: str = "") -> None:
        super().__init__(message)
        self.key = key
