"""Factory classes for creating configured service instances."""

import logging
from typing import Any, Optional

import boto3

from .endpoints import endpoint_url, resolve_endpoint, signing_region
from .models import Credentials, UploadJob
from .protocols import FileSelectionEngine, LoggerProtocol, S3ClientProtocol
from .scanner import DirectoryScanner
from .services import MetadataResolver, S3ObjectUploader, UploadOrchestrator


class LoggerAdapter:
    """Adapter to make standard logger compatible with LoggerProtocol."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._logger.debug(message)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self._logger.info(message)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._logger.warning(message)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self._logger.error(message)


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(name: str, level: int = logging.INFO) -> LoggerProtocol:
        """Create a configured logger instance."""
        logger = logging.getLogger(name)
        logger.setLevel(level)

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return LoggerAdapter(logger)


class S3ClientFactory:
    """Factory for creating S3 client instances."""

    @staticmethod
    def create_s3_client(
        credentials: Optional[Credentials] = None,
        endpoint: Optional[str] = None,
        region_name: Optional[str] = None,
        **kwargs: Any,
    ) -> S3ClientProtocol:
        """Create S3 client; without explicit keys boto3's default chain is used."""
        if credentials is not None and credentials.is_explicit:
            session = boto3.Session(
                aws_access_key_id=credentials.access_key,
                aws_secret_access_key=credentials.secret_key.get_secret_value(),
            )
        else:
            session = boto3.Session()

        if endpoint is not None:
            kwargs["endpoint_url"] = endpoint_url(endpoint)
        if region_name is not None:
            kwargs["region_name"] = region_name
        return session.client("s3", **kwargs)  # type: ignore


class UploadPipelineFactory:
    """Factory for creating the complete upload pipeline."""

    @staticmethod
    def create_pipeline(
        job: Optional[UploadJob] = None,
        credentials: Optional[Credentials] = None,
        s3_client: Optional[S3ClientProtocol] = None,
        logger: Optional[LoggerProtocol] = None,
        engine: Optional[FileSelectionEngine] = None,
    ) -> UploadOrchestrator:
        """Create a fully configured upload pipeline.

        When no client is injected one is built for the job's region; an
        unknown region is used verbatim as the endpoint host.
        """
        if logger is None:
            logger = LoggerFactory.create_logger("s3_put")

        if s3_client is None:
            region = job.region if job is not None else None
            s3_client = S3ClientFactory.create_s3_client(
                credentials=credentials,
                endpoint=resolve_endpoint(region, logger),
                region_name=signing_region(region),
            )

        if engine is None:
            engine = DirectoryScanner(logger)

        uploader = S3ObjectUploader(s3_client, logger)
        return UploadOrchestrator(
            engine=engine,
            uploader=uploader,
            logger=logger,
            resolver=MetadataResolver(),
        )
