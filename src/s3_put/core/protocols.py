"""Protocol definitions for dependency injection and testability."""

from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Protocol, Sequence


class S3ClientProtocol(Protocol):
    """Protocol for the S3 client operations the task needs."""

    def put_object(self, Bucket: str, Key: str, Body: BinaryIO, **kwargs: Any) -> Dict[str, Any]:
        """Put object to S3."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        ...


class FileSelectionEngine(Protocol):
    """Expands include/exclude patterns against a base directory."""

    def expand(
        self,
        base_dir: Path,
        includes: Sequence[str],
        excludes: Sequence[str],
        default_excludes: bool = True,
    ) -> List[str]:
        """Return matching file paths relative to base_dir, or raise ScanError."""
        ...
