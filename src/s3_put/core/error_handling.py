# src/s3_put/core/error_handling.py

import functools
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import S3PutError, TransportError
from .protocols import LoggerProtocol

F = TypeVar("F", bound=Callable[..., Any])


def with_error_handling(func: F) -> F:
    """
    Translate failures of a single upload call into TransportError.

    The wrapped function must accept the destination key as ``key``.
    Errors from this package pass through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = logging.getLogger(func.__module__ + "." + func.__name__)
        key = kwargs.get("key", "")
        try:
            return func(*args, **kwargs)
        except S3PutError:
            raise
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.debug(f"S3 rejected upload of '{key}' ({code})", exc_info=True)
            raise TransportError(f"S3 rejected upload of '{key}': {e}", key=key) from e
        except BotoCoreError as e:
            logger.debug(f"S3 transport failure for '{key}'", exc_info=True)
            raise TransportError(f"Upload of '{key}' failed: {e}", key=key) from e
        except OSError as e:
            raise TransportError(f"Could not read local file for '{key}': {e}", key=key) from e
        except Exception as e:  # noqa: BLE001
            logger.error(f"Unexpected error in '{func.__name__}': {e}", exc_info=True)
            raise TransportError(f"Upload of '{key}' failed: {e}", key=key) from e

    return wrapper  # type: ignore[return-value]


class BatchOperationContextManager:
    """
    Context manager for upload runs to collect and summarize per-file errors.
    """

    def __init__(
        self,
        operation_name: str = "Batch Operation",
        logger: Optional[LoggerProtocol] = None,
    ):
        self.operation_name = operation_name
        self.errors: List[Dict[str, str]] = []
        self.logger = logger or logging.getLogger(
            self.__class__.__module__ + "." + self.__class__.__name__
        )

    def __enter__(self) -> "BatchOperationContextManager":
        self.logger.debug(f"Starting {self.operation_name}.")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if self.errors:
            self.logger.warning(
                f"{self.operation_name} completed with {len(self.errors)} error(s)."
            )
            for i, error_detail in enumerate(self.errors):
                self.logger.error(
                    f"  Error {i + 1}/{len(self.errors)} for item "
                    f"'{error_detail['item']}': {error_detail['error']}"
                )
        elif exc_type:
            self.logger.error(f"{self.operation_name} aborted: {exc_val}")
        else:
            self.logger.debug(f"{self.operation_name} completed successfully.")

        # Never suppress; errors that were not reported via add_error propagate.
        return False

    def add_error(self, error_message: Any, item_identifier: str = "Unknown item") -> None:
        """
        Report an error for a specific item inside the ``with`` block.

        Args:
            error_message: The error message or exception.
            item_identifier: Identifies the failed item (e.g. the S3 key).
        """
        self.errors.append({"item": item_identifier, "error": str(error_message)})
        self.logger.debug(
            f"Error added for item '{item_identifier}' in {self.operation_name}: {error_message}"
        )

    def error_map(self) -> Dict[str, str]:
        return {detail["item"]: detail["error"] for detail in self.errors}
