"""Logger setup shared by the s3-put CLI and its services."""

import os
import sys
import logging
from typing import Optional

_FORMATS = {
    "structured": (
        "%(asctime)s | %(name)s | %(levelname)-8s | "
        "%(filename)s:%(lineno)d | %(funcName)s() | %(message)s"
    ),
    "simple": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def setup_logger(
    name: str = "s3-put",
    level: Optional[str] = None,
    format_type: str = "simple",
) -> logging.Logger:
    """
    Configure the named logger that upload progress is reported on.

    Upload lines ("File: ... copied to bucket: ...") go to stdout so they
    can be piped alongside the CLI's own output. Calling this again for the
    same name only adjusts the level.

    Args:
        name: Logger name
        level: Explicit level name; LOG_LEVEL is used when omitted
        format_type: "simple" or "structured"; LOG_FORMAT takes precedence

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))

    if not logger.handlers:
        format_name = os.getenv("LOG_FORMAT", format_type).lower()
        handler = logging.StreamHandler(sys.stdout)
        if format_name == "structured":
            handler.setFormatter(
                logging.Formatter(_FORMATS["structured"], datefmt="%Y-%m-%d %H:%M:%S")
            )
        else:
            handler.setFormatter(logging.Formatter(_FORMATS["simple"]))
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str = "s3-put") -> logging.Logger:
    """Return the s3-put logger configured from the environment."""
    return setup_logger(name)
