"""Destination key helpers."""

from typing import Optional


def normalize_destination_prefix(raw: Optional[str]) -> str:
    """
    Normalize the destination prefix configured on a job.

    Args:
        raw: Prefix as configured, possibly None

    Returns:
        "" for a missing or blank prefix, otherwise the trimmed prefix
        without leading slashes and ending in exactly one slash.
    """
    if raw is None:
        return ""

    path = raw.strip()
    while path.startswith("/"):
        path = path[1:].lstrip()

    path = path.rstrip("/")
    return path + "/" if path else ""


def build_destination_key(prefix: str, relative_path: str) -> str:
    """
    Calculate the destination S3 key for a file inside a selection.

    Args:
        prefix: Already normalized destination prefix
        relative_path: File path relative to the selection's base directory

    Returns:
        Destination S3 key using forward slashes
    """
    clean_path = relative_path.replace("\\", "/").lstrip("/")
    return f"{prefix}{clean_path}"
