"""Loading upload jobs and credentials from files and the environment."""

import os
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from .core.exceptions import ConfigurationError
from .core.models import Credentials, UploadJob


def load_job(path: Union[str, Path]) -> UploadJob:
    """
    Load an UploadJob from a JSON file.

    Relative fileset directories are resolved against the file's directory.

    Args:
        path: Path to the JSON job description

    Returns:
        The parsed job (not yet validated for a bucket)

    Raises:
        ConfigurationError: When the file is unreadable or malformed
    """
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read job file {config_path}: {e}") from e

    try:
        job = UploadJob.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid job file {config_path}: {e}") from e

    for selection in job.filesets:
        if not selection.base_dir.is_absolute():
            selection.base_dir = config_path.parent / selection.base_dir
    return job


def load_credentials(
    access_key: Optional[str] = None, secret_key: Optional[str] = None
) -> Credentials:
    """
    Build credentials from explicit values, falling back to the environment.

    Environment Variables:
        AWS_ACCESS_KEY_ID: Access key used when none is given
        AWS_SECRET_ACCESS_KEY: Secret key used when none is given
    """
    access_key = access_key or os.getenv("AWS_ACCESS_KEY_ID")
    secret_key = secret_key or os.getenv("AWS_SECRET_ACCESS_KEY")

    if bool(access_key) != bool(secret_key):
        raise ConfigurationError("Both access key and secret key must be given")

    return Credentials(access_key=access_key, secret_key=secret_key)
