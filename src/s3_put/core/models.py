"""Shared data models for s3-put."""

import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, SecretStr, field_validator

from .exceptions import ConfigurationError

_DIGITS = re.compile(r"[0-9]+")
_PATTERN_SEPARATORS = re.compile(r"[,\s]+")


def parse_max_age(value: Any, field_name: str = "cache_control") -> Optional[int]:
    """Parse a max-age value given as an int or a decimal string.

    Raises ConfigurationError right away instead of deferring to upload time.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer, got {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ConfigurationError(f"{field_name} must be non-negative, got {value}")
        return value
    if isinstance(value, str):
        text = value.strip()
        if not _DIGITS.fullmatch(text):
            raise ConfigurationError(
                f"{field_name} must be a non-negative integer, got {value!r}"
            )
        return int(text)
    raise ConfigurationError(f"{field_name} must be an integer, got {value!r}")


def _split_patterns(value: Any) -> Any:
    if isinstance(value, str):
        return [part for part in _PATTERN_SEPARATORS.split(value) if part]
    return value


class AccessControl(str, Enum):
    """Canned ACLs the task can apply."""

    PRIVATE = "private"
    PUBLIC_READ = "public-read"


class StorageClass(str, Enum):
    """Storage tiers the task can select."""

    STANDARD = "STANDARD"
    REDUCED_REDUNDANCY = "REDUCED_REDUNDANCY"


class FileSelection(BaseModel):
    """A base directory plus include/exclude patterns."""

    model_config = ConfigDict(extra="forbid")

    base_dir: Path = Field(validation_alias=AliasChoices("base_dir", "dir"))
    includes: List[str] = Field(default_factory=list)
    excludes: List[str] = Field(default_factory=list)
    default_excludes: bool = Field(
        default=True, validation_alias=AliasChoices("default_excludes", "defaultExcludes")
    )

    @field_validator("includes", "excludes", mode="before")
    @classmethod
    def _split(cls, value: Any) -> Any:
        return _split_patterns(value)


class ExtensionRule(BaseModel):
    """Filename suffix that triggers a metadata override."""

    model_config = ConfigDict(extra="forbid")

    extension: str

    def matches(self, filename: str) -> bool:
        return filename.endswith(self.extension)


class ContentTypeRule(ExtensionRule):
    content_type: str = Field(validation_alias=AliasChoices("content_type", "contentType"))


class CacheControlRule(ExtensionRule):
    max_age: int = Field(validation_alias=AliasChoices("max_age", "maxAge"))

    @field_validator("max_age", mode="before")
    @classmethod
    def _parse_max_age(cls, value: Any) -> Any:
        return parse_max_age(value, "max_age")

    @property
    def header_value(self) -> str:
        return f"max-age={self.max_age}"


class UploadJob(BaseModel):
    """Configuration for a single upload invocation.

    Every assignment is validated, so setting ``cache_control`` to a value
    that is not a non-negative integer fails immediately with
    ConfigurationError.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    bucket: Optional[str] = None
    dest: Optional[str] = None
    content_type: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("content_type", "contentType")
    )
    cache_control: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("cache_control", "cacheControl")
    )
    public_read: bool = Field(
        default=False, validation_alias=AliasChoices("public_read", "publicRead")
    )
    reduced_redundancy: bool = Field(
        default=False,
        validation_alias=AliasChoices("reduced_redundancy", "reducedRedundancy"),
    )
    region: Optional[str] = None
    filesets: List[FileSelection] = Field(default_factory=list)
    content_type_mappings: List[ContentTypeRule] = Field(
        default_factory=list,
        validation_alias=AliasChoices("content_type_mappings", "contentTypeMappings"),
    )
    cache_control_mappings: List[CacheControlRule] = Field(
        default_factory=list,
        validation_alias=AliasChoices("cache_control_mappings", "cacheControlMappings"),
    )
    continue_on_error: bool = Field(
        default=False,
        validation_alias=AliasChoices("continue_on_error", "continueOnError"),
    )

    @field_validator("cache_control", mode="before")
    @classmethod
    def _parse_cache_control(cls, value: Any) -> Any:
        return parse_max_age(value, "cache_control")

    def add_fileset(self, selection: FileSelection) -> None:
        self.filesets.append(selection)

    def add_content_type_mapping(self, rule: ContentTypeRule) -> None:
        self.content_type_mappings.append(rule)

    def add_cache_control_mapping(self, rule: CacheControlRule) -> None:
        self.cache_control_mappings.append(rule)


class ResolvedUpload(BaseModel):
    """Destination and metadata computed for one local file."""

    key: str
    local_path: Path
    content_type: Optional[str] = None
    cache_control: Optional[str] = None
    access_control: AccessControl = AccessControl.PRIVATE
    storage_class: StorageClass = StorageClass.STANDARD

    def put_object_args(self) -> Dict[str, str]:
        """Extra ``put_object`` arguments; defaults are left to the service."""
        args: Dict[str, str] = {}
        if self.access_control != AccessControl.PRIVATE:
            args["ACL"] = self.access_control.value
        if self.storage_class != StorageClass.STANDARD:
            args["StorageClass"] = self.storage_class.value
        if self.content_type is not None:
            args["ContentType"] = self.content_type
        if self.cache_control is not None:
            args["CacheControl"] = self.cache_control
        return args


class Credentials(BaseModel):
    """Explicit access keys; boto3's default chain applies when both are unset."""

    access_key: Optional[str] = None
    secret_key: Optional[SecretStr] = None

    @property
    def is_explicit(self) -> bool:
        return bool(self.access_key and self.secret_key)


class UploadSummary(BaseModel):
    """Outcome of one execute() call."""

    bucket: str
    uploaded: List[str] = Field(default_factory=list)
    failed: Dict[str, str] = Field(default_factory=dict)
    skipped_selections: List[str] = Field(default_factory=list)
    processing_time: float = 0.0

    @property
    def success(self) -> bool:
        return not self.failed
