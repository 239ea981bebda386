"""Pydantic v2 models for the publish inputs.

PublishInputs reads the raw inputs from the environment. Every field is
accepted as INPUT_<NAME> (set by the CI runner from the action inputs)
or as plain <NAME>; the INPUT_ form wins. Empty values count as unset.

PublishConfig is the validated, completed and frozen configuration the
workflow runs from. It is produced by nuget_publish.config.resolve.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationInfo,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from nuget_publish.log import LogLevel

# Field name -> environment variable name (without the INPUT_ prefix)
ENV_NAMES: dict[str, str] = {
    "project_file_path": "PROJECT_FILE_PATH",
    "nuget_key": "NUGET_KEY",
    "nuget_source": "NUGET_SOURCE",
    "tag_format": "TAG_FORMAT",
    "package_name": "PACKAGE_NAME",
    "package_version": "VERSION_STATIC",
    "version_file_path": "VERSION_FILE_PATH",
    "version_regex": "VERSION_REGEX",
    "include_symbols": "INCLUDE_SYMBOLS",
    "tag_commit": "TAG_COMMIT",
    "rebuild_project": "REBUILD_PROJECT",
    "log_level": "LOG_LEVEL",
}


def _env(field_name: str) -> AliasChoices:
    name = ENV_NAMES[field_name]
    return AliasChoices(f"INPUT_{name}", name)


class PublishInputs(BaseSettings):
    """Raw publish inputs as read from the environment."""

    project_file_path: Path | None = Field(
        default=None,
        validation_alias=_env("project_file_path"),
        description="Path to the .csproj/.fsproj/.vbproj file",
    )
    nuget_key: SecretStr | None = Field(
        default=None,
        validation_alias=_env("nuget_key"),
        description="API key used to push to the registry",
    )
    nuget_source: str | None = Field(
        default=None,
        validation_alias=_env("nuget_source"),
        description="Registry base URL (e.g. https://api.nuget.org)",
    )
    tag_format: str | None = Field(
        default=None,
        validation_alias=_env("tag_format"),
        description="Tag name template, * is replaced by the version",
    )
    package_name: str | None = Field(
        default=None,
        validation_alias=_env("package_name"),
        description="Package id, derived from the project file name if unset",
    )
    package_version: str | None = Field(
        default=None,
        validation_alias=_env("package_version"),
        description="Static package version, read from a file if unset",
    )
    version_file_path: Path | None = Field(
        default=None,
        validation_alias=_env("version_file_path"),
        description="File holding the version when no static version is given",
    )
    version_regex: str | None = Field(
        default=None,
        validation_alias=_env("version_regex"),
        description="Regex whose first capture group is the version",
    )
    include_symbols: bool = Field(
        default=False,
        validation_alias=_env("include_symbols"),
        description="Also produce and push a .snupkg symbols package",
    )
    tag_commit: bool = Field(
        default=False,
        validation_alias=_env("tag_commit"),
        description="Tag and push the current commit after publishing",
    )
    rebuild_project: bool = Field(
        default=True,
        validation_alias=_env("rebuild_project"),
        description="Run dotnet build before packing",
    )
    log_level: LogLevel = Field(
        default=LogLevel.DEBUG,
        validation_alias=_env("log_level"),
        description="WARN, INFO or DEBUG",
    )

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        frozen=True,
        extra="ignore",
    )

    @field_validator("include_symbols", "tag_commit", "rebuild_project", mode="before")
    @classmethod
    def parse_json_bool(cls, v: Any, info: ValidationInfo) -> Any:
        """Booleans are JSON text: only true and false are accepted."""
        if not isinstance(v, str):
            return v
        name = ENV_NAMES[info.field_name or ""]
        try:
            parsed = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(f'Error parsing variable "{name}" value "{v}": {e}') from e
        if not isinstance(parsed, bool):
            raise ValueError(
                f'Error parsing variable "{name}" value "{v}": expected true or false'
            )
        return parsed

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return LogLevel.parse(v)
        return v


def format_tag(tag_format: str, version: str) -> str:
    """Replace the first * in tag_format with version."""
    return tag_format.replace("*", version, 1)


class PublishConfig(BaseModel):
    """Validated and completed publish configuration. Read-only."""

    model_config = ConfigDict(frozen=True)

    project_file_path: Path
    nuget_key: SecretStr
    nuget_source: str
    package_name: str
    package_version: str
    search_path: Path
    tag_format: str | None = None
    include_symbols: bool = False
    tag_commit: bool = False
    rebuild_project: bool = True
    log_level: LogLevel = LogLevel.DEBUG

    @property
    def tag_name(self) -> str | None:
        """Tag to create, or None when no tag format is configured."""
        if not self.tag_format:
            return None
        return format_tag(self.tag_format, self.package_version)
