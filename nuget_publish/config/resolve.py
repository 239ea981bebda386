"""Input validation and completion.

Checks the raw inputs in a fixed order and fills in what was left out:
the package version (read from a file with a regex) and the package
name (taken from the project file name). The first failed check raises
ConfigurationError naming the offending input.
"""

import re
from pathlib import Path

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from nuget_publish.config.models import PublishConfig, PublishInputs
from nuget_publish.exceptions import ConfigurationError
from nuget_publish.log import Log

PACKAGE_NAME_PATTERN = re.compile(r"(?P<name>[^/]+)\.[a-z]+$", re.IGNORECASE)

# JavaScript named group syntax; lookbehinds (?<= and (?<! are left alone
JS_NAMED_GROUP = re.compile(r"\(\?<(?![=!])")

_URI = TypeAdapter(AnyUrl)


def require_file(path: Path | None, env_name: str, label: str) -> Path:
    """Check that path is set, exists and is a regular file.

    Args:
        path: Path from the inputs
        env_name: Input name for error messages
        label: Human-readable name of the file

    Returns:
        The path

    Raises:
        ConfigurationError: If the path is unset, missing or not a file
    """
    if path is None:
        raise ConfigurationError(
            f"{label} must be specified.",
            fix_hint=f"Set the {env_name} input",
        )
    if not path.exists():
        raise ConfigurationError(
            f'{label} "{path}" does not exist.',
            fix_hint=f"Check the {env_name} input",
        )
    if not path.is_file():
        raise ConfigurationError(
            f'{label} "{path}" must be a file.',
            fix_hint=f"Point {env_name} at a file, not a directory",
        )
    return path


def validate_source(source: str | None) -> str:
    """Check that the NuGet source is a valid URI.

    Returns:
        The source without trailing slashes
    """
    if not source:
        raise ConfigurationError(
            "NuGet source must be specified.",
            fix_hint="Set the NUGET_SOURCE input (e.g. https://api.nuget.org)",
        )
    try:
        _URI.validate_python(source)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f'NuGet source "{source}" is not a valid URL.',
            details=e.errors()[0]["msg"],
            fix_hint="Check the NUGET_SOURCE input",
        ) from e
    if any(c.isspace() for c in source):
        raise ConfigurationError(
            f'NuGet source "{source}" is not a valid URL.',
            details="URLs cannot contain whitespace",
            fix_hint="Percent-encode spaces (%20) in the NUGET_SOURCE input",
        )
    return source.rstrip("/")


def compile_version_regex(pattern: str | None) -> re.Pattern[str]:
    """Compile the version regex in multiline mode.

    JavaScript-style named groups (?<name>...) are rewritten to
    Python's (?P<name>...).
    """
    if not pattern:
        raise ConfigurationError(
            "Version regex must be specified when no static version is given.",
            fix_hint="Set the VERSION_REGEX input or VERSION_STATIC",
        )
    try:
        return re.compile(JS_NAMED_GROUP.sub("(?P<", pattern), re.MULTILINE)
    except re.error as e:
        raise ConfigurationError(
            f'Version regex "{pattern}" is not a valid regular expression: {e}',
            fix_hint="Check the VERSION_REGEX input",
        ) from e


def extract_version(version_file: Path, pattern: str | None) -> str:
    """Read the version from a file.

    The regex is applied to the whole file; its first capture group is
    the version.

    Args:
        version_file: File holding the version
        pattern: Version regex

    Returns:
        The extracted version

    Raises:
        ConfigurationError: If the regex is invalid or finds nothing
    """
    regex = compile_version_regex(pattern)
    if regex.groups < 1:
        raise ConfigurationError(
            f'Version regex "{pattern}" has no capture group.',
            fix_hint="Wrap the version part in parentheses, e.g. <Version>(.*)</Version>",
        )
    try:
        content = version_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f'Unable to read version file "{version_file}".',
            details=str(e),
        ) from e

    match = regex.search(content)
    if not match or not match.group(1):
        raise ConfigurationError(
            f'Unable to find version using regex "{pattern}" in file "{version_file}".',
            fix_hint="Check the VERSION_REGEX and VERSION_FILE_PATH inputs",
        )
    return match.group(1)


def validate_tag_format(tag_format: str | None) -> str:
    """Check that the tag format is set and has a * placeholder."""
    if not tag_format:
        raise ConfigurationError(
            "Tag format must be specified.",
            fix_hint="Set the TAG_FORMAT input (e.g. v*) or disable TAG_COMMIT",
        )
    if "*" not in tag_format:
        raise ConfigurationError(
            f'Tag format "{tag_format}" does not contain *.',
            fix_hint="Add a * where the version goes, e.g. v*",
        )
    return tag_format


def derive_package_name(project_file_path: Path) -> str:
    """Take the package name from the project file name.

    /a/b/MyLib.csproj -> MyLib
    """
    match = PACKAGE_NAME_PATTERN.search(project_file_path.as_posix())
    if not match:
        raise ConfigurationError(
            "Package name must be specified.",
            details=f'Could not derive it from "{project_file_path}"',
            fix_hint="Set the PACKAGE_NAME input",
        )
    return match.group("name")


def resolve_config(inputs: PublishInputs, log: Log) -> PublishConfig:
    """Validate the inputs and complete them into a PublishConfig.

    Args:
        inputs: Raw inputs
        log: Logger

    Returns:
        Read-only PublishConfig

    Raises:
        ConfigurationError: On the first invalid or missing input
    """
    project_file_path = require_file(
        inputs.project_file_path, "PROJECT_FILE_PATH", "Project path"
    )
    log.debug(f"Project path exists: {project_file_path}")

    if inputs.nuget_key is None or not inputs.nuget_key.get_secret_value():
        raise ConfigurationError(
            "NuGet key must be specified.",
            fix_hint="Set the NUGET_KEY input from a CI secret",
        )

    nuget_source = validate_source(inputs.nuget_source)

    package_version = inputs.package_version
    if not package_version:
        version_file = require_file(
            inputs.version_file_path, "VERSION_FILE_PATH", "Version file path"
        )
        log.debug(f'Version file path exists: "{version_file}"')
        package_version = extract_version(version_file, inputs.version_regex)
        log.debug(f'Version read from "{version_file}": {package_version}')

    tag_format = inputs.tag_format
    if inputs.tag_commit:
        tag_format = validate_tag_format(tag_format)
        log.debug(f"Valid tag format: {tag_format}")

    package_name = inputs.package_name
    if not package_name:
        package_name = derive_package_name(project_file_path)
        log.debug(
            f'Package name not specified, extracted from PROJECT_FILE_PATH: "{package_name}"'
        )

    return PublishConfig(
        project_file_path=project_file_path,
        nuget_key=inputs.nuget_key,
        nuget_source=nuget_source,
        package_name=package_name,
        package_version=package_version,
        search_path=project_file_path.parent,
        tag_format=tag_format,
        include_symbols=inputs.include_symbols,
        tag_commit=inputs.tag_commit,
        rebuild_project=inputs.rebuild_project,
        log_level=inputs.log_level,
    )
