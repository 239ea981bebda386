"""Publish NuGet packages from CI when the version is not on the registry yet."""

__version__ = "0.1.0"

from nuget_publish.exceptions import (  # noqa: E402
    BuildError,
    ConfigurationError,
    GitError,
    NetworkError,
    NuGetPublishError,
    PublishError,
)

__all__ = [
    "__version__",
    "NuGetPublishError",
    "ConfigurationError",
    "GitError",
    "PublishError",
    "NetworkError",
    "BuildError",
]
