"""NuGet registry and dotnet CLI operations."""

from nuget_publish.nuget.dotnet import (
    PackageArtifacts,
    find_packages,
    package_project,
    publish_package,
    rebuild_project,
)
from nuget_publish.nuget.registry import index_url, package_version_exists

__all__ = [
    "PackageArtifacts",
    "find_packages",
    "index_url",
    "package_project",
    "package_version_exists",
    "publish_package",
    "rebuild_project",
]
