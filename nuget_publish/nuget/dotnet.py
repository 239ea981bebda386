"""dotnet CLI steps: build, pack and push.

Commands run with inherited stdio so their output streams straight to
the CI log. The API key is passed to run() as a secret and never
appears in log lines or error messages.
"""

from dataclasses import dataclass
from pathlib import Path

from nuget_publish.exceptions import BuildError, PublishError
from nuget_publish.log import Log
from nuget_publish.utils.shell import ShellError, format_command, run

PACKAGE_SUFFIXES = (".nupkg", ".snupkg")


@dataclass(frozen=True)
class PackageArtifacts:
    """Files produced by dotnet pack.

    Attributes:
        package: The .nupkg file
        symbols: The .snupkg file, if one was produced
    """

    package: Path
    symbols: Path | None = None


def push_source_url(source: str) -> str:
    """Service index URL passed to dotnet nuget push."""
    return f"{source.rstrip('/')}/v3/index.json"


def build_command(project_file: Path) -> list[str]:
    return ["dotnet", "build", "-c", "Release", str(project_file)]


def pack_command(
    project_file: Path,
    output_dir: Path,
    include_symbols: bool,
) -> list[str]:
    cmd = ["dotnet", "pack", "-c", "Release"]
    if include_symbols:
        cmd.extend(["--include-symbols", "-p:SymbolPackageFormat=snupkg"])
    cmd.extend([str(project_file), "-o", str(output_dir)])
    return cmd


def push_command(
    package: Path,
    source: str,
    api_key: str,
    include_symbols: bool,
) -> list[str]:
    cmd = [
        "dotnet",
        "nuget",
        "push",
        str(package),
        "-s",
        push_source_url(source),
        "--skip-duplicate",
        "--force-english-output",
    ]
    if not include_symbols:
        cmd.append("--no-symbols")
    cmd.extend(["-k", api_key])
    return cmd


def rebuild_project(project_file: Path, log: Log, dry_run: bool = False) -> None:
    """Rebuild the project in Release configuration.

    Raises:
        BuildError: If dotnet build fails
    """
    log.info(f'Rebuilding project: "{project_file}"')
    cmd = build_command(project_file)
    if dry_run:
        log.info(f"Would run: {format_command(cmd)}")
        return
    try:
        run(cmd, capture=False, log=log)
    except ShellError as e:
        raise BuildError(
            f"Failed to build project {project_file}",
            details=str(e),
            fix_hint="Run 'dotnet build -c Release' locally to reproduce",
        ) from e


def remove_existing_packages(
    search_path: Path, log: Log, dry_run: bool = False
) -> list[Path]:
    """Delete *.nupkg and *.snupkg files left in search_path.

    Returns:
        The files that were (or, in dry run, would be) deleted
    """
    stale = sorted(
        p for p in search_path.iterdir() if p.is_file() and p.suffix in PACKAGE_SUFFIXES
    )
    for path in stale:
        if dry_run:
            log.info(f"Would remove existing package: {path}")
        else:
            log.debug(f"Removing existing package: {path}")
            path.unlink()
    return stale


def package_project(
    project_file: Path,
    search_path: Path,
    include_symbols: bool,
    log: Log,
    dry_run: bool = False,
) -> None:
    """Package the project into search_path with dotnet pack.

    Raises:
        BuildError: If dotnet pack fails
    """
    log.info(f'Packaging project: "{project_file}" to "{search_path}"')
    remove_existing_packages(search_path, log, dry_run=dry_run)

    cmd = pack_command(project_file, search_path, include_symbols)
    if dry_run:
        log.info(f"Would run: {format_command(cmd)}")
        return
    try:
        run(cmd, capture=False, log=log)
    except ShellError as e:
        raise BuildError(
            f"Failed to package project {project_file}",
            details=str(e),
            fix_hint="Run 'dotnet pack -c Release' locally to reproduce",
        ) from e


def find_packages(search_path: Path, include_symbols: bool, log: Log) -> PackageArtifacts:
    """Locate the package (and symbols package) produced by dotnet pack.

    Raises:
        PublishError: If no .nupkg file is in search_path
    """
    packages = sorted(search_path.glob("*.nupkg"))
    if not packages:
        raise PublishError(
            f'No .nupkg package found in "{search_path}"',
            fix_hint="Check that dotnet pack produced a package for this project",
        )
    if len(packages) > 1:
        log.warning(
            f"Found {len(packages)} packages in {search_path}, publishing {packages[0].name}"
        )

    symbols = None
    if include_symbols:
        symbol_packages = sorted(search_path.glob("*.snupkg"))
        if symbol_packages:
            symbols = symbol_packages[0]
        else:
            log.warning(f'No .snupkg symbols package found in "{search_path}"')

    return PackageArtifacts(package=packages[0], symbols=symbols)


def publish_package(
    package: Path,
    source: str,
    api_key: str,
    include_symbols: bool,
    log: Log,
    dry_run: bool = False,
) -> None:
    """Push a package with dotnet nuget push.

    Raises:
        PublishError: If the push fails
    """
    log.info(f'Publishing package "{package}"')
    cmd = push_command(package, source, api_key, include_symbols)
    if dry_run:
        log.info(f"Would run: {format_command(cmd, secrets=[api_key])}")
        return
    try:
        run(cmd, capture=False, secrets=[api_key], log=log)
    except ShellError as e:
        raise PublishError(
            f"Failed to publish package {package.name}",
            details=str(e),
            fix_hint="Check that NUGET_KEY is valid and allowed to push this package id",
        ) from e
