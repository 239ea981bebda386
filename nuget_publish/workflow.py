"""Publish workflow orchestration.

Coordinates the publish process:
1. Check whether the version is already on the registry (stop if so)
2. Rebuild the project (optional)
3. Package the project
4. Push the package and set outputs
5. Tag the commit and push the tag (optional)

Any failure raises and aborts the run. Nothing is retried and completed
steps are not undone.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from nuget_publish.ci.outputs import OutputWriter
from nuget_publish.config.models import PublishConfig
from nuget_publish.exceptions import BuildError, ConfigurationError, PublishError
from nuget_publish.git import operations as git_ops
from nuget_publish.log import Log
from nuget_publish.nuget import dotnet
from nuget_publish.nuget.dotnet import PackageArtifacts
from nuget_publish.nuget.registry import package_version_exists
from nuget_publish.utils.shell import is_command_available


@dataclass
class StepResult:
    """Result of a workflow step."""

    message: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class PublishWorkflow:
    """Orchestrates checking, packaging, publishing and tagging."""

    config: PublishConfig
    log: Log
    outputs: OutputWriter
    dry_run: bool = False
    cwd: Path | None = None

    # State tracking
    artifacts: PackageArtifacts | None = None
    tag_name: str = ""

    def check_exists(self) -> bool:
        """Ask the registry whether this package version is published."""
        cfg = self.config
        exists = package_version_exists(
            cfg.nuget_source, cfg.package_name, cfg.package_version, self.log
        )
        self.log.info(
            f'NuGet package "{cfg.package_name}" version "{cfg.package_version}" '
            f'does{"" if exists else " not"} exist on NuGet server "{cfg.nuget_source}".'
        )
        return exists

    def run(self) -> bool:
        """Execute the publish workflow.

        Returns:
            True if a package was published (or would be, in dry run),
            False if the version already exists and nothing was done
        """
        if self.check_exists():
            self.log.info(
                "Will not publish NuGet package because this version already exists on NuGet server."
            )
            return False

        if not self.dry_run and not is_command_available("dotnet"):
            raise BuildError(
                "dotnet was not found on PATH",
                fix_hint="Install the .NET SDK in an earlier step (actions/setup-dotnet)",
            )

        steps = []
        if self.config.rebuild_project:
            steps.append(("Rebuilding project", self.rebuild))
        steps.extend([
            ("Packaging project", self.package),
            ("Publishing package", self.publish),
        ])
        if self.config.tag_commit:
            steps.append(("Tagging commit", self.tag_commit))

        for step_name, step_func in steps:
            self.log.info(f"> {step_name}...")
            result = step_func()
            self.log.info(result.message)

        return True

    def rebuild(self) -> StepResult:
        dotnet.rebuild_project(self.config.project_file_path, self.log, dry_run=self.dry_run)
        return StepResult(message=f"Built {self.config.project_file_path.name}")

    def package(self) -> StepResult:
        cfg = self.config
        dotnet.package_project(
            cfg.project_file_path,
            cfg.search_path,
            cfg.include_symbols,
            self.log,
            dry_run=self.dry_run,
        )
        if self.dry_run:
            return StepResult(message=f"Would package {cfg.package_name} {cfg.package_version}")

        self.artifacts = dotnet.find_packages(cfg.search_path, cfg.include_symbols, self.log)
        return StepResult(
            message=f"Packaged {self.artifacts.package.name}",
            data={"package": self.artifacts.package},
        )

    def publish(self) -> StepResult:
        cfg = self.config
        api_key = cfg.nuget_key.get_secret_value()

        if self.dry_run:
            package = cfg.search_path / f"{cfg.package_name}.{cfg.package_version}.nupkg"
            dotnet.publish_package(
                package, cfg.nuget_source, api_key, cfg.include_symbols, self.log, dry_run=True
            )
            return StepResult(message=f"Would publish {package.name} to {cfg.nuget_source}")

        if self.artifacts is None:
            raise PublishError(
                "Nothing to publish: the packaging step has not run",
                fix_hint="Run the package step before publish",
            )
        package = self.artifacts.package
        dotnet.publish_package(package, cfg.nuget_source, api_key, cfg.include_symbols, self.log)

        self.outputs.set("PACKAGE_NAME", package.name)
        self.outputs.set("PACKAGE_PATH", str(package.resolve()))
        if cfg.include_symbols and self.artifacts.symbols is not None:
            symbols = self.artifacts.symbols
            self.outputs.set("SYMBOLS_PACKAGE_NAME", symbols.name)
            self.outputs.set("SYMBOLS_PACKAGE_PATH", str(symbols.resolve()))

        return StepResult(
            message=f"Published {package.name} to {cfg.nuget_source}",
            data={"package": package},
        )

    def tag_commit(self) -> StepResult:
        tag_name = self.config.tag_name
        if tag_name is None:
            raise ConfigurationError(
                "Tag format must be specified.",
                fix_hint="Set the TAG_FORMAT input (e.g. v*) or disable TAG_COMMIT",
            )
        self.tag_name = tag_name

        if self.dry_run:
            return StepResult(message=f"Would create and push tag {tag_name}")

        git_ops.create_and_push_tag(tag_name, self.log, cwd=self.cwd)
        self.outputs.set("VERSION", tag_name)
        return StepResult(message=f"Pushed tag {tag_name}", data={"tag": tag_name})
