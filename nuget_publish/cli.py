"""Command-line interface for the publish tool.

Provides:
- nuget-publish: Publish the package unless this version already exists
- nuget-publish check: Only report whether the version is published

All inputs come from environment variables (INPUT_<NAME> or <NAME>),
as set by a CI runner.
"""

import typer

from nuget_publish import __version__
from nuget_publish.ci.outputs import OutputWriter
from nuget_publish.config.loader import load_inputs
from nuget_publish.config.models import PublishConfig
from nuget_publish.config.resolve import resolve_config
from nuget_publish.exceptions import NuGetPublishError
from nuget_publish.log import Log
from nuget_publish.workflow import PublishWorkflow

app = typer.Typer(
    name="nuget-publish",
    help="Publish a NuGet package from CI when its version is not on the registry yet",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"nuget-publish version {__version__}")
        raise typer.Exit()


def load_config(log: Log) -> PublishConfig:
    """Read, validate and complete the inputs, then apply the log level."""
    inputs = load_inputs()
    log.level = inputs.log_level
    return resolve_config(inputs, log)


def _fail(log: Log, error: NuGetPublishError) -> typer.Exit:
    log.fatal(str(error))
    return typer.Exit(code=error.exit_code)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    dry_run: bool = typer.Option(  # noqa: B008
        False,
        "--dry-run",
        "-n",
        help="Validate and check the registry, but only log the commands",
    ),
    version: bool = typer.Option(  # noqa: B008
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Publish a NuGet package.

    Checks the registry for the configured version. If it is missing,
    rebuilds (optional), packs and pushes the project, then tags the
    commit (optional).
    """
    if ctx.invoked_subcommand is not None:
        return

    log = Log()
    try:
        config = load_config(log)
        workflow = PublishWorkflow(
            config=config,
            log=log,
            outputs=OutputWriter(log),
            dry_run=dry_run,
        )
        workflow.run()
    except NuGetPublishError as e:
        raise _fail(log, e) from None


@app.command()
def check() -> None:
    """Report whether the configured package version is already published."""
    log = Log()
    try:
        config = load_config(log)
        workflow = PublishWorkflow(config=config, log=log, outputs=OutputWriter(log))
        exists = workflow.check_exists()
    except NuGetPublishError as e:
        raise _fail(log, e) from None

    state = "published" if exists else "not published"
    typer.echo(f"{config.package_name} {config.package_version}: {state}")


if __name__ == "__main__":
    app()
