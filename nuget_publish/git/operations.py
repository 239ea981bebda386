"""Git operations that modify repository state.

All functions use nuget_publish.utils.shell.run() for command execution
and raise GitError on failures.
"""

from pathlib import Path

from nuget_publish.exceptions import GitError
from nuget_publish.log import Log
from nuget_publish.utils.shell import ShellError, run


def tag(name: str, log: Log, cwd: Path | None = None) -> None:
    """Create a lightweight tag on the current commit.

    Args:
        name: Tag name (e.g., "v1.0.12")
        log: Logger
        cwd: Working directory (defaults to current directory)

    Raises:
        GitError: If tag creation fails or tag already exists
    """
    try:
        run(["git", "tag", name], cwd=cwd, capture=False, log=log)
    except ShellError as e:
        raise GitError(
            f"Failed to create git tag '{name}'",
            details=str(e),
            fix_hint=f"Ensure tag '{name}' doesn't already exist. Run 'git tag -d {name}' to delete it first.",
        ) from e


def push_tag(
    name: str,
    log: Log,
    remote: str = "origin",
    cwd: Path | None = None,
) -> None:
    """Push a specific tag to a remote.

    Args:
        name: Tag name to push (e.g., "v1.0.12")
        log: Logger
        remote: Remote name (default: "origin")
        cwd: Working directory (defaults to current directory)

    Raises:
        GitError: If push fails or tag doesn't exist
    """
    try:
        run(
            ["git", "push", remote, f"refs/tags/{name}"],
            cwd=cwd,
            capture=False,
            log=log,
        )
    except ShellError as e:
        raise GitError(
            f"Failed to push tag '{name}' to remote '{remote}'",
            details=str(e),
            fix_hint="Ensure the workflow token has contents: write permission.",
        ) from e


def create_and_push_tag(
    name: str,
    log: Log,
    remote: str = "origin",
    cwd: Path | None = None,
) -> None:
    """Tag the current commit and push the tag."""
    log.info(f"Creating tag: {name}")
    tag(name, log, cwd=cwd)
    push_tag(name, log, remote=remote, cwd=cwd)
