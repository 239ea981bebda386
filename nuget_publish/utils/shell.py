"""Safe subprocess execution utilities.

Provides shell command execution with:
- Secret redaction in logged and reported command lines
- Uniform ShellError on non-zero exit
"""

import shlex
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nuget_publish.log import Log

REDACTED = "***"


class ShellError(Exception):
    """Exception raised when a shell command fails.

    Attributes:
        cmd: The command that failed, with secrets redacted
        returncode: Exit code of the failed command
        stdout: Standard output (empty when not captured)
        stderr: Standard error (empty when not captured)
    """

    def __init__(
        self,
        cmd: str,
        returncode: int,
        stdout: str,
        stderr: str,
    ) -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"Command failed with exit code {returncode}: {cmd}")

    def __str__(self) -> str:
        parts = [f"Command failed: {self.cmd}"]
        parts.append(f"Exit code: {self.returncode}")
        if self.stderr:
            parts.append(f"Stderr: {self.stderr}")
        if self.stdout:
            parts.append(f"Stdout: {self.stdout}")
        return "\n".join(parts)


def redact(args: Sequence[str], secrets: Sequence[str] = ()) -> list[str]:
    """Return a copy of args with every secret value masked.

    Args:
        args: Command and arguments
        secrets: Values that must never be displayed

    Returns:
        Arguments safe to log
    """
    safe = []
    for arg in args:
        for secret in secrets:
            if secret:
                arg = arg.replace(secret, REDACTED)
        safe.append(arg)
    return safe


def format_command(args: Sequence[str], secrets: Sequence[str] = ()) -> str:
    """Render a command line for display with secrets masked."""
    return shlex.join(redact(args, secrets))


def run(
    cmd: Sequence[str],
    cwd: Path | None = None,
    capture: bool = True,
    check: bool = True,
    secrets: Sequence[str] = (),
    log: "Log | None" = None,
) -> subprocess.CompletedProcess[str]:
    """Execute a command safely.

    Key security features:
    - Always uses shell=False to prevent shell injection
    - Secrets are masked in log lines and in ShellError
    - Raises ShellError with context on failure

    Args:
        cmd: Command and arguments
        cwd: Working directory for the command
        capture: Whether to capture stdout/stderr (False streams to the parent)
        check: Whether to raise ShellError on non-zero exit
        secrets: Argument values to redact from anything displayed
        log: Logger for the executing/done lines

    Returns:
        CompletedProcess with stdout/stderr when captured

    Raises:
        ShellError: If command fails and check=True
    """
    cmd_list = list(cmd)
    display = format_command(cmd_list, secrets)

    if log:
        log.info(f"Executing command: {display}")

    try:
        result = subprocess.run(
            cmd_list,
            cwd=cwd,
            capture_output=capture,
            text=True,
        )
    except FileNotFoundError:
        raise ShellError(
            cmd=display,
            returncode=127,
            stdout="",
            stderr=f"{cmd_list[0]}: command not found",
        ) from None

    if check and result.returncode != 0:
        raise ShellError(
            cmd=display,
            returncode=result.returncode,
            stdout=redact([result.stdout or ""], secrets)[0],
            stderr=redact([result.stderr or ""], secrets)[0],
        )

    if log:
        log.info(f"Done executing command: {display}")

    return result


def is_command_available(cmd: str) -> bool:
    """Check if a command is available in PATH."""
    return shutil.which(cmd) is not None
