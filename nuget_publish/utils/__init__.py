"""Utility modules for the publish tool."""

from nuget_publish.utils.shell import (
    ShellError,
    format_command,
    is_command_available,
    redact,
    run,
)

__all__ = [
    "run",
    "redact",
    "format_command",
    "is_command_available",
    "ShellError",
]
