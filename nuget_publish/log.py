"""Level-filtered logger.

A Log is built once from the LOG_LEVEL input and handed to every
operation that reports progress. Messages go to a rich Console on
stderr so stdout only carries CI output commands.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape


class LogLevel(IntEnum):
    """Verbosity levels. A message prints when its level <= the configured one."""

    WARN = 1
    INFO = 2
    DEBUG = 3

    @classmethod
    def parse(cls, value: str | None) -> "LogLevel":
        """Parse a level name, falling back to DEBUG for unknown names."""
        if not value:
            return cls.DEBUG
        return cls.__members__.get(value.strip().upper(), cls.DEBUG)


class Log:
    """Logger bound to a level and a console."""

    def __init__(
        self,
        level: LogLevel = LogLevel.DEBUG,
        console: Console | None = None,
    ) -> None:
        self.level = level
        self.console = console or Console(stderr=True, highlight=False)

    def _emit(self, prefix: str, message: str) -> None:
        self.console.print(f"{prefix}{escape(message)}", soft_wrap=True)

    def warning(self, message: str) -> None:
        if self.level >= LogLevel.WARN:
            self._emit("[yellow]warning:[/yellow] ", message)

    def info(self, message: str) -> None:
        if self.level >= LogLevel.INFO:
            self._emit("", message)

    def debug(self, message: str) -> None:
        if self.level >= LogLevel.DEBUG:
            self._emit("[dim]debug:[/dim] ", message)

    def fatal(self, message: str) -> None:
        """Report an error that aborts the run. Always printed."""
        self._emit("[red bold]FATAL ERROR:[/red bold] ", message)
