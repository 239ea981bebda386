"""GitHub Actions step outputs.

Each output is written as a ::set-output workflow command on stdout and,
when the runner provides one, appended to the $GITHUB_OUTPUT file.
"""

import os
import sys
from pathlib import Path
from typing import TextIO

from nuget_publish.log import Log


class OutputWriter:
    """Writes named step outputs for the calling CI workflow."""

    def __init__(
        self,
        log: Log,
        stream: TextIO | None = None,
        output_file: Path | None = None,
    ) -> None:
        self.log = log
        self.stream = stream or sys.stdout
        if output_file is None and os.environ.get("GITHUB_OUTPUT"):
            output_file = Path(os.environ["GITHUB_OUTPUT"])
        self.output_file = output_file
        self.values: dict[str, str] = {}

    def set(self, name: str, value: str) -> None:
        """Set output name to value."""
        self.log.debug(f'Setting output "{name}" to "{value}".')
        self.values[name] = value
        self.stream.write(f"::set-output name={name}::{value}{os.linesep}")
        self.stream.flush()
        if self.output_file is not None:
            with open(self.output_file, "a", encoding="utf-8") as f:
                f.write(f"{name}={value}\n")
