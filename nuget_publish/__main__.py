"""Allow running as python -m nuget_publish."""

from nuget_publish.cli import app

app(prog_name="nuget-publish")
