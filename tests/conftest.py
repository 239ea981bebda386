"""Pytest fixtures for publish tool tests.

Provides common fixtures for:
- Isolated input environment
- Temporary .NET project directories
- Git repository setup
- Captured logging
"""

import io
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from nuget_publish.config.models import ENV_NAMES, PublishConfig
from nuget_publish.log import Log, LogLevel


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every publish input (both forms) and GITHUB_OUTPUT from the environment."""
    for name in ENV_NAMES.values():
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(f"INPUT_{name}", raising=False)
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)


@pytest.fixture
def set_inputs(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Return a helper that sets inputs as environment variables.

    Usage:
        set_inputs(PROJECT_FILE_PATH="x.csproj", INPUT_NUGET_KEY="k")
    """

    def _set(**values: str) -> None:
        for key, value in values.items():
            monkeypatch.setenv(key, value)

    return _set


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a temporary project directory.

    Returns:
        Path to project directory
    """
    project = tmp_path / "src" / "MyLib"
    project.mkdir(parents=True)
    return project


@pytest.fixture
def csproj(project_dir: Path) -> Path:
    """Create a minimal SDK-style project file with a <Version> element.

    Returns:
        Path to MyLib.csproj
    """
    path = project_dir / "MyLib.csproj"
    path.write_text(
        '<Project Sdk="Microsoft.NET.Sdk">\n'
        "  <PropertyGroup>\n"
        "    <TargetFramework>net8.0</TargetFramework>\n"
        "    <Version>1.2.3</Version>\n"
        "  </PropertyGroup>\n"
        "</Project>\n"
    )
    return path


@pytest.fixture
def git_repo(project_dir: Path) -> Path:
    """Create a git repository with one commit in the project directory.

    Returns:
        Path to git repository
    """
    for cmd in (
        ["git", "init"],
        ["git", "config", "user.email", "test@test.com"],
        ["git", "config", "user.name", "Test User"],
    ):
        subprocess.run(cmd, cwd=project_dir, capture_output=True, check=True)
    (project_dir / "README.md").write_text("# MyLib\n")
    subprocess.run(["git", "add", "."], cwd=project_dir, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "Initial commit"],
        cwd=project_dir,
        capture_output=True,
        check=True,
    )
    return project_dir


@pytest.fixture
def log_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def log(log_buffer: io.StringIO) -> Log:
    """DEBUG logger writing plain text into log_buffer."""
    console = Console(file=log_buffer, force_terminal=False, color_system=None, width=200)
    return Log(LogLevel.DEBUG, console=console)


@pytest.fixture
def make_config(csproj: Path) -> Callable[..., PublishConfig]:
    """Return a factory for resolved configs pointing at csproj."""

    def _make(**overrides: object) -> PublishConfig:
        values: dict[str, object] = {
            "project_file_path": csproj,
            "nuget_key": "oy2-secret-key",
            "nuget_source": "https://api.nuget.org",
            "package_name": "MyLib",
            "package_version": "1.2.3",
            "search_path": csproj.parent,
        }
        values.update(overrides)
        return PublishConfig(**values)

    return _make
