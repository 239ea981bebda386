"""Tests for nuget_publish.git.operations.

Tag creation runs against a real temporary repository; pushing is
mocked since there is no remote.
"""

import subprocess
from pathlib import Path
from unittest.mock import call, patch

import pytest

from nuget_publish.exceptions import GitError
from nuget_publish.git.operations import create_and_push_tag, push_tag, tag
from nuget_publish.utils.shell import ShellError

RUN = "nuget_publish.git.operations.run"


class TestTag:
    """Tests for tag()."""

    def test_creates_tag(self, git_repo: Path, log) -> None:
        tag("v1.2.3", log, cwd=git_repo)
        result = subprocess.run(
            ["git", "tag", "-l", "v1.2.3"],
            cwd=git_repo,
            capture_output=True,
            text=True,
            check=True,
        )
        assert result.stdout.strip() == "v1.2.3"

    def test_existing_tag_raises(self, git_repo: Path, log) -> None:
        tag("v1.2.3", log, cwd=git_repo)
        with pytest.raises(GitError) as exc_info:
            tag("v1.2.3", log, cwd=git_repo)
        assert "v1.2.3" in exc_info.value.message
        assert exc_info.value.exit_code == 4


class TestPushTag:
    """Tests for push_tag()."""

    def test_pushes_to_origin(self, log) -> None:
        with patch(RUN) as run:
            push_tag("v1.2.3", log)
        assert run.call_args.args[0] == ["git", "push", "origin", "refs/tags/v1.2.3"]

    def test_failure_raises_git_error(self, log) -> None:
        with patch(RUN, side_effect=ShellError("git push", 128, "", "")):
            with pytest.raises(GitError):
                push_tag("v1.2.3", log)


class TestCreateAndPushTag:
    """Tests for create_and_push_tag()."""

    def test_tags_then_pushes(self, log) -> None:
        with patch(RUN) as run:
            create_and_push_tag("v1.2.3", log)
        commands = [c.args[0] for c in run.call_args_list]
        assert commands == [
            ["git", "tag", "v1.2.3"],
            ["git", "push", "origin", "refs/tags/v1.2.3"],
        ]

    def test_push_skipped_when_tag_fails(self, log) -> None:
        with patch(RUN, side_effect=ShellError("git tag", 128, "", "")) as run:
            with pytest.raises(GitError):
                create_and_push_tag("v1.2.3", log)
        assert run.call_count == 1
        assert run.call_args_list[0] == call(
            ["git", "tag", "v1.2.3"], cwd=None, capture=False, log=log
        )
