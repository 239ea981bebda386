"""Unit tests for nuget_publish.utils.shell.

Commands are run through the current Python interpreter so the tests do
not depend on any other tool being installed.
"""

import sys

import pytest

from nuget_publish.utils.shell import (
    ShellError,
    format_command,
    is_command_available,
    redact,
    run,
)


class TestRedact:
    """Tests for secret redaction."""

    def test_masks_exact_argument(self) -> None:
        assert redact(["push", "-k", "s3cret"], ["s3cret"]) == ["push", "-k", "***"]

    def test_masks_embedded_secret(self) -> None:
        assert redact(["--api-key=s3cret"], ["s3cret"]) == ["--api-key=***"]

    def test_empty_secret_is_ignored(self) -> None:
        assert redact(["a", "b"], [""]) == ["a", "b"]

    def test_format_command_quotes(self) -> None:
        assert format_command(["git", "tag", "v1.0.0"]) == "git tag v1.0.0"


class TestRun:
    """Tests for run()."""

    def test_success_returns_output(self) -> None:
        result = run([sys.executable, "-c", "print('hello')"])
        assert result.returncode == 0
        assert result.stdout.strip() == "hello"

    def test_failure_raises_shell_error(self) -> None:
        with pytest.raises(ShellError) as exc_info:
            run([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert exc_info.value.returncode == 3

    def test_failure_without_check(self) -> None:
        result = run([sys.executable, "-c", "import sys; sys.exit(3)"], check=False)
        assert result.returncode == 3

    def test_secret_is_redacted_from_error(self) -> None:
        script = "import sys; print(sys.argv[1], file=sys.stderr); sys.exit(1)"
        with pytest.raises(ShellError) as exc_info:
            run([sys.executable, "-c", script, "s3cret"], secrets=["s3cret"])
        message = str(exc_info.value)
        assert "s3cret" not in message
        assert "***" in message

    def test_secret_is_redacted_from_log(self, log, log_buffer) -> None:
        run([sys.executable, "-c", "pass", "s3cret"], secrets=["s3cret"], log=log)
        output = log_buffer.getvalue()
        assert "Executing command:" in output
        assert "Done executing command:" in output
        assert "s3cret" not in output

    def test_missing_program(self) -> None:
        with pytest.raises(ShellError) as exc_info:
            run(["definitely-not-a-real-program-xyz"])
        assert exc_info.value.returncode == 127


class TestHelpers:
    """Tests for small helpers."""

    def test_is_command_available(self) -> None:
        assert is_command_available(sys.executable)
        assert not is_command_available("definitely-not-a-real-program-xyz")
