"""Custom exception hierarchy for the publish tool.

Exit codes follow Unix conventions:
- 1: General error
- 2: Configuration error
- 4: Git error
- 5: Publish error
- 7: Network error
- 9: Build error
"""


class NuGetPublishError(Exception):
    """Base exception for all publish errors.

    All publish-related exceptions inherit from this class.
    Each subclass defines an exit_code for CLI error reporting.
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        details: str | None = None,
        fix_hint: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Brief error message
            details: Detailed explanation of what went wrong
            fix_hint: Suggested command or action to fix the issue
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.fix_hint = fix_hint

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"\nDetails: {self.details}")
        if self.fix_hint:
            parts.append(f"\nFix: {self.fix_hint}")
        return "".join(parts)


class ConfigurationError(NuGetPublishError):
    """Input configuration errors.

    Raised when:
    - A required input is missing
    - A boolean input is not valid JSON
    - Project or version file does not exist or is not a file
    - NuGet source is not a valid URI
    - Version regex does not compile or does not match
    - Tag format has no * placeholder
    """

    exit_code = 2


class GitError(NuGetPublishError):
    """Git operation failures.

    Raised when:
    - Tag creation fails
    - Tag push fails
    """

    exit_code = 4


class PublishError(NuGetPublishError):
    """Publishing failures.

    Raised when:
    - dotnet nuget push fails
    - No package artifact was produced
    """

    exit_code = 5


class NetworkError(NuGetPublishError):
    """Registry query failures.

    Raised when:
    - The registry answers with a status other than 200 or 404
    - The request fails (DNS, connection refused, TLS)
    - The version index is not the expected JSON document
    """

    exit_code = 7


class BuildError(NuGetPublishError):
    """dotnet build or pack failures.

    Raised when:
    - dotnet is not installed
    - dotnet build exits non-zero
    - dotnet pack exits non-zero
    """

    exit_code = 9
