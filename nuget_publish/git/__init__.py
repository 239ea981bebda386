"""Git operations used after a successful publish.

All operations use nuget_publish.utils.shell.run() for safe command
execution and raise GitError on failures.
"""

from nuget_publish.git.operations import create_and_push_tag, push_tag, tag

__all__ = ["create_and_push_tag", "push_tag", "tag"]
