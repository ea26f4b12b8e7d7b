"""Custom exception hierarchy for git-shelf."""

from __future__ import annotations


class ShelfError(Exception):
    """Base error for all custom exceptions."""


class EnvironmentUnavailable(ShelfError):
    """Raised when git is missing or the cwd is not inside a work tree."""


class GitCommandError(ShelfError):
    """Raised when a git invocation fails."""

    def __init__(self, command: list[str], returncode: int, stderr: str | None = None):
        message = "Git command failed"
        if command:
            message = f"Git command failed: {' '.join(command)}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr or ""


class UsageError(ShelfError):
    """Raised once argument checking is done and at least one problem was found."""

    def __init__(self, problems: list[str]):
        super().__init__("; ".join(problems))
        self.problems = list(problems)


class IdentityError(ShelfError):
    """Raised when no user email is configured."""


class ShelfDesyncError(ShelfError):
    """Raised when the local marker and the remote shelf branch disagree."""
