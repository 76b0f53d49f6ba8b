"""Deployment error types.

Every failure that should stop a deployment is raised as a DeploymentError
subclass. The CLI error handler turns these into an exit status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..shell_commands import CommandResult


class DeploymentError(Exception):
    """Raised when a deployment operation fails."""

    def __init__(self, message: str, details: str | None = None, exit_code: int = 1):
        self.message = message
        self.details = details
        self.exit_code = exit_code
        super().__init__(message)


class PrerequisiteError(DeploymentError):
    """A required tool or the secrets file is missing."""


class CommandFailedError(DeploymentError):
    """An external command exited with a non-zero status.

    The exit code mirrors the failing command's so the CLI can propagate it.
    """

    def __init__(self, message: str, result: CommandResult, details: str | None = None):
        self.result = result
        super().__init__(
            message,
            details=details or (result.stderr.strip() or None),
            exit_code=result.returncode or 1,
        )


class RolloutTimeoutError(DeploymentError):
    """A readiness wait ran past its configured timeout."""


def ensure_success(result: CommandResult, message: str) -> CommandResult:
    """Raise CommandFailedError unless the command succeeded.

    Args:
        result: Result of the executed command
        message: Context describing what was being attempted

    Returns:
        The same result, for chaining on stdout
    """
    if not result.success:
        raise CommandFailedError(message, result)
    return result
