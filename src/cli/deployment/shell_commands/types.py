"""Data types for shell command results.

This module contains the dataclasses shared across the shell command
modules.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = [
    "CommandResult",
    "DeploymentStatus",
    "ServiceStatus",
]


@dataclass
class CommandResult:
    """Result of a command execution.

    Attributes:
        success: Whether the command exited with status 0
        stdout: Captured standard output (empty when streamed)
        stderr: Captured standard error (empty when streamed)
        returncode: Process exit status
        command: The argv that was executed
    """

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    command: list[str] = field(default_factory=list)


@dataclass
class DeploymentStatus:
    """Replica summary for a Kubernetes Deployment."""

    name: str
    desired: int
    ready: int
    updated: int = 0

    @property
    def is_ready(self) -> bool:
        return self.desired > 0 and self.ready >= self.desired


@dataclass
class ServiceStatus:
    """Summary of a Kubernetes Service."""

    name: str
    type: str
    cluster_ip: str
    external_ip: str = ""
    ports: str = ""
