"""Shell command abstractions for GKE deployment operations.

This package provides a clean, well-documented interface for shell commands used
during deployment. It is organized into specialized modules for each tool:

- gcloud: Project, API, cluster and registry-auth operations
- docker: Image build and push
- kubectl: Kubernetes resource management

Usage:
    from src.cli.deployment.shell_commands import ShellCommands

    commands = ShellCommands(project_root=Path("."))
    if not commands.gcloud.cluster_exists("my-cluster", "us-central1"):
        commands.gcloud.create_cluster("my-cluster", "us-central1")
"""

from pathlib import Path

from .docker import DockerCommands
from .gcloud import GcloudCommands
from .kubectl import KubectlCommands
from .runner import CommandRunner
from .types import CommandResult, DeploymentStatus, ServiceStatus


class ShellCommands:
    """Unified interface for all shell command operations.

    This class provides a facade over the specialized command modules,
    offering a single point of access for deployment operations while
    maintaining separation of concerns internally.

    Attributes:
        gcloud: Google Cloud CLI commands
        docker: Docker-related commands
        kubectl: Kubernetes kubectl commands
    """

    def __init__(self, project_root: Path) -> None:
        """Initialize the shell commands executor.

        Args:
            project_root: Path to the project root directory.
                         Commands will be executed from this directory by default.
        """
        self._project_root = Path(project_root)
        self._runner = CommandRunner(self._project_root)

        self.gcloud = GcloudCommands(self._runner)
        self.docker = DockerCommands(self._runner)
        self.kubectl = KubectlCommands(self._runner)

    @property
    def project_root(self) -> Path:
        """Get the project root path."""
        return self._project_root


__all__ = [
    "ShellCommands",
    "CommandResult",
    "DeploymentStatus",
    "ServiceStatus",
    "GcloudCommands",
    "DockerCommands",
    "KubectlCommands",
    "CommandRunner",
]
