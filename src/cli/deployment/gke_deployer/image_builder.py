"""Docker image building and registry push.

This module handles the image operations for deployment:
- Authenticating Docker against the registry through gcloud
- Building the frontend and backend images
- Pushing both images to the project registry
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.infra.constants import DeploymentConstants, DeploymentPaths

from .errors import ensure_success

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole
    from src.infra.config import DeploymentConfig

    from ..shell_commands import ShellCommands


@dataclass(frozen=True)
class ImageRefs:
    """Registry references for the application images."""

    frontend: str
    backend: str


class ImageBuilder:
    """Builds and pushes the application images.

    Images are tagged with the configured registry path and tag
    (e.g., "gcr.io/<project>/frontend:latest"). There is no retry: the
    first failed build or push aborts the deployment.

    Attributes:
        commands: Shell command executor
        console: CLI console for output
        config: Deployment configuration
        paths: Deployment path resolver
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: CLIConsole,
        config: DeploymentConfig,
        paths: DeploymentPaths,
        constants: DeploymentConstants | None = None,
    ) -> None:
        """Initialize the image builder.

        Args:
            commands: Shell command executor
            console: CLI console for output
            config: Deployment configuration
            paths: Deployment path resolver
            constants: Optional deployment constants (uses defaults if not provided)
        """
        self.commands = commands
        self.console = console
        self.config = config
        self.paths = paths
        self.constants = constants or DeploymentConstants()

    def image_refs(self, project_id: str) -> ImageRefs:
        """Compute the registry references for a project.

        Args:
            project_id: GCP project identifier

        Returns:
            ImageRefs for the frontend and backend images
        """
        return ImageRefs(
            frontend=self.config.image_ref(self.constants.FRONTEND_NAME, project_id),
            backend=self.config.image_ref(self.constants.BACKEND_NAME, project_id),
        )

    def build_and_push(self, project_id: str) -> ImageRefs:
        """Authenticate, build both images, then push both.

        Args:
            project_id: GCP project identifier

        Returns:
            ImageRefs of the pushed images

        Raises:
            CommandFailedError: If authentication, a build or a push fails
        """
        refs = self.image_refs(project_id)

        ensure_success(
            self.commands.gcloud.configure_docker(self.config.registry_host),
            f"Could not configure Docker for {self.config.registry_host}",
        )

        builds = [
            (refs.frontend, self.paths.frontend_dir),
            (refs.backend, self.paths.backend_dir),
        ]
        for image, context_dir in builds:
            self.console.print(f"[bold cyan]🔨 Building {image}...[/bold cyan]")
            ensure_success(
                self.commands.docker.build_image(image, context_dir),
                f"Docker build failed for {image}",
            )

        for image in (refs.frontend, refs.backend):
            self.console.print(f"[bold cyan]📦 Pushing {image}...[/bold cyan]")
            ensure_success(
                self.commands.docker.push_image(image),
                f"Docker push failed for {image}",
            )

        self.console.ok(f"Docker images pushed to {self.config.registry_host}.")
        return refs
