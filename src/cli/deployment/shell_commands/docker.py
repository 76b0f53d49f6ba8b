"""Docker command abstractions.

This module provides commands for building and pushing container images.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .types import CommandResult

if TYPE_CHECKING:
    from .runner import CommandRunner


class DockerCommands:
    """Docker-related shell commands.

    Provides operations for:
    - Image builds from a local build context
    - Image pushes to a remote registry
    """

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize Docker commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    def build_image(self, image_tag: str, context_dir: Path) -> CommandResult:
        """Build a Docker image from a build context directory.

        Build output is streamed to the terminal.

        Args:
            image_tag: Full image tag (e.g., "gcr.io/my-project/frontend:latest")
            context_dir: Directory containing the Dockerfile

        Returns:
            CommandResult with build status

        Example:
            >>> docker.build_image("gcr.io/p/backend:latest", Path("./backend"))
        """
        return self._runner.run(
            ["docker", "build", "-t", image_tag, str(context_dir)],
            capture_output=False,
        )

    def push_image(self, image_tag: str) -> CommandResult:
        """Push a Docker image to a remote registry.

        Args:
            image_tag: Full image tag including registry
                      (e.g., "gcr.io/my-project/frontend:latest")

        Returns:
            CommandResult with push status
        """
        return self._runner.run(["docker", "push", image_tag], capture_output=False)
