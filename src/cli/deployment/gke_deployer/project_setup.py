"""GCP project selection and API activation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.infra.constants import DeploymentConstants

from .errors import ensure_success

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole

    from ..shell_commands import ShellCommands


class ProjectConfigurator:
    """Makes a GCP project the active gcloud context and enables its APIs."""

    def __init__(
        self,
        commands: ShellCommands,
        console: CLIConsole,
        constants: DeploymentConstants | None = None,
    ) -> None:
        self.commands = commands
        self.console = console
        self.constants = constants or DeploymentConstants()

    def set_project(self, project_id: str) -> None:
        """Set the active project.

        Args:
            project_id: GCP project identifier

        Raises:
            CommandFailedError: If gcloud rejects the project
        """
        ensure_success(
            self.commands.gcloud.set_project(project_id),
            f"Could not set GCP project to '{project_id}'",
        )
        self.console.ok(f"GCP project set to '{project_id}'.")

    def enable_apis(self) -> None:
        """Enable the container and artifact registry APIs."""
        with self.console.status("Enabling GCP APIs..."):
            result = self.commands.gcloud.enable_services(self.constants.REQUIRED_APIS)
        ensure_success(result, "Could not enable required GCP APIs")
        self.console.ok("Required APIs enabled.")
