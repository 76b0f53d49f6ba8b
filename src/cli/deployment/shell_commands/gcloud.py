"""gcloud command abstractions.

This module provides commands for Google Cloud project configuration,
API enablement, GKE cluster lifecycle and registry authentication.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from .types import CommandResult

if TYPE_CHECKING:
    from .runner import CommandRunner


class GcloudCommands:
    """gcloud-related shell commands.

    Provides operations for:
    - Project configuration
    - Service (API) enablement
    - GKE cluster describe/create/delete and credential fetch
    - Docker registry authentication
    """

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize gcloud commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    # =========================================================================
    # Project Configuration
    # =========================================================================

    def set_project(self, project_id: str) -> CommandResult:
        """Set the active project for subsequent gcloud calls.

        Args:
            project_id: GCP project identifier

        Returns:
            CommandResult with configuration status
        """
        return self._runner.run(["gcloud", "config", "set", "project", project_id])

    def enable_services(self, services: Sequence[str]) -> CommandResult:
        """Enable one or more Google Cloud APIs.

        Enabling an already-enabled API is a no-op, so this is safe to
        repeat.

        Args:
            services: API service names (e.g., "container.googleapis.com")

        Returns:
            CommandResult with enablement status
        """
        return self._runner.run(["gcloud", "services", "enable", *services])

    # =========================================================================
    # Cluster Lifecycle
    # =========================================================================

    def cluster_exists(self, name: str, region: str) -> bool:
        """Check whether a GKE cluster exists in the given region.

        Args:
            name: Cluster name
            region: Cluster region (e.g., "us-central1")

        Returns:
            True if `clusters describe` succeeds, False otherwise
        """
        result = self._runner.run(
            ["gcloud", "container", "clusters", "describe", name, "--region", region]
        )
        return result.success

    def create_cluster(
        self,
        name: str,
        region: str,
        *,
        num_nodes: int = 1,
        machine_type: str = "e2-small",
        disk_type: str = "pd-standard",
        disk_size: str = "30GB",
        min_nodes: int = 1,
        max_nodes: int = 2,
    ) -> CommandResult:
        """Create an autoscaling GKE cluster.

        Output is streamed to the terminal since creation takes several
        minutes.

        Args:
            name: Cluster name
            region: Cluster region
            num_nodes: Initial node count per zone
            machine_type: Compute Engine machine type
            disk_type: Boot disk type
            disk_size: Boot disk size (e.g., "30GB")
            min_nodes: Autoscaler lower bound
            max_nodes: Autoscaler upper bound

        Returns:
            CommandResult with creation status
        """
        return self._runner.run(
            [
                "gcloud",
                "container",
                "clusters",
                "create",
                name,
                "--region",
                region,
                f"--num-nodes={num_nodes}",
                f"--machine-type={machine_type}",
                f"--disk-type={disk_type}",
                f"--disk-size={disk_size}",
                "--enable-autoscaling",
                f"--min-nodes={min_nodes}",
                f"--max-nodes={max_nodes}",
            ],
            capture_output=False,
        )

    def get_credentials(self, name: str, region: str) -> CommandResult:
        """Fetch cluster credentials and merge them into the kubeconfig.

        Args:
            name: Cluster name
            region: Cluster region

        Returns:
            CommandResult with credential fetch status
        """
        return self._runner.run(
            [
                "gcloud",
                "container",
                "clusters",
                "get-credentials",
                name,
                "--region",
                region,
            ]
        )

    def delete_cluster(self, name: str, region: str) -> CommandResult:
        """Delete a GKE cluster without prompting.

        Args:
            name: Cluster name
            region: Cluster region

        Returns:
            CommandResult with deletion status
        """
        return self._runner.run(
            [
                "gcloud",
                "container",
                "clusters",
                "delete",
                name,
                "--region",
                region,
                "--quiet",
            ],
            capture_output=False,
        )

    # =========================================================================
    # Registry Authentication
    # =========================================================================

    def configure_docker(self, registry_host: str) -> CommandResult:
        """Register gcloud as a Docker credential helper for a registry.

        Args:
            registry_host: Registry hostname (e.g., "gcr.io")

        Returns:
            CommandResult with configuration status
        """
        return self._runner.run(
            ["gcloud", "auth", "configure-docker", registry_host, "-q"]
        )
