"""GKE cluster provisioning.

Creates the cluster only when a describe call says it is missing, then
always fetches credentials so kubectl targets it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import ensure_success

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole
    from src.infra.config import DeploymentConfig

    from ..shell_commands import ShellCommands


class ClusterProvisioner:
    """Idempotently provisions the GKE cluster.

    Attributes:
        commands: Shell command executor
        console: CLI console for output
        config: Deployment configuration (name, region, sizing)
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: CLIConsole,
        config: DeploymentConfig,
    ) -> None:
        self.commands = commands
        self.console = console
        self.config = config

    def ensure_cluster(self) -> bool:
        """Create the cluster if needed and fetch its credentials.

        Returns:
            True if a cluster was created, False if it already existed

        Raises:
            CommandFailedError: If creation or credential fetch fails
        """
        created = False
        cfg = self.config

        with self.console.status(f"Looking up cluster {cfg.cluster_name}..."):
            exists = self.commands.gcloud.cluster_exists(cfg.cluster_name, cfg.region)

        if exists:
            self.console.ok("GKE cluster already exists.")
        else:
            self.console.info(
                f"Creating GKE cluster {cfg.cluster_name} in {cfg.region}..."
            )
            ensure_success(
                self.commands.gcloud.create_cluster(
                    cfg.cluster_name,
                    cfg.region,
                    num_nodes=cfg.num_nodes,
                    machine_type=cfg.machine_type,
                    disk_type=cfg.disk_type,
                    disk_size=cfg.disk_size,
                    min_nodes=cfg.min_nodes,
                    max_nodes=cfg.max_nodes,
                ),
                f"Could not create GKE cluster '{cfg.cluster_name}'",
            )
            created = True

        ensure_success(
            self.commands.gcloud.get_credentials(cfg.cluster_name, cfg.region),
            f"Could not fetch credentials for cluster '{cfg.cluster_name}'",
        )
        self.console.ok("GKE cluster is ready.")
        return created

    def delete_cluster(self) -> None:
        """Delete the cluster."""
        cfg = self.config
        self.console.info(f"Deleting GKE cluster {cfg.cluster_name}...")
        ensure_success(
            self.commands.gcloud.delete_cluster(cfg.cluster_name, cfg.region),
            f"Could not delete GKE cluster '{cfg.cluster_name}'",
        )
        self.console.ok(f"Cluster {cfg.cluster_name} deleted.")
