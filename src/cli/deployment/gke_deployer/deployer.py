"""GKE environment deployer.

This module provides the GkeDeployer class which orchestrates the minimal
TechyPark deployment to Google Kubernetes Engine. It coordinates
specialized components for:
- Prerequisite checks
- Project configuration and API enablement
- Cluster provisioning
- Image build and push
- Namespace, secret and manifest application
- Rollout waits and public address polling

Every stage raises on failure, so the first error stops the run with no
cleanup of what earlier stages created.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from pathlib import Path

from rich.table import Table

from src.cli.shared.console import CLIConsole
from src.infra.config import DeploymentConfig
from src.infra.constants import DeploymentConstants, DeploymentPaths

from ..base import BaseDeployer
from ..shell_commands import ShellCommands
from .cluster import ClusterProvisioner
from .errors import DeploymentError, ensure_success
from .image_builder import ImageBuilder
from .manifests import ManifestBuilder
from .prerequisites import PrerequisiteChecker
from .project_setup import ProjectConfigurator
from .rollout import RolloutMonitor
from .secret_manager import SecretManager


class GkeDeployer(BaseDeployer):
    """Deployer for the minimal GKE environment.

    The deployment workflow consists of:
    1. Check prerequisites (tools on PATH, secrets file)
    2. Set the active GCP project
    3. Enable required APIs
    4. Create the cluster if missing, then fetch credentials
    5. Build and push frontend and backend images
    6. Create namespace, apply secret and manifest bundle
    7. Wait for rollouts (postgres, redis, backend, frontend)
    8. Poll for the frontend's external IP

    Attributes:
        config: Deployment configuration
        constants: Fixed deployment identifiers
        paths: Deployment path resolver
        commands: Shell command executor
    """

    def __init__(
        self,
        console: CLIConsole,
        project_root: Path,
        config: DeploymentConfig | None = None,
        commands: ShellCommands | None = None,
        which: Callable[[str], str | None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the GKE deployer.

        Args:
            console: CLI console for output
            project_root: Path to the application project root
            config: Deployment configuration (defaults if not provided)
            commands: Shell command executor (created if not provided)
            which: Executable lookup used by the prerequisite check
            sleep: Sleep function used while polling
        """
        super().__init__(console, project_root)

        self.config = config or DeploymentConfig()
        self.constants = DeploymentConstants()
        self.paths = DeploymentPaths(project_root, self.config)
        self.commands = commands or ShellCommands(project_root)

        self.prerequisites = PrerequisiteChecker(
            console=console,
            paths=self.paths,
            constants=self.constants,
            which=which,
        )
        self.project_setup = ProjectConfigurator(
            commands=self.commands,
            console=console,
            constants=self.constants,
        )
        self.cluster = ClusterProvisioner(
            commands=self.commands,
            console=console,
            config=self.config,
        )
        self.image_builder = ImageBuilder(
            commands=self.commands,
            console=console,
            config=self.config,
            paths=self.paths,
            constants=self.constants,
        )
        self.secret_manager = SecretManager(
            commands=self.commands,
            console=console,
            config=self.config,
            paths=self.paths,
        )
        self.manifests = ManifestBuilder(
            secret_name=self.config.secret_name,
            constants=self.constants,
        )
        self.rollout = RolloutMonitor(
            commands=self.commands,
            console=console,
            config=self.config,
            constants=self.constants,
            sleep=sleep,
        )

    # =========================================================================
    # Public Interface
    # =========================================================================

    def deploy(self, project_id: str | None = None) -> str:
        """Deploy the application to GKE.

        Args:
            project_id: GCP project; falls back to the configured one, then
                        to an interactive prompt

        Returns:
            The public URL of the frontend

        Raises:
            DeploymentError: On the first failing stage
        """
        self.stage(1, "Checking Prerequisites")
        self.prerequisites.check()

        self.stage(2, "GCP Project Configuration")
        project_id = self._resolve_project_id(project_id)
        self.project_setup.set_project(project_id)

        self.stage(3, "Enabling GCP APIs")
        self.project_setup.enable_apis()

        self.stage(4, "Setting Up Minimal GKE Cluster")
        self.cluster.ensure_cluster()

        self.stage(5, "Building and Pushing Docker Images")
        images = self.image_builder.build_and_push(project_id)

        self.stage(6, "Deploying to Kubernetes")
        self.secret_manager.ensure_namespace()
        self.secret_manager.apply_secret()
        self._apply_manifests(self.manifests.render(images))

        self.stage(7, "Finalizing Deployment")
        self.rollout.wait_for_rollouts()
        external_ip = self.rollout.wait_for_external_ip()

        url = f"http://{external_ip}"
        self.console.print_header("🎉 Deployment Successful! 🎉", style="green")
        self.console.print(
            f"[green]Access your application at: [/green][yellow]{url}[/yellow]"
        )
        return url

    def teardown(self, delete_cluster: bool = False, force: bool = False) -> None:
        """Remove the deployment namespace and optionally the cluster.

        Args:
            delete_cluster: Also delete the GKE cluster
            force: Skip the confirmation prompt
        """
        namespace = self.config.namespace
        details = f"Namespace '{namespace}' and all its resources will be deleted."
        if delete_cluster:
            details += f"\nCluster '{self.config.cluster_name}' will be deleted."

        if not self.console.confirm_action(
            "Tear down TechyPark deployment",
            details=details,
            extra_warning="PostgreSQL and Redis data stored in the cluster will be lost.",
            force=force,
        ):
            self.console.print("[dim]Teardown cancelled.[/dim]")
            return

        with self.console.status(f"Deleting namespace {namespace}..."):
            result = self.commands.kubectl.delete_namespace(namespace)
        ensure_success(result, f"Could not delete namespace '{namespace}'")
        self.console.ok(f"Namespace {namespace} deleted.")

        if delete_cluster:
            self.cluster.delete_cluster()

        self.console.ok("Teardown complete.")

    def show_status(self) -> None:
        """Display deployments and services in the deployment namespace."""
        namespace = self.config.namespace
        deployments = self.commands.kubectl.get_deployments(namespace)
        services = self.commands.kubectl.get_services(namespace)

        if not deployments and not services:
            self.console.warn(f"No resources found in namespace '{namespace}'.")
            return

        deployment_table = Table(title=f"Deployments ({namespace})")
        deployment_table.add_column("Name", style="cyan")
        deployment_table.add_column("Ready")
        deployment_table.add_column("Up-to-date")
        deployment_table.add_column("Status")
        for d in deployments:
            status = "[green]Ready[/green]" if d.is_ready else "[yellow]Pending[/yellow]"
            deployment_table.add_row(
                d.name, f"{d.ready}/{d.desired}", str(d.updated), status
            )
        self.console.print(deployment_table)

        service_table = Table(title=f"Services ({namespace})")
        service_table.add_column("Name", style="cyan")
        service_table.add_column("Type")
        service_table.add_column("Cluster IP")
        service_table.add_column("External IP")
        service_table.add_column("Ports")
        for s in services:
            service_table.add_row(
                s.name, s.type, s.cluster_ip, s.external_ip or "-", s.ports
            )
        self.console.print(service_table)

    def render_manifests(self, project_id: str) -> str:
        """Render the manifest bundle for a project without applying it."""
        project_id = project_id.strip()
        if not project_id:
            raise DeploymentError("A GCP project ID is required")
        return self.manifests.render(self.image_builder.image_refs(project_id))

    # =========================================================================
    # Private Helpers
    # =========================================================================

    def _resolve_project_id(self, project_id: str | None) -> str:
        resolved = project_id or self.config.project_id
        if not resolved:
            resolved = self.console.prompt("Enter your GCP Project ID").strip()
        if not resolved:
            raise DeploymentError("A GCP project ID is required")
        return resolved

    def _apply_manifests(self, manifest: str) -> None:
        self.console.info("Applying Kubernetes deployments and services...")
        ensure_success(
            self.commands.kubectl.apply_stdin(manifest, namespace=self.config.namespace),
            "Could not apply Kubernetes manifests",
        )
        self.console.ok("Kubernetes resources applied.")
