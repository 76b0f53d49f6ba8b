"""Kubectl command abstractions.

This module provides commands for Kubernetes resource management via
kubectl: namespaces, secrets, manifest application, rollout status and
service address lookup.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from .types import CommandResult, DeploymentStatus, ServiceStatus

if TYPE_CHECKING:
    from .runner import CommandRunner


class KubectlCommands:
    """Kubectl-related shell commands.

    Provides operations for:
    - Namespace management
    - Secret generation and create-or-update apply
    - Manifest application from stdin
    - Deployment rollout status
    - Service and deployment status queries
    """

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize kubectl commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    # =========================================================================
    # Namespace Management
    # =========================================================================

    def create_namespace(self, namespace: str) -> CommandResult:
        """Create a namespace.

        Fails with an "AlreadyExists" error if the namespace is present;
        callers decide whether that is fatal.
        """
        return self._runner.run(["kubectl", "create", "namespace", namespace])

    def delete_namespace(
        self,
        namespace: str,
        *,
        timeout: str = "300s",
    ) -> CommandResult:
        """Delete a namespace and all its resources, waiting for completion."""
        return self._runner.run(
            [
                "kubectl",
                "delete",
                "namespace",
                namespace,
                "--ignore-not-found",
                "--wait=true",
                f"--timeout={timeout}",
            ]
        )

    # =========================================================================
    # Secrets and Manifests
    # =========================================================================

    def render_secret_from_env_file(
        self,
        name: str,
        env_file: Path,
        namespace: str,
    ) -> CommandResult:
        """Render a generic secret manifest from an env file without creating it.

        Uses a client-side dry run so the YAML can be piped into
        `kubectl apply`, which updates an existing secret instead of failing.

        Args:
            name: Secret name
            env_file: Path to a KEY=VALUE env file
            namespace: Target namespace

        Returns:
            CommandResult whose stdout holds the secret manifest YAML
        """
        return self._runner.run(
            [
                "kubectl",
                "create",
                "secret",
                "generic",
                name,
                f"--from-env-file={env_file}",
                "-n",
                namespace,
                "--dry-run=client",
                "-o",
                "yaml",
            ]
        )

    def apply_stdin(
        self,
        manifest: str,
        namespace: str | None = None,
    ) -> CommandResult:
        """Apply manifest YAML passed on stdin.

        Args:
            manifest: One or more YAML documents
            namespace: Namespace for resources without one

        Returns:
            CommandResult with apply status
        """
        cmd = ["kubectl", "apply"]
        if namespace:
            cmd.extend(["-n", namespace])
        cmd.extend(["-f", "-"])
        return self._runner.run(cmd, input_data=manifest)

    # =========================================================================
    # Deployment Operations
    # =========================================================================

    def rollout_status(
        self,
        resource_type: str,
        name: str,
        namespace: str,
        *,
        timeout: str = "300s",
    ) -> CommandResult:
        """Block until a rollout completes or the timeout elapses.

        Progress output is streamed to the terminal.
        """
        return self._runner.run(
            [
                "kubectl",
                "rollout",
                "status",
                f"{resource_type}/{name}",
                "-n",
                namespace,
                f"--timeout={timeout}",
            ],
            capture_output=False,
        )

    def get_deployments(self, namespace: str) -> list[DeploymentStatus]:
        """Get replica status for all deployments in a namespace.

        Returns an empty list if the query fails (e.g., namespace missing).
        """
        result = self._runner.run(
            ["kubectl", "get", "deployments", "-n", namespace, "-o", "json"]
        )
        if not result.success or not result.stdout.strip():
            return []

        items = json.loads(result.stdout).get("items", [])
        deployments = []
        for item in items:
            spec = item.get("spec", {})
            status = item.get("status", {})
            deployments.append(
                DeploymentStatus(
                    name=item.get("metadata", {}).get("name", ""),
                    desired=spec.get("replicas", 0) or 0,
                    ready=status.get("readyReplicas", 0) or 0,
                    updated=status.get("updatedReplicas", 0) or 0,
                )
            )
        return deployments

    # =========================================================================
    # Service Operations
    # =========================================================================

    def get_service_template(
        self,
        name: str,
        namespace: str,
        template: str,
    ) -> CommandResult:
        """Query a service field using a Go template.

        Args:
            name: Service name
            namespace: Kubernetes namespace
            template: Go template applied to the service object

        Returns:
            CommandResult whose stdout holds the rendered template
        """
        return self._runner.run(
            [
                "kubectl",
                "get",
                "svc",
                name,
                "-n",
                namespace,
                f"--template={template}",
            ]
        )

    def get_services(self, namespace: str) -> list[ServiceStatus]:
        """Get type, cluster IP, external IP and ports for all services."""
        result = self._runner.run(
            ["kubectl", "get", "services", "-n", namespace, "-o", "json"]
        )
        if not result.success or not result.stdout.strip():
            return []

        services = []
        for item in json.loads(result.stdout).get("items", []):
            spec = item.get("spec", {})
            ingress = item.get("status", {}).get("loadBalancer", {}).get("ingress", [])
            external_ip = ",".join(
                entry.get("ip") or entry.get("hostname", "") for entry in ingress
            )
            ports = ",".join(
                f"{p.get('port')}/{p.get('protocol', 'TCP')}"
                for p in spec.get("ports", [])
            )
            services.append(
                ServiceStatus(
                    name=item.get("metadata", {}).get("name", ""),
                    type=spec.get("type", ""),
                    cluster_ip=spec.get("clusterIP", ""),
                    external_ip=external_ip,
                    ports=ports,
                )
            )
        return services
