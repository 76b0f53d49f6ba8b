"""Namespace and secret management for Kubernetes deployments.

The secret is materialized from the local env file with a create-or-update
pattern: kubectl renders the manifest client-side and the result is piped
into `kubectl apply`, so re-running updates the secret instead of failing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import CommandFailedError, ensure_success

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole
    from src.infra.config import DeploymentConfig
    from src.infra.constants import DeploymentPaths

    from ..shell_commands import ShellCommands

ALREADY_EXISTS_MARKERS = ("AlreadyExists", "already exists")


class SecretManager:
    """Manages the deployment namespace and application secret.

    Handles:
    - Creating the namespace, tolerating one that already exists
    - Applying the secret generated from the env file
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: CLIConsole,
        config: DeploymentConfig,
        paths: DeploymentPaths,
    ) -> None:
        """Initialize the secret manager.

        Args:
            commands: Shell command executor
            console: CLI console for output
            config: Deployment configuration
            paths: Deployment path resolver
        """
        self.commands = commands
        self.console = console
        self.config = config
        self.paths = paths

    def ensure_namespace(self) -> bool:
        """Create the namespace unless it already exists.

        Returns:
            True if the namespace was created, False if it already existed

        Raises:
            CommandFailedError: If creation fails for any other reason
        """
        namespace = self.config.namespace
        result = self.commands.kubectl.create_namespace(namespace)
        if result.success:
            self.console.ok(f"Namespace '{namespace}' created.")
            return True

        output = f"{result.stderr}\n{result.stdout}"
        if any(marker in output for marker in ALREADY_EXISTS_MARKERS):
            self.console.info(f"Namespace '{namespace}' already exists.")
            return False

        raise CommandFailedError(f"Could not create namespace '{namespace}'", result)

    def apply_secret(self) -> None:
        """Create or update the application secret from the env file.

        Raises:
            CommandFailedError: If rendering or applying the secret fails
        """
        name = self.config.secret_name
        namespace = self.config.namespace

        self.console.print("[bold cyan]🔐 Applying Kubernetes secret...[/bold cyan]")

        rendered = ensure_success(
            self.commands.kubectl.render_secret_from_env_file(
                name, self.paths.env_file, namespace
            ),
            f"Could not generate secret '{name}' from {self.paths.env_file.name}",
        )
        ensure_success(
            self.commands.kubectl.apply_stdin(rendered.stdout),
            f"Could not apply secret '{name}'",
        )

        self.console.ok(f"Secret '{name}' applied to namespace {namespace}.")
