"""Rollout monitoring and public address polling.

Waits on deployment rollouts one at a time, dependencies first, then polls
the frontend LoadBalancer until it reports an external IP.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from src.infra.constants import DeploymentConstants

from .errors import RolloutTimeoutError, ensure_success

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole
    from src.infra.config import DeploymentConfig

    from ..shell_commands import ShellCommands


class RolloutMonitor:
    """Waits for the deployment to become reachable.

    Handles:
    - Sequential rollout status waits (a stall blocks later checks)
    - Polling the frontend service for its public address
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: CLIConsole,
        config: DeploymentConfig,
        constants: DeploymentConstants | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the rollout monitor.

        Args:
            commands: Shell command executor
            console: CLI console for output
            config: Deployment configuration (namespace, timeouts, interval)
            constants: Optional deployment constants
            sleep: Sleep function, replaceable in tests
            clock: Monotonic clock, replaceable in tests
        """
        self.commands = commands
        self.console = console
        self.config = config
        self.constants = constants or DeploymentConstants()
        self._sleep = sleep
        self._clock = clock

    def wait_for_rollouts(self) -> None:
        """Wait for every deployment rollout, in dependency order.

        Raises:
            CommandFailedError: If a rollout fails or exceeds rollout_timeout
        """
        self.console.print(
            "[bold cyan]⏳ Waiting for rollouts to complete...[/bold cyan]"
        )
        for name in self.constants.rollout_order:
            ensure_success(
                self.commands.kubectl.rollout_status(
                    "deployment",
                    name,
                    self.config.namespace,
                    timeout=self.config.rollout_timeout,
                ),
                f"Rollout of deployment/{name} did not complete",
            )
        self.console.ok("All rollouts completed.")

    def wait_for_external_ip(self) -> str:
        """Poll the frontend service until it has a public address.

        Sleeps poll_interval between empty results. With external_ip_timeout
        set to None the wait is unbounded.

        Returns:
            The external IP

        Raises:
            CommandFailedError: If the service query itself fails
            RolloutTimeoutError: If no address appears within the timeout
        """
        service = self.constants.FRONTEND_SERVICE
        timeout = self.config.external_ip_timeout
        deadline = None if timeout is None else self._clock() + timeout

        while True:
            self.console.print("[dim]Waiting for frontend Load Balancer IP...[/dim]")
            result = ensure_success(
                self.commands.kubectl.get_service_template(
                    service,
                    self.config.namespace,
                    self.constants.EXTERNAL_IP_TEMPLATE,
                ),
                f"Could not query service '{service}'",
            )
            external_ip = result.stdout.strip()
            if external_ip:
                return external_ip

            if deadline is not None and self._clock() >= deadline:
                raise RolloutTimeoutError(
                    f"No external IP assigned to '{service}' after {timeout:g}s",
                    details=(
                        "The LoadBalancer may still be provisioning. Check with:\n"
                        f"  kubectl get svc {service} -n {self.config.namespace}"
                    ),
                )
            self._sleep(self.config.poll_interval)
