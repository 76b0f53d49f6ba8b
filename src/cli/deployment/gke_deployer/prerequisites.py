"""Pre-deployment prerequisite checks.

Verifies the external tools are installed and the secrets file is present
before any cloud operation runs. Also inspects the secrets file for the
in-cluster connection strings the minimal deployment depends on.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from dotenv import dotenv_values

from src.infra.constants import DeploymentConstants, DeploymentPaths

from .errors import PrerequisiteError

if TYPE_CHECKING:
    from src.cli.shared.console import CLIConsole


class PrerequisiteChecker:
    """Checks local prerequisites for a deployment.

    Missing tools and a missing secrets file are fatal. Secrets that don't
    point at the in-cluster services only produce warnings, since the
    application may be wired differently on purpose.
    """

    def __init__(
        self,
        console: CLIConsole,
        paths: DeploymentPaths,
        constants: DeploymentConstants | None = None,
        which: Callable[[str], str | None] | None = None,
    ) -> None:
        """Initialize the prerequisite checker.

        Args:
            console: CLI console for output
            paths: Deployment path resolver
            constants: Optional deployment constants
            which: Executable lookup, replaceable in tests
        """
        self.console = console
        self.paths = paths
        self.constants = constants or DeploymentConstants()
        self._which = which or shutil.which

    def check(self) -> None:
        """Run all checks, raising on the first fatal problem.

        Raises:
            PrerequisiteError: If a tool is not on PATH or the env file is absent
        """
        for tool in self.constants.REQUIRED_TOOLS:
            self.check_tool(tool)
        self.check_env_file()
        self.warn_on_secret_mismatches()
        self.console.ok("Prerequisites met.")

    def check_tool(self, tool: str) -> None:
        if self._which(tool) is None:
            raise PrerequisiteError(
                f"'{tool}' is not installed. Please install it to continue."
            )

    def check_env_file(self) -> None:
        env_file = self.paths.env_file
        if not env_file.is_file():
            raise PrerequisiteError(
                f"A '{env_file.name}' file is required at {env_file}",
                details=(
                    "The secrets file is turned into the cluster secret. For the\n"
                    "minimal deployment the connection strings must point at the\n"
                    "in-cluster services, for example:\n\n"
                    f'  {self.constants.DATABASE_URL_KEY}="postgresql://techypark:password'
                    f'@{self.constants.POSTGRES_SERVICE}:{self.constants.POSTGRES_PORT}/techypark"\n'
                    f'  {self.constants.REDIS_URL_KEY}="redis://'
                    f'{self.constants.REDIS_SERVICE}:{self.constants.REDIS_PORT}"'
                ),
            )

    def warn_on_secret_mismatches(self) -> list[str]:
        """Warn about missing or out-of-cluster connection strings.

        Returns:
            The warning messages that were printed
        """
        values = dotenv_values(self.paths.env_file)
        expected_hosts = {
            self.constants.DATABASE_URL_KEY: self.constants.POSTGRES_SERVICE,
            self.constants.REDIS_URL_KEY: self.constants.REDIS_SERVICE,
        }

        warnings = []
        for key, host in expected_hosts.items():
            value = values.get(key)
            if not value:
                warnings.append(f"{key} is not set in {self.paths.env_file.name}")
                continue
            try:
                hostname = urlparse(value).hostname
            except ValueError:
                warnings.append(f"{key} is not a valid URL")
                continue
            if hostname != host:
                warnings.append(f"{key} does not point at the in-cluster host '{host}'")

        for message in warnings:
            self.console.warn(message)
        return warnings
