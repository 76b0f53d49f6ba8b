"""Base deployer class with shared functionality."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from src.cli.shared.console import CLIConsole


class BaseDeployer(ABC):
    """Abstract base class for all deployers."""

    def __init__(self, console: CLIConsole, project_root: Path):
        """Initialize the deployer.

        Args:
            console: CLI console for output
            project_root: Path to the project root directory
        """
        self.console = console
        self.project_root = project_root

    @abstractmethod
    def deploy(self, **kwargs: Any) -> Any:
        """Deploy the environment.

        Args:
            **kwargs: Environment-specific deployment options
        """
        pass

    @abstractmethod
    def teardown(self, **kwargs: Any) -> None:
        """Tear down the environment.

        Args:
            **kwargs: Environment-specific teardown options
        """
        pass

    @abstractmethod
    def show_status(self) -> None:
        """Display the current status of the deployment."""
        pass

    def stage(self, number: int, title: str) -> None:
        """Announce a numbered deployment stage.

        Args:
            number: 1-based stage number
            title: Stage description
        """
        self.console.print_header(f"Step {number}: {title}", style="cyan")
