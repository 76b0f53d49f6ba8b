import pytest
import typer

from src.cli.deployment.gke_deployer.errors import (
    CommandFailedError,
    DeploymentError,
    PrerequisiteError,
)
from src.cli.shared.console import with_error_handling
from tests.helpers import fail


def test_with_error_handling_handles_deployment_error():
    @with_error_handling
    def _command() -> None:
        raise DeploymentError("Boom", details="extra")

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 1


def test_with_error_handling_handles_prerequisite_error():
    @with_error_handling
    def _command() -> None:
        raise PrerequisiteError("'kubectl' is not installed")

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 1


def test_with_error_handling_propagates_command_exit_code():
    @with_error_handling
    def _command() -> None:
        raise CommandFailedError("Push failed", fail("denied", returncode=3))

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 3


def test_with_error_handling_handles_keyboard_interrupt():
    @with_error_handling
    def _command() -> None:
        raise KeyboardInterrupt

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 130
