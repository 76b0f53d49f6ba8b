"""Tests for rollout waits and external IP polling."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from src.cli.deployment.gke_deployer.errors import (
    CommandFailedError,
    RolloutTimeoutError,
)
from src.cli.deployment.gke_deployer.rollout import RolloutMonitor
from src.cli.deployment.shell_commands import ShellCommands
from src.infra.config import DeploymentConfig
from tests.helpers import ScriptedRunner, fail, ok

ROLLOUT = ("kubectl", "rollout", "status")
GET_SVC = ("kubectl", "get", "svc")


class FakeClock:
    """Clock that advances only when the monitor sleeps."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def _monitor(
    commands: ShellCommands,
    console: MagicMock,
    clock: FakeClock,
    **config: object,
) -> RolloutMonitor:
    return RolloutMonitor(
        commands,
        console,
        DeploymentConfig(**config),  # type: ignore[arg-type]
        sleep=clock.sleep,
        clock=clock,
    )


class TestWaitForRollouts:
    def test_waits_in_dependency_order(
        self, commands: ShellCommands, runner: ScriptedRunner, mock_console: MagicMock
    ) -> None:
        _monitor(commands, mock_console, FakeClock()).wait_for_rollouts()

        targets = [c.argv[3] for c in runner.calls_matching(*ROLLOUT)]
        assert targets == [
            "deployment/postgres",
            "deployment/redis",
            "deployment/backend",
            "deployment/frontend",
        ]
        assert all("--timeout=10m" in c.argv for c in runner.calls)

    def test_stall_stops_later_checks(
        self, commands: ShellCommands, runner: ScriptedRunner, mock_console: MagicMock
    ) -> None:
        runner.on((*ROLLOUT, "deployment/redis"), fail(returncode=1))

        with pytest.raises(CommandFailedError) as exc_info:
            _monitor(commands, mock_console, FakeClock()).wait_for_rollouts()

        assert "redis" in exc_info.value.message
        assert len(runner.calls_matching(*ROLLOUT)) == 2


class TestWaitForExternalIp:
    @pytest.mark.parametrize("empty_polls", [0, 1, 3])
    def test_sleeps_once_per_empty_result(
        self,
        commands: ShellCommands,
        runner: ScriptedRunner,
        mock_console: MagicMock,
        empty_polls: int,
    ) -> None:
        runner.on(GET_SVC, *([ok("")] * empty_polls), ok("34.120.1.2"))
        clock = FakeClock()

        ip = _monitor(commands, mock_console, clock).wait_for_external_ip()

        assert ip == "34.120.1.2"
        assert clock.sleeps == [10.0] * empty_polls
        assert len(runner.calls_matching(*GET_SVC)) == empty_polls + 1

    def test_queries_frontend_service_template(
        self, commands: ShellCommands, runner: ScriptedRunner, mock_console: MagicMock
    ) -> None:
        runner.on(GET_SVC, ok("1.2.3.4\n"))

        assert _monitor(commands, mock_console, FakeClock()).wait_for_external_ip() == "1.2.3.4"

        (call,) = runner.calls
        assert call.argv[3] == "frontend-service"
        assert (
            "--template={{range .status.loadBalancer.ingress}}{{.ip}}{{end}}"
            in call.argv
        )

    def test_times_out(
        self, commands: ShellCommands, runner: ScriptedRunner, mock_console: MagicMock
    ) -> None:
        runner.on(GET_SVC, ok(""))
        clock = FakeClock()

        with pytest.raises(RolloutTimeoutError):
            _monitor(
                commands, mock_console, clock, poll_interval=10.0, external_ip_timeout=30.0
            ).wait_for_external_ip()

        assert clock.sleeps == [10.0, 10.0, 10.0]

    def test_unbounded_wait_when_timeout_disabled(
        self, commands: ShellCommands, runner: ScriptedRunner, mock_console: MagicMock
    ) -> None:
        runner.on(GET_SVC, *([ok("")] * 100), ok("8.8.8.8"))
        clock = FakeClock()

        ip = _monitor(
            commands, mock_console, clock, external_ip_timeout=None
        ).wait_for_external_ip()

        assert ip == "8.8.8.8"
        assert len(clock.sleeps) == 100

    def test_query_failure_aborts(
        self, commands: ShellCommands, runner: ScriptedRunner, mock_console: MagicMock
    ) -> None:
        runner.on(GET_SVC, fail("NotFound", returncode=1))

        with pytest.raises(CommandFailedError):
            _monitor(commands, mock_console, FakeClock()).wait_for_external_ip()
