"""End-to-end tests for the GKE deployer against a scripted command runner."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import yaml

from src.cli.deployment.gke_deployer.deployer import GkeDeployer
from src.cli.deployment.gke_deployer.errors import (
    CommandFailedError,
    DeploymentError,
    PrerequisiteError,
)
from src.cli.deployment.shell_commands import ShellCommands
from src.cli.deployment.shell_commands.types import DeploymentStatus, ServiceStatus
from src.infra.config import DeploymentConfig
from tests.helpers import ScriptedRunner, fail, ok

SECRET_YAML = "apiVersion: v1\nkind: Secret\nmetadata:\n  name: techypark-secrets\n"


def _installed(tool: str) -> str:
    return f"/usr/bin/{tool}"


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def deployer(
    commands: ShellCommands,
    mock_console: MagicMock,
    tmp_path: Path,
    sleeps: list[float],
) -> GkeDeployer:
    return GkeDeployer(
        mock_console,
        tmp_path,
        DeploymentConfig(),
        commands=commands,
        which=_installed,
        sleep=sleeps.append,
    )


@pytest.fixture
def fresh_project(runner: ScriptedRunner) -> ScriptedRunner:
    """Script a project with no cluster yet and a slow load balancer."""
    runner.on(("gcloud", "container", "clusters", "describe"), fail("NOT_FOUND"))
    runner.on(("kubectl", "create", "secret"), ok(SECRET_YAML))
    runner.on(("kubectl", "get", "svc"), ok(""), ok(""), ok("34.123.45.67"))
    return runner


class TestDeploy:
    def test_full_deployment_sequence(
        self,
        deployer: GkeDeployer,
        fresh_project: ScriptedRunner,
        env_file: Path,
        sleeps: list[float],
    ) -> None:
        url = deployer.deploy(project_id="my-proj")

        runner = fresh_project
        assert url == "http://34.123.45.67"
        assert runner.calls[0].argv == ["gcloud", "config", "set", "project", "my-proj"]
        assert len(runner.calls_matching("gcloud", "container", "clusters", "create")) == 1
        assert len(runner.calls_matching("kubectl", "create", "namespace")) == 1

        secret_apply, bundle_apply = runner.calls_matching("kubectl", "apply")
        assert secret_apply.input_data == SECRET_YAML
        assert bundle_apply.argv == ["kubectl", "apply", "-n", "techypark", "-f", "-"]
        documents = list(yaml.safe_load_all(bundle_apply.input_data or ""))
        assert len(documents) == 8
        images = {
            d["metadata"]["name"]: d["spec"]["template"]["spec"]["containers"][0]["image"]
            for d in documents
            if d["kind"] == "Deployment"
        }
        assert images["frontend"] == "gcr.io/my-proj/frontend:latest"
        assert images["backend"] == "gcr.io/my-proj/backend:latest"

        rollouts = [c.argv[3] for c in runner.calls_matching("kubectl", "rollout")]
        assert rollouts == [
            "deployment/postgres",
            "deployment/redis",
            "deployment/backend",
            "deployment/frontend",
        ]
        assert sleeps == [10.0, 10.0]

    def test_stage_order(
        self, deployer: GkeDeployer, fresh_project: ScriptedRunner, env_file: Path
    ) -> None:
        deployer.deploy(project_id="my-proj")

        def first_index(*prefix: str) -> int:
            return next(
                i
                for i, c in enumerate(fresh_project.calls)
                if tuple(c.argv[: len(prefix)]) == prefix
            )

        order = [
            first_index("gcloud", "config"),
            first_index("gcloud", "services", "enable"),
            first_index("gcloud", "container", "clusters", "describe"),
            first_index("gcloud", "container", "clusters", "get-credentials"),
            first_index("gcloud", "auth", "configure-docker"),
            first_index("docker", "push"),
            first_index("kubectl", "create", "namespace"),
            first_index("kubectl", "rollout"),
            first_index("kubectl", "get", "svc"),
        ]
        assert order == sorted(order)

    def test_missing_env_file_stops_before_cloud_calls(
        self, deployer: GkeDeployer, runner: ScriptedRunner
    ) -> None:
        with pytest.raises(PrerequisiteError):
            deployer.deploy(project_id="my-proj")

        assert runner.calls == []

    def test_second_run_skips_cluster_creation(
        self, deployer: GkeDeployer, runner: ScriptedRunner, env_file: Path
    ) -> None:
        runner.on(
            ("kubectl", "create", "namespace"),
            ok(),
            fail('namespaces "techypark" already exists'),
        )
        runner.on(("kubectl", "get", "svc"), ok("1.1.1.1"))

        deployer.deploy(project_id="my-proj")
        deployer.deploy(project_id="my-proj")

        assert runner.calls_matching("gcloud", "container", "clusters", "create") == []
        assert len(runner.calls_matching("kubectl", "create", "namespace")) == 2

    def test_first_failure_aborts_remaining_stages(
        self, deployer: GkeDeployer, runner: ScriptedRunner, env_file: Path
    ) -> None:
        runner.on(("docker", "build"), fail(returncode=17))

        with pytest.raises(CommandFailedError) as exc_info:
            deployer.deploy(project_id="my-proj")

        assert exc_info.value.exit_code == 17
        assert runner.calls_matching("docker", "push") == []
        assert runner.calls_matching("kubectl") == []

    def test_prompts_for_project_when_missing(
        self,
        deployer: GkeDeployer,
        runner: ScriptedRunner,
        mock_console: MagicMock,
        env_file: Path,
    ) -> None:
        mock_console.prompt.return_value = " prompted-proj "
        runner.on(("kubectl", "get", "svc"), ok("1.1.1.1"))

        deployer.deploy()

        mock_console.prompt.assert_called_once()
        assert runner.calls[0].argv[-1] == "prompted-proj"

    def test_empty_project_is_rejected(
        self,
        deployer: GkeDeployer,
        runner: ScriptedRunner,
        mock_console: MagicMock,
        env_file: Path,
    ) -> None:
        mock_console.prompt.return_value = ""

        with pytest.raises(DeploymentError):
            deployer.deploy()

        assert runner.calls == []


class TestTeardown:
    def test_deletes_namespace_only_by_default(
        self, deployer: GkeDeployer, runner: ScriptedRunner
    ) -> None:
        deployer.teardown(force=True)

        (delete,) = runner.calls
        assert delete.argv[:4] == ["kubectl", "delete", "namespace", "techypark"]

    def test_deletes_cluster_when_requested(
        self, deployer: GkeDeployer, runner: ScriptedRunner
    ) -> None:
        deployer.teardown(delete_cluster=True, force=True)

        assert len(runner.calls_matching("gcloud", "container", "clusters", "delete")) == 1

    def test_declined_confirmation_does_nothing(
        self, deployer: GkeDeployer, runner: ScriptedRunner, mock_console: MagicMock
    ) -> None:
        mock_console.confirm_action.return_value = False

        deployer.teardown(delete_cluster=True)

        assert runner.calls == []

    def test_confirmation_warns_about_data_loss(
        self, deployer: GkeDeployer, mock_console: MagicMock
    ) -> None:
        deployer.teardown()

        kwargs = mock_console.confirm_action.call_args.kwargs
        assert "data" in kwargs["extra_warning"]
        assert kwargs["force"] is False


class TestRenderManifests:
    @pytest.mark.parametrize("project_id", ["", "   "])
    def test_blank_project_is_rejected(
        self, deployer: GkeDeployer, project_id: str
    ) -> None:
        with pytest.raises(DeploymentError, match="project ID"):
            deployer.render_manifests(project_id)


class TestShowStatus:
    def test_prints_tables(self, deployer: GkeDeployer, mock_console: MagicMock) -> None:
        deployer.commands.kubectl = MagicMock()
        deployer.commands.kubectl.get_deployments.return_value = [
            DeploymentStatus(name="backend", desired=1, ready=1, updated=1)
        ]
        deployer.commands.kubectl.get_services.return_value = [
            ServiceStatus(name="frontend-service", type="LoadBalancer", cluster_ip="10.0.0.1")
        ]

        deployer.show_status()

        assert mock_console.print.call_count == 2
        mock_console.warn.assert_not_called()

    def test_warns_when_namespace_empty(
        self, deployer: GkeDeployer, mock_console: MagicMock
    ) -> None:
        deployer.show_status()

        mock_console.warn.assert_called_once()
