"""GKE deployment commands.

This module provides commands for deploying, inspecting and tearing down
the minimal TechyPark deployment on Google Kubernetes Engine.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from src.cli.context import get_cli_context
from src.cli.deployment.gke_deployer.errors import DeploymentError
from src.cli.shared.console import console, with_error_handling
from src.infra.config import DeploymentConfig, load_deploy_config

if TYPE_CHECKING:
    from src.cli.deployment.gke_deployer.deployer import GkeDeployer


# ---------------------------------------------------------------------------
# Shared Options
# ---------------------------------------------------------------------------

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML file with a top-level 'deploy:' section",
        exists=True,
        dir_okay=False,
    ),
]
NamespaceOption = Annotated[
    str | None,
    typer.Option("--namespace", "-n", help="Kubernetes namespace"),
]
ProjectRootOption = Annotated[
    Path | None,
    typer.Option(
        "--project-root",
        help="Directory holding .env, frontend/ and backend/ (default: cwd)",
        file_okay=False,
    ),
]


# ---------------------------------------------------------------------------
# Deployer Factory
# ---------------------------------------------------------------------------


def _load_config(config_file: Path | None, **overrides: object) -> DeploymentConfig:
    """Load the config file and apply command-line overrides."""
    try:
        return load_deploy_config(config_file).with_overrides(**overrides)
    except (OSError, ValueError) as e:
        raise DeploymentError("Invalid deployment configuration", details=str(e)) from e


def _get_deployer(
    ctx: typer.Context,
    config: DeploymentConfig,
    project_root: Path | None = None,
) -> "GkeDeployer":
    """Get a GKE deployer wired to the current CLI context."""
    from src.cli.deployment.gke_deployer.deployer import GkeDeployer

    cli_ctx = get_cli_context(ctx, project_root)
    return GkeDeployer(
        cli_ctx.console,
        cli_ctx.project_root,
        config,
        commands=cli_ctx.commands,
    )


# ---------------------------------------------------------------------------
# Typer App
# ---------------------------------------------------------------------------

gke_app = typer.Typer(
    name="gke",
    help="Google Kubernetes Engine deployment commands.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@gke_app.command()
@with_error_handling
def up(
    ctx: typer.Context,
    project_id: Annotated[
        str | None,
        typer.Option(
            "--project-id",
            "-p",
            help="GCP project ID (prompted for when omitted)",
        ),
    ] = None,
    project_root: ProjectRootOption = None,
    config_file: ConfigOption = None,
    region: Annotated[
        str | None,
        typer.Option("--region", help="GKE cluster region"),
    ] = None,
    cluster_name: Annotated[
        str | None,
        typer.Option("--cluster-name", help="GKE cluster name"),
    ] = None,
    namespace: NamespaceOption = None,
    rollout_timeout: Annotated[
        str | None,
        typer.Option(
            "--rollout-timeout",
            help="Per-deployment rollout timeout (e.g., 10m)",
        ),
    ] = None,
    ip_timeout: Annotated[
        float | None,
        typer.Option(
            "--ip-timeout",
            help="Seconds to wait for the frontend external IP",
        ),
    ] = None,
) -> None:
    """Deploy TechyPark to a minimal GKE cluster.

    This command:
    - Checks gcloud, docker, kubectl and the .env file
    - Sets the GCP project and enables required APIs
    - Creates the GKE cluster if it doesn't exist
    - Builds and pushes the frontend and backend images
    - Applies the secret, PostgreSQL, Redis, backend and frontend resources
    - Waits for rollouts and the frontend's public IP

    Examples:
        techypark-cli gke up
        techypark-cli gke up -p my-project
        techypark-cli gke up -p my-project --config deploy.yaml
    """
    config = _load_config(
        config_file,
        region=region,
        cluster_name=cluster_name,
        namespace=namespace,
        rollout_timeout=rollout_timeout,
        external_ip_timeout=ip_timeout,
    )
    deployer = _get_deployer(ctx, config, project_root)
    deployer.deploy(project_id=project_id)


@gke_app.command()
@with_error_handling
def down(
    ctx: typer.Context,
    namespace: NamespaceOption = None,
    config_file: ConfigOption = None,
    delete_cluster: Annotated[
        bool,
        typer.Option(
            "--delete-cluster",
            help="Also delete the GKE cluster",
        ),
    ] = False,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Skip confirmation prompt",
        ),
    ] = False,
) -> None:
    """Remove the TechyPark deployment.

    Deletes the namespace and everything in it. With --delete-cluster the
    GKE cluster is deleted as well.

    Examples:
        techypark-cli gke down
        techypark-cli gke down --delete-cluster -f
    """
    config = _load_config(config_file, namespace=namespace)
    deployer = _get_deployer(ctx, config)
    deployer.teardown(delete_cluster=delete_cluster, force=force)


@gke_app.command()
@with_error_handling
def status(
    ctx: typer.Context,
    namespace: NamespaceOption = None,
    config_file: ConfigOption = None,
) -> None:
    """Show deployments and services of the TechyPark deployment.

    Examples:
        techypark-cli gke status
        techypark-cli gke status -n my-namespace
    """
    console.print_header("TechyPark Deployment Status")

    config = _load_config(config_file, namespace=namespace)
    deployer = _get_deployer(ctx, config)
    deployer.show_status()


@gke_app.command()
@with_error_handling
def manifests(
    ctx: typer.Context,
    project_id: Annotated[
        str,
        typer.Option(
            "--project-id",
            "-p",
            help="GCP project ID used in image references",
        ),
    ],
    config_file: ConfigOption = None,
) -> None:
    """Print the Kubernetes manifest bundle without applying it.

    Examples:
        techypark-cli gke manifests -p my-project > bundle.yaml
    """
    config = _load_config(config_file)
    deployer = _get_deployer(ctx, config)
    typer.echo(deployer.render_manifests(project_id), nl=False)
