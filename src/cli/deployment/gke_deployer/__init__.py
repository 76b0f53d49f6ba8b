"""GKE deployer package.

This package provides a modular approach to the minimal GKE deployment,
with each concern separated into its own module:

- prerequisites: Tool and secrets file checks
- project_setup: Active project and API enablement
- cluster: Idempotent cluster provisioning
- image_builder: Docker image build and push
- secret_manager: Namespace and secret application
- manifests: The Kubernetes resource bundle
- rollout: Rollout waits and external IP polling

The GkeDeployer class in deployer.py orchestrates these components to
provide the complete deployment workflow.

Usage:
    from src.cli.deployment.gke_deployer import GkeDeployer

    deployer = GkeDeployer(console, project_root)
    url = deployer.deploy(project_id="my-project")
"""

from .cluster import ClusterProvisioner
from .deployer import GkeDeployer
from .errors import (
    CommandFailedError,
    DeploymentError,
    PrerequisiteError,
    RolloutTimeoutError,
)
from .image_builder import ImageBuilder, ImageRefs
from .manifests import ManifestBuilder
from .prerequisites import PrerequisiteChecker
from .project_setup import ProjectConfigurator
from .rollout import RolloutMonitor
from .secret_manager import SecretManager

__all__ = [
    "GkeDeployer",
    "DeploymentError",
    "PrerequisiteError",
    "CommandFailedError",
    "RolloutTimeoutError",
    # Component classes for testing/extension
    "PrerequisiteChecker",
    "ProjectConfigurator",
    "ClusterProvisioner",
    "ImageBuilder",
    "ImageRefs",
    "SecretManager",
    "ManifestBuilder",
    "RolloutMonitor",
]
