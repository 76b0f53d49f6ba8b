"""Deployment module for the TechyPark GKE environment.

This package provides:
- GkeDeployer: Minimal GKE deployment with in-cluster PostgreSQL and Redis

The deployer follows the BaseDeployer interface (deploy, teardown,
show_status).

The package is organized into subpackages for modularity:
- shell_commands: Abstractions for gcloud, docker and kubectl execution
- gke_deployer: Components for each stage of the GKE deployment
"""

from .gke_deployer import DeploymentError, GkeDeployer

__all__ = ["GkeDeployer", "DeploymentError"]
