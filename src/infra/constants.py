"""Deployment constants and paths.

This module centralizes the fixed identifiers used throughout the GKE
deployment: required tools and APIs, in-cluster dependency images, service
names and container ports.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from src.infra.config import DeploymentConfig


@dataclass(frozen=True)
class DeploymentConstants:
    """Fixed identifiers for the TechyPark deployment.

    Values here never change between runs. Anything a user may want to
    tune lives in DeploymentConfig instead.
    """

    # External tools that must be resolvable on PATH
    REQUIRED_TOOLS: tuple[str, ...] = ("gcloud", "docker", "kubectl")

    # Cloud APIs enabled before cluster creation
    REQUIRED_APIS: tuple[str, ...] = (
        "container.googleapis.com",
        "artifactregistry.googleapis.com",
    )

    # In-cluster dependency images
    POSTGRES_IMAGE: str = "postgres:15-alpine"
    REDIS_IMAGE: str = "redis:7-alpine"

    # Deployment names (also used as the `app` label)
    POSTGRES_NAME: str = "postgres"
    REDIS_NAME: str = "redis"
    BACKEND_NAME: str = "backend"
    FRONTEND_NAME: str = "frontend"

    # Service names
    POSTGRES_SERVICE: str = "postgres-service"
    REDIS_SERVICE: str = "redis-service"
    BACKEND_SERVICE: str = "backend-service"
    FRONTEND_SERVICE: str = "frontend-service"

    # Container ports
    POSTGRES_PORT: int = 5432
    REDIS_PORT: int = 6379
    BACKEND_PORT: int = 3001
    FRONTEND_PORT: int = 3000
    SERVICE_PORT: int = 80

    # Secret keys the application expects, checked against the env file
    DATABASE_URL_KEY: str = "DATABASE_URL"
    REDIS_URL_KEY: str = "REDIS_URL"

    # Load balancer address lookup template
    EXTERNAL_IP_TEMPLATE: str = "{{range .status.loadBalancer.ingress}}{{.ip}}{{end}}"

    @property
    def rollout_order(self) -> tuple[str, ...]:
        """Deployments to wait on, dependencies first."""
        return (
            self.POSTGRES_NAME,
            self.REDIS_NAME,
            self.BACKEND_NAME,
            self.FRONTEND_NAME,
        )


class DeploymentPaths:
    """Path resolver for the application being deployed.

    All paths are derived from the project root (the directory holding the
    env file and the frontend/backend build contexts).
    """

    def __init__(self, project_root: Path, config: DeploymentConfig) -> None:
        """Initialize deployment paths.

        Args:
            project_root: Path to the application project root
            config: Deployment configuration naming the relative locations
        """
        self._project_root = project_root
        self.env_file = project_root / config.env_file
        self.frontend_dir = project_root / config.frontend_dir
        self.backend_dir = project_root / config.backend_dir

    @property
    def project_root(self) -> Path:
        """Get path to project root."""
        return self._project_root

