"""Deployment configuration model and loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

CONFIG_ROOT_KEY = "deploy"


class DeploymentConfig(BaseModel):
    """Settings for a single GKE deployment run.

    Defaults reproduce the minimal TechyPark deployment: a small
    autoscaling cluster in us-central1 with images pushed to gcr.io.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    project_id: str | None = None
    region: str = "us-central1"
    cluster_name: str = "techypark-cluster-min"
    namespace: str = "techypark"
    secret_name: str = "techypark-secrets"

    # Registry
    registry_host: str = "gcr.io"
    image_tag: str = "latest"

    # Cluster sizing
    machine_type: str = "e2-small"
    disk_type: str = "pd-standard"
    disk_size: str = "30GB"
    num_nodes: int = Field(default=1, ge=1)
    min_nodes: int = Field(default=1, ge=0)
    max_nodes: int = Field(default=2, ge=1)

    # Waits
    rollout_timeout: str = "10m"
    poll_interval: float = Field(default=10.0, gt=0)
    external_ip_timeout: float | None = Field(default=600.0, gt=0)

    # Project layout, relative to the project root
    env_file: str = ".env"
    frontend_dir: str = "frontend"
    backend_dir: str = "backend"

    @model_validator(mode="after")
    def _check_node_range(self) -> DeploymentConfig:
        if self.min_nodes > self.max_nodes:
            raise ValueError(
                f"min_nodes ({self.min_nodes}) exceeds max_nodes ({self.max_nodes})"
            )
        return self

    def image_ref(self, name: str, project_id: str | None = None) -> str:
        """Build the fully qualified registry reference for an image.

        Args:
            name: Image name (e.g., "frontend")
            project_id: Project to use instead of the configured one

        Returns:
            Reference like "gcr.io/my-project/frontend:latest"
        """
        project = project_id or self.project_id
        if not project:
            raise ValueError("A project ID is required to build image references")
        return f"{self.registry_host}/{project}/{name}:{self.image_tag}"

    def with_overrides(self, **overrides: Any) -> DeploymentConfig:
        """Return a copy with non-None overrides applied and re-validated."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if not values:
            return self
        return DeploymentConfig.model_validate({**self.model_dump(), **values})


def load_deploy_config(file_path: Path | None = None) -> DeploymentConfig:
    """Load deployment configuration from an optional YAML file.

    The file must contain a top-level ``deploy:`` mapping. Environment
    variable references (``$VAR`` / ``${VAR}``) in the file are expanded
    before parsing.

    Args:
        file_path: Path to the YAML file, or None for built-in defaults

    Returns:
        Validated DeploymentConfig

    Raises:
        FileNotFoundError: If file_path is given but doesn't exist
        ValueError: If the YAML structure or values are invalid
    """
    if file_path is None:
        return DeploymentConfig()

    with open(file_path) as f:
        content = os.path.expandvars(f.read())

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {file_path}: {e}") from e

    if not isinstance(data, dict) or CONFIG_ROOT_KEY not in data:
        raise ValueError(
            f"Invalid config file {file_path}: missing top-level '{CONFIG_ROOT_KEY}' key"
        )

    section = data[CONFIG_ROOT_KEY] or {}
    try:
        config = DeploymentConfig.model_validate(section)
    except ValidationError as e:
        raise ValueError(f"Invalid deployment config in {file_path}:\n{e}") from e

    logger.debug("Loaded deployment config from {}", file_path)
    return config
