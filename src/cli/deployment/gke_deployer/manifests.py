"""Kubernetes manifest bundle for the minimal deployment.

Builds the fixed set of resources applied to the cluster: PostgreSQL and
Redis running in-cluster, the backend behind a ClusterIP service and the
frontend behind a public LoadBalancer.
"""

from __future__ import annotations

from typing import Any

import yaml  # type: ignore[import-untyped]

from src.infra.constants import DeploymentConstants

from .image_builder import ImageRefs

Manifest = dict[str, Any]


class ManifestBuilder:
    """Renders the deployment's resource bundle.

    The bundle always holds the same resources in the same order:
    postgres service + deployment, redis service + deployment, backend
    deployment + service, frontend deployment + service.
    """

    def __init__(
        self,
        secret_name: str,
        constants: DeploymentConstants | None = None,
    ) -> None:
        """Initialize the manifest builder.

        Args:
            secret_name: Secret injected into postgres and backend containers
            constants: Optional deployment constants
        """
        self.secret_name = secret_name
        self.constants = constants or DeploymentConstants()

    def build(self, images: ImageRefs) -> list[Manifest]:
        """Build every resource in the bundle.

        Args:
            images: Registry references for the frontend and backend images

        Returns:
            Resource definitions in apply order
        """
        c = self.constants
        return [
            self._service(c.POSTGRES_SERVICE, c.POSTGRES_NAME, c.POSTGRES_PORT),
            self._deployment(
                c.POSTGRES_NAME, c.POSTGRES_IMAGE, c.POSTGRES_PORT, with_secret=True
            ),
            self._service(c.REDIS_SERVICE, c.REDIS_NAME, c.REDIS_PORT),
            self._deployment(c.REDIS_NAME, c.REDIS_IMAGE, c.REDIS_PORT),
            self._deployment(
                c.BACKEND_NAME, images.backend, c.BACKEND_PORT, with_secret=True
            ),
            self._service(
                c.BACKEND_SERVICE,
                c.BACKEND_NAME,
                c.SERVICE_PORT,
                target_port=c.BACKEND_PORT,
                service_type="ClusterIP",
            ),
            self._deployment(c.FRONTEND_NAME, images.frontend, c.FRONTEND_PORT),
            self._service(
                c.FRONTEND_SERVICE,
                c.FRONTEND_NAME,
                c.SERVICE_PORT,
                target_port=c.FRONTEND_PORT,
                service_type="LoadBalancer",
            ),
        ]

    def render(self, images: ImageRefs) -> str:
        """Render the bundle as multi-document YAML for `kubectl apply -f -`."""
        return yaml.safe_dump_all(self.build(images), sort_keys=False)

    # =========================================================================
    # Resource Builders
    # =========================================================================

    def _deployment(
        self,
        name: str,
        image: str,
        port: int,
        *,
        with_secret: bool = False,
    ) -> Manifest:
        container: Manifest = {
            "name": name,
            "image": image,
            "ports": [{"containerPort": port}],
        }
        if with_secret:
            container["envFrom"] = [{"secretRef": {"name": self.secret_name}}]

        labels = {"app": name}
        return {
            "apiVersion": "apps/v1",
            "kind": "Deployment",
            "metadata": {"name": name},
            "spec": {
                "replicas": 1,
                "selector": {"matchLabels": labels},
                "template": {
                    "metadata": {"labels": dict(labels)},
                    "spec": {"containers": [container]},
                },
            },
        }

    def _service(
        self,
        name: str,
        app: str,
        port: int,
        *,
        target_port: int | None = None,
        service_type: str | None = None,
    ) -> Manifest:
        port_spec: Manifest = {"port": port}
        if target_port is not None:
            port_spec = {"protocol": "TCP", "port": port, "targetPort": target_port}

        spec: Manifest = {}
        if service_type:
            spec["type"] = service_type
        spec["selector"] = {"app": app}
        spec["ports"] = [port_spec]

        return {
            "apiVersion": "v1",
            "kind": "Service",
            "metadata": {"name": name},
            "spec": spec,
        }
