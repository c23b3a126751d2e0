"""In-memory registry of the pods, services and containers of one project."""

from __future__ import annotations

from pathlib import Path

from podcompose.infrastructure.logger import logger
from podcompose.project.types import Container, Pod, Service


class ProjectRegistry:
    """Tracks the entities a compose session knows about, keyed by name.

    Nothing here is persisted or checked against the runtime. After any
    change made outside this process the registry may be stale; podman
    stays the source of truth.
    """

    def __init__(self, project_name: str, directory: str | Path | None = None, global_args: list[str] | None = None) -> None:
        self.project_name = project_name
        self.directory = Path(directory) if directory is not None else Path.cwd()
        self.global_args: list[str] = list(global_args or [])
        self._pods: dict[str, Pod] = {}
        self._services: dict[str, Service] = {}
        self._containers: dict[str, Container] = {}

    # Pods

    def add_pod(self, pod: Pod) -> Pod:
        self._pods[pod.name] = pod
        logger.debug("Pod registered", project=self.project_name, pod=pod.name)
        return pod

    def get_pod(self, name: str) -> Pod | None:
        return self._pods.get(name)

    def remove_pod(self, name: str) -> Pod | None:
        return self._pods.pop(name, None)

    def pods(self) -> list[Pod]:
        return list(self._pods.values())

    # Services

    def add_service(self, service: Service) -> Service:
        self._services[service.name] = service
        return service

    def get_service(self, name: str) -> Service | None:
        return self._services.get(name)

    def services(self) -> list[Service]:
        return list(self._services.values())

    # Containers

    def add_container(self, container: Container) -> Container:
        """Register a container, pointing it at the registry's own Service.

        A service not seen before is registered as given. The returned
        container may be a copy of the argument.
        """
        if container.service is not None:
            existing = self._services.get(container.service.name)
            if existing is None:
                self.add_service(container.service)
            elif existing is not container.service:
                container = container.model_copy(update={"service": existing})
        self._containers[container.name] = container
        logger.debug(
            "Container registered",
            project=self.project_name,
            container=container.name,
            service=container.service.name if container.service else None,
        )
        return container

    def get_container(self, name: str) -> Container | None:
        return self._containers.get(name)

    def remove_container(self, name: str) -> Container | None:
        return self._containers.pop(name, None)

    def containers(self) -> list[Container]:
        return list(self._containers.values())

    def containers_for_service(self, service: Service | str) -> list[Container]:
        """Containers labelled with a service, matched by service name."""
        name = service if isinstance(service, str) else service.name
        return [c for c in self._containers.values() if c.service is not None and c.service.name == name]
