"""PodmanClient: typed podman operations on top of the command executor."""

from __future__ import annotations

from collections.abc import Sequence

from podcompose.infrastructure.config import DEFAULT_PROJECT_LABEL, Settings, load_settings
from podcompose.infrastructure.logger import logger
from podcompose.project.types import Container, Image, Pod
from podcompose.runtime.commands import (
    ContainerStop,
    GetVersion,
    ImageGetId,
    ImagePull,
    ImagePush,
    Logs,
    Operation,
    PodCreate,
    PodRemove,
    Ps,
)
from podcompose.runtime.executor import CommandExecutor, CommandResult, Launcher, LogSink
from podcompose.runtime.locator import DEFAULT_BINARY, ContainerRuntime, PodmanRuntime


class PodmanClient:
    """Drives the podman CLI.

    The binary is resolved once, at construction; a missing or non-regular
    path fails here rather than at the first command. Errors from the
    executor are passed through untouched.
    """

    def __init__(
        self,
        path: str = DEFAULT_BINARY,
        dry_run: bool = False,
        sink: LogSink | None = None,
        launcher: Launcher | None = None,
        project_label: str = DEFAULT_PROJECT_LABEL,
    ) -> None:
        self._runtime: ContainerRuntime = PodmanRuntime(path)
        self._executor = CommandExecutor(self._runtime.bin, dry_run=dry_run, sink=sink, launcher=launcher)
        self._project_label = project_label

    @classmethod
    def from_config(
        cls,
        settings: Settings | None = None,
        sink: LogSink | None = None,
        launcher: Launcher | None = None,
    ) -> PodmanClient:
        """Build a client from resolved settings (defaults, settings file, env)."""
        settings = settings or load_settings()
        logger.debug("Creating podman client", path=settings.podman_path, dry_run=settings.dry_run)
        return cls(
            settings.podman_path,
            dry_run=settings.dry_run,
            sink=sink,
            launcher=launcher,
            project_label=settings.project_label,
        )

    @property
    def path(self) -> str:
        return self._runtime.bin

    @property
    def dry_run(self) -> bool:
        return self._executor.dry_run

    @property
    def executor(self) -> CommandExecutor:
        return self._executor

    def run(self, operation: Operation, post_delay: float = 0.0) -> str | CommandResult | None:
        """Execute an operation in the mode it declares."""
        if operation.mode == "buffered":
            return self._query(operation)
        return self._stream(operation, post_delay=post_delay)

    def _query(self, operation: Operation) -> str:
        return operation.parse(self._executor.capture_output(operation.args()))

    def _stream(self, operation: Operation, post_delay: float = 0.0) -> CommandResult | None:
        return self._executor.run_streamed(operation.args(), wait=operation.wait, post_delay=post_delay)

    def get_version(self) -> str:
        return self._query(GetVersion())

    def pod_create(self, pod: Pod, post_delay: float = 0.0) -> CommandResult | None:
        return self._stream(PodCreate(pod), post_delay=post_delay)

    def pod_remove(self, pod: Pod) -> CommandResult | None:
        return self._stream(PodRemove(pod))

    def image_get_id(self, image: Image) -> str:
        return self._query(ImageGetId(image))

    def image_pull(self, image: Image) -> CommandResult | None:
        return self._stream(ImagePull(image))

    def image_push(self, image: Image) -> CommandResult | None:
        return self._stream(ImagePush(image))

    def container_stop(self, container: Container, args: Sequence[str] = ()) -> CommandResult | None:
        return self._stream(ContainerStop(container, tuple(args)))

    def logs(
        self,
        container: Container,
        follow: bool = False,
        timestamps: bool = False,
        tail: str = "",
    ) -> CommandResult | None:
        return self._stream(Logs(container, follow=follow, timestamps=timestamps, tail=tail))

    def ps(self, all: bool = False, quiet: bool = False, project_name: str = "") -> CommandResult | None:
        return self._stream(Ps(all=all, quiet=quiet, project_name=project_name, label=self._project_label))
