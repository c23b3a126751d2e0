"""Typed podman operations and their argument builders.

Argument order follows the podman CLI exactly; each operation owns the one
place its vector is assembled.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Literal

from podcompose.infrastructure.config import DEFAULT_PROJECT_LABEL
from podcompose.project.types import Container, Image, Pod
from podcompose.runtime.errors import ParseError

Mode = Literal["buffered", "streamed"]

VERSION_PREFIX = "podman version "


class Operation(ABC):
    """Base class for podman operations."""

    mode: ClassVar[Mode] = "streamed"
    wait: ClassVar[bool] = True

    @abstractmethod
    def args(self) -> list[str]: ...

    def parse(self, output: str) -> str:
        """Turn buffered output into the operation's result. Identity by default."""
        return output


@dataclass(frozen=True)
class GetVersion(Operation):
    mode: ClassVar[Mode] = "buffered"

    def args(self) -> list[str]:
        return ["--version"]

    @staticmethod
    def parse(output: str) -> str:
        """Return everything after the version prefix, untrimmed.

        ``"podman version 4.3.1\\n"`` gives ``"4.3.1\\n"``; the trailing
        newline is kept.
        """
        _, sep, version = output.partition(VERSION_PREFIX)
        if not sep:
            raise ParseError(f"Unexpected version output: {output!r}", output)
        return version


@dataclass(frozen=True)
class PodCreate(Operation):
    pod: Pod

    def args(self) -> list[str]:
        return ["pod", "create", f"--name={self.pod.name}", f"--share={self.pod.share}"]


@dataclass(frozen=True)
class PodRemove(Operation):
    pod: Pod

    def args(self) -> list[str]:
        return ["pod", "rm", self.pod.name]


@dataclass(frozen=True)
class ImageGetId(Operation):
    mode: ClassVar[Mode] = "buffered"

    image: Image

    def args(self) -> list[str]:
        return ["inspect", "-t", "image", "-f", "{{.Id}}", self.image.name]

    @staticmethod
    def parse(output: str) -> str:
        return output.strip()


@dataclass(frozen=True)
class ImagePull(Operation):
    image: Image

    def args(self) -> list[str]:
        return ["pull", self.image.name]


@dataclass(frozen=True)
class ImagePush(Operation):
    image: Image

    def args(self) -> list[str]:
        return ["push", self.image.name]


@dataclass(frozen=True)
class ContainerStop(Operation):
    container: Container
    extra_args: tuple[str, ...] = ()

    def args(self) -> list[str]:
        return ["stop", *self.extra_args, self.container.name]


@dataclass(frozen=True)
class Logs(Operation):
    container: Container
    follow: bool = False
    timestamps: bool = False
    tail: str = ""

    def args(self) -> list[str]:
        cmd = ["logs"]
        if self.follow:
            cmd.append("-f")
        if self.timestamps:
            cmd.append("-t")
        if self.tail and self.tail != "all":
            cmd.extend(["--tail", self.tail])
        cmd.append(self.container.name)
        return cmd


@dataclass(frozen=True)
class Ps(Operation):
    all: bool = False
    quiet: bool = False
    project_name: str = ""
    label: str = DEFAULT_PROJECT_LABEL

    def args(self) -> list[str]:
        cmd = ["ps"]
        if self.all:
            cmd.append("-a")
        if self.quiet:
            cmd.extend(["--format", "{{.ID}}"])
        if self.project_name:
            cmd.extend(["--filter", f"label={self.label}={self.project_name}"])
        return cmd
