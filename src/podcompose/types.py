"""Barrel re-export of the public types."""

from podcompose.project.registry import ProjectRegistry
from podcompose.project.types import Container, Image, Pod, Service
from podcompose.runtime.client import PodmanClient
from podcompose.runtime.errors import (
    BinaryNotFoundError,
    ConfigError,
    ExecutionError,
    ExitError,
    InvalidBinaryError,
    LaunchError,
    ParseError,
    PodmanError,
)
from podcompose.runtime.executor import CommandExecutor, CommandResult, Invocation, LogSink

__all__ = [
    "BinaryNotFoundError",
    "CommandExecutor",
    "CommandResult",
    "ConfigError",
    "Container",
    "ExecutionError",
    "ExitError",
    "Image",
    "InvalidBinaryError",
    "Invocation",
    "LaunchError",
    "LogSink",
    "ParseError",
    "Pod",
    "PodmanClient",
    "PodmanError",
    "ProjectRegistry",
    "Service",
]
