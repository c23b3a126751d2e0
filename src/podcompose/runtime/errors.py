"""Error hierarchy for runtime resolution and command execution."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from podcompose.runtime.executor import CommandResult


class PodmanError(Exception):
    """Base class for every error raised by podcompose."""


class BinaryNotFoundError(PodmanError):
    """The configured runtime binary path does not exist or cannot be accessed."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        message = f"Binary {path} has not been found"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path


class InvalidBinaryError(PodmanError):
    """The configured runtime binary path exists but is not a regular file."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Binary {path} is not a regular file")
        self.path = path


class LaunchError(PodmanError):
    """A streamed command could not be started."""

    def __init__(self, command: str, cause: OSError) -> None:
        super().__init__(f"Failed to launch '{command}': {cause}")
        self.command = command
        self.cause = cause


class ExitError(PodmanError):
    """A streamed command exited with a non-zero status."""

    def __init__(self, command: str, result: CommandResult) -> None:
        super().__init__(f"Command '{command}' exited with status {result.returncode}")
        self.command = command
        self.result = result

    @property
    def returncode(self) -> int | None:
        return self.result.returncode


class ExecutionError(PodmanError):
    """A buffered command failed to launch, exited non-zero, or its output could not be read."""

    def __init__(self, command: str, returncode: int | None = None, stderr: str = "", cause: Exception | None = None) -> None:
        if cause is not None:
            message = f"Command '{command}' failed: {cause}"
        else:
            message = f"Command '{command}' exited with status {returncode}"
            if stderr.strip():
                message = f"{message}: {stderr.strip()}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        self.cause = cause


class ParseError(PodmanError):
    """Runtime output did not match the expected format."""

    def __init__(self, message: str, output: str) -> None:
        super().__init__(message)
        self.output = output


class ConfigError(PodmanError):
    """Settings could not be loaded or validated."""
