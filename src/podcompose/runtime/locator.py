"""Runtime binary resolution."""

from __future__ import annotations

import os
import stat
from typing import Protocol

from podcompose.runtime.errors import BinaryNotFoundError, InvalidBinaryError

DEFAULT_BINARY = "podman"


class ContainerRuntime(Protocol):
    """Anything that knows where its runtime binary lives."""

    @property
    def bin(self) -> str:
        """Path to the runtime binary (e.g. 'podman')."""
        ...


def resolve_binary(path_or_name: str = DEFAULT_BINARY) -> str:
    """Validate a runtime binary path and return it in absolute form.

    The bare name ``podman`` is returned unchanged and left for ``PATH``
    lookup at launch time. The check is advisory: nothing guarantees the
    file is still there, or executable, when a command is actually run.
    """
    if path_or_name == DEFAULT_BINARY:
        return path_or_name

    try:
        st = os.stat(path_or_name)
    except OSError as err:
        raise BinaryNotFoundError(path_or_name, err.strerror) from err

    if not stat.S_ISREG(st.st_mode):
        raise InvalidBinaryError(path_or_name)

    return os.path.abspath(path_or_name)


class PodmanRuntime:
    """Podman runtime with its binary resolved once at construction."""

    def __init__(self, path: str = DEFAULT_BINARY) -> None:
        self._bin = resolve_binary(path)

    @property
    def bin(self) -> str:
        return self._bin
