from __future__ import annotations

import io
import stat
from collections.abc import Callable
from pathlib import Path

import pytest


class RecordingSink:
    """Collects every line written by the executor."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def write(self, line: str) -> None:
        self.lines.append(line)


class FakeProcess:
    """Stand-in for subprocess.Popen with canned output."""

    def __init__(self, argv: list[str], output: str, returncode: int, stderr: str, text: bool) -> None:
        self.args = argv
        self.pid = 4242
        self.stdout: io.IOBase = io.StringIO(output) if text else io.BytesIO(output.encode())
        self.returncode: int | None = None
        self.killed = False
        self._stderr = stderr
        self._final = returncode

    def poll(self) -> int | None:
        return self.returncode

    def wait(self, timeout: float | None = None) -> int:
        self.returncode = self._final
        return self.returncode

    def kill(self) -> None:
        self.killed = True
        self._final = -9

    def communicate(self, input: str | None = None, timeout: float | None = None) -> tuple[str | bytes, str]:
        out = self.stdout.read()
        self.stdout.close()
        self.wait()
        return out, self._stderr

    def __enter__(self) -> FakeProcess:
        return self

    def __exit__(self, *exc: object) -> None:
        self.stdout.close()
        self.wait()


class FakeLauncher:
    """Records launch attempts and hands out FakeProcess instances."""

    def __init__(self, output: str = "", returncode: int = 0, stderr: str = "", error: OSError | None = None) -> None:
        self.output = output
        self.returncode = returncode
        self.stderr = stderr
        self.error = error
        self.calls: list[list[str]] = []
        self.kwargs: list[dict[str, object]] = []
        self.processes: list[FakeProcess] = []

    def __call__(self, argv: list[str], **kwargs: object) -> FakeProcess:
        self.calls.append(list(argv))
        self.kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        proc = FakeProcess(list(argv), self.output, self.returncode, self.stderr, bool(kwargs.get("text")))
        self.processes.append(proc)
        return proc

    @property
    def launch_count(self) -> int:
        return len(self.calls)


FAKE_PODMAN_SCRIPT = """#!/bin/sh
case "$1" in
  --version)
    echo "podman version 4.3.1"
    ;;
  inspect)
    echo "  sha256:0123abcd  "
    ;;
  fail)
    echo "about to fail"
    echo "boom" >&2
    exit 3
    ;;
  lines)
    printf 'a\\nb\\n\\nc'
    ;;
  progress)
    printf '10%%\\r100%%\\nok\\r\\n'
    ;;
  *)
    echo "args: $*"
    ;;
esac
"""


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def make_launcher() -> Callable[..., FakeLauncher]:
    """Factory for fake launchers: make_launcher(output="a\\n", returncode=0)."""
    return FakeLauncher


@pytest.fixture
def fake_podman(tmp_path: Path) -> Path:
    """A shell script standing in for the podman binary."""
    script = tmp_path / "bin" / "podman"
    script.parent.mkdir()
    script.write_text(FAKE_PODMAN_SCRIPT)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script
