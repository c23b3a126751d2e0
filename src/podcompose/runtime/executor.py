"""CommandExecutor: runs the runtime binary in buffered or streamed mode."""

from __future__ import annotations

import subprocess
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from podcompose.infrastructure.logger import LoggerSink, logger
from podcompose.runtime.errors import ExecutionError, ExitError, LaunchError


class LogSink(Protocol):
    """Line-oriented output channel for command lines and relayed output."""

    def write(self, line: str) -> None: ...


Launcher = Callable[..., Any]


@dataclass(frozen=True)
class Invocation:
    args: tuple[str, ...]
    wait: bool = True
    post_delay: float = 0.0  # seconds


@dataclass
class CommandResult:
    """Outcome of one streamed invocation."""

    invocation: Invocation
    process: subprocess.Popen[bytes]

    @property
    def returncode(self) -> int | None:
        """Exit status, or None if the process was not waited for and is still running."""
        return self.process.returncode


class CommandExecutor:
    """Launches the runtime binary and relays its output to a sink.

    Every invocation writes its full command line to the sink before anything
    else happens, dry-run or not. Streamed invocations merge stderr into the
    relayed stdout; buffered invocations keep stderr apart and only surface it
    through ExecutionError.
    """

    def __init__(
        self,
        binary: str,
        dry_run: bool = False,
        sink: LogSink | None = None,
        launcher: Launcher | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._binary = binary
        self._dry_run = dry_run
        self._sink = sink if sink is not None else LoggerSink()
        self._launcher = launcher or subprocess.Popen
        self._sleep = sleep

    @property
    def binary(self) -> str:
        return self._binary

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def command_line(self, args: Sequence[str]) -> str:
        return " ".join([self._binary, *args])

    def capture_output(self, args: Sequence[str]) -> str:
        """Run to completion and return the whole of stdout."""
        command = self.command_line(args)
        self._sink.write(command)

        try:
            proc = self._launcher(
                [self._binary, *args],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as err:
            raise ExecutionError(command, cause=err) from err

        with proc:
            try:
                stdout, stderr = proc.communicate()
            except OSError as err:
                proc.kill()
                raise ExecutionError(command, cause=err) from err

        if proc.returncode != 0:
            logger.debug("Command failed", command=command, returncode=proc.returncode)
            raise ExecutionError(command, returncode=proc.returncode, stderr=stderr or "")

        return stdout

    def run_streamed(self, args: Sequence[str], wait: bool = True, post_delay: float = 0.0) -> CommandResult | None:
        """Run a command, relaying each output line to the sink as it arrives.

        Returns None in dry-run mode, where nothing is launched. With ``wait``
        the call blocks until the process exits and raises ExitError on a
        non-zero status. ``post_delay`` is a fixed pause after that, meant to
        let asynchronous runtime state (pod readiness, say) settle; it does
        not poll for anything.
        """
        invocation = Invocation(args=tuple(args), wait=wait, post_delay=post_delay)
        command = self.command_line(invocation.args)
        self._sink.write(command)

        if self._dry_run:
            logger.debug("Dry run, command not executed", command=command)
            return None

        try:
            proc = self._launcher(
                [self._binary, *invocation.args],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
            )
        except OSError as err:
            raise LaunchError(command, err) from err

        logger.debug("Process started", command=command, pid=proc.pid)

        try:
            self._relay(proc)
        except BaseException:
            proc.kill()
            proc.wait()
            raise
        finally:
            if proc.stdout is not None:
                proc.stdout.close()

        result = CommandResult(invocation=invocation, process=proc)

        if invocation.wait:
            returncode = proc.wait()
            logger.debug("Process exited", command=command, returncode=returncode)
            if returncode != 0:
                raise ExitError(command, result)

        if invocation.post_delay > 0:
            self._sleep(invocation.post_delay)

        return result

    def _relay(self, proc: subprocess.Popen[bytes]) -> None:
        # Split on \n only; a lone \r stays inside its line.
        assert proc.stdout is not None
        for raw_line in proc.stdout:
            line = raw_line.decode("utf-8", errors="replace")
            self._sink.write(line.removesuffix("\n").removesuffix("\r"))
