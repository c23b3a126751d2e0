"""Tests for the default log sink."""

from podcompose.infrastructure.logger import LoggerSink
from podcompose.runtime.executor import CommandExecutor


class StubLogger:
    def __init__(self):
        self.events: list[str] = []

    def info(self, event, **kw):
        self.events.append(event)


class TestLoggerSink:
    def test_forwards_lines(self):
        stub = StubLogger()
        sink = LoggerSink(stub)
        sink.write("podman ps")
        sink.write("")
        assert stub.events == ["podman ps", ""]

    def test_used_by_executor(self, make_launcher):
        stub = StubLogger()
        executor = CommandExecutor("podman", sink=LoggerSink(stub), launcher=make_launcher(output="one\n"))
        executor.run_streamed(["ps"])
        assert stub.events == ["podman ps", "one"]
