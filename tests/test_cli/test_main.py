"""Tests for the podcompose command line."""

import pytest

from podcompose.__main__ import COMMANDS, build_parser, main
from podcompose.infrastructure.config import ENV_KEYS
from podcompose.runtime.client import PodmanClient


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def _client(launcher, sink, **kwargs):
    return PodmanClient(launcher=launcher, sink=sink, **kwargs)


class TestParser:
    def test_every_subcommand_has_a_handler(self):
        parser = build_parser()
        subparsers = next(a for a in parser._actions if a.dest == "command")
        assert set(subparsers.choices) == set(COMMANDS)

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    def test_ps_with_project(self, make_launcher, sink):
        launcher = make_launcher()
        assert main(["--project", "shop", "ps", "-a", "-q"], client=_client(launcher, sink)) == 0
        assert launcher.calls[0][1:] == [
            "ps",
            "-a",
            "--format",
            "{{.ID}}",
            "--filter",
            "label=io.podman.compose.project=shop",
        ]

    def test_project_from_environment(self, make_launcher, sink, monkeypatch):
        monkeypatch.setenv("PODCOMPOSE_PROJECT", "envshop")
        launcher = make_launcher()
        main(["ps"], client=_client(launcher, sink))
        assert launcher.calls[0][-1] == "label=io.podman.compose.project=envshop"

    def test_version(self, make_launcher, sink, capsys):
        launcher = make_launcher(output="podman version 5.0.2\n")
        assert main(["version"], client=_client(launcher, sink)) == 0
        assert capsys.readouterr().out == "5.0.2\n"

    def test_pod_create(self, make_launcher, sink):
        launcher = make_launcher()
        main(["pod-create", "demo", "--share", "net"], client=_client(launcher, sink))
        assert launcher.calls[0][1:] == ["pod", "create", "--name=demo", "--share=net"]

    def test_stop_with_timeout(self, make_launcher, sink):
        launcher = make_launcher()
        main(["stop", "web", "-t", "5"], client=_client(launcher, sink))
        assert launcher.calls[0][1:] == ["stop", "-t", "5", "web"]

    def test_logs_defaults_to_all(self, make_launcher, sink):
        launcher = make_launcher()
        main(["logs", "web", "-f"], client=_client(launcher, sink))
        assert launcher.calls[0][1:] == ["logs", "-f", "web"]

    def test_image_id(self, make_launcher, sink, capsys):
        launcher = make_launcher(output="sha256:abc\n")
        main(["image-id", "alpine"], client=_client(launcher, sink))
        assert capsys.readouterr().out == "sha256:abc\n"

    def test_failure_returns_one(self, make_launcher, sink):
        launcher = make_launcher(returncode=125)
        assert main(["pod-rm", "ghost"], client=_client(launcher, sink)) == 1

    def test_missing_binary_returns_one(self, tmp_path):
        assert main(["--podman", str(tmp_path / "missing"), "ps"]) == 1

    def test_unreadable_config_returns_one(self, tmp_path):
        assert main(["--config", str(tmp_path), "ps"]) == 1

    def test_dry_run_flag(self, fake_podman):
        assert main(["--podman", str(fake_podman), "--dry-run", "pull", "alpine"]) == 0
