"""Entry point: python -m podcompose"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from pathlib import Path

from podcompose.infrastructure.config import load_settings
from podcompose.infrastructure.logger import logger
from podcompose.project.types import Container, Image, Pod
from podcompose.runtime.client import PodmanClient
from podcompose.runtime.errors import PodmanError

Handler = Callable[[PodmanClient, argparse.Namespace], None]


def _version(client: PodmanClient, args: argparse.Namespace) -> None:
    print(client.get_version().strip())


def _ps(client: PodmanClient, args: argparse.Namespace) -> None:
    client.ps(all=args.all, quiet=args.quiet, project_name=args.project or "")


def _pull(client: PodmanClient, args: argparse.Namespace) -> None:
    client.image_pull(Image(name=args.image))


def _push(client: PodmanClient, args: argparse.Namespace) -> None:
    client.image_push(Image(name=args.image))


def _image_id(client: PodmanClient, args: argparse.Namespace) -> None:
    print(client.image_get_id(Image(name=args.image)))


def _pod_create(client: PodmanClient, args: argparse.Namespace) -> None:
    client.pod_create(Pod(name=args.name, share=args.share), post_delay=args.settle)


def _pod_rm(client: PodmanClient, args: argparse.Namespace) -> None:
    client.pod_remove(Pod(name=args.name))


def _stop(client: PodmanClient, args: argparse.Namespace) -> None:
    extra = ["-t", str(args.time)] if args.time is not None else []
    client.container_stop(Container(name=args.name), extra)


def _logs(client: PodmanClient, args: argparse.Namespace) -> None:
    client.logs(Container(name=args.name), follow=args.follow, timestamps=args.timestamps, tail=args.tail)


COMMANDS: dict[str, Handler] = {
    "version": _version,
    "ps": _ps,
    "pull": _pull,
    "push": _push,
    "image-id": _image_id,
    "pod-create": _pod_create,
    "pod-rm": _pod_rm,
    "stop": _stop,
    "logs": _logs,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="podcompose", description="Drive podman pods, images and containers")
    parser.add_argument("--podman", type=str, help="Path to the podman binary (default: podman on PATH)")
    parser.add_argument("--dry-run", action="store_true", default=None, help="Log commands without running them")
    parser.add_argument("--project", type=str, help="Project name used for label filtering")
    parser.add_argument("--config", type=Path, help="Settings file (default: ./podcompose.yaml if present)")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("version", help="Show the podman version")

    ps = sub.add_parser("ps", help="List containers")
    ps.add_argument("-a", "--all", action="store_true", help="Show all containers")
    ps.add_argument("-q", "--quiet", action="store_true", help="Only show container IDs")

    for name, help_text in (("pull", "Pull an image"), ("push", "Push an image"), ("image-id", "Show an image ID")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("image")

    pod_create = sub.add_parser("pod-create", help="Create a pod")
    pod_create.add_argument("name")
    pod_create.add_argument("--share", default="", help="Namespaces to share, e.g. net,ipc")
    pod_create.add_argument("--settle", type=float, default=0.0, help="Seconds to wait after creation")

    pod_rm = sub.add_parser("pod-rm", help="Remove a pod")
    pod_rm.add_argument("name")

    stop = sub.add_parser("stop", help="Stop a container")
    stop.add_argument("name")
    stop.add_argument("-t", "--time", type=int, help="Seconds to wait before killing the container")

    logs = sub.add_parser("logs", help="Show container logs")
    logs.add_argument("name")
    logs.add_argument("-f", "--follow", action="store_true")
    logs.add_argument("-t", "--timestamps", action="store_true")
    logs.add_argument("--tail", default="all", help="Number of lines to show from the end (default: all)")

    return parser


def main(argv: list[str] | None = None, client: PodmanClient | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
        overrides: dict[str, object] = {}
        if args.podman:
            overrides["podman_path"] = args.podman
        if args.dry_run is not None:
            overrides["dry_run"] = args.dry_run
        if args.project:
            overrides["project_name"] = args.project
        settings = settings.model_copy(update=overrides)
        args.project = settings.project_name

        client = client or PodmanClient.from_config(settings)
        COMMANDS[args.command](client, args)
    except PodmanError as err:
        logger.error("Command failed", command=args.command, error=str(err))
        return 1

    return 0


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
