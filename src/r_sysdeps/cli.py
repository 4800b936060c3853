from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List

from .client import ServerClient
from .config import DEFAULT_SERVER, SysdepsConfig, build_config
from .errors import SysdepsError
from .models import OsIdentity, Repository, ServerStatus
from .osdetect import detect_os
from .repository import resolve_repository
from .status import format_status
from .sysreqs import render_requirements
from .urls import binary_url, source_url

LOG = logging.getLogger("r_sysdeps")


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    argv = list(argv) if argv is not None else sys.argv[1:]
    parser = argparse.ArgumentParser(
        prog="r-sysdeps",
        description="Look up system requirements and repository URLs on a package manager server.",
    )
    parser.add_argument("--os-name", help="Operating system name [auto-detected].")
    parser.add_argument("--os-version", help="Operating system version [auto-detected].")
    parser.add_argument("--server", help=f"Package manager server (default: {DEFAULT_SERVER}).")
    parser.add_argument(
        "-r",
        "--repository",
        help="Repository name (case-sensitive, default value: specified by server).",
    )
    parser.add_argument("--os-release", type=Path, help="os-release file used for detection (default: /etc/os-release).")
    parser.add_argument("--config", type=Path, help="Optional TOML/JSON/YAML config file.")
    parser.add_argument("--status-timeout", type=float, help="Timeout for status and repository requests in seconds (default 10).")
    parser.add_argument("--sysreqs-timeout", type=float, help="Timeout for system requirement requests in seconds (default 60).")
    parser.add_argument("--json", action="store_true", help="Output JSON instead of text.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    package = subparsers.add_parser("package", help="Get system dependencies for R packages.")
    _add_repository_option(package)
    package.add_argument("packages", nargs="+", metavar="PKG", help="R packages.")

    repository = subparsers.add_parser("repository", help="Get repository information.")
    _add_repository_option(repository)
    repository.add_argument(
        "-l", "--list-repositories", dest="list", action="store_true", help="List all R repositories on server."
    )
    repository.add_argument(
        "-b", "--binary-repository", action="store_true", help="Print binary package URL for repository."
    )
    repository.add_argument(
        "-s", "--source-repository", action="store_true", help="Print source package URL for repository."
    )

    subparsers.add_parser("status", help="Show server capabilities and supported distributions.")
    return parser.parse_args(argv)


def _add_repository_option(parser: argparse.ArgumentParser) -> None:
    # SUPPRESS keeps a value given before the subcommand from being reset.
    parser.add_argument(
        "-r",
        "--repository",
        default=argparse.SUPPRESS,
        help="Repository name (case-sensitive, default value: specified by server).",
    )


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(message)s")

    try:
        config = build_config(
            server=args.server,
            repository=args.repository,
            os_name=args.os_name,
            os_version=args.os_version,
            os_release=args.os_release,
            status_timeout=args.status_timeout,
            sysreqs_timeout=args.sysreqs_timeout,
            config_file=args.config,
        )
    except (OSError, ValueError) as exc:
        LOG.error("error: %s", exc)
        return 1

    try:
        _run(args, config)
    except SysdepsError as exc:
        LOG.error("error: %s", exc)
        return 1
    return 0


def _run(args: argparse.Namespace, config: SysdepsConfig) -> None:
    identity = detect_os(config.os_name, config.os_version, os_release_path=config.os_release)
    client = ServerClient(
        config.server,
        status_timeout=config.status_timeout,
        sysreqs_timeout=config.sysreqs_timeout,
    )
    status = client.status()
    if args.command == "status":
        _run_status(args, config, identity, status)
        return

    catalog = client.repositories()
    repository = resolve_repository(config.repository, catalog, status.default_repo)
    LOG.debug("Using repository %s (id %s) for %s", repository.name, repository.id, identity.label)

    if args.command == "package":
        _run_package(args, client, identity, repository)
    elif args.command == "repository":
        _run_repository(args, config, identity, status, catalog, repository)


def _run_package(args: argparse.Namespace, client: ServerClient, identity: OsIdentity, repository: Repository) -> None:
    requirements = client.system_requirements(identity, repository.id, args.packages)
    if args.json:
        print(json.dumps([asdict(req) for req in requirements], indent=2))
        return
    for line in render_requirements(requirements):
        print(line)


def _run_repository(
    args: argparse.Namespace,
    config: SysdepsConfig,
    identity: OsIdentity,
    status: ServerStatus,
    catalog: List[Repository],
    repository: Repository,
) -> None:
    if args.list:
        if args.json:
            print(json.dumps([asdict(repo) for repo in catalog], indent=2))
        else:
            for repo in catalog:
                print(repo.name)
        return

    if args.source_repository:
        url = source_url(config.server, repository.name)
    elif args.binary_repository:
        url = binary_url(config.server, repository.name, identity, status)
    else:
        if args.json:
            print(json.dumps(asdict(repository), indent=2))
        else:
            print(f"{repository.name} (id {repository.id}, type {repository.kind})")
            if repository.description:
                print(f"    {repository.description}")
        return

    print(json.dumps({"url": url}) if args.json else url)


def _run_status(args: argparse.Namespace, config: SysdepsConfig, identity: OsIdentity, status: ServerStatus) -> None:
    if args.json:
        print(json.dumps(asdict(status), indent=2))
        return
    for line in format_status(config.server, status, identity):
        print(line)


if __name__ == "__main__":
    sys.exit(main())
