from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .client import Client
from .config.config_parser import load_config, override_resolver
from .config.logging_config import init_logging
from .errors import WasdError
from .formatters import PostgresEnvFormatter, TerminalFormatter, format_table
from .models import ResolvedInstance, Service
from .properties import DEFAULT_PROPERTY_VERSION

LIST_SUBCOMMANDS = ("versions", "targets", "properties")


def positive_int(text: str) -> int:
    """argparse type for values that must be >= 1."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wasd", description="Discover and resolve DNS-SD service instances"
    )
    parser.add_argument("--config", default=None, help="Path to YAML config")
    parser.add_argument(
        "--server",
        default=None,
        help="Resolver host:port (default: first nameserver in resolv.conf)",
    )
    parser.add_argument(
        "--timeout-ms",
        type=positive_int,
        default=None,
        help="Resolution timeout in milliseconds",
    )
    parser.add_argument(
        "--name", required=True, help="The name of the service you wish to query"
    )
    parser.add_argument(
        "--protocol",
        default="tcp",
        help="The protocol of the service, either udp or tcp",
    )
    parser.add_argument("--subtype", default="", help="Optional service subtype")
    parser.add_argument(
        "--domain",
        required=True,
        help="The domain you wish to query the service against",
    )
    parser.add_argument(
        "--version",
        type=int,
        default=DEFAULT_PROPERTY_VERSION,
        help="The version of the properties you want to load",
    )
    parser.add_argument(
        "--format",
        choices=("terminal", "postgres"),
        default="terminal",
        help="Output format for 'list' (postgres prints PG* exports)",
    )
    parser.add_argument(
        "command", nargs="*", help="list [versions|targets|properties]"
    )
    return parser


def available_versions(resolved: Sequence[ResolvedInstance]) -> List[int]:
    versions = set()
    for inst in resolved:
        versions.update(inst.properties)
    return sorted(versions)


def run_command(client: Client, args: argparse.Namespace) -> None:
    """
    Brief: Execute ``list`` and its sub-commands, writing to stdout.

    Inputs:
      - client: Configured Client.
      - args: Parsed CLI namespace.

    Outputs:
      - None

    Raises:
      - WasdError: unknown command, no instances, missing version, or any
        resolution failure.
    """
    commands = args.command
    if not commands:
        raise WasdError("no command specified")
    if commands[0] != "list":
        raise WasdError(f"unknown command {commands[0]!r}")
    sub = commands[1] if len(commands) > 1 else None
    if sub is not None and sub not in LIST_SUBCOMMANDS:
        raise WasdError(f"unknown list command {sub!r}")

    service = Service(
        name=args.name,
        protocol=args.protocol,
        domain=args.domain,
        subtype=args.subtype,
    )
    instances = client.enumerate(service)
    if not instances:
        raise WasdError("no instances found")
    resolved = client.resolve_all(instances)
    versions = available_versions(resolved)

    if sub == "versions":
        for v in versions:
            print(v)
        return

    if sub == "targets":
        for inst in resolved:
            rows = [[ep.host, str(ep.port)] for ep in inst.targets]
            sys.stdout.write(format_table(rows))
        return

    if args.version not in versions:
        raise WasdError("version doesn't exist")

    if sub == "properties":
        for inst in resolved:
            props = inst.properties.get(args.version, {})
            sys.stdout.write(format_table([[k, v] for k, v in sorted(props.items())]))
        return

    if args.format == "postgres":
        formatter = PostgresEnvFormatter(args.version)
    else:
        formatter = TerminalFormatter()
    if formatter.can_output_list:
        formatter.print_resolved_instances(resolved)
    else:
        formatter.print_resolved_instance(resolved[0])


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the wasd CLI.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        0 on success, 1 on any error.

    Example use:
        wasd --name postgresql --domain example.com list
        eval "$(wasd --name postgresql --domain example.com --format postgres list)"
    """
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config)
    except WasdError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    init_logging(cfg.logging)
    logger = logging.getLogger("wasd.main")
    if args.config:
        logger.debug("Loaded config from %s", args.config)

    overrides = {}
    if args.server:
        overrides["server"] = args.server
    if args.timeout_ms is not None:
        overrides["timeout_ms"] = args.timeout_ms

    try:
        resolver_cfg = override_resolver(cfg.resolver, overrides)
        client = Client.from_config(resolver_cfg)
        logger.debug("Using resolver %s", client.server)
        run_command(client, args)
    except WasdError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
