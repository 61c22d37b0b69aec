"""Text output for resolved instances.

Brief:
  TerminalFormatter prints endpoints and property tables for humans.
  PostgresEnvFormatter prints ``export PG...=`` lines so a shell can
  ``eval`` the connection settings of a discovered PostgreSQL instance.
"""

from __future__ import annotations

import sys
from typing import IO, List, Optional, Sequence

from .errors import WasdError
from .models import ResolvedInstance

# libpq connection parameters that have a PG<NAME> environment variable.
POSTGRES_PROPERTY_NAMES: List[str] = [
    "database",
    "user",
    "password",
    "passfile",
    "service",
    "servicefile",
    "realm",
    "options",
    "appname",
    "sslmode",
    "requiressl",
    "sslcompression",
    "sslcert",
    "sslkey",
    "sslrootcert",
    "sslcrl",
    "requirepeer",
    "krbsrvname",
    "gsslib",
    "connect_timeout",
    "clientencoding",
    "datestyle",
    "tz",
    "geqo",
    "sysconfdir",
    "localedir",
]


def format_table(rows: Sequence[Sequence[str]], prefix: str = "") -> str:
    """
    Brief: Render rows as left-aligned columns.

    Inputs:
      - rows: Rows of equal length; the first row sets the column count.
      - prefix: Text written at the start of every line.

    Outputs:
      - str: One line per row, each ending in a newline; every column but the
        last is padded to its widest cell plus two spaces. Empty input gives "".

    Example:
      >>> format_table([["a", "1"], ["bbb", "2"]])
      'a    1\\nbbb  2\\n'
    """
    if not rows:
        return ""
    ncols = len(rows[0])
    widths = [0] * ncols
    for row in rows:
        for i, cell in enumerate(row[:ncols]):
            widths[i] = max(widths[i], len(cell))

    lines = []
    for row in rows:
        cells = [
            cell + " " * (widths[i] - len(cell) + 2) if i < ncols - 1 else cell
            for i, cell in enumerate(row[:ncols])
        ]
        lines.append(prefix + "".join(cells) + "\n")
    return "".join(lines)


class TerminalFormatter:
    """Human-readable endpoints and properties, one block per instance."""

    can_output_list = True

    def __init__(self, out: Optional[IO[str]] = None) -> None:
        self.out = out or sys.stdout

    def print_resolved_instances(self, instances: Sequence[ResolvedInstance]) -> None:
        for n, inst in enumerate(instances):
            self.print_resolved_instance(inst)
            if n < len(instances) - 1:
                self.out.write("\n")

    def print_resolved_instance(self, inst: ResolvedInstance) -> None:
        for ep in inst.targets:
            self.out.write(f"⌁  {inst.dns_name()}\t{ep.host}\t{ep.port}\n")
        rows = [
            [str(version), key, value]
            for version in inst.versions()
            for key, value in sorted(inst.properties[version].items())
        ]
        self.out.write(format_table(rows, "✎  "))


def shell_quote(value: str) -> str:
    return "'" + value.replace("'", "'\\''") + "'"


class PostgresEnvFormatter:
    """
    Brief: Export one instance as libpq environment variables.

    Inputs:
      - version: Property version to read connection parameters from.
      - out: Output stream (default stdout).

    Notes:
      - Exports a single instance (can_output_list is False), and only its
        highest ranked endpoint.
      - The ``dbname`` property maps to PGDATABASE; the other recognised
        parameters keep their own names.
    """

    can_output_list = False

    def __init__(self, version: int, out: Optional[IO[str]] = None) -> None:
        self.version = version
        self.out = out or sys.stdout

    def print_env_var(self, key: str, value: str) -> None:
        self.out.write(f"export PG{key.upper()}={shell_quote(value)}\n")

    def print_resolved_instance(self, inst: ResolvedInstance) -> None:
        if not inst.targets:
            raise WasdError(f"no endpoints for {inst.dns_name()}")
        ep = inst.targets[0]
        self.print_env_var("host", ep.host)
        self.print_env_var("port", str(ep.port))

        props = inst.properties.get(self.version, {})
        if "dbname" in props:
            self.print_env_var("database", props["dbname"])
        for name in POSTGRES_PROPERTY_NAMES:
            if name in props:
                self.print_env_var(name, props[name])
