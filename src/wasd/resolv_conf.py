"""Resolver address discovery from the system resolver configuration."""

from __future__ import annotations

import logging

import dns.exception
import dns.resolver

from .errors import ConfigError
from .transport import format_address

logger = logging.getLogger(__name__)

DEFAULT_RESOLV_CONF = "/etc/resolv.conf"


def addr_from_resolv_conf(path: str = DEFAULT_RESOLV_CONF) -> str:
    """
    Brief: Return the first nameserver configured in a resolv.conf file.

    Inputs:
      - path: resolv.conf path (default /etc/resolv.conf).

    Outputs:
      - str: ``host:port`` (``[v6]:port`` for IPv6 nameservers).

    Raises:
      - ConfigError: file missing/unreadable or no nameserver defined.

    Example:
      >>> addr_from_resolv_conf("tests/data/resolv.conf")  # doctest: +SKIP
      '127.1.2.3:53'
    """
    try:
        resolver = dns.resolver.Resolver(filename=path, configure=True)
    except (dns.exception.DNSException, OSError) as e:
        raise ConfigError(f"no DNS servers found in {path}: {e}") from e

    if not resolver.nameservers:
        raise ConfigError(f"no DNS servers found in {path}")

    # Newer dnspython releases hand back Nameserver objects instead of strings.
    first = resolver.nameservers[0]
    host = str(getattr(first, "address", first))
    port = int(getattr(first, "port", resolver.port))
    addr = format_address(host, port)
    logger.debug("Using resolver %s from %s", addr, path)
    return addr
