"""DNS transport adapter.

Brief:
  wasd does not build or parse DNS messages itself. This module hands question
  construction, wire encoding, sending and response decoding to dnspython and
  turns every failure into TransportError. Plain UDP is tried first; when the
  reply comes back truncated the query is repeated over TCP.

Inputs:
  - Presentation-format owner names, record type mnemonics and ``host:port``
    resolver addresses.

Outputs:
  - Parsed ``dns.message.Message`` responses.
"""

from __future__ import annotations

import logging
from typing import Tuple

import dns.exception
import dns.message
import dns.name
import dns.query

from .errors import ConfigError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_PORT = 53


def parse_address(addr: str) -> Tuple[str, int]:
    """
    Brief: Split a resolver address into host and port.

    Inputs:
      - addr: ``host:port``, ``[v6addr]:port``, or a bare host / IPv6 address
        (port defaults to 53).

    Outputs:
      - (host, port)

    Raises:
      - ConfigError: empty address, unbalanced brackets or an invalid port.

    Example:
      >>> parse_address("[::1]:5353")
      ('::1', 5353)
    """
    text = (addr or "").strip()
    if not text:
        raise ConfigError("empty resolver address")

    if text.startswith("["):
        host, sep, rest = text[1:].partition("]")
        if not sep or (rest and not rest.startswith(":")):
            raise ConfigError(f"invalid resolver address {addr!r}")
        port_text = rest[1:]
    elif text.count(":") == 1:
        host, port_text = text.split(":")
    else:
        host, port_text = text, ""

    if not host:
        raise ConfigError(f"invalid resolver address {addr!r}")
    if not port_text:
        return host, DEFAULT_PORT
    try:
        port = int(port_text)
    except ValueError:
        raise ConfigError(f"invalid port in resolver address {addr!r}")
    if not 0 < port < 65536:
        raise ConfigError(f"port out of range in resolver address {addr!r}")
    return host, port


def query_name(name: str) -> dns.name.Name:
    """
    Brief: Parse a presentation name into a dnspython Name without IDNA.

    Inputs:
      - name: Presentation name; may contain raw UTF-8 text (as synthesized by
        encode_name) or ``\\DDD`` escapes (as returned by servers).

    Outputs:
      - dns.name.Name whose labels are the UTF-8 bytes of the DNS-SD labels.

    Notes:
      - DNS-SD instance names are raw UTF-8, not punycode, so the text is
        handed to dnspython as bytes, which skips its IDNA codec.
    """
    return dns.name.from_text(name.encode("utf-8"))


def format_address(host: str, port: int) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


class DnsTransport:
    """
    Brief: Send single DNS questions through dnspython.

    Inputs:
      - tcp_fallback: retry over TCP when the UDP reply has TC set (default True).

    Outputs:
      - query(name, rdtype, addr, timeout) -> dns.message.Message

    Notes:
      - Instances are stateless and safe to share between threads.
    """

    def __init__(self, *, tcp_fallback: bool = True) -> None:
        self.tcp_fallback = tcp_fallback

    def query(
        self, name: str, rdtype: str, addr: str, timeout: float
    ) -> dns.message.Message:
        host, port = parse_address(addr)
        logger.debug("Querying %s %s via %s", name, rdtype, format_address(host, port))
        try:
            request = dns.message.make_query(query_name(name), rdtype)
            if self.tcp_fallback:
                response, used_tcp = dns.query.udp_with_fallback(
                    request, host, timeout=timeout, port=port
                )
                if used_tcp:
                    logger.debug("Truncated UDP reply for %s %s; used TCP", name, rdtype)
            else:
                response = dns.query.udp(request, host, timeout=timeout, port=port)
        except (dns.exception.DNSException, OSError, ValueError) as e:
            raise TransportError(
                f"{rdtype} query for {name} via {format_address(host, port)} failed: {e}",
                name=name,
                rdtype=rdtype,
            ) from e
        return response
