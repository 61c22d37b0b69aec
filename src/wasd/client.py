"""DNS-SD query client.

Brief:
  Client.enumerate() lists the instances of a Service with one PTR query.
  Client.resolve() looks up an Instance's SRV and TXT records concurrently: one
  worker thread per record type posts its outcome to a queue and the calling
  thread collects both outcomes against a single deadline.

Inputs:
  - Service / Instance values from wasd.models.

Outputs:
  - Instance lists and ResolvedInstance values.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Iterable, List, Optional, Protocol, Tuple

import dns.message
import dns.rdatatype

from .config.config_parser import ResolverConfig
from .errors import ResolveTimeoutError, TransportError
from .models import Endpoint, Instance, ResolvedInstance, Service, VersionedProperties
from .names import decode_name
from .properties import parse_txt_properties
from .ranking import rank_endpoints
from .resolv_conf import DEFAULT_RESOLV_CONF, addr_from_resolv_conf
from .transport import DnsTransport, parse_address

logger = logging.getLogger(__name__)

# Seconds allowed for resolve() to collect every answer.
DEFAULT_TIMEOUT = 1.0

# Every query is attempted exactly once; failures go straight to the caller.
MAX_ATTEMPTS = 1

RESOLVE_RECORD_TYPES = ("SRV", "TXT")

# (rdtype, response, error): exactly one of response/error is set.
_Outcome = Tuple[str, Optional[dns.message.Message], Optional[TransportError]]


class Transport(Protocol):
    def query(
        self, name: str, rdtype: str, addr: str, timeout: float
    ) -> dns.message.Message: ...


class Client:
    """
    Brief: Enumerate and resolve DNS-SD instances against one resolver.

    Inputs:
      - server: Resolver ``host:port``. When empty the first nameserver from
        ``resolv_conf`` is used.
      - timeout: Seconds resolve() waits for both of its answers.
      - transport: Object providing ``query(name, rdtype, addr, timeout)``;
        defaults to DnsTransport().
      - resolv_conf: resolv.conf path consulted when ``server`` is empty.

    Outputs:
      - Client instance.

    Raises:
      - ConfigError: no server given and none found in ``resolv_conf``, or the
        address cannot be parsed.

    Example:
      >>> client = Client("127.0.0.1:53")  # doctest: +SKIP
      >>> instances = client.enumerate(Service("http", "tcp", "example.com"))  # doctest: +SKIP
    """

    def __init__(
        self,
        server: Optional[str] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[Transport] = None,
        resolv_conf: str = DEFAULT_RESOLV_CONF,
    ) -> None:
        if not server:
            server = addr_from_resolv_conf(resolv_conf)
        parse_address(server)
        self.server = server
        self.timeout = float(timeout)
        self.transport: Transport = transport or DnsTransport()

    @classmethod
    def from_config(
        cls, cfg: ResolverConfig, *, transport: Optional[Transport] = None
    ) -> "Client":
        """Build a Client from the ``resolver`` section of the configuration."""
        if transport is None:
            transport = DnsTransport(tcp_fallback=cfg.tcp_fallback)
        return cls(
            cfg.server,
            timeout=cfg.timeout_ms / 1000.0,
            transport=transport,
            resolv_conf=cfg.resolv_conf,
        )

    def _query(self, name: str, rdtype: str) -> dns.message.Message:
        return self.transport.query(name, rdtype, self.server, self.timeout)

    def enumerate(self, service: Service) -> List[Instance]:
        """
        Brief: List the instances advertised for a service.

        Inputs:
          - service: Service to browse.

        Outputs:
          - list[Instance]: One per PTR answer, in answer order. The raw PTR
            target is kept as ``returned_name``.

        Raises:
          - TransportError: query could not be sent or answered.
        """
        name = service.dns_name()
        response = self._query(name, "PTR")

        out: List[Instance] = []
        for rrset in response.answer:
            if rrset.rdtype != dns.rdatatype.PTR:
                continue
            for rdata in rrset:
                target = rdata.target.to_text()
                parts = decode_name(target, 2)
                out.append(
                    Instance(
                        service=service,
                        description=parts[0] if parts else "",
                        returned_name=target,
                    )
                )
        logger.debug("Found %d instance(s) of %s", len(out), name)
        return out

    def _worker(self, name: str, rdtype: str, outcomes: "queue.Queue[_Outcome]") -> None:
        try:
            response = self._query(name, rdtype)
        except Exception as e:
            if not isinstance(e, TransportError):
                e = TransportError(
                    f"{rdtype} query for {name} failed: {e}", name=name, rdtype=rdtype
                )
            outcomes.put((rdtype, None, e))
            return
        outcomes.put((rdtype, response, None))

    def resolve(self, instance: Instance) -> ResolvedInstance:
        """
        Brief: Fetch an instance's endpoints and properties concurrently.

        Inputs:
          - instance: Instance to resolve (usually from enumerate()).

        Outputs:
          - ResolvedInstance with endpoints ranked by descending priority and
            properties partitioned by version.

        Raises:
          - TransportError: the first failing query; raised without waiting for
            the other one.
          - ResolveTimeoutError: both answers were not collected within
            ``self.timeout`` seconds.

        Notes:
          - Workers are daemon threads and are not cancelled. A worker finishing
            after resolve() has returned posts into an unbounded queue nobody
            reads any more, so it never blocks.
        """
        name = instance.dns_name()
        outcomes: "queue.Queue[_Outcome]" = queue.Queue()

        for rdtype in RESOLVE_RECORD_TYPES:
            threading.Thread(
                target=self._worker,
                args=(name, rdtype, outcomes),
                name=f"wasd-{rdtype.lower()}",
                daemon=True,
            ).start()

        deadline = time.monotonic() + self.timeout
        responses: List[dns.message.Message] = []
        while len(responses) < len(RESOLVE_RECORD_TYPES):
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise ResolveTimeoutError(f"timeout resolving {name}")
            try:
                rdtype, response, error = outcomes.get(timeout=remaining)
            except queue.Empty:
                raise ResolveTimeoutError(f"timeout resolving {name}")
            if error is not None:
                logger.debug("%s query for %s failed: %s", rdtype, name, error)
                raise error
            logger.debug("Collected %s answer for %s", rdtype, name)
            responses.append(response)

        return self._build_resolution(instance, responses)

    def _build_resolution(
        self, instance: Instance, responses: Iterable[dns.message.Message]
    ) -> ResolvedInstance:
        targets: List[Endpoint] = []
        properties: VersionedProperties = {}

        for response in responses:
            for rrset in response.answer:
                if rrset.rdtype == dns.rdatatype.SRV:
                    for rdata in rrset:
                        targets.append(
                            Endpoint(
                                host=rdata.target.to_text(),
                                port=int(rdata.port),
                                priority=int(rdata.priority),
                            )
                        )
                elif rrset.rdtype == dns.rdatatype.TXT:
                    for rdata in rrset:
                        parse_txt_properties(rdata.strings, properties)

        return ResolvedInstance(
            instance=instance,
            targets=rank_endpoints(targets),
            properties=properties,
        )

    def resolve_all(self, instances: Iterable[Instance]) -> List[ResolvedInstance]:
        """Resolve instances one after another; the first error propagates."""
        return [self.resolve(inst) for inst in instances]
