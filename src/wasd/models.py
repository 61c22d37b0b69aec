"""Value types for DNS-SD services, instances and resolution results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .names import encode_name

# version -> key -> value
VersionedProperties = Dict[int, Dict[str, str]]


@dataclass(frozen=True)
class Service:
    """A DNS-SD service class such as ``_http._tcp.example.com``.

    Inputs:
      - name: Service name without the leading underscore (e.g. ``http``).
      - protocol: ``tcp`` or ``udp`` (any string is accepted).
      - domain: Domain the service is advertised under (e.g. ``example.com``).
      - subtype: Optional subtype; adds ``_<subtype>._sub`` in front.
    """

    name: str
    protocol: str
    domain: str
    subtype: str = ""

    def has_subtype(self) -> bool:
        return self.subtype != ""

    def labels(self) -> List[str]:
        out = ["_" + self.name, "_" + self.protocol, self.domain]
        if self.has_subtype():
            out = ["_" + self.subtype, "_sub"] + out
        return out

    def dns_name(self) -> str:
        return encode_name(self.labels())


@dataclass(frozen=True)
class Instance:
    """One advertised instance of a Service.

    ``returned_name`` holds the PTR target exactly as the server sent it. When
    set it is queried verbatim, so an instance found by enumeration is always
    resolved under the server's own spelling of its name.
    """

    service: Service
    description: str
    returned_name: str = ""

    def labels(self) -> List[str]:
        return [self.description] + self.service.labels()

    def dns_name(self) -> str:
        if self.returned_name:
            return self.returned_name
        return encode_name(self.labels())


@dataclass(frozen=True)
class Endpoint:
    """A host/port target from an SRV record.

    ``priority`` only orders endpoints (see wasd.ranking) and is not part of
    an endpoint's identity.
    """

    host: str
    port: int
    priority: int = field(default=0, compare=False)

    def addr(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass
class ResolvedInstance:
    """An Instance plus its ranked endpoints and versioned properties."""

    instance: Instance
    targets: List[Endpoint] = field(default_factory=list)
    properties: VersionedProperties = field(default_factory=dict)

    def dns_name(self) -> str:
        return self.instance.dns_name()

    def versions(self) -> List[int]:
        return sorted(self.properties)
