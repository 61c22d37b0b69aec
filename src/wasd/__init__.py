"""wasd: DNS-SD service discovery client"""

from .client import DEFAULT_TIMEOUT, Client
from .errors import (
    ConfigError,
    MalformedNameError,
    ResolveTimeoutError,
    TransportError,
    WasdError,
)
from .models import Endpoint, Instance, ResolvedInstance, Service, VersionedProperties
from .names import decode_name, encode_name
from .properties import DEFAULT_PROPERTY_VERSION, parse_txt_properties
from .ranking import rank_endpoints

__all__ = [
    "Client",
    "ConfigError",
    "DEFAULT_PROPERTY_VERSION",
    "DEFAULT_TIMEOUT",
    "Endpoint",
    "Instance",
    "MalformedNameError",
    "ResolveTimeoutError",
    "ResolvedInstance",
    "Service",
    "TransportError",
    "VersionedProperties",
    "WasdError",
    "decode_name",
    "encode_name",
    "parse_txt_properties",
    "rank_endpoints",
]
