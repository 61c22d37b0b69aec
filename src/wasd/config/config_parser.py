"""Configuration parsing for wasd.

Brief:
  Reads the optional YAML configuration file and validates it with pydantic
  models. The CLI layers its flags over the result.

Inputs:
  - Path to a YAML file, or None for built-in defaults.

Outputs:
  - WasdConfig instance.

Example YAML:

  resolver:
    server: "127.0.0.1:53"
    timeout_ms: 1000
  logging:
    level: debug
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, validator

from ..errors import ConfigError
from ..resolv_conf import DEFAULT_RESOLV_CONF
from ..transport import parse_address
from .logging_config import LEVELS


class ResolverConfig(BaseModel):
    """Brief: Where and how DNS questions are sent.

    Inputs:
      - server: Optional ``host:port``; when unset the first nameserver of
        ``resolv_conf`` is used.
      - resolv_conf: resolv.conf path (default /etc/resolv.conf).
      - timeout_ms: Resolution timeout in milliseconds (default 1000).
      - tcp_fallback: Retry truncated UDP replies over TCP (default True).
    """

    server: Optional[str] = Field(default=None)
    resolv_conf: str = Field(default=DEFAULT_RESOLV_CONF)
    timeout_ms: int = Field(default=1000, ge=1)
    tcp_fallback: bool = True

    @validator("server", pre=True)
    def _normalize_server(cls, v):  # type: ignore[no-untyped-def]
        if v is None:
            return None
        s = str(v).strip()
        if not s:
            return None
        try:
            parse_address(s)
        except ConfigError as exc:
            raise ValueError(str(exc)) from exc
        return s

    class Config:
        extra = "forbid"


class LoggingConfig(BaseModel):
    """Brief: Options accepted by wasd.config.logging_config.init_logging."""

    level: str = Field(default="info")
    stderr: bool = True
    file: Optional[str] = None
    syslog: Union[bool, Dict[str, Any]] = False

    @validator("level", pre=True)
    def _normalize_level(cls, v):  # type: ignore[no-untyped-def]
        s = str(v or "info").strip().lower()
        if s not in LEVELS:
            raise ValueError(
                f"unknown log level {v!r} (expected one of {', '.join(sorted(LEVELS))})"
            )
        return s

    class Config:
        extra = "forbid"


class WasdConfig(BaseModel):
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        extra = "forbid"


def model_to_dict(model: BaseModel) -> Dict[str, Any]:
    """Return a plain mapping for a pydantic model (v2 or v1 API)."""
    for attr in ("model_dump", "dict"):
        method = getattr(model, attr, None)
        if callable(method):
            return dict(method())
    return dict(model)  # pragma: no cover


def parse_config(data: Optional[Dict[str, Any]], *, source: str = "<config>") -> WasdConfig:
    """
    Brief: Validate an already-loaded configuration mapping.

    Inputs:
      - data: Mapping from YAML (None means all defaults).
      - source: Name used in error messages.

    Outputs:
      - WasdConfig

    Raises:
      - ConfigError: the mapping does not match the expected structure.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: top level must be a mapping")
    try:
        return WasdConfig(**data)
    except ValidationError as exc:
        raise ConfigError(f"{source}: invalid configuration: {exc}") from exc


def override_resolver(
    resolver: ResolverConfig, overrides: Dict[str, Any]
) -> ResolverConfig:
    """
    Brief: Layer command-line values over the resolver section.

    Inputs:
      - resolver: Validated ResolverConfig from the file.
      - overrides: Field values to replace (e.g. ``server``, ``timeout_ms``).

    Outputs:
      - New ResolverConfig; the overrides go through the same validators as
        values read from YAML.

    Raises:
      - ConfigError: an override is invalid.
    """
    if not overrides:
        return resolver
    data = model_to_dict(resolver)
    data.update(overrides)
    try:
        return ResolverConfig(**data)
    except ValidationError as exc:
        raise ConfigError(f"invalid resolver override: {exc}") from exc


def load_config(config_path: Optional[str]) -> WasdConfig:
    """
    Brief: Read and validate a YAML configuration file.

    Inputs:
      - config_path: Path to the YAML file, or None for defaults.

    Outputs:
      - WasdConfig

    Raises:
      - ConfigError: unreadable file, invalid YAML or invalid settings.
    """
    if config_path is None:
        return WasdConfig()
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read config {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {config_path}: {exc}") from exc
    return parse_config(data, source=config_path)
