"""Error hierarchy for wasd.

Brief:
  Every failure raised by the resolution engine derives from WasdError so
  callers (the CLI in particular) can report them uniformly. Nothing in the
  package retries; errors propagate to the caller as soon as they happen.
"""

from __future__ import annotations

from typing import Optional


class WasdError(Exception):
    """Base class for all wasd errors."""


class TransportError(WasdError):
    """
    Brief: A DNS query could not be sent or its response could not be obtained.

    Inputs:
      - message: description
      - name: queried owner name (optional)
      - rdtype: queried record type mnemonic (optional)

    Outputs:
      - Exception instance
    """

    def __init__(
        self, message: str, *, name: Optional[str] = None, rdtype: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.name = name
        self.rdtype = rdtype


class ResolveTimeoutError(WasdError, TimeoutError):
    """Resolution did not collect every answer before the deadline."""


class ConfigError(WasdError):
    """No usable resolver address or configuration could be determined."""


class MalformedNameError(WasdError, ValueError):
    """A presentation-format DNS name could not be decoded."""
