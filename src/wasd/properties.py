"""TXT record property parsing.

Brief:
  A DNS-SD TXT record is a list of ``key=value`` strings. wasd additionally
  partitions properties by version: when the first string of a record is
  ``txtvers=<int>`` the remaining entries of that record belong to that version;
  otherwise they belong to DEFAULT_PROPERTY_VERSION.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from .models import VersionedProperties

logger = logging.getLogger(__name__)

DEFAULT_PROPERTY_VERSION = 1
VERSION_KEY = "txtvers"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def parse_int_literal(value: str) -> Optional[int]:
    """
    Brief: Parse an integer literal with base prefixes.

    Inputs:
      - value: Text such as ``2``, ``-3``, ``0x10``, ``0o17``, ``017``, ``0b101``.

    Outputs:
      - int when the literal is valid and fits in 64 bits, otherwise None.

    Notes:
      - A leading ``0`` followed by more digits is octal, as in C.
      - Surrounding whitespace is not accepted.
    """
    if not value or value.strip() != value:
        return None
    body = value.lstrip("+-")
    sign = value[: len(value) - len(body)]
    if len(sign) > 1 or not body:
        return None
    if len(body) > 1 and body[0] == "0" and body[1] not in "xXoObB":
        body = "0o" + body[1:]
    try:
        parsed = int(sign + body, 0)
    except ValueError:
        return None
    if parsed < _INT64_MIN or parsed > _INT64_MAX:
        return None
    return parsed


def _as_text(entry: Union[str, bytes]) -> str:
    if isinstance(entry, bytes):
        return entry.decode("utf-8", errors="replace")
    return entry


def parse_txt_properties(
    strings: Iterable[Union[str, bytes]],
    properties: Optional[VersionedProperties] = None,
) -> VersionedProperties:
    """
    Brief: Parse the strings of one TXT record into versioned properties.

    Inputs:
      - strings: Ordered character-strings of a single TXT record.
      - properties: Optional mapping to update in place (several TXT records of
        one instance share a mapping; later records win on duplicate keys).

    Outputs:
      - VersionedProperties: ``properties`` (or a new dict) after the update.

    Notes:
      - Entries without ``=`` or with an empty key are skipped.
      - Only the first ``=`` splits key from value.
      - ``txtvers`` selects the version only as the record's first entry and is
        never stored itself; a non-integer ``txtvers`` is kept as a plain entry.

    Example:
      >>> parse_txt_properties(["txtvers=2", "a=b"])
      {2: {'a': 'b'}}
    """
    out: VersionedProperties = {} if properties is None else properties
    version = DEFAULT_PROPERTY_VERSION

    for i, raw in enumerate(strings):
        entry = _as_text(raw)
        key, sep, value = entry.partition("=")
        if not sep or not key:
            logger.debug("Skipping malformed TXT entry %r", entry)
            continue

        if i == 0 and key == VERSION_KEY:
            parsed = parse_int_literal(value)
            if parsed is not None:
                version = parsed
                continue

        out.setdefault(version, {})[key] = value

    return out
