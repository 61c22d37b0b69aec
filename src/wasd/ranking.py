"""Endpoint ordering.

SRV records conventionally prefer the lowest priority value; wasd ranks the
highest priority value first instead.
"""

from __future__ import annotations

from typing import Iterable, List

from .models import Endpoint


def rank_endpoints(endpoints: Iterable[Endpoint]) -> List[Endpoint]:
    """
    Brief: Order endpoints by descending priority.

    Inputs:
      - endpoints: Any iterable of Endpoint.

    Outputs:
      - list[Endpoint]: New list, highest priority first; equal priorities keep
        their input order.

    Example:
      >>> [e.port for e in rank_endpoints([Endpoint("a", 1, 0), Endpoint("b", 2, 5)])]
      [2, 1]
    """
    return sorted(endpoints, key=lambda ep: ep.priority, reverse=True)
