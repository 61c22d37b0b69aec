"""Presentation-format DNS name helpers.

Brief:
  Convert between escaped, dot-terminated DNS names (as printed by servers and
  dig) and ordered label lists. DNS-SD instance names routinely carry spaces and
  dots inside the leading description label, so escaping must round-trip with
  what authoritative servers emit.

Inputs:
  - Presentation-format names such as ``Woop\\ hello._http._tcp.example.com.``

Outputs:
  - Label lists such as ``["Woop hello", "_http", "_tcp", "example.com"]``
"""

from __future__ import annotations

import string
from typing import List, Sequence

from .errors import MalformedNameError

# Characters escaped with a single backslash by encode_name(). The backslash
# itself must be first so earlier replacements are not escaped twice.
ESCAPED_CHARS = ("\\", ".", " ")


def decode_name(name: str, max_labels: int = 0) -> List[str]:
    """
    Brief: Split a dot-terminated presentation name into unescaped labels.

    Inputs:
      - name: Presentation-format name; must end with an unescaped dot.
      - max_labels: When > 0, once ``max_labels - 1`` labels have been read the
        remaining text (minus the trailing dot) is returned verbatim as the final
        label and scanning stops.

    Outputs:
      - list[str]: Labels in order. Text after the last unescaped dot is dropped.
        Each label is assembled as bytes (``\\DDD`` is one byte, other characters
        are UTF-8) and decoded as UTF-8, so multi-byte escapes such as
        ``Caf\\195\\169`` come back as ``Caf\u00e9``.

    Raises:
      - MalformedNameError: Name ends in a lone backslash, or carries a
        ``\\DDD`` escape that is not three digits in the range 0-255.

    Example:
      >>> decode_name("_test._tcp.example.com.", 3)
      ['_test', '_tcp', 'example.com']
      >>> decode_name("Woop\\\\ hello._test._tcp.example.com.", 4)
      ['Woop hello', '_test', '_tcp', 'example.com']
    """
    out: List[str] = []
    label = bytearray()
    i = 0
    n = len(name)

    while i < n:
        c = name[i]
        if c == "\\":
            if i + 1 >= n:
                raise MalformedNameError(f"trailing escape in name {name!r}")
            nxt = name[i + 1]
            if nxt in string.digits:
                digits = name[i + 1 : i + 4]
                if (
                    len(digits) != 3
                    or any(d not in string.digits for d in digits)
                    or int(digits) > 255
                ):
                    raise MalformedNameError(
                        f"bad decimal escape \\{digits} in name {name!r}"
                    )
                label.append(int(digits))
                i += 4
            else:
                label += nxt.encode("utf-8")
                i += 2
            continue

        if c == ".":
            out.append(_label_text(label))
            label = bytearray()
            if max_labels > 0 and len(out) == max_labels - 1:
                rest = name[i + 1 :]
                if rest.endswith("."):
                    rest = rest[:-1]
                if rest:
                    out.append(rest)
                break
        else:
            label += c.encode("utf-8")
        i += 1

    return out


def _label_text(label: bytearray) -> str:
    return bytes(label).decode("utf-8", errors="replace")


def _escape_label(label: str) -> str:
    for ch in ESCAPED_CHARS:
        label = label.replace(ch, "\\" + ch)
    return label


def encode_name(labels: Sequence[str]) -> str:
    """
    Brief: Join labels into a dot-terminated presentation name.

    Inputs:
      - labels: Ordered labels. Every label except the last has backslash, dot
        and space escaped; the last (domain) label is written as-is so a
        multi-label domain such as ``example.com`` stays multi-label.

    Outputs:
      - str: Presentation name ending in ``.``; no labels gives the root name ``.``.

    Example:
      >>> encode_name(["a.b", "c"])
      'a\\\\.b.c.'
    """
    if not labels:
        return "."
    last = len(labels) - 1
    return "".join(
        (_escape_label(label) if i < last else label) + "."
        for i, label in enumerate(labels)
    )
