"""Root logger setup for the wasd CLI.

Brief:
  init_logging() takes the validated ``logging`` section (a LoggingConfig) and
  installs stderr, file and syslog handlers. Every line carries a lowercase
  ``[level]`` tag; syslog lines omit the timestamp because syslog adds one.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
import time
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple, Union

if TYPE_CHECKING:  # pragma: no cover
    from .config_parser import LoggingConfig

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "crit": logging.CRITICAL,
    "critical": logging.CRITICAL,
}

DEFAULT_SYSLOG_ADDRESS = "/dev/log"


class TaggedFormatter(logging.Formatter):
    """``[level] logger: message``, prefixed by a UTC timestamp when asked."""

    converter = time.gmtime

    def __init__(self, timestamps: bool = True) -> None:
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%SZ")
        self.timestamps = timestamps

    def format(self, record: logging.LogRecord) -> str:
        name = logging.getLevelName(record.levelno).lower()
        tag = {"warning": "warn", "critical": "crit"}.get(name, name)
        if tag.startswith("level "):
            tag = f"lvl{record.levelno}"
        line = f"[{tag}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        if self.timestamps:
            line = f"{self.formatTime(record, self.datefmt)} {line}"
        return line


def _syslog_target(syslog: Union[bool, Dict[str, Any]]) -> Tuple[Any, int]:
    """Return (address, facility) for SysLogHandler from the ``syslog`` option."""
    opts = syslog if isinstance(syslog, dict) else {}
    address = opts.get("address", DEFAULT_SYSLOG_ADDRESS)
    if isinstance(address, (list, tuple)):
        address = (str(address[0]), int(address[1]))
    facility = getattr(
        logging.handlers.SysLogHandler,
        f"LOG_{str(opts.get('facility', 'user')).upper()}",
        logging.handlers.SysLogHandler.LOG_USER,
    )
    return address, facility


def init_logging(cfg: Optional["LoggingConfig"]) -> None:
    """
    Brief: Replace the root logger's handlers according to ``cfg``.

    Inputs:
      - cfg: LoggingConfig (None keeps the defaults: info level to stderr).

    Outputs:
      - None
    """
    level = LEVELS.get(getattr(cfg, "level", "info"), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    handlers = []
    if getattr(cfg, "stderr", True):
        handlers.append(logging.StreamHandler(sys.stderr))

    file_path = (getattr(cfg, "file", None) or "").strip()
    if file_path:
        path = os.path.abspath(os.path.expanduser(file_path))
        os.makedirs(os.path.dirname(path), exist_ok=True)
        handlers.append(logging.FileHandler(path, mode="a", encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(TaggedFormatter())
        root.addHandler(handler)

    syslog = getattr(cfg, "syslog", False)
    if syslog:
        address, facility = _syslog_target(syslog)
        try:
            syslog_handler = logging.handlers.SysLogHandler(
                address=address, facility=facility
            )
        except OSError as e:
            root.warning("Failed to configure syslog at %s: %s", address, e)
        else:
            syslog_handler.setFormatter(TaggedFormatter(timestamps=False))
            root.addHandler(syslog_handler)

    logging.captureWarnings(True)
