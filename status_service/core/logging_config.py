"""Shared logging configuration."""

from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

_CONFIGURED = False
_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s %(service)s"


class _ServiceNameFilter(logging.Filter):
    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service_name
        return True


def build_handler(service_name: str, log_format: str = "json") -> logging.Handler:
    """Stream handler stamping ``service`` on every record.

    ``log_format`` is ``json`` (one object per line) or ``text`` for local runs.
    """
    handler = logging.StreamHandler()
    if log_format == "text":
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(service)s] %(name)s: %(message)s"))
    else:
        handler.setFormatter(jsonlogger.JsonFormatter(_FIELDS))
    handler.addFilter(_ServiceNameFilter(service_name))
    return handler


def setup_logging(service_name: Optional[str] = None) -> None:
    """Configure root logging once from LOG_LEVEL, LOG_FORMAT and SERVICE_NAME."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    service = service_name or os.getenv("SERVICE_NAME", "status-service")
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(build_handler(service, os.getenv("LOG_FORMAT", "json").lower()))
    root.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    logging.captureWarnings(True)
    _CONFIGURED = True


__all__ = ["build_handler", "setup_logging"]
