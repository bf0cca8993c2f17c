"""
loyalty_bff.observability.logging

structlog setup for the BFF.

Responsibilities:
- Emit one JSON object per log line on stdout through stdlib logging.
- Stamp every line with the service and environment it came from.
- Hand out bound loggers.
"""

from __future__ import annotations

import logging
import sys
import uuid
from decimal import Decimal
from typing import Any

import structlog

# httpx logs every outbound request at INFO; downstream failures surface as exceptions.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, service_name: str, env: str, level: str) -> None:
    log_level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _static_fields(service=service_name, env=env),
            _plain_values,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _static_fields(**fields: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def _plain_values(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    # Ids and prices would otherwise be rendered through repr().
    for key, value in event_dict.items():
        if isinstance(value, uuid.UUID | Decimal):
            event_dict[key] = str(value)
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Request metadata (request id, path, customer id) is bound through contextvars in
# `observability.middleware` and `auth.deps`.
