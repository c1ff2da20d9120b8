"""Logging configuration for immo_edl.

structlog over stdlib logging. Every event carries ``service``; loggers can
carry extra bound context (a service binds its wear table version, for
instance). Only the application layer logs; the calculators and the
comparator stay silent.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Optional

import structlog

from immo_edl.core.settings import AppSettings, get_settings

SERVICE_NAME = "immo_edl"

_configured: bool = False


def add_service_name(logger: Any, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _handlers(settings: AppSettings) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        path = Path(settings.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                str(path), maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
            )
        )
    return handlers


def configure_logging(
    settings: Optional[AppSettings] = None,
    level: str | None = None,
    json_output: bool | None = None,
) -> None:
    """Configure stdlib logging and structlog once per process.

    Args:
        settings: Source of log level, renderer and log file. Defaults to get_settings().
        level: Overrides ``settings.log_level``.
        json_output: Overrides ``settings.json_logs``.
    """
    global _configured

    if _configured:
        return

    settings = settings or get_settings()
    log_level = (level or settings.log_level).upper()
    use_json = settings.json_logs if json_output is None else json_output

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level, logging.INFO),
        handlers=_handlers(settings),
        force=True,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        add_service_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer(colors=False),
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str | None = None, **context: Any) -> structlog.stdlib.BoundLogger:
    """Logger bound to ``logger_name`` and any extra context.

    Logging is configured lazily on first call.
    """
    if not _configured:
        configure_logging()

    if name:
        context = {"logger_name": name, **context}
    return structlog.get_logger().bind(**context)
