"""Structlog configuration for the l10n service.

Every logger handed out here carries ``service="l10n"`` so catalog and
locale events can be told apart once they are shipped alongside the
host application's logs.

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("loaded_catalog", locale="fr", url="/assets/locales/fr.json")

Dependencies:
    - infrastructure.services.get_settings
"""

import inspect
import logging
import sys
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.services import get_settings

SERVICE_NAME = "l10n"

# stdlib loggers of the HTTP catalog transport, which log every request at INFO
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def _is_test_environment() -> bool:
    """Detect if running in a test environment."""
    return "pytest" in sys.modules


def _resolve_level(log_level: Optional[str]) -> int:
    name = (log_level or get_settings().LOG_LEVEL).upper()
    return getattr(logging, name, logging.INFO)


def configure_transport_loggers(level: int) -> None:
    """Keep catalog request logs out of the output unless debugging.

    Args:
        level: Effective application log level.
    """
    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging.

    Test runs get a silent configuration. Otherwise events are rendered
    as JSON in production and on the console elsewhere, with callsite
    and exception details.

    Args:
        log_level: Override for settings.LOG_LEVEL (DEBUG, INFO, ...).
        is_production: Override for settings.is_production.

    Returns:
        Logger bound to the service name.
    """
    if _is_test_environment():
        logging.root.setLevel(logging.CRITICAL + 1)
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            level=logging.CRITICAL + 1,
            force=True,
        )
        return structlog.stdlib.get_logger().bind(service=SERVICE_NAME)

    if is_production is None:
        is_production = get_settings().is_production

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
        if is_production
        else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = _resolve_level(log_level)
    logging.basicConfig(format="%(message)s", level=level)
    configure_transport_loggers(level)

    return structlog.stdlib.get_logger().bind(service=SERVICE_NAME)


# Module-level logger (auto-configured on import)
logger: BoundLogger = configure_logging()


def _caller_module(depth: int = 2) -> Optional[str]:
    frame = inspect.currentframe()
    for _ in range(depth):
        if frame is None:
            return None
        frame = frame.f_back
    module = inspect.getmodule(frame) if frame is not None else None
    return module.__name__ if module else None


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Get a logger bound to ``name`` or to the calling module's name."""
    return logger.bind(logger_name=name or _caller_module() or "unknown")


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module.

    Binds ``component`` (last part of the module path) and ``module_path``.

    Example:
        # In l10n/loader.py
        logger = get_module_logger()
        # context: {"service": "l10n", "component": "loader",
        #           "module_path": "l10n.loader"}
    """
    module_name = _caller_module()
    if module_name is None:
        return logger.bind(component="unknown")
    return logger.bind(
        component=module_name.split(".")[-1],
        module_path=module_name,
    )
