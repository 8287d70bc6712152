"""Unit tests for infrastructure.logging.setup module.

Tests cover:
- configure_logging function
- get_logger and get_module_logger context binding
- Test logging suppression in test environment
- Service name context and catalog transport log levels
"""

import logging

import pytest
import structlog

from infrastructure.logging.setup import (
    SERVICE_NAME,
    TRANSPORT_LOGGERS,
    configure_logging,
    configure_transport_loggers,
    get_logger,
    get_module_logger,
    _is_test_environment,
)
from l10n import detector, factory, loader


@pytest.mark.unit
class TestIsTestEnvironment:
    """Test suite for _is_test_environment helper."""

    def test_detects_pytest_in_sys_modules(self):
        """Returns True when pytest is in sys.modules."""
        assert _is_test_environment() is True


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_configure_logging_returns_bound_logger(self):
        """configure_logging returns a logger with the usual methods."""
        result = configure_logging()

        assert hasattr(result, "info")
        assert hasattr(result, "debug")
        assert hasattr(result, "warning")
        assert hasattr(result, "error")

    @pytest.mark.parametrize("log_level", ["DEBUG", "INFO", "WARNING"])
    def test_configure_logging_with_log_level(self, log_level):
        """configure_logging accepts log_level parameter."""
        assert configure_logging(log_level=log_level) is not None

    @pytest.mark.parametrize("is_production", [True, False])
    def test_configure_logging_with_is_production(self, is_production):
        assert configure_logging(is_production=is_production) is not None

    def test_configure_logging_idempotent(self):
        """Multiple configure_logging calls are safe."""
        assert configure_logging() is not None
        assert configure_logging() is not None

    def test_configure_logging_suppresses_in_test_env(self):
        """In test environment, root logger level is set high to suppress output."""
        configure_logging()

        assert logging.getLogger().level >= logging.CRITICAL


@pytest.mark.unit
class TestModuleLoggers:
    """Test suite for get_logger and get_module_logger."""

    def test_get_module_logger_binds_module_context(self):
        logger = get_module_logger()

        context = structlog.get_context(logger)
        assert context["component"] == "test_setup"
        assert context["module_path"].endswith("test_setup")

    def test_get_logger_with_name(self):
        logger = get_logger("l10n.loader")
        assert structlog.get_context(logger)["logger_name"] == "l10n.loader"

    def test_get_logger_detects_caller(self):
        logger = get_logger()
        assert structlog.get_context(logger)["logger_name"].endswith("test_setup")

    def test_logging_methods_dont_raise(self):
        """Logging methods execute without raising exceptions."""
        log = get_module_logger().bind(locale="fr")

        log.debug("catalog_registered", message_count=3)
        log.info("locale_changed")
        log.warning("locale_not_available")
        log.error("catalog_load_failed", reason="connection reset")

    def test_exception_logging(self):
        logger = get_module_logger()

        try:
            raise ValueError("test error")
        except ValueError:
            logger.exception("unexpected_error")

    def test_loggers_carry_service_name(self):
        assert structlog.get_context(get_module_logger())["service"] == "l10n"
        assert structlog.get_context(get_logger("l10n.loader"))["service"] == (
            SERVICE_NAME
        )

    def test_l10n_modules_use_module_loggers(self):
        """Every l10n module logs with its own component context."""
        for module, component in (
            (detector, "detector"),
            (factory, "factory"),
            (loader, "loader"),
        ):
            context = structlog.get_context(module.logger)
            assert context["component"] == component
            assert context["module_path"] == f"l10n.{component}"


@pytest.mark.unit
class TestTransportLoggers:
    """Test suite for the catalog transport log levels."""

    @pytest.fixture(autouse=True)
    def restore_levels(self):
        levels = {name: logging.getLogger(name).level for name in TRANSPORT_LOGGERS}
        yield
        for name, level in levels.items():
            logging.getLogger(name).setLevel(level)

    @pytest.mark.parametrize("level", [logging.INFO, logging.WARNING, logging.ERROR])
    def test_request_logs_hidden_above_debug(self, level):
        configure_transport_loggers(level)

        for name in TRANSPORT_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_request_logs_kept_when_debugging(self):
        configure_transport_loggers(logging.DEBUG)

        for name in TRANSPORT_LOGGERS:
            assert logging.getLogger(name).level == logging.DEBUG
