"""Unit tests for infrastructure.logging.setup module.

Tests cover:
- configure_logging function
- get_module_logger function
- Test logging suppression in test environment
"""

import logging

import pytest
import structlog

from infrastructure.logging.setup import (
    SERVICE_NAME,
    _add_service_name,
    _build_processors,
    _is_test_environment,
    configure_logging,
    get_module_logger,
)


@pytest.mark.unit
class TestIsTestEnvironment:
    """Test suite for _is_test_environment helper."""

    def test_detects_pytest_in_sys_modules(self):
        """Returns True when pytest is in sys.modules."""
        assert _is_test_environment() is True


@pytest.mark.unit
class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_configure_logging_returns_bound_logger(self, mock_settings):
        """configure_logging returns a logger with the standard methods."""
        result = configure_logging(settings=mock_settings)

        assert hasattr(result, "info")
        assert hasattr(result, "debug")
        assert hasattr(result, "warning")
        assert hasattr(result, "error")

    def test_configure_logging_accepts_overrides(self, mock_settings):
        """Log level and production overrides are accepted."""
        assert configure_logging(settings=mock_settings, log_level="DEBUG")
        assert configure_logging(settings=mock_settings, is_production=True)
        assert configure_logging(settings=mock_settings, is_production=False)

    def test_configure_logging_idempotent(self, mock_settings):
        """Multiple configure_logging calls are safe."""
        logger1 = configure_logging(settings=mock_settings)
        logger2 = configure_logging(settings=mock_settings)

        assert logger1 is not None
        assert logger2 is not None

    def test_configure_logging_suppresses_in_test_env(self, mock_settings):
        """In test environment, root logger level is set high to suppress output."""
        configure_logging(settings=mock_settings)

        assert logging.getLogger().level > logging.CRITICAL


@pytest.mark.unit
class TestGetModuleLogger:
    """Test suite for get_module_logger function."""

    def test_get_module_logger_returns_bound_logger(self, mock_settings):
        configure_logging(settings=mock_settings)

        logger = get_module_logger()

        assert hasattr(logger, "info")
        assert hasattr(logger, "bind")

    def test_get_module_logger_binds_calling_module(self):
        """Component and module path are taken from the caller."""
        from packages.geolocate.providers import auto

        context = structlog.get_context(auto.logger)

        assert context["component"] == "auto"
        assert context["module_path"] == "packages.geolocate.providers.auto"

    def test_logging_methods_dont_raise(self, mock_settings):
        """Logging methods execute without raising (output is suppressed)."""
        configure_logging(settings=mock_settings)

        log = get_module_logger().bind(ip_address="8.8.8.8")

        log.debug("debug message", extra="data")
        log.info("info message", key="value")
        log.warning("warning message")
        log.error("error message", error_code="E001")


@pytest.mark.unit
class TestProcessors:
    """Test suite for the production and development processor chains."""

    def test_service_name_added(self):
        event_dict = _add_service_name(None, "info", {"event": "lookup"})

        assert event_dict["service"] == SERVICE_NAME

    def test_service_name_not_overwritten(self):
        event_dict = _add_service_name(None, "info", {"service": "other"})

        assert event_dict["service"] == "other"

    def test_production_renders_json(self):
        processors = _build_processors(prod_mode=True)

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert structlog.contextvars.merge_contextvars in processors

    def test_development_renders_console(self):
        processors = _build_processors(prod_mode=False)

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
