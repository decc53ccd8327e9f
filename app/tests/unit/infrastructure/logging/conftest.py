"""Fixtures for infrastructure.logging tests."""

from unittest.mock import Mock

import pytest

from infrastructure.configuration import Settings


@pytest.fixture
def mock_settings():
    """Development-mode settings at INFO level."""
    settings = Mock(spec=Settings)
    settings.PREFIX = "dev-"
    settings.LOG_LEVEL = "INFO"
    settings.is_production = False
    return settings
