"""
Unit tests for configuration and logging setup.
"""
import logging

import pytest

from app.core.config import Settings, get_settings
from app.core.logging import configure_logging


class TestSettings:
    """Tests for configuration settings."""

    def test_default_settings(self):
        """Test default settings values."""
        settings = Settings()
        assert settings.PORT == 8080
        assert settings.CRAWL_CONCURRENTLY is False
        assert settings.CRAWL_FAIL_FAST is False
        assert settings.SITES_FILE is None

    def test_stats_country_url_format(self):
        """Test the stats URL template strips a trailing slash."""
        settings = Settings(STATS_API_URL="https://stats.example.com/")
        assert settings.stats_country_url == "https://stats.example.com/countries/{country}"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CRAWL_CONCURRENTLY", "true")
        monkeypatch.setenv("PORT", "9000")
        settings = Settings()
        assert settings.CRAWL_CONCURRENTLY is True
        assert settings.PORT == 9000

    def test_get_settings_cached(self):
        """Test settings are cached."""
        assert get_settings() is get_settings()


class TestConfigureLogging:
    """Tests for logging setup."""

    @pytest.fixture(autouse=True)
    def restore_root(self):
        handlers = logging.root.handlers[:]
        level = logging.root.level
        yield
        logging.root.handlers[:] = handlers
        logging.root.setLevel(level)

    @pytest.mark.parametrize("level, expected", [
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("10", 10),
        (logging.ERROR, logging.ERROR),
        (None, logging.INFO),
        ("not-a-level", logging.INFO),
    ])
    def test_levels(self, level, expected):
        assert configure_logging(level) == expected
        assert logging.root.level == expected

    def test_replaces_handlers(self):
        configure_logging("INFO")
        configure_logging("INFO")
        assert len(logging.root.handlers) == 1
