"""
Unit Tests: settings and logging setup
"""

import logging

import pytest

from cloudflare_zone_bot.config import Settings, configure_logging, logger
from cloudflare_zone_bot.exceptions import ConfigurationError


@pytest.fixture
def env(monkeypatch):
    for name in (
        "WEBHOOK_URL",
        "CLOUDFLARE_EMAIL",
        "DOMAINS_PER_PAGE",
        "LOG_ENABLED",
        "LOG_LEVEL",
        "LOG_PATH",
        "HOST",
        "PORT",
        "PROXY_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123456:TEST")
    monkeypatch.setenv("CLOUDFLARE_API_TOKEN", "cf-token")
    return monkeypatch


@pytest.fixture
def restore_logger():
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


class TestSettings:
    def test_defaults(self, env):
        settings = Settings.from_env()

        assert settings.domains_per_page == 10
        assert settings.log_enabled is True
        assert settings.log_level == "info"
        assert settings.log_path == "logs/bot.log"
        assert settings.port == 8080

    def test_overrides(self, env):
        env.setenv("DOMAINS_PER_PAGE", "5")
        env.setenv("LOG_ENABLED", "false")
        env.setenv("LOG_LEVEL", "DEBUG")
        env.setenv("WEBHOOK_URL", "https://bot.example.com/webhook")

        settings = Settings.from_env()

        assert settings.domains_per_page == 5
        assert settings.log_enabled is False
        assert settings.log_level == "debug"
        assert settings.webhook_url == "https://bot.example.com/webhook"

    @pytest.mark.parametrize("missing", ["TELEGRAM_BOT_TOKEN", "CLOUDFLARE_API_TOKEN"])
    def test_required_tokens(self, env, missing):
        env.setenv(missing, "")

        with pytest.raises(ConfigurationError, match=missing):
            Settings.from_env()

    @pytest.mark.parametrize(
        "name, value",
        [("DOMAINS_PER_PAGE", "0"), ("DOMAINS_PER_PAGE", "ten"), ("PORT", "http"), ("LOG_LEVEL", "loud")],
    )
    def test_invalid_values(self, env, name, value):
        env.setenv(name, value)

        with pytest.raises(ConfigurationError):
            Settings.from_env()


class TestConfigureLogging:
    def test_writes_to_log_file(self, tmp_path, restore_logger):
        log_path = tmp_path / "nested" / "bot.log"
        settings = Settings("t", "c", log_path=str(log_path), log_level="warning")

        configure_logging(settings)
        logger.info("hidden")
        logger.warning("Cloudflare GET /zones returned HTTP 500")
        for handler in logger.handlers:
            handler.flush()

        content = log_path.read_text(encoding="utf-8")
        assert "WARNING - Cloudflare GET /zones returned HTTP 500" in content
        assert "hidden" not in content

    def test_disabled_logging_drops_everything(self, tmp_path, restore_logger):
        settings = Settings("t", "c", log_enabled=False, log_path=str(tmp_path / "bot.log"))

        configure_logging(settings)

        assert [type(h) for h in logger.handlers] == [logging.NullHandler]
        assert not logger.isEnabledFor(logging.CRITICAL)
        assert not (tmp_path / "bot.log").exists()
