"""
Cloudflare Zone Bot Configuration
Settings loaded from the environment (and an optional .env file) plus logging setup.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from cloudflare_zone_bot.exceptions import ConfigurationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

logger = logging.getLogger("cloudflare_zone_bot")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Static bot configuration."""

    telegram_token: str
    cloudflare_api_token: str
    cloudflare_email: str = ""
    webhook_url: str = ""
    domains_per_page: int = 10
    log_enabled: bool = True
    log_level: str = "info"
    log_path: str = "logs/bot.log"
    host: str = "0.0.0.0"
    port: int = 8080
    proxy_url: str = ""

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "Settings":
        """Build settings from environment variables."""
        load_dotenv(env_file)

        telegram_token = os.getenv("TELEGRAM_BOT_TOKEN", "")
        if not telegram_token:
            raise ConfigurationError("TELEGRAM_BOT_TOKEN environment variable is required")

        api_token = os.getenv("CLOUDFLARE_API_TOKEN", "")
        if not api_token:
            raise ConfigurationError("CLOUDFLARE_API_TOKEN environment variable is required")

        try:
            per_page = int(os.getenv("DOMAINS_PER_PAGE", "10"))
            port = int(os.getenv("PORT", "8080"))
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}") from e

        if per_page < 1:
            raise ConfigurationError("DOMAINS_PER_PAGE must be at least 1")

        log_level = os.getenv("LOG_LEVEL", "info").lower()
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Unsupported LOG_LEVEL: {log_level}")

        return cls(
            telegram_token=telegram_token,
            cloudflare_api_token=api_token,
            cloudflare_email=os.getenv("CLOUDFLARE_EMAIL", ""),
            webhook_url=os.getenv("WEBHOOK_URL", ""),
            domains_per_page=per_page,
            log_enabled=_env_bool("LOG_ENABLED", True),
            log_level=log_level,
            log_path=os.getenv("LOG_PATH", "logs/bot.log"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=port,
            proxy_url=os.getenv("PROXY_URL", ""),
        )


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach the file handler to the package logger and apply the threshold.

    With logging disabled the logger keeps a single NullHandler and drops
    every record, so callers can log unconditionally.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if not settings.log_enabled:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.CRITICAL + 1)
        return logger

    log_file = Path(settings.log_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(formatter)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)
    logger.setLevel(LOG_LEVELS[settings.log_level])
    return logger
