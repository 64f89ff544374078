"""Telegram webhook bot for managing Cloudflare zones."""

__version__ = "0.1.0"
