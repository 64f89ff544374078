#!/usr/bin/env python3
"""
Cloudflare Zone Bot
A Telegram webhook bot for managing Cloudflare zones, DNS records, WAF rules and redirects.
"""

import uvicorn

from cloudflare_zone_bot.config import Settings, configure_logging
from cloudflare_zone_bot.webhook import create_app


def main() -> None:
    """Main entry point for the bot."""
    try:
        settings = Settings.from_env()
        logger = configure_logging(settings)
        logger.info(f"Starting webhook server on {settings.host}:{settings.port}")
        uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level)
    except KeyboardInterrupt:
        print("\nBot stopped by user")
    except Exception as e:
        print(f"Error starting bot: {e}")
        raise


if __name__ == "__main__":
    main()
