import logging
from collections.abc import Callable
from typing import Any

from telegram import Bot, Update
from telegram.request import HTTPXRequest

from cloudflare_zone_bot.cloudflare_api import CloudflareAPI
from cloudflare_zone_bot.config import Settings, logger as default_logger
from cloudflare_zone_bot.exceptions import InvalidUpdateError
from cloudflare_zone_bot.handlers import CallbackHandler, CommandHandler
from cloudflare_zone_bot.router import UpdateRouter
from cloudflare_zone_bot.transport import TelegramTransport


def build_bot(settings: Settings) -> Bot:
    """Create the Telegram bot, routed through PROXY_URL when one is configured."""
    if settings.proxy_url:
        return Bot(settings.telegram_token, request=HTTPXRequest(proxy=settings.proxy_url))
    return Bot(settings.telegram_token)


class CloudflareBotRunner:
    """Wires the API client, transport, handlers and router for each update."""

    def __init__(
        self,
        settings: Settings,
        bot: Bot,
        api_factory: Callable[[], CloudflareAPI] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings
        self.bot = bot
        self.logger = logger or default_logger
        self.api_factory = api_factory or (lambda: CloudflareAPI.from_settings(settings, self.logger))

    def parse_update(self, payload: Any) -> Update:
        """Decode a webhook body into an Update, or raise InvalidUpdateError."""
        if not isinstance(payload, dict) or "update_id" not in payload:
            raise InvalidUpdateError("Body is not a Telegram update")
        try:
            return Update.de_json(payload, None)
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidUpdateError(f"Malformed update: {e}") from e

    def transport_for(self, update: Update) -> TelegramTransport | None:
        if update.message is not None:
            return TelegramTransport(
                self.bot,
                chat_id=update.message.chat.id,
                message_id=update.message.message_id,
                logger=self.logger,
            )

        query = update.callback_query
        if query is not None and query.message is not None:
            return TelegramTransport(
                self.bot,
                chat_id=query.message.chat.id,
                message_id=query.message.message_id,
                callback_query_id=query.id,
                logger=self.logger,
            )
        return None

    async def process_update(self, update: Update) -> None:
        """Handle one update end to end; Telegram failures propagate."""
        transport = self.transport_for(update)
        if transport is None:
            self.logger.warning(f"Unsupported update type in update {update.update_id}")
            return

        # A fresh client per update, so the account id is never shared between updates.
        api = self.api_factory()
        per_page = self.settings.domains_per_page
        router = UpdateRouter(
            CommandHandler(api, transport, per_page, self.logger),
            CallbackHandler(api, transport, per_page, self.logger),
            transport,
            self.logger,
        )
        await router.route(update)
