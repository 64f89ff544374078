import logging
from enum import Enum

from telegram import Update

from cloudflare_zone_bot.config import logger as default_logger
from cloudflare_zone_bot.handlers import CallbackHandler, CommandHandler
from cloudflare_zone_bot.transport import TelegramTransport


class UpdateKind(Enum):
    COMMAND = "command"
    TEXT = "text"
    CALLBACK = "callback"
    UNSUPPORTED = "unsupported"


def classify(update: Update) -> UpdateKind:
    message = update.message
    if message is not None and message.text:
        return UpdateKind.COMMAND if message.text.startswith("/") else UpdateKind.TEXT
    if update.callback_query is not None:
        return UpdateKind.CALLBACK
    return UpdateKind.UNSUPPORTED


class UpdateRouter:
    """Sends one update to exactly one handler."""

    def __init__(
        self,
        commands: CommandHandler,
        callbacks: CallbackHandler,
        transport: TelegramTransport,
        logger: logging.Logger | None = None,
    ) -> None:
        self.commands = commands
        self.callbacks = callbacks
        self.transport = transport
        self.logger = logger or default_logger

    async def route(self, update: Update) -> UpdateKind:
        kind = classify(update)
        self.logger.info(f"Processing update {update.update_id} ({kind.value})")

        if kind is UpdateKind.COMMAND:
            await self.commands.handle_command(update.message.text)
        elif kind is UpdateKind.TEXT:
            await self.commands.handle_domain_search(update.message.text)
        elif kind is UpdateKind.CALLBACK:
            await self.callbacks.handle_callback(update.callback_query.data or "")
            # Stops the button's loading indicator unless the handler already answered.
            await self.transport.answer_callback_query()
        else:
            self.logger.warning(f"Unsupported update type in update {update.update_id}")

        return kind
