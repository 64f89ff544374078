"""
Telegram transport
Sends, edits and answers on behalf of a single inbound update.
"""

import logging

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup, Message
from telegram.constants import ParseMode
from telegram.error import BadRequest

from cloudflare_zone_bot.config import logger as default_logger


class TelegramTransport:
    """Chat-bound wrapper around ``telegram.Bot``.

    Telegram errors propagate as ``telegram.error.TelegramError``; the only one
    swallowed is the "message is not modified" reply to an edit that changes
    nothing.
    """

    def __init__(
        self,
        bot: Bot,
        chat_id: int,
        message_id: int | None = None,
        callback_query_id: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.bot = bot
        self.chat_id = chat_id
        self.message_id = message_id
        self.callback_query_id = callback_query_id
        self.logger = logger or default_logger
        self.callback_answered = False

    @staticmethod
    def _markup(keyboard: list[list[InlineKeyboardButton]] | None) -> InlineKeyboardMarkup | None:
        return InlineKeyboardMarkup(keyboard) if keyboard else None

    async def send_message(
        self, text: str, keyboard: list[list[InlineKeyboardButton]] | None = None
    ) -> Message:
        return await self.bot.send_message(
            chat_id=self.chat_id,
            text=text,
            parse_mode=ParseMode.HTML,
            reply_markup=self._markup(keyboard),
        )

    async def edit_message(
        self, text: str, keyboard: list[list[InlineKeyboardButton]] | None = None
    ) -> Message | bool:
        if self.message_id is None:
            return await self.send_message(text, keyboard)
        try:
            return await self.bot.edit_message_text(
                text=text,
                chat_id=self.chat_id,
                message_id=self.message_id,
                parse_mode=ParseMode.HTML,
                reply_markup=self._markup(keyboard),
            )
        except BadRequest as e:
            if "message is not modified" not in str(e).lower():
                raise
            self.logger.debug(f"Message {self.message_id} in chat {self.chat_id} already up to date")
            return True

    async def answer_callback_query(self, text: str | None = None) -> bool:
        """Stop the button's loading indicator; a query is only answered once."""
        if not self.callback_query_id or self.callback_answered:
            return False
        self.callback_answered = True
        return await self.bot.answer_callback_query(self.callback_query_id, text=text)
