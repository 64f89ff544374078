"""
Unit Tests: update classification and routing
"""

from unittest.mock import AsyncMock, Mock

import pytest

from cloudflare_zone_bot.handlers import CallbackHandler, CommandHandler
from cloudflare_zone_bot.router import UpdateKind, UpdateRouter, classify
from tests.conftest import callback_update, message_update, to_update


@pytest.fixture
def router(callback_transport):
    commands = Mock(spec=CommandHandler)
    commands.handle_command = AsyncMock()
    commands.handle_domain_search = AsyncMock()
    callbacks = Mock(spec=CallbackHandler)
    callbacks.handle_callback = AsyncMock()
    return UpdateRouter(commands, callbacks, callback_transport)


class TestClassify:
    @pytest.mark.parametrize(
        "payload, kind",
        [
            (message_update("/domains"), UpdateKind.COMMAND),
            (message_update("example"), UpdateKind.TEXT),
            (message_update(None), UpdateKind.UNSUPPORTED),
            (callback_update("page_0"), UpdateKind.CALLBACK),
            ({"update_id": 5, "edited_message": message_update("x")["message"]}, UpdateKind.UNSUPPORTED),
        ],
    )
    def test_kinds(self, payload, kind):
        assert classify(to_update(payload)) is kind


class TestRoute:
    @pytest.mark.asyncio
    async def test_command(self, router):
        kind = await router.route(to_update(message_update("/add example.com")))

        assert kind is UpdateKind.COMMAND
        router.commands.handle_command.assert_awaited_once_with("/add example.com")
        router.commands.handle_domain_search.assert_not_called()

    @pytest.mark.asyncio
    async def test_free_text(self, router):
        await router.route(to_update(message_update("example")))

        router.commands.handle_domain_search.assert_awaited_once_with("example")
        router.commands.handle_command.assert_not_called()

    @pytest.mark.asyncio
    async def test_callback_is_answered(self, router, bot):
        await router.route(to_update(callback_update("domain_zone1")))

        router.callbacks.handle_callback.assert_awaited_once_with("domain_zone1")
        bot.answer_callback_query.assert_awaited_once_with("cb-1", text=None)

    @pytest.mark.asyncio
    async def test_callback_answered_only_once(self, router, bot):
        async def answer_with_text(payload):
            await router.transport.answer_callback_query("Domain deleted")

        router.callbacks.handle_callback.side_effect = answer_with_text

        await router.route(to_update(callback_update("confirm_delete_zone1")))

        bot.answer_callback_query.assert_awaited_once_with("cb-1", text="Domain deleted")

    @pytest.mark.asyncio
    async def test_unsupported_is_ignored(self, router, bot):
        kind = await router.route(to_update(message_update(None)))

        assert kind is UpdateKind.UNSUPPORTED
        router.commands.handle_command.assert_not_called()
        router.callbacks.handle_callback.assert_not_called()
        bot.send_message.assert_not_called()
