"""
Telegram Webhook Endpoint
Receives one update per request and answers 400 for bodies that are not
updates, 500 when processing fails and 200 otherwise.
"""

import json
from contextlib import asynccontextmanager
from urllib.parse import urlsplit

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from telegram import Bot

from cloudflare_zone_bot.bot import CloudflareBotRunner, build_bot
from cloudflare_zone_bot.config import Settings, logger
from cloudflare_zone_bot.exceptions import InvalidUpdateError

DEFAULT_WEBHOOK_PATH = "/webhook"


def webhook_path(webhook_url: str) -> str:
    """Serve the endpoint under the path of the public webhook URL."""
    path = urlsplit(webhook_url).path if webhook_url else ""
    return path if path and path != "/" else DEFAULT_WEBHOOK_PATH


def create_app(
    settings: Settings,
    bot: Bot | None = None,
    runner: CloudflareBotRunner | None = None,
) -> FastAPI:
    bot = bot or build_bot(settings)
    runner = runner or CloudflareBotRunner(settings, bot)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await bot.initialize()
        if settings.webhook_url:
            await bot.set_webhook(settings.webhook_url, allowed_updates=["message", "callback_query"])
            logger.info(f"Webhook registered at {settings.webhook_url}")
        try:
            yield
        finally:
            await bot.shutdown()

    app = FastAPI(title="Cloudflare Zone Bot", lifespan=lifespan)

    @app.post(webhook_path(settings.webhook_url))
    async def telegram_webhook(request: Request) -> JSONResponse:
        body = await request.body()
        logger.info("Webhook request received")

        try:
            update = runner.parse_update(json.loads(body))
        except (ValueError, InvalidUpdateError) as e:
            logger.error(f"Invalid update received: {e} {body[:500]!r}")
            return JSONResponse(status_code=400, content={"ok": False, "error": "invalid update"})

        try:
            await runner.process_update(update)
        except Exception as e:
            logger.exception(f"Error processing update {update.update_id}: {e}")
            return JSONResponse(status_code=500, content={"ok": False, "error": "processing failed"})

        return JSONResponse(status_code=200, content={"ok": True})

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app
