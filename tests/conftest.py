"""
pytest configuration and fixtures shared by all tests
"""

from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, Mock

import cloudflare
import httpx
import pytest
from telegram import Update

from cloudflare_zone_bot.cloudflare_api import CloudflareAPI
from cloudflare_zone_bot.config import Settings
from cloudflare_zone_bot.models import Domain
from cloudflare_zone_bot.transport import TelegramTransport

CHAT_ID = 42
MESSAGE_ID = 100
CALLBACK_ID = "cb-1"


# ==================== CLOUDFLARE FAKES ====================

def ok(result: Any, total_pages: int | None = None) -> dict[str, Any]:
    """Successful Cloudflare v4 envelope."""
    envelope: dict[str, Any] = {"success": True, "errors": [], "messages": [], "result": result}
    if total_pages is not None:
        envelope["result_info"] = {"page": 1, "total_pages": total_pages}
    return envelope


def api_status_error(status_code: int, message: str, path: str = "/") -> cloudflare.APIStatusError:
    error_class = {
        400: cloudflare.BadRequestError,
        403: cloudflare.PermissionDeniedError,
        404: cloudflare.NotFoundError,
    }.get(status_code, cloudflare.InternalServerError)
    request = httpx.Request("GET", f"https://api.cloudflare.com/client/v4{path}")
    return error_class(
        message,
        response=httpx.Response(status_code, request=request),
        body={"success": False, "errors": [{"code": 1000, "message": message}]},
    )


class FakeModel:
    """SDK model stand-in: attribute access plus ``model_dump``."""

    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data

    def __getattr__(self, name: str) -> Any:
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(name) from None

    def model_dump(self) -> dict[str, Any]:
        return dict(self._data)


class FakeListing:
    """Typed ``.list()`` resource such as ``client.zones``.

    Calls are recorded as ("LIST", path, params, None) and answered from the
    ("LIST", path) route: a list of dicts, an exception, or a callable taking
    params. A missing route is an empty listing.
    """

    def __init__(self, client: "FakeCloudflare", template: str) -> None:
        self.client = client
        self.template = template

    def list(self, **params: Any) -> list[FakeModel]:
        path_args = {key: params.pop(key) for key in list(params) if "{" + key + "}" in self.template}
        path = self.template.format(**path_args)
        self.client.calls.append(("LIST", path, params, None))

        response = self.client.routes.get(("LIST", path), [])
        if isinstance(response, Exception):
            raise response
        if callable(response):
            response = response(params)
        return [FakeModel(item) for item in response]


class FakeCloudflare:
    """Stands in for ``cloudflare.Cloudflare``.

    Raw v4 routes are keyed by (method, path). A route is a response envelope,
    an exception to raise, or a callable taking (params, body). Unknown raw
    routes answer 404 like the real API does for unknown ids. The typed
    listings use "LIST" as their method.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[tuple[str, str, dict | None, Any]] = []
        self.zones = FakeListing(self, "/zones")
        self.accounts = FakeListing(self, "/accounts")
        self.dns = SimpleNamespace(records=FakeListing(self, "/zones/{zone_id}/dns_records"))

    def route(self, method: str, path: str, response: Any) -> None:
        self.routes[(method, path)] = response

    def calls_to(self, method: str, path: str) -> list[tuple[str, str, dict | None, Any]]:
        return [call for call in self.calls if call[0] == method and call[1] == path]

    def _dispatch(self, method: str, path: str, cast_to: Any = object, options: Any = None, body: Any = None):
        params = (options or {}).get("params")
        self.calls.append((method, path, params, body))

        response = self.routes.get((method, path))
        if response is None:
            raise api_status_error(404, "Resource not found", path)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(params, body)
        return response

    def get(self, path: str, **kwargs: Any):
        return self._dispatch("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any):
        return self._dispatch("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any):
        return self._dispatch("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs: Any):
        return self._dispatch("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any):
        return self._dispatch("DELETE", path, **kwargs)


@pytest.fixture
def fake_client():
    return FakeCloudflare()


@pytest.fixture
def cf_api(fake_client):
    """CloudflareAPI wired to the fake SDK client."""
    return CloudflareAPI(fake_client)


# ==================== HANDLER FIXTURES ====================

@pytest.fixture
def settings():
    return Settings(
        telegram_token="123456:TEST",
        cloudflare_api_token="cf-token",
        webhook_url="https://bot.example.com/webhook",
        log_enabled=False,
    )


@pytest.fixture
def bot():
    """Mock telegram.Bot"""
    mock_bot = AsyncMock()
    mock_bot.send_message = AsyncMock()
    mock_bot.edit_message_text = AsyncMock()
    mock_bot.answer_callback_query = AsyncMock(return_value=True)
    return mock_bot


@pytest.fixture
def api():
    """Mock CloudflareAPI"""
    return Mock(spec=CloudflareAPI)


@pytest.fixture
def message_transport(bot):
    return TelegramTransport(bot, chat_id=CHAT_ID, message_id=MESSAGE_ID)


@pytest.fixture
def callback_transport(bot):
    return TelegramTransport(bot, chat_id=CHAT_ID, message_id=MESSAGE_ID, callback_query_id=CALLBACK_ID)


@pytest.fixture
def domain():
    return Domain(id="zone1", name="example.com", status="active", always_use_https=False, ech=False)


def make_domains(count: int) -> list[Domain]:
    return [Domain(id=f"zone{i}", name=f"site{i}.com", status="active") for i in range(1, count + 1)]


# ==================== TELEGRAM HELPERS ====================

def message_update(text: str | None, update_id: int = 1) -> dict[str, Any]:
    message: dict[str, Any] = {
        "message_id": MESSAGE_ID,
        "date": 1700000000,
        "chat": {"id": CHAT_ID, "type": "private"},
        "from": {"id": CHAT_ID, "is_bot": False, "first_name": "Ada"},
    }
    if text is not None:
        message["text"] = text
    return {"update_id": update_id, "message": message}


def callback_update(data: str, update_id: int = 2) -> dict[str, Any]:
    return {
        "update_id": update_id,
        "callback_query": {
            "id": CALLBACK_ID,
            "from": {"id": CHAT_ID, "is_bot": False, "first_name": "Ada"},
            "chat_instance": "instance-1",
            "data": data,
            "message": {
                "message_id": MESSAGE_ID,
                "date": 1700000000,
                "chat": {"id": CHAT_ID, "type": "private"},
                "text": "Your domains:",
            },
        },
    }


def to_update(payload: dict[str, Any]) -> Update:
    return Update.de_json(payload, None)


def sent_text(bot) -> str:
    return bot.send_message.call_args.kwargs["text"]


def edited_text(bot) -> str:
    return bot.edit_message_text.call_args.kwargs["text"]


def keyboard_payloads(mock_call) -> list[list[str]]:
    """callback_data of every button in the reply_markup of a send/edit call."""
    markup = mock_call.call_args.kwargs["reply_markup"]
    if markup is None:
        return []
    return [[button.callback_data for button in row] for row in markup.inline_keyboard]
