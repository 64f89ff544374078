"""
Exception classes for the Cloudflare Zone Bot.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cloudflare_zone_bot.models import Domain


class ZoneBotError(Exception):
    """Base exception for all bot errors."""


class ConfigurationError(ZoneBotError):
    """Raised when required settings are missing or invalid."""


class InvalidUpdateError(ZoneBotError):
    """Raised when an inbound webhook body is not a Telegram update."""


class CloudflareAPIError(ZoneBotError):
    """Raised when the Cloudflare API returns an error or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class PartialDomainSetupError(CloudflareAPIError):
    """A zone was created but one of its follow-up settings could not be applied."""

    def __init__(self, domain: "Domain", setting: str, cause: CloudflareAPIError) -> None:
        self.domain = domain
        self.setting = setting
        self.cause = cause
        super().__init__(
            f"{domain.name} was added, but {setting} could not be updated: {cause.message}",
            cause.status_code,
        )
