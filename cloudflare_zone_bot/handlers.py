"""
Cloudflare Zone Bot Handlers
Command and callback handlers. Each one pulls its arguments out of the update,
calls the Cloudflare API off the event loop and replies with a rendered screen.
"""

import asyncio
import logging
import shlex
from collections.abc import Awaitable, Callable
from html import escape
from typing import Any, TypeVar

from cloudflare_zone_bot import views
from cloudflare_zone_bot.callback_data import CallbackAction, CallbackData
from cloudflare_zone_bot.cloudflare_api import CloudflareAPI
from cloudflare_zone_bot.config import logger as default_logger
from cloudflare_zone_bot.exceptions import CloudflareAPIError, PartialDomainSetupError
from cloudflare_zone_bot.models import (
    AUTO_TTL,
    RECORD_TYPES,
    REDIRECT_STATUS_CODES,
    RULE_STATUSES,
    WAF_MODES,
    Domain,
)
from cloudflare_zone_bot.transport import TelegramTransport

T = TypeVar("T")

TRUE_WORDS = ("yes", "y", "true", "on", "1")
FALSE_WORDS = ("no", "n", "false", "off", "0")
DEFAULT_MX_PRIORITY = 10


# ===== ARGUMENT PARSING =====

def parse_bool(value: str, field: str) -> bool:
    lowered = value.lower()
    if lowered in TRUE_WORDS:
        return True
    if lowered in FALSE_WORDS:
        return False
    raise ValueError(f"{field} must be yes or no, got '{value}'")


def parse_ttl(value: str) -> int:
    if value.lower() == "auto":
        return AUTO_TTL
    if not value.isdigit() or int(value) < 1:
        raise ValueError(f"TTL must be 'auto' or a number of seconds, got '{value}'")
    return int(value)


def parse_int(value: str, field: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{field} must be a number, got '{value}'") from None


def parse_status(value: str) -> str:
    status = value.lower()
    if status not in RULE_STATUSES:
        raise ValueError(f"Status must be one of {', '.join(RULE_STATUSES)}, got '{value}'")
    return status


def parse_waf_fields(tokens: list[str]) -> dict[str, Any]:
    """Split ``name... mode expression [priority] [status]``.

    The name may span several words; it ends at the first token that is a
    known mode.
    """
    mode_index = next((i for i, token in enumerate(tokens) if i > 0 and token in WAF_MODES), None)
    if mode_index is None:
        raise ValueError(f"Mode must be one of {', '.join(WAF_MODES)}")

    rest = tokens[mode_index + 1:]
    if not rest:
        raise ValueError("An expression is required")
    if len(rest) > 3:
        raise ValueError("Too many values; quote the expression")

    return {
        "name": " ".join(tokens[:mode_index]),
        "mode": tokens[mode_index],
        "expression": rest[0],
        "priority": parse_int(rest[1], "Priority") if len(rest) > 1 else None,
        "status": parse_status(rest[2]) if len(rest) > 2 else "active",
    }


def parse_redirect_fields(tokens: list[str]) -> dict[str, Any]:
    """Split ``source target [status_code] [preserve_query] [status]``."""
    if len(tokens) < 2 or len(tokens) > 5:
        raise ValueError("Expected source_url target_url [status_code] [preserve_query] [status]")

    status_code = parse_int(tokens[2], "Status code") if len(tokens) > 2 else 301
    if status_code not in REDIRECT_STATUS_CODES:
        codes = ", ".join(str(code) for code in REDIRECT_STATUS_CODES)
        raise ValueError(f"Status code must be one of {codes}")

    return {
        "source_url": tokens[0],
        "target_url": tokens[1],
        "status_code": status_code,
        "preserve_query_string": parse_bool(tokens[3], "Preserve query") if len(tokens) > 3 else True,
        "status": parse_status(tokens[4]) if len(tokens) > 4 else "active",
    }


class BaseHandler:
    """Shared plumbing for command and callback handlers."""

    def __init__(
        self,
        api: CloudflareAPI,
        transport: TelegramTransport,
        per_page: int = 10,
        logger: logging.Logger | None = None,
    ) -> None:
        self.api = api
        self.transport = transport
        self.per_page = per_page
        self.logger = logger or default_logger

    async def reply(self, text: str, keyboard: views.Keyboard | None = None) -> None:
        raise NotImplementedError

    async def reply_screen(self, screen: views.Screen) -> None:
        await self.reply(screen.text, screen.keyboard)

    async def call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a blocking Cloudflare call in a worker thread."""
        return await asyncio.to_thread(func, *args, **kwargs)

    async def fail(self, label: str, error: CloudflareAPIError, **context: Any) -> None:
        self.logger.error(f"{label}: {error.message} (status={error.status_code}, {context})")
        await self.reply(f"{label}: {escape(error.message)}")

    # ===== SHARED DOMAIN SCREENS =====

    async def show_domains(self, page: int = 0, query: str | None = None) -> None:
        """List all domains, or the domains matching ``query``, one page at a time."""
        try:
            if query:
                domains = await self.call(self.api.search_domains, query)
            else:
                domains = await self.call(self.api.list_domains)
        except CloudflareAPIError as e:
            label = "Error searching domains" if query else "Error listing domains"
            await self.fail(label, e, query=query, page=page)
            return

        if not domains:
            if query:
                await self.reply(f"No domains found matching: <b>{escape(query)}</b>")
            else:
                await self.reply("You don't have any domains yet. Use /add &lt;domain&gt; to add a new domain.")
            return

        title = f"Search results for: <b>{escape(query)}</b>" if query else "Your domains:"
        await self.reply_screen(views.domain_list(domains, page, self.per_page, title, query=query))

    async def add_domain(self, name: str) -> None:
        try:
            domain = await self.call(self.api.add_domain, name)
        except PartialDomainSetupError as e:
            self.logger.error(f"Domain {name} added as {e.domain.id} but {e.setting} failed: {e.cause.message}")
            await self.reply_screen(views.domain_partially_added(e))
            return
        except CloudflareAPIError as e:
            await self.fail("Error adding domain", e, domain=name)
            return

        self.logger.info(f"Domain {name} ready as zone {domain.id}")
        await self.reply_screen(views.domain_added(domain))

    async def show_domain(self, domain: Domain) -> None:
        await self.reply_screen(views.domain_detail(domain))


class CommandHandler(BaseHandler):
    """Handles text messages: slash commands and free-text domain search."""

    async def reply(self, text: str, keyboard: views.Keyboard | None = None) -> None:
        await self.transport.send_message(text, keyboard)

    @property
    def commands(self) -> dict[str, Callable[[str], Awaitable[None]]]:
        return {
            "/start": self.help_command,
            "/help": self.help_command,
            "/domains": self.domains_command,
            "/add": self.add_command,
            "/search": self.search_command,
            "/add_dns": self.add_dns_command,
            "/edit_dns": self.edit_dns_command,
            "/add_waf": self.add_waf_command,
            "/edit_waf": self.edit_waf_command,
            "/add_redirect": self.add_redirect_command,
            "/edit_redirect": self.edit_redirect_command,
        }

    async def handle_command(self, text: str) -> None:
        """Dispatch a message starting with '/'."""
        parts = text.strip().split(maxsplit=1)
        command = parts[0].split("@", 1)[0].lower()
        argument = parts[1].strip() if len(parts) > 1 else ""

        self.logger.info(f"Handling command {command}")

        handler = self.commands.get(command)
        if handler is None:
            await self.reply("Unknown command. Type /help to see available commands.")
            return
        await handler(argument)

    async def handle_domain_search(self, query: str) -> None:
        """A full domain opens its settings; anything else is a name search."""
        query = query.strip()
        self.logger.info(f"Searching for domain {query}")

        if "." in query:
            await self.open_domain_settings(query)
            return
        await self.show_domains(0, query)

    async def open_domain_settings(self, name: str) -> None:
        try:
            domain = await self.call(self.api.get_domain_by_name, name)
        except CloudflareAPIError as e:
            await self.fail("Error getting domain information", e, domain=name)
            return

        if domain is None:
            await self.reply_screen(views.domain_not_found(name))
            return
        await self.show_domain(domain)

    # ===== COMMANDS =====

    async def help_command(self, argument: str) -> None:
        await self.reply(views.help_text())

    async def domains_command(self, argument: str) -> None:
        await self.show_domains(0)

    async def search_command(self, argument: str) -> None:
        if not argument:
            await self.reply("Please provide a search term: /search &lt;domain&gt;")
            return
        await self.handle_domain_search(argument)

    async def add_command(self, argument: str) -> None:
        if not argument:
            await self.reply("Please provide a domain: /add &lt;domain&gt;")
            return
        await self.add_domain(argument.split()[0])

    async def add_dns_command(self, argument: str) -> None:
        usage = "/add_dns &lt;domain_id&gt; &lt;type&gt; &lt;name&gt; &lt;content&gt; [ttl] [proxied] [priority]"
        try:
            tokens = shlex.split(argument)
            if len(tokens) < 4 or len(tokens) > 7:
                raise ValueError("Wrong number of values")
            zone_id, record_type, name, content = tokens[:4]
            record_type = record_type.upper()
            if record_type not in RECORD_TYPES:
                raise ValueError(f"Record type must be one of {', '.join(RECORD_TYPES)}")
            ttl = parse_ttl(tokens[4]) if len(tokens) > 4 else AUTO_TTL
            proxied = parse_bool(tokens[5], "Proxied") if len(tokens) > 5 else False
            priority = parse_int(tokens[6], "Priority") if len(tokens) > 6 else None
        except ValueError as e:
            await self.reply(f"❌ {escape(str(e))}\n\nUsage: <code>{usage}</code>")
            return

        if record_type == "MX" and priority is None:
            priority = DEFAULT_MX_PRIORITY

        try:
            record = await self.call(
                self.api.add_dns_record,
                zone_id,
                record_type,
                name,
                content,
                ttl=ttl,
                proxied=proxied,
                priority=priority,
            )
        except CloudflareAPIError as e:
            await self.fail("Error adding DNS record", e, domain_id=zone_id, name=name)
            return

        self.logger.info(f"Added DNS record {record.id} to zone {zone_id}")
        await self.reply_screen(views.dns_record_saved(zone_id, record, created=True))

    async def edit_dns_command(self, argument: str) -> None:
        usage = "/edit_dns &lt;domain_id&gt; &lt;record_id&gt; &lt;name&gt; &lt;content&gt; [ttl] [proxied]"
        try:
            tokens = shlex.split(argument)
            if len(tokens) < 4 or len(tokens) > 6:
                raise ValueError("Wrong number of values")
            zone_id, record_id, name, content = tokens[:4]
            fields: dict[str, Any] = {"name": name, "content": content}
            if len(tokens) > 4:
                fields["ttl"] = parse_ttl(tokens[4])
            if len(tokens) > 5:
                fields["proxied"] = parse_bool(tokens[5], "Proxied")
        except ValueError as e:
            await self.reply(f"❌ {escape(str(e))}\n\nUsage: <code>{usage}</code>")
            return

        try:
            record = await self.call(self.api.update_dns_record, zone_id, record_id, **fields)
        except CloudflareAPIError as e:
            await self.fail("Error updating DNS record", e, domain_id=zone_id, record_id=record_id)
            return

        self.logger.info(f"Updated DNS record {record_id} in zone {zone_id}")
        await self.reply_screen(views.dns_record_saved(zone_id, record, created=False))

    async def add_waf_command(self, argument: str) -> None:
        usage = "/add_waf &lt;domain_id&gt; &lt;name&gt; &lt;mode&gt; &lt;expression&gt; [priority] [status]"
        try:
            tokens = shlex.split(argument)
            if len(tokens) < 4:
                raise ValueError("Wrong number of values")
            zone_id = tokens[0]
            fields = parse_waf_fields(tokens[1:])
        except ValueError as e:
            await self.reply(f"❌ {escape(str(e))}\n\nUsage: <code>{usage}</code>")
            return

        try:
            rule = await self.call(self.api.add_waf_rule, zone_id, **fields)
        except CloudflareAPIError as e:
            await self.fail("Error adding WAF rule", e, domain_id=zone_id, name=fields["name"])
            return

        self.logger.info(f"Added WAF rule {rule.id} to zone {zone_id}")
        await self.reply_screen(views.waf_rule_saved(zone_id, rule, created=True))

    async def edit_waf_command(self, argument: str) -> None:
        usage = (
            "/edit_waf &lt;domain_id&gt; &lt;rule_id&gt; &lt;name&gt; &lt;mode&gt; "
            "&lt;expression&gt; [priority] [status]"
        )
        try:
            tokens = shlex.split(argument)
            if len(tokens) < 5:
                raise ValueError("Wrong number of values")
            zone_id, rule_id = tokens[:2]
            fields = parse_waf_fields(tokens[2:])
        except ValueError as e:
            await self.reply(f"❌ {escape(str(e))}\n\nUsage: <code>{usage}</code>")
            return

        try:
            rule = await self.call(self.api.update_waf_rule, zone_id, rule_id, **fields)
        except CloudflareAPIError as e:
            await self.fail("Error updating WAF rule", e, domain_id=zone_id, rule_id=rule_id)
            return

        self.logger.info(f"Updated WAF rule {rule_id} in zone {zone_id}")
        await self.reply_screen(views.waf_rule_saved(zone_id, rule, created=False))

    async def add_redirect_command(self, argument: str) -> None:
        usage = (
            "/add_redirect &lt;domain_id&gt; &lt;source_url&gt; &lt;target_url&gt; "
            "[status_code] [preserve_query] [status]"
        )
        try:
            tokens = shlex.split(argument)
            if not tokens:
                raise ValueError("Wrong number of values")
            zone_id = tokens[0]
            fields = parse_redirect_fields(tokens[1:])
        except ValueError as e:
            await self.reply(f"❌ {escape(str(e))}\n\nUsage: <code>{usage}</code>")
            return

        try:
            rule = await self.call(self.api.add_redirect_rule, zone_id, **fields)
        except CloudflareAPIError as e:
            await self.fail("Error adding redirect rule", e, domain_id=zone_id, source=fields["source_url"])
            return

        self.logger.info(f"Added redirect rule {rule.id} to zone {zone_id}")
        await self.reply_screen(views.redirect_rule_saved(zone_id, rule, created=True))

    async def edit_redirect_command(self, argument: str) -> None:
        usage = (
            "/edit_redirect &lt;domain_id&gt; &lt;rule_id&gt; &lt;source_url&gt; &lt;target_url&gt; "
            "[status_code] [preserve_query] [status]"
        )
        try:
            tokens = shlex.split(argument)
            if len(tokens) < 2:
                raise ValueError("Wrong number of values")
            zone_id, rule_id = tokens[:2]
            fields = parse_redirect_fields(tokens[2:])
        except ValueError as e:
            await self.reply(f"❌ {escape(str(e))}\n\nUsage: <code>{usage}</code>")
            return

        try:
            rule = await self.call(self.api.update_redirect_rule, zone_id, rule_id, **fields)
        except CloudflareAPIError as e:
            await self.fail("Error updating redirect rule", e, domain_id=zone_id, rule_id=rule_id)
            return

        self.logger.info(f"Updated redirect rule {rule_id} in zone {zone_id}")
        await self.reply_screen(views.redirect_rule_saved(zone_id, rule, created=False))


class CallbackHandler(BaseHandler):
    """Handles inline button presses by editing the message they belong to."""

    async def reply(self, text: str, keyboard: views.Keyboard | None = None) -> None:
        await self.transport.edit_message(text, keyboard)

    @property
    def actions(self) -> dict[CallbackAction, Callable[[CallbackData], Awaitable[None]]]:
        return {
            CallbackAction.DOMAIN: lambda data: self.show_domain_settings(data.zone_id),
            CallbackAction.PAGE: lambda data: self.show_domains(data.page, data.query),
            CallbackAction.ADD: lambda data: self.add_domain(data.args[0]),
            CallbackAction.DNS: lambda data: self.show_dns_records(data.zone_id, data.page),
            CallbackAction.WAF: lambda data: self.show_waf_rules(data.zone_id, data.page),
            CallbackAction.REDIRECT: lambda data: self.show_redirect_rules(data.zone_id, data.page),
            CallbackAction.HTTPS: lambda data: self.toggle_setting(
                data.zone_id, "always_use_https", "Always Use HTTPS"
            ),
            CallbackAction.ECH: lambda data: self.toggle_setting(data.zone_id, "ech", "ECH"),
            CallbackAction.DELETE: lambda data: self.confirm_delete_domain(data.zone_id),
            CallbackAction.CONFIRM_DELETE: lambda data: self.delete_domain(data.zone_id),
            CallbackAction.EDIT_DNS: lambda data: self.show_edit_dns_record(data.zone_id, data.item_id),
            CallbackAction.ADD_DNS: lambda data: self.show_add_form(data.zone_id, views.add_dns_form),
            CallbackAction.DELETE_DNS: lambda data: self.delete_dns_record(data.zone_id, data.item_id),
            CallbackAction.EDIT_WAF: lambda data: self.show_edit_waf_rule(data.zone_id, data.item_id),
            CallbackAction.ADD_WAF: lambda data: self.show_add_form(data.zone_id, views.add_waf_form),
            CallbackAction.DELETE_WAF: lambda data: self.delete_waf_rule(data.zone_id, data.item_id),
            CallbackAction.EDIT_REDIRECT: lambda data: self.show_edit_redirect_rule(data.zone_id, data.item_id),
            CallbackAction.ADD_REDIRECT: lambda data: self.show_add_form(data.zone_id, views.add_redirect_form),
            CallbackAction.DELETE_REDIRECT: lambda data: self.delete_redirect_rule(data.zone_id, data.item_id),
        }

    async def handle_callback(self, payload: str) -> None:
        self.logger.info(f"Handling callback {payload}")

        data = CallbackData.parse(payload)
        if data is None:
            self.logger.warning(f"Unknown callback data: {payload}")
            await self.transport.send_message("Unknown callback data")
            return
        await self.actions[data.action](data)

    async def _require_domain(self, zone_id: str) -> Domain | None:
        """Fetch a domain, replying 'Domain not found.' when it is gone."""
        domain = await self.call(self.api.get_domain, zone_id)
        if domain is None:
            await self.reply("Domain not found.")
        return domain

    # ===== DOMAIN =====

    async def show_domain_settings(self, zone_id: str) -> None:
        try:
            domain = await self._require_domain(zone_id)
        except CloudflareAPIError as e:
            await self.fail("Error getting domain information", e, domain_id=zone_id)
            return
        if domain:
            await self.show_domain(domain)

    async def toggle_setting(self, zone_id: str, setting: str, label: str) -> None:
        """Flip a boolean zone setting and show the re-fetched domain."""
        try:
            domain = await self._require_domain(zone_id)
            if domain is None:
                return
            enabled = not getattr(domain, setting)
            await self.call(self.api.update_domain_setting, zone_id, setting, enabled)
            refreshed = await self._require_domain(zone_id)
        except CloudflareAPIError as e:
            await self.fail("Error updating setting", e, domain_id=zone_id, setting=setting)
            return

        self.logger.info(f"{label} {'enabled' if enabled else 'disabled'} for zone {zone_id}")
        if refreshed:
            await self.show_domain(refreshed)
        await self.transport.answer_callback_query(f"{label} {'enabled' if enabled else 'disabled'}")

    async def confirm_delete_domain(self, zone_id: str) -> None:
        try:
            domain = await self._require_domain(zone_id)
        except CloudflareAPIError as e:
            await self.fail("Error", e, domain_id=zone_id)
            return
        if domain:
            await self.reply_screen(views.confirm_delete_domain(domain))

    async def delete_domain(self, zone_id: str) -> None:
        try:
            domain = await self._require_domain(zone_id)
            if domain is None:
                return
            await self.call(self.api.delete_domain, zone_id)
        except CloudflareAPIError as e:
            await self.fail("Error deleting domain", e, domain_id=zone_id)
            return

        self.logger.info(f"Deleted zone {zone_id} ({domain.name})")
        await self.reply_screen(views.domain_deleted(domain.name))
        await self.transport.answer_callback_query("Domain deleted")

    # ===== LISTS =====

    async def show_dns_records(self, zone_id: str, page: int = 0) -> None:
        try:
            domain = await self._require_domain(zone_id)
            if domain is None:
                return
            records = await self.call(self.api.list_dns_records, zone_id)
        except CloudflareAPIError as e:
            await self.fail("Error getting DNS records", e, domain_id=zone_id)
            return
        await self.reply_screen(views.dns_records(domain, records, page, self.per_page))

    async def show_waf_rules(self, zone_id: str, page: int = 0) -> None:
        try:
            domain = await self._require_domain(zone_id)
            if domain is None:
                return
            rules = await self.call(self.api.list_waf_rules, zone_id)
        except CloudflareAPIError as e:
            await self.fail("Error getting WAF rules", e, domain_id=zone_id)
            return
        await self.reply_screen(views.waf_rules(domain, rules, page, self.per_page))

    async def show_redirect_rules(self, zone_id: str, page: int = 0) -> None:
        try:
            domain = await self._require_domain(zone_id)
            if domain is None:
                return
            rules = await self.call(self.api.list_redirect_rules, zone_id)
        except CloudflareAPIError as e:
            await self.fail("Error getting redirect rules", e, domain_id=zone_id)
            return
        await self.reply_screen(views.redirect_rules(domain, rules, page, self.per_page))

    # ===== FORMS =====

    async def show_add_form(self, zone_id: str, form: Callable[[Domain], views.Screen]) -> None:
        try:
            domain = await self._require_domain(zone_id)
        except CloudflareAPIError as e:
            await self.fail("Error", e, domain_id=zone_id)
            return
        if domain:
            await self.reply_screen(form(domain))

    async def show_edit_dns_record(self, zone_id: str, record_id: str) -> None:
        try:
            domain = await self._require_domain(zone_id)
            if domain is None:
                return
            record = await self.call(self.api.get_dns_record, zone_id, record_id)
        except CloudflareAPIError as e:
            await self.fail("Error getting DNS record", e, domain_id=zone_id, record_id=record_id)
            return

        if record is None:
            await self.reply("DNS record not found.", [[views.back_button(CallbackAction.DNS, zone_id)]])
            return
        await self.reply_screen(views.dns_record_form(domain, record))

    async def show_edit_waf_rule(self, zone_id: str, rule_id: str) -> None:
        try:
            domain = await self._require_domain(zone_id)
            if domain is None:
                return
            rule = await self.call(self.api.get_waf_rule, zone_id, rule_id)
        except CloudflareAPIError as e:
            await self.fail("Error getting WAF rule", e, domain_id=zone_id, rule_id=rule_id)
            return

        if rule is None:
            await self.reply("WAF rule not found.", [[views.back_button(CallbackAction.WAF, zone_id)]])
            return
        await self.reply_screen(views.waf_rule_form(domain, rule))

    async def show_edit_redirect_rule(self, zone_id: str, rule_id: str) -> None:
        try:
            domain = await self._require_domain(zone_id)
            if domain is None:
                return
            rule = await self.call(self.api.get_redirect_rule, zone_id, rule_id)
        except CloudflareAPIError as e:
            await self.fail("Error getting redirect rule", e, domain_id=zone_id, rule_id=rule_id)
            return

        if rule is None:
            await self.reply("Redirect rule not found.", [[views.back_button(CallbackAction.REDIRECT, zone_id)]])
            return
        await self.reply_screen(views.redirect_rule_form(domain, rule))

    # ===== ITEM DELETION =====

    async def delete_dns_record(self, zone_id: str, record_id: str) -> None:
        try:
            await self.call(self.api.delete_dns_record, zone_id, record_id)
        except CloudflareAPIError as e:
            await self.fail("Error deleting DNS record", e, domain_id=zone_id, record_id=record_id)
            return
        self.logger.info(f"Deleted DNS record {record_id} from zone {zone_id}")
        await self.transport.answer_callback_query("DNS record deleted")
        await self.show_dns_records(zone_id)

    async def delete_waf_rule(self, zone_id: str, rule_id: str) -> None:
        try:
            await self.call(self.api.delete_waf_rule, zone_id, rule_id)
        except CloudflareAPIError as e:
            await self.fail("Error deleting WAF rule", e, domain_id=zone_id, rule_id=rule_id)
            return
        self.logger.info(f"Deleted WAF rule {rule_id} from zone {zone_id}")
        await self.transport.answer_callback_query("WAF rule deleted")
        await self.show_waf_rules(zone_id)

    async def delete_redirect_rule(self, zone_id: str, rule_id: str) -> None:
        try:
            await self.call(self.api.delete_redirect_rule, zone_id, rule_id)
        except CloudflareAPIError as e:
            await self.fail("Error deleting redirect rule", e, domain_id=zone_id, rule_id=rule_id)
            return
        self.logger.info(f"Deleted redirect rule {rule_id} from zone {zone_id}")
        await self.transport.answer_callback_query("Redirect rule deleted")
        await self.show_redirect_rules(zone_id)
