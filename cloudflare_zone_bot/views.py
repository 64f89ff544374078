"""
Message rendering.
Every screen is a text (HTML parse mode) plus an inline keyboard. Command and
callback handlers share these builders so a list looks the same however it
was reached.
"""

from collections.abc import Callable, Sequence
from html import escape
from typing import NamedTuple

from telegram import InlineKeyboardButton

from cloudflare_zone_bot.callback_data import CallbackAction, callback
from cloudflare_zone_bot.exceptions import PartialDomainSetupError
from cloudflare_zone_bot.models import (
    REDIRECT_STATUS_CODES,
    RECORD_TYPES,
    WAF_MODES,
    DnsRecord,
    Domain,
    RedirectRule,
    WafRule,
)
from cloudflare_zone_bot.pagination import Page, paginate

Keyboard = list[list[InlineKeyboardButton]]


class Screen(NamedTuple):
    text: str
    keyboard: Keyboard


def _button(text: str, action: CallbackAction, *args: object) -> InlineKeyboardButton:
    return InlineKeyboardButton(text, callback_data=callback(action, *args))


BACK_LABELS = {
    CallbackAction.DOMAIN: "🔙 Back to Domain",
    CallbackAction.DNS: "🔙 Back to DNS Records",
    CallbackAction.WAF: "🔙 Back to WAF Rules",
    CallbackAction.REDIRECT: "🔙 Back to Redirect Rules",
}


def back_button(action: CallbackAction, zone_id: str) -> InlineKeyboardButton:
    return _button(BACK_LABELS[action], action, zone_id)


def _navigation_row(page: Page, payload: Callable[[int], str]) -> list[InlineKeyboardButton]:
    row = []
    if page.has_previous:
        row.append(InlineKeyboardButton("◀️ Previous", callback_data=payload(page.number - 1)))
    if page.has_next:
        row.append(InlineKeyboardButton("Next ▶️", callback_data=payload(page.number + 1)))
    return row


def _enabled(flag: bool) -> str:
    return "✅ Enabled" if flag else "❌ Disabled"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def help_text() -> str:
    return (
        "🌐 <b>Cloudflare Manager Bot</b>\n\n"
        "This bot helps you manage your Cloudflare domains.\n\n"
        "<b>Available commands:</b>\n"
        "/domains - List all your domains\n"
        "/add &lt;domain&gt; - Add a new domain\n"
        "/search &lt;term&gt; - Search for domains\n"
        "/help - Show this help message\n\n"
        "You can also send a domain name to search for it, or send a full domain to open its settings."
    )


# ===== DOMAINS =====

def domain_list(
    domains: Sequence[Domain],
    page_number: int,
    per_page: int,
    title: str,
    query: str | None = None,
) -> Screen:
    """Numbered page of domains with one button per domain and Previous/Next."""
    page = paginate(domains, page_number, per_page)

    lines = [f"{title}\n"]
    for position, domain in page.numbered():
        status = "✅" if domain.is_active else "⚠️"
        lines.append(f"{position}. {status} <b>{escape(domain.name)}</b>")
    lines.append(f"\nPage {page.number + 1} of {page.total_pages}")

    keyboard: Keyboard = [[_button(domain.name, CallbackAction.DOMAIN, domain.id)] for domain in page.items]

    def payload(number: int) -> str:
        if query:
            return callback(CallbackAction.PAGE, number, query)
        return callback(CallbackAction.PAGE, number)

    navigation = _navigation_row(page, payload)
    if navigation:
        keyboard.append(navigation)

    return Screen("\n".join(lines), keyboard)


def domain_detail(domain: Domain) -> Screen:
    status = "✅ Active" if domain.is_active else f"⚠️ {escape(domain.status.capitalize())}"
    text = (
        f"🌐 <b>Domain: {escape(domain.name)}</b>\n\n"
        f"Status: {status}\n"
        f"Always Use HTTPS: {_enabled(domain.always_use_https)}\n"
        f"ECH: {_enabled(domain.ech)}\n"
    )
    keyboard = [
        [_button("DNS Records", CallbackAction.DNS, domain.id)],
        [_button("WAF Rules", CallbackAction.WAF, domain.id)],
        [_button("Redirects", CallbackAction.REDIRECT, domain.id)],
        [
            _button("Toggle HTTPS", CallbackAction.HTTPS, domain.id),
            _button("Toggle ECH", CallbackAction.ECH, domain.id),
        ],
        [_button("🗑️ Delete Domain", CallbackAction.DELETE, domain.id)],
    ]
    return Screen(text, keyboard)


def _domain_shortcuts(domain: Domain) -> Keyboard:
    return [
        [_button("Domain Settings", CallbackAction.DOMAIN, domain.id)],
        [_button("DNS Records", CallbackAction.DNS, domain.id)],
        [_button("WAF Rules", CallbackAction.WAF, domain.id)],
        [_button("Redirects", CallbackAction.REDIRECT, domain.id)],
    ]


def domain_added(domain: Domain) -> Screen:
    text = (
        f"✅ Domain <b>{escape(domain.name)}</b> has been added successfully!\n\n"
        f"• Always Use HTTPS: {'Enabled' if domain.always_use_https else 'Disabled'}\n"
        f"• ECH: {'Enabled' if domain.ech else 'Disabled'}\n\n"
        "What would you like to do next?"
    )
    return Screen(text, _domain_shortcuts(domain))


def domain_partially_added(error: PartialDomainSetupError) -> Screen:
    text = (
        f"⚠️ Domain <b>{escape(error.domain.name)}</b> was added, but it is not fully configured.\n\n"
        f"Updating <b>{escape(error.setting)}</b> failed: {escape(error.cause.message)}\n\n"
        "Open the domain settings to finish the setup."
    )
    return Screen(text, _domain_shortcuts(error.domain))


def domain_not_found(name: str) -> Screen:
    return Screen(
        f"Domain <b>{escape(name)}</b> not found. Do you want to add it?",
        [[_button(f"Add {name}", CallbackAction.ADD, name)]],
    )


def confirm_delete_domain(domain: Domain) -> Screen:
    text = (
        "⚠️ <b>Confirm Deletion</b> ⚠️\n\n"
        f"Are you sure you want to delete the domain <b>{escape(domain.name)}</b>?\n\n"
        "This action cannot be undone!"
    )
    keyboard = [
        [
            _button("✅ Yes, delete it", CallbackAction.CONFIRM_DELETE, domain.id),
            _button("❌ No, cancel", CallbackAction.DOMAIN, domain.id),
        ]
    ]
    return Screen(text, keyboard)


def domain_deleted(name: str) -> Screen:
    return Screen(
        f"✅ Domain <b>{escape(name)}</b> has been deleted successfully.",
        [[_button("Show All Domains", CallbackAction.PAGE, 0)]],
    )


# ===== ZONE ITEM LISTS =====

def _item_list(
    title: str,
    empty_text: str,
    lines_for: Callable[[int, object], list[str]],
    button_for: Callable[[object], InlineKeyboardButton],
    items: Sequence,
    page_number: int,
    per_page: int,
    list_action: CallbackAction,
    add_button: InlineKeyboardButton,
    domain: Domain,
) -> Screen:
    page = paginate(items, page_number, per_page)

    text = f"{title}\n\n"
    if not items:
        text += empty_text
    else:
        for position, item in page.numbered():
            text += "\n".join(lines_for(position, item)) + "\n\n"
        if page.total_pages > 1:
            text += f"Page {page.number + 1} of {page.total_pages}"

    keyboard: Keyboard = [[button_for(item)] for item in page.items]
    navigation = _navigation_row(page, lambda number: callback(list_action, domain.id, number))
    if navigation:
        keyboard.append(navigation)
    keyboard.append([add_button])
    keyboard.append([back_button(CallbackAction.DOMAIN, domain.id)])
    return Screen(text.rstrip("\n"), keyboard)


def dns_records(domain: Domain, records: Sequence[DnsRecord], page: int, per_page: int) -> Screen:
    def lines_for(position: int, record: DnsRecord) -> list[str]:
        lines = [f"{position}. <b>{record.type}</b> {escape(record.name)} → {escape(record.content)}"]
        if record.ttl != 1:
            lines.append(f"   TTL: {record.ttl} seconds")
        if record.proxied:
            lines.append("   Proxied: ✅")
        return lines

    return _item_list(
        title=f"DNS Records for <b>{escape(domain.name)}</b>:",
        empty_text="No DNS records found.",
        lines_for=lines_for,
        button_for=lambda record: _button(
            f"{record.type} {record.name}", CallbackAction.EDIT_DNS, domain.id, record.id
        ),
        items=records,
        page_number=page,
        per_page=per_page,
        list_action=CallbackAction.DNS,
        add_button=_button("➕ Add DNS Record", CallbackAction.ADD_DNS, domain.id),
        domain=domain,
    )


def waf_rules(domain: Domain, rules: Sequence[WafRule], page: int, per_page: int) -> Screen:
    def lines_for(position: int, rule: WafRule) -> list[str]:
        status = "✅" if rule.is_active else "❌"
        lines = [f"{position}. {status} <b>{escape(rule.name)}</b>", f"   Mode: {escape(rule.mode)}"]
        if rule.priority:
            lines.append(f"   Priority: {rule.priority}")
        return lines

    return _item_list(
        title=f"WAF Rules for <b>{escape(domain.name)}</b>:",
        empty_text="No WAF rules found.",
        lines_for=lines_for,
        button_for=lambda rule: _button(rule.name, CallbackAction.EDIT_WAF, domain.id, rule.id),
        items=rules,
        page_number=page,
        per_page=per_page,
        list_action=CallbackAction.WAF,
        add_button=_button("➕ Add WAF Rule", CallbackAction.ADD_WAF, domain.id),
        domain=domain,
    )


def redirect_rules(domain: Domain, rules: Sequence[RedirectRule], page: int, per_page: int) -> Screen:
    def lines_for(position: int, rule: RedirectRule) -> list[str]:
        status = "✅" if rule.is_active else "❌"
        lines = [
            f"{position}. {status} <b>{escape(rule.source_url)}</b> → {escape(rule.target_url)}",
            f"   Code: {rule.status_code}",
        ]
        if rule.preserve_query_string:
            lines.append("   Preserve Query: ✅")
        return lines

    return _item_list(
        title=f"Redirect Rules for <b>{escape(domain.name)}</b>:",
        empty_text="No redirect rules found.",
        lines_for=lines_for,
        button_for=lambda rule: _button(
            f"{rule.source_url} → {rule.target_url}", CallbackAction.EDIT_REDIRECT, domain.id, rule.id
        ),
        items=rules,
        page_number=page,
        per_page=per_page,
        list_action=CallbackAction.REDIRECT,
        add_button=_button("➕ Add Redirect Rule", CallbackAction.ADD_REDIRECT, domain.id),
        domain=domain,
    )


# ===== FORMS =====

def _dns_record_lines(record: DnsRecord) -> str:
    text = (
        f"Type: <b>{record.type}</b>\n"
        f"Name: <b>{escape(record.name)}</b>\n"
        f"Content: <b>{escape(record.content)}</b>\n"
        f"TTL: <b>{record.ttl_label}</b>\n"
        f"Proxied: <b>{_yes_no(record.proxied)}</b>\n"
    )
    if record.priority is not None:
        text += f"Priority: <b>{record.priority}</b>\n"
    return text


def _waf_rule_lines(rule: WafRule) -> str:
    text = f"Name: <b>{escape(rule.name)}</b>\nMode: <b>{escape(rule.mode)}</b>\n"
    if rule.expression:
        text += f"Expression: <b>{escape(rule.expression)}</b>\n"
    if rule.priority:
        text += f"Priority: <b>{rule.priority}</b>\n"
    text += f"Status: <b>{'Active' if rule.is_active else 'Disabled'}</b>\n"
    return text


def _redirect_rule_lines(rule: RedirectRule) -> str:
    return (
        f"Source URL: <b>{escape(rule.source_url)}</b>\n"
        f"Target URL: <b>{escape(rule.target_url)}</b>\n"
        f"Status Code: <b>{rule.status_code}</b>\n"
        f"Preserve Query String: <b>{_yes_no(rule.preserve_query_string)}</b>\n"
        f"Status: <b>{'Active' if rule.is_active else 'Disabled'}</b>\n"
    )


def dns_record_form(domain: Domain, record: DnsRecord) -> Screen:
    text = (
        f"Edit DNS Record for <b>{escape(domain.name)}</b>:\n\n"
        f"{_dns_record_lines(record)}\n"
        "To edit this record, send a new message with updated information in the format:\n"
        f"<code>/edit_dns {domain.id} {record.id} name content ttl proxied</code>\n\n"
        "For example:\n"
        f"<code>/edit_dns {domain.id} {record.id} www 192.168.1.1 auto yes</code>"
    )
    keyboard = [
        [_button("🗑️ Delete Record", CallbackAction.DELETE_DNS, domain.id, record.id)],
        [back_button(CallbackAction.DNS, domain.id)],
    ]
    return Screen(text, keyboard)


def add_dns_form(domain: Domain) -> Screen:
    text = (
        f"Add DNS Record for <b>{escape(domain.name)}</b>:\n\n"
        "To add a new record, send a message in the format:\n"
        f"<code>/add_dns {domain.id} type name content ttl proxied</code>\n\n"
        "For example:\n"
        f"<code>/add_dns {domain.id} A www 192.168.1.1 auto yes</code>\n\n"
        f"Supported record types: {', '.join(RECORD_TYPES)}\n"
        "MX records take the priority as an extra last value."
    )
    return Screen(text, [[back_button(CallbackAction.DNS, domain.id)]])


def waf_rule_form(domain: Domain, rule: WafRule) -> Screen:
    text = (
        f"Edit WAF Rule for <b>{escape(domain.name)}</b>:\n\n"
        f"{_waf_rule_lines(rule)}\n"
        "To edit this rule, send a new message with updated information in the format:\n"
        f"<code>/edit_waf {domain.id} {rule.id} name mode expression priority status</code>\n\n"
        "For example:\n"
        f"<code>/edit_waf {domain.id} {rule.id} Block SQL Injection block "
        "'(http.request.uri.path contains \"sql\")' 1 active</code>"
    )
    keyboard = [
        [_button("🗑️ Delete Rule", CallbackAction.DELETE_WAF, domain.id, rule.id)],
        [back_button(CallbackAction.WAF, domain.id)],
    ]
    return Screen(text, keyboard)


def add_waf_form(domain: Domain) -> Screen:
    text = (
        f"Add WAF Rule for <b>{escape(domain.name)}</b>:\n\n"
        "To add a new rule, send a message in the format:\n"
        f"<code>/add_waf {domain.id} name mode expression priority status</code>\n\n"
        "For example:\n"
        f"<code>/add_waf {domain.id} Block SQL Injection block "
        "'(http.request.uri.path contains \"sql\")' 1 active</code>\n\n"
        f"Available modes: {', '.join(WAF_MODES)}"
    )
    return Screen(text, [[back_button(CallbackAction.WAF, domain.id)]])


def redirect_rule_form(domain: Domain, rule: RedirectRule) -> Screen:
    text = (
        f"Edit Redirect Rule for <b>{escape(domain.name)}</b>:\n\n"
        f"{_redirect_rule_lines(rule)}\n"
        "To edit this rule, send a new message with updated information in the format:\n"
        f"<code>/edit_redirect {domain.id} {rule.id} source_url target_url status_code preserve_query status</code>\n\n"
        "For example:\n"
        f"<code>/edit_redirect {domain.id} {rule.id} /old-page/ /new-page/ 301 yes active</code>"
    )
    keyboard = [
        [_button("🗑️ Delete Rule", CallbackAction.DELETE_REDIRECT, domain.id, rule.id)],
        [back_button(CallbackAction.REDIRECT, domain.id)],
    ]
    return Screen(text, keyboard)


def add_redirect_form(domain: Domain) -> Screen:
    text = (
        f"Add Redirect Rule for <b>{escape(domain.name)}</b>:\n\n"
        "To add a new rule, send a message in the format:\n"
        f"<code>/add_redirect {domain.id} source_url target_url status_code preserve_query status</code>\n\n"
        "For example:\n"
        f"<code>/add_redirect {domain.id} /old-page/ /new-page/ 301 yes active</code>\n\n"
        f"Available status codes: {', '.join(str(code) for code in REDIRECT_STATUS_CODES)}"
    )
    return Screen(text, [[back_button(CallbackAction.REDIRECT, domain.id)]])


# ===== MUTATION RESULTS =====

def dns_record_saved(zone_id: str, record: DnsRecord, created: bool) -> Screen:
    verb = "added" if created else "updated"
    text = f"✅ <b>DNS Record {verb.capitalize()}!</b>\n\n{_dns_record_lines(record)}"
    keyboard = [
        [_button("📋 View Records", CallbackAction.DNS, zone_id)],
        [back_button(CallbackAction.DOMAIN, zone_id)],
    ]
    return Screen(text.rstrip("\n"), keyboard)


def waf_rule_saved(zone_id: str, rule: WafRule, created: bool) -> Screen:
    verb = "added" if created else "updated"
    text = f"✅ <b>WAF Rule {verb.capitalize()}!</b>\n\n{_waf_rule_lines(rule)}"
    keyboard = [
        [_button("🛡️ View WAF Rules", CallbackAction.WAF, zone_id)],
        [back_button(CallbackAction.DOMAIN, zone_id)],
    ]
    return Screen(text.rstrip("\n"), keyboard)


def redirect_rule_saved(zone_id: str, rule: RedirectRule, created: bool) -> Screen:
    verb = "added" if created else "updated"
    text = f"✅ <b>Redirect Rule {verb.capitalize()}!</b>\n\n{_redirect_rule_lines(rule)}"
    keyboard = [
        [_button("↪️ View Redirects", CallbackAction.REDIRECT, zone_id)],
        [back_button(CallbackAction.DOMAIN, zone_id)],
    ]
    return Screen(text.rstrip("\n"), keyboard)
