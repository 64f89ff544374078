from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

RECORD_TYPES = ("A", "AAAA", "CNAME", "TXT", "MX", "NS", "SRV")
WAF_MODES = ("block", "challenge", "js_challenge", "managed_challenge")
REDIRECT_STATUS_CODES = (301, 302, 307, 308)
RULE_STATUSES = ("active", "disabled")

AUTO_TTL = 1
FORWARDING_ACTION = "forwarding_url"


def _setting_enabled(value: Any) -> bool:
    # Zone settings come back as "on"/"off"; older payloads used booleans.
    if isinstance(value, str):
        return value.lower() == "on"
    return bool(value)


@dataclass
class Domain:
    id: str
    name: str
    status: str
    always_use_https: bool = False
    ech: bool = False

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @classmethod
    def from_api(cls, zone: dict[str, Any], settings: dict[str, Any] | None = None) -> "Domain":
        settings = settings if settings is not None else zone.get("settings") or {}
        return cls(
            id=zone["id"],
            name=zone["name"],
            status=zone.get("status") or "unknown",
            always_use_https=_setting_enabled(settings.get("always_use_https", False)),
            ech=_setting_enabled(settings.get("ech", False)),
        )


@dataclass
class DnsRecord:
    id: str
    type: str
    name: str
    content: str
    ttl: int = AUTO_TTL
    proxied: bool = False
    priority: int | None = None

    @property
    def ttl_label(self) -> str:
        return "Auto" if self.ttl == AUTO_TTL else f"{self.ttl} seconds"

    @classmethod
    def from_api(cls, record: dict[str, Any]) -> "DnsRecord":
        return cls(
            id=record["id"],
            type=record["type"],
            name=record["name"],
            content=record.get("content") or "",
            ttl=int(record.get("ttl") or AUTO_TTL),
            proxied=bool(record.get("proxied", False)),
            priority=record.get("priority"),
        )


@dataclass
class WafRule:
    id: str
    name: str
    mode: str
    expression: str
    priority: int | None = None
    status: str = "active"
    filter_id: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @classmethod
    def from_api(cls, rule: dict[str, Any]) -> "WafRule":
        rule_filter = rule.get("filter") or {}
        return cls(
            id=rule["id"],
            name=rule.get("description") or rule.get("ref") or rule["id"],
            mode=rule.get("action", ""),
            expression=rule_filter.get("expression", ""),
            priority=rule.get("priority"),
            status="disabled" if rule.get("paused") else "active",
            filter_id=rule_filter.get("id"),
        )


@dataclass
class RedirectRule:
    id: str
    source_url: str
    target_url: str
    status_code: int = 301
    preserve_query_string: bool = False
    status: str = "active"

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @classmethod
    def from_page_rule(cls, rule: dict[str, Any]) -> "RedirectRule | None":
        """Build a redirect from a page rule, or None if it does not forward."""
        action = next(
            (a for a in rule.get("actions") or [] if a.get("id") == FORWARDING_ACTION),
            None,
        )
        if action is None:
            return None

        targets = rule.get("targets") or [{}]
        source_url = targets[0].get("constraint", {}).get("value", "")
        if source_url.startswith("http"):
            parsed = urlsplit(source_url)
            source_url = parsed.path or "/"
            if parsed.query:
                source_url += f"?{parsed.query}"

        value = action.get("value") or {}
        return cls(
            id=rule["id"],
            source_url=source_url,
            target_url=value.get("url", ""),
            status_code=value.get("status_code", 301),
            preserve_query_string=bool(value.get("preserve_query_string", False)),
            status=rule.get("status", "active"),
        )
