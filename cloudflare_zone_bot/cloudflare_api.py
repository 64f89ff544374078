"""
Cloudflare API client
Zones, DNS records and accounts go through the cloudflare SDK's typed list
resources; firewall rules, page rules and writes use its raw v4 calls. Every
response is normalized into the bot's models.
"""

import logging
from typing import Any, Callable, TypeVar

import cloudflare

from cloudflare_zone_bot.config import Settings, logger as default_logger
from cloudflare_zone_bot.exceptions import CloudflareAPIError, PartialDomainSetupError
from cloudflare_zone_bot.models import DnsRecord, Domain, RedirectRule, WafRule

T = TypeVar("T")


class CloudflareAPI:
    """Domain, DNS, WAF and redirect operations for one Cloudflare account."""

    ZONES_PER_REQUEST = 50
    RECORDS_PER_REQUEST = 100

    def __init__(self, client: cloudflare.Cloudflare, logger: logging.Logger | None = None) -> None:
        self.client = client
        self.logger = logger or default_logger
        self._account_id: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings, logger: logging.Logger | None = None) -> "CloudflareAPI":
        client = cloudflare.Cloudflare(
            api_token=settings.cloudflare_api_token,
            api_email=settings.cloudflare_email or None,
            max_retries=0,
        )
        return cls(client, logger)

    # ===== DOMAINS =====

    def list_domains(self) -> list[Domain]:
        """Return every zone on the account; the SDK pager fetches each page."""
        return [Domain.from_api(zone) for zone in self._zones()]

    def search_domains(self, query: str) -> list[Domain]:
        """Exact-name lookup first, then a case-insensitive substring scan."""
        exact = self._zones(name=query)
        if exact:
            return [Domain.from_api(zone) for zone in exact]

        needle = query.lower()
        return [domain for domain in self.list_domains() if needle in domain.name.lower()]

    def get_domain(self, zone_id: str) -> Domain | None:
        try:
            response = self._request("GET", f"/zones/{zone_id}")
        except CloudflareAPIError as e:
            if e.is_not_found:
                return None
            raise
        return self._with_settings(response["result"])

    def get_domain_by_name(self, name: str) -> Domain | None:
        zones = self._zones(name=name)
        if not zones:
            return None
        return self._with_settings(zones[0])

    def get_domain_settings(self, zone_id: str) -> dict[str, Any]:
        response = self._request("GET", f"/zones/{zone_id}/settings")
        return {setting["id"]: setting.get("value") for setting in response.get("result") or []}

    def add_domain(self, name: str) -> Domain:
        """Add a zone, or return the existing one with the same name.

        A new zone gets Always Use HTTPS enabled and ECH disabled. The three
        calls are not atomic: if a follow-up setting fails the zone stays
        created and PartialDomainSetupError is raised.
        """
        existing = self.get_domain_by_name(name)
        if existing:
            self.logger.info(f"Domain {name} already exists as zone {existing.id}")
            return existing

        response = self._request(
            "POST",
            "/zones",
            body={"name": name, "account": {"id": self.account_id}, "type": "full"},
        )
        domain = Domain.from_api(response["result"])
        self.logger.info(f"Created zone {domain.id} for {name}")

        for setting, value in (("always_use_https", True), ("ech", False)):
            try:
                self.update_domain_setting(domain.id, setting, value)
            except CloudflareAPIError as e:
                raise PartialDomainSetupError(domain, setting, e) from e
            setattr(domain, setting, value)

        return domain

    def update_domain_setting(self, zone_id: str, setting: str, value: Any) -> None:
        if isinstance(value, bool):
            value = "on" if value else "off"
        self._request("PATCH", f"/zones/{zone_id}/settings/{setting}", body={"value": value})

    def delete_domain(self, zone_id: str) -> None:
        self._request("DELETE", f"/zones/{zone_id}")

    # ===== DNS RECORDS =====

    def list_dns_records(self, zone_id: str) -> list[DnsRecord]:
        records = self._sdk(
            f"list DNS records of {zone_id}",
            lambda: [
                record.model_dump()
                for record in self.client.dns.records.list(zone_id=zone_id, per_page=self.RECORDS_PER_REQUEST)
            ],
        )
        return [DnsRecord.from_api(record) for record in records]

    def get_dns_record(self, zone_id: str, record_id: str) -> DnsRecord | None:
        result = self._get_or_none(f"/zones/{zone_id}/dns_records/{record_id}")
        return DnsRecord.from_api(result) if result else None

    def add_dns_record(
        self,
        zone_id: str,
        record_type: str,
        name: str,
        content: str,
        ttl: int = 1,
        proxied: bool = False,
        priority: int | None = None,
    ) -> DnsRecord:
        body: dict[str, Any] = {
            "type": record_type,
            "name": name,
            "content": content,
            "ttl": ttl,
            "proxied": proxied,
        }
        if priority is not None:
            body["priority"] = priority
        response = self._request("POST", f"/zones/{zone_id}/dns_records", body=body)
        return DnsRecord.from_api(response["result"])

    def update_dns_record(self, zone_id: str, record_id: str, **fields: Any) -> DnsRecord:
        response = self._request("PATCH", f"/zones/{zone_id}/dns_records/{record_id}", body=fields)
        return DnsRecord.from_api(response["result"])

    def delete_dns_record(self, zone_id: str, record_id: str) -> None:
        self._request("DELETE", f"/zones/{zone_id}/dns_records/{record_id}")

    # ===== WAF RULES =====

    def list_waf_rules(self, zone_id: str) -> list[WafRule]:
        rules = self._list_all(f"/zones/{zone_id}/firewall/rules", self.RECORDS_PER_REQUEST)
        return [WafRule.from_api(rule) for rule in rules]

    def get_waf_rule(self, zone_id: str, rule_id: str) -> WafRule | None:
        result = self._get_or_none(f"/zones/{zone_id}/firewall/rules/{rule_id}")
        return WafRule.from_api(result) if result else None

    def add_waf_rule(
        self,
        zone_id: str,
        name: str,
        mode: str,
        expression: str,
        priority: int | None = None,
        status: str = "active",
    ) -> WafRule:
        rule: dict[str, Any] = {
            "filter": {"expression": expression},
            "action": mode,
            "description": name,
            "paused": status != "active",
        }
        if priority is not None:
            rule["priority"] = priority

        # The firewall rules endpoint creates in bulk and answers with a list.
        response = self._request("POST", f"/zones/{zone_id}/firewall/rules", body=[rule])
        result = response.get("result") or []
        if not result:
            raise CloudflareAPIError("Cloudflare did not return the created WAF rule")
        return WafRule.from_api(result[0])

    def update_waf_rule(
        self,
        zone_id: str,
        rule_id: str,
        name: str,
        mode: str,
        expression: str,
        priority: int | None = None,
        status: str = "active",
    ) -> WafRule:
        existing = self.get_waf_rule(zone_id, rule_id)
        if existing is None:
            raise CloudflareAPIError("WAF rule not found", 404)

        rule: dict[str, Any] = {
            "id": rule_id,
            "filter": {"id": existing.filter_id, "expression": expression},
            "action": mode,
            "description": name,
            "paused": status != "active",
        }
        if priority is not None:
            rule["priority"] = priority

        response = self._request("PUT", f"/zones/{zone_id}/firewall/rules/{rule_id}", body=rule)
        return WafRule.from_api(response["result"])

    def delete_waf_rule(self, zone_id: str, rule_id: str) -> None:
        self._request("DELETE", f"/zones/{zone_id}/firewall/rules/{rule_id}")

    # ===== REDIRECT RULES =====

    def list_redirect_rules(self, zone_id: str) -> list[RedirectRule]:
        """Return only the page rules that carry a forwarding action."""
        response = self._request(
            "GET", f"/zones/{zone_id}/pagerules", params={"status": "active,disabled"}
        )
        rules = (RedirectRule.from_page_rule(rule) for rule in response.get("result") or [])
        return [rule for rule in rules if rule is not None]

    def get_redirect_rule(self, zone_id: str, rule_id: str) -> RedirectRule | None:
        result = self._get_or_none(f"/zones/{zone_id}/pagerules/{rule_id}")
        return RedirectRule.from_page_rule(result) if result else None

    def add_redirect_rule(
        self,
        zone_id: str,
        source_url: str,
        target_url: str,
        status_code: int = 301,
        preserve_query_string: bool = True,
        status: str = "active",
    ) -> RedirectRule:
        body = self._page_rule_body(zone_id, source_url, target_url, status_code, preserve_query_string, status)
        body["priority"] = 1
        response = self._request("POST", f"/zones/{zone_id}/pagerules", body=body)
        return self._forwarding_rule(response["result"])

    def update_redirect_rule(
        self,
        zone_id: str,
        rule_id: str,
        source_url: str,
        target_url: str,
        status_code: int = 301,
        preserve_query_string: bool = True,
        status: str = "active",
    ) -> RedirectRule:
        body = self._page_rule_body(zone_id, source_url, target_url, status_code, preserve_query_string, status)
        response = self._request("PUT", f"/zones/{zone_id}/pagerules/{rule_id}", body=body)
        return self._forwarding_rule(response["result"])

    def delete_redirect_rule(self, zone_id: str, rule_id: str) -> None:
        self._request("DELETE", f"/zones/{zone_id}/pagerules/{rule_id}")

    # ===== ACCOUNT =====

    @property
    def account_id(self) -> str:
        """Account that owns new zones, looked up once per client."""
        if self._account_id is None:
            account = self._sdk("list accounts", lambda: next(iter(self.client.accounts.list()), None))
            if account is None:
                raise CloudflareAPIError("No accounts found for the user.")
            self._account_id = account.id
        return self._account_id

    # ===== HELPERS =====

    def _with_settings(self, zone: dict[str, Any]) -> Domain:
        return Domain.from_api(zone, self.get_domain_settings(zone["id"]))

    def _forwarding_rule(self, result: dict[str, Any]) -> RedirectRule:
        rule = RedirectRule.from_page_rule(result)
        if rule is None:
            raise CloudflareAPIError("Cloudflare did not return a forwarding rule")
        return rule

    def _page_rule_body(
        self,
        zone_id: str,
        source_url: str,
        target_url: str,
        status_code: int,
        preserve_query_string: bool,
        status: str,
    ) -> dict[str, Any]:
        return {
            "targets": [
                {
                    "target": "url",
                    "constraint": {
                        "operator": "matches",
                        "value": self._format_source_url(zone_id, source_url),
                    },
                }
            ],
            "actions": [
                {
                    "id": "forwarding_url",
                    "value": {
                        "url": target_url,
                        "status_code": status_code,
                        "preserve_query_string": preserve_query_string,
                    },
                }
            ],
            "status": status,
        }

    def _format_source_url(self, zone_id: str, source_url: str) -> str:
        # Absolute URLs and wildcard patterns are sent untouched; paths get the zone name.
        if source_url.startswith("http") or "*" in source_url:
            return source_url
        zone = self._get_or_none(f"/zones/{zone_id}")
        if not zone:
            raise CloudflareAPIError("Domain not found", 404)
        return f"{zone['name']}{source_url}"

    def _get_or_none(self, path: str) -> dict[str, Any] | None:
        try:
            response = self._request("GET", path)
        except CloudflareAPIError as e:
            if e.is_not_found:
                return None
            raise
        return response.get("result")

    def _zones(self, **filters: Any) -> list[dict[str, Any]]:
        filters.setdefault("per_page", self.ZONES_PER_REQUEST)
        return self._sdk(
            f"list zones {filters}",
            lambda: [zone.model_dump() for zone in self.client.zones.list(**filters)],
        )

    def _list_all(self, path: str, per_page: int) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        page = 1
        while True:
            response = self._request("GET", path, params={"page": page, "per_page": per_page})
            items.extend(response.get("result") or [])
            total_pages = (response.get("result_info") or {}).get("total_pages") or 1
            if page >= total_pages:
                return items
            page += 1

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: Any = None,
    ) -> dict[str, Any]:
        """Send one request and return the decoded response envelope."""
        kwargs: dict[str, Any] = {"cast_to": object, "options": {"params": params} if params else {}}
        if body is not None:
            kwargs["body"] = body

        response = self._sdk(f"{method} {path}", lambda: getattr(self.client, method.lower())(path, **kwargs))
        if not isinstance(response, dict):
            raise CloudflareAPIError(f"Unexpected response from {path}")
        if response.get("success") is False:
            raise CloudflareAPIError(_error_message(response, None))
        return response

    def _sdk(self, description: str, call: Callable[[], T]) -> T:
        """Run one SDK call, translating its errors into ``CloudflareAPIError``."""
        self.logger.debug(f"Cloudflare {description}")
        try:
            return call()
        except cloudflare.APIStatusError as e:
            message = _error_message(e.body, e.status_code)
            self.logger.warning(f"Cloudflare {description} returned HTTP {e.status_code}: {message}")
            raise CloudflareAPIError(message, e.status_code) from e
        except cloudflare.APIConnectionError as e:
            self.logger.error(f"Cloudflare {description} failed: {e}")
            raise CloudflareAPIError(f"API request failed: {e}") from e


def _error_message(body: Any, status_code: int | None) -> str:
    if isinstance(body, dict):
        errors = body.get("errors") or []
        if errors and isinstance(errors[0], dict) and errors[0].get("message"):
            return errors[0]["message"]
    if status_code:
        return f"API error (HTTP {status_code})"
    return "API error"
