"""
Inline button payloads.

A payload is ``<action>_<arg1>[_<arg2>]``. It is decoded once into a
``CallbackData`` value; the decoder always tries the longest action tag
first, so ``edit_dns_1_2`` can never be taken for ``dns_...`` and
``confirm_delete_1`` never for ``delete_...``.

Telegram caps a payload at 64 bytes, so 32-hex Cloudflare ids are sent as
``~`` plus 22 base64 characters (alphabet ``A-Za-z0-9-.``, no ``_``). Any
other id is sent as is.
"""

import base64
import binascii
import re
from dataclasses import dataclass
from enum import Enum

HEX_ID = re.compile(r"[0-9a-f]{32}")
COMPACT_PREFIX = "~"
_ALTCHARS = b"-."


class CallbackAction(str, Enum):
    DOMAIN = "domain"
    PAGE = "page"
    ADD = "add"
    DNS = "dns"
    WAF = "waf"
    REDIRECT = "redirect"
    HTTPS = "https"
    ECH = "ech"
    DELETE = "delete"
    CONFIRM_DELETE = "confirm_delete"
    EDIT_DNS = "edit_dns"
    ADD_DNS = "add_dns"
    DELETE_DNS = "delete_dns"
    EDIT_WAF = "edit_waf"
    ADD_WAF = "add_waf"
    DELETE_WAF = "delete_waf"
    EDIT_REDIRECT = "edit_redirect"
    ADD_REDIRECT = "add_redirect"
    DELETE_REDIRECT = "delete_redirect"


# (minimum, maximum) number of arguments per action
ARITY: dict[CallbackAction, tuple[int, int]] = {
    CallbackAction.DOMAIN: (1, 1),
    CallbackAction.PAGE: (1, 2),
    CallbackAction.ADD: (1, 1),
    CallbackAction.DNS: (1, 2),
    CallbackAction.WAF: (1, 2),
    CallbackAction.REDIRECT: (1, 2),
    CallbackAction.HTTPS: (1, 1),
    CallbackAction.ECH: (1, 1),
    CallbackAction.DELETE: (1, 1),
    CallbackAction.CONFIRM_DELETE: (1, 1),
    CallbackAction.EDIT_DNS: (2, 2),
    CallbackAction.ADD_DNS: (1, 1),
    CallbackAction.DELETE_DNS: (2, 2),
    CallbackAction.EDIT_WAF: (2, 2),
    CallbackAction.ADD_WAF: (1, 1),
    CallbackAction.DELETE_WAF: (2, 2),
    CallbackAction.EDIT_REDIRECT: (2, 2),
    CallbackAction.ADD_REDIRECT: (1, 1),
    CallbackAction.DELETE_REDIRECT: (2, 2),
}

# Actions whose second argument is a page index.
PAGED_ACTIONS = {CallbackAction.DNS, CallbackAction.WAF, CallbackAction.REDIRECT}

_TAGS_LONGEST_FIRST = sorted(CallbackAction, key=lambda action: len(action.value), reverse=True)

# Actions whose arguments are free text (a domain name, a page and query) rather than ids.
FREE_TEXT_ACTIONS = {CallbackAction.ADD, CallbackAction.PAGE}


def compact_id(value: str) -> str:
    if not HEX_ID.fullmatch(value):
        return value
    encoded = base64.b64encode(bytes.fromhex(value), altchars=_ALTCHARS).decode("ascii")
    return COMPACT_PREFIX + encoded.rstrip("=")


def expand_id(value: str) -> str:
    """Inverse of ``compact_id``; raises ValueError for a damaged compact id."""
    if not value.startswith(COMPACT_PREFIX):
        return value
    try:
        raw = base64.b64decode(value[1:] + "==", altchars=_ALTCHARS, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid compact id: {value}") from e
    if len(raw) != 16:
        raise ValueError(f"Invalid compact id: {value}")
    return raw.hex()


@dataclass(frozen=True)
class CallbackData:
    action: CallbackAction
    args: tuple[str, ...]

    @classmethod
    def build(cls, action: CallbackAction, *args: object) -> "CallbackData":
        return cls(action, tuple(str(arg) for arg in args))

    @classmethod
    def parse(cls, payload: str) -> "CallbackData | None":
        """Decode a payload, or return None if it is not one of ours."""
        for action in _TAGS_LONGEST_FIRST:
            prefix = f"{action.value}_"
            if not payload.startswith(prefix):
                continue

            rest = payload[len(prefix):]
            minimum, maximum = ARITY[action]
            # The last argument keeps any remaining underscores.
            args = tuple(rest.split("_", maximum - 1)) if rest else ()
            if not minimum <= len(args) <= maximum or not all(args):
                return None
            if action not in FREE_TEXT_ACTIONS:
                try:
                    args = tuple(expand_id(arg) for arg in args)
                except ValueError:
                    return None

            data = cls(action, args)
            if action is CallbackAction.PAGE or (action in PAGED_ACTIONS and len(args) > 1):
                if not data._page_arg().lstrip("-").isdigit():
                    return None
            return data
        return None

    def encode(self) -> str:
        args = self.args if self.action in FREE_TEXT_ACTIONS else tuple(compact_id(arg) for arg in self.args)
        return "_".join((self.action.value, *args))

    @property
    def zone_id(self) -> str:
        return self.args[0]

    @property
    def item_id(self) -> str:
        return self.args[1]

    @property
    def page(self) -> int:
        """Page index carried by page/dns/waf/redirect payloads (0 when absent)."""
        if self.action is CallbackAction.PAGE:
            return int(self.args[0])
        if self.action in PAGED_ACTIONS and len(self.args) > 1:
            return int(self.args[1])
        return 0

    @property
    def query(self) -> str | None:
        """Search query carried by a page payload, if any."""
        if self.action is CallbackAction.PAGE and len(self.args) > 1:
            return self.args[1]
        return None

    def _page_arg(self) -> str:
        return self.args[0] if self.action is CallbackAction.PAGE else self.args[1]


def callback(action: CallbackAction, *args: object) -> str:
    """Encode a payload for an inline button."""
    return CallbackData.build(action, *args).encode()
