"""Authenticated shop session used to reach the Admin API."""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .exceptions import InvalidShopError

SHOP_DOMAIN_PATTERN = re.compile(
    r"^[a-z0-9][a-z0-9\-]*\.myshopify\.(com|io)$", re.IGNORECASE
)


@dataclass
class Session:
    """Session for a single shop, either offline or tied to an online user."""

    id: str
    shop: str
    state: str
    is_online: bool = False
    access_token: str | None = None
    scope: str | None = None
    expires: datetime | None = None

    def __post_init__(self):
        """Ensure the shop is a platform-issued domain."""
        if not self.shop or not SHOP_DOMAIN_PATTERN.match(self.shop):
            raise InvalidShopError(self.shop)
        self.shop = self.shop.lower()

    def is_expired(self, within_seconds: int = 0) -> bool:
        if self.expires is None:
            return False
        cutoff = datetime.now(timezone.utc) + timedelta(seconds=within_seconds)
        expires = self.expires
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        return expires <= cutoff

    def is_active(self, scopes: str | list[str] | None = None) -> bool:
        """True when the session has a live token covering the given scopes.

        Args:
            scopes: Comma separated string or list of required access scopes

        Returns:
            Whether the session can be used for requests needing those scopes
        """
        if not self.access_token or self.is_expired():
            return False
        if not scopes:
            return True

        required = _parse_scopes(scopes)
        granted = _parse_scopes(self.scope or "")
        # write_x implies read_x
        granted |= {
            "read_" + scope[len("write_") :]
            for scope in granted
            if scope.startswith("write_")
        }
        return required <= granted


def _parse_scopes(scopes: str | list[str]) -> set[str]:
    if isinstance(scopes, str):
        scopes = scopes.split(",")
    return {scope.strip() for scope in scopes if scope.strip()}
