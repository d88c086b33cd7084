"""Admin API client library for app billing."""

from shopify_api.config import ApiConfig, FutureFlags
from shopify_api.core.exceptions import (
    BillingError,
    GraphqlQueryError,
    HttpRequestError,
    HttpResponseError,
    HttpThrottledError,
    InvalidShopError,
    MissingAccessTokenError,
    ShopifyApiException,
)
from shopify_api.core.session import Session
from shopify_api.modules.billing.constants import BillingInterval
from shopify_api.modules.billing.schemas import (
    AppSubscription,
    BillingCheckResponseObject,
    BillingPlanConfig,
    OneTimePurchase,
    PlanCatalog,
)
from shopify_api.modules.billing.use_cases import BillingService


class ShopifyApi:
    """Entry point bundling configuration and the API surfaces built on it."""

    def __init__(self, config: ApiConfig, billing: BillingService | None = None):
        self.config = config
        self.billing = billing or BillingService(config)


def shopify_api(config: ApiConfig | None = None) -> ShopifyApi:
    """Build the library entry point from a configuration."""
    return ShopifyApi(config or ApiConfig())


__all__ = [
    "ApiConfig",
    "AppSubscription",
    "BillingCheckResponseObject",
    "BillingError",
    "BillingInterval",
    "BillingPlanConfig",
    "BillingService",
    "FutureFlags",
    "GraphqlQueryError",
    "HttpRequestError",
    "HttpResponseError",
    "HttpThrottledError",
    "InvalidShopError",
    "MissingAccessTokenError",
    "OneTimePurchase",
    "PlanCatalog",
    "Session",
    "ShopifyApi",
    "ShopifyApiException",
    "shopify_api",
]
