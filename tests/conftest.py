"""Global test configuration and fixtures for the Admin API client."""

from collections.abc import Callable

import pytest

from shopify_api import ApiConfig, FutureFlags, Session, ShopifyApi
from shopify_api.modules.billing.use_cases import BillingService
from shopify_api.utils.settings.app import ShopifyApiSettings
from tests.utils.graphql import QueuedGraphqlClient

DOMAIN = "test-shop.myshopify.io"
ACCESS_TOKEN = "access-token"
API_VERSION = "2024-10"


@pytest.fixture
def test_settings():
    return ShopifyApiSettings(
        SHOPIFY_API_KEY="test_key",
        SHOPIFY_API_SECRET_KEY="test_secret_key",
        SHOPIFY_API_VERSION=API_VERSION,
    )


@pytest.fixture
def session():
    return Session(
        id="1234",
        shop=DOMAIN,
        state="1234",
        is_online=True,
        access_token=ACCESS_TOKEN,
        scope="write_products",
    )


@pytest.fixture
def api_factory(test_settings) -> Callable[..., ShopifyApi]:
    """Build a ShopifyApi whose billing service talks to the given fake client."""

    def _build(
        client: QueuedGraphqlClient,
        billing: dict | None = None,
        managed_pricing_support: bool = False,
    ) -> ShopifyApi:
        config = ApiConfig(
            settings=test_settings,
            billing=billing,
            future=FutureFlags(managed_pricing_support=managed_pricing_support),
        )
        return ShopifyApi(
            config,
            billing=BillingService(config, client_factory=lambda _session: client),
        )

    return _build
