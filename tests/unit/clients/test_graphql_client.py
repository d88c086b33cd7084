"""Tests for the Admin GraphQL client transport and error mapping."""

from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from shopify_api.clients.graphql import GraphqlClient
from shopify_api.core.exceptions import (
    GraphqlQueryError,
    HttpRequestError,
    HttpResponseError,
    HttpThrottledError,
    MissingAccessTokenError,
)
from shopify_api.core.messages import MessageCode
from shopify_api.core.session import Session
from shopify_api.utils.settings.app import ShopifyApiSettings

QUERY = "query { shop { name } }"


def make_response(status: int = 200, body=None, headers: dict | None = None):
    response = MagicMock()
    response.status = status
    response.headers = headers or {}
    response.json = AsyncMock(return_value=body)
    response.text = AsyncMock(return_value="")
    return response


def make_http_session(*responses):
    """aiohttp session double whose ``post`` yields the given responses in order."""
    contexts = []
    for response in responses:
        context = MagicMock()
        context.__aenter__ = AsyncMock(return_value=response)
        context.__aexit__ = AsyncMock(return_value=False)
        contexts.append(context)

    http_session = MagicMock()
    http_session.post.side_effect = contexts
    return http_session


class TestGraphqlClient:
    """Test suite for request construction and response handling."""

    @pytest.fixture
    def settings(self):
        return ShopifyApiSettings(
            SHOPIFY_API_VERSION="2024-10",
            GRAPHQL_TIMEOUT=10,
            GRAPHQL_MAX_RETRIES=0,
        )

    def test_requires_access_token(self, settings):
        session = Session(id="offline", shop="test-shop.myshopify.io", state="state")

        with pytest.raises(MissingAccessTokenError) as exc_info:
            GraphqlClient(session, settings=settings)

        assert exc_info.value.message_code == MessageCode.MISSING_ACCESS_TOKEN
        assert exc_info.value.details == {"shop": "test-shop.myshopify.io"}

    @pytest.mark.asyncio
    async def test_posts_query_to_versioned_endpoint(self, session, settings):
        http_session = make_http_session(
            make_response(body={"data": {"shop": {"name": "Test shop"}}})
        )
        client = GraphqlClient(session, settings=settings, http_session=http_session)

        data = await client.query(QUERY, {"first": 1})

        assert data == {"shop": {"name": "Test shop"}}
        args, kwargs = http_session.post.call_args
        assert args[0] == "https://test-shop.myshopify.io/admin/api/2024-10/graphql.json"
        assert kwargs["json"] == {"query": QUERY, "variables": {"first": 1}}
        assert kwargs["headers"]["X-Shopify-Access-Token"] == session.access_token
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["timeout"].total == 10

    @pytest.mark.asyncio
    async def test_user_agent_prefix(self, session):
        settings = ShopifyApiSettings(SHOPIFY_USER_AGENT_PREFIX="My App")
        http_session = make_http_session(make_response(body={"data": {}}))
        client = GraphqlClient(session, settings=settings, http_session=http_session)

        await client.query(QUERY)

        user_agent = http_session.post.call_args.kwargs["headers"]["User-Agent"]
        assert user_agent.startswith("My App | ")

    @pytest.mark.asyncio
    async def test_error_status_raises_http_response_error(self, session, settings):
        http_session = make_http_session(
            make_response(status=401, body={"errors": "Invalid API key"})
        )
        client = GraphqlClient(session, settings=settings, http_session=http_session)

        with pytest.raises(HttpResponseError) as exc_info:
            await client.query(QUERY)

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == {"errors": "Invalid API key"}

    @pytest.mark.asyncio
    async def test_graphql_errors_raise_query_error(self, session, settings):
        errors = [{"message": "Field 'nope' doesn't exist on type 'Shop'"}]
        http_session = make_http_session(make_response(body={"errors": errors}))
        client = GraphqlClient(session, settings=settings, http_session=http_session)

        with pytest.raises(GraphqlQueryError) as exc_info:
            await client.query(QUERY)

        assert exc_info.value.errors == errors
        assert str(exc_info.value) == errors[0]["message"]

    @pytest.mark.asyncio
    async def test_network_failure_raises_http_request_error(self, session, settings):
        http_session = MagicMock()
        http_session.post.side_effect = aiohttp.ClientConnectionError("connection reset")
        client = GraphqlClient(session, settings=settings, http_session=http_session)

        with pytest.raises(HttpRequestError) as exc_info:
            await client.query(QUERY)

        assert exc_info.value.message_code == MessageCode.HTTP_REQUEST_FAILED
        assert "connection reset" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_throttled_without_retries(self, session, settings):
        http_session = make_http_session(
            make_response(status=429, body={"errors": "Throttled"})
        )
        client = GraphqlClient(session, settings=settings, http_session=http_session)

        with pytest.raises(HttpThrottledError) as exc_info:
            await client.query(QUERY)

        assert exc_info.value.status_code == 429
        assert http_session.post.call_count == 1

    @pytest.mark.asyncio
    async def test_retries_throttled_requests_after_retry_after(self, session):
        settings = ShopifyApiSettings(GRAPHQL_MAX_RETRIES=2)
        http_session = make_http_session(
            make_response(status=429, headers={"Retry-After": "2.0"}),
            make_response(status=503),
            make_response(body={"data": {"ok": True}}),
        )
        client = GraphqlClient(session, settings=settings, http_session=http_session)

        with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            data = await client.query(QUERY)

        assert data == {"ok": True}
        assert http_session.post.call_count == 3
        assert [c.args[0] for c in mock_sleep.await_args_list] == [2.0, 1.0]

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, session):
        settings = ShopifyApiSettings(GRAPHQL_MAX_RETRIES=1)
        http_session = make_http_session(
            make_response(status=500), make_response(status=502)
        )
        client = GraphqlClient(session, settings=settings, http_session=http_session)

        with patch("asyncio.sleep", new_callable=AsyncMock):
            with pytest.raises(HttpResponseError) as exc_info:
                await client.query(QUERY)

        assert exc_info.value.status_code == 502
        assert http_session.post.call_count == 2

    @pytest.mark.asyncio
    async def test_non_json_body_raises_query_error(self, session, settings):
        response = make_response()
        response.json = AsyncMock(side_effect=ValueError("not json"))
        response.text = AsyncMock(return_value="<html>maintenance</html>")
        client = GraphqlClient(
            session, settings=settings, http_session=make_http_session(response)
        )

        with pytest.raises(GraphqlQueryError):
            await client.query(QUERY)
