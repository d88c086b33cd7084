"""Client for the Admin GraphQL API of a single shop."""

import asyncio
from typing import Any, Protocol

import aiohttp

from shopify_api.core.exceptions import (
    GraphqlQueryError,
    HttpRequestError,
    HttpResponseError,
    HttpThrottledError,
    MissingAccessTokenError,
)
from shopify_api.core.session import Session
from shopify_api.utils.logger import get_logger
from shopify_api.utils.settings.app import ShopifyApiSettings


logger = get_logger(__name__)

LIBRARY_USER_AGENT = "shopify-app-api Python Library"
DEFAULT_RETRY_AFTER_SECONDS = 1.0
DEPRECATION_HEADER = "x-shopify-api-deprecated-reason"


class GraphqlQueryClient(Protocol):
    async def query(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]: ...


class GraphqlClient:
    """Client for making Admin GraphQL requests on behalf of a session."""

    def __init__(
        self,
        session: Session,
        settings: ShopifyApiSettings | None = None,
        http_session: aiohttp.ClientSession | None = None,
    ):
        if not session.access_token:
            raise MissingAccessTokenError(session.shop)

        self.session = session
        self.settings = settings or ShopifyApiSettings()
        self.url = (
            f"https://{session.shop}/admin/api/"
            f"{self.settings.SHOPIFY_API_VERSION}/graphql.json"
        )
        self.timeout = self.settings.GRAPHQL_TIMEOUT
        self.max_retries = self.settings.GRAPHQL_MAX_RETRIES
        self.http_session = http_session

    @property
    def headers(self) -> dict[str, str]:
        user_agent = LIBRARY_USER_AGENT
        if self.settings.SHOPIFY_USER_AGENT_PREFIX:
            user_agent = f"{self.settings.SHOPIFY_USER_AGENT_PREFIX} | {user_agent}"
        return {
            "X-Shopify-Access-Token": self.session.access_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": user_agent,
        }

    async def query(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Run a query or mutation and return the ``data`` object of the response."""
        payload = {"query": query, "variables": variables or {}}

        attempt = 0
        while True:
            status, headers, body = await self._post(payload)
            if _is_retriable(status) and attempt < self.max_retries:
                attempt += 1
                delay = _retry_after(headers)
                logger.warning(
                    "Retrying Admin API request",
                    status=status,
                    attempt=attempt,
                    delay=delay,
                )
                await asyncio.sleep(delay)
                continue
            break

        deprecation_reason = headers.get(DEPRECATION_HEADER)
        if deprecation_reason:
            logger.warning(
                f"Admin API request uses deprecated fields: {deprecation_reason}",
                api_version=self.settings.SHOPIFY_API_VERSION,
            )

        if status == 429:
            raise HttpThrottledError(body, headers)
        if status >= 400:
            raise HttpResponseError(status, body, headers)
        if isinstance(body, dict) and body.get("errors"):
            raise GraphqlQueryError(body["errors"], body)
        if not isinstance(body, dict):
            raise GraphqlQueryError("Admin API returned a non-JSON body", {"raw": body})

        return body.get("data") or {}

    async def _post(self, payload: dict[str, Any]) -> tuple[int, dict, Any]:
        if self.http_session is not None:
            return await self._send(self.http_session, payload)
        async with aiohttp.ClientSession() as http_session:
            return await self._send(http_session, payload)

    async def _send(
        self, http_session: aiohttp.ClientSession, payload: dict[str, Any]
    ) -> tuple[int, dict, Any]:
        try:
            async with http_session.post(
                self.url,
                json=payload,
                headers=self.headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                body = await _read_body(response)
                headers = {
                    key.lower(): value for key, value in response.headers.items()
                }
                return response.status, headers, body
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Admin API request failed: {e}", shop=self.session.shop)
            raise HttpRequestError(f"Admin API unavailable: {e}") from e


async def _read_body(response: aiohttp.ClientResponse) -> Any:
    try:
        return await response.json(content_type=None)
    except ValueError:
        return await response.text()


def _is_retriable(status: int) -> bool:
    return status == 429 or status >= 500


def _retry_after(headers: dict) -> float:
    value = headers.get("retry-after")
    if value is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    try:
        return max(float(value), 0.0)
    except (TypeError, ValueError):
        return DEFAULT_RETRY_AFTER_SECONDS


def get_graphql_client(
    session: Session, settings: ShopifyApiSettings | None = None
) -> GraphqlClient:
    """Default client factory used by the billing service."""
    return GraphqlClient(session, settings=settings)
