"""Cursor pagination over ``currentAppInstallation`` purchase connections."""

from typing import Any, TypeVar

from shopify_api.clients.graphql import GraphqlQueryClient
from shopify_api.core.exceptions import GraphqlQueryError
from shopify_api.utils.logger import get_logger
from .schemas import Page, Purchase

logger = get_logger(__name__)

P = TypeVar("P", bound=Purchase)


def installation_field(data: dict[str, Any], field: str) -> Any:
    """Return ``currentAppInstallation.<field>`` from a response ``data`` object."""
    installation = data.get("currentAppInstallation")
    if not isinstance(installation, dict) or field not in installation:
        raise GraphqlQueryError(
            f"Response is missing currentAppInstallation.{field}", {"data": data}
        )
    return installation[field]


def parse_page(connection: dict[str, Any], model: type[P]) -> Page[P]:
    edges = connection.get("edges") or []
    page_info = connection.get("pageInfo") or {}
    return Page[model](
        items=[model.model_validate(edge["node"]) for edge in edges],
        has_next_page=bool(page_info.get("hasNextPage")),
        end_cursor=page_info.get("endCursor"),
    )


async def fetch_page(
    client: GraphqlQueryClient,
    query: str,
    field: str,
    model: type[P],
    end_cursor: str | None = None,
) -> Page[P]:
    data = await client.query(query, {"endCursor": end_cursor})
    connection = installation_field(data, field)
    if not isinstance(connection, dict):
        raise GraphqlQueryError(
            f"Response has no {field} connection", {"data": data}
        )
    return parse_page(connection, model)


async def fetch_all(
    client: GraphqlQueryClient, query: str, field: str, model: type[P]
) -> list[P]:
    """Follow ``endCursor`` until the server reports no further pages.

    Each request depends on the cursor of the previous page, so pages are
    fetched strictly one after another.
    """
    items: list[P] = []
    end_cursor: str | None = None
    pages = 0

    while True:
        page = await fetch_page(client, query, field, model, end_cursor)
        pages += 1
        items.extend(page.items)

        if not page.has_next_page:
            break
        if not page.end_cursor or page.end_cursor == end_cursor:
            raise GraphqlQueryError(
                f"Pagination of {field} did not advance past cursor {end_cursor!r}",
                {"field": field, "end_cursor": end_cursor},
            )
        end_cursor = page.end_cursor

    logger.debug("Fetched purchases", field=field, pages=pages, count=len(items))
    return items
