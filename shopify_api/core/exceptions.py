"""Exception hierarchy for Admin API and billing failures."""

from typing import Any

from .messages import MessageCode, get_default_message


class ShopifyApiException(Exception):
    """Base exception for the library with unified message codes."""

    def __init__(
        self,
        message_code: MessageCode,
        details: dict | None = None,
        message: str | None = None,
    ):
        self.message_code = message_code
        self.message: str = message or get_default_message(message_code)
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to a serializable payload."""
        return {
            "message_code": self.message_code,
            "message": self.message,
            "details": self.details,
        }


class HttpRequestError(ShopifyApiException):
    """The request never produced a response (network failure, timeout)."""

    def __init__(self, message: str | None = None, details: dict | None = None):
        super().__init__(MessageCode.HTTP_REQUEST_FAILED, details, message)


class HttpResponseError(ShopifyApiException):
    """The Admin API answered with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        body: Any = None,
        headers: dict | None = None,
        message_code: MessageCode = MessageCode.HTTP_RESPONSE_ERROR,
    ):
        self.status_code = status_code
        self.body = body
        self.headers = headers or {}
        super().__init__(
            message_code,
            details={"status_code": status_code, "body": body},
            message=f"{get_default_message(message_code)} (status {status_code})",
        )


class HttpThrottledError(HttpResponseError):
    """429 response that is still throttled after all retries."""

    def __init__(self, body: Any = None, headers: dict | None = None):
        super().__init__(429, body, headers, MessageCode.HTTP_THROTTLED)


class GraphqlQueryError(ShopifyApiException):
    """A GraphQL response carried a top-level ``errors`` entry."""

    def __init__(self, errors: Any, body: dict | None = None):
        self.errors = errors
        self.body = body or {}
        message = get_default_message(MessageCode.GRAPHQL_QUERY_ERROR)
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            message = errors[0].get("message", message)
        elif isinstance(errors, str):
            message = errors
        super().__init__(
            MessageCode.GRAPHQL_QUERY_ERROR,
            details={"errors": errors},
            message=message,
        )


class MissingAccessTokenError(ShopifyApiException):
    def __init__(self, shop: str):
        super().__init__(MessageCode.MISSING_ACCESS_TOKEN, details={"shop": shop})


class InvalidShopError(ShopifyApiException, ValueError):
    def __init__(self, shop: str):
        super().__init__(
            MessageCode.INVALID_SHOP,
            details={"shop": shop},
            message=f"Invalid shop domain: {shop!r}",
        )


class BillingError(ShopifyApiException):
    """Billing mutation rejected the request, or billing is not configured."""

    def __init__(
        self,
        message: str | None = None,
        error_data: list | None = None,
        message_code: MessageCode = MessageCode.BILLING_ERROR,
    ):
        self.error_data = error_data or []
        super().__init__(
            message_code,
            details={"error_data": self.error_data},
            message=message,
        )
