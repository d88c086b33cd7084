"""Centralized message codes and default messages for library errors."""

from enum import Enum


class MessageCode(str, Enum):
    """Centralized message codes for errors raised by the library."""

    # Transport
    HTTP_REQUEST_FAILED = "HTTP_REQUEST_FAILED"
    HTTP_RESPONSE_ERROR = "HTTP_RESPONSE_ERROR"
    HTTP_THROTTLED = "HTTP_THROTTLED"

    # GraphQL
    GRAPHQL_QUERY_ERROR = "GRAPHQL_QUERY_ERROR"

    # Session
    MISSING_ACCESS_TOKEN = "MISSING_ACCESS_TOKEN"
    INVALID_SHOP = "INVALID_SHOP"

    # Billing errors
    BILLING_ERROR = "BILLING_ERROR"


# Default messages for each message code
DEFAULT_MESSAGES = {
    # Transport
    MessageCode.HTTP_REQUEST_FAILED: "Request to the Admin API could not be completed",
    MessageCode.HTTP_RESPONSE_ERROR: "Admin API responded with an error status",
    MessageCode.HTTP_THROTTLED: "Admin API request was throttled",
    # GraphQL
    MessageCode.GRAPHQL_QUERY_ERROR: "GraphQL query returned errors",
    # Session
    MessageCode.MISSING_ACCESS_TOKEN: "Session has no access token",
    MessageCode.INVALID_SHOP: "Invalid shop domain",
    # Billing errors
    MessageCode.BILLING_ERROR: "Billing operation failed",
}


def get_default_message(message_code: MessageCode) -> str:
    """Get default message for a message code."""
    return DEFAULT_MESSAGES.get(message_code, "Error occurred")
