"""Billing service: active payment checks, subscription listing and cancellation."""

from collections.abc import Callable

from shopify_api.clients.graphql import GraphqlQueryClient, get_graphql_client
from shopify_api.config import ApiConfig
from shopify_api.core.base import BaseService
from shopify_api.core.exceptions import BillingError, GraphqlQueryError
from shopify_api.core.session import Session
from .check import BillingChecker, fetch_active_subscriptions
from .queries import CANCEL_SUBSCRIPTION_MUTATION
from .schemas import AppSubscription, BillingCheckParams, BillingCheckResponseObject

ClientFactory = Callable[[Session], GraphqlQueryClient]


class BillingService(BaseService):
    """Billing operations exposed as ``api.billing``."""

    def __init__(self, config: ApiConfig, client_factory: ClientFactory | None = None):
        super().__init__(config)
        self.client_factory = client_factory or (
            lambda session: get_graphql_client(session, settings=config.settings)
        )
        self.checker = BillingChecker(config.billing)

    async def check(
        self,
        session: Session,
        plans: list[str] | str | None = None,
        is_test: bool = True,
        return_object: bool = False,
    ) -> bool | BillingCheckResponseObject:
        """Check whether the shop has an active payment for the app.

        Args:
            session: Session of the shop to check
            plans: Plan names to accept; all plans when omitted
            is_test: Count test charges (default) or only live charges
            return_object: Return the purchases instead of a boolean

        Returns:
            ``has_active_payment`` as a bool, or a BillingCheckResponseObject
            when ``return_object`` is set or managed pricing support is enabled
        """
        params = BillingCheckParams(
            session=session,
            plans=plans,
            is_test=is_test,
            return_object=(
                return_object or self.config.future.managed_pricing_support
            ),
        )
        client = self.client_factory(session)
        return await self.checker.check(client, params)

    async def subscriptions(self, session: Session) -> list[AppSubscription]:
        """List the subscriptions currently active on the app installation."""
        client = self.client_factory(session)
        subscriptions = await fetch_active_subscriptions(client)
        self.logger.info(
            f"Found {len(subscriptions)} active subscriptions for {session.shop}"
        )
        return subscriptions

    async def cancel(
        self, session: Session, subscription_id: str, prorate: bool = True
    ) -> AppSubscription:
        """Cancel an app subscription, optionally prorating the refund."""
        client = self.client_factory(session)
        data = await client.query(
            CANCEL_SUBSCRIPTION_MUTATION,
            {"id": subscription_id, "prorate": prorate},
        )

        payload = data.get("appSubscriptionCancel")
        if not isinstance(payload, dict):
            raise GraphqlQueryError(
                "Response is missing appSubscriptionCancel", {"data": data}
            )

        user_errors = payload.get("userErrors") or []
        if user_errors:
            self.logger.error(
                "Subscription cancellation rejected",
                subscription_id=subscription_id,
                user_errors=user_errors,
            )
            raise BillingError(
                message="Error while canceling a subscription",
                error_data=user_errors,
            )

        subscription = AppSubscription.model_validate(payload["appSubscription"])
        self.logger.info(
            f"Cancelled subscription {subscription.id} for {session.shop}",
            prorate=prorate,
        )
        return subscription
