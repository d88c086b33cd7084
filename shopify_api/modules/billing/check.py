"""Active payment check against the app's plan catalog."""

import asyncio

import structlog

from shopify_api.clients.graphql import GraphqlQueryClient
from shopify_api.utils.logger import get_logger
from .pagination import fetch_all, installation_field
from .queries import (
    ACTIVE_SUBSCRIPTIONS_QUERY,
    ONE_TIME_PURCHASES_QUERY,
    SUBSCRIPTIONS_QUERY,
)
from .schemas import (
    AppSubscription,
    BillingCheckParams,
    BillingCheckResponseObject,
    OneTimePurchase,
    PlanCatalog,
)


class BillingChecker:
    """Decides whether a shop has paid for the app.

    Holds only the immutable plan catalog, so a single instance can serve
    concurrent checks for different sessions.
    """

    def __init__(self, catalog: PlanCatalog | None = None):
        self.catalog = catalog
        self.logger = get_logger(self.__class__.__name__)

    async def check(
        self, client: GraphqlQueryClient, params: BillingCheckParams
    ) -> bool | BillingCheckResponseObject:
        with structlog.contextvars.bound_contextvars(shop=params.session.shop):
            one_time_purchases, app_subscriptions = await self.fetch_purchases(
                client
            )

            one_time_purchases = [
                purchase
                for purchase in one_time_purchases
                if purchase.is_active_for(params.is_test, params.plans)
            ]
            app_subscriptions = [
                subscription
                for subscription in app_subscriptions
                if subscription.is_active_for(params.is_test, params.plans)
            ]
            has_active_payment = bool(one_time_purchases or app_subscriptions)

            self.logger.info(
                "Billing check completed",
                has_active_payment=has_active_payment,
                one_time_purchases=len(one_time_purchases),
                app_subscriptions=len(app_subscriptions),
                is_test=params.is_test,
            )

        if not params.return_object:
            return has_active_payment

        return BillingCheckResponseObject(
            has_active_payment=has_active_payment,
            one_time_purchases=one_time_purchases,
            app_subscriptions=app_subscriptions,
        )

    async def fetch_purchases(
        self, client: GraphqlQueryClient
    ) -> tuple[list[OneTimePurchase], list[AppSubscription]]:
        """Fetch every purchase the catalog's plan types can produce.

        Without a catalog only the installation's active subscriptions are
        read. With one, each non-empty partition (one-time, recurring) is
        paginated to exhaustion; the two partitions are independent and run
        concurrently. If one partition fails the other is cancelled before
        the error propagates.
        """
        if not self.catalog:
            return [], await fetch_active_subscriptions(client)

        one_time_plans = self.catalog.one_time_plans()
        recurring_plans = self.catalog.recurring_plans()

        tasks = [
            asyncio.ensure_future(
                fetch_all(
                    client,
                    ONE_TIME_PURCHASES_QUERY,
                    "oneTimePurchases",
                    OneTimePurchase,
                )
                if one_time_plans
                else _no_purchases()
            ),
            asyncio.ensure_future(
                fetch_all(
                    client,
                    SUBSCRIPTIONS_QUERY,
                    "activeSubscriptions",
                    AppSubscription,
                )
                if recurring_plans
                else _no_purchases()
            ),
        ]
        try:
            one_time_purchases, app_subscriptions = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return one_time_purchases, app_subscriptions


async def fetch_active_subscriptions(
    client: GraphqlQueryClient,
) -> list[AppSubscription]:
    data = await client.query(ACTIVE_SUBSCRIPTIONS_QUERY)
    subscriptions = installation_field(data, "activeSubscriptions") or []
    return [AppSubscription.model_validate(node) for node in subscriptions]


async def _no_purchases() -> list:
    return []
