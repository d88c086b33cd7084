"""Billing enums and Admin API paging constants."""

from enum import Enum


class BillingInterval(str, Enum):
    """How often a plan is charged."""

    ONE_TIME = "ONE_TIME"
    EVERY_30_DAYS = "EVERY_30_DAYS"
    ANNUAL = "ANNUAL"
    USAGE = "USAGE"


RECURRING_INTERVALS: frozenset[BillingInterval] = frozenset(
    {
        BillingInterval.EVERY_30_DAYS,
        BillingInterval.ANNUAL,
        BillingInterval.USAGE,
    }
)


class PurchaseStatus(str, Enum):
    """Statuses reported for app subscriptions and one-time purchases."""

    ACTIVE = "ACTIVE"
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
    EXPIRED = "EXPIRED"
    FROZEN = "FROZEN"
    CANCELLED = "CANCELLED"


class PurchaseKind(str, Enum):
    ONE_TIME = "one_time"
    SUBSCRIPTION = "subscription"


# Largest page the Admin API serves for installation purchase connections
PURCHASES_PAGE_SIZE = 250
