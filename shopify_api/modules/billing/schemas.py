"""Billing schemas: plan catalog, purchases and check parameters/results."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import datetime
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Generic, TypeVar
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from shopify_api.core.session import Session
from .constants import (
    RECURRING_INTERVALS,
    BillingInterval,
    PurchaseKind,
    PurchaseStatus,
)

CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")

T = TypeVar("T")


class BillingPlanConfig(BaseModel):
    """Pricing terms for a single named plan."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    amount: Decimal = Field(gt=0)
    currency_code: str = Field(alias="currencyCode")
    interval: BillingInterval
    trial_days: int | None = Field(default=None, ge=0, alias="trialDays")

    @field_validator("currency_code")
    @classmethod
    def validate_currency_code(cls, v):
        v = v.strip().upper()
        if not CURRENCY_CODE_PATTERN.match(v):
            raise ValueError(f"currency_code must be an ISO 4217 code, got {v!r}")
        return v

    @property
    def is_recurring(self) -> bool:
        return self.interval in RECURRING_INTERVALS


class PlanCatalog(Mapping[str, BillingPlanConfig]):
    """Read-only mapping of plan name to pricing terms.

    Values may be given as ``BillingPlanConfig`` instances or plain dicts; the
    catalog copies its input so later changes to the source mapping are not
    observed.
    """

    def __init__(self, plans: Mapping[str, BillingPlanConfig | dict[str, Any]]):
        validated = {
            name: (
                plan
                if isinstance(plan, BillingPlanConfig)
                else BillingPlanConfig.model_validate(plan)
            )
            for name, plan in plans.items()
        }
        self._plans = MappingProxyType(validated)

    def __getitem__(self, name: str) -> BillingPlanConfig:
        return self._plans[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._plans)

    def __len__(self) -> int:
        return len(self._plans)

    def __repr__(self) -> str:
        return f"PlanCatalog({dict(self._plans)!r})"

    def one_time_plans(self) -> list[str]:
        return [name for name, plan in self._plans.items() if not plan.is_recurring]

    def recurring_plans(self) -> list[str]:
        return [name for name, plan in self._plans.items() if plan.is_recurring]


class Purchase(BaseModel):
    """A charge reported by the Admin API for the current app installation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    test: bool
    # Plain string so statuses added to the API later still parse
    status: str
    created_at: datetime | None = None

    def is_active_for(self, is_test: bool, plans: list[str] | None = None) -> bool:
        """Whether this purchase counts as an active payment for the caller.

        Args:
            is_test: Only purchases whose ``test`` flag equals this count
            plans: Plan names to accept; ``None`` accepts every name

        Returns:
            True if the purchase is ACTIVE, in the requested mode and plan set
        """
        if self.status != PurchaseStatus.ACTIVE:
            return False
        if self.test != is_test:
            return False
        return plans is None or self.name in plans


class OneTimePurchase(Purchase):
    kind: PurchaseKind = PurchaseKind.ONE_TIME


class AppSubscription(Purchase):
    kind: PurchaseKind = PurchaseKind.SUBSCRIPTION
    current_period_end: datetime | None = None
    trial_days: int | None = None


class Page(BaseModel, Generic[T]):
    """One page of a cursor-paginated connection."""

    items: list[T]
    has_next_page: bool = False
    end_cursor: str | None = None


class BillingCheckParams(BaseModel):
    """Options for ``billing.check``.

    ``is_test`` defaults to True and ``return_object`` to False.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    session: Session
    plans: list[str] | None = None
    is_test: bool = True
    return_object: bool = False

    @field_validator("plans", mode="before")
    @classmethod
    def validate_plans(cls, v):
        if isinstance(v, str):
            return [v]
        return v


class BillingCheckResponseObject(BaseModel):
    has_active_payment: bool
    one_time_purchases: list[OneTimePurchase] = Field(default_factory=list)
    app_subscriptions: list[AppSubscription] = Field(default_factory=list)
