"""Library configuration: environment settings plus app-supplied billing plans."""

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shopify_api.modules.billing.schemas import PlanCatalog
from shopify_api.utils.settings.app import ShopifyApiSettings


class FutureFlags(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Apps billed through managed pricing always get the structured check result
    managed_pricing_support: bool = False


class ApiConfig(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    settings: ShopifyApiSettings = Field(default_factory=ShopifyApiSettings)
    billing: PlanCatalog | None = None
    future: FutureFlags = Field(default_factory=FutureFlags)

    @field_validator("billing", mode="before")
    @classmethod
    def validate_billing(cls, v):
        if v is None or isinstance(v, PlanCatalog):
            return v
        if isinstance(v, Mapping):
            return PlanCatalog(v)
        raise ValueError("billing must be a mapping of plan name to plan config")
