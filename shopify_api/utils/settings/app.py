from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShopifyApiSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENVIRONMENT: str = "DEV"

    SHOPIFY_API_KEY: str = ""
    SHOPIFY_API_SECRET_KEY: SecretStr = SecretStr("")
    SHOPIFY_API_VERSION: str = "2024-10"
    SHOPIFY_USER_AGENT_PREFIX: str | None = None

    # Admin GraphQL transport
    GRAPHQL_TIMEOUT: int = 30  # seconds
    GRAPHQL_MAX_RETRIES: int = 0

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.upper() == "PROD"

    def validate_prod(self) -> None:
        """Sanity checks for production environment."""
        if self.is_production:
            if not self.SHOPIFY_API_KEY:
                raise ValueError("SHOPIFY_API_KEY must be set in production")
            if not self.SHOPIFY_API_SECRET_KEY.get_secret_value():
                raise ValueError("SHOPIFY_API_SECRET_KEY must be set in production")


__all__ = ["ShopifyApiSettings"]
