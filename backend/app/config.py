"""Settings — everything BloodBond reads from the environment (or a .env file).

Invariants:
    - The Stripe secret key is only ever read from the environment
    - get_settings() returns one cached Settings per process; tests that need
      other values set environment variables before the first call
    - search_max_limit caps every paginated listing (requests, funds, users)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    database_url: str = "postgresql+asyncpg://bloodbond:bloodbond@db:5432/bloodbond"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Payment provider
    stripe_secret_key: str = "sk_test_placeholder"
    stripe_currency: str = "usd"
    stripe_max_retries: int = 3
    stripe_base_delay_ms: int = 500
    stripe_max_delay_ms: int = 8_000
    checkout_success_url: str = "http://localhost:5173/funding/success"
    checkout_cancel_url: str = "http://localhost:5173/funding/cancel"
    checkout_product_name: str = "Blood donation fund contribution"

    # Listings
    search_default_limit: int = 10
    search_max_limit: int = 100

    cors_origins: list[str] = ["http://localhost:5173"]
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, v: str) -> str:
        """Managed Postgres hands out postgresql:// URLs; the engine needs asyncpg."""
        if isinstance(v, str) and v.startswith(("postgresql://", "postgres://")):
            return "postgresql+asyncpg://" + v.split("://", 1)[1]
        return v

    @field_validator("stripe_currency")
    @classmethod
    def lowercase_currency(cls, v: str) -> str:
        return v.lower()

    @field_validator("search_max_limit")
    @classmethod
    def positive_max_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("search_max_limit must be at least 1")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
