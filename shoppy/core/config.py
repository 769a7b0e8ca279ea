# shoppy/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - DATABASE_URL (SQLAlchemy URL, e.g. mysql+pymysql://... or sqlite:///...)
      - ACCESS_TOKEN_SECRET (HS256 signing secret for access tokens)

    Write-consistency behaviour:
      - ASSOCIATION_COMPARISON: "set" compares category/size names ignoring
        order, "ordered" compares them position by position.
      - ASSOCIATION_DUPLICATES: what to do with repeated names in a
        category/size list ("reject" | "dedupe" | "allow").
      - STORE_REASSIGNMENT: what a product update carrying a different
        store_id does ("ignore" drops it, "reject" fails with 409).
    """

    PROJECT_NAME: str = "Shoppy Storefront API"
    API_PREFIX: str = "/api"

    # DB config
    DATABASE_URL: str
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 5
    # Seconds to wait for a pooled connection before giving up
    DB_POOL_TIMEOUT: float = 10.0

    # JWT
    ACCESS_TOKEN_SECRET: str
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30

    ASSOCIATION_COMPARISON: Literal["set", "ordered"] = "set"
    ASSOCIATION_DUPLICATES: Literal["reject", "dedupe", "allow"] = "reject"
    STORE_REASSIGNMENT: Literal["ignore", "reject"] = "ignore"

    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
