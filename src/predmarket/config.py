"""Application configuration via pydantic-settings."""

import json
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from predmarket.core.constants import (
    DEFAULT_MARKET_CREATE_RATE_LIMIT,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Core
    env: Literal["development", "staging", "production"] = Field(
        default="development", alias="PREDMARKET_ENV"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="PREDMARKET_LOG_LEVEL"
    )

    # Database (unset = in-memory store)
    database_url: str | None = Field(default=None)
    db_pool_min_size: int = Field(default=1, ge=1)
    db_pool_max_size: int = Field(default=10, ge=1)
    db_ssl: bool | None = Field(
        default=None,
        description="Force SSL on/off for Postgres. Defaults to on in production.",
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def blank_database_url(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # HTTP
    allowed_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Exact CORS origins. Empty = localhost dev ports only.",
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v: str | list[str] | None) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = v.strip()
            if v.startswith("["):
                v = json.loads(v)
            else:
                v = [o.strip() for o in v.split(",") if o.strip()]
        return [o.rstrip("/") for o in v]

    # Listing
    default_page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    max_page_size: int = Field(default=MAX_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @field_validator("max_page_size")
    @classmethod
    def validate_max_page_size(cls, v: int, info: ValidationInfo) -> int:
        default = info.data.get("default_page_size", DEFAULT_PAGE_SIZE)
        if v < default:
            raise ValueError("max_page_size cannot be smaller than default_page_size")
        return v

    # Rate limiting (slowapi limit string)
    market_create_rate_limit: str = Field(default=DEFAULT_MARKET_CREATE_RATE_LIMIT)

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def use_database(self) -> bool:
        return self.database_url is not None

    @property
    def database_ssl(self) -> bool:
        if self.db_ssl is not None:
            return self.db_ssl
        return self.is_production


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
