"""
Configuration settings for the Artworks API.

Uses Pydantic Settings to load environment variables for the datasource,
connection pool, HTTP listener and logging. The settings object is built once
at process start and handed to the components that need it.
"""
from __future__ import annotations

import json
from functools import lru_cache
from typing import Annotated, Any, List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

Environment = Literal["development", "preproduction"]


class Settings(BaseSettings):
    # Datasource selection
    app_env: Environment = Field("development", alias="APP_ENV")
    datasource_development: str = Field("", alias="DATASOURCE_DEVELOPMENT")
    datasource_preproduction: str = Field("", alias="DATASOURCE_PREPRODUCTION")

    # Database parts, used when no datasource is set for the environment
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("artworks", alias="DB_NAME")

    # Pool
    db_pool_min_size: int = Field(1, alias="DB_POOL_MIN_SIZE")
    db_pool_max_size: int = Field(10, alias="DB_POOL_MAX_SIZE")
    db_statement_timeout_ms: int = Field(0, alias="DB_STATEMENT_TIMEOUT_MS")

    # HTTP
    http_host: str = Field("0.0.0.0", alias="HTTP_HOST")
    http_port: int = Field(3000, alias="HTTP_PORT")
    # Comma-separated (http://a,http://b) or a JSON array
    cors_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["*"], alias="CORS_ORIGINS"
    )

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            text = value.strip()
            if text.startswith("["):
                return json.loads(text)
            return [origin.strip() for origin in text.split(",") if origin.strip()]
        return value

    def datasource(self) -> str:
        """
        Return the DSN for the active environment.

        Falls back to a DSN composed from the DB_* parts when the environment
        has no explicit datasource configured.
        """
        explicit = {
            "development": self.datasource_development,
            "preproduction": self.datasource_preproduction,
        }[self.app_env]
        if explicit:
            return explicit
        return (
            f"postgresql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Environment", "Settings", "get_settings"]
