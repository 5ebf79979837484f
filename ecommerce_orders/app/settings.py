# app/settings.py
from __future__ import annotations
from typing import Literal, Optional
from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict

_LEVEL_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",   # ignore unknown env keys instead of raising
    )

    environment: str = Field(
        default="development", validation_alias=AliasChoices("ENV", "ENVIRONMENT")
    )

    # --- API ---
    api_host: str = Field(default="127.0.0.1", validation_alias=AliasChoices("API_HOST",))
    api_port: int = Field(default=8080,        validation_alias=AliasChoices("API_PORT",))
    shutdown_timeout: int = Field(default=10,  validation_alias=AliasChoices("SHUTDOWN_TIMEOUT",))

    # --- Postgres ---
    database_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("DATABASE_URL",)
    )
    db_pool_min_size: int = Field(default=5, validation_alias=AliasChoices("DB_POOL_MIN_SIZE",))
    db_pool_max_size: int = Field(default=25, validation_alias=AliasChoices("DB_POOL_MAX_SIZE",))
    # seconds before an idle pooled connection is closed
    db_conn_max_idle: float = Field(
        default=1800.0, validation_alias=AliasChoices("DB_CONN_MAX_IDLE",)
    )
    db_command_timeout: float = Field(
        default=15.0, validation_alias=AliasChoices("DB_COMMAND_TIMEOUT",)
    )

    # --- Orders ---
    # "constructor": ids are uuid4 strings minted in app.models.order
    # "storage":     ids come from the orders.id column default
    order_id_mode: Literal["constructor", "storage"] = Field(
        default="constructor", validation_alias=AliasChoices("ORDER_ID_MODE",)
    )

    # --- Logging ---
    log_level: Optional[str] = Field(default=None, validation_alias=AliasChoices("LOG_LEVEL",))

    @property
    def resolved_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return _LEVEL_BY_ENV.get(self.environment.lower(), "INFO")


# singleton
settings = Settings()
