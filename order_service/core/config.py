from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATABASE_URL = "sqlite+pysqlite:///./orders.db"
LOCAL_ENVS = {"dev", "test"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="OS_", extra="ignore")

    app_name: str = "Order Service"
    env: str = "dev"
    api_host: str = "0.0.0.0"
    api_port: int = 3000

    database_url: str = DEFAULT_DATABASE_URL

    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("OS_LOG_LEVEL", "LOG_LEVEL"),
    )
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    # always: every request for "paid" emits a bill | once: only the first one does
    bill_policy: Literal["always", "once"] = "always"

    def model_post_init(self, __context) -> None:
        if self.env.lower() in LOCAL_ENVS:
            return

        if self.database_url.startswith("sqlite"):
            raise ValueError(
                "sqlite database is not allowed outside dev/test mode; set env var: OS_DATABASE_URL"
            )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
