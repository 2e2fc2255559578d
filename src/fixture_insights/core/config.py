from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # DB (local copy of the provider type catalog)
    database_url: str = Field(
        default="sqlite+pysqlite:///./fixture_insights.db",
        validation_alias="DATABASE_URL",
    )
    db_echo: bool = False

    # sportmonks
    sportmonks_api_token: str | None = Field(default=None, repr=False)
    sportmonks_base_url: str = "https://api.sportmonks.com/v3/football"
    sportmonks_core_url: str = "https://api.sportmonks.com/v3/core"

    # derived views
    primary_bookmaker_ids: list[int] = Field(default_factory=lambda: [4, 9])
    baseline_market_id: int = 1
    form_limit: int = 5

    log_level: str = "INFO"

    # -----------------------------
    # Required-key helpers
    # -----------------------------

    def require_sportmonks_token(self) -> str:
        if not self.sportmonks_api_token:
            raise RuntimeError(
                "SPORTMONKS_API_TOKEN is not set. Set it in the environment or .env file."
            )
        return self.sportmonks_api_token


settings = Settings()
