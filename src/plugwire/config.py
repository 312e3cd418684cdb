from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PLUGWIRE_", env_file=".env", extra="ignore")

    app_name: str = "plugwire"
    env: str = "dev"
    host: str = "127.0.0.1"
    port: int = 8080

    # Plugin identifiers in boot order, e.g. '["acme.articles:ArticlesPlugin"]'
    plugins: list[str] = Field(default_factory=list)

    # Operator configuration (YAML/JSON); its entries win over plugin defaults
    config_file: Path | None = None

    # Alembic env.py directory used when building migration configs
    alembic_script_location: Path | None = None
    database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")

    # Observability
    log_level: str = "INFO"
    log_json: bool | None = None

    @property
    def json_logs(self) -> bool:
        """JSON logs unless explicitly disabled; console logs in dev by default."""
        if self.log_json is not None:
            return self.log_json
        return self.env != "dev"

    def config_items(self) -> dict[str, Any]:
        """Initial items for the configuration repository."""
        return {
            "app": {"name": self.app_name, "env": self.env},
            "plugins": list(self.plugins),
        }


settings = Settings()
