"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from fitbit_link.domain.models import ClientConfig, Scope

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    fitbit_client_id: str
    fitbit_callback_url: str
    fitbit_scopes: str = "nutrition,activity"
    fitbit_api_base_url: str = "https://api.fitbit.com"
    fitbit_authorize_url: str = "https://www.fitbit.com/oauth2/authorize"
    fitbit_strict_fragment_keys: bool = False
    credentials_path: Path = Path.home() / ".fitbit_link" / "credentials.json"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def client_config(self) -> ClientConfig:
        """Build the OAuth client configuration."""
        return ClientConfig(
            client_id=self.fitbit_client_id,
            callback_url=self.fitbit_callback_url,
            scopes=parse_scopes(self.fitbit_scopes),
        )


def parse_scopes(raw: str) -> tuple[Scope, ...]:
    """Parse a comma or space separated scope list, keeping order."""
    scopes: list[Scope] = []
    for chunk in raw.replace(",", " ").split():
        scope = Scope(chunk.strip().lower())
        if scope not in scopes:
            scopes.append(scope)
    if not scopes:
        raise ValueError("At least one Fitbit scope is required")
    return tuple(scopes)
