"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fitbit_link.adapters.browser import BrowserPresenter, WebBrowserPresenter
from fitbit_link.adapters.json_file_credential_store import JsonFileCredentialStore
from fitbit_link.adapters.supabase_credential_store import SupabaseCredentialStore
from fitbit_link.config import Settings
from fitbit_link.services.credentials import CredentialStore
from fitbit_link.services.events import LoginEvents
from fitbit_link.services.fitbit import FitbitClient


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    credential_store: CredentialStore
    events: LoginEvents
    fitbit_client: FitbitClient
    close_resources: Callable[[], Awaitable[None]]


def build_credential_store(settings: Settings) -> CredentialStore:
    """Use Supabase when configured, otherwise a local JSON file."""
    if settings.supabase_url and settings.supabase_service_key:
        return SupabaseCredentialStore(
            create_client(settings.supabase_url, settings.supabase_service_key)
        )
    return JsonFileCredentialStore(settings.credentials_path)


def build_container(
    settings: Settings | None = None,
    presenter: BrowserPresenter | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    credential_store = build_credential_store(resolved_settings)
    events = LoginEvents()
    fitbit_client = FitbitClient(
        config=resolved_settings.client_config(),
        credential_store=credential_store,
        presenter=presenter or WebBrowserPresenter(),
        events=events,
        api_base_url=resolved_settings.fitbit_api_base_url,
        authorize_base_url=resolved_settings.fitbit_authorize_url,
        strict_fragment_keys=resolved_settings.fitbit_strict_fragment_keys,
    )

    async def close_resources() -> None:
        await fitbit_client.close()

    return AppContainer(
        settings=resolved_settings,
        credential_store=credential_store,
        events=events,
        fitbit_client=fitbit_client,
        close_resources=close_resources,
    )
