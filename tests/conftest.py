"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

import httpx
import pytest

from fitbit_link.adapters.browser import BrowserPresenter
from fitbit_link.adapters.http_session import AuthenticatedSession
from fitbit_link.config import Settings
from fitbit_link.containers import AppContainer
from fitbit_link.domain.models import ClientConfig, Scope
from fitbit_link.services.credentials import InMemoryCredentialStore
from fitbit_link.services.events import LoginEvents
from fitbit_link.services.fitbit import FitbitClient

FIXED_DAY = date(2017, 7, 29)
CALLBACK_URL = "fitbitlink://oauth/callback"


@dataclass
class RecordingPresenter(BrowserPresenter):
    """Presenter that records URLs instead of opening a browser."""

    urls: list[str] = field(default_factory=list)

    def present(self, url: str) -> None:
        self.urls.append(url)


@dataclass
class FitbitApiStub:
    """Request handler for httpx.MockTransport that records requests."""

    handler: Callable[[httpx.Request], httpx.Response] = lambda _request: (
        httpx.Response(200, json={"summary": {}})
    )
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def session_factory(self, access_token: str) -> AuthenticatedSession:
        return AuthenticatedSession.create(
            access_token, transport=httpx.MockTransport(self)
        )


def build_client(
    store: InMemoryCredentialStore,
    api: FitbitApiStub,
    strict_fragment_keys: bool = False,
) -> FitbitClient:
    return FitbitClient(
        config=ClientConfig(
            client_id="22ABCD",
            callback_url=CALLBACK_URL,
            scopes=(Scope.NUTRITION, Scope.ACTIVITY),
        ),
        credential_store=store,
        presenter=RecordingPresenter(),
        events=LoginEvents(),
        session_factory=api.session_factory,
        today=lambda: FIXED_DAY,
        strict_fragment_keys=strict_fragment_keys,
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        fitbit_client_id="22ABCD",
        fitbit_callback_url=CALLBACK_URL,
        credentials_path=tmp_path / "credentials.json",
    )


@pytest.fixture
def credential_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def fitbit_api() -> FitbitApiStub:
    return FitbitApiStub()


@pytest.fixture
def fitbit_client(
    credential_store: InMemoryCredentialStore, fitbit_api: FitbitApiStub
) -> FitbitClient:
    return build_client(credential_store, fitbit_api)


@pytest.fixture
def container(
    settings: Settings,
    credential_store: InMemoryCredentialStore,
    fitbit_client: FitbitClient,
) -> AppContainer:
    async def close_resources() -> None:
        await fitbit_client.close()

    return AppContainer(
        settings=settings,
        credential_store=credential_store,
        events=fitbit_client.events,
        fitbit_client=fitbit_client,
        close_resources=close_resources,
    )
