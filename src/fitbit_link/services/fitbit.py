"""Fitbit API client: login state, redirect handling and resource calls."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

import httpx

from fitbit_link.adapters.browser import BrowserPresenter
from fitbit_link.adapters.http_session import AuthenticatedSession
from fitbit_link.domain.errors import (
    InvalidUrlError,
    NoDataError,
    NotLoggedInError,
    UnableToParseError,
)
from fitbit_link.domain.models import ClientConfig, Credentials, FoodItem
from fitbit_link.services.auth import (
    AUTHORIZE_URL,
    build_authorize_url,
    parse_redirect_fragment,
)
from fitbit_link.services.credentials import (
    ACCESS_TOKEN_KEY,
    USER_ID_KEY,
    CredentialStore,
    load_credentials,
    save_credentials,
)
from fitbit_link.services.endpoints import (
    API_BASE_URL,
    daily_activity_url,
    food_log_form,
    food_logs_url,
    post_food_log_url,
)
from fitbit_link.services.events import LoginEvent, LoginEvents

logger = logging.getLogger(__name__)

SessionFactory = Callable[[str], AuthenticatedSession]


@dataclass
class FitbitClient:
    """Orchestrates authorization, credential storage and API requests.

    Construction has no side effects; call ``initialize`` at startup to
    restore a session from stored credentials.
    """

    config: ClientConfig
    credential_store: CredentialStore
    presenter: BrowserPresenter
    events: LoginEvents = field(default_factory=LoginEvents)
    session_factory: SessionFactory = AuthenticatedSession.create
    today: Callable[[], date] = date.today
    api_base_url: str = API_BASE_URL
    authorize_base_url: str = AUTHORIZE_URL
    strict_fragment_keys: bool = False
    _session: AuthenticatedSession | None = field(default=None, init=False, repr=False)

    async def initialize(self) -> None:
        """Rebuild the session if a token is already stored."""
        token = self.credential_store.get(ACCESS_TOKEN_KEY)
        if token:
            logger.info("Restoring Fitbit session from stored credentials")
            await self._replace_session(token)

    def authorize_url(self) -> str:
        """Return the authorization URL for the configured client."""
        return build_authorize_url(self.config, self.authorize_base_url)

    def login(self) -> None:
        """Present the authorization page; state changes on redirect."""
        url = self.authorize_url()
        logger.info("Opening Fitbit authorization page: %s", url)
        self.presenter.present(url)

    @property
    def is_logged_in(self) -> bool:
        """Return True when both a token and a user id are stored."""
        return load_credentials(self.credential_store).is_complete

    async def logout(self) -> None:
        """Clear stored credentials, drop the session and notify listeners."""
        save_credentials(self.credential_store, Credentials())
        await self._replace_session(None)
        logger.info("Logged out of Fitbit")
        self.events.emit(LoginEvent.LOGGED_OUT)

    async def handle_redirect(self, redirect_url: str) -> bool:
        """Store credentials from an authorization redirect URL.

        Returns False and leaves state untouched if the fragment lacks the
        access token or the user id.
        """
        credentials = parse_redirect_fragment(
            redirect_url, strict_keys=self.strict_fragment_keys
        )
        if not credentials.is_complete:
            logger.warning(
                "Redirect fragment missing access_token or user_id; ignoring"
            )
            return False
        save_credentials(self.credential_store, credentials)
        await self._replace_session(credentials.access_token)
        logger.info("Logged in to Fitbit as user %s", credentials.user_id)
        self.events.emit(LoginEvent.LOGGED_IN)
        return True

    async def get_food_logs(self) -> dict[str, object]:
        """Fetch today's food log."""
        session = await self._require_session()
        url = food_logs_url(
            self.credential_store.get(USER_ID_KEY), self.today(), self.api_base_url
        )
        if url is None:
            raise InvalidUrlError("No user id stored for food log request")
        return _parse_object(await session.get(url))

    async def get_daily_activity(self) -> dict[str, object]:
        """Fetch today's activity summary."""
        session = await self._require_session()
        url = daily_activity_url(
            self.credential_store.get(USER_ID_KEY), self.today(), self.api_base_url
        )
        if url is None:
            raise InvalidUrlError("No user id stored for activity request")
        return _parse_object(await session.get(url))

    async def post_food_logs(self, item: FoodItem) -> dict[str, object]:
        """Create a food log entry for the authenticated user."""
        session = await self._require_session()
        url = post_food_log_url(self.api_base_url)
        return _parse_object(await session.post_form(url, food_log_form(item)))

    async def close(self) -> None:
        """Close the active session, if any."""
        await self._replace_session(None)

    async def _require_session(self) -> AuthenticatedSession:
        token = self.credential_store.get(ACCESS_TOKEN_KEY)
        if self._session is None or not token:
            raise NotLoggedInError("Not logged in to Fitbit")
        if self._session.access_token != token:
            await self._replace_session(None)
            self._session = self.session_factory(token)
        return self._session

    async def _replace_session(self, token: str | None) -> None:
        previous, self._session = self._session, None
        if previous is not None:
            await previous.close()
        if token:
            self._session = self.session_factory(token)


def _parse_object(response: httpx.Response) -> dict[str, object]:
    if not response.content:
        raise NoDataError(f"Empty response from {response.request.url}")
    try:
        payload = response.json()
    except ValueError as exc:
        raise UnableToParseError("Response body is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise UnableToParseError("Response body is not a JSON object")
    return payload
