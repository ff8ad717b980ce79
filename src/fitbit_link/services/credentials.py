"""Credential storage abstractions."""

from dataclasses import dataclass
from typing import Protocol

from fitbit_link.domain.models import Credentials

ACCESS_TOKEN_KEY = "fitbit_access_token"
USER_ID_KEY = "fitbit_user_id"


class CredentialStore(Protocol):
    """Synchronous key-value storage for the token and user id."""

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: str | None) -> None:
        """Store a value, or remove it when value is None."""


@dataclass
class InMemoryCredentialStore(CredentialStore):
    """Process-local credential store."""

    _values: dict[str, str]

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str) -> str | None:
        """Return a stored value."""
        return self._values.get(key)

    def set(self, key: str, value: str | None) -> None:
        """Store or remove a value."""
        if value is None:
            self._values.pop(key, None)
            return
        self._values[key] = value


def load_credentials(store: CredentialStore) -> Credentials:
    """Read the current credentials from a store."""
    return Credentials(
        access_token=store.get(ACCESS_TOKEN_KEY),
        user_id=store.get(USER_ID_KEY),
    )


def save_credentials(store: CredentialStore, credentials: Credentials) -> None:
    """Write both credential fields to a store.

    The token is cleared first and written last, so a failure part way leaves
    the store without a token rather than with a token and a stale user id.
    """
    store.set(ACCESS_TOKEN_KEY, None)
    store.set(USER_ID_KEY, credentials.user_id)
    if credentials.access_token is not None:
        store.set(ACCESS_TOKEN_KEY, credentials.access_token)
