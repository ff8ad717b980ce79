"""Tests for authorization URL building and redirect parsing."""

from urllib.parse import parse_qsl, urlsplit

import pytest

from fitbit_link.domain.models import ClientConfig, Scope
from fitbit_link.services.auth import build_authorize_url, parse_redirect_fragment


def test_authorize_url_has_expected_parameters() -> None:
    config = ClientConfig(
        client_id="22ABCD",
        callback_url="https://example.com/fitbit/callback?source=app",
        scopes=(Scope.ACTIVITY, Scope.NUTRITION),
    )

    url = build_authorize_url(config)
    parts = urlsplit(url)

    assert parts.scheme == "https"
    assert parts.netloc == "www.fitbit.com"
    assert parts.path == "/oauth2/authorize"
    assert parse_qsl(parts.query) == [
        ("response_type", "token"),
        ("client_id", "22ABCD"),
        ("redirect_uri", "https://example.com/fitbit/callback?source=app"),
        ("scope", "activity nutrition"),
        ("expires_in", "31536000"),
    ]


def test_authorize_url_percent_encodes_redirect_and_scope() -> None:
    config = ClientConfig(client_id="22ABCD", callback_url="fitbitlink://oauth/cb")

    url = build_authorize_url(config)

    assert "redirect_uri=fitbitlink%3A%2F%2Foauth%2Fcb" in url
    assert "scope=nutrition%20activity" in url


@pytest.mark.parametrize(
    "config",
    [
        ClientConfig(client_id="", callback_url="https://example.com/cb"),
        ClientConfig(client_id="22ABCD", callback_url="not a url"),
    ],
)
def test_authorize_url_rejects_invalid_config(config: ClientConfig) -> None:
    with pytest.raises(ValueError):
        build_authorize_url(config)


def test_parse_fragment_extracts_token_and_user() -> None:
    credentials = parse_redirect_fragment(
        "fitbitlink://oauth/callback#access_token=ABC123&user_id=42"
        "&scope=nutrition+activity&token_type=Bearer&expires_in=31536000"
    )

    assert credentials.access_token == "ABC123"
    assert credentials.user_id == "42"
    assert credentials.is_complete


def test_parse_fragment_missing_user_id() -> None:
    credentials = parse_redirect_fragment("fitbitlink://cb#access_token=ABC123")

    assert credentials.access_token == "ABC123"
    assert credentials.user_id is None
    assert not credentials.is_complete


def test_parse_fragment_without_fragment() -> None:
    credentials = parse_redirect_fragment("fitbitlink://cb?access_token=ABC123")

    assert credentials.access_token is None
    assert credentials.user_id is None


def test_parse_fragment_treats_empty_value_as_missing() -> None:
    credentials = parse_redirect_fragment("fitbitlink://cb#access_token=&user_id=42")

    assert credentials.access_token is None
    assert credentials.user_id == "42"


def test_parse_fragment_substring_match_takes_first_segment() -> None:
    credentials = parse_redirect_fragment(
        "fitbitlink://cb#state=user_id_hint=7&user_id=42&access_token=ABC123"
    )

    assert credentials.user_id == "user_id_hint"


def test_parse_fragment_strict_keys_match_exactly() -> None:
    credentials = parse_redirect_fragment(
        "fitbitlink://cb#state=user_id_hint=7&user_id=42&access_token=ABC123",
        strict_keys=True,
    )

    assert credentials.user_id == "42"
    assert credentials.access_token == "ABC123"
