"""Tests for configuration parsing."""

import pytest

from fitbit_link.config import Settings, parse_scopes
from fitbit_link.domain.models import Scope


def test_parse_scopes_keeps_order_and_drops_duplicates() -> None:
    assert parse_scopes("activity, nutrition activity") == (
        Scope.ACTIVITY,
        Scope.NUTRITION,
    )


@pytest.mark.parametrize("raw", ["", "sleep"])
def test_parse_scopes_rejects_empty_or_unknown(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_scopes(raw)


def test_settings_build_client_config(settings: Settings) -> None:
    config = settings.client_config()

    assert config.client_id == "22ABCD"
    assert config.callback_url == settings.fitbit_callback_url
    assert config.scopes == (Scope.NUTRITION, Scope.ACTIVITY)
