"""OAuth2 implicit-grant helpers: authorize URL and redirect fragment parsing."""

from urllib.parse import quote, urlencode, urlsplit

from fitbit_link.domain.models import ClientConfig, Credentials

AUTHORIZE_URL = "https://www.fitbit.com/oauth2/authorize"
TOKEN_LIFETIME_SECONDS = 31536000


def build_authorize_url(
    config: ClientConfig, authorize_url: str = AUTHORIZE_URL
) -> str:
    """Build the implicit-grant authorization URL for a client."""
    if not config.client_id:
        raise ValueError("client_id is required")
    if not urlsplit(config.callback_url).scheme:
        raise ValueError(f"callback_url has no scheme: {config.callback_url!r}")
    params = [
        ("response_type", "token"),
        ("client_id", config.client_id),
        ("redirect_uri", config.callback_url),
        ("scope", " ".join(scope.value for scope in config.scopes)),
        ("expires_in", str(TOKEN_LIFETIME_SECONDS)),
    ]
    return f"{authorize_url}?{urlencode(params, quote_via=quote)}"


def parse_redirect_fragment(redirect_url: str, strict_keys: bool = False) -> Credentials:
    """Extract the access token and user id from a redirect URL fragment.

    By default a segment matches when it contains the key anywhere, and the
    value is the text between the first and second ``=``. With ``strict_keys``
    the text before the first ``=`` must equal the key.
    """
    segments = urlsplit(redirect_url).fragment.split("&")
    return Credentials(
        access_token=_find_value(segments, "access_token", strict_keys),
        user_id=_find_value(segments, "user_id", strict_keys),
    )


def _find_value(segments: list[str], key: str, strict_keys: bool) -> str | None:
    for segment in segments:
        parts = segment.split("=")
        matched = parts[0] == key if strict_keys else key in segment
        if not matched:
            continue
        if len(parts) < 2 or not parts[1]:  # noqa: PLR2004
            return None
        return parts[1]
    return None
