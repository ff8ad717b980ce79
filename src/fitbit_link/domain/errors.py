"""Errors raised by Fitbit API operations.

Transport failures are not wrapped: callers see the ``httpx.HTTPError`` raised
by the HTTP client, including ``httpx.HTTPStatusError`` for non-2xx responses.
"""


class FitbitError(Exception):
    """Base class for client-side Fitbit API failures."""

    kind = "fitbit_error"


class NoDataError(FitbitError):
    """The request succeeded but the response had no body."""

    kind = "no_data"


class UnableToParseError(FitbitError):
    """The response body was not a JSON object."""

    kind = "unable_to_parse"


class NotLoggedInError(FitbitError):
    """No authenticated session is available."""

    kind = "not_logged_in"


class InvalidUrlError(FitbitError):
    """The request URL could not be built, usually for lack of a user id."""

    kind = "invalid_url"
