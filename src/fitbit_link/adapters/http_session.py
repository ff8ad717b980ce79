"""Bearer-authenticated HTTP session for the Fitbit API."""

from dataclasses import dataclass

import httpx


@dataclass
class AuthenticatedSession:
    """An httpx session bound to a single access token."""

    access_token: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, access_token: str, transport: httpx.AsyncBaseTransport | None = None
    ) -> "AuthenticatedSession":
        """Create a session that sends the token as a bearer header."""
        return cls(
            access_token=access_token,
            http_client=httpx.AsyncClient(
                headers={"Authorization": f"Bearer {access_token}"},
                transport=transport,
            ),
        )

    async def get(self, url: str) -> httpx.Response:
        """Issue a GET request."""
        response = await self.http_client.get(url)
        response.raise_for_status()
        return response

    async def post_form(self, url: str, form: dict[str, str]) -> httpx.Response:
        """Issue a form-encoded POST request."""
        response = await self.http_client.post(url, data=form)
        response.raise_for_status()
        return response

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
