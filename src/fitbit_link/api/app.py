"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from fitbit_link.api.models import FoodLogRequest, RedirectPayload
from fitbit_link.app_logging import configure_logging
from fitbit_link.containers import AppContainer
from fitbit_link.domain.errors import FitbitError

_ERROR_STATUS = {
    "not_logged_in": status.HTTP_401_UNAUTHORIZED,
    "invalid_url": status.HTTP_400_BAD_REQUEST,
    "no_data": status.HTTP_502_BAD_GATEWAY,
    "unable_to_parse": status.HTTP_502_BAD_GATEWAY,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await app.state.container.fitbit_client.initialize()
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(FitbitError)
    async def fitbit_error_handler(request: Request, exc: FitbitError) -> JSONResponse:
        logger.warning("Fitbit request failed (%s): %s", exc.kind, exc)
        return JSONResponse(
            status_code=_ERROR_STATUS.get(exc.kind, status.HTTP_502_BAD_GATEWAY),
            content={"error": exc.kind, "detail": str(exc)},
        )

    @app.exception_handler(httpx.HTTPStatusError)
    async def upstream_status_handler(
        request: Request, exc: httpx.HTTPStatusError
    ) -> JSONResponse:
        logger.warning("Fitbit returned HTTP %s", exc.response.status_code)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={
                "error": "upstream_status",
                "upstream_status": exc.response.status_code,
            },
        )

    @app.exception_handler(httpx.HTTPError)
    async def transport_error_handler(
        request: Request, exc: httpx.HTTPError
    ) -> JSONResponse:
        logger.exception("Fitbit transport error")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"error": "transport", "detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/status")
    async def login_status(request: Request) -> dict[str, bool]:
        """Report whether credentials are stored."""
        state_container: AppContainer = request.app.state.container
        return {"logged_in": state_container.fitbit_client.is_logged_in}

    @app.get("/login")
    async def login(request: Request) -> RedirectResponse:
        """Send the browser to the Fitbit authorization page."""
        state_container: AppContainer = request.app.state.container
        return RedirectResponse(state_container.fitbit_client.authorize_url())

    @app.get("/callback", response_class=HTMLResponse)
    async def callback_page() -> HTMLResponse:
        """Page that forwards the redirect fragment back to the server."""
        return HTMLResponse(_CALLBACK_HTML)

    @app.post("/callback")
    async def complete_login(
        payload: RedirectPayload, request: Request
    ) -> dict[str, str]:
        """Store credentials from the captured redirect URL."""
        state_container: AppContainer = request.app.state.container
        handled = await state_container.fitbit_client.handle_redirect(
            payload.redirect_url
        )
        if not handled:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Redirect URL is missing access_token or user_id",
            )
        return {"status": "logged_in"}

    @app.post("/logout")
    async def logout(request: Request) -> dict[str, str]:
        """Clear stored credentials."""
        state_container: AppContainer = request.app.state.container
        await state_container.fitbit_client.logout()
        return {"status": "logged_out"}

    @app.get("/foods/log")
    async def food_logs(request: Request) -> dict[str, object]:
        """Return today's food log."""
        state_container: AppContainer = request.app.state.container
        return await state_container.fitbit_client.get_food_logs()

    @app.post("/foods/log", status_code=status.HTTP_201_CREATED)
    async def create_food_log(
        entry: FoodLogRequest, request: Request
    ) -> dict[str, object]:
        """Log a food entry for the authenticated user."""
        state_container: AppContainer = request.app.state.container
        client = state_container.fitbit_client
        return await client.post_food_logs(entry.to_item(client.today()))

    @app.get("/activities")
    async def daily_activity(request: Request) -> dict[str, object]:
        """Return today's activity summary."""
        state_container: AppContainer = request.app.state.container
        return await state_container.fitbit_client.get_daily_activity()

    return app


_CALLBACK_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>Fitbit Link</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
    </style>
  </head>
  <body>
    <h1>Fitbit Link</h1>
    <p id="output">Completing login...</p>
    <script>
      (async function () {
        const output = document.getElementById('output');
        const res = await fetch('/callback', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({ redirect_url: window.location.href })
        });
        output.textContent = res.ok
          ? 'Logged in. You can close this window.'
          : 'Login failed: ' + res.status;
      })();
    </script>
  </body>
</html>
"""
