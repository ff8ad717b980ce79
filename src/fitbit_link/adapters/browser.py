"""Browser presentation for the authorization page."""

import logging
import webbrowser
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


class BrowserPresenter(Protocol):
    """Interface for showing the authorization page to the user."""

    def present(self, url: str) -> None:
        """Display the page at url."""


@dataclass
class WebBrowserPresenter(BrowserPresenter):
    """Opens URLs in the system web browser."""

    new_window: bool = False

    def present(self, url: str) -> None:
        """Open the URL, logging it for manual use when no browser is available."""
        opened = webbrowser.open(url, new=1 if self.new_window else 2)
        if not opened:
            logger.warning("No browser available; open this URL manually: %s", url)
