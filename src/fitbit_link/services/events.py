"""Login state notifications."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class LoginEvent(StrEnum):
    """Events emitted when the login state changes."""

    LOGGED_IN = "logged_in"
    LOGGED_OUT = "logged_out"


@dataclass
class LoginEvents:
    """Explicit observer registry for login state changes."""

    _listeners: dict[LoginEvent, list[Listener]] = field(default_factory=dict)

    def subscribe(self, event: LoginEvent, listener: Listener) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""
        listeners = self._listeners.setdefault(event, [])
        listeners.append(listener)

        def unsubscribe() -> None:
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def emit(self, event: LoginEvent) -> None:
        """Call every listener for an event in subscription order."""
        logger.info("Emitting %s", event.value)
        for listener in list(self._listeners.get(event, [])):
            listener()
