"""JSON file-backed credential store."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from fitbit_link.services.credentials import CredentialStore

logger = logging.getLogger(__name__)

FILE_MODE = 0o600


@dataclass
class JsonFileCredentialStore(CredentialStore):
    """Persists credentials as a flat JSON object readable only by the owner."""

    path: Path

    def get(self, key: str) -> str | None:
        """Return a stored value, if present."""
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str | None) -> None:
        """Store or remove a value and rewrite the file."""
        data = self._read()
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value
        self._write(data)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("Ignoring unreadable credentials file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, object]) -> None:
        # Written beside the target, then renamed over it.
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f".{self.path.name}.tmp")
        tmp_path.unlink(missing_ok=True)
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2)
        os.replace(tmp_path, self.path)
