"""Supabase-backed credential store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from fitbit_link.services.credentials import CredentialStore


@dataclass
class SupabaseCredentialStore(CredentialStore):
    """Supabase implementation storing one row per credential key."""

    client: Client
    table_name: str = "fitbit_credentials"

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        response = (
            self.client.table(self.table_name)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: str | None) -> None:
        """Upsert a value, or delete the row when value is None."""
        if value is None:
            self.client.table(self.table_name).delete().eq("key", key).execute()
            return
        self.client.table(self.table_name).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
