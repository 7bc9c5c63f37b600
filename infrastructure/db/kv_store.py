"""
Supabase implementation of KeyValueStore.

Snapshot values live in one table with rows ``{key, value, updated_at}``
where ``value`` is a JSONB column:

    create table kv_store (
        key text primary key,
        value jsonb,
        updated_at timestamptz default now()
    );

Errors from the client are not caught here; the caller owns retry policy.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseKeyValueStore:
    """
    Supabase implementation of KeyValueStore protocol.

    The client is injected via constructor for testability.
    """

    def __init__(self, client: Client, table: str = "kv_store"):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            table: Table holding the key/value rows
        """
        self._client = client
        self._table = table

    def get(self, key: str) -> Optional[Any]:
        result = (
            self._client.table(self._table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if result.data:
            return result.data[0].get("value")
        return None

    def set(self, key: str, value: Any) -> None:
        self.set_many({key: value})

    def get_many(self, keys: Iterable[str]) -> Dict[str, Any]:
        key_list = list(keys)
        if not key_list:
            return {}
        result = (
            self._client.table(self._table)
            .select("key, value")
            .in_("key", key_list)
            .execute()
        )
        return {row["key"]: row.get("value") for row in result.data or []}

    def set_many(self, values: Dict[str, Any]) -> None:
        """Upsert every key in one request."""
        if not values:
            return
        now = datetime.now(timezone.utc).isoformat()
        rows = [{"key": k, "value": v, "updated_at": now} for k, v in values.items()]
        self._client.table(self._table).upsert(rows, on_conflict="key").execute()
        logger.debug("Persisted keys %s to %s", sorted(values), self._table)
