"""
Infrastructure Database Layer.

This package provides implementations of the KeyValueStore interface
defined in application.ports.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseKeyValueStore, InMemoryKeyValueStore

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate the store with injected client
    kv_store = SupabaseKeyValueStore(client, table="kv_store")

    # Or run without a database
    kv_store = InMemoryKeyValueStore()
"""

from infrastructure.db.kv_store import SupabaseKeyValueStore
from infrastructure.db.memory_store import InMemoryKeyValueStore

__all__ = [
    "SupabaseKeyValueStore",
    "InMemoryKeyValueStore",
]
