"""
Infrastructure Layer for the training schedule service.

This package contains concrete implementations of the application ports:
- db/: Supabase and in-memory key-value stores
- clock: System clock
"""

from infrastructure.clock import SystemClock
from infrastructure.db import InMemoryKeyValueStore, SupabaseKeyValueStore

__all__ = [
    "SupabaseKeyValueStore",
    "InMemoryKeyValueStore",
    "SystemClock",
]
