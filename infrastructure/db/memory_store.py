"""
In-memory implementation of KeyValueStore.

Used when Supabase is not configured (local development) so the service
still runs; state is lost on restart.
"""
import copy
import threading
from typing import Any, Dict, Iterable, Optional


class InMemoryKeyValueStore:
    """Process-local KeyValueStore. Values are deep-copied in and out."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)

    def get_many(self, keys: Iterable[str]) -> Dict[str, Any]:
        with self._lock:
            return {k: copy.deepcopy(self._data[k]) for k in keys if k in self._data}

    def set_many(self, values: Dict[str, Any]) -> None:
        with self._lock:
            for key, value in values.items():
                self._data[key] = copy.deepcopy(value)
