"""
Key-Value Store Interface (Port).

Persistence provider for the training snapshot. Values are JSON-compatible
Python objects (lists, dicts, ints); each key holds one whole value that is
replaced on every write.
"""
from typing import Any, Dict, Iterable, Optional, Protocol


class KeyValueStore(Protocol):
    """
    Abstract interface for snapshot persistence.

    Implementations raise on transport or backend failures; retry and
    timeout policy is applied by the caller.
    """

    def get(self, key: str) -> Optional[Any]:
        """
        Read one value.

        Args:
            key: Storage key

        Returns:
            Stored value or None if the key is absent
        """
        ...

    def set(self, key: str, value: Any) -> None:
        """
        Write one value, replacing any previous value.

        Args:
            key: Storage key
            value: JSON-compatible value
        """
        ...

    def get_many(self, keys: Iterable[str]) -> Dict[str, Any]:
        """
        Read several values in one round trip.

        Args:
            keys: Storage keys

        Returns:
            Mapping of key to value; absent keys are omitted
        """
        ...

    def set_many(self, values: Dict[str, Any]) -> None:
        """
        Write several values in one round trip.

        Args:
            values: Mapping of key to JSON-compatible value
        """
        ...
