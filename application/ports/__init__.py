"""
Interfaces (Ports) for the training schedule service.

This package defines abstract interfaces that decouple the core logic from
infrastructure (database, system clock). Implementations are provided in
the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the core needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import Clock, KeyValueStore

    class TrainingStore:
        def __init__(self, kv_store: KeyValueStore, clock: Clock):
            self._kv_store = kv_store
            self._clock = clock
"""

# Snapshot persistence
from application.ports.key_value_store import KeyValueStore

# Current time
from application.ports.clock import Clock

__all__ = [
    "KeyValueStore",
    "Clock",
]
