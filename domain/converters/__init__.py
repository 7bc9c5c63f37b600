"""
Domain converters for the persisted snapshot format.

- records_to_payload / payload_to_records: ledger <-> JSON list
- stats_to_payload / payload_to_stats: DerivedStats cache <-> JSON object
- programs_to_payload / payload_to_programs: program catalog <-> JSON object

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import payload_to_records, records_to_payload

    >>> records = payload_to_records(store.get("workout_history"))
    >>> store.set("workout_history", records_to_payload(records))
"""

from domain.converters.ledger_converters import (
    payload_to_records,
    payload_to_stats,
    record_to_payload,
    records_to_payload,
    stats_to_payload,
)
from domain.converters.program_converters import (
    payload_to_programs,
    programs_to_payload,
)

__all__ = [
    "record_to_payload",
    "records_to_payload",
    "payload_to_records",
    "stats_to_payload",
    "payload_to_stats",
    "programs_to_payload",
    "payload_to_programs",
]
