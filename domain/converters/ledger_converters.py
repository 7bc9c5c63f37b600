"""
Converters: persisted snapshot JSON <-> ledger records.

The ``workout_history`` value is a JSON list of camelCase record objects.
Loading is lenient: entries that fail validation are logged and skipped so
one corrupt record cannot hide the rest of the history.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from domain.models import DerivedStats, SessionRecord

logger = logging.getLogger(__name__)


def record_to_payload(record: SessionRecord) -> Dict[str, Any]:
    """Serialize one record to its persisted camelCase form."""
    return record.model_dump(mode="json", by_alias=True, exclude_none=True)


def records_to_payload(records: List[SessionRecord]) -> List[Dict[str, Any]]:
    return [record_to_payload(r) for r in records]


def payload_to_records(payload: Any) -> List[SessionRecord]:
    """
    Parse a persisted history list.

    Snapshots written before records carried a ``sequence`` are stored
    most-recent-first; for those, sequence numbers are assigned from the
    list position so the original order survives sort-on-read.

    Args:
        payload: Value read from the store (expected: list of dicts)

    Returns:
        Valid records, in payload order.
    """
    if payload is None:
        return []
    if not isinstance(payload, list):
        logger.error("Expected a list for workout history, got %s", type(payload).__name__)
        return []

    records: List[SessionRecord] = []
    for index, entry in enumerate(payload):
        try:
            records.append(SessionRecord.model_validate(entry))
        except ValidationError as e:
            logger.warning("Skipping malformed history entry %d: %s", index, e.errors()[:3])

    if records and all(r.sequence == 0 for r in records):
        total = len(records)
        records = [
            r.model_copy(update={"sequence": total - position})
            for position, r in enumerate(records)
        ]
    return records


def stats_to_payload(stats: DerivedStats) -> Dict[str, Any]:
    return stats.model_dump(mode="json", by_alias=True)


def payload_to_stats(payload: Any) -> Optional[DerivedStats]:
    """Parse a cached stats object; None when absent or malformed."""
    if not payload:
        return None
    try:
        return DerivedStats.model_validate(payload)
    except ValidationError:
        logger.warning("Ignoring malformed cached stats")
        return None
