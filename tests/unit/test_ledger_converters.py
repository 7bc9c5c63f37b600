"""Unit tests for snapshot JSON <-> ledger conversion."""
from datetime import date, datetime, timedelta, timezone

import pytest

from domain.converters import (
    payload_to_records,
    payload_to_stats,
    record_to_payload,
    stats_to_payload,
)
from domain.models import DerivedStats, ReflectionData, SessionStatus
from tests.fakes import create_record


def legacy_entry(record_id, day):
    return {
        "id": record_id,
        "date": f"{day}T18:00:00",
        "workout": {"id": "push-day", "title": "Push Day"},
        "status": "completed",
    }


@pytest.mark.unit
class TestRecordPayload:
    def test_camel_case_keys(self):
        record = create_record(
            date(2025, 1, 15),
            status=SessionStatus.SKIPPED,
            skip_reason="sick",
            reflection=ReflectionData(effort=2, skip_reason="sick"),
        )
        payload = record_to_payload(record)
        assert payload["skipReason"] == "sick"
        assert payload["reflectionData"]["skipReason"] == "sick"
        assert payload["date"] == "2025-01-15T18:00:00"
        assert "exerciseProgress" not in payload  # None values are omitted


@pytest.mark.unit
class TestPayloadToRecords:
    def test_none_is_empty(self):
        assert payload_to_records(None) == []

    def test_non_list_is_empty(self):
        assert payload_to_records({"id": "1"}) == []

    def test_malformed_entries_skipped(self):
        records = payload_to_records(
            [legacy_entry("1", "2025-01-15"), {"id": "2", "status": "bogus"}, "junk"]
        )
        assert [r.id for r in records] == ["1"]

    def test_legacy_order_becomes_sequence(self):
        # Old snapshots were stored most-recent-first without sequences
        records = payload_to_records(
            [
                legacy_entry("evening", "2025-01-15"),
                legacy_entry("morning", "2025-01-15"),
                legacy_entry("monday", "2025-01-13"),
            ]
        )
        assert [(r.id, r.sequence) for r in records] == [
            ("evening", 3),
            ("morning", 2),
            ("monday", 1),
        ]

    def test_existing_sequences_kept(self):
        entry = legacy_entry("1", "2025-01-15")
        entry["sequence"] = 7
        assert payload_to_records([entry])[0].sequence == 7


@pytest.mark.unit
class TestTimezones:
    """Snapshots from the mobile app store UTC timestamps; days are local."""

    def test_utc_timestamp_uses_local_day(self, eastern_time):
        entry = legacy_entry("1", "2025-01-15")
        # 19:30 on the 14th in New York
        entry["date"] = "2025-01-15T00:30:00.000Z"

        record = payload_to_records([entry])[0]

        assert record.date.tzinfo is not None
        assert record.day == date(2025, 1, 14)

    def test_naive_timestamp_is_already_local(self, eastern_time):
        record = payload_to_records([legacy_entry("1", "2025-01-15")])[0]
        assert record.day == date(2025, 1, 15)

    def test_aware_record_keeps_offset(self):
        eastern = timezone(timedelta(hours=-5))
        record = create_record(date(2025, 1, 14)).model_copy(
            update={"date": datetime(2025, 1, 14, 19, 30, tzinfo=eastern)}
        )
        payload = record_to_payload(record)
        assert payload["date"] == "2025-01-14T19:30:00-05:00"
        assert payload_to_records([payload])[0].date == record.date


@pytest.mark.unit
class TestStatsPayload:
    def test_round_trip(self):
        stats = DerivedStats(total_completed=5, this_month_completed=2, completion_rate=83)
        payload = stats_to_payload(stats)
        assert payload == {"totalCompleted": 5, "thisMonthCompleted": 2, "completionRate": 83}
        assert payload_to_stats(payload) == stats

    @pytest.mark.parametrize("payload", [None, {}, {"completionRate": 250}])
    def test_absent_or_malformed(self, payload):
        assert payload_to_stats(payload) is None
