"""
TrainingStore - the aggregate store for schedule and session state.

Owns the session ledger and the program catalog and is the only entry
point for mutating either. One instance is constructed per process (see
backend.main.create_app) and handed to consumers through dependency
injection.

Every mutation runs under a single lock:

    read snapshot -> compute new ledger -> recompute streak/stats
        -> persist (retry + deadline) -> publish

A failed write does not roll back. The new snapshot stays the in-memory
source of truth, the store is marked dirty and the mutation result carries
a non-fatal ``persistence_warning``. The next successful write flushes the
whole snapshot and clears the flag.
"""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from application.exceptions import PersistenceError
from application.ports import Clock, KeyValueStore
from backend.core.calendar_utils import DateLike, to_day
from backend.core.constants import (
    SNAPSHOT_KEYS,
    WORKOUT_HISTORY_KEY,
    WORKOUT_PROGRAMS_KEY,
    WORKOUT_STATS_KEY,
    WORKOUT_STREAK_KEY,
)
from backend.core.schedule_resolver import ScheduleResolver
from backend.core.session_ledger import (
    MergeOutcome,
    append,
    day_status,
    merge_reflection,
    order_records,
    records_for_date,
    remove_for_date,
)
from backend.core.stats_aggregator import compute_stats, compute_streak
from backend.persistence.retry import retry_sync_call
from domain.converters import (
    payload_to_programs,
    payload_to_records,
    payload_to_stats,
    programs_to_payload,
    records_to_payload,
    stats_to_payload,
)
from domain.models import (
    DayStatus,
    DerivedStats,
    Program,
    ReflectionData,
    SessionRecord,
    SessionStatus,
    WorkoutTemplate,
)

logger = logging.getLogger(__name__)

PERSISTENCE_WARNING = (
    "Change applied but not yet persisted; it will be written with the next change"
)


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff and deadline for store calls."""

    max_attempts: int = 3
    min_wait_seconds: float = 0.5
    max_wait_seconds: float = 5.0
    timeout_seconds: float = 10.0

    def as_kwargs(self) -> Dict[str, Any]:
        return {
            "max_attempts": self.max_attempts,
            "min_wait_seconds": self.min_wait_seconds,
            "max_wait_seconds": self.max_wait_seconds,
            "timeout_seconds": self.timeout_seconds,
        }


@dataclass(frozen=True)
class TrainingSnapshot:
    """Immutable published state. Readers never see a half-applied mutation."""

    records: Tuple[SessionRecord, ...] = ()
    streak: int = 0
    stats: DerivedStats = field(default_factory=DerivedStats)


@dataclass
class MutationResult:
    """Result of a store mutation."""

    success: bool
    record: Optional[SessionRecord] = None
    removed: int = 0
    outcome: Optional[MergeOutcome] = None
    program: Optional[Program] = None
    streak: int = 0
    stats: Optional[DerivedStats] = None
    persistence_warning: Optional[str] = None
    error: Optional[str] = None


class TrainingStore:
    """
    Aggregate store exposing schedule lookups and ledger mutations.

    Usage:
        >>> store = TrainingStore(kv_store=kv_store, clock=SystemClock(), program=program)
        >>> store.load()
        >>> store.workouts_for_date(date.today())
        [WorkoutTemplate(id='push-day', ...)]
        >>> result = store.complete_workout({"bench-press": [True, True, True, True]})
        >>> result.streak
        1
    """

    def __init__(
        self,
        kv_store: KeyValueStore,
        clock: Clock,
        program: Program,
        *,
        secondary_template_id: Optional[str] = None,
        strict_merge: bool = True,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        """
        Initialize the store with required dependencies.

        Args:
            kv_store: Snapshot persistence provider
            clock: Source of "today"
            program: Configured program, active until a stored choice is loaded
            secondary_template_id: Template added to today's workouts, if any
            strict_merge: Reject ambiguous reflection merges
            retry_policy: Backoff/deadline for store calls
        """
        self._kv_store = kv_store
        self._clock = clock
        self._resolver = ScheduleResolver(program)
        # Program catalog; the configured program is always part of it
        self._configured_program_id = program.id
        self._programs: Dict[str, Program] = {program.id: program}
        self._secondary_template_id = secondary_template_id
        self._strict_merge = strict_merge
        self._retry_policy = retry_policy or RetryPolicy()

        self._lock = threading.Lock()
        self._snapshot = TrainingSnapshot()
        self._dirty = False

        if secondary_template_id and program.template(secondary_template_id) is None:
            logger.warning(
                "Secondary session template '%s' not found in program '%s'",
                secondary_template_id,
                program.id,
            )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def load(self) -> bool:
        """
        Load the persisted snapshot.

        Streak and stats are recomputed from the history; the persisted
        values are only a cache. Stored programs rejoin the catalog and the
        stored active program is restored. A read failure is logged and the
        store starts from an empty ledger with the configured program.

        Returns:
            True if the snapshot was read successfully
        """
        try:
            raw = self._read()
        except PersistenceError as e:
            logger.error("Failed to load training snapshot, starting empty: %s", e)
            with self._lock:
                self._snapshot = TrainingSnapshot()
            return False

        records = order_records(payload_to_records(raw.get(WORKOUT_HISTORY_KEY)))
        snapshot = self._derive(records, self.today())

        cached = payload_to_stats(raw.get(WORKOUT_STATS_KEY))
        if cached is not None and cached != snapshot.stats:
            logger.info("Cached stats were stale; recomputed from %d records", len(records))

        programs, active_id = payload_to_programs(raw.get(WORKOUT_PROGRAMS_KEY))

        with self._lock:
            self._snapshot = snapshot
            self._restore_programs(programs, active_id)
        logger.info("Loaded %d session records (streak=%d)", len(records), snapshot.streak)
        return True

    def flush(self) -> bool:
        """
        Retry persisting the current snapshot if an earlier write failed.

        Returns:
            True if the store is clean afterwards
        """
        with self._lock:
            if not self._dirty:
                return True
            return self._persist(self._snapshot) is None

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    @property
    def program(self) -> Program:
        return self._resolver.program

    def programs(self) -> List[Program]:
        """Every known program, the configured one first."""
        return list(self._programs.values())

    def get_program(self, program_id: str) -> Optional[Program]:
        return self._programs.get(program_id)

    @property
    def resolver(self) -> ScheduleResolver:
        return self._resolver

    @property
    def snapshot(self) -> TrainingSnapshot:
        return self._snapshot

    @property
    def streak(self) -> int:
        """Current streak, re-derived for today so it stays right across midnight."""
        return compute_streak(self._snapshot.records, self.today())

    @property
    def stats(self) -> DerivedStats:
        return compute_stats(self._snapshot.records, self.today())

    @property
    def is_dirty(self) -> bool:
        """True while the in-memory snapshot has not been persisted."""
        return self._dirty

    def now(self) -> datetime:
        return self._clock.now()

    def today(self) -> date:
        return to_day(self._clock.now())

    def history(self) -> Tuple[SessionRecord, ...]:
        """All records, most recent first."""
        return self._snapshot.records

    def secondary_template(self) -> Optional[WorkoutTemplate]:
        if not self._secondary_template_id:
            return None
        return self.program.template(self._secondary_template_id)

    def workouts_for_date(self, target: DateLike) -> List[WorkoutTemplate]:
        """Planned workouts for a date; today may carry a secondary session."""
        return self._resolver.resolve_with_secondary(
            target, self.today(), self.secondary_template()
        )

    def workout_for_date(self, target: DateLike) -> Optional[WorkoutTemplate]:
        workouts = self.workouts_for_date(target)
        return workouts[0] if workouts else None

    def is_rest_day(self, target: DateLike) -> bool:
        return not self.workouts_for_date(target)

    def records_for_date(self, target: DateLike) -> List[SessionRecord]:
        return records_for_date(self._snapshot.records, target)

    def status_for_date(self, target: DateLike) -> DayStatus:
        """Ledger status joined against the schedule."""
        scheduled = bool(self.workouts_for_date(target))
        return day_status(self._snapshot.records, target, scheduled)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def complete_workout(
        self,
        exercise_progress: Optional[Dict[str, List[bool]]] = None,
        workout_id: Optional[str] = None,
        mood: Optional[str] = None,
        notes: Optional[str] = None,
        reflection: Optional[ReflectionData] = None,
        exercise_notes: Optional[Dict[str, str]] = None,
    ) -> MutationResult:
        """
        Log today's workout as completed.

        Args:
            exercise_progress: Exercise id -> per-set completion flags
            workout_id: Which of today's workouts was done (default: the first)
            mood: Optional mood tag
            notes: Optional free-text notes
            reflection: Optional reflection captured at completion
            exercise_notes: Exercise id -> note

        Returns:
            MutationResult with the new record, streak and stats
        """
        with self._lock:
            now = self._clock.now()
            template = self._target_template(now, workout_id)
            if template is None:
                return MutationResult(
                    success=False,
                    error=f"Workout '{workout_id}' is not available today",
                )

            record = SessionRecord(
                id=self._new_id(),
                date=now,
                workout=template,
                status=SessionStatus.COMPLETED,
                mood=mood,
                notes=notes if notes is not None else (reflection.notes if reflection else None),
                exercise_notes=exercise_notes or {},
                reflection_data=self._stamp(reflection, now),
                exercise_progress=self._clean_progress(template, exercise_progress),
            )
            return self._append(record, now)

    def skip_workout(
        self,
        reason: str,
        reflection: Optional[ReflectionData] = None,
        workout_id: Optional[str] = None,
    ) -> MutationResult:
        """
        Log today's workout as skipped.

        Args:
            reason: Skip reason code (e.g. "tired", "sick")
            reflection: Optional reflection; its skip_reason defaults to ``reason``
            workout_id: Which of today's workouts was skipped (default: the first)

        Returns:
            MutationResult with the new record; the streak drops to 0
        """
        with self._lock:
            now = self._clock.now()
            template = self._target_template(now, workout_id)
            if template is None:
                return MutationResult(
                    success=False,
                    error=f"Workout '{workout_id}' is not available today",
                )

            if reflection is not None and reflection.skip_reason is None:
                reflection = reflection.model_copy(update={"skip_reason": reason})

            record = SessionRecord(
                id=self._new_id(),
                date=now,
                workout=template,
                status=SessionStatus.SKIPPED,
                notes=reflection.notes if reflection else None,
                skip_reason=reason,
                reflection_data=self._stamp(reflection, now),
            )
            return self._append(record, now)

    def set_reflection(
        self,
        reflection: ReflectionData,
        workout_id: Optional[str] = None,
        record_id: Optional[str] = None,
    ) -> MutationResult:
        """
        Attach reflection data to one of today's records.

        A second call for the same record replaces the earlier reflection.

        Returns:
            MutationResult; ``outcome`` is NOT_FOUND when today has no
            matching record and AMBIGUOUS when several records match and
            no target was given (strict mode only).
        """
        with self._lock:
            now = self._clock.now()
            merge = merge_reflection(
                list(self._snapshot.records),
                now,
                self._stamp(reflection, now),
                workout_hint=workout_id,
                record_id=record_id,
                strict=self._strict_merge,
            )
            if not merge.updated:
                logger.info("Reflection not applied for %s: %s", to_day(now).isoformat(), merge.outcome.value)
                return MutationResult(
                    success=False,
                    outcome=merge.outcome,
                    streak=self.streak,
                    stats=self.stats,
                    error=self._merge_error(merge.outcome, merge.candidates),
                )

            result = self._commit(merge.ledger, now)
            result.record = merge.record
            result.outcome = merge.outcome
            return result

    def reset_workout(self) -> MutationResult:
        """Remove today's records ("undo today") and recompute stats."""
        with self._lock:
            now = self._clock.now()
            current = self._snapshot.records
            remaining = remove_for_date(current, now)
            removed = len(current) - len(remaining)
            if removed == 0:
                return MutationResult(
                    success=True,
                    streak=self.streak,
                    stats=self.stats,
                )

            result = self._commit(remaining, now)
            result.removed = removed
            logger.info("Removed %d record(s) for %s", removed, to_day(now).isoformat())
            return result

    def save_program(self, program: Program) -> MutationResult:
        """Add a program to the catalog (or replace one with the same id) without activating it."""
        with self._lock:
            if program.id == self.program.id:
                self._switch_to(program)
            self._programs[program.id] = program
            result = self._commit(list(self._snapshot.records), self._clock.now())
        result.program = program
        logger.info("Saved program '%s'", program.id)
        return result

    def activate_program(self, program: Program) -> MutationResult:
        """
        Add a program to the catalog and make it the active one.

        History is kept; session snapshots are by value. The catalog and the
        active id are persisted with the rest of the snapshot.
        """
        with self._lock:
            self._programs[program.id] = program
            self._switch_to(program)
            result = self._commit(list(self._snapshot.records), self._clock.now())
        result.program = program
        logger.info("Activated program '%s' (%d-week cycle)", program.id, program.cycle_weeks)
        return result

    def set_active_program(self, program_id: str) -> MutationResult:
        """Activate a program already in the catalog."""
        with self._lock:
            program = self._programs.get(program_id)
            if program is None:
                return MutationResult(success=False, error=f"Program '{program_id}' not found")
            self._switch_to(program)
            result = self._commit(list(self._snapshot.records), self._clock.now())
        result.program = program
        logger.info("Activated program '%s'", program_id)
        return result

    def delete_program(self, program_id: str) -> MutationResult:
        """
        Remove a program from the catalog.

        The configured program cannot be deleted. Deleting the active program
        falls back to the configured one.
        """
        with self._lock:
            if program_id not in self._programs:
                return MutationResult(success=False, error=f"Program '{program_id}' not found")
            if program_id == self._configured_program_id:
                return MutationResult(
                    success=False,
                    error=f"Program '{program_id}' is the configured program and cannot be deleted",
                )
            del self._programs[program_id]
            if self.program.id == program_id:
                self._switch_to(self._programs[self._configured_program_id])
            result = self._commit(list(self._snapshot.records), self._clock.now())
        result.program = self.program
        logger.info("Deleted program '%s'; active is '%s'", program_id, self.program.id)
        return result

    # -------------------------------------------------------------------------
    # Internals (caller holds the lock)
    # -------------------------------------------------------------------------

    def _switch_to(self, program: Program) -> None:
        self._resolver = ScheduleResolver(program)
        if self._secondary_template_id and program.template(self._secondary_template_id) is None:
            logger.info(
                "Program '%s' has no secondary session template '%s'",
                program.id,
                self._secondary_template_id,
            )

    def _restore_programs(self, programs: List[Program], active_id: Optional[str]) -> None:
        """
        Merge stored programs into the catalog and restore the active one.

        The configured program keeps its configured definition; a stored
        copy with the same id is ignored.
        """
        for program in programs:
            if program.id != self._configured_program_id:
                self._programs[program.id] = program
        if active_id is None or active_id == self.program.id:
            return
        program = self._programs.get(active_id)
        if program is None:
            logger.warning("Stored active program '%s' not found; keeping '%s'", active_id, self.program.id)
            return
        self._switch_to(program)
        logger.info("Restored active program '%s'", active_id)

    def _target_template(self, now: datetime, workout_id: Optional[str]) -> Optional[WorkoutTemplate]:
        """
        Pick the template a session is logged against.

        An explicit id must be one of today's workouts or a template of the
        program. Without one, the first of today's workouts is used, falling
        back to the program's fallback template on rest days.
        """
        workouts = self.workouts_for_date(now)
        if workout_id is not None:
            for workout in workouts:
                if workout.id == workout_id:
                    return workout
            return self.program.template(workout_id)
        if workouts:
            return workouts[0]
        return self.program.fallback_template

    def _clean_progress(
        self,
        template: WorkoutTemplate,
        progress: Optional[Dict[str, List[bool]]],
    ) -> Optional[Dict[str, List[bool]]]:
        if progress is None:
            return None
        known = set(template.exercise_ids)
        unknown = sorted(k for k in progress if k not in known)
        if unknown:
            logger.warning(
                "Dropping progress for unknown exercises %s in workout '%s'",
                unknown,
                template.id,
            )
        return {k: list(v) for k, v in progress.items() if k in known}

    @staticmethod
    def _stamp(reflection: Optional[ReflectionData], now: datetime) -> Optional[ReflectionData]:
        if reflection is None or reflection.timestamp is not None:
            return reflection
        return reflection.model_copy(update={"timestamp": now})

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex

    @staticmethod
    def _merge_error(outcome: MergeOutcome, candidates: int) -> str:
        if outcome == MergeOutcome.AMBIGUOUS:
            return (
                f"{candidates} sessions logged today; specify workout_id or record_id"
            )
        return "No matching session logged today"

    def _append(self, record: SessionRecord, now: datetime) -> MutationResult:
        records = append(list(self._snapshot.records), record)
        if record.is_completed:
            # The record carries the streak it completed
            streak = compute_streak(records, now)
            records = [
                r.model_copy(update={"streak": streak}) if r.id == record.id else r
                for r in records
            ]
        result = self._commit(records, now)
        result.record = next(r for r in self._snapshot.records if r.id == record.id)
        logger.info(
            "Logged %s session for '%s' (streak=%d)",
            record.status.value,
            record.workout_id,
            result.streak,
        )
        return result

    def _derive(self, records: List[SessionRecord], today: DateLike) -> TrainingSnapshot:
        return TrainingSnapshot(
            records=tuple(order_records(records)),
            streak=compute_streak(records, today),
            stats=compute_stats(records, today),
        )

    def _commit(self, records: List[SessionRecord], now: datetime) -> MutationResult:
        snapshot = self._derive(records, now)
        warning = self._persist(snapshot)
        self._snapshot = snapshot
        return MutationResult(
            success=True,
            streak=snapshot.streak,
            stats=snapshot.stats,
            persistence_warning=warning,
        )

    def _persist(self, snapshot: TrainingSnapshot) -> Optional[str]:
        """
        Write the whole snapshot.

        Returns:
            None on success, otherwise a warning message
        """
        payload = {
            WORKOUT_HISTORY_KEY: records_to_payload(list(snapshot.records)),
            WORKOUT_STREAK_KEY: snapshot.streak,
            WORKOUT_STATS_KEY: stats_to_payload(snapshot.stats),
            WORKOUT_PROGRAMS_KEY: programs_to_payload(self.programs(), self.program.id),
        }
        try:
            self._write(payload)
        except PersistenceError as e:
            self._dirty = True
            logger.error("%s; keeping in-memory state", e.message)
            return PERSISTENCE_WARNING

        if self._dirty:
            logger.info("Persisted pending snapshot; store is clean")
        self._dirty = False
        return None

    def _read(self) -> Dict[str, Any]:
        try:
            return retry_sync_call(
                self._kv_store.get_many, list(SNAPSHOT_KEYS), **self._retry_policy.as_kwargs()
            )
        except Exception as e:
            raise PersistenceError(f"Failed to read training snapshot: {e}") from e

    def _write(self, payload: Dict[str, Any]) -> None:
        try:
            retry_sync_call(
                self._kv_store.set_many, payload, **self._retry_policy.as_kwargs()
            )
        except Exception as e:
            raise PersistenceError(f"Failed to persist training snapshot: {e}") from e
