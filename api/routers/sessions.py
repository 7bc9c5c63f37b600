"""
Sessions router for the session ledger.

This router provides:
- History, streak and stats reads
- Complete / skip today's workout
- Reflection merge against today's records
- "Undo today"
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_training_store
from api.schemas.sessions import (
    CompleteWorkoutRequest,
    HistoryResponse,
    MutationResponse,
    SetReflectionRequest,
    SkipWorkoutRequest,
    StreakResponse,
)
from application.use_cases import TrainingStore
from backend.core.session_ledger import MergeOutcome
from domain.models import DerivedStats

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/sessions",
    tags=["Sessions"],
)


# =============================================================================
# Reads
# =============================================================================


@router.get("", response_model=HistoryResponse)
def list_sessions(
    limit: int = 100,
    store: TrainingStore = Depends(get_training_store),
) -> HistoryResponse:
    """
    Session history, most recent first.

    Args:
        limit: Maximum number of records (1-1000)
    """
    limit = max(1, min(limit, 1000))
    records = list(store.history())
    return HistoryResponse(records=records[:limit], count=len(records))


@router.get("/stats", response_model=DerivedStats)
def get_stats(store: TrainingStore = Depends(get_training_store)) -> DerivedStats:
    """Completed totals and completion rate, recomputed from the ledger."""
    return store.stats


@router.get("/streak", response_model=StreakResponse)
def get_streak(store: TrainingStore = Depends(get_training_store)) -> StreakResponse:
    """Current streak of consecutive completed days."""
    return StreakResponse(streak=store.streak, today=store.today())


# =============================================================================
# Mutations
# =============================================================================


@router.post("/complete", response_model=MutationResponse)
def complete_workout(
    request: CompleteWorkoutRequest,
    store: TrainingStore = Depends(get_training_store),
) -> MutationResponse:
    """Log today's workout as completed."""
    result = store.complete_workout(
        request.exercise_progress,
        workout_id=request.workout_id,
        mood=request.mood,
        notes=request.notes,
        reflection=request.reflection.to_reflection() if request.reflection else None,
        exercise_notes=request.exercise_notes,
    )
    if not result.success:
        raise HTTPException(status_code=404, detail=result.error)
    return MutationResponse.from_result(result)


@router.post("/skip", response_model=MutationResponse)
def skip_workout(
    request: SkipWorkoutRequest,
    store: TrainingStore = Depends(get_training_store),
) -> MutationResponse:
    """Log today's workout as skipped with a reason."""
    reflection = (
        request.reflection.to_reflection(skip_reason=request.reason)
        if request.reflection
        else None
    )
    result = store.skip_workout(
        request.reason,
        reflection=reflection,
        workout_id=request.workout_id,
    )
    if not result.success:
        raise HTTPException(status_code=404, detail=result.error)
    return MutationResponse.from_result(result)


@router.put("/reflection", response_model=MutationResponse)
def set_reflection(
    request: SetReflectionRequest,
    store: TrainingStore = Depends(get_training_store),
) -> MutationResponse:
    """
    Attach reflection data to one of today's sessions.

    Returns 404 when today has no matching session and 409 when several
    sessions match and neither ``workout_id`` nor ``record_id`` picks one.
    """
    result = store.set_reflection(
        request.to_reflection(),
        workout_id=request.workout_id,
        record_id=request.record_id,
    )
    if result.outcome == MergeOutcome.NOT_FOUND:
        raise HTTPException(status_code=404, detail=result.error)
    if result.outcome == MergeOutcome.AMBIGUOUS:
        raise HTTPException(status_code=409, detail=result.error)
    return MutationResponse.from_result(result)


@router.delete("/today", response_model=MutationResponse)
def reset_today(store: TrainingStore = Depends(get_training_store)) -> MutationResponse:
    """Remove every session logged today."""
    return MutationResponse.from_result(store.reset_workout())
