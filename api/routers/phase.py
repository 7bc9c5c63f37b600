"""
Phase router.

Display-only phase framing of elapsed program time.
"""

import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.deps import get_phase_classifier, get_training_store
from application.use_cases import TrainingStore
from backend.core.phase_classifier import PhaseClassifier
from domain.models import PhaseInfo

router = APIRouter(
    prefix="/phase",
    tags=["Phase"],
)


class PhaseResponse(BaseModel):
    """Phase of a date; ``phase`` is null outside the plan."""
    date: dt.date
    program_start: dt.date
    total_weeks: int
    phase: Optional[PhaseInfo] = None


@router.get("/{date}", response_model=PhaseResponse)
def get_phase(
    date: dt.date,
    store: TrainingStore = Depends(get_training_store),
    classifier: PhaseClassifier = Depends(get_phase_classifier),
) -> PhaseResponse:
    """Classify a date relative to the active program's start."""
    start = store.program.start_date
    return PhaseResponse(
        date=date,
        program_start=start,
        total_weeks=classifier.total_weeks,
        phase=classifier.classify(date, start),
    )
