"""
Programs router.

This router provides:
- The program catalog and the active program (weeks, slots and templates)
- Switching and deleting catalog programs
- Import of generated plans, which join the catalog and by default
  replace the active program
"""

import datetime as dt
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, model_validator

from api.deps import get_import_plan_use_case, get_training_store
from application.use_cases import ImportPlanUseCase, TrainingStore
from domain.models import Program, ProgramWeek, WorkoutTemplate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/programs",
    tags=["Programs"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class ProgramResponse(BaseModel):
    """Active program definition."""
    id: str
    name: str
    start_date: dt.date
    cycle_weeks: int = Field(..., description="Repeating cycle length L")
    duration_weeks: Optional[int] = None
    fallback_template_id: Optional[str] = None
    progression_notes: Optional[str] = None
    weeks: List[ProgramWeek]
    templates: List[WorkoutTemplate]

    @classmethod
    def from_program(cls, program: Program) -> "ProgramResponse":
        return cls(
            id=program.id,
            name=program.name,
            start_date=program.start_date,
            cycle_weeks=program.cycle_weeks,
            duration_weeks=program.duration_weeks,
            fallback_template_id=program.fallback_template_id,
            progression_notes=program.progression_notes,
            weeks=program.weeks,
            templates=list(program.templates.values()),
        )


class ImportPlanRequest(BaseModel):
    """Request body for POST /programs/import. Provide ``plan`` or ``text``."""
    plan: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Parsed plan: {programName, weeks, schedule, progressionNotes}",
    )
    text: Optional[str] = Field(
        default=None,
        max_length=100_000,
        description="Raw generator output containing the plan JSON",
    )
    activate: bool = True

    @model_validator(mode="after")
    def require_one_source(self) -> "ImportPlanRequest":
        if (self.plan is None) == (self.text is None):
            raise ValueError("Provide exactly one of 'plan' or 'text'")
        return self


class ValidationIssueResponse(BaseModel):
    message: str
    severity: str
    location: str = ""


class ImportPlanResponse(BaseModel):
    success: bool
    activated: bool
    program: ProgramResponse
    persistence_warning: Optional[str] = None
    warnings: List[ValidationIssueResponse] = []


class ProgramSummary(BaseModel):
    id: str
    name: str
    start_date: dt.date
    cycle_weeks: int
    is_active: bool


class ProgramListResponse(BaseModel):
    active_program_id: str
    programs: List[ProgramSummary]


class SetActiveProgramRequest(BaseModel):
    program_id: str = Field(..., min_length=1)


class ProgramChangeResponse(BaseModel):
    success: bool
    active_program_id: str
    persistence_warning: Optional[str] = None


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=ProgramListResponse)
def list_programs(store: TrainingStore = Depends(get_training_store)) -> ProgramListResponse:
    """List every program in the catalog."""
    active_id = store.program.id
    return ProgramListResponse(
        active_program_id=active_id,
        programs=[
            ProgramSummary(
                id=p.id,
                name=p.name,
                start_date=p.start_date,
                cycle_weeks=p.cycle_weeks,
                is_active=p.id == active_id,
            )
            for p in store.programs()
        ],
    )


@router.get("/active", response_model=ProgramResponse)
def get_active_program(store: TrainingStore = Depends(get_training_store)) -> ProgramResponse:
    """Get the program the schedule is currently resolved against."""
    return ProgramResponse.from_program(store.program)


@router.post("/import", response_model=ImportPlanResponse)
def import_plan(
    request: ImportPlanRequest,
    use_case: ImportPlanUseCase = Depends(get_import_plan_use_case),
) -> ImportPlanResponse:
    """
    Import a generated plan.

    Invalid plans are rejected with 422 and the list of validation issues;
    the active program is left unchanged.
    """
    result = use_case.execute(
        request.plan if request.plan is not None else request.text,
        activate=request.activate,
    )
    if not result.success:
        raise HTTPException(
            status_code=422,
            detail={
                "message": result.error,
                "issues": [issue.as_dict() for issue in result.issues],
            },
        )
    return ImportPlanResponse(
        success=True,
        activated=result.activated,
        program=ProgramResponse.from_program(result.program),
        persistence_warning=result.persistence_warning,
        warnings=[ValidationIssueResponse(**w.as_dict()) for w in result.warnings],
    )


@router.put("/active", response_model=ProgramChangeResponse)
def set_active_program(
    request: SetActiveProgramRequest,
    store: TrainingStore = Depends(get_training_store),
) -> ProgramChangeResponse:
    """Make a catalog program the active one."""
    result = store.set_active_program(request.program_id)
    if not result.success:
        raise HTTPException(status_code=404, detail=result.error)
    return ProgramChangeResponse(
        success=True,
        active_program_id=store.program.id,
        persistence_warning=result.persistence_warning,
    )


@router.delete("/{program_id}", response_model=ProgramChangeResponse)
def delete_program(
    program_id: str,
    store: TrainingStore = Depends(get_training_store),
) -> ProgramChangeResponse:
    """
    Remove a program from the catalog.

    The configured program cannot be deleted (409). Deleting the active
    program activates the configured one.
    """
    if store.get_program(program_id) is None:
        raise HTTPException(status_code=404, detail=f"Program '{program_id}' not found")
    result = store.delete_program(program_id)
    if not result.success:
        raise HTTPException(status_code=409, detail=result.error)
    return ProgramChangeResponse(
        success=True,
        active_program_id=store.program.id,
        persistence_warning=result.persistence_warning,
    )
