"""
Pydantic schemas for API requests and responses.

Organized by feature/domain:
- sessions: Session ledger request/response models
"""

from api.schemas.sessions import (
    CompleteWorkoutRequest,
    HistoryResponse,
    MutationResponse,
    ReflectionInput,
    SetReflectionRequest,
    SkipWorkoutRequest,
    StreakResponse,
)

__all__ = [
    "ReflectionInput",
    "SetReflectionRequest",
    "CompleteWorkoutRequest",
    "SkipWorkoutRequest",
    "MutationResponse",
    "HistoryResponse",
    "StreakResponse",
]
