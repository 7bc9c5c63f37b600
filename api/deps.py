"""
FastAPI Dependency Providers for the training schedule API.

This module provides FastAPI dependency injection functions. The
TrainingStore is created once by the app factory and lives on
``app.state``; every request receives that same instance. Use cases are
cheap wrappers and are created per request.

Usage in routers:
    from api.deps import get_training_store
    from application.use_cases import TrainingStore

    @router.get("/sessions")
    def list_sessions(store: TrainingStore = Depends(get_training_store)):
        return store.history()

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_training_store] = lambda: fake_store
"""

from fastapi import Depends, HTTPException, Request

from application.use_cases import GetScheduleUseCase, ImportPlanUseCase, TrainingStore
from backend.core.phase_classifier import PhaseClassifier
from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings(request: Request) -> Settings:
    """
    Get application settings.

    Prefers the settings the app was created with, falling back to the
    cached Settings instance from backend.settings.

    Returns:
        Settings: Application settings instance
    """
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else _get_settings()


# =============================================================================
# Store Provider
# =============================================================================


def get_training_store(request: Request) -> TrainingStore:
    """
    Get the process-wide TrainingStore.

    Raises:
        HTTPException: 503 if the app was created without a store
    """
    store = getattr(request.app.state, "training_store", None)
    if store is None:
        raise HTTPException(
            status_code=503,
            detail="Training store not initialized.",
        )
    return store


# =============================================================================
# Use Case Providers
# =============================================================================


def get_phase_classifier(
    settings: Settings = Depends(get_settings),
) -> PhaseClassifier:
    """Phase classifier sized by ``phase_total_weeks``."""
    return PhaseClassifier(total_weeks=settings.phase_total_weeks)


def get_schedule_use_case(
    store: TrainingStore = Depends(get_training_store),
    phase_classifier: PhaseClassifier = Depends(get_phase_classifier),
) -> GetScheduleUseCase:
    """
    Get GetScheduleUseCase with injected dependencies.

    Returns:
        GetScheduleUseCase: Use case for day/week/month views
    """
    return GetScheduleUseCase(store=store, phase_classifier=phase_classifier)


def get_import_plan_use_case(
    store: TrainingStore = Depends(get_training_store),
) -> ImportPlanUseCase:
    """
    Get ImportPlanUseCase with injected dependencies.

    Returns:
        ImportPlanUseCase: Use case for generated plan import
    """
    return ImportPlanUseCase(store=store)
