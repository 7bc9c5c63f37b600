"""
API package for the training schedule service.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_import_plan_use_case,
    get_phase_classifier,
    get_schedule_use_case,
    get_settings,
    get_training_store,
)

__all__ = [
    # Settings
    "get_settings",
    # Store
    "get_training_store",
    # Use cases
    "get_phase_classifier",
    "get_schedule_use_case",
    "get_import_plan_use_case",
]
