"""
Router package for the training schedule API.

This package contains all API routers organized by domain:
- health: Health check
- schedule: Planned workouts, day status, week/month overviews
- phase: Phase framing of program time
- sessions: Session ledger reads and mutations
- programs: Active program and plan import
"""

from api.routers.health import router as health_router
from api.routers.schedule import router as schedule_router
from api.routers.phase import router as phase_router
from api.routers.sessions import router as sessions_router
from api.routers.programs import router as programs_router

__all__ = [
    "health_router",
    "schedule_router",
    "phase_router",
    "sessions_router",
    "programs_router",
]
