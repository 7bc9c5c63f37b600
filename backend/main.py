"""
Application factory for FastAPI.

This module provides a factory function for creating FastAPI application instances.
The factory pattern allows for:
- Easy testing with custom settings and injected collaborators
- Multiple app instances with different configurations
- Clear separation of app creation from route definitions

The TrainingStore is built here, once per app, and stored on ``app.state``;
routers reach it through ``api.deps.get_training_store``.

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings and an in-memory store
    test_settings = Settings(environment="test", _env_file=None)
    test_app = create_app(settings=test_settings, kv_store=InMemoryKeyValueStore())
"""

import logging
import os
import pathlib
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from supabase import ClientOptions, create_client

from application.exceptions import PlanValidationError
from application.ports import Clock, KeyValueStore
from application.use_cases import RetryPolicy, TrainingStore
from backend.core.calendar_utils import start_of_week
from backend.core.phase_classifier import check_cycle_alignment
from backend.core.plan_import import load_plan_or_default
from backend.core.program_catalog import load_default_program, load_program
from backend.settings import Settings, get_settings
from domain.models import Program
from infrastructure import InMemoryKeyValueStore, SupabaseKeyValueStore, SystemClock

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    kv_store: Optional[KeyValueStore] = None,
    clock: Optional[Clock] = None,
    program: Optional[Program] = None,
) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.
        kv_store: Snapshot store; built from settings when omitted
        clock: Clock; the system clock when omitted
        program: Active program; loaded from settings when omitted

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    # Initialize Sentry for error tracking
    _init_sentry(settings)

    # Create FastAPI app
    app = FastAPI(
        title="Training Schedule API",
        description="Workout scheduling, session ledger and training stats",
        version="1.0.0",
    )

    # Configure CORS middleware
    _configure_cors(app)

    clock = clock or SystemClock()
    program = program or _load_program(settings, clock)
    check_cycle_alignment(settings.phase_total_weeks, program.cycle_weeks)

    store = TrainingStore(
        kv_store=kv_store or _build_kv_store(settings),
        clock=clock,
        program=program,
        secondary_template_id=settings.secondary_session_template_id,
        strict_merge=settings.reflection_merge_strict,
        retry_policy=RetryPolicy(
            max_attempts=settings.persistence_max_attempts,
            min_wait_seconds=settings.persistence_min_wait_seconds,
            max_wait_seconds=settings.persistence_max_wait_seconds,
            timeout_seconds=settings.persistence_timeout_seconds,
        ),
    )
    store.load()

    app.state.settings = settings
    app.state.training_store = store

    # Include API routers
    _include_routers(app)

    logger.info(
        "Training store ready: program '%s', %d records, environment=%s",
        store.program.id,
        len(store.history()),
        settings.environment,
    )
    return app


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
        )
        logger.info("Sentry initialized for training-api")


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = [
        "http://localhost:3000",
        "http://localhost:8081",
    ]
    # Add production domains from environment if configured
    production_origins = os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",")
    trusted_origins.extend([origin.strip() for origin in production_origins if origin.strip()])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _build_kv_store(settings: Settings) -> KeyValueStore:
    """Supabase when configured, otherwise a process-local store."""
    if not settings.supabase_configured:
        if settings.is_production:
            logger.error("Supabase is not configured in production; sessions will not survive a restart")
        else:
            logger.info("Supabase not configured, using in-memory store")
        return InMemoryKeyValueStore()

    client = create_client(
        settings.supabase_url,
        settings.supabase_key,
        options=ClientOptions(postgrest_client_timeout=settings.persistence_timeout_seconds),
    )
    return SupabaseKeyValueStore(client, table=settings.kv_table)


def _load_program(settings: Settings, clock: Clock) -> Program:
    """
    Load the configured program.

    A ``.json`` program file is treated as generator output and degrades to
    the default program when malformed. A YAML program file must be valid.
    """
    anchor = settings.program_anchor_date
    if not settings.program_file:
        return load_default_program(anchor=anchor)

    path = pathlib.Path(settings.program_file)
    if path.suffix.lower() == ".json":
        default = load_default_program(anchor=anchor)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Cannot read plan file %s, using default program: %s", path, e)
            return default
        return load_plan_or_default(text, default, anchor or start_of_week(clock.now()))

    try:
        return load_program(path, anchor=anchor)
    except PlanValidationError as e:
        logger.error(
            "Invalid program file %s: %s",
            path,
            [issue.as_dict() for issue in e.issues],
        )
        raise


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        health_router,
        phase_router,
        programs_router,
        schedule_router,
        sessions_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    # Domain routers (with prefixes defined in each router)
    app.include_router(schedule_router)
    app.include_router(phase_router)
    app.include_router(sessions_router)
    app.include_router(programs_router)


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
