"""
Health check router.

This router provides health check endpoints for monitoring and load balancers.
"""

import logging

from fastapi import APIRouter, Depends

from api.deps import get_training_store
from application.use_cases import TrainingStore

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health(store: TrainingStore = Depends(get_training_store)):
    """
    Simple liveness endpoint.

    ``persistence`` is "pending" while a failed snapshot write has not been
    retried successfully.

    Returns:
        dict: Status indicator for health checks
    """
    return {
        "status": "ok",
        "persistence": "pending" if store.is_dirty else "ok",
    }
