"""
Converters: persisted program catalog JSON <-> Program models.

The ``workout_programs`` value is ``{"programs": [...], "activeProgramId": id}``.
Programs that fail validation are logged and skipped.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from domain.models import Program

logger = logging.getLogger(__name__)


def programs_to_payload(
    programs: List[Program], active_program_id: Optional[str]
) -> Dict[str, Any]:
    return {
        "programs": [p.model_dump(mode="json", by_alias=True) for p in programs],
        "activeProgramId": active_program_id,
    }


def payload_to_programs(payload: Any) -> Tuple[List[Program], Optional[str]]:
    """
    Parse a persisted program catalog.

    Args:
        payload: Value read from the store (expected: dict)

    Returns:
        (valid programs in payload order, active program id or None)
    """
    if not payload:
        return [], None
    if not isinstance(payload, dict):
        logger.error("Expected an object for workout programs, got %s", type(payload).__name__)
        return [], None

    entries = payload.get("programs") or []
    if not isinstance(entries, list):
        logger.error("Expected a list of programs, got %s", type(entries).__name__)
        entries = []

    programs: List[Program] = []
    for index, entry in enumerate(entries):
        try:
            programs.append(Program.model_validate(entry))
        except ValidationError as e:
            logger.warning("Skipping malformed stored program %d: %s", index, e.errors()[:3])

    active_id = payload.get("activeProgramId")
    return programs, active_id if isinstance(active_id, str) else None
