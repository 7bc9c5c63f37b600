"""
Program catalog.

Loads a Program definition from YAML. The file lists an exercise library,
templates that reference exercises by id, and weeks whose ``days`` hold
seven template ids (Monday first, null for rest). See
``shared/programs/default_program.yaml``.
"""

import logging
import pathlib
from datetime import date
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from application.exceptions import PlanValidationError, ValidationIssue
from domain.models import ExerciseSpec, Program, ProgramWeek, WorkoutTemplate

logger = logging.getLogger(__name__)

ROOT = pathlib.Path(__file__).resolve().parents[2]

DEFAULT_PROGRAM_FILE = ROOT / "shared/programs/default_program.yaml"


def _build_exercises(library: Dict[str, Any], refs: List[str], template_id: str) -> List[ExerciseSpec]:
    exercises = []
    missing = []
    for ref in refs:
        entry = library.get(ref)
        if entry is None:
            missing.append(ref)
            continue
        exercises.append(ExerciseSpec(id=ref, **entry))
    if missing:
        raise PlanValidationError(
            f"Template '{template_id}' references unknown exercises",
            [
                ValidationIssue(f"Unknown exercise '{ref}'", location=f"templates.{template_id}")
                for ref in missing
            ],
        )
    return exercises


def program_from_dict(data: Dict[str, Any], anchor: Optional[date] = None) -> Program:
    """
    Build a validated Program from parsed YAML.

    Args:
        data: Parsed program document
        anchor: Overrides ``start_date`` from the document

    Returns:
        Program

    Raises:
        PlanValidationError: If the document is structurally invalid
    """
    if not isinstance(data, dict):
        raise PlanValidationError(
            "Program document must be a mapping",
            [ValidationIssue("Expected a mapping at the document root")],
        )

    library = data.get("exercises") or {}
    try:
        templates = {
            template_id: WorkoutTemplate(
                id=template_id,
                exercises=_build_exercises(library, spec.get("exercises", []), template_id),
                **{k: v for k, v in spec.items() if k != "exercises"},
            )
            for template_id, spec in (data.get("templates") or {}).items()
        }
        weeks = [
            ProgramWeek(
                week=entry.get("week", index + 1),
                focus=entry.get("focus", ""),
                slots=entry.get("days", []),
            )
            for index, entry in enumerate(data.get("weeks") or [])
        ]
        program = Program(
            id=data.get("id", "program"),
            name=data.get("name", data.get("id", "Program")),
            start_date=anchor or data.get("start_date"),
            weeks=weeks,
            templates=templates,
            fallback_template_id=data.get("fallback_template"),
            duration_weeks=data.get("duration_weeks"),
            progression_notes=data.get("progression_notes"),
        )
    except ValidationError as e:
        raise PlanValidationError.from_pydantic("Invalid program definition", e) from e

    logger.info(
        "Loaded program '%s': %d templates, %d-week cycle, anchored %s",
        program.id,
        len(program.templates),
        program.cycle_weeks,
        program.start_date.isoformat(),
    )
    return program


def load_program(
    path: Optional[Union[str, pathlib.Path]] = None,
    anchor: Optional[date] = None,
) -> Program:
    """
    Load a Program from a YAML file.

    Args:
        path: Program file; defaults to the bundled default program
        anchor: Overrides the file's start date

    Returns:
        Program

    Raises:
        PlanValidationError: If the file is not valid YAML or not a valid program
        FileNotFoundError: If the file does not exist
    """
    program_path = pathlib.Path(path) if path else DEFAULT_PROGRAM_FILE
    try:
        data = yaml.safe_load(program_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise PlanValidationError(
            f"Program file {program_path} is not valid YAML",
            [ValidationIssue(str(e), location=str(program_path))],
        ) from e
    return program_from_dict(data, anchor=anchor)


def load_default_program(anchor: Optional[date] = None) -> Program:
    return load_program(DEFAULT_PROGRAM_FILE, anchor=anchor)
