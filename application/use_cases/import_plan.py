"""
Import Plan Use Case.

Takes plan data from the external plan generator, validates it and adds the
resulting program to the store's persisted catalog, optionally making it
the active one.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from application.exceptions import PlanValidationError, ValidationIssue
from application.use_cases.training_store import TrainingStore
from backend.core.calendar_utils import start_of_week
from backend.core.plan_import import plan_to_program, validate_plan
from domain.models import Program

logger = logging.getLogger(__name__)


@dataclass
class ImportPlanResult:
    """Result of the ImportPlan use case execution."""

    success: bool
    program: Optional[Program] = None
    activated: bool = False
    persistence_warning: Optional[str] = None
    warnings: List[ValidationIssue] = field(default_factory=list)
    issues: List[ValidationIssue] = field(default_factory=list)
    error: Optional[str] = None


class ImportPlanUseCase:
    """
    Use case for importing a generated plan.

    The imported program is anchored to the Monday of the current week so
    that plan day 1 lands on a Monday slot.

    Usage:
        >>> use_case = ImportPlanUseCase(store=store)
        >>> result = use_case.execute(plan_json)
        >>> if not result.success:
        ...     print(result.issues)
    """

    def __init__(self, store: TrainingStore) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            store: Aggregate store whose active program is replaced
        """
        self._store = store

    def execute(
        self,
        data: Union[Dict[str, Any], str],
        *,
        activate: bool = True,
    ) -> ImportPlanResult:
        """
        Validate and import plan data.

        Args:
            data: Plan dict or generator text containing the plan JSON
            activate: Make the program active on success; otherwise it is
                only saved to the catalog

        Returns:
            ImportPlanResult; on failure ``issues`` lists every problem
        """
        try:
            plan, warnings = validate_plan(data)
        except PlanValidationError as e:
            logger.warning(
                "Rejected plan import: %s",
                [issue.as_dict() for issue in e.issues],
            )
            return ImportPlanResult(success=False, issues=e.issues, error=e.message)

        program = plan_to_program(plan, start_of_week(self._store.today()))
        if activate:
            saved = self._store.activate_program(program)
        else:
            saved = self._store.save_program(program)

        logger.info(
            "Imported plan '%s' (%d training days, %d warnings)",
            plan.program_name,
            len(plan.schedule),
            len(warnings),
        )
        return ImportPlanResult(
            success=True,
            program=program,
            activated=activate,
            persistence_warning=saved.persistence_warning,
            warnings=warnings,
        )
