"""
Application-level exceptions.

Merge outcomes and resolution-range cases are returned as values; only
persistence and plan validation failures are raised.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import ValidationError


class PersistenceError(Exception):
    """Raised when the key-value store cannot be read or written after retries."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.key = key


class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    """One structured problem found in external plan data."""

    message: str
    severity: IssueSeverity = IssueSeverity.ERROR
    location: str = ""

    def as_dict(self) -> dict:
        return {
            "message": self.message,
            "severity": self.severity.value,
            "location": self.location,
        }


class PlanValidationError(Exception):
    """Raised when imported plan data or a program file is malformed."""

    def __init__(self, message: str, issues: Optional[List[ValidationIssue]] = None):
        super().__init__(message)
        self.message = message
        self.issues = issues or []

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.ERROR]

    @classmethod
    def from_pydantic(cls, message: str, exc: ValidationError) -> "PlanValidationError":
        """Build from a pydantic ValidationError, one issue per failed field."""
        issues = [
            ValidationIssue(
                message=err.get("msg", str(err)),
                location=".".join(str(part) for part in err.get("loc", ())),
            )
            for err in exc.errors()
        ]
        return cls(message, issues)
