"""Validation rule and result entities.

Rules are declared per destination table and stay immutable for the whole
validation run. Results collect field-level errors (a failing field is
dropped from its row) and advisory warnings.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
import re

CustomCheck = Callable[[object], bool | str]


class ValidationSeverity(str, Enum):
    """Severity of a recorded validation issue."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class ValidationRule:
    """Declarative constraints for one target field.

    Attributes:
        field: Target field the rule applies to
        required: Fails on ``None`` or empty string
        type: Semantic type tag (string, number, boolean, email, phone, uuid,
            date, url, ...); unknown tags always pass
        min_length: Minimum length, strings only
        max_length: Maximum length, strings only
        pattern: Regex a string value must match (compiled on creation)
        unique: Value must not appear among existing records
        custom: Predicate returning ``True`` to pass, or ``False``/a message
            to fail
    """

    field: str
    required: bool = False
    type: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: re.Pattern[str] | str | None = None
    unique: bool = False
    custom: CustomCheck | None = None

    def __post_init__(self) -> None:
        if isinstance(self.pattern, str):
            object.__setattr__(self, "pattern", re.compile(self.pattern))


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    field: str
    message: str
    row: int | None = None
    severity: ValidationSeverity = ValidationSeverity.ERROR

    def __str__(self) -> str:
        location = f"row {self.row}: " if self.row is not None else ""
        return f"{location}{self.field}: {self.message}"


@dataclass(frozen=True, slots=True)
class ValidationWarning:
    field: str
    message: str
    suggestion: str | None = None
    row: int | None = None


def _empty_issues() -> list[ValidationIssue]:
    return []


def _empty_warnings() -> list[ValidationWarning]:
    return []


def _empty_rows() -> list[dict[str, object]]:
    return []


@dataclass(slots=True)
class ValidationResult:
    errors: list[ValidationIssue] = field(default_factory=_empty_issues)
    warnings: list[ValidationWarning] = field(default_factory=_empty_warnings)
    transformed_data: list[dict[str, object]] = field(default_factory=_empty_rows)

    @property
    def is_valid(self) -> bool:
        return not self.errors
