"""Row validation and transformation against per-table rules.

For every row and every field mapping the source value is transformed
(see ``contact_importer.transformations``) and then checked against each
rule declared for the target field. A field that fails any rule is left out
of the output row and the failure is recorded; the rest of the row is kept.

Uniqueness is checked against values taken from ``existing_records`` once,
before the pass. Repeats within the batch itself are reported as warnings,
or, with ``reject_batch_duplicates``, fail the ``unique`` rule exactly as if
the earlier row had already been stored.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Self

from ..constants import Defaults, TransformationTags
from ..domain.entities.validation import (
    ValidationIssue,
    ValidationResult,
    ValidationRule,
    ValidationSeverity,
    ValidationWarning,
)
from ..domain.services.value_checks import (
    is_blank,
    is_boolean_keyword,
    is_number_coercible,
    is_valid_date,
    is_valid_email,
    is_valid_phone,
    is_valid_uuid,
    looks_like_url,
)
from ..transformations import apply_transformation
from .common_rules import COMMON_RULES

if TYPE_CHECKING:
    from ..domain.entities.mapping import FieldMapping

Row = Mapping[str, object]

STRING_TYPES = frozenset({"string", "varchar", "text", "char", "nvarchar"})
NUMBER_TYPES = frozenset(
    {"number", "integer", "int", "bigint", "smallint", "decimal", "numeric"}
)
BOOLEAN_TYPES = frozenset({"boolean", "bool", "bit"})
DATE_TYPES = frozenset({"date", "datetime", "timestamp", "timestamptz"})


def matches_type(value: object, expected_type: str) -> bool:
    """Check a value against a semantic type tag; unknown tags always pass."""
    tag = expected_type.lower()
    if tag in STRING_TYPES:
        return isinstance(value, str)
    if tag in NUMBER_TYPES:
        return is_number_coercible(value)
    if tag in BOOLEAN_TYPES:
        return is_boolean_keyword(value)
    if tag == "email":
        return is_valid_email(value)
    if tag == "phone":
        return is_valid_phone(value)
    if tag == "uuid":
        return is_valid_uuid(value)
    if tag in DATE_TYPES:
        return is_valid_date(value)
    if tag == "url":
        return looks_like_url(value)
    return True


def _hashable(value: object) -> object:
    try:
        hash(value)
    except TypeError:
        return repr(value)
    return value


class DataValidator:
    """Validates mapped rows against declarative per-table rules.

    Example:
        >>> validator = DataValidator.with_common_rules()
        >>> result = validator.validate_and_transform(rows, mappings, "пользователи")
        >>> if not result.is_valid:
        ...     for issue in result.errors:
        ...         print(issue)
    """

    def __init__(
        self,
        rules: Mapping[str, Sequence[ValidationRule]] | None = None,
        *,
        overflow_max_length: int = Defaults.OVERFLOW_MAX_LENGTH,
    ) -> None:
        super().__init__()
        self._rules: dict[str, tuple[ValidationRule, ...]] = {
            table: tuple(table_rules) for table, table_rules in (rules or {}).items()
        }
        self._overflow_max_length = overflow_max_length

    @classmethod
    def with_common_rules(
        cls, *, overflow_max_length: int = Defaults.OVERFLOW_MAX_LENGTH
    ) -> Self:
        return cls(COMMON_RULES, overflow_max_length=overflow_max_length)

    def add_table_rules(self, table: str, rules: Iterable[ValidationRule]) -> Self:
        """Register rules for ``table``, appended after any existing ones."""
        self._rules[table] = (*self._rules.get(table, ()), *rules)
        return self

    def rules_for(self, table: str) -> tuple[ValidationRule, ...]:
        return self._rules.get(table, ())

    @property
    def tables(self) -> list[str]:
        return list(self._rules)

    def validate_and_transform(
        self,
        rows: Sequence[Row],
        mappings: Sequence[FieldMapping],
        target_table: str,
        existing_records: Sequence[Row] | None = None,
        *,
        reject_batch_duplicates: bool = False,
    ) -> ValidationResult:
        """Transform and validate every row.

        Args:
            rows: Source rows keyed by source column name
            mappings: Field mappings to apply, in order
            target_table: Destination table whose rules apply
            existing_records: Records already stored, for uniqueness checks
            reject_batch_duplicates: Treat a repeat of a value accepted earlier
                in this pass as a `unique` failure instead of a warning

        Returns:
            ValidationResult with one transformed row per input row
        """
        rules = self.rules_for(target_table)
        rules_by_field: dict[str, list[ValidationRule]] = {}
        for rule in rules:
            rules_by_field.setdefault(rule.field, []).append(rule)

        existing_values = self._existing_values(existing_records or (), rules)
        seen_in_batch: dict[str, set[object]] = {}
        result = ValidationResult()

        for row_index, row in enumerate(rows):
            transformed_row: dict[str, object] = {}
            for mapping in mappings:
                target = mapping.target_field
                field_rules = rules_by_field.get(target, [])
                current = transformed_row.get(target)
                transformed = apply_transformation(
                    row.get(mapping.source_field),
                    mapping.transformation,
                    current,
                    max_length=self._concat_limit(field_rules),
                )
                value = transformed.value
                if is_blank(value) and not is_blank(current):
                    continue

                issues = self._check_field(
                    value, target, field_rules, existing_values, row_index
                )
                if issues:
                    result.errors.extend(issues)
                    continue
                transformed_row[target] = value
                if mapping.transformation == TransformationTags.CONCATENATE_WITH_EXISTING:
                    continue
                if reject_batch_duplicates:
                    if target in existing_values and not is_blank(value):
                        existing_values[target].add(_hashable(value))
                    continue
                warning = self._batch_duplicate(
                    value, target, field_rules, seen_in_batch, row_index
                )
                if warning is not None:
                    result.warnings.append(warning)
            result.transformed_data.append(transformed_row)

        return result

    def _concat_limit(self, field_rules: Sequence[ValidationRule]) -> int:
        limits = [rule.max_length for rule in field_rules if rule.max_length]
        return min(limits) if limits else self._overflow_max_length

    @staticmethod
    def _existing_values(
        records: Iterable[Row], rules: Iterable[ValidationRule]
    ) -> dict[str, set[object]]:
        unique_fields = {rule.field for rule in rules if rule.unique}
        values: dict[str, set[object]] = {name: set() for name in unique_fields}
        for record in records:
            for name in unique_fields:
                value = record.get(name)
                if not is_blank(value):
                    values[name].add(_hashable(value))
        return values

    def _check_field(
        self,
        value: object,
        field_name: str,
        rules: Sequence[ValidationRule],
        existing_values: Mapping[str, set[object]],
        row_index: int,
    ) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []

        def fail(message: str) -> None:
            issues.append(
                ValidationIssue(
                    field=field_name,
                    message=message,
                    row=row_index,
                    severity=ValidationSeverity.ERROR,
                )
            )

        for rule in rules:
            if is_blank(value):
                if rule.required:
                    fail(f'Field "{field_name}" is required')
                continue

            if rule.type and not matches_type(value, rule.type):
                fail(f'Field "{field_name}" must be of type {rule.type}')

            if isinstance(value, str):
                if rule.min_length and len(value) < rule.min_length:
                    fail(
                        f'Field "{field_name}" must be at least '
                        f"{rule.min_length} characters long"
                    )
                if rule.max_length and len(value) > rule.max_length:
                    fail(
                        f'Field "{field_name}" must be at most '
                        f"{rule.max_length} characters long"
                    )
                if rule.pattern is not None and not rule.pattern.search(value):
                    fail(f'Field "{field_name}" does not match the required format')

            if rule.unique and _hashable(value) in existing_values.get(field_name, set()):
                fail(f'Value "{value}" in field "{field_name}" already exists')

            if rule.custom is not None:
                outcome = rule.custom(value)
                if outcome is not True:
                    fail(
                        outcome
                        if isinstance(outcome, str)
                        else f'Field "{field_name}" failed custom validation'
                    )
        return issues

    @staticmethod
    def _batch_duplicate(
        value: object,
        field_name: str,
        rules: Sequence[ValidationRule],
        seen_in_batch: dict[str, set[object]],
        row_index: int,
    ) -> ValidationWarning | None:
        if is_blank(value) or not any(rule.unique for rule in rules):
            return None
        seen = seen_in_batch.setdefault(field_name, set())
        key = _hashable(value)
        if key in seen:
            return ValidationWarning(
                field=field_name,
                message=f'Value "{value}" repeats within the batch',
                suggestion="Remove duplicate rows before importing",
                row=row_index,
            )
        seen.add(key)
        return None
