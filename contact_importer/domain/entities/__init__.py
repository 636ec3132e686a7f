"""Domain entities.

Schema descriptions, mapping results, validation records and typed
destination records.
"""

from .mapping import FieldMapping, MappingResult, aggregate_confidence, merge_mappings
from .records import ContactRecord, DestinationRecord, UserRecord, record_type_for
from .schema import ColumnInfo, ColumnTypes, TableSchema
from .validation import (
    ValidationIssue,
    ValidationResult,
    ValidationRule,
    ValidationSeverity,
    ValidationWarning,
)

__all__ = [
    # Schema
    "ColumnInfo",
    "ColumnTypes",
    "TableSchema",
    # Mapping
    "FieldMapping",
    "MappingResult",
    "aggregate_confidence",
    "merge_mappings",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    "ValidationRule",
    "ValidationSeverity",
    "ValidationWarning",
    # Destination records
    "ContactRecord",
    "DestinationRecord",
    "UserRecord",
    "record_type_for",
]
