"""Table schema entities.

A ``TableSchema`` describes either the structure inferred from an uploaded
file or one of the fixed destination tables. Both are built fresh for each
request and are never mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..exceptions import SchemaError

# Target fields that absorb unrecognized free-text columns when a table does
# not name its overflow field explicitly.
NOTES_FIELD_NAMES: tuple[str, ...] = ("примечания", "notes", "заметки")


class ColumnTypes:
    VARCHAR = "VARCHAR"
    TEXT = "TEXT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    BOOLEAN = "BOOLEAN"
    TIMESTAMPTZ = "TIMESTAMPTZ"
    UUID = "UUID"
    JSONB = "JSONB"
    DATE = "DATE"


def _empty_samples() -> tuple[object, ...]:
    return ()


@dataclass(frozen=True, slots=True)
class ColumnInfo:
    """One observed or declared column.

    Attributes:
        name: Column header or destination field name
        type: Semantic storage type tag (see ``ColumnTypes``)
        nullable: Whether empty values were seen or are allowed
        sample_values: A short ordered prefix of raw values
    """

    name: str
    type: str = ColumnTypes.VARCHAR
    nullable: bool = True
    sample_values: tuple[object, ...] = field(default_factory=_empty_samples)

    def __post_init__(self) -> None:
        if not isinstance(self.sample_values, tuple):
            object.__setattr__(self, "sample_values", tuple(self.sample_values))


def _empty_columns() -> tuple[ColumnInfo, ...]:
    return ()


@dataclass(frozen=True, slots=True)
class TableSchema:
    """Ordered column set for one table.

    Column names must be unique. ``overflow_field`` optionally designates the
    notes-like column that receives unmapped free-text data.
    """

    table_name: str
    columns: tuple[ColumnInfo, ...] = field(default_factory=_empty_columns)
    overflow_field: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.columns, tuple):
            object.__setattr__(self, "columns", tuple(self.columns))
        seen: set[str] = set()
        for column in self.columns:
            if column.name in seen:
                raise SchemaError(
                    f"Duplicate column '{column.name}' in table '{self.table_name}'",
                    table_name=self.table_name,
                )
            seen.add(column.name)
        if self.overflow_field is not None and self.overflow_field not in seen:
            raise SchemaError(
                f"Overflow field '{self.overflow_field}' is not a column of "
                f"'{self.table_name}'",
                table_name=self.table_name,
            )

    @classmethod
    def from_columns(
        cls,
        table_name: str,
        columns: Sequence[ColumnInfo],
        *,
        overflow_field: str | None = None,
    ) -> TableSchema:
        return cls(
            table_name=table_name,
            columns=tuple(columns),
            overflow_field=overflow_field,
        )

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    @property
    def is_empty(self) -> bool:
        return not self.columns

    def has_column(self, name: str) -> bool:
        return any(column.name == name for column in self.columns)

    def get(self, name: str) -> ColumnInfo | None:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def overflow_column(self) -> ColumnInfo | None:
        """Return the designated notes-like column, if the table has one."""
        if self.overflow_field is not None:
            return self.get(self.overflow_field)
        for column in self.columns:
            if column.name.lower() in NOTES_FIELD_NAMES:
                return column
        return None
