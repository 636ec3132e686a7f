"""Column type inference from parsed rows.

Only a prefix of the rows is inspected. Rules are tried in order and the
first one whose share of matching non-empty samples reaches the threshold
decides the type:

1. name mentions email and samples look like emails -> VARCHAR
2. name mentions phone and samples carry 10-15 digits -> VARCHAR
3. name mentions a person name and samples look like names -> VARCHAR
4. name mentions a company and samples look like company names -> VARCHAR
5. name mentions a URL and samples parse as absolute URLs -> TEXT
6. samples parse as numbers -> INTEGER
7. samples parse as dates -> TIMESTAMPTZ
8. at least half of the samples are longer than 255 characters -> TEXT
9. otherwise VARCHAR
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from ....constants import Defaults, InferenceThresholds
from ...entities.schema import ColumnInfo, ColumnTypes, TableSchema
from ...exceptions import SchemaError
from ..value_checks import (
    is_blank,
    is_number_like,
    is_valid_company_name,
    is_valid_date,
    is_valid_email,
    is_valid_name,
    is_valid_phone,
    is_valid_url,
)

Row = Mapping[str, object]


@dataclass(frozen=True, slots=True)
class NameRule:
    rule: str
    keywords: tuple[str, ...]
    check: Callable[[object], bool]
    column_type: str


NAME_RULES: tuple[NameRule, ...] = (
    NameRule("email", ("mail", "почта", "email"), is_valid_email, ColumnTypes.VARCHAR),
    NameRule("phone", ("phone", "телефон", "tel"), is_valid_phone, ColumnTypes.VARCHAR),
    NameRule("name", ("name", "имя", "fname", "lname"), is_valid_name, ColumnTypes.VARCHAR),
    NameRule(
        "company",
        ("company", "компания", "org", "work"),
        is_valid_company_name,
        ColumnTypes.VARCHAR,
    ),
    NameRule("url", ("url", "link", "profile"), is_valid_url, ColumnTypes.TEXT),
)


@dataclass(frozen=True, slots=True)
class TypeInference:
    """Inferred type plus the rule that decided it."""

    column_type: str
    rule: str
    match_ratio: float = 0.0


def _ratio(values: Sequence[object], check: Callable[[object], bool]) -> float:
    return sum(1 for value in values if check(value)) / len(values)


def _is_long_text(value: object) -> bool:
    return isinstance(value, str) and len(value) > InferenceThresholds.LONG_TEXT_LENGTH


class ColumnTypeInferencer:
    def __init__(
        self,
        *,
        inference_rows: int = Defaults.INFERENCE_ROWS,
        sample_size: int = Defaults.SAMPLE_SIZE,
        match_ratio: float = InferenceThresholds.MATCH_RATIO,
    ) -> None:
        super().__init__()
        self._inference_rows = inference_rows
        self._sample_size = sample_size
        self._match_ratio = match_ratio

    def infer_type(self, rows: Sequence[Row], column_name: str) -> str:
        return self.explain_type(rows, column_name).column_type

    def explain_type(self, rows: Sequence[Row], column_name: str) -> TypeInference:
        values = [
            row.get(column_name)
            for row in rows[: self._inference_rows]
            if not is_blank(row.get(column_name))
        ]
        if not values:
            return TypeInference(ColumnTypes.VARCHAR, "empty")

        lowered = column_name.lower()
        for name_rule in NAME_RULES:
            if not any(keyword in lowered for keyword in name_rule.keywords):
                continue
            ratio = _ratio(values, name_rule.check)
            if ratio >= self._match_ratio:
                return TypeInference(name_rule.column_type, name_rule.rule, ratio)

        ratio = _ratio(values, is_number_like)
        if ratio >= self._match_ratio:
            return TypeInference(ColumnTypes.INTEGER, "number", ratio)

        ratio = _ratio(values, is_valid_date)
        if ratio >= self._match_ratio:
            return TypeInference(ColumnTypes.TIMESTAMPTZ, "date", ratio)

        ratio = _ratio(values, _is_long_text)
        if ratio >= InferenceThresholds.LONG_TEXT_RATIO:
            return TypeInference(ColumnTypes.TEXT, "long_text", ratio)

        return TypeInference(ColumnTypes.VARCHAR, "default")

    def is_nullable(self, rows: Sequence[Row], column_name: str) -> bool:
        return any(
            is_blank(row.get(column_name)) for row in rows[: self._inference_rows]
        )

    def build_source_schema(
        self,
        rows: Sequence[Row],
        table_name: str = Defaults.SOURCE_TABLE_NAME,
    ) -> TableSchema:
        """Build the uploaded file's schema from its parsed rows.

        Columns keep first-seen order across all rows. The first
        ``sample_size`` rows provide each column's sample values.

        Raises:
            SchemaError: If there are no rows to infer from
        """
        if not rows:
            raise SchemaError("Cannot infer a schema from an empty file", table_name=table_name)

        names: dict[str, None] = {}
        for row in rows:
            names.update(dict.fromkeys(str(key) for key in row))

        sample_rows = rows[: self._sample_size]
        columns = [
            ColumnInfo(
                name=name,
                type=self.infer_type(rows, name),
                nullable=self.is_nullable(rows, name),
                sample_values=tuple(row.get(name) for row in sample_rows),
            )
            for name in names
        ]
        return TableSchema(table_name=table_name, columns=tuple(columns))
