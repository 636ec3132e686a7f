"""Tests for the file analysis use case."""

from unittest.mock import Mock

import pytest

from contact_importer.application.analysis_use_case import (
    AnalysisDependencies,
    AnalyzeFileUseCase,
)
from contact_importer.application.models import AnalyzeRequest
from contact_importer.domain.exceptions import SchemaError, UnknownTableError
from contact_importer.domain.services.inference import ColumnTypeInferencer
from contact_importer.domain.services.mapping import FieldMappingEngine, HintResolver
from contact_importer.infrastructure.logging import NullLogger
from contact_importer.infrastructure.repositories import TargetCatalogRepository

ROWS = [
    {"email": "ivan@example.com", "Xq": "#12"},
    {"email": "petr@example.com", "Xq": "#34"},
    {"email": "anna@example.com", "Xq": "#56"},
    {"email": "olga@example.com", "Xq": "#78"},
]


def _use_case(hint_source=None) -> AnalyzeFileUseCase:
    return AnalyzeFileUseCase(
        AnalysisDependencies(
            logger=NullLogger(),
            catalog=TargetCatalogRepository(),
            engine=FieldMappingEngine(),
            inferencer=ColumnTypeInferencer(),
            hint_resolver=HintResolver(),
            hint_source=hint_source,
        )
    )


class TestAnalyzeFileUseCase:
    def test_maps_columns(self):
        response = _use_case().execute(
            AnalyzeRequest(file_name="contacts.csv", rows=ROWS)
        )

        assert response.row_count == 4
        assert response.target_schema.table_name == "пользователи"
        assert response.source_schema.column_names == ["email", "Xq"]
        mapping = response.mapping_result.mapping_for("электронная_почта")
        assert mapping is not None
        assert mapping.source_field == "email"
        assert response.mapping_result.mapping_for("телефон") is None
        assert response.mapping_result.unmapped_columns == ["Xq"]
        assert len(response.sample_rows) == 3
        assert response.hint_warnings == []

    def test_hints_fill_unmatched_fields(self):
        response = _use_case().execute(
            AnalyzeRequest(
                file_name="contacts.csv",
                rows=ROWS,
                hints={"phone": "Xq", "email": "Xq", "company": "Employer"},
            )
        )

        result = response.mapping_result
        phone = result.mapping_for("телефон")
        assert phone is not None
        assert phone.source_field == "Xq"
        assert phone.confidence == 1.0
        # hints never replace the engine's own mappings
        assert result.mapping_for("электронная_почта").source_field == "email"
        assert "Xq" not in result.unmapped_columns
        assert len(response.hint_warnings) == 1
        assert '"Employer"' in response.hint_warnings[0]

    def test_hint_source_is_consulted(self):
        hint_source = Mock()
        hint_source.suggest.return_value = {"phone": "Xq"}

        response = _use_case(hint_source).execute(
            AnalyzeRequest(file_name="contacts.csv", rows=ROWS, preview_rows=2)
        )

        headers, sample_rows, target_schema = hint_source.suggest.call_args.args
        assert headers == ["email", "Xq"]
        assert sample_rows == ROWS[:2]
        assert target_schema.table_name == "пользователи"
        assert response.mapping_result.mapping_for("телефон") is not None

    def test_request_hints_take_precedence_over_source(self):
        hint_source = Mock()

        _use_case(hint_source).execute(
            AnalyzeRequest(file_name="contacts.csv", rows=ROWS, hints={})
        )

        hint_source.suggest.assert_not_called()

    def test_unknown_table(self):
        with pytest.raises(UnknownTableError, match="Unknown target table: orders"):
            _use_case().execute(
                AnalyzeRequest(file_name="contacts.csv", rows=ROWS, target_table="orders")
            )

    def test_empty_file(self):
        with pytest.raises(SchemaError):
            _use_case().execute(AnalyzeRequest(file_name="empty.csv", rows=[]))
