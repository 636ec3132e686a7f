"""Tests for column type inference."""

import pytest

from contact_importer.domain.entities.schema import ColumnTypes
from contact_importer.domain.exceptions import SchemaError
from contact_importer.domain.services.inference import ColumnTypeInferencer


def _rows(column: str, values: list[object]) -> list[dict[str, object]]:
    return [{column: value} for value in values]


@pytest.fixture
def inferencer() -> ColumnTypeInferencer:
    return ColumnTypeInferencer()


class TestInferType:
    """Rule order and the 80% match threshold."""

    def test_email_rule_fires_at_eighty_percent(self, inferencer):
        rows = _rows(
            "Email", ["a@b.com", "c@d.com", "not-an-email", "e@f.com", "g@h.com"]
        )

        inference = inferencer.explain_type(rows, "Email")

        assert inference.rule == "email"
        assert inference.column_type == ColumnTypes.VARCHAR
        assert inference.match_ratio == pytest.approx(0.8)

    def test_email_rule_skipped_at_sixty_percent(self, inferencer):
        rows = _rows(
            "Email", ["a@b.com", "c@d.com", "not-an-email", "still-not", "e@f.com"]
        )

        inference = inferencer.explain_type(rows, "Email")

        assert inference.rule == "default"
        assert inference.column_type == ColumnTypes.VARCHAR

    def test_phone_rule(self, inferencer):
        rows = _rows("Phone", ["+7 999 123-45-67", "89991234567"])

        assert inferencer.explain_type(rows, "Phone").rule == "phone"

    def test_name_rule(self, inferencer):
        rows = _rows("first_name", ["Иван", "Anna", "Мария"])

        assert inferencer.explain_type(rows, "first_name").rule == "name"

    def test_url_rule_infers_text(self, inferencer):
        rows = _rows("profile_link", ["https://linkedin.com/in/ivan"])

        inference = inferencer.explain_type(rows, "profile_link")

        assert inference.rule == "url"
        assert inference.column_type == ColumnTypes.TEXT

    def test_numbers_infer_integer(self, inferencer):
        rows = _rows("age", ["25", "30", "41"])

        assert inferencer.infer_type(rows, "age") == ColumnTypes.INTEGER

    def test_dates_infer_timestamptz(self, inferencer):
        rows = _rows("created", ["2024-01-05", "2024-02-10"])

        assert inferencer.infer_type(rows, "created") == ColumnTypes.TIMESTAMPTZ

    def test_long_text_infers_text(self, inferencer):
        rows = _rows("bio", ["x" * 300, "y" * 300, "short"])

        inference = inferencer.explain_type(rows, "bio")

        assert inference.rule == "long_text"
        assert inference.column_type == ColumnTypes.TEXT

    def test_empty_column_defaults_to_varchar(self, inferencer):
        rows = _rows("notes", [None, "", None])

        inference = inferencer.explain_type(rows, "notes")

        assert inference.rule == "empty"
        assert inference.column_type == ColumnTypes.VARCHAR

    def test_blank_values_are_ignored_in_ratio(self, inferencer):
        rows = _rows("email", ["a@b.com", None, "", "c@d.com"])

        assert inferencer.explain_type(rows, "email").match_ratio == 1.0

    def test_only_leading_rows_inspected(self):
        inferencer = ColumnTypeInferencer(inference_rows=2)
        rows = _rows("code", ["1", "2", "abc", "def", "ghi"])

        assert inferencer.infer_type(rows, "code") == ColumnTypes.INTEGER


class TestBuildSourceSchema:
    def test_columns_keep_first_seen_order(self, inferencer):
        rows = [{"a": "1", "b": None}, {"a": "2", "c": "x"}]

        schema = inferencer.build_source_schema(rows)

        assert schema.table_name == "uploaded_file"
        assert schema.column_names == ["a", "b", "c"]

    def test_nullability(self, inferencer):
        rows = [{"a": "1", "b": None}, {"a": "2", "b": "x"}]

        schema = inferencer.build_source_schema(rows)

        assert schema.get("a").nullable is False
        assert schema.get("b").nullable is True

    def test_sample_values_from_first_rows(self):
        inferencer = ColumnTypeInferencer(sample_size=2)
        rows = [{"a": "1"}, {"a": None}, {"a": "3"}]

        schema = inferencer.build_source_schema(rows)

        assert schema.get("a").sample_values == ("1", None)

    def test_empty_rows_raise(self, inferencer):
        with pytest.raises(SchemaError, match="empty file"):
            inferencer.build_source_schema([])
