"""Tests for the heuristic field-mapping engine."""

import pytest

from contact_importer.domain.entities.mapping import FieldMapping, aggregate_confidence
from contact_importer.domain.entities.schema import ColumnInfo, ColumnTypes, TableSchema
from contact_importer.domain.exceptions import SchemaError
from contact_importer.domain.services.mapping import FieldMappingEngine
from contact_importer.infrastructure.repositories.target_catalog_repository import (
    CONTACTS_SCHEMA,
    USERS_SCHEMA,
)

LONG_NOTE = "This is a long descriptive note about the client"

NOTES_TARGET = TableSchema(
    table_name="контакты",
    columns=(
        ColumnInfo("электронная_почта", ColumnTypes.VARCHAR),
        ColumnInfo("примечания", ColumnTypes.TEXT),
    ),
)
NO_NOTES_TARGET = TableSchema(
    table_name="пользователи",
    columns=(ColumnInfo("электронная_почта", ColumnTypes.VARCHAR),),
)


def _source(*columns: ColumnInfo) -> TableSchema:
    return TableSchema(table_name="uploaded_file", columns=columns)


@pytest.fixture
def engine() -> FieldMappingEngine:
    return FieldMappingEngine()


class TestCalculateMatchConfidence:
    """Scoring of a single target/source pair."""

    def test_exact_name_match_scores_one(self, engine):
        target = ColumnInfo("электронная_почта", ColumnTypes.VARCHAR)
        source = ColumnInfo("Электронная_Почта", ColumnTypes.VARCHAR)

        assert engine.calculate_match_confidence(target, source) == 1.0

    def test_synonym_match(self, engine):
        target = ColumnInfo("имя", ColumnTypes.VARCHAR)
        source = ColumnInfo("first_name", ColumnTypes.VARCHAR, sample_values=("Иван",))

        assert engine.calculate_match_confidence(target, source) >= 0.9

    def test_unrelated_columns_stay_below_threshold(self, engine):
        target = ColumnInfo("фамилия", ColumnTypes.VARCHAR)
        source = ColumnInfo("имя", ColumnTypes.VARCHAR, sample_values=("Иван",))

        assert engine.calculate_match_confidence(target, source) < 0.3

    def test_token_overlap_and_samples(self, engine):
        target = ColumnInfo("work_phone", ColumnTypes.VARCHAR)
        source = ColumnInfo(
            "office_phone", ColumnTypes.VARCHAR, sample_values=("+79991234567",)
        )

        # "phone" token (0.5) + type (0.2) + phone samples (0.3)
        assert engine.calculate_match_confidence(target, source) == pytest.approx(1.0)

    def test_confidence_never_exceeds_one(self, engine):
        target = ColumnInfo("phone_phone", ColumnTypes.VARCHAR)
        source = ColumnInfo(
            "phone_phone_x", ColumnTypes.VARCHAR, sample_values=("+79991234567",)
        )

        assert engine.calculate_match_confidence(target, source) <= 1.0


class TestSuggestTransformation:
    @pytest.mark.parametrize(
        ("target_type", "expected"),
        [
            (ColumnTypes.TIMESTAMPTZ, "parse_date"),
            (ColumnTypes.BOOLEAN, "string_to_boolean"),
            (ColumnTypes.UUID, "string_to_uuid"),
            (ColumnTypes.VARCHAR, None),
        ],
    )
    def test_string_sources(self, target_type, expected):
        target = ColumnInfo("field", target_type)
        source = ColumnInfo("field", ColumnTypes.VARCHAR)

        assert FieldMappingEngine.suggest_transformation(target, source) == expected

    def test_non_string_source_gets_no_transformation(self):
        target = ColumnInfo("создано_в", ColumnTypes.TIMESTAMPTZ)
        source = ColumnInfo("created", ColumnTypes.TIMESTAMPTZ)

        assert FieldMappingEngine.suggest_transformation(target, source) is None


class TestAnalyzeAndMap:
    def test_maps_users_columns(self, engine):
        source = _source(
            ColumnInfo("email", ColumnTypes.VARCHAR, sample_values=("a@x.com",)),
            ColumnInfo("first_name", ColumnTypes.VARCHAR, sample_values=("Иван",)),
            ColumnInfo("phone", ColumnTypes.VARCHAR, sample_values=("89991234567",)),
        )

        result = engine.analyze_and_map(source, USERS_SCHEMA)

        assert result.mapping_for("электронная_почта").source_field == "email"
        assert result.mapping_for("имя").source_field == "first_name"
        assert result.mapping_for("телефон").source_field == "phone"
        assert result.confidence == pytest.approx(
            aggregate_confidence(result.mappings)
        )

    def test_accepted_mapping_produces_insight(self, engine):
        source = _source(
            ColumnInfo("email", ColumnTypes.VARCHAR, sample_values=("a@x.com",)),
        )

        result = engine.analyze_and_map(source, USERS_SCHEMA)

        assert any(line.startswith("email → электронная_почта") for line in result.insights)

    def test_unmatched_target_gets_suggestion_with_closest_column(self, engine):
        target = TableSchema(
            table_name="sites", columns=(ColumnInfo("website", ColumnTypes.VARCHAR),)
        )
        source = _source(
            ColumnInfo("webste", ColumnTypes.VARCHAR, sample_values=("abc",)),
        )

        result = engine.analyze_and_map(source, target)

        assert result.mappings == []
        assert len(result.suggestions) == 1
        assert result.suggestions[0].startswith(
            'No match found for field "website". Consider manual mapping.'
        )
        assert 'Closest column: "webste"' in result.suggestions[0]

    def test_overflow_column_maps_to_notes(self, engine):
        source = _source(
            ColumnInfo(
                "random_field",
                ColumnTypes.VARCHAR,
                sample_values=(LONG_NOTE, "Met at the 2023 conference: wants a demo!"),
            ),
        )

        result = engine.analyze_and_map(source, NOTES_TARGET)

        overflow = result.mappings_from("random_field")
        assert len(overflow) == 1
        assert overflow[0].target_field == "примечания"
        assert overflow[0].confidence == 0.6
        assert overflow[0].transformation == "concatenate_with_existing"
        assert result.unmapped_columns == []

    def test_short_unmatched_column_is_dropped(self, engine):
        source = _source(
            ColumnInfo("random_field", ColumnTypes.VARCHAR, sample_values=("abc",)),
        )

        result = engine.analyze_and_map(source, NOTES_TARGET)

        assert result.mappings_from("random_field") == []
        assert result.unmapped_columns == ["random_field"]

    def test_table_without_notes_field_reports_unmapped(self, engine):
        source = _source(
            ColumnInfo("random_field", ColumnTypes.VARCHAR, sample_values=(LONG_NOTE,)),
        )

        result = engine.analyze_and_map(source, NO_NOTES_TARGET)

        assert result.unmapped_columns == ["random_field"]

    def test_fan_out_lets_one_source_fill_several_targets(self, engine):
        target = TableSchema(
            table_name="emails",
            columns=(
                ColumnInfo("email", ColumnTypes.VARCHAR),
                ColumnInfo("contact_email", ColumnTypes.VARCHAR),
            ),
        )
        source = _source(
            ColumnInfo("email", ColumnTypes.VARCHAR, sample_values=("a@x.com",)),
        )

        result = engine.analyze_and_map(source, target)

        assert [m.target_field for m in result.mappings_from("email")] == [
            "email",
            "contact_email",
        ]

    def test_exclusive_sources_assigns_each_source_once(self):
        engine = FieldMappingEngine(exclusive_sources=True)
        target = TableSchema(
            table_name="emails",
            columns=(
                ColumnInfo("contact_email", ColumnTypes.VARCHAR),
                ColumnInfo("email", ColumnTypes.VARCHAR),
            ),
        )
        source = _source(
            ColumnInfo("email", ColumnTypes.VARCHAR, sample_values=("a@x.com",)),
        )

        result = engine.analyze_and_map(source, target)

        assert [m.target_field for m in result.mappings] == ["email"]
        assert result.mapping_for("email").confidence == 1.0
        assert len(result.suggestions) == 1

    @pytest.mark.parametrize("exclusive_sources", [False, True])
    @pytest.mark.parametrize(
        ("order", "winner"),
        [(("firm_a", "firm_b"), "firm_a"), (("firm_b", "firm_a"), "firm_b")],
    )
    def test_tie_goes_to_first_source_column(self, exclusive_sources, order, winner):
        engine = FieldMappingEngine(exclusive_sources=exclusive_sources)
        target = TableSchema(
            table_name="компании",
            columns=(ColumnInfo("компания", ColumnTypes.VARCHAR),),
        )
        source = _source(
            *(
                ColumnInfo(name, ColumnTypes.VARCHAR, sample_values=("Acme",))
                for name in order
            )
        )
        first, second = source.columns
        assert engine.calculate_match_confidence(
            target.columns[0], first
        ) == engine.calculate_match_confidence(target.columns[0], second)

        result = engine.analyze_and_map(source, target)

        mapping = result.mapping_for("компания")
        assert mapping is not None
        assert mapping.source_field == winner
        assert [m.source_field for m in result.mappings] == [winner]

    def test_mapping_is_deterministic(self, engine):
        source = _source(
            ColumnInfo("Email", ColumnTypes.VARCHAR, sample_values=("a@x.com",)),
            ColumnInfo("Company", ColumnTypes.VARCHAR, sample_values=("ООО Ромашка",)),
            ColumnInfo("Comment", ColumnTypes.VARCHAR, sample_values=(LONG_NOTE,)),
        )

        first = engine.analyze_and_map(source, CONTACTS_SCHEMA)
        second = engine.analyze_and_map(source, CONTACTS_SCHEMA)

        assert first.to_dict() == second.to_dict()

    def test_min_confidence_is_strict(self):
        engine = FieldMappingEngine(min_confidence=1.0)
        source = _source(ColumnInfo("email", ColumnTypes.VARCHAR))

        result = engine.analyze_and_map(source, USERS_SCHEMA)

        assert result.mapping_for("электронная_почта") is None

    def test_missing_source_schema_raises(self, engine):
        with pytest.raises(SchemaError, match="Missing source schema"):
            engine.analyze_and_map(None, USERS_SCHEMA)

    def test_empty_target_schema_raises(self, engine):
        source = _source(ColumnInfo("email"))

        with pytest.raises(SchemaError, match="has no columns"):
            engine.analyze_and_map(source, TableSchema(table_name="nothing"))


class TestAggregateConfidence:
    def test_mean_of_mapping_confidences(self):
        mappings = [
            FieldMapping(source_field="a", target_field="x", confidence=0.9),
            FieldMapping(source_field="b", target_field="y", confidence=0.5),
        ]

        assert aggregate_confidence(mappings) == pytest.approx(0.7)

    def test_no_mappings_scores_zero(self):
        assert aggregate_confidence([]) == 0.0
