"""Tests for resolving external mapping hints against file headers."""

import pytest

from contact_importer.domain.services.mapping import HintMatch, HintResolver
from contact_importer.infrastructure.repositories.target_catalog_repository import (
    CONTACTS_SCHEMA,
    USERS_SCHEMA,
)


@pytest.fixture
def resolver() -> HintResolver:
    return HintResolver()


class TestNormalizeKey:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("first_name", "имя"),
            ("Email", "электронная_почта"),
            ("e-mail", "электронная_почта"),
            ("телефон", "телефон"),
            ("favourite_colour", "favourite_colour"),
        ],
    )
    def test_normalize_key(self, resolver, key, expected):
        assert resolver.normalize_key(key) == expected


class TestMatchHeader:
    def test_exact_before_case_insensitive(self):
        matched = HintResolver.match_header("Email", ["email", "Email"])

        assert matched == ("Email", HintMatch.EXACT)

    def test_case_insensitive(self):
        matched = HintResolver.match_header("E-MAIL ADDRESS", ["e-mail address"])

        assert matched == ("e-mail address", HintMatch.CASE_INSENSITIVE)

    def test_containment(self):
        matched = HintResolver.match_header("Tel", ["Имя", "Tel number"])

        assert matched == ("Tel number", HintMatch.CONTAINMENT)

    def test_no_match(self):
        assert HintResolver.match_header("Fax", ["Имя", "Email"]) is None


class TestResolve:
    """Hints are cross-checked and only real headers survive."""

    def test_accepts_matching_hints(self, resolver):
        hints = {"first_name": "Имя", "email": "E-mail Address", "phone": "Tel"}
        headers = ["Имя", "e-mail address", "Tel number"]

        resolution = resolver.resolve(hints, headers, USERS_SCHEMA)

        accepted = {hint.target_field: hint for hint in resolution.accepted}
        assert accepted["имя"].match is HintMatch.EXACT
        assert accepted["электронная_почта"].source_field == "e-mail address"
        assert accepted["телефон"].match is HintMatch.CONTAINMENT
        assert resolution.warnings == []

    def test_field_mapping_confidence_follows_match_kind(self, resolver):
        hints = {"first_name": "Имя", "email": "E-mail Address", "phone": "Tel"}
        headers = ["Имя", "e-mail address", "Tel number"]

        mappings = resolver.resolve(hints, headers, USERS_SCHEMA).to_field_mappings()

        by_target = {m.target_field: m for m in mappings}
        assert by_target["имя"].confidence == 1.0
        assert by_target["электронная_почта"].confidence == 0.9
        assert by_target["телефон"].confidence == 0.7
        assert by_target["имя"].reasoning == 'External hint "Имя" (exact match)'

    def test_unknown_header_is_discarded_with_closest_name(self, resolver):
        resolution = resolver.resolve({"email": "Emial"}, ["Email", "Phone"], USERS_SCHEMA)

        assert resolution.accepted == []
        assert len(resolution.warnings) == 1
        assert resolution.warnings[0].startswith(
            'Hint for "электронная_почта" names header "Emial" which is not in the file'
        )
        assert 'closest header is "Email"' in resolution.warnings[0]

    def test_fields_outside_target_schema_are_skipped(self, resolver):
        resolution = resolver.resolve({"notes": "Comment"}, ["Comment"], USERS_SCHEMA)

        assert resolution.accepted == []
        assert resolution.warnings == []

    def test_fields_inside_target_schema_are_kept(self, resolver):
        resolution = resolver.resolve({"notes": "Comment"}, ["Comment"], CONTACTS_SCHEMA)

        assert [h.target_field for h in resolution.accepted] == ["примечания"]

    def test_duplicate_hint_warns(self, resolver):
        resolution = resolver.resolve(
            {"first_name": "Имя", "name": "Имя"}, ["Имя"], USERS_SCHEMA
        )

        assert len(resolution.accepted) == 1
        assert resolution.warnings[0].startswith('Duplicate hint for "имя"')

    def test_non_string_value_warns(self, resolver):
        resolution = resolver.resolve({"email": 5}, ["Email"], USERS_SCHEMA)

        assert resolution.accepted == []
        assert "is not a header name" in resolution.warnings[0]
