"""Tests for JSON mapping hint files."""

import json

import pytest

from contact_importer.infrastructure.io import DataSourceNotFoundError
from contact_importer.infrastructure.repositories.target_catalog_repository import (
    USERS_SCHEMA,
)
from contact_importer.infrastructure.services.json_hint_source import (
    HintFileError,
    JsonHintSource,
    load_hint_file,
)


class TestLoadHintFile:
    def test_flat_object(self, tmp_path):
        path = tmp_path / "hints.json"
        path.write_text(json.dumps({"email": "E-mail"}), encoding="utf-8")

        assert load_hint_file(path) == {"email": "E-mail"}

    def test_nested_mapping_key(self, tmp_path):
        path = tmp_path / "hints.json"
        path.write_text(
            json.dumps({"mapping": {"phone": "Tel"}, "confidence": 0.8}), encoding="utf-8"
        )

        assert load_hint_file(path) == {"phone": "Tel"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataSourceNotFoundError):
            load_hint_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "hints.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(HintFileError, match="Invalid JSON"):
            load_hint_file(path)

    def test_non_object(self, tmp_path):
        path = tmp_path / "hints.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(HintFileError, match="must contain a JSON object"):
            load_hint_file(path)


class TestJsonHintSource:
    def test_suggest_returns_file_contents(self, tmp_path):
        path = tmp_path / "hints.json"
        path.write_text(json.dumps({"email": "E-mail"}), encoding="utf-8")
        source = JsonHintSource(path)

        hints = source.suggest(["E-mail"], [], USERS_SCHEMA)

        assert hints == {"email": "E-mail"}

    def test_file_read_once(self, tmp_path):
        path = tmp_path / "hints.json"
        path.write_text(json.dumps({"email": "E-mail"}), encoding="utf-8")
        source = JsonHintSource(path)
        source.suggest([], [], USERS_SCHEMA)

        path.unlink()

        assert source.suggest([], [], USERS_SCHEMA) == {"email": "E-mail"}
