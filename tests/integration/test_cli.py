"""Integration tests for CLI commands.

This module contains end-to-end tests for every CLI command, from command
invocation to the JSON-lines files written by an import.
"""

import json
from pathlib import Path

from click.testing import CliRunner
import pandas as pd
import pytest

from contact_importer.cli import app

CONTACTS_CSV = (
    "email,first_name,phone\n"
    "ivan@example.com,Иван,89991234567\n"
    "petr@example.com,Пётр,+7 (999) 765-43-21\n"
    "anna@example.com,Анна,\n"
)


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch) -> Path:
    """Run every command from an empty directory without a config file."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def contacts_file(workdir) -> Path:
    path = workdir / "contacts.csv"
    path.write_text(CONTACTS_CSV, encoding="utf-8")
    return path


@pytest.mark.integration
class TestAnalyzeCommand:
    """Integration tests for the analyze command."""

    def test_analyze_help(self, runner):
        result = runner.invoke(app, ["analyze", "--help"])

        assert result.exit_code == 0
        assert "Analyze a contact spreadsheet" in result.output
        assert "--table" in result.output
        assert "--hints" in result.output
        assert "--json" in result.output

    def test_analyze_prints_mapping(self, runner, contacts_file):
        result = runner.invoke(app, ["analyze", str(contacts_file)])

        assert result.exit_code == 0, result.output
        assert "электронная_почта" in result.output
        assert "Overall confidence" in result.output

    def test_analyze_json(self, runner, contacts_file):
        result = runner.invoke(app, ["analyze", str(contacts_file), "--json"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["file"] == "contacts.csv"
        assert payload["table"] == "пользователи"
        assert payload["row_count"] == 3
        by_target = {m["target_field"]: m for m in payload["mappings"]}
        assert by_target["электронная_почта"]["source_field"] == "email"
        assert by_target["телефон"]["source_field"] == "phone"
        assert payload["hint_warnings"] == []

    def test_analyze_with_hints(self, runner, workdir):
        csv_path = workdir / "export.csv"
        csv_path.write_text("email,Xq\na@example.com,#12\nb@example.com,#34\n", encoding="utf-8")
        hints_path = workdir / "hints.json"
        hints_path.write_text(
            json.dumps({"mapping": {"phone": "Xq", "company": "Employer"}}),
            encoding="utf-8",
        )

        result = runner.invoke(
            app, ["analyze", str(csv_path), "--hints", str(hints_path), "--json"]
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        by_target = {m["target_field"]: m for m in payload["mappings"]}
        assert by_target["телефон"]["source_field"] == "Xq"
        assert len(payload["hint_warnings"]) == 1

    def test_analyze_excel_workbook(self, runner, contacts_file):
        xlsx_path = contacts_file.with_suffix(".xlsx")
        pd.read_csv(contacts_file, dtype=str).to_excel(xlsx_path, index=False)

        result = runner.invoke(app, ["analyze", str(xlsx_path), "--json"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["file"] == "contacts.xlsx"
        assert payload["row_count"] == 3
        by_target = {m["target_field"]: m for m in payload["mappings"]}
        assert by_target["электронная_почта"]["source_field"] == "email"

    def test_analyze_contacts_table(self, runner, contacts_file):
        result = runner.invoke(
            app, ["analyze", str(contacts_file), "--table", "контакты", "--json"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["table"] == "контакты"

    def test_unknown_table(self, runner, contacts_file):
        result = runner.invoke(app, ["analyze", str(contacts_file), "--table", "orders"])

        assert result.exit_code == 2
        assert "Unknown table 'orders'" in result.output

    def test_missing_file(self, runner, workdir):
        result = runner.invoke(app, ["analyze", str(workdir / "missing.csv")])

        assert result.exit_code == 2

    def test_empty_file(self, runner, workdir):
        path = workdir / "empty.csv"
        path.write_text("", encoding="utf-8")

        result = runner.invoke(app, ["analyze", str(path)])

        assert result.exit_code == 1
        assert "empty" in result.output


@pytest.mark.integration
class TestImportCommand:
    """Integration tests for the import command."""

    def test_import_help(self, runner):
        result = runner.invoke(app, ["import", "--help"])

        assert result.exit_code == 0
        assert "Import a contact spreadsheet" in result.output
        assert "--dry-run" in result.output
        assert "--batch-size" in result.output

    def test_dry_run_writes_nothing(self, runner, contacts_file, workdir):
        result = runner.invoke(app, ["import", str(contacts_file), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "Dry run: no rows were written" in result.output
        assert not (workdir / "output").exists()

    def test_import_writes_jsonl(self, runner, contacts_file, workdir):
        output_dir = workdir / "imported"

        result = runner.invoke(
            app,
            [
                "import",
                str(contacts_file),
                "--output-dir",
                str(output_dir),
                "--batch-size",
                "2",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "All rows processed" in result.output
        lines = (output_dir / "пользователи.jsonl").read_text(encoding="utf-8").splitlines()
        rows = [json.loads(line) for line in lines]
        assert [row["электронная_почта"] for row in rows] == [
            "ivan@example.com",
            "petr@example.com",
            "anna@example.com",
        ]

    def test_import_defaults_to_output_next_to_file(self, runner, contacts_file, workdir):
        result = runner.invoke(app, ["import", str(contacts_file)])

        assert result.exit_code == 0, result.output
        assert (workdir / "output" / "пользователи.jsonl").exists()

    def test_second_import_reports_duplicates(self, runner, contacts_file, workdir):
        args = ["import", str(contacts_file), "--output-dir", str(workdir / "out")]
        runner.invoke(app, args)

        result = runner.invoke(app, args)

        assert result.exit_code == 0, result.output
        assert "Completed with validation issues" in result.output
        assert "already" in result.output

    def test_nothing_mappable(self, runner, workdir):
        path = workdir / "export.csv"
        path.write_text("Xq\n#12\n#34\n", encoding="utf-8")

        result = runner.invoke(app, ["import", str(path)])

        assert result.exit_code == 1
        assert "No column of export.csv could be mapped" in result.output

    def test_invalid_batch_size(self, runner, contacts_file):
        result = runner.invoke(app, ["import", str(contacts_file), "--batch-size", "0"])

        assert result.exit_code == 2


@pytest.mark.integration
class TestTablesCommand:
    """Integration tests for the tables command."""

    def test_lists_tables(self, runner):
        result = runner.invoke(app, ["tables"])

        assert result.exit_code == 0
        assert "пользователи" in result.output
        assert "контакты" in result.output

    def test_table_columns(self, runner):
        result = runner.invoke(app, ["tables", "контакты"])

        assert result.exit_code == 0
        assert "примечания" in result.output
        assert "linkedin_url" in result.output

    def test_unknown_table(self, runner):
        result = runner.invoke(app, ["tables", "orders"])

        assert result.exit_code == 1
        assert "Unknown table 'orders'" in result.output
