"""Analyze command - Infer a file's schema and propose a field mapping.

This module is a thin adapter between the Click CLI and the application
layer's AnalyzeFileUseCase: it reads the file, builds the request, runs the
use case and hands the response to a presenter (or prints it as JSON).
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
from typing import cast

import click
from rich.console import Console

from ...application.models import AnalyzeRequest
from ...domain.exceptions import SchemaError
from ...infrastructure.container import DependencyContainer
from ...infrastructure.io import DataSourceError
from ..helpers import load_config, mapping_options, read_rows, resolve_table
from ..presenters import MappingPresenter

console = Console()


@dataclass(frozen=True)
class AnalyzeCommandOptions:
    table: str | None
    config_file: Path | None
    hint_file: Path | None
    as_json: bool
    encoding: str
    delimiter: str
    min_confidence: float | None
    exclusive_sources: bool | None
    verbose: int

    @classmethod
    def from_kwargs(cls, options: dict[str, object]) -> AnalyzeCommandOptions:
        return cls(
            table=cast("str | None", options.get("table")),
            config_file=cast("Path | None", options.get("config_file")),
            hint_file=cast("Path | None", options.get("hint_file")),
            as_json=cast("bool", options["as_json"]),
            encoding=cast("str", options["encoding"]),
            delimiter=cast("str", options["delimiter"]),
            min_confidence=cast("float | None", options.get("min_confidence")),
            exclusive_sources=cast("bool | None", options.get("exclusive_sources")),
            verbose=cast("int", options["verbose"]),
        )


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@mapping_options
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print the mapping result as JSON instead of tables",
)
def analyze_command(file: Path, **options: object) -> None:
    """Analyze a contact spreadsheet and propose a field mapping.

    The file's columns are matched against the destination table by name,
    synonyms, declared types and sample values.

    Examples:

    \b
        # Map a CSV export onto the default users table
        contact-importer analyze contacts.csv

    \b
        # Map onto the contacts table and print JSON
        contact-importer analyze contacts.csv --table контакты --json

    \b
        # Fill fields the heuristics missed from an LLM-produced hint file
        contact-importer analyze contacts.csv --hints hints.json
    """
    command_options = AnalyzeCommandOptions.from_kwargs(dict(options))
    config = load_config(
        command_options.config_file,
        min_confidence=command_options.min_confidence,
        exclusive_sources=command_options.exclusive_sources,
    )
    container = DependencyContainer(
        verbose=command_options.verbose,
        console=console,
        use_null_logger=command_options.as_json,
        config=config,
        hint_file=command_options.hint_file,
    )
    table = resolve_table(container, command_options.table)
    rows = read_rows(
        container,
        file,
        encoding=command_options.encoding,
        delimiter=command_options.delimiter,
    )

    use_case = container.create_analysis_use_case()
    try:
        response = use_case.execute(
            AnalyzeRequest(file_name=file.name, rows=rows, target_table=table)
        )
    except (SchemaError, DataSourceError) as exc:
        raise click.ClickException(str(exc)) from exc

    if command_options.as_json:
        payload = {
            "file": response.file_name,
            "table": response.target_schema.table_name,
            "row_count": response.row_count,
            **response.mapping_result.to_dict(),
            "hint_warnings": response.hint_warnings,
        }
        click.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    MappingPresenter(console).present(response)
    container.create_logger().log_final_stats()
