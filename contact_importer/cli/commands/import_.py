"""Import command - Map a contact spreadsheet and load it in batches.

The command runs the same analysis as ``analyze`` and then feeds the mapped
rows through BatchTransferUseCase. Rows are written as JSON lines, one file
per destination table, under the output directory.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import cast

import click
from rich.console import Console

from ...application.exceptions import TransferError
from ...application.models import AnalyzeRequest, TransferRequest
from ...domain.exceptions import SchemaError
from ...infrastructure.container import DependencyContainer
from ...infrastructure.io import DataSourceError
from ...infrastructure.repositories import JsonLinesStorage, SequenceRowSource
from ..helpers import load_config, mapping_options, read_rows, resolve_table
from ..presenters import MappingPresenter, SummaryPresenter, SummaryRequest

console = Console()


@dataclass(frozen=True)
class ImportCommandOptions:
    table: str | None
    config_file: Path | None
    hint_file: Path | None
    output_dir: Path | None
    batch_size: int | None
    dry_run: bool
    encoding: str
    delimiter: str
    min_confidence: float | None
    exclusive_sources: bool | None
    verbose: int

    @classmethod
    def from_kwargs(cls, options: dict[str, object]) -> ImportCommandOptions:
        return cls(
            table=cast("str | None", options.get("table")),
            config_file=cast("Path | None", options.get("config_file")),
            hint_file=cast("Path | None", options.get("hint_file")),
            output_dir=cast("Path | None", options.get("output_dir")),
            batch_size=cast("int | None", options.get("batch_size")),
            dry_run=cast("bool", options["dry_run"]),
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
    "--output-dir",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the imported JSON-lines tables (default: <file dir>/output)",
)
@click.option(
    "--batch-size",
    type=click.IntRange(min=1),
    default=None,
    help="Rows per batch (default: 100)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Validate and transform without writing anything",
)
def import_command(file: Path, **options: object) -> None:
    """Import a contact spreadsheet into a destination table.

    Every row is validated against the table's rules; fields that fail are
    dropped from their row and reported, the rest of the row is kept.

    Examples:

    \b
        # Check what would be imported without writing
        contact-importer import contacts.csv --dry-run

    \b
        # Import into the contacts table in batches of 500
        contact-importer import contacts.csv --table контакты --batch-size 500

    \b
        # Write the imported rows somewhere specific
        contact-importer import contacts.csv --output-dir imported/
    """
    command_options = ImportCommandOptions.from_kwargs(dict(options))
    config = load_config(
        command_options.config_file,
        min_confidence=command_options.min_confidence,
        exclusive_sources=command_options.exclusive_sources,
    )
    output_dir = command_options.output_dir or (file.parent / "output")
    container = DependencyContainer(
        verbose=command_options.verbose,
        console=console,
        config=config,
        output_dir=output_dir,
        hint_file=command_options.hint_file,
    )
    table = resolve_table(container, command_options.table)
    rows = read_rows(
        container,
        file,
        encoding=command_options.encoding,
        delimiter=command_options.delimiter,
    )

    try:
        analysis = container.create_analysis_use_case().execute(
            AnalyzeRequest(file_name=file.name, rows=rows, target_table=table)
        )
    except (SchemaError, DataSourceError) as exc:
        raise click.ClickException(str(exc)) from exc

    MappingPresenter(console).present(analysis)
    if not analysis.mapping_result.mappings:
        raise click.ClickException(
            f"No column of {file.name} could be mapped onto {table}"
        )

    request = TransferRequest(
        source=SequenceRowSource(rows),
        target_table=table,
        mappings=analysis.mapping_result.mappings,
        batch_size=command_options.batch_size or config.batch_size,
        dry_run=command_options.dry_run,
    )
    try:
        summary = container.create_transfer_use_case().execute(request)
    except TransferError as exc:
        raise click.ClickException(str(exc)) from exc

    storage = container.create_storage()
    output_path = (
        storage.path_for(table) if isinstance(storage, JsonLinesStorage) else None
    )
    SummaryPresenter(console).present(
        SummaryRequest(summary=summary, target_table=table, output_path=output_path)
    )
    container.create_logger().log_final_stats()

    if summary.error_count:
        raise click.ClickException("Import completed with errors")
