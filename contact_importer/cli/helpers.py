"""Helper functions shared by the CLI commands.

Commands read their input through the dependency container and turn
infrastructure and schema failures into ``click.ClickException`` so that the
user sees a one-line error instead of a traceback.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

import click

from ..config import ConfigLoader
from ..infrastructure.io import CSVReadOptions, DataSourceError, is_excel_file

if TYPE_CHECKING:
    from ..config import ImporterConfig
    from ..infrastructure.container import DependencyContainer


def load_config(
    config_file: Path | None,
    *,
    min_confidence: float | None = None,
    exclusive_sources: bool | None = None,
) -> ImporterConfig:
    """Load the runtime config and apply command-line overrides."""
    config = ConfigLoader.load(config_file=config_file)
    if min_confidence is not None:
        config = replace(config, min_confidence=min_confidence)
    if exclusive_sources is not None:
        config = replace(config, exclusive_sources=exclusive_sources)
    return config


def read_rows(
    container: DependencyContainer,
    path: Path,
    *,
    encoding: str = "utf-8",
    delimiter: str = ",",
) -> list[dict[str, object]]:
    """Read a CSV export or the first sheet of an Excel workbook."""
    reader = (
        container.create_excel_reader()
        if is_excel_file(path)
        else container.create_csv_reader()
    )
    try:
        return reader.read_rows(
            path, CSVReadOptions(encoding=encoding, delimiter=delimiter)
        )
    except DataSourceError as exc:
        raise click.ClickException(str(exc)) from exc


def resolve_table(container: DependencyContainer, table: str | None) -> str:
    """Return the requested table, or the configured default."""
    name = table or container.config.default_table
    catalog = container.create_catalog()
    if name not in catalog.list_tables():
        known = ", ".join(catalog.list_tables())
        raise click.BadParameter(
            f"Unknown table '{name}' (known: {known})", param_hint="--table"
        )
    return name


def mapping_options(command: Callable[..., None]) -> Callable[..., None]:
    """Attach the options shared by every command that runs the mapping engine."""
    decorators = [
        click.option(
            "--table",
            help="Destination table (default: from config, usually пользователи)",
        ),
        click.option(
            "--config",
            "config_file",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Path to a contact_importer.toml config file "
            "(default: ./contact_importer.toml)",
        ),
        click.option(
            "--hints",
            "hint_file",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="JSON file of {target_field: source_header} mapping hints",
        ),
        click.option(
            "--encoding", default="utf-8", show_default=True, help="File encoding"
        ),
        click.option(
            "--delimiter", default=",", show_default=True, help="CSV field delimiter"
        ),
        click.option(
            "--min-confidence",
            type=click.FloatRange(0.0, 1.0),
            default=None,
            help="Minimum confidence a mapping must exceed (default: 0.3)",
        ),
        click.option(
            "--exclusive/--fan-out",
            "exclusive_sources",
            default=None,
            help="Let each source column fill at most one target field",
        ),
        click.option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity level (e.g., -v, -vv)",
        ),
    ]
    for decorator in reversed(decorators):
        command = decorator(command)
    return command
