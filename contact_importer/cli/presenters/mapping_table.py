from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from ...domain.services.mapping import confidence_level
from ...transformations import format_phone_number

if TYPE_CHECKING:
    from rich.console import Console

    from ...application.models import AnalyzeResponse
    from ...domain.entities.mapping import FieldMapping

LEVEL_STYLES = {"high": "green", "medium": "yellow", "low": "red"}
PHONE_FIELDS = frozenset({"телефон", "phone"})
MAX_PREVIEW_COLUMNS = 6
MAX_CELL_LENGTH = 40


def _format_cell(target_field: str, value: object) -> str:
    if value is None:
        return "[dim]—[/dim]"
    text = str(value)
    if target_field in PHONE_FIELDS:
        text = format_phone_number(text)
    if len(text) > MAX_CELL_LENGTH:
        text = text[: MAX_CELL_LENGTH - 1] + "…"
    return escape(text)


class MappingPresenter:
    pass

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(self, response: AnalyzeResponse) -> None:
        result = response.mapping_result
        self.console.print()
        self.console.print(self._build_mapping_table(response))
        self.console.print()
        level = confidence_level(result.confidence)
        style = LEVEL_STYLES[level]
        self.console.print(
            f"[bold]Overall confidence:[/bold] [{style}]{result.confidence:.0%} "
            f"({level})[/{style}]"
        )
        if result.suggestions:
            self.console.print()
            self.console.print("[bold]Suggestions:[/bold]")
            for suggestion in result.suggestions:
                self.console.print(f"  • {escape(suggestion)}")
        if result.unmapped_columns:
            self.console.print()
            self.console.print(
                "[yellow]Columns that will not be imported:[/yellow] "
                + escape(", ".join(result.unmapped_columns))
            )
        for warning in response.hint_warnings:
            self.console.print(f"[yellow]⚠[/yellow] {escape(warning)}")
        if response.sample_rows and result.mappings:
            self.console.print()
            self.console.print(self._build_preview_table(response))

    def _build_mapping_table(self, response: AnalyzeResponse) -> Table:
        table = Table(
            title=f"🔗 {response.file_name} → {response.target_schema.table_name}",
            show_header=True,
            header_style="bold cyan",
            border_style="bright_blue",
            title_style="bold magenta",
        )
        table.add_column("Source column", style="cyan", no_wrap=True)
        table.add_column("Target field", style="white", no_wrap=True)
        table.add_column("Confidence", justify="right", no_wrap=True)
        table.add_column("Transformation", style="magenta", no_wrap=True)
        table.add_column("Reasoning", style="dim", overflow="fold", ratio=2)
        for mapping in response.mapping_result.mappings:
            table.add_row(
                escape(mapping.source_field),
                escape(mapping.target_field),
                self._format_confidence(mapping),
                escape(mapping.transformation or ""),
                escape(mapping.reasoning or ""),
            )
        table.add_section()
        table.add_row(
            "[bold]Total[/bold]",
            f"[bold]{len(response.mapping_result.mappings)}[/bold]",
            "",
            "",
            f"{response.row_count:,} rows, "
            f"{len(response.source_schema.columns)} columns",
        )
        return table

    def _build_preview_table(self, response: AnalyzeResponse) -> Table:
        mappings = response.mapping_result.mappings[:MAX_PREVIEW_COLUMNS]
        table = Table(
            title="Preview",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        for mapping in mappings:
            table.add_column(escape(mapping.target_field), overflow="fold")
        for row in response.sample_rows:
            table.add_row(
                *(
                    _format_cell(m.target_field, row.get(m.source_field))
                    for m in mappings
                )
            )
        return table

    def _format_confidence(self, mapping: FieldMapping) -> str:
        style = LEVEL_STYLES[confidence_level(mapping.confidence)]
        return f"[{style}]{mapping.confidence:.0%}[/{style}]"
