from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from ...application.models import ChunkResult, TransferSummary

MAX_LISTED_ISSUES = 10


@dataclass(frozen=True, slots=True)
class SummaryRequest:
    summary: TransferSummary
    target_table: str
    output_path: Path | None = None


class SummaryPresenter:
    pass

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(self, request: SummaryRequest) -> None:
        summary = request.summary
        self.console.print()
        self.console.print(self._build_chunk_table(request))
        self.console.print()
        self._print_status(summary)
        self._print_output_information(request)
        self._print_issue_details(summary)

    def _build_chunk_table(self, request: SummaryRequest) -> Table:
        summary = request.summary
        mode = "Dry Run" if summary.dry_run else "Import"
        table = Table(
            title=f"📥 {mode} into {request.target_table}",
            show_header=True,
            header_style="bold cyan",
            border_style="bright_blue",
            title_style="bold magenta",
        )
        table.add_column("Rows", style="cyan", no_wrap=True)
        table.add_column("Status", justify="center", no_wrap=True)
        table.add_column(
            "Would insert" if summary.dry_run else "Inserted",
            justify="right",
            style="yellow",
            no_wrap=True,
        )
        table.add_column("Skipped", justify="right", no_wrap=True)
        table.add_column("Invalid fields", justify="right", no_wrap=True)
        table.add_column("Notes", style="dim", overflow="fold", ratio=2)
        for chunk in summary.chunks:
            table.add_row(
                f"{chunk.batch_start + 1:,}-{chunk.batch_start + chunk.batch_size:,}",
                "[green]✓[/green]" if chunk.success else "[red]✗[/red]",
                f"{self._chunk_count(chunk):,}",
                f"{chunk.skipped_count:,}",
                f"{len(chunk.validation_errors):,}",
                escape(chunk.error or ""),
            )
        table.add_section()
        table.add_row(
            f"[bold]{summary.total_processed:,}[/bold]",
            "",
            f"[bold yellow]{summary.success_count:,}[/bold yellow]",
            f"{summary.skipped_count:,}",
            f"{len(summary.validation_errors):,}",
            "",
        )
        return table

    def _chunk_count(self, chunk: ChunkResult) -> int:
        return chunk.would_insert_count or chunk.inserted_count

    def _print_status(self, summary: TransferSummary) -> None:
        if summary.error_count:
            self.console.print(
                f"[bold red]✗ {summary.error_count:,} rows failed "
                f"in {len(summary.failed_chunks)} chunk(s)[/bold red]"
            )
        elif summary.validation_errors:
            self.console.print(
                "[bold yellow]⚠ Completed with validation issues[/bold yellow]"
            )
        else:
            self.console.print("[bold green]✓ All rows processed[/bold green]")

    def _print_output_information(self, request: SummaryRequest) -> None:
        if request.summary.dry_run:
            self.console.print("[dim]Dry run: no rows were written[/dim]")
        elif request.output_path is not None:
            self.console.print(f"[bold]Output:[/bold] {request.output_path}")

    def _print_issue_details(self, summary: TransferSummary) -> None:
        if not summary.validation_errors and not summary.validation_warnings:
            return
        self.console.print()
        for issue in summary.validation_errors[:MAX_LISTED_ISSUES]:
            self.console.print(f"  [red]✗[/red] {escape(str(issue))}")
        hidden = len(summary.validation_errors) - MAX_LISTED_ISSUES
        if hidden > 0:
            self.console.print(f"  [dim]… and {hidden:,} more[/dim]")
        for warning in summary.validation_warnings[:MAX_LISTED_ISSUES]:
            location = f"row {warning.row}: " if warning.row is not None else ""
            self.console.print(
                f"  [yellow]⚠[/yellow] {escape(f'{location}{warning.field}: {warning.message}')}"
            )
