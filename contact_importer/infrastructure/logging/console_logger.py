from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort
from ...constants import ConfidenceLevels, LogLevels

if TYPE_CHECKING:
    from ...application.models import ChunkResult, TransferSummary
    from ...domain.entities.mapping import MappingResult

MAX_LISTED_ISSUES = 20


class LogLevel(IntEnum):
    NORMAL = LogLevels.NORMAL
    VERBOSE = LogLevels.VERBOSE
    DEBUG = LogLevels.DEBUG


@dataclass(slots=True)
class LogContext:
    file_name: str = ""
    table: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


def _empty_stats() -> dict[str, int]:
    return {
        "files_analyzed": 0,
        "chunks_processed": 0,
        "rows_processed": 0,
        "warnings": 0,
        "errors": 0,
    }


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = _empty_stats()

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_analysis_start(
        self, file_name: str, row_count: int, column_count: int
    ) -> None:
        self.set_context(file_name=file_name, operation="analyze")
        self._stats["files_analyzed"] += 1
        self.console.print(f"[bold]Analyzing {file_name}[/bold]")
        self.verbose(f"  {row_count:,} rows, {column_count} columns")

    @override
    def log_mapping_result(self, result: MappingResult) -> None:
        self.console.print(
            f"Mapped {len(result.mappings)} fields "
            f"(average confidence {result.confidence:.0%})"
        )
        for mapping in result.mappings:
            if mapping.confidence < ConfidenceLevels.MEDIUM:
                self.verbose(
                    f"  Low confidence: {mapping.source_field} → "
                    f"{mapping.target_field} ({mapping.confidence:.0%})"
                )
            else:
                self.debug(f"  {escape(mapping.describe())}")
        for suggestion in result.suggestions:
            self.verbose(f"  {suggestion}")
        for insight in result.insights:
            self.debug(f"  {insight}")
        if result.unmapped_columns:
            self.warning(
                "Columns not imported: " + ", ".join(result.unmapped_columns)
            )

    @override
    def log_chunk_result(self, chunk: ChunkResult) -> None:
        self._stats["chunks_processed"] += 1
        self._stats["rows_processed"] += chunk.batch_size
        end = chunk.batch_start + chunk.batch_size
        label = f"Rows {chunk.batch_start + 1:,}-{end:,}"
        if not chunk.success:
            self.error(f"{label}: {chunk.error}")
            return
        if chunk.would_insert_count:
            self.verbose(f"  {label}: {chunk.would_insert_count:,} rows would be inserted")
        else:
            self.verbose(f"  {label}: {chunk.inserted_count:,} rows inserted")
        if chunk.validation_errors:
            self.verbose(
                f"  {label}: {len(chunk.validation_errors)} field(s) failed validation"
            )
        for issue in chunk.validation_errors[:MAX_LISTED_ISSUES]:
            self.debug(f"    {issue}")

    @override
    def log_transfer_summary(self, summary: TransferSummary) -> None:
        self.console.print()
        if summary.dry_run:
            self.console.print("[bold]Dry run[/bold]: nothing was written")
        self.console.print(
            f"[bold]Processed {summary.total_processed:,} rows "
            f"in {summary.chunk_count} chunks[/bold]"
        )
        verb = "would be inserted" if summary.dry_run else "inserted"
        self.success(f"{summary.success_count:,} rows {verb}")
        if summary.skipped_count:
            self.verbose(f"{summary.skipped_count:,} empty rows skipped")
        if summary.validation_errors:
            self.warning(
                f"{len(summary.validation_errors):,} field values failed validation"
            )
        if summary.error_count:
            self.error(f"{summary.error_count:,} rows failed")

    @override
    def log_final_stats(self) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print()
            self.console.print("[dim]Processing Statistics:[/dim]")
            self.console.print(
                f"[dim]  Files analyzed: {self._stats['files_analyzed']}[/dim]"
            )
            self.console.print(
                f"[dim]  Chunks processed: {self._stats['chunks_processed']}[/dim]"
            )
            self.console.print(
                f"[dim]  Total rows: {self._stats['rows_processed']:,}[/dim]"
            )
            if self._stats["warnings"] > 0:
                self.console.print(
                    f"[dim yellow]  Warnings: {self._stats['warnings']}[/dim yellow]"
                )
            if self._stats["errors"] > 0:
                self.console.print(
                    f"[dim red]  Errors: {self._stats['errors']}[/dim red]"
                )

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def reset_stats(self) -> None:
        self._stats = _empty_stats()

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts = [p for p in (self._context.file_name, self._context.table) if p]
        return escape(f"[{':'.join(parts)}] ") if parts else ""
