from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..constants import Defaults

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ..domain.entities.mapping import FieldMapping, MappingResult
    from ..domain.entities.schema import TableSchema
    from ..domain.entities.validation import ValidationIssue, ValidationWarning
    from .ports.repositories import RowSourcePort


def _empty_str_list() -> list[str]:
    return []


def _empty_issues() -> list[ValidationIssue]:
    return []


def _empty_warnings() -> list[ValidationWarning]:
    return []


def _empty_chunks() -> list[ChunkResult]:
    return []


def _empty_records() -> list[dict[str, object]]:
    return []


@dataclass(slots=True)
class AnalyzeRequest:
    file_name: str
    rows: Sequence[Mapping[str, object]]
    target_table: str = Defaults.DEFAULT_TABLE
    hints: Mapping[str, object] | None = None
    preview_rows: int = 3


@dataclass(slots=True)
class AnalyzeResponse:
    file_name: str
    source_schema: TableSchema
    target_schema: TableSchema
    mapping_result: MappingResult
    row_count: int = 0
    sample_rows: list[dict[str, object]] = field(default_factory=_empty_records)
    hint_warnings: list[str] = field(default_factory=_empty_str_list)


@dataclass(slots=True)
class TransferRequest:
    source: RowSourcePort
    target_table: str
    mappings: Sequence[FieldMapping]
    batch_size: int = Defaults.BATCH_SIZE
    dry_run: bool = False
    existing_records: Sequence[Mapping[str, object]] | None = None


@dataclass(slots=True)
class ChunkResult:
    """Outcome of one chunk of the transfer.

    ``batch_size`` is the number of source rows the chunk covered, which is
    the configured size except for the last chunk.
    """

    batch_start: int
    batch_size: int
    success: bool = True
    inserted_count: int = 0
    would_insert_count: int = 0
    skipped_count: int = 0
    error: str | None = None
    validation_errors: list[ValidationIssue] = field(default_factory=_empty_issues)
    validation_warnings: list[ValidationWarning] = field(
        default_factory=_empty_warnings
    )


@dataclass(slots=True)
class TransferSummary:
    total_processed: int = 0
    success_count: int = 0
    error_count: int = 0
    skipped_count: int = 0
    validation_errors: list[ValidationIssue] = field(default_factory=_empty_issues)
    validation_warnings: list[ValidationWarning] = field(
        default_factory=_empty_warnings
    )
    chunks: list[ChunkResult] = field(default_factory=_empty_chunks)
    dry_run: bool = False

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0 or bool(self.validation_errors)

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)

    @property
    def failed_chunks(self) -> list[ChunkResult]:
        return [chunk for chunk in self.chunks if not chunk.success]


@dataclass(slots=True)
class TransferState:
    """Accumulator owned by a single transfer run.

    ``existing_records`` grows after every chunk so that uniqueness checks of
    the next chunk see what the previous ones stored.
    """

    existing_records: list[dict[str, object]] = field(default_factory=_empty_records)
    total_processed: int = 0
    success_count: int = 0
    error_count: int = 0
    skipped_count: int = 0
    chunks: list[ChunkResult] = field(default_factory=_empty_chunks)

    def record(self, chunk: ChunkResult) -> None:
        self.chunks.append(chunk)
        self.skipped_count += chunk.skipped_count

    def to_summary(self, *, dry_run: bool) -> TransferSummary:
        return TransferSummary(
            total_processed=self.total_processed,
            success_count=self.success_count,
            error_count=self.error_count,
            skipped_count=self.skipped_count,
            validation_errors=[e for c in self.chunks for e in c.validation_errors],
            validation_warnings=[
                w for c in self.chunks for w in c.validation_warnings
            ],
            chunks=list(self.chunks),
            dry_run=dry_run,
        )
