"""Batch transfer use case.

Rows are pulled from a row source in fixed-size chunks, validated and
transformed against the destination table's rules, converted into typed
destination records and inserted into storage. Chunks run strictly in
order: the existing-record list used for uniqueness checks is extended with
each chunk's rows before the next chunk is validated, and a value repeated
inside one chunk fails the ``unique`` rule the same way, so the outcome does
not depend on the batch size.

A chunk whose fetch or insert fails is recorded as failed and the run moves
on. ``total_processed`` always counts every source row, failed or not.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from ..domain.entities.records import record_type_for
from ..domain.services.value_checks import is_blank
from .exceptions import RowSourceError, StorageError
from .models import ChunkResult, TransferState

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..validators import DataValidator
    from .models import TransferRequest, TransferSummary
    from .ports.repositories import StoragePort
    from .ports.services import LoggerPort


@dataclass(slots=True)
class TransferDependencies:
    logger: LoggerPort
    storage: StoragePort
    validator: DataValidator


def _has_values(row: Mapping[str, object]) -> bool:
    return any(not is_blank(value) for value in row.values())


class BatchTransferUseCase:
    """Use case for loading mapped rows into a destination table.

    Example:
        >>> use_case = BatchTransferUseCase(dependencies)
        >>> summary = use_case.execute(
        ...     TransferRequest(
        ...         source=SequenceRowSource(rows),
        ...         target_table="пользователи",
        ...         mappings=result.mappings,
        ...         dry_run=True,
        ...     )
        ... )
        >>> print(summary.success_count, summary.error_count)
    """

    def __init__(self, dependencies: TransferDependencies) -> None:
        super().__init__()
        self.logger = dependencies.logger
        self._storage = dependencies.storage
        self._validator = dependencies.validator

    def execute(self, request: TransferRequest) -> TransferSummary:
        """Run the transfer.

        Raises:
            ValueError: If ``batch_size`` is not positive
            RowSourceError: If the row source cannot report its size
        """
        if request.batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {request.batch_size}")

        total = request.source.count()
        state = TransferState(existing_records=self._initial_existing(request))
        mode = "dry run" if request.dry_run else "import"
        self.logger.info(
            f"Starting {mode} of {total} rows into {request.target_table} "
            f"(batch size {request.batch_size})"
        )

        for offset in range(0, total, request.batch_size):
            expected = min(request.batch_size, total - offset)
            chunk = self._process_chunk(request, state, offset, expected)
            state.record(chunk)
            self.logger.log_chunk_result(chunk)

        summary = state.to_summary(dry_run=request.dry_run)
        self.logger.log_transfer_summary(summary)
        return summary

    def _initial_existing(self, request: TransferRequest) -> list[dict[str, object]]:
        if request.existing_records is not None:
            return [dict(record) for record in request.existing_records]
        try:
            return self._storage.query(request.target_table)
        except StorageError as exc:
            self.logger.warning(
                f"Could not load existing {request.target_table} records, "
                f"uniqueness is checked within this run only: {exc}"
            )
            return []

    def _process_chunk(
        self,
        request: TransferRequest,
        state: TransferState,
        offset: int,
        expected: int,
    ) -> ChunkResult:
        try:
            rows = request.source.fetch(offset, expected)
        except RowSourceError as exc:
            state.total_processed += expected
            state.error_count += expected
            return ChunkResult(
                batch_start=offset, batch_size=expected, success=False, error=str(exc)
            )
        state.total_processed += len(rows)

        validation = self._validator.validate_and_transform(
            rows,
            request.mappings,
            request.target_table,
            state.existing_records,
            reject_batch_duplicates=True,
        )
        chunk = ChunkResult(
            batch_start=offset,
            batch_size=len(rows),
            validation_errors=[
                replace(issue, row=offset + issue.row if issue.row is not None else None)
                for issue in validation.errors
            ],
            validation_warnings=[
                replace(w, row=offset + w.row if w.row is not None else None)
                for w in validation.warnings
            ],
        )

        payload = self._build_payload(request.target_table, validation.transformed_data)
        chunk.skipped_count = len(validation.transformed_data) - len(payload)

        if request.dry_run:
            chunk.would_insert_count = len(payload)
            state.success_count += len(payload)
            state.existing_records.extend(payload)
            return chunk
        if not payload:
            return chunk

        try:
            inserted = self._storage.insert(request.target_table, payload)
        except StorageError as exc:
            state.error_count += len(payload)
            chunk.success = False
            chunk.error = str(exc)
            return chunk

        chunk.inserted_count = len(inserted)
        state.success_count += len(inserted)
        state.existing_records.extend(inserted or payload)
        return chunk

    def _build_payload(
        self, table: str, rows: list[dict[str, object]]
    ) -> list[dict[str, object]]:
        record_type = record_type_for(table)
        payload: list[dict[str, object]] = []
        dropped: set[str] = set()
        for row in rows:
            if not _has_values(row):
                continue
            if record_type is None:
                payload.append({k: v for k, v in row.items() if not is_blank(v)})
                continue
            record = record_type.from_row(row)
            dropped.update(record.dropped_keys)
            payload.append(record.to_storage_row())
        if dropped:
            self.logger.warning(
                f"{table} has no column for: {', '.join(sorted(dropped))}; "
                "values dropped"
            )
        return payload
