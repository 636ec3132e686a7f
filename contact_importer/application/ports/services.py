from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ...domain.entities.mapping import MappingResult
    from ...domain.entities.schema import TableSchema
    from ..models import ChunkResult, TransferSummary


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_analysis_start(
        self, file_name: str, row_count: int, column_count: int
    ) -> None: ...

    def log_mapping_result(self, result: MappingResult) -> None: ...

    def log_chunk_result(self, chunk: ChunkResult) -> None: ...

    def log_transfer_summary(self, summary: TransferSummary) -> None: ...

    def log_final_stats(self) -> None: ...


@runtime_checkable
class MappingHintPort(Protocol):
    pass

    def suggest(
        self,
        headers: Sequence[str],
        sample_rows: Sequence[Mapping[str, object]],
        target_schema: TableSchema,
    ) -> Mapping[str, object]: ...
