from __future__ import annotations

from typing import TYPE_CHECKING, override

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from ...application.models import ChunkResult, TransferSummary
    from ...domain.entities.mapping import MappingResult


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_analysis_start(
        self, file_name: str, row_count: int, column_count: int
    ) -> None:
        return

    @override
    def log_mapping_result(self, result: MappingResult) -> None:
        return

    @override
    def log_chunk_result(self, chunk: ChunkResult) -> None:
        return

    @override
    def log_transfer_summary(self, summary: TransferSummary) -> None:
        return

    @override
    def log_final_stats(self) -> None:
        return
