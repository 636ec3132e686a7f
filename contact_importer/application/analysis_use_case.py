"""File analysis use case.

Builds the uploaded file's schema, loads the destination schema from the
catalog and runs the mapping engine. When external hints are available they
are cross-checked against the file headers and fill in only the target
fields the engine left unmatched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.entities.mapping import merge_mappings
from .models import AnalyzeResponse

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..domain.entities.mapping import MappingResult
    from ..domain.entities.schema import TableSchema
    from ..domain.services.inference import ColumnTypeInferencer
    from ..domain.services.mapping import FieldMappingEngine, HintResolver
    from .models import AnalyzeRequest
    from .ports.repositories import TargetCatalogPort
    from .ports.services import LoggerPort, MappingHintPort


@dataclass(slots=True)
class AnalysisDependencies:
    logger: LoggerPort
    catalog: TargetCatalogPort
    engine: FieldMappingEngine
    inferencer: ColumnTypeInferencer
    hint_resolver: HintResolver
    hint_source: MappingHintPort | None = None


class AnalyzeFileUseCase:
    """Use case for mapping an uploaded file onto a destination table.

    Example:
        >>> use_case = AnalyzeFileUseCase(dependencies)
        >>> response = use_case.execute(
        ...     AnalyzeRequest(file_name="contacts.csv", rows=rows, target_table="контакты")
        ... )
        >>> for mapping in response.mapping_result.mappings:
        ...     print(mapping.describe())
    """

    def __init__(self, dependencies: AnalysisDependencies) -> None:
        super().__init__()
        self.logger = dependencies.logger
        self._catalog = dependencies.catalog
        self._engine = dependencies.engine
        self._inferencer = dependencies.inferencer
        self._hint_resolver = dependencies.hint_resolver
        self._hint_source = dependencies.hint_source

    def execute(self, request: AnalyzeRequest) -> AnalyzeResponse:
        """Analyze the request's rows.

        Raises:
            SchemaError: If the file has no rows or the table is unknown
        """
        rows = list(request.rows)
        source_schema = self._inferencer.build_source_schema(rows)
        self.logger.log_analysis_start(
            request.file_name, len(rows), len(source_schema.columns)
        )
        target_schema = self._catalog.get_schema(request.target_table)
        self.logger.verbose(
            f"Mapping {len(source_schema.columns)} columns onto "
            f"{target_schema.table_name} ({len(target_schema.columns)} fields)"
        )

        result = self._engine.analyze_and_map(source_schema, target_schema)
        sample_rows = [dict(row) for row in rows[: request.preview_rows]]

        hint_warnings: list[str] = []
        hints = self._load_hints(request, source_schema, target_schema, sample_rows)
        if hints:
            result, hint_warnings = self._apply_hints(
                result, hints, source_schema, target_schema
            )

        self.logger.log_mapping_result(result)
        return AnalyzeResponse(
            file_name=request.file_name,
            source_schema=source_schema,
            target_schema=target_schema,
            mapping_result=result,
            row_count=len(rows),
            sample_rows=sample_rows,
            hint_warnings=hint_warnings,
        )

    def _load_hints(
        self,
        request: AnalyzeRequest,
        source_schema: TableSchema,
        target_schema: TableSchema,
        sample_rows: list[dict[str, object]],
    ) -> Mapping[str, object] | None:
        if request.hints is not None:
            return request.hints
        if self._hint_source is None:
            return None
        return self._hint_source.suggest(
            source_schema.column_names, sample_rows, target_schema
        )

    def _apply_hints(
        self,
        result: MappingResult,
        hints: Mapping[str, object],
        source_schema: TableSchema,
        target_schema: TableSchema,
    ) -> tuple[MappingResult, list[str]]:
        resolution = self._hint_resolver.resolve(
            hints, source_schema.column_names, target_schema
        )
        for warning in resolution.warnings:
            self.logger.warning(warning)
        merged = merge_mappings(result, resolution.to_field_mappings())
        added = len(merged.mappings) - len(result.mappings)
        self.logger.verbose(
            f"Hints: {len(resolution.accepted)} accepted, {added} added to the mapping"
        )
        return merged, list(resolution.warnings)
