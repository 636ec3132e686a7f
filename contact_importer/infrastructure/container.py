from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console

from ..application.analysis_use_case import AnalysisDependencies, AnalyzeFileUseCase
from ..application.transfer_use_case import BatchTransferUseCase, TransferDependencies
from ..config import ConfigLoader, ImporterConfig
from ..domain.services.inference import ColumnTypeInferencer
from ..domain.services.mapping import (
    FieldMappingEngine,
    HintResolver,
    PatternLibrary,
    ValueClassifier,
    default_pattern_library,
)
from ..validators import DataValidator
from .io.csv_reader import CSVReader
from .io.excel_reader import ExcelReader
from .logging.console_logger import ConsoleLogger
from .logging.null_logger import NullLogger
from .repositories.jsonl_storage import JsonLinesStorage
from .repositories.memory_storage import InMemoryStorage
from .repositories.target_catalog_repository import TargetCatalogRepository
from .services.json_hint_source import JsonHintSource

if TYPE_CHECKING:
    from ..application.ports.repositories import StoragePort, TargetCatalogPort
    from ..application.ports.services import LoggerPort, MappingHintPort


class DependencyContainer:
    pass

    def __init__(
        self,
        verbose: int = 0,
        console: Console | None = None,
        use_null_logger: bool = False,
        config: ImporterConfig | None = None,
        output_dir: Path | None = None,
        hint_file: Path | None = None,
    ) -> None:
        super().__init__()
        self.verbose = verbose
        self.console = console or Console()
        self.use_null_logger = use_null_logger
        self.config = config or ImporterConfig()
        self.output_dir = output_dir
        self.hint_file = hint_file
        self._logger_instance: LoggerPort | None = None
        self._csv_reader_instance: CSVReader | None = None
        self._excel_reader_instance: ExcelReader | None = None
        self._catalog_instance: TargetCatalogPort | None = None
        self._storage_instance: StoragePort | None = None
        self._pattern_library_instance: PatternLibrary | None = None
        self._engine_instance: FieldMappingEngine | None = None
        self._validator_instance: DataValidator | None = None

    def create_logger(self) -> LoggerPort:
        if self._logger_instance is None:
            if self.use_null_logger:
                self._logger_instance = NullLogger()
            else:
                self._logger_instance = ConsoleLogger(
                    console=self.console, verbosity=self.verbose
                )
        return self._logger_instance

    def create_csv_reader(self) -> CSVReader:
        if self._csv_reader_instance is None:
            self._csv_reader_instance = CSVReader()
        return self._csv_reader_instance

    def create_excel_reader(self) -> ExcelReader:
        if self._excel_reader_instance is None:
            self._excel_reader_instance = ExcelReader()
        return self._excel_reader_instance

    def create_catalog(self) -> TargetCatalogPort:
        if self._catalog_instance is None:
            self._catalog_instance = TargetCatalogRepository()
        return self._catalog_instance

    def create_storage(self) -> StoragePort:
        if self._storage_instance is None:
            if self.output_dir is not None:
                self._storage_instance = JsonLinesStorage(self.output_dir)
            else:
                self._storage_instance = InMemoryStorage()
        return self._storage_instance

    def create_pattern_library(self) -> PatternLibrary:
        if self._pattern_library_instance is None:
            self._pattern_library_instance = default_pattern_library()
        return self._pattern_library_instance

    def create_engine(self) -> FieldMappingEngine:
        if self._engine_instance is None:
            library = self.create_pattern_library()
            classifier = ValueClassifier(
                library, threshold=self.config.classifier_threshold
            )
            self._engine_instance = FieldMappingEngine(
                library,
                classifier,
                min_confidence=self.config.min_confidence,
                overflow_confidence=self.config.overflow_confidence,
                overflow_min_length=self.config.overflow_min_length,
                exclusive_sources=self.config.exclusive_sources,
            )
        return self._engine_instance

    def create_inferencer(self) -> ColumnTypeInferencer:
        return ColumnTypeInferencer(
            inference_rows=self.config.inference_rows,
            sample_size=self.config.sample_size,
        )

    def create_hint_source(self) -> MappingHintPort | None:
        if self.hint_file is None:
            return None
        return JsonHintSource(self.hint_file)

    def create_validator(self) -> DataValidator:
        if self._validator_instance is None:
            self._validator_instance = DataValidator.with_common_rules(
                overflow_max_length=self.config.overflow_max_length
            )
        return self._validator_instance

    def create_analysis_use_case(self) -> AnalyzeFileUseCase:
        dependencies = AnalysisDependencies(
            logger=self.create_logger(),
            catalog=self.create_catalog(),
            engine=self.create_engine(),
            inferencer=self.create_inferencer(),
            hint_resolver=HintResolver(self.create_pattern_library()),
            hint_source=self.create_hint_source(),
        )
        return AnalyzeFileUseCase(dependencies)

    def create_transfer_use_case(self) -> BatchTransferUseCase:
        dependencies = TransferDependencies(
            logger=self.create_logger(),
            storage=self.create_storage(),
            validator=self.create_validator(),
        )
        return BatchTransferUseCase(dependencies)

    def reset_singletons(self) -> None:
        self._logger_instance = None
        self._csv_reader_instance = None
        self._catalog_instance = None
        self._storage_instance = None
        self._pattern_library_instance = None
        self._engine_instance = None
        self._validator_instance = None

    def override_logger(self, logger: LoggerPort) -> None:
        self._logger_instance = logger

    def override_storage(self, storage: StoragePort) -> None:
        self._storage_instance = storage


def create_default_container(verbose: int = 0) -> DependencyContainer:
    return DependencyContainer(verbose=verbose, config=ConfigLoader.load())
