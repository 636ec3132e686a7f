"""Storage, row source and catalog adapters."""

from .jsonl_storage import JsonLinesStorage
from .memory_storage import InMemoryStorage
from .row_sources import SequenceRowSource, TableRowSource
from .target_catalog_repository import TargetCatalogRepository

__all__ = [
    "InMemoryStorage",
    "JsonLinesStorage",
    "SequenceRowSource",
    "TableRowSource",
    "TargetCatalogRepository",
]
