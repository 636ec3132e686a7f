"""Contact importer package.

This package maps spreadsheet exports of contact-like records onto a fixed
destination catalog, validates the transformed rows and loads them in
batches.

Features:
- Column type inference from parsed rows
- Heuristic field mapping (synonyms, value patterns, type compatibility)
- Value classification with diagnostic insights
- Validation and transformation pipeline
- Chunked batch transfer with dry-run support
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("contact-importer")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

# Core exports
from contact_importer.domain.entities.mapping import FieldMapping, MappingResult
from contact_importer.domain.entities.schema import ColumnInfo, TableSchema
from contact_importer.domain.services.mapping.engine import FieldMappingEngine
from contact_importer.validators import DataValidator

__all__ = [
    "__version__",
    # Schema
    "ColumnInfo",
    "TableSchema",
    # Mapping
    "FieldMapping",
    "MappingResult",
    "FieldMappingEngine",
    # Validation
    "DataValidator",
]
