"""Domain-level exceptions.

Only schema acquisition failures are raised out of the mapping engine;
everything else is reported through structured result objects.
"""


class ContactImporterError(Exception):
    """Base exception for contact importer domain errors."""


class SchemaError(ContactImporterError):
    """Raised when a source or target schema is missing or unusable."""

    def __init__(self, message: str, *, table_name: str | None = None) -> None:
        self.table_name = table_name
        super().__init__(message)


class UnknownTableError(SchemaError):
    """Raised when a destination table is not part of the target catalog."""

    def __init__(self, table_name: str, known_tables: list[str] | None = None):
        self.known_tables = known_tables or []
        message = f"Unknown target table: {table_name}"
        if self.known_tables:
            message += f" (known: {', '.join(self.known_tables)})"
        super().__init__(message, table_name=table_name)
