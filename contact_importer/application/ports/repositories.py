from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ...domain.entities.schema import TableSchema


@runtime_checkable
class StoragePort(Protocol):
    pass

    def insert(
        self, table: str, rows: Sequence[Mapping[str, object]]
    ) -> list[dict[str, object]]: ...

    def query(
        self, table: str, filters: Mapping[str, object] | None = None
    ) -> list[dict[str, object]]: ...


@runtime_checkable
class RowSourcePort(Protocol):
    pass

    def count(self) -> int: ...

    def fetch(self, offset: int, limit: int) -> list[dict[str, object]]: ...


@runtime_checkable
class TargetCatalogPort(Protocol):
    pass

    def list_tables(self) -> list[str]: ...

    def get_schema(self, table: str) -> TableSchema: ...
