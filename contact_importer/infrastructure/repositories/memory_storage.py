from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import override

from ...application.ports.repositories import StoragePort


def matches_filters(
    row: Mapping[str, object], filters: Mapping[str, object] | None
) -> bool:
    if not filters:
        return True
    return all(row.get(key) == value for key, value in filters.items())


class InMemoryStorage(StoragePort):
    """Storage kept in process memory, keyed by table name."""

    def __init__(
        self, tables: Mapping[str, Sequence[Mapping[str, object]]] | None = None
    ) -> None:
        super().__init__()
        self._tables: dict[str, list[dict[str, object]]] = {
            table: [dict(row) for row in rows] for table, rows in (tables or {}).items()
        }

    @override
    def insert(
        self, table: str, rows: Sequence[Mapping[str, object]]
    ) -> list[dict[str, object]]:
        stored = [dict(row) for row in rows]
        self._tables.setdefault(table, []).extend(stored)
        return [dict(row) for row in stored]

    @override
    def query(
        self, table: str, filters: Mapping[str, object] | None = None
    ) -> list[dict[str, object]]:
        return [
            dict(row)
            for row in self._tables.get(table, [])
            if matches_filters(row, filters)
        ]

    def rows(self, table: str) -> list[dict[str, object]]:
        return self.query(table)
