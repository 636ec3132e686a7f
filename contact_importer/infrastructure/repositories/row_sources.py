"""Row sources feeding the batch transfer."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, override

from ...application.exceptions import RowSourceError, StorageError
from ...application.ports.repositories import RowSourcePort

if TYPE_CHECKING:
    from ...application.ports.repositories import StoragePort


class SequenceRowSource(RowSourcePort):
    """Rows already held in memory, e.g. a parsed upload."""

    def __init__(self, rows: Sequence[Mapping[str, object]]) -> None:
        super().__init__()
        self._rows = list(rows)

    @override
    def count(self) -> int:
        return len(self._rows)

    @override
    def fetch(self, offset: int, limit: int) -> list[dict[str, object]]:
        return [dict(row) for row in self._rows[offset : offset + limit]]


class TableRowSource(RowSourcePort):
    """Rows paged out of a storage table, narrowed by equality filters.

    The table is read once on first use; later pages are served from that
    snapshot so that rows inserted during the transfer do not shift offsets.
    """

    def __init__(
        self,
        storage: StoragePort,
        table: str,
        filters: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__()
        self._storage = storage
        self._table = table
        self._filters = dict(filters or {})
        self._snapshot: list[dict[str, object]] | None = None

    @override
    def count(self) -> int:
        return len(self._load())

    @override
    def fetch(self, offset: int, limit: int) -> list[dict[str, object]]:
        return [dict(row) for row in self._load()[offset : offset + limit]]

    def _load(self) -> list[dict[str, object]]:
        if self._snapshot is None:
            try:
                self._snapshot = self._storage.query(self._table, self._filters)
            except StorageError as exc:
                raise RowSourceError(
                    f"Cannot read source table {self._table}: {exc}"
                ) from exc
        return self._snapshot
