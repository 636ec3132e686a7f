"""JSON-lines file storage: one ``<table>.jsonl`` file per table."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import json
from pathlib import Path
from typing import override

from ...application.exceptions import StorageError
from ...application.ports.repositories import StoragePort
from .memory_storage import matches_filters


class JsonLinesStorage(StoragePort):
    pass

    def __init__(self, directory: str | Path) -> None:
        super().__init__()
        self.directory = Path(directory)

    def path_for(self, table: str) -> Path:
        return self.directory / f"{table}.jsonl"

    @override
    def insert(
        self, table: str, rows: Sequence[Mapping[str, object]]
    ) -> list[dict[str, object]]:
        stored = [dict(row) for row in rows]
        path = self.path_for(table)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as handle:
                for row in stored:
                    handle.write(json.dumps(row, ensure_ascii=False, default=str))
                    handle.write("\n")
        except (OSError, TypeError, ValueError) as exc:
            raise StorageError(f"Failed to write {path}: {exc}", table=table) from exc
        return stored

    @override
    def query(
        self, table: str, filters: Mapping[str, object] | None = None
    ) -> list[dict[str, object]]:
        path = self.path_for(table)
        if not path.exists():
            return []
        rows: list[dict[str, object]] = []
        try:
            with path.open("r", encoding="utf-8") as handle:
                for line_number, line in enumerate(handle, start=1):
                    if not line.strip():
                        continue
                    try:
                        row = json.loads(line)
                    except json.JSONDecodeError as exc:
                        raise StorageError(
                            f"Invalid JSON in {path} at line {line_number}: {exc}",
                            table=table,
                        ) from exc
                    if matches_filters(row, filters):
                        rows.append(row)
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}", table=table) from exc
        return rows
