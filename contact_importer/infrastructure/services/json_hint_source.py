"""Mapping hints read from a JSON file.

The file holds a ``{target_field: source_header}`` object, either at the top
level or under a ``"mapping"`` key, the shape an LLM mapper typically
returns. Keys may use English names; the hint resolver folds them.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import json
from pathlib import Path
from typing import TYPE_CHECKING, override

from ...application.ports.services import MappingHintPort
from ..io.exceptions import DataParseError, DataSourceNotFoundError

if TYPE_CHECKING:
    from ...domain.entities.schema import TableSchema


class HintFileError(DataParseError):
    pass


def load_hint_file(path: str | Path) -> dict[str, object]:
    file_path = Path(path)
    if not file_path.exists():
        raise DataSourceNotFoundError(f"Hint file not found: {file_path}")
    try:
        with file_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise HintFileError(f"Invalid JSON in {file_path}: {exc}") from exc
    except OSError as exc:
        raise HintFileError(f"Failed to read hint file {file_path}: {exc}") from exc
    if isinstance(data, dict) and isinstance(data.get("mapping"), dict):
        data = data["mapping"]
    if not isinstance(data, dict):
        raise HintFileError(
            f"Hint file {file_path} must contain a JSON object of field: header pairs"
        )
    return {str(key): value for key, value in data.items()}


class JsonHintSource(MappingHintPort):
    pass

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        self._hints: dict[str, object] | None = None

    @override
    def suggest(
        self,
        headers: Sequence[str],
        sample_rows: Sequence[Mapping[str, object]],
        target_schema: TableSchema,
    ) -> Mapping[str, object]:
        _ = (headers, sample_rows, target_schema)
        if self._hints is None:
            self._hints = load_hint_file(self.path)
        return dict(self._hints)
