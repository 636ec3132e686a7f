from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from .csv_reader import CSVReader, CSVReadOptions
from .exceptions import DataParseError

if TYPE_CHECKING:
    from pathlib import Path

EXCEL_SUFFIXES = (".xls", ".xlsx")


def is_excel_file(path: Path) -> bool:
    return path.suffix.lower() in EXCEL_SUFFIXES


class ExcelReader(CSVReader):
    """Reads the first sheet of a workbook.

    Header and cell clean-up is shared with ``CSVReader``; encoding and
    delimiter options do not apply to workbooks.
    """

    file_kind = "Excel"

    def _load(self, path: Path, options: CSVReadOptions) -> pd.DataFrame:
        try:
            return pd.read_excel(path, sheet_name=0, dtype=str, keep_default_na=False)
        except Exception as e:
            raise DataParseError(f"Failed to read Excel file {path}: {e}") from e
