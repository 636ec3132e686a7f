from __future__ import annotations

from dataclasses import dataclass
import re
from typing import TYPE_CHECKING

import pandas as pd

from ...constants import MissingValues
from .exceptions import DataParseError, DataSourceNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

BOM = "\ufeff"
_WHITESPACE_RE = r"\s+"
# pandas names columns with an empty header cell "Unnamed: <position>"
_UNNAMED_HEADER_RE = re.compile(r"^Unnamed: \d+(?:_level_\d+)?$")


@dataclass(slots=True)
class CSVReadOptions:
    encoding: str = "utf-8"
    delimiter: str = ","
    normalize_headers: bool = True
    collapse_whitespace: bool = True
    drop_blank_rows: bool = True


class CSVReader:
    pass

    file_kind = "CSV"

    def read(self, path: Path, options: CSVReadOptions | None = None) -> pd.DataFrame:
        """Read an export into a frame of strings with blanks as missing.

        Columns whose header is blank are dropped.

        Raises:
            DataSourceNotFoundError: If ``path`` is missing or not a file
            DataParseError: If the file cannot be parsed
        """
        if options is None:
            options = CSVReadOptions()
        if not path.exists():
            raise DataSourceNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise DataSourceNotFoundError(f"Not a file: {path}")
        df = self._load(path, options)
        if df.shape[1] == 0:
            raise DataParseError(f"{self.file_kind} file has no columns: {path}")
        if options.normalize_headers:
            df = self._normalize_headers(df)
            if df.shape[1] == 0:
                raise DataParseError(
                    f"{self.file_kind} file has no named columns: {path}"
                )
        df = self._normalize_cells(df, collapse_whitespace=options.collapse_whitespace)
        if options.drop_blank_rows:
            df = df.dropna(how="all").reset_index(drop=True)
        return df

    def read_rows(
        self, path: Path, options: CSVReadOptions | None = None
    ) -> list[dict[str, object]]:
        """Read an export as ordered rows; missing cells are ``None``."""
        df = self.read(path, options)
        records = df.astype(object).where(df.notna(), None).to_dict(orient="records")
        return [{str(key): value for key, value in row.items()} for row in records]

    def _load(self, path: Path, options: CSVReadOptions) -> pd.DataFrame:
        try:
            return pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                sep=options.delimiter,
                encoding=options.encoding,
            )
        except FileNotFoundError as e:
            raise DataSourceNotFoundError(f"File not found: {path}") from e
        except pd.errors.ParserError as e:
            raise DataParseError(f"Failed to parse CSV {path}: {e}") from e
        except pd.errors.EmptyDataError as e:
            raise DataParseError(f"CSV file is empty: {path}") from e
        except UnicodeDecodeError as e:
            raise DataParseError(
                f"Encoding error reading {path}. Try a different encoding: {e}"
            ) from e

    def _normalize_headers(self, df: pd.DataFrame) -> pd.DataFrame:
        df.columns = [str(col).replace(BOM, "").strip() for col in df.columns]
        keep = [
            bool(name) and not _UNNAMED_HEADER_RE.match(name) for name in df.columns
        ]
        return df.loc[:, keep]

    def _normalize_cells(
        self, df: pd.DataFrame, *, collapse_whitespace: bool
    ) -> pd.DataFrame:
        df = df.copy()
        markers = {m.upper() for m in MissingValues.STRING_MARKERS}
        for column in df.columns:
            series = df[column].astype("string").str.strip()
            if collapse_whitespace:
                series = series.str.replace(_WHITESPACE_RE, " ", regex=True)
            missing = series.isna() | series.eq("") | series.str.upper().isin(markers)
            df[column] = series.astype(object).mask(missing.fillna(True), None)
        return df
