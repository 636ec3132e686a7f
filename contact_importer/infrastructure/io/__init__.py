"""File input adapters."""

from .csv_reader import CSVReader, CSVReadOptions
from .excel_reader import EXCEL_SUFFIXES, ExcelReader, is_excel_file
from .exceptions import (
    DataParseError,
    DataSourceError,
    DataSourceNotFoundError,
    ImporterInfrastructureError,
)

__all__ = [
    "EXCEL_SUFFIXES",
    "CSVReadOptions",
    "CSVReader",
    "DataParseError",
    "DataSourceError",
    "DataSourceNotFoundError",
    "ExcelReader",
    "ImporterInfrastructureError",
    "is_excel_file",
]
