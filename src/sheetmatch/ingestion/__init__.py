"""sheetmatch ingestion -- workbook and CSV readers/writers for TableModel."""

from pathlib import Path
from typing import Union

from .._types import TableModel
from .csv_loader import load_csv_table, read_csv_grid, save_csv
from .workbook import (
    load_workbook_table,
    read_workbook_grid,
    save_workbook,
    table_to_workbook_bytes,
)

__all__ = [
    "load_table",
    "save_table",
    "load_csv_table",
    "read_csv_grid",
    "save_csv",
    "load_workbook_table",
    "read_workbook_grid",
    "save_workbook",
    "table_to_workbook_bytes",
]

_CSV_EXTENSIONS = {".csv", ".txt"}


def load_table(file_path: Union[str, Path], pad_headers: bool = True) -> TableModel:
    """Load a CSV or xlsx file into a ``TableModel`` based on its extension."""
    if Path(file_path).suffix.lower() in _CSV_EXTENSIONS:
        return load_csv_table(file_path, pad_headers=pad_headers)
    return load_workbook_table(file_path, pad_headers=pad_headers)


def save_table(table: TableModel, file_path: Union[str, Path]) -> str:
    """Save a ``TableModel`` as CSV or xlsx based on the extension."""
    if Path(file_path).suffix.lower() in _CSV_EXTENSIONS:
        return save_csv(table, file_path)
    return save_workbook(table, file_path)
