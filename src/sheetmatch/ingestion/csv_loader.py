"""CSV reading and writing via pandas."""

import csv
from pathlib import Path
from typing import List, Union

import pandas as pd

from .._types import TableModel
from ..engine import parse_grid
from ..errors import ParseEmptyInput, UnreadableInput


def _widest_row(path: Path) -> int:
    with open(path, newline="", encoding="utf-8") as f:
        return max((len(row) for row in csv.reader(f)), default=0)


def _trim_trailing(row: List[str]) -> List[str]:
    end = len(row)
    while end and row[end - 1] == "":
        end -= 1
    return row[:end]


def read_csv_grid(file_path: Union[str, Path]) -> List[List[str]]:
    """Read a CSV file as a grid of strings, header row included.

    Rows may have any number of fields. Trailing empty cells are
    dropped; padding is left to ``parse_grid``.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ParseEmptyInput: If the file has no rows.
        UnreadableInput: If the file is not UTF-8 CSV.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        width = _widest_row(path)
        if width == 0:
            raise ParseEmptyInput(f"No rows in {file_path}")
        df = pd.read_csv(
            path,
            header=None,
            names=range(width),
            dtype=str,
            keep_default_na=False,
            encoding="utf-8",
        )
    except (UnicodeDecodeError, csv.Error, pd.errors.ParserError) as exc:
        raise UnreadableInput(str(file_path), str(exc)) from exc
    except pd.errors.EmptyDataError:
        raise ParseEmptyInput(f"No rows in {file_path}") from None

    return [_trim_trailing(row) for row in df.fillna("").values.tolist()]


def load_csv_table(file_path: Union[str, Path], pad_headers: bool = True) -> TableModel:
    """Read a CSV file into a ``TableModel``."""
    return parse_grid(read_csv_grid(file_path), pad_headers=pad_headers)


def save_csv(table: TableModel, file_path: Union[str, Path]) -> str:
    """Write a ``TableModel`` to CSV and return its path."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    table.to_frame().to_csv(path, index=False)
    return str(path)
