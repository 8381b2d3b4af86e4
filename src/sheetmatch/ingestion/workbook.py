"""Workbook (xlsx) reading and writing via openpyxl.

Only the first sheet is read. Values are stringified so the engine only
ever sees cell strings.
"""
from __future__ import annotations

import io
import logging
import zipfile
from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Union

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from .._types import TableModel
from ..engine import parse_grid
from ..errors import ParseEmptyInput, UnreadableInput

logger = logging.getLogger(__name__)

WorkbookSource = Union[str, Path, bytes]

SHEET_NAME = "Sheet1"


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == datetime.min.time():
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def read_workbook_grid(source: WorkbookSource) -> List[List[str]]:
    """Read the first sheet of a workbook as a grid of cell strings.

    Args:
        source: Path to an xlsx file, or its raw bytes.

    Raises:
        ParseEmptyInput: If the workbook has no sheet or the sheet no rows.
        UnreadableInput: If *source* is not an xlsx workbook.
    """
    handle = io.BytesIO(source) if isinstance(source, bytes) else str(source)
    label = "uploaded workbook" if isinstance(source, bytes) else str(source)
    try:
        wb = openpyxl.load_workbook(handle, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError) as exc:
        raise UnreadableInput(label, f"{type(exc).__name__}: {exc}") from exc
    try:
        if not wb.worksheets:
            raise ParseEmptyInput("Workbook has no sheets")
        ws = wb.worksheets[0]
        title = ws.title
        grid = [[_stringify(v) for v in row] for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()

    if not grid:
        raise ParseEmptyInput(f"Sheet '{title}' has no rows")
    logger.debug("Read %d raw rows from sheet %s", len(grid), title)
    return grid


def load_workbook_table(source: WorkbookSource, pad_headers: bool = True) -> TableModel:
    """Read a workbook and parse its first sheet into a ``TableModel``."""
    return parse_grid(read_workbook_grid(source), pad_headers=pad_headers)


def _append_text(ws, row_idx: int, cells) -> None:
    ws.append([c if c != "" else None for c in cells])
    # openpyxl turns "=..." into a formula; cells are always text here
    for col_idx, value in enumerate(cells, 1):
        if value.startswith("="):
            ws.cell(row=row_idx, column=col_idx).data_type = "s"


def _build_workbook(table: TableModel) -> "openpyxl.Workbook":
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = SHEET_NAME
    _append_text(ws, 1, table.headers)
    for row_idx, row in enumerate(table.rows, 2):
        _append_text(ws, row_idx, row)
    return wb


def table_to_workbook_bytes(table: TableModel) -> bytes:
    """Render a ``TableModel`` as xlsx bytes: headers in row 1, data below."""
    buf = io.BytesIO()
    _build_workbook(table).save(buf)
    return buf.getvalue()


def save_workbook(table: TableModel, file_path: Union[str, Path]) -> str:
    """Write a ``TableModel`` to an xlsx file and return its path."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    _build_workbook(table).save(str(path))
    return str(path)
