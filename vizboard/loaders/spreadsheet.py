"""
Loader for spreadsheet workbooks (.xlsx via openpyxl, legacy .xls via
pandas + xlrd).

Only the first sheet is read. Its first non-empty row is the header;
every later row becomes a record holding only its non-empty cells.
"""

import io
import logging
import zipfile
from typing import Any, Iterable

import openpyxl
import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException
from xlrd import XLRDError

from ..errors import EmptyFileError, ParseFailureError
from ..models import Record, Scalar
from .utils import normalise_cell, unique_column_names

logger = logging.getLogger(__name__)


def _is_blank(val: Any) -> bool:
    if val is None:
        return True
    if isinstance(val, str):
        return val.strip() == ""
    if isinstance(val, float):
        return pd.isna(val)
    return False


def _read_xlsx_grid(file_name: str, content: bytes) -> list[tuple]:
    try:
        wb = openpyxl.load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError) as exc:
        logger.exception("Failed to open workbook: %s", file_name)
        raise ParseFailureError(file_name, str(exc) or type(exc).__name__) from exc

    try:
        if not wb.worksheets:
            return []
        ws = wb.worksheets[0]
        if len(wb.worksheets) > 1:
            logger.info("%s has %d sheets, reading '%s' only", file_name, len(wb.worksheets), ws.title)
        return [tuple(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()


def _read_xls_grid(file_name: str, content: bytes) -> list[tuple]:
    try:
        df = pd.read_excel(io.BytesIO(content), sheet_name=0, header=None, dtype=object, engine="xlrd")
    except (XLRDError, ValueError, OSError) as exc:
        logger.exception("Failed to open legacy workbook: %s", file_name)
        raise ParseFailureError(file_name, str(exc) or type(exc).__name__) from exc
    return list(df.itertuples(index=False, name=None))


def records_from_grid(grid: Iterable[tuple]) -> tuple[list[str], list[Record]]:
    """Convert raw sheet rows into (columns, records).

    Columns are the union of record keys in first-seen order, so header
    cells with no data underneath do not become columns.
    """
    rows = [row for row in grid if not all(_is_blank(v) for v in row)]
    if not rows:
        return [], []

    width = max(len(row) for row in rows)
    header = list(rows[0]) + [None] * (width - len(rows[0]))
    names = unique_column_names(header)

    columns: list[str] = []
    records: list[Record] = []
    for row in rows[1:]:
        record: dict[str, Scalar] = {}
        for name, val in zip(names, row):
            if _is_blank(val):
                continue
            record[name] = normalise_cell(val)
            if name not in columns:
                columns.append(name)
        records.append(record)

    return columns, records


def parse_spreadsheet(file_name: str, content: bytes | str) -> tuple[list[str], list[Record]]:
    """Parse the first sheet of a workbook into (columns, records).

    Raises
    ------
    EmptyFileError : sheet has no data rows below the header.
    ParseFailureError : the bytes are not a readable workbook.
    """
    if isinstance(content, str):
        # Binary-string uploads: one char per byte
        try:
            content = content.encode("latin-1")
        except UnicodeEncodeError as exc:
            raise ParseFailureError(file_name, "content is not binary workbook data") from exc

    if file_name.lower().endswith(".xls"):
        grid = _read_xls_grid(file_name, content)
    else:
        grid = _read_xlsx_grid(file_name, content)

    columns, records = records_from_grid(grid)
    if not records:
        raise EmptyFileError(file_name)

    logger.info("Parsed %d rows x %d columns from %s", len(records), len(columns), file_name)
    return columns, records
