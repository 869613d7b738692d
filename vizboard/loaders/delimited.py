"""
Loader for delimited text (CSV).

The first line is the header. Cells are read as raw strings and typed one
by one with infer_scalar(), so a column may hold mixed scalar types.
"""

import io
import logging
import warnings

import pandas as pd

from ..errors import EmptyFileError, ParseFailureError
from ..models import Record
from .utils import decode_text, infer_scalar

logger = logging.getLogger(__name__)


def parse_delimited(file_name: str, content: str | bytes) -> tuple[list[str], list[Record]]:
    """Parse CSV content into (columns, records).

    Assumptions
    -----------
    - Row 1 is the header. Duplicate header names are made unique by
      pandas (``a``, ``a.1``).
    - Blank lines and rows whose cells are all empty are skipped.
    - Short rows yield None for the missing trailing cells. Rows longer
      than the header are malformed.

    Raises
    ------
    EmptyFileError : no header or no data rows.
    ParseFailureError : malformed content (pandas ParserError, or a row
        with more fields than the header).
    """
    text = decode_text(content, file_name)

    try:
        with warnings.catch_warnings():
            # pandas only warns when it drops surplus fields
            warnings.simplefilter("error", pd.errors.ParserWarning)
            df = pd.read_csv(
                io.StringIO(text),
                dtype=str,
                keep_default_na=False,
                na_filter=False,
                skip_blank_lines=True,
                index_col=False,
            )
    except pd.errors.EmptyDataError as exc:
        raise EmptyFileError(file_name) from exc
    except pd.errors.ParserError as exc:
        logger.exception("Failed to parse delimited file: %s", file_name)
        raise ParseFailureError(file_name, str(exc).strip()) from exc
    except pd.errors.ParserWarning as exc:
        logger.error("Row wider than header in %s: %s", file_name, exc)
        raise ParseFailureError(file_name, "a row has more fields than the header") from exc

    columns = [str(c) for c in df.columns]

    records: list[Record] = []
    for raw_row in df.itertuples(index=False, name=None):
        cells = [cell if isinstance(cell, str) else "" for cell in raw_row]
        if all(cell.strip() == "" for cell in cells):
            continue
        records.append({col: infer_scalar(cell) for col, cell in zip(columns, cells)})

    if not records:
        raise EmptyFileError(file_name)

    logger.info("Parsed %d rows x %d columns from %s", len(records), len(columns), file_name)
    return columns, records
