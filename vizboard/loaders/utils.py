"""
Shared utilities for data ingestion: cell type inference, text decoding,
header de-duplication.
"""

import logging
import re
from datetime import date, datetime, time
from typing import Any

import pandas as pd

from ..config import EMPTY_HEADER, FALSE_STRINGS, TEXT_ENCODINGS, TRUE_STRINGS
from ..models import Scalar

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"^\s*-?\d+\s*$")
_FLOAT_RE = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")


def infer_scalar(text: str | None) -> Scalar:
    """Infer the scalar type of a single delimited-text cell.

    Empty -> None, recognised booleans -> bool, integer literals -> int,
    decimal/exponent literals -> float. Anything else is returned unchanged.
    """
    if text is None or text == "":
        return None
    if text in TRUE_STRINGS:
        return True
    if text in FALSE_STRINGS:
        return False
    if _INT_RE.match(text):
        return int(text)
    if _FLOAT_RE.match(text):
        return float(text)
    return text


def normalise_cell(val: Any) -> Scalar:
    """Coerce a spreadsheet cell value to a Scalar.

    Dates and times become ISO-8601 strings; NaN becomes None.
    """
    if val is None:
        return None
    if isinstance(val, bool):
        return val
    if isinstance(val, (int, float)):
        return None if pd.isna(val) else val
    if isinstance(val, (datetime, date, time)):
        return None if pd.isna(val) else val.isoformat()
    return str(val)


def decode_text(content: str | bytes, file_name: str = "") -> str:
    """Return delimited text as ``str``, trying TEXT_ENCODINGS in order."""
    if isinstance(content, str):
        return content
    for encoding in TEXT_ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            logger.debug("Could not decode %s as %s", file_name, encoding)
    # latin-1 accepts any byte sequence, so this is unreachable in practice
    return content.decode(TEXT_ENCODINGS[-1], errors="replace")


def unique_column_names(raw_headers: list[Any]) -> list[str]:
    """Turn a spreadsheet header row into unique column names.

    Blank cells become ``__EMPTY``, ``__EMPTY_1``, ...; repeated names get
    ``_1``, ``_2`` suffixes in order of appearance.
    """
    names: list[str] = []
    counts: dict[str, int] = {}
    for raw in raw_headers:
        base = EMPTY_HEADER if raw is None or str(raw).strip() == "" else str(raw).strip()
        name = base
        while name in counts:
            counts[base] = counts.get(base, 0) + 1
            name = f"{base}_{counts[base]}"
        counts.setdefault(name, 0)
        names.append(name)
    return names
