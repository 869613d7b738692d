"""Test configuration for vizboard."""

import io
from pathlib import Path
import sys

import openpyxl
import pytest

# Ensure the local package is importable when the repo isn't installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


SALES_CSV = "region,sales\nEast,10\nWest,20\nEast,5"


@pytest.fixture
def sales_csv() -> str:
    return SALES_CSV


@pytest.fixture
def session():
    from vizboard.session import SessionContext

    return SessionContext()


@pytest.fixture
def datasets():
    from vizboard.registry import DatasetRegistry

    return DatasetRegistry()


@pytest.fixture
def dashboards():
    from vizboard.registry import DashboardRegistry

    return DashboardRegistry()


@pytest.fixture
def sales_dataset():
    from vizboard.loaders import ingest

    return ingest("sales.csv", SALES_CSV)


@pytest.fixture
def make_xlsx():
    """Build an .xlsx workbook in memory from lists of rows (one list per sheet)."""

    def _make(*sheets: list[list]) -> bytes:
        wb = openpyxl.Workbook()
        for idx, rows in enumerate(sheets):
            ws = wb.active if idx == 0 else wb.create_sheet(f"Sheet{idx + 1}")
            for r, row in enumerate(rows, start=1):
                for c, value in enumerate(row, start=1):
                    if value is not None:
                        ws.cell(row=r, column=c, value=value)
        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()

    return _make
