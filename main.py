"""
vizboard — End-to-end composition pipeline.

Imports a small CSV, builds a dashboard with filtered charts, resolves it
and prints smoke-test summaries.

Usage:
    python main.py [path/to/file.csv|.xlsx]
"""

import logging
import sys
from pathlib import Path

from vizboard.dashboard import resolve_chart
from vizboard.errors import IngestError
from vizboard.models import RenderState
from vizboard.palettes import available_palettes, color_for
from vizboard.renderers import render_chart
from vizboard.session import SessionContext

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

SAMPLE_CSV = "region,sales\nEast,10\nWest,20\nEast,5"


def main(argv: list[str] | None = None) -> int:
    """Run the composition pipeline and print smoke-test outputs."""
    argv = sys.argv[1:] if argv is None else argv

    print("=" * 70)
    print("  VIZBOARD — Dataset & Dashboard Composition")
    print("  Pipeline Smoke Test")
    print("=" * 70)
    print()

    session = SessionContext()

    # ------------------------------------------------------------------
    # 1. Import data
    # ------------------------------------------------------------------
    print("[ 1 ] IMPORTING DATA")
    print("-" * 40)

    if argv:
        path = Path(argv[0])
        try:
            dataset = session.import_file(path.name, path.read_bytes())
        except (IngestError, OSError) as e:
            logger.error("Import failed: %s", e)
            return 1
    else:
        dataset = session.import_file("sample.csv", SAMPLE_CSV)

    print(f"\n{dataset.name}: {dataset.row_count} rows, columns {list(dataset.columns)}")
    print(dataset.to_frame().head(10).to_string(index=False))

    # ------------------------------------------------------------------
    # 2. Compose dashboard
    # ------------------------------------------------------------------
    print("\n")
    print("[ 2 ] COMPOSING DASHBOARD")
    print("-" * 40)

    dashboard = session.create_dashboard()
    x_col = dataset.columns[0]
    y_col = dataset.columns[1] if len(dataset.columns) > 1 else dataset.columns[0]
    session.set_columns(x=x_col, y=y_col)

    first_value = next(iter(dataset.distinct_values(x_col)), None)
    session.set_filter(x_col, first_value)
    bar = session.add_chart("bar")

    session.clear_filters()
    session.set_color_scheme("ocean")
    pie = session.add_chart("pie")

    print(f"\n{dashboard.name}: {len(dashboard.charts)} charts")
    for chart in dashboard.charts:
        print(f"  {chart.title:14s} | filters={dict(chart.filters)} | palette={chart.color_scheme}")

    # ------------------------------------------------------------------
    # 3. Resolve & render
    # ------------------------------------------------------------------
    print("\n")
    print("[ 3 ] RESOLVED CHARTS")
    print("-" * 40)

    for resolved in session.view():
        fig = render_chart(resolved)
        print(f"\n{resolved.chart.title}: state={resolved.state.value}, "
              f"{len(resolved.rows)} rows, {len(fig.data)} trace(s)")
        for row in resolved.rows:
            print(f"  {dict(row)}")

    print(f"\nPalettes: {available_palettes()}")

    # ------------------------------------------------------------------
    # 4. Acceptance checks
    # ------------------------------------------------------------------
    print("\n")
    print("[ 4 ] ACCEPTANCE CRITERIA CHECKS")
    print("-" * 40)

    resolved_bar = resolve_chart(bar, session.datasets)
    check1 = all(row.get(x_col) == first_value for row in resolved_bar.rows)
    print(f"\n  [{'PASS' if check1 else 'FAIL'}] Bar chart rows all have {x_col} = {first_value!r}")

    check2 = pie.filters == {} and bar.filters == {x_col: first_value}
    print(f"  [{'PASS' if check2 else 'FAIL'}] Chart filters are snapshots of the selection")

    check3 = color_for("default", 9) == color_for("default", 1)
    print(f"  [{'PASS' if check3 else 'FAIL'}] Palette colors cycle")

    session.remove_dataset(dataset.id)
    after = resolve_chart(bar, session.datasets)
    check4 = after.state is RenderState.UNRESOLVED and after.rows == []
    print(f"  [{'PASS' if check4 else 'FAIL'}] Removing the dataset leaves charts unresolved and empty")

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)
    return 0 if all([check1, check2, check3, check4]) else 1


if __name__ == "__main__":
    sys.exit(main())
