"""
Equality filters over dataset rows.

A filter map {column: value} keeps the rows whose ``column`` equals
``value``. Entries whose value is None or "" are inert, so an empty
selection means "show all".
"""

from collections.abc import Iterable, Mapping

from .models import Record, Scalar


def is_inert(value: Scalar) -> bool:
    """True for filter values that exclude nothing."""
    return value is None or value == ""


def active_filters(filters: Mapping[str, Scalar] | None) -> dict[str, Scalar]:
    """Drop inert entries from a filter map."""
    if not filters:
        return {}
    return {col: val for col, val in filters.items() if not is_inert(val)}


def scalar_equal(cell: Scalar, expected: Scalar) -> bool:
    """Exact scalar equality without cross-type coercion.

    "10" never equals 10 and True never equals 1. Ints and floats compare
    by value.
    """
    if isinstance(cell, bool) or isinstance(expected, bool):
        return isinstance(cell, bool) and isinstance(expected, bool) and cell == expected
    if isinstance(cell, (int, float)) and isinstance(expected, (int, float)):
        return cell == expected
    return type(cell) is type(expected) and cell == expected


def apply_filters(rows: Iterable[Record], filters: Mapping[str, Scalar] | None) -> list[Record]:
    """Return the rows that satisfy every active filter, in original order.

    Parameters
    ----------
    rows : Dataset records.
    filters : Mapping column -> required value.

    Returns
    -------
    A new list holding the matching record objects (not copies).
    """
    criteria = active_filters(filters)
    if not criteria:
        return list(rows)

    return [
        row for row in rows
        if all(scalar_equal(row.get(col), val) for col, val in criteria.items())
    ]
