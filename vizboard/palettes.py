"""
Palette lookup and cyclic color assignment.
"""

import logging

from .config import COLOR_SCHEMES, DEFAULT_COLOR_SCHEME

logger = logging.getLogger(__name__)


def available_palettes() -> list[str]:
    """Palette ids in registration order, for UI dropdowns."""
    return list(COLOR_SCHEMES)


def register_palette(scheme_id: str, colors: list[str]) -> None:
    """Add or replace a palette. ``colors`` must be non-empty."""
    if not colors:
        raise ValueError(f"Palette '{scheme_id}' needs at least one color")
    COLOR_SCHEMES[scheme_id] = list(colors)
    logger.info("Registered palette '%s' with %d colors", scheme_id, len(colors))


def resolve_palette(scheme_id: str | None) -> list[str]:
    """Return the ordered colors for ``scheme_id``.

    Unknown or empty ids fall back to the default palette; this never fails.
    """
    if scheme_id and scheme_id in COLOR_SCHEMES:
        return list(COLOR_SCHEMES[scheme_id])
    if scheme_id:
        logger.warning("Unknown color scheme '%s', using '%s'", scheme_id, DEFAULT_COLOR_SCHEME)
    return list(COLOR_SCHEMES[DEFAULT_COLOR_SCHEME])


def color_for(scheme_id: str | None, index: int) -> str:
    """Color for the ``index``-th series/slice, cycling through the palette."""
    palette = resolve_palette(scheme_id)
    return palette[index % len(palette)]
