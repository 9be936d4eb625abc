"""Eighth-block fill glyphs used to draw bars."""

from __future__ import annotations

FULL = "█"
SEVEN_EIGHTHS = "▇"
THREE_QUARTERS = "▆"
FIVE_EIGHTHS = "▅"
HALF = "▄"
THREE_EIGHTHS = "▃"
ONE_QUARTER = "▂"
ONE_EIGHTH = "▁"
EMPTY = ""

# Index n holds the glyph filling n/8 of a cell.
LEVELS = (
    EMPTY,
    ONE_EIGHTH,
    ONE_QUARTER,
    THREE_EIGHTHS,
    HALF,
    FIVE_EIGHTHS,
    THREE_QUARTERS,
    SEVEN_EIGHTHS,
    FULL,
)


def partial_level(fraction: float) -> int:
    """Number of eighths (0-7) a fractional fill rounds down to."""
    if not fraction >= 1.0 / 8.0:
        return 0
    for eighths in range(7, 0, -1):
        if fraction >= eighths / 8.0:
            return eighths
    return 0


def select_partial_glyph(fraction: float) -> str:
    """Glyph for the topmost, partially filled cell of a bar.

    Returns an empty string below 1/8, meaning nothing is drawn.
    """
    return LEVELS[partial_level(fraction)]
