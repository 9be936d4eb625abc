"""Layout and drawing of an RTA meter into a cell buffer.

The drawing area is split into, top to bottom and left to right:

    +---------------------------+
    |   Peak: -3.21dB           |  peak readout (optional, 2 rows)
    |   Band: 1000Hz            |
    |  0|                       |
    |-20|   █                   |  dB axis | bars inside a left+bottom axis
    |-40| ▆ █ ▃                 |
    |   └──────                 |
    |     20 63  1k        20k  |  frequency axis
    +---------------------------+

Every stage only writes inside the rectangle it is given.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from . import glyphs
from .decibels import db_label_width, ratio_to_db
from .grid import Alignment, Buffer, Rect
from .rta import Band, NoBandsError, peak_index
from .utils import format_db_label, format_frequency_label, format_peak_band, format_peak_db

if TYPE_CHECKING:
    from .rta import RTA

logger = logging.getLogger(__name__)

AXIS_COLOR = "white"
PEAK_LABEL_ROWS = 2
DB_LABEL_SPACING = 3  # rows between dB labels


@dataclass(frozen=True)
class RTALayout:
    """Where each part of the meter goes for one frame."""
    peak_area: Rect | None
    db_axis_area: Rect
    freq_axis_area: Rect
    plot_area: Rect  # bars plus the axis border
    bars_area: Rect  # inside the axis border
    axis_area: Rect  # border rect, sized to the bars rather than the plot
    bar_width: int
    bar_areas: tuple[Rect, ...]

    @property
    def bands_width(self) -> int:
        return self.bar_width * len(self.bar_areas)

    @property
    def freq_label_area(self) -> Rect:
        """Frequency axis row under the bars, before clipping to the axis."""
        return Rect(self.freq_axis_area.x + 1, self.freq_axis_area.y, self.bands_width, self.freq_axis_area.height)


def compute_bar_width(plot_width: int, band_count: int) -> int:
    if band_count <= 0:
        raise NoBandsError("No bands configured, cannot compute bar width")
    return min(max((plot_width - 1) // band_count, 1), max(plot_width, 1))


def compute_layout(area: Rect, band_count: int, show_labels: bool, min_db: float) -> RTALayout | None:
    """Partition `area` for `band_count` bars. Returns None when nothing fits."""
    if band_count <= 0:
        raise NoBandsError("No bands configured, cannot continue")
    if area.is_empty():
        return None

    peak_area = None
    if show_labels:
        peak_area, area = area.split_top(PEAK_LABEL_ROWS)

    left_area, right_area = area.split_left(db_label_width(min_db))
    # dB axis stops one row above the bottom to line up with the frequency axis.
    db_axis_area, _ = left_area.split_bottom(1)
    plot_area, freq_axis_area = right_area.split_bottom(1)
    if plot_area.is_empty():
        return None

    bar_width = compute_bar_width(plot_area.width, band_count)
    bars_area = plot_area.shrink(left=1, bottom=1)
    bands_width = bar_width * band_count

    axis_area = Rect(plot_area.x, plot_area.y, bands_width + 1, plot_area.height).intersection(plot_area)
    bar_areas = tuple(
        Rect(bars_area.x + i * bar_width, bars_area.y, bar_width, bars_area.height).intersection(bars_area)
        for i in range(band_count)
    )
    return RTALayout(
        peak_area=peak_area,
        db_axis_area=db_axis_area,
        freq_axis_area=freq_axis_area,
        plot_area=plot_area,
        bars_area=bars_area,
        axis_area=axis_area,
        bar_width=bar_width,
        bar_areas=bar_areas,
    )


def render_bar(value: float, area: Rect, width: int, buf: Buffer, color: str | None = None) -> int:
    """Fill a bar bottom-up with full blocks and one partial block.

    Returns the number of cells written.
    """
    if area.is_empty():
        return 0
    if math.isnan(value):
        value = 0.0
    value = min(max(value, 0.0), 1.0)
    width = min(width, area.width)

    scaled = value * area.height
    full_blocks = math.floor(scaled)
    partial = glyphs.select_partial_glyph(scaled - full_blocks)

    written = 0
    for i in range(full_blocks):
        y = area.bottom - (i + 1)
        for x in range(area.left, area.left + width):
            buf[x, y].set_fg(color).set_symbol(glyphs.FULL)
            written += 1
    if partial:
        y = max(area.bottom - (full_blocks + 1), area.top)
        for x in range(area.left, area.left + width):
            buf[x, y].set_fg(color).set_symbol(partial)
            written += 1
    return written


def render_axis(area: Rect, buf: Buffer, color: str | None = AXIS_COLOR) -> None:
    """Left and bottom rule with a corner."""
    if area.is_empty():
        return
    bottom = area.bottom - 1
    for y in range(area.top, bottom):
        buf[area.left, y].set_symbol("│").set_fg(color)
    for x in range(area.left, area.right):
        buf[x, bottom].set_symbol("─").set_fg(color)
    buf[area.left, bottom].set_symbol("└").set_fg(color)


def db_scale_labels(rows: int, min_db: float) -> list[tuple[int, str]]:
    """(row, text) for every dB label in an axis of `rows` rows.

    The last row is the floor line, so labels are spaced over `rows - 1`
    bar rows and land at the heights the bars reach for those values.
    """
    bar_rows = rows - 1
    if bar_rows <= 0:
        return []
    label_count = bar_rows / DB_LABEL_SPACING
    labels = []
    for i, row in enumerate(range(0, rows, DB_LABEL_SPACING)):
        value = 0 - (abs(min_db) / label_count) * i
        labels.append((row, format_db_label(value)))
    return labels


def render_db_scale(area: Rect, min_db: float, buf: Buffer) -> None:
    for row, text in db_scale_labels(area.height, min_db):
        buf.draw_text(text, Rect(area.x, area.y + row, area.width, 1), Alignment.RIGHT)


def freq_label_spacing(bar_width: int) -> int:
    """Bars between frequency labels; narrow bars need sparser labels."""
    if bar_width >= 6:
        return 2
    if bar_width >= 4:
        return 3
    if bar_width == 3:
        return 4
    return 6


def freq_label_indices(band_count: int, bar_width: int) -> list[int]:
    """Bands that get a frequency label. The last band is always included."""
    if band_count <= 0:
        return []
    indices = list(range(0, band_count, freq_label_spacing(bar_width)))
    if indices[-1] != band_count - 1:
        indices.append(band_count - 1)
    return indices


def render_freq_scale(area: Rect, clip: Rect, bands: list[Band], bar_width: int, buf: Buffer) -> None:
    """Frequency labels under the bars.

    `area` spans exactly the bars, `clip` is the frequency axis row. Regular
    labels start at their band's first column. The last visible band's label
    is right-aligned to its bar and wins over any label it would touch. Bands
    clipped off the right edge of the plot get no label.
    """
    right = min(area.right, clip.right)
    visible = min(len(bands), max(right - area.left, 0) // max(bar_width, 1))
    if area.is_empty() or visible == 0:
        return
    right = area.left + visible * bar_width
    *regular, last = freq_label_indices(visible, bar_width)
    final_text = format_frequency_label(bands[last].frequency)
    final_x = max(right - len(final_text), area.left)

    next_free = area.left
    for index in regular:
        text = format_frequency_label(bands[index].frequency)
        x = area.left + index * bar_width
        if x < next_free or x + len(text) >= final_x:
            continue
        buf.draw_text(text, Rect(x, area.y, len(text), 1).intersection(clip))
        next_free = x + len(text) + 1

    buf.draw_text(final_text, Rect(final_x, area.y, right - final_x, 1).intersection(clip))


def find_peak(bands: list[Band]) -> Band | None:
    """A copy of the band with the highest value, or None without bands."""
    index = peak_index(bands)
    if index is None:
        return None
    return replace(bands[index])


def render_peak_labels(area: Rect, bands: list[Band], min_db: float, buf: Buffer) -> None:
    peak = find_peak(bands) or Band(0.0)
    peak_db = ratio_to_db(peak.value, min_db)
    db_label_area, band_label_area = area.split_top(1)
    buf.draw_text(format_peak_db(peak_db), db_label_area, Alignment.CENTER)
    buf.draw_text(format_peak_band(peak.frequency), band_label_area, Alignment.CENTER)


def render_rta(rta: RTA, area: Rect, buf: Buffer) -> None:
    """Draw one meter frame into `buf`, confined to `area`."""
    area = area.intersection(buf.area)
    if rta.frame is not None:
        rta.frame.render(area, buf)
        area = rta.frame.inner(area)

    layout = compute_layout(area, len(rta.bands), rta.peak_labels, rta.min_db)
    if layout is None:
        logger.debug("RTA area %s too small to draw, skipping", area)
        return
    logger.debug(
        "RTA layout: %d bands, bar width %d, plot %s",
        len(rta.bands), layout.bar_width, layout.plot_area,
    )

    if layout.peak_area is not None:
        render_peak_labels(layout.peak_area, rta.bands, rta.min_db, buf)
    render_axis(layout.axis_area, buf)
    render_db_scale(layout.db_axis_area, rta.min_db, buf)
    render_freq_scale(layout.freq_label_area, layout.freq_axis_area, rta.bands, layout.bar_width, buf)

    for band, bar_area in zip(rta.bands, layout.bar_areas):
        render_bar(band.value, bar_area, layout.bar_width, buf, band.color)
