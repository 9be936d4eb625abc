"""RTA meter model: frequency bands and the per-frame meter descriptor."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .decibels import check_floor, db_to_ratio, ratio_to_db
from .frame import Frame
from .grid import Buffer, Rect

DEFAULT_MIN_DB = -60.0
DEFAULT_BAND_COLOR = "yellow"
HIGHLIGHT_COLOR = "red"


class NoBandsError(ValueError):
    """Raised when a meter is rendered without any bands."""


@dataclass
class Band:
    """A single frequency band of the meter.

    `value` is a ratio where 1.0 is full scale (0 dB) and 0.0 is the floor.
    It is not clamped here; rendering clamps it.
    """
    value: float
    frequency: int | None = None  # Hz, only used for labels
    color: str = DEFAULT_BAND_COLOR

    def set_ratio(self, value: float) -> None:
        self.value = value

    def set_db(self, db: float, min_db: float) -> None:
        self.value = db_to_ratio(db, min_db)

    def get_db(self, min_db: float) -> float:
        return ratio_to_db(self.value, min_db)


def peak_index(bands: list[Band]) -> int | None:
    """Index of the loudest band; the lowest index wins a tie. NaN never wins."""
    best: int | None = None
    for i, band in enumerate(bands):
        if math.isnan(band.value):
            continue
        if best is None or band.value > bands[best].value:
            best = i
    return best


class RTA:
    """One frame of an RTA audio meter.

    Build it fresh for every redraw, configure it with the chained option
    methods, then call `render()` once. The bands are consumed by rendering.

        RTA(bands, min_db=-60).block(Frame(title="RTA")).highlight_peak_band().render(area, buf)
    """

    def __init__(self, bands: list[Band], min_db: float = DEFAULT_MIN_DB) -> None:
        self.frame: Frame | None = None
        self.bands: list[Band] = list(bands)
        self.peak_labels: bool = True
        self.min_db = min_db
        self._rendered = False

    def _check_open(self) -> None:
        if self._rendered:
            raise RuntimeError("RTA has already been rendered; build a new one for the next frame")

    def block(self, frame: Frame) -> RTA:
        """Surround the meter with `frame`; the meter renders in its interior."""
        self._check_open()
        self.frame = frame
        return self

    def show_peak_labels(self, show: bool = True) -> RTA:
        self._check_open()
        self.peak_labels = show
        return self

    def highlight_peak_band(self, color: str = HIGHLIGHT_COLOR) -> RTA:
        """Recolor the band with the maximum value."""
        self._check_open()
        index = peak_index(self.bands)
        if index is not None:
            self.bands[index].color = color
        return self

    def render(self, area: Rect, buf: Buffer) -> None:
        from .rendering import render_rta

        self._check_open()
        if not self.bands:
            raise NoBandsError("No bands configured, cannot render RTA")
        check_floor(self.min_db)
        self._rendered = True
        render_rta(self, area, buf)
