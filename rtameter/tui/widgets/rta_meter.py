"""RTA meter widget: bar graph of band levels with dB and frequency axes."""

from __future__ import annotations

from dataclasses import replace

from rich.text import Text
from textual.widget import Widget

from ...frame import Frame
from ...grid import Buffer, Rect
from ...rta import Band, RTA, DEFAULT_MIN_DB, HIGHLIGHT_COLOR


def render_meter_text(
    bands: list[Band],
    width: int,
    height: int,
    min_db: float = DEFAULT_MIN_DB,
    show_peak_labels: bool = True,
    highlight_peak: bool = True,
    highlight_color: str = HIGHLIGHT_COLOR,
    frame: Frame | None = None,
    buf: Buffer | None = None,
) -> Text:
    """Render one frame of the meter into a rich Text of `width` x `height`.

    A `buf` of the same size is cleared and drawn into instead of allocating
    a new one.
    """
    area = Rect(0, 0, max(width, 0), max(height, 0))
    if buf is None or buf.area != area:
        buf = Buffer.empty(area)
    else:
        buf.reset()
    if bands:
        # Bands are consumed (and recolored) by rendering; work on copies.
        rta = RTA([replace(b) for b in bands], min_db).show_peak_labels(show_peak_labels)
        if frame is not None:
            rta.block(frame)
        if highlight_peak:
            rta.highlight_peak_band(highlight_color)
        rta.render(buf.area, buf)
    elif frame is not None:
        frame.render(buf.area, buf)
    return buf.to_text()


class RTAMeterWidget(Widget):
    """Displays the most recently supplied bands as an RTA meter."""

    DEFAULT_CSS = """
    RTAMeterWidget {
        width: 1fr;
        height: 1fr;
    }
    """

    def __init__(
        self,
        min_db: float = DEFAULT_MIN_DB,
        show_peak_labels: bool = True,
        highlight_peak: bool = True,
        highlight_color: str = HIGHLIGHT_COLOR,
        frame: Frame | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.min_db = min_db
        self.show_peak_labels = show_peak_labels
        self.highlight_peak = highlight_peak
        self.highlight_color = highlight_color
        self.meter_frame = frame
        self._bands: list[Band] = []
        self._buffer: Buffer | None = None

    @property
    def bands(self) -> list[Band]:
        return list(self._bands)

    def update_bands(self, bands: list[Band]) -> None:
        """Replace the bands shown on the next redraw."""
        self._bands = list(bands)
        self.refresh()

    def set_options(
        self,
        show_peak_labels: bool | None = None,
        highlight_peak: bool | None = None,
    ) -> None:
        if show_peak_labels is not None:
            self.show_peak_labels = show_peak_labels
        if highlight_peak is not None:
            self.highlight_peak = highlight_peak
        self.refresh()

    def render(self) -> Text:
        width, height = self.size
        area = Rect(0, 0, width, height)
        if self._buffer is None or self._buffer.area != area:
            self._buffer = Buffer.empty(area)
        return render_meter_text(
            self._bands,
            width,
            height,
            min_db=self.min_db,
            show_peak_labels=self.show_peak_labels,
            highlight_peak=self.highlight_peak,
            highlight_color=self.highlight_color,
            frame=self.meter_frame,
            buf=self._buffer,
        )
