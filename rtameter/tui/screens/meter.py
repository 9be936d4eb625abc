"""Live meter screen: feeds synthetic spectrum frames to the RTA widget."""

from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Header, Footer, Label
from textual.containers import Vertical
from textual.timer import Timer

from ...config import MeterConfig
from ...demo_data import BandSmoother, SpectrumGenerator, band_centers
from ...frame import Frame
from ..widgets.rta_meter import RTAMeterWidget

logger = logging.getLogger(__name__)


class MeterScreen(Screen):
    """Shows one RTA meter refreshed at the configured frame rate."""

    BINDINGS = [
        ("l", "toggle_labels", "Peak Labels"),
        ("h", "toggle_highlight", "Highlight"),
        ("p", "toggle_pause", "Pause"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, config: MeterConfig, seed: int | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._meter_config = config
        self._generator = SpectrumGenerator(
            band_centers(config.band_count, config.min_frequency, config.max_frequency),
            config.min_db,
            seed=seed,
        )
        self._smoother = BandSmoother()
        self._meter_timer: Timer | None = None
        self._paused = False

    def compose(self) -> ComposeResult:
        config = self._meter_config
        yield Header()
        with Vertical(id="meter-body"):
            yield RTAMeterWidget(
                min_db=config.min_db,
                show_peak_labels=config.show_peak_labels,
                highlight_peak=config.highlight_peak,
                highlight_color=config.highlight_color,
                frame=Frame(title=config.title) if config.show_frame else None,
                id="rta-meter",
            )
        yield Label("", id="meter-status")
        yield Footer()

    def on_mount(self) -> None:
        self._update_status()
        self._meter_timer = self.set_interval(1 / self._meter_config.fps, self._update_meter)
        logger.info(
            "Meter started: %d bands, floor %.1f dB, %d fps",
            self._meter_config.band_count, self._meter_config.min_db, self._meter_config.fps,
        )

    def _update_meter(self) -> None:
        if self._paused:
            return
        bands = self._smoother.apply(self._generator.next_bands(self._meter_config.bar_color))
        self.query_one("#rta-meter", RTAMeterWidget).update_bands(bands)

    def _update_status(self) -> None:
        meter = self.query_one("#rta-meter", RTAMeterWidget)
        state = "PAUSED" if self._paused else "LIVE"
        labels = "on" if meter.show_peak_labels else "off"
        highlight = "on" if meter.highlight_peak else "off"
        self.query_one("#meter-status", Label).update(
            f"{state}  |  floor {self._meter_config.min_db:.0f} dB  |  labels {labels}  |  highlight {highlight}"
        )

    def action_toggle_labels(self) -> None:
        meter = self.query_one("#rta-meter", RTAMeterWidget)
        meter.set_options(show_peak_labels=not meter.show_peak_labels)
        self._update_status()

    def action_toggle_highlight(self) -> None:
        meter = self.query_one("#rta-meter", RTAMeterWidget)
        meter.set_options(highlight_peak=not meter.highlight_peak)
        self._update_status()

    def action_toggle_pause(self) -> None:
        self._paused = not self._paused
        if not self._paused:
            self._smoother.reset()
        self._update_status()

    def action_quit(self) -> None:
        if self._meter_timer:
            self._meter_timer.stop()
        self.app.exit()
