"""RTA meter Textual application."""

from __future__ import annotations

from textual.app import App

from .config import MeterConfig
from .tui.styles import APP_CSS
from .tui.screens.meter import MeterScreen


class RTAMeterApp(App):
    """Real-time analyzer meter demo."""

    CSS = APP_CSS
    TITLE = "rtameter"
    SUB_TITLE = "Real-Time Analyzer Meter"

    def __init__(self, config: MeterConfig | None = None, seed: int | None = None) -> None:
        super().__init__()
        self.meter_config = config or MeterConfig()
        self._seed = seed

    def on_mount(self) -> None:
        self.push_screen(MeterScreen(self.meter_config, seed=self._seed))
