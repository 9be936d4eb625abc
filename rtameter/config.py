"""Meter configuration: dynamic range, bands, display options."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any

from .rta import DEFAULT_BAND_COLOR, DEFAULT_MIN_DB, HIGHLIGHT_COLOR

DEFAULT_CONFIG_PATH = Path.home() / ".rtameter.json"

MAX_FPS = 120


@dataclass
class MeterConfig:
    min_db: float = DEFAULT_MIN_DB
    band_count: int = 32
    min_frequency: int = 20
    max_frequency: int = 20000
    show_peak_labels: bool = True
    highlight_peak: bool = True
    fps: int = 30
    show_frame: bool = True
    title: str = "RTA"
    bar_color: str = DEFAULT_BAND_COLOR
    highlight_color: str = HIGHLIGHT_COLOR

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not (self.min_db < 0 and math.isfinite(self.min_db)):
            errors.append(f"Invalid min_db: {self.min_db}. Must be a finite negative number")
        if self.band_count < 1:
            errors.append("Band count must be >= 1")
        if not 0 < self.min_frequency < self.max_frequency:
            errors.append(
                f"Invalid frequency range: {self.min_frequency}-{self.max_frequency} Hz. "
                "Must satisfy 0 < min < max"
            )
        if not 1 <= self.fps <= MAX_FPS:
            errors.append(f"Invalid fps: {self.fps}. Must be between 1 and {MAX_FPS}")
        return errors

    def save(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Write the config as JSON. Refuses to persist an invalid config."""
        errors = self.validate()
        if errors:
            raise ValueError("; ".join(errors))
        path.write_text(json.dumps(asdict(self), indent=2))

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> MeterConfig:
        """Read a config file, defaults for anything missing.

        Values are coerced to their field's type (so `"-72"` loads as a float
        floor); one that cannot be raises ValueError. Unknown keys are ignored.
        Range checks are left to `validate()`.
        """
        if not cls.exists(path):
            return cls()
        data = json.loads(path.read_text())
        if not isinstance(data, dict):
            raise ValueError(f"Config {path} must hold a JSON object")
        kinds = {f.name: f.type for f in fields(cls)}
        coerced = {k: _coerce(k, kinds[k], v) for k, v in data.items() if k in kinds}
        return cls(**coerced)

    @classmethod
    def exists(cls, path: Path = DEFAULT_CONFIG_PATH) -> bool:
        """True when `path` holds something to load; an empty file does not count."""
        return path.exists() and path.stat().st_size > 0


def _coerce(name: str, kind: str, value: Any) -> Any:
    # Field types are strings here because of `from __future__ import annotations`.
    if kind == "bool":
        if not isinstance(value, bool):
            raise ValueError(f"Invalid {name} in config: {value!r}. Must be true or false")
        return value
    if kind in ("float", "int") and isinstance(value, bool):
        raise ValueError(f"Invalid {name} in config: {value!r}. Must be a number")
    try:
        if kind == "float":
            return float(value)
        if kind == "int":
            return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {name} in config: {value!r}. Must be a number") from None
    if not isinstance(value, str):
        raise ValueError(f"Invalid {name} in config: {value!r}. Must be a string")
    return value
