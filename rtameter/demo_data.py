"""Synthetic spectrum data for driving the meter without audio input."""

from __future__ import annotations

import numpy as np

from .decibels import db_to_ratio
from .rta import Band, DEFAULT_BAND_COLOR


def band_centers(count: int, min_frequency: int = 20, max_frequency: int = 20000) -> list[int]:
    """Logarithmically spaced band center frequencies in Hz."""
    if count == 1:
        return [min_frequency]
    centers = np.geomspace(min_frequency, max_frequency, count)
    return [int(round(c)) for c in centers]


class SpectrumGenerator:
    """Produces a pink-ish spectrum that wanders from frame to frame.

    Levels are in dBFS: a gentle roll-off towards high frequencies, a moving
    resonance peak, and random jitter.
    """

    def __init__(
        self,
        frequencies: list[int],
        min_db: float,
        seed: int | None = None,
    ) -> None:
        self.frequencies = np.asarray(frequencies, dtype=np.float64)
        self.min_db = min_db
        self._rng = np.random.default_rng(seed)
        self._phase = 0.0

    def next_levels(self) -> np.ndarray:
        """dBFS level of every band for the next frame."""
        self._phase += 0.07
        octaves = np.log2(self.frequencies / self.frequencies[0])
        tilt = -3.0 * octaves
        center = (np.sin(self._phase) + 1.0) / 2.0 * max(octaves[-1], 1.0)
        resonance = 18.0 * np.exp(-((octaves - center) ** 2) / 0.8)
        jitter = self._rng.normal(0.0, 3.0, size=len(self.frequencies))
        levels = -12.0 + tilt + resonance + jitter
        return np.clip(levels, self.min_db, 0.0)

    def next_bands(self, color: str = DEFAULT_BAND_COLOR) -> list[Band]:
        levels = self.next_levels()
        return [
            Band(db_to_ratio(float(db), self.min_db), int(freq), color)
            for db, freq in zip(levels, self.frequencies)
        ]


class BandSmoother:
    """Fast-attack, slow-decay smoothing applied on the caller's side.

    The meter renders every frame statelessly; anything that depends on
    previous frames lives here.
    """

    def __init__(self, decay: float = 0.85) -> None:
        self.decay = decay
        self._values: np.ndarray | None = None

    def apply(self, bands: list[Band]) -> list[Band]:
        values = np.array([b.value for b in bands], dtype=np.float64)
        if self._values is None or len(self._values) != len(values):
            self._values = values
        else:
            decayed = self._values * self.decay
            self._values = np.maximum(values, decayed)
        return [
            Band(float(v), b.frequency, b.color)
            for v, b in zip(self._values, bands)
        ]

    def reset(self) -> None:
        self._values = None
