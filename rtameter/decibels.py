"""Conversion between linear bar ratios and decibels.

A ratio of 1.0 is full scale (0 dB) and 0.0 is the floor (`min_db`). The
mapping is logarithmic in amplitude, so equal steps in bar height are equal
steps in perceived loudness.

Both directions work on log10 of the amplitude ratio, `db / 20`, directly:
`log10(10 ** (db / 20))` is `db / 20`, so no power is ever taken and no
logarithm of an underflowed (zero) amplitude is evaluated, however deep the
floor.
"""

from __future__ import annotations

import math


def check_floor(min_db: float) -> None:
    """Reject floors that leave no dynamic range."""
    if not (min_db < 0.0 and math.isfinite(min_db)):
        raise ValueError(f"min_db must be a finite negative number, got {min_db}")


def db_to_ratio(db: float, min_db: float) -> float:
    """Map a decibel value onto [0, 1], clamping outside [min_db, 0]."""
    check_floor(min_db)
    if math.isnan(db) or db <= min_db:
        return 0.0
    if db >= 0.0:
        return 1.0
    log_db = db / 20.0
    log_floor = min_db / 20.0
    ratio = (log_db - log_floor) / (0.0 - log_floor)
    return min(max(ratio, 0.0), 1.0)


def ratio_to_db(ratio: float, min_db: float) -> float:
    """Map a ratio in [0, 1] back to decibels in [min_db, 0]."""
    check_floor(min_db)
    if math.isnan(ratio) or ratio <= 0.0:
        return min_db
    ratio = min(ratio, 1.0)
    log_floor = min_db / 20.0
    return 20.0 * (ratio * (0.0 - log_floor) + log_floor)


def db_label_width(min_db: float) -> int:
    """Columns needed for the dB axis: 3 when the floor prints in 3 chars, else 4."""
    return 3 if len(str(round(min_db))) <= 3 else 4
