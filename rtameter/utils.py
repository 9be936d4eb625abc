"""Label formatting helpers."""

from __future__ import annotations


def format_frequency_label(freq: int | None) -> str:
    """Format a frequency as '125' or '12k'. Missing frequencies show as 0."""
    freq = freq or 0
    if freq >= 1000:
        return f"{freq / 1000:.0f}k"
    return f"{freq:.0f}"


def format_db_label(db: float) -> str:
    """Integer dB label; never '-0'."""
    return str(round(db))


def format_peak_db(db: float) -> str:
    return f"Peak: {db:.2f}dB"


def format_peak_band(freq: int | None) -> str:
    return f"Band: {freq or 0}Hz"


def parse_csv_floats(text: str) -> list[float]:
    """Parse '0.1, 0.5,0.9' into floats, ignoring empty items."""
    return [float(item) for item in text.split(",") if item.strip()]


def parse_csv_ints(text: str) -> list[int]:
    return [int(item) for item in text.split(",") if item.strip()]
