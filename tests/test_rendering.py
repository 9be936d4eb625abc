"""Tests for the layout engine, bar renderer, axes and peak tracking."""

import math

import pytest

from rtameter import glyphs
from rtameter.grid import Buffer, Rect
from rtameter.rendering import (
    compute_bar_width,
    compute_layout,
    db_scale_labels,
    find_peak,
    freq_label_indices,
    freq_label_spacing,
    render_bar,
)
from rtameter.rta import Band, NoBandsError


def column(buf, x):
    return [buf[x, y].symbol for y in range(buf.area.top, buf.area.bottom)]


class TestBarWidth:

    def test_single_band_fills_plot(self):
        assert compute_bar_width(7, 1) == 6

    def test_minimum_is_one(self):
        assert compute_bar_width(50, 100) == 1
        assert compute_bar_width(1, 1) == 1

    def test_bars_never_overflow_plot(self):
        for width in range(2, 60):
            for count in range(1, width):
                bar_width = compute_bar_width(width, count)
                assert bar_width >= 1
                assert bar_width * count <= width

    def test_zero_bands_rejected(self):
        with pytest.raises(NoBandsError):
            compute_bar_width(10, 0)


class TestLayout:

    def test_zero_bands_rejected(self):
        with pytest.raises(NoBandsError):
            compute_layout(Rect(0, 0, 10, 10), 0, False, -60.0)

    def test_empty_area_is_none(self):
        assert compute_layout(Rect(0, 0, 0, 10), 3, False, -60.0) is None
        assert compute_layout(Rect(0, 0, 10, 0), 3, False, -60.0) is None

    def test_no_room_for_plot_is_none(self):
        assert compute_layout(Rect(0, 0, 3, 10), 3, False, -60.0) is None
        assert compute_layout(Rect(0, 0, 10, 3), 3, True, -60.0) is None

    def test_partition_without_labels(self):
        layout = compute_layout(Rect(0, 0, 10, 10), 1, False, -60.0)
        assert layout.peak_area is None
        assert layout.db_axis_area == Rect(0, 0, 3, 9)
        assert layout.plot_area == Rect(3, 0, 7, 9)
        assert layout.freq_axis_area == Rect(3, 9, 7, 1)
        assert layout.bars_area == Rect(4, 0, 6, 8)
        assert layout.bar_width == 6
        assert layout.bar_areas == (Rect(4, 0, 6, 8),)

    def test_peak_labels_take_top_two_rows(self):
        layout = compute_layout(Rect(0, 0, 10, 10), 1, True, -60.0)
        assert layout.peak_area == Rect(0, 0, 10, 2)
        assert layout.db_axis_area == Rect(0, 2, 3, 7)
        assert layout.plot_area == Rect(3, 2, 7, 7)

    def test_wide_floor_widens_db_axis(self):
        layout = compute_layout(Rect(0, 0, 20, 10), 2, False, -100.0)
        assert layout.db_axis_area.width == 4
        assert layout.plot_area.x == 4

    def test_axis_sized_to_bars(self):
        layout = compute_layout(Rect(0, 0, 20, 10), 3, False, -60.0)
        assert layout.plot_area.width == 17
        assert layout.bar_width == 5
        assert layout.axis_area == Rect(3, 0, 16, 9)
        assert layout.freq_label_area == Rect(4, 9, 15, 1)

    def test_bars_laid_out_left_to_right(self):
        layout = compute_layout(Rect(0, 0, 20, 10), 3, False, -60.0)
        assert [r.x for r in layout.bar_areas] == [4, 9, 14]
        assert all(r.width == 5 for r in layout.bar_areas)

    def test_too_many_bands_are_clipped(self):
        layout = compute_layout(Rect(0, 0, 13, 5), 20, False, -60.0)
        assert layout.bar_width == 1
        assert len(layout.bar_areas) == 20
        for r in layout.bar_areas:
            assert r.intersection(layout.bars_area) == r or r.is_empty()
        assert sum(r.width for r in layout.bar_areas) == layout.bars_area.width
        assert layout.axis_area.right <= layout.plot_area.right


class TestRenderBar:

    def test_half_value_height_eight(self):
        buf = Buffer.empty(Rect(0, 0, 1, 8))
        written = render_bar(0.5, buf.area, 1, buf)
        assert written == 4
        assert column(buf, 0) == [" "] * 4 + [glyphs.FULL] * 4

    def test_full_value_fills_every_column(self):
        buf = Buffer.empty(Rect(0, 0, 2, 4))
        assert render_bar(1.0, buf.area, 2, buf) == 8
        assert buf.lines() == [glyphs.FULL * 2] * 4

    def test_partial_block_above_full_blocks(self):
        buf = Buffer.empty(Rect(0, 0, 1, 4))
        assert render_bar(0.3, buf.area, 1, buf) == 2
        assert column(buf, 0) == [" ", " ", glyphs.ONE_EIGHTH, glyphs.FULL]

    def test_value_clamped(self):
        buf = Buffer.empty(Rect(0, 0, 1, 3))
        assert render_bar(7.5, buf.area, 1, buf) == 3
        silent = Buffer.empty(Rect(0, 0, 1, 3))
        assert render_bar(-1.0, silent.area, 1, silent) == 0

    def test_nan_draws_nothing(self):
        buf = Buffer.empty(Rect(0, 0, 1, 3))
        assert render_bar(math.nan, buf.area, 1, buf) == 0

    def test_color_applied(self):
        buf = Buffer.empty(Rect(0, 0, 1, 2))
        render_bar(1.0, buf.area, 1, buf, color="yellow")
        assert buf[0, 0].fg == "yellow"
        assert buf[0, 1].fg == "yellow"

    def test_writes_stay_inside_area(self):
        buf = Buffer.empty(Rect(0, 0, 5, 10))
        area = Rect(1, 2, 2, 5)
        render_bar(1.0, area, 5, buf)
        for y in range(10):
            for x in range(5):
                inside = area.contains(x, y)
                assert (buf[x, y].symbol == glyphs.FULL) == inside

    def test_empty_area_writes_nothing(self):
        buf = Buffer.empty(Rect(0, 0, 3, 3))
        assert render_bar(1.0, Rect(0, 0, 0, 3), 1, buf) == 0
        assert buf.lines() == ["   "] * 3


class TestDbScale:

    def test_labels_every_third_row(self):
        labels = db_scale_labels(10, -60.0)
        assert labels == [(0, "0"), (3, "-20"), (6, "-40"), (9, "-60")]

    def test_labels_span_floor_to_zero(self):
        labels = db_scale_labels(10, -90.0)
        assert labels[-1] == (9, "-90")

    def test_single_row_has_no_labels(self):
        assert db_scale_labels(1, -60.0) == []


class TestFreqLabels:

    def test_spacing_grows_as_bars_narrow(self):
        assert freq_label_spacing(10) == 2
        assert freq_label_spacing(6) == 2
        assert freq_label_spacing(5) == 3
        assert freq_label_spacing(4) == 3
        assert freq_label_spacing(3) == 4
        assert freq_label_spacing(2) == 6
        assert freq_label_spacing(1) == 6

    def test_last_band_always_labeled(self):
        assert freq_label_indices(10, 1) == [0, 6, 9]
        assert freq_label_indices(7, 1) == [0, 6]
        assert freq_label_indices(12, 6) == [0, 2, 4, 6, 8, 10, 11]

    def test_single_band(self):
        assert freq_label_indices(1, 6) == [0]


class TestFindPeak:

    def test_returns_loudest_band(self):
        bands = [Band(0.2, 100), Band(0.9, 200), Band(0.5, 300)]
        peak = find_peak(bands)
        assert peak.value == 0.9
        assert peak.frequency == 200

    def test_returns_a_copy(self):
        bands = [Band(0.2, 100), Band(0.9, 200)]
        peak = find_peak(bands)
        peak.color = "blue"
        assert bands[1].color == "yellow"

    def test_tie_picks_first(self):
        bands = [Band(0.5, 100), Band(0.5, 200), Band(0.5, 300)]
        assert find_peak(bands).frequency == 100

    def test_nan_ignored(self):
        bands = [Band(math.nan, 100), Band(0.1, 200)]
        assert find_peak(bands).frequency == 200

    def test_empty_is_none(self):
        assert find_peak([]) is None
