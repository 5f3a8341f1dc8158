"""Tests for usage bar rendering."""

import pytest

from drinfo.ansi import RESET, bg, fg, gradient_color, strip_ansi, visible_length
from drinfo.bar import (
    EMPTY_CELL,
    EMPTY_GLYPH,
    FILLED_GLYPH,
    LABEL_FOREGROUND,
    filled_cells,
    label_start,
    render_usage_bar,
)


def split_cells(bar: str) -> list[str]:
    """Split a rendered bar on resets; every cell ends with exactly one."""
    parts = bar.split(RESET)
    assert parts[-1] == ""
    return [part + RESET for part in parts[:-1]]


class TestFilledCells:
    def test_half(self):
        assert filled_cells(50, 20) == 10

    def test_empty(self):
        assert filled_cells(0, 58) == 0

    def test_full(self):
        assert filled_cells(100, 58) == 58

    def test_truncates(self):
        # 99.9% of 20 cells is 19.98
        assert filled_cells(99.9, 20) == 19


class TestLabelStart:
    def test_centered_in_fill(self):
        assert label_start(10, 5) == 2

    def test_odd_remainder_rounds_down(self):
        assert label_start(12, 5) == 3

    def test_fill_shorter_than_label(self):
        assert label_start(3, 5) == 0

    def test_fill_equal_to_label(self):
        assert label_start(5, 5) == 0


class TestRenderUsageBar:
    def test_visible_length_matches_bar_length(self):
        for usage in (0, 3.3, 50, 87.5, 100):
            assert visible_length(render_usage_bar(usage, 58)) == 58

    def test_half_full(self):
        bar = render_usage_bar(50, 20)
        text = strip_ansi(bar)
        assert text == "██50.0%███" + EMPTY_GLYPH * 10

    def test_full_has_no_empty_cells(self):
        text = strip_ansi(render_usage_bar(100, 20))
        assert EMPTY_GLYPH not in text
        assert "100.0%" in text
        assert len(text) == 20

    def test_empty_bar(self):
        bar = render_usage_bar(0, 20)
        assert bar == EMPTY_CELL * 20

    def test_every_cell_followed_by_reset(self):
        cells = split_cells(render_usage_bar(42.3, 30))
        assert len(cells) == 30
        assert all(visible_length(cell) == 1 for cell in cells)

    def test_filled_cells_use_gradient(self):
        cells = split_cells(render_usage_bar(50, 20))
        assert cells[0] == f"{fg(gradient_color(0, 20))}{FILLED_GLYPH}{RESET}"
        assert cells[9] == f"{fg(gradient_color(9, 20))}{FILLED_GLYPH}{RESET}"

    def test_label_cells_on_gradient_background(self):
        cells = split_cells(render_usage_bar(50, 20))
        # "50.0%" centered in 10 filled cells starts at cell 2
        for offset, char in enumerate("50.0%"):
            i = 2 + offset
            assert cells[i] == f"{bg(gradient_color(i, 20))}{fg(LABEL_FOREGROUND)}{char}{RESET}"

    def test_empty_cells_are_gray(self):
        cells = split_cells(render_usage_bar(50, 20))
        assert cells[10:] == [EMPTY_CELL] * 10

    def test_label_cut_at_fill_boundary(self):
        # 10% of 20 is 2 filled cells; "10.0%" starts at 0 and only "10" is drawn
        text = strip_ansi(render_usage_bar(10, 20))
        assert text == "10" + EMPTY_GLYPH * 18

    def test_short_bar_is_clamped(self):
        assert visible_length(render_usage_bar(50, 1)) == 10
        assert visible_length(render_usage_bar(50, 0)) == 10

    @pytest.mark.parametrize("usage,expected", [(-5, 0.0), (150, 100.0)])
    def test_out_of_range_usage_is_clamped(self, usage, expected):
        assert render_usage_bar(usage, 20) == render_usage_bar(expected, 20)
