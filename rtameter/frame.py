"""Bordered, padded container drawn around a meter."""

from __future__ import annotations

from dataclasses import dataclass

from .grid import Alignment, Buffer, Rect

# Box drawing: (horizontal, vertical, top-left, top-right, bottom-left, bottom-right)
PLAIN = ("─", "│", "┌", "┐", "└", "┘")


@dataclass
class Frame:
    """An enclosing border with optional title and padding.

    The meter renders strictly inside `inner(area)`. The frame's color only
    applies to the border and title, never to the meter itself.
    """
    title: str = ""
    borders: bool = True
    padding: int = 0
    border_color: str | None = None
    title_alignment: Alignment = Alignment.LEFT
    symbols: tuple[str, str, str, str, str, str] = PLAIN

    def inner(self, area: Rect) -> Rect:
        edge = 1 if self.borders else 0
        inset = edge + max(self.padding, 0)
        # Without a border the title needs a row of its own.
        title_row = 1 if self.title and not self.borders else 0
        return area.shrink(inset, inset + title_row, inset, inset)

    def render(self, area: Rect, buf: Buffer) -> None:
        area = area.intersection(buf.area)
        if area.is_empty():
            return
        if self.borders:
            self._render_borders(area, buf)
        if self.title:
            # Title sits on the top border, between the corners.
            title_area = area.shrink(left=1, right=1) if self.borders else area
            title_area, _ = title_area.split_top(1)
            buf.draw_text(self.title, title_area, self.title_alignment, fg=self.border_color)

    def _render_borders(self, area: Rect, buf: Buffer) -> None:
        horizontal, vertical, top_left, top_right, bottom_left, bottom_right = self.symbols
        left, right = area.left, area.right - 1
        top, bottom = area.top, area.bottom - 1
        for x in range(left, right + 1):
            buf[x, top].set_symbol(horizontal).set_fg(self.border_color)
            buf[x, bottom].set_symbol(horizontal).set_fg(self.border_color)
        for y in range(top, bottom + 1):
            buf[left, y].set_symbol(vertical).set_fg(self.border_color)
            buf[right, y].set_symbol(vertical).set_fg(self.border_color)
        if area.width > 1 and area.height > 1:
            buf[left, top].set_symbol(top_left)
            buf[right, top].set_symbol(top_right)
            buf[left, bottom].set_symbol(bottom_left)
            buf[right, bottom].set_symbol(bottom_right)
