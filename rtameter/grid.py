"""Character-cell grid: rectangles, cells, and the output buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from rich.style import Style
from rich.text import Text


class Alignment(Enum):
    LEFT = auto()
    CENTER = auto()
    RIGHT = auto()


@dataclass(frozen=True)
class Rect:
    """A rectangle of cells. `right` and `bottom` are exclusive."""
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        # Sizes never go negative; frozen, so bypass __setattr__.
        object.__setattr__(self, "width", max(self.width, 0))
        object.__setattr__(self, "height", max(self.height, 0))

    @property
    def left(self) -> int:
        return self.x

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def top(self) -> int:
        return self.y

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def contains(self, x: int, y: int) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom

    def intersection(self, other: Rect) -> Rect:
        """Overlap of two rectangles; an empty rect anchored inside `self` if none."""
        x1 = max(self.left, other.left)
        y1 = max(self.top, other.top)
        x2 = min(self.right, other.right)
        y2 = min(self.bottom, other.bottom)
        if x2 <= x1 or y2 <= y1:
            return Rect(min(x1, self.right), min(y1, self.bottom), 0, 0)
        return Rect(x1, y1, x2 - x1, y2 - y1)

    def shrink(self, left: int = 0, top: int = 0, right: int = 0, bottom: int = 0) -> Rect:
        """Cut the given number of cells off each side, never below zero size."""
        x = self.x + min(left, self.width)
        y = self.y + min(top, self.height)
        width = max(self.width - left - right, 0)
        height = max(self.height - top - bottom, 0)
        return Rect(x, y, width, height)

    def split_top(self, rows: int) -> tuple[Rect, Rect]:
        """Split off the top `rows` rows, returning (top, rest)."""
        rows = min(max(rows, 0), self.height)
        return (
            Rect(self.x, self.y, self.width, rows),
            Rect(self.x, self.y + rows, self.width, self.height - rows),
        )

    def split_bottom(self, rows: int) -> tuple[Rect, Rect]:
        """Split off the bottom `rows` rows, returning (rest, bottom)."""
        rows = min(max(rows, 0), self.height)
        return (
            Rect(self.x, self.y, self.width, self.height - rows),
            Rect(self.x, self.bottom - rows, self.width, rows),
        )

    def split_left(self, columns: int) -> tuple[Rect, Rect]:
        """Split off the leftmost `columns` columns, returning (left, rest)."""
        columns = min(max(columns, 0), self.width)
        return (
            Rect(self.x, self.y, columns, self.height),
            Rect(self.x + columns, self.y, self.width - columns, self.height),
        )


@dataclass
class Cell:
    symbol: str = " "
    fg: str | None = None

    def set_symbol(self, symbol: str) -> Cell:
        self.symbol = symbol
        return self

    def set_fg(self, color: str | None) -> Cell:
        self.fg = color
        return self

    def reset(self) -> None:
        self.symbol = " "
        self.fg = None


@dataclass
class Buffer:
    """A mutable grid of cells covering `area`.

    Cells are addressed with absolute (x, y) coordinates, so a buffer whose
    area does not start at the origin still uses the caller's coordinates.
    """
    area: Rect
    cells: list[Cell] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [Cell() for _ in range(self.area.area)]
        elif len(self.cells) != self.area.area:
            raise ValueError(f"Buffer of {self.area.area} cells got {len(self.cells)}")

    @classmethod
    def empty(cls, area: Rect) -> Buffer:
        return cls(area)

    def _index(self, x: int, y: int) -> int:
        if not self.area.contains(x, y):
            raise IndexError(f"Cell ({x}, {y}) outside buffer area {self.area}")
        return (y - self.area.y) * self.area.width + (x - self.area.x)

    def __getitem__(self, pos: tuple[int, int]) -> Cell:
        x, y = pos
        return self.cells[self._index(x, y)]

    def reset(self) -> None:
        for cell in self.cells:
            cell.reset()

    def set_string(self, x: int, y: int, text: str, fg: str | None = None) -> int:
        """Write `text` starting at (x, y), clipped to the buffer. Returns cells written."""
        written = 0
        for i, ch in enumerate(text):
            if not self.area.contains(x + i, y):
                continue
            self[x + i, y].set_symbol(ch).set_fg(fg)
            written += 1
        return written

    def draw_text(
        self,
        text: str,
        area: Rect,
        alignment: Alignment = Alignment.LEFT,
        fg: str | None = None,
    ) -> None:
        """Draw one line of text inside `area`, truncated to its width."""
        area = area.intersection(self.area)
        if area.is_empty():
            return
        text = text[:area.width]
        if alignment is Alignment.RIGHT:
            x = area.right - len(text)
        elif alignment is Alignment.CENTER:
            x = area.x + (area.width - len(text)) // 2
        else:
            x = area.x
        self.set_string(x, area.y, text, fg=fg)

    def line(self, y: int) -> str:
        """Symbols of one row as plain text."""
        return "".join(self[x, y].symbol for x in range(self.area.left, self.area.right))

    def lines(self) -> list[str]:
        return [self.line(y) for y in range(self.area.top, self.area.bottom)]

    def to_text(self) -> Text:
        """Export the buffer as rich Text, one line per row, styled by fg color."""
        text = Text(no_wrap=True, overflow="crop")
        for row, y in enumerate(range(self.area.top, self.area.bottom)):
            if row:
                text.append("\n")
            for x in range(self.area.left, self.area.right):
                cell = self[x, y]
                text.append(cell.symbol, Style(color=cell.fg) if cell.fg else None)
        return text
