"""Rounded, colourable text tables for plan summaries."""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from enum import Enum
from itertools import zip_longest
from typing import Iterable, Sequence

from wcwidth import wcswidth

from tfplansummary.logformat import colors_enabled

_BOLD = 1
_RESET = 0


@dataclass(frozen=True)
class Tint:
    """A set of terminal colour attributes applied to a cell."""

    fg: tuple[int, ...] = ()
    bg: tuple[int, ...] = ()

    def paint(self, text: str) -> str:
        codes = [*self.bg, *self.fg]
        if not codes or all(code == _RESET for code in codes):
            return text
        return f"\x1b[{';'.join(map(str, codes))}m{text}\x1b[0m"


GREEN = Tint(fg=(32,), bg=(_BOLD,))
YELLOW = Tint(fg=(93,), bg=(_BOLD,))
RED = Tint(fg=(91,), bg=(_BOLD,))
RESET = Tint(fg=(_RESET,), bg=(_RESET,))
BOLD = Tint(fg=(_BOLD,))


class Align(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


def _width(text: str) -> int:
    width = wcswidth(text)
    return width if width >= 0 else len(text)


def _pad(text: str, width: int, align: Align) -> str:
    gap = max(width - _width(text), 0)
    if align is Align.LEFT:
        return text + " " * gap
    if align is Align.RIGHT:
        return " " * gap + text
    left = gap // 2
    return " " * left + text + " " * (gap - left)


def _wrap(text: str, max_width: int) -> list[str]:
    lines: list[str] = []
    for line in text.split("\n"):
        if _width(line) <= max_width:
            lines.append(line)
        else:
            lines.extend(textwrap.wrap(line, max_width, break_on_hyphens=False) or [""])
    return lines


def _tint_at(tints: Sequence[Tint], index: int, default: Tint) -> Tint:
    return tints[index] if index < len(tints) else default


class Table:
    """A table with a header, wrapped rows and an optional footer."""

    def __init__(
        self,
        headers: Iterable[str],
        header_tints: Sequence[Tint] = (),
        footer_tints: Sequence[Tint] = (),
        column_tints: Sequence[Tint] = (),
        max_width: int = 32,
    ) -> None:
        self.headers = [str(h) for h in headers]
        if not self.headers:
            raise ValueError("a table needs at least one column")
        if max_width < 1:
            raise ValueError("max_width must be positive")
        self.header_tints = list(header_tints)
        self.footer_tints = list(footer_tints)
        self.column_tints = list(column_tints)
        self.max_width = max_width
        self.rows: list[list[str]] = []
        self.footer: list[str] | None = None

    def _normalise(self, cells: Iterable[object]) -> list[str]:
        values = [str(c) for c in cells]
        if len(values) > len(self.headers):
            raise ValueError(
                f"row has {len(values)} cells but the table has {len(self.headers)} columns"
            )
        return values + [""] * (len(self.headers) - len(values))

    def append(self, row: Iterable[object]) -> None:
        """Add a row; missing trailing cells are left empty."""
        self.rows.append(self._normalise(row))

    def set_footer(self, footer: Iterable[object]) -> None:
        """Set the footer row shown below all rows."""
        self.footer = self._normalise(footer)

    def render(self) -> str:
        """Return the table as text, one line per table line."""
        color = colors_enabled()
        header_cells = [h.split("\n") for h in self.headers]
        row_cells = [[_wrap(cell, self.max_width) for cell in row] for row in self.rows]
        footer_cells = [f.split("\n") for f in self.footer] if self.footer is not None else None

        widths = [max(_width(line) for line in cell) for cell in header_cells]
        for cells in [*row_cells, *([footer_cells] if footer_cells else [])]:
            widths = [
                max(width, *(_width(line) for line in cell)) for width, cell in zip(widths, cells)
            ]

        def rule(left: str, mid: str, right: str) -> str:
            return left + mid.join("─" * (w + 2) for w in widths) + right

        def block(cells: list[list[str]], tints: list[Tint], default: Tint, align: Align) -> list[str]:
            lines = []
            for texts in zip_longest(*cells, fillvalue=""):
                parts = []
                for index, (text, width) in enumerate(zip(texts, widths)):
                    padded = _pad(text, width, align)
                    if color and text:
                        padded = _tint_at(tints, index, default).paint(padded)
                    parts.append(f" {padded} ")
                lines.append("│" + "│".join(parts) + "│")
            return lines

        separator = rule("├", "┼", "┤")
        out = [rule("╭", "┬", "╮")]
        out.extend(block(header_cells, self.header_tints, BOLD, Align.CENTER))
        out.append(separator)
        for position, cells in enumerate(row_cells):
            if position:
                out.append(separator)
            out.extend(block(cells, self.column_tints, RESET, Align.LEFT))
        if footer_cells is not None:
            out.append(separator)
            out.extend(block(footer_cells, self.footer_tints, RESET, Align.RIGHT))
        out.append(rule("╰", "┴", "╯"))
        return "\n".join(out) + "\n"