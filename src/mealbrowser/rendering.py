"""Sectioned-list rendering helpers for the browser screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.text import Text

if TYPE_CHECKING:
    from mealbrowser.index import MealIndex

HEADER_STYLE = "bold #f0c674"


@dataclass(frozen=True)
class ListLine:
    """One rendered line: a section header (row is None) or a meal row."""

    section: int
    row: int | None
    text: str

    @property
    def is_header(self) -> bool:
        return self.row is None


def section_header(category: str) -> str:
    """Headers are shown capitalized word by word."""
    return category.title()


def build_lines(index: MealIndex) -> list[ListLine]:
    lines: list[ListLine] = []
    for section in range(index.section_count()):
        lines.append(ListLine(section, None, section_header(index.section_title(section))))
        for row in range(index.row_count(section)):
            lines.append(ListLine(section, row, index.row_title(section, row)))
    return lines


def row_line_indices(lines: list[ListLine]) -> list[int]:
    """Indices of the selectable (meal) lines."""
    return [idx for idx, line in enumerate(lines) if not line.is_header]


def window_bounds(total: int, rows: int, selected: int | None) -> tuple[int, int]:
    if total <= 0:
        return (0, 0)

    rows = max(1, rows)
    if total <= rows:
        return (0, total)

    if selected is None:
        start = 0
    else:
        half = rows // 2
        start = selected - half
        start = max(0, start)
        start = min(start, total - rows)

    return (start, start + rows)


def render_lines(lines: list[ListLine], selected_line: int | None, visible_rows: int) -> Text:
    start, end = window_bounds(len(lines), visible_rows, selected_line)

    text = Text()
    if start > 0:
        text.append("⋮\n", style="dim")

    for idx in range(start, end):
        if idx > start:
            text.append("\n")
        line = lines[idx]
        if line.is_header:
            text.append(line.text, style=HEADER_STYLE)
            continue
        pointer = "➤ " if idx == selected_line else "  "
        text.append(f"{pointer}{line.text}")

    if end < len(lines):
        text.append("\n⋮", style="dim")

    return text
