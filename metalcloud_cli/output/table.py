"""
TableRenderer — Render data as a fixed-width grid

Supports:
- Unicode and ASCII borders
- Columns sized from width hints, headers and content
- Content truncation with ellipsis when the terminal is too narrow
- Folding: wrapping cells over several display lines instead of truncating
- Multi-line cell values
"""

import textwrap
from typing import TYPE_CHECKING, List, Sequence

from .base import BaseRenderer
from .schema import SchemaField, format_cell

if TYPE_CHECKING:
    from . import Table


# Columns never shrink below this when the terminal is narrow
MIN_COLUMN_WIDTH = 3


class TableRenderer(BaseRenderer):
    """
    Render a Table as a bordered grid.

    Layout:
        Title
        Subtitle
        +----+------------+
        | ID | LABEL      |
        +----+------------+
        | 10 | internet01 |
        +----+------------+
        Total: 1 Title
    """

    def render(self, table: "Table", title: str = "", subtitle: str = "") -> str:
        """
        Render a Table as a grid.

        Args:
            table: Table with schema and rows
            title: Title line, also used in the footer
            subtitle: Optional line under the title

        Returns:
            Formatted grid string
        """
        headers = [f.name for f in table.schema]
        cells = [[format_cell(cell) for cell in row] for row in table.data]
        widths = self._calculate_widths(table.schema, cells)

        lines = []
        if title:
            lines.append(title)
        if subtitle:
            lines.append(subtitle)

        lines.append(self._separator(widths, "top"))
        lines.extend(self._row_lines(headers, widths))
        lines.append(self._separator(widths, "middle"))

        body = [self._row_lines(row, widths) for row in cells]
        # Rows spanning several display lines get separators between them
        multiline = any(len(row_lines) > 1 for row_lines in body)
        for i, row_lines in enumerate(body):
            lines.extend(row_lines)
            if multiline and i < len(body) - 1:
                lines.append(self._separator(widths, "middle"))

        lines.append(self._separator(widths, "bottom"))

        if title:
            lines.append(f"Total: {len(cells)} {title}")
        else:
            lines.append(f"Total: {self.format_count(len(cells), 'record')}")

        return "\n".join(lines)

    # =========================================================================
    # Width Calculation
    # =========================================================================

    def _calculate_widths(self, schema: Sequence[SchemaField], cells: List[List[str]]) -> List[int]:
        """Calculate column widths, shrinking toward the width hints if needed."""
        widths = []
        for i, field in enumerate(schema):
            content = max((_longest_line(row[i]) for row in cells), default=0)
            widths.append(max(field.size, len(field.name), content))

        if self.width is None:
            return widths

        # One padding space on each side of a cell, plus vertical borders
        available = self.width - (3 * len(widths) + 1)
        floors = [
            min(w, max(field.size, MIN_COLUMN_WIDTH))
            for w, field in zip(widths, schema)
        ]

        excess = sum(widths) - available
        while excess > 0:
            shrinkable = [i for i in range(len(widths)) if widths[i] > floors[i]]
            if not shrinkable:
                break
            widest = max(shrinkable, key=lambda i: widths[i] - floors[i])
            widths[widest] -= 1
            excess -= 1

        return widths

    # =========================================================================
    # Row Rendering
    # =========================================================================

    def _fit(self, text: str, width: int) -> List[str]:
        """Fit a cell into a column: wrap when folding, truncate otherwise."""
        fitted = []
        for line in text.split("\n"):
            if self.fold:
                fitted.extend(
                    textwrap.wrap(
                        line,
                        width,
                        break_long_words=True,
                        break_on_hyphens=False,
                        replace_whitespace=False,
                        expand_tabs=False,
                        drop_whitespace=False,
                    ) or [""]
                )
            else:
                fitted.append(self.truncate(line, width))
        return fitted

    def _row_lines(self, cells: List[str], widths: List[int]) -> List[str]:
        """Render one logical row as one or more display lines."""
        s = self.symbols
        columns = [self._fit(text, w) for text, w in zip(cells, widths)]
        height = max((len(col) for col in columns), default=1)

        lines = []
        for n in range(height):
            parts = [s.box_v]
            for col, w in zip(columns, widths):
                text = col[n] if n < len(col) else ""
                parts.append(f" {text.ljust(w)} ")
                parts.append(s.box_v)
            lines.append("".join(parts))
        return lines

    def _separator(self, widths: List[int], position: str = "middle") -> str:
        """Render horizontal separator line."""
        s = self.symbols

        if position == "top":
            left, cross, right = s.box_tl, s.box_t_down, s.box_tr
        elif position == "bottom":
            left, cross, right = s.box_bl, s.box_t_up, s.box_br
        else:  # middle
            left, cross, right = s.box_t_right, s.box_cross, s.box_t_left

        parts = [left]
        for i, w in enumerate(widths):
            parts.append(s.box_h * (w + 2))
            parts.append(cross if i < len(widths) - 1 else right)

        return "".join(parts)


def _longest_line(text: str) -> int:
    return max(len(line) for line in text.split("\n"))
