"""
TransposedRenderer — Render records as vertical key/value listings

Used for single-record views (get/show commands), where a horizontal
grid would be wider than useful.
"""

from typing import TYPE_CHECKING

from .base import BaseRenderer
from .schema import format_cell

if TYPE_CHECKING:
    from . import Table


class TransposedRenderer(BaseRenderer):
    """
    Render each row as a vertical listing.

    Format:
        Title
        Subtitle
          ID:          100
          DATACENTER:  es-madrid
          DETAILS:     first line
                       second line
    """

    empty_message = "No data to display."

    def render(self, table: "Table", title: str = "", subtitle: str = "") -> str:
        """
        Render a Table as key/value blocks, one block per row.

        Args:
            table: Table with schema and rows
            title: Title line
            subtitle: Optional line under the title

        Returns:
            Formatted listing
        """
        lines = []
        if title:
            lines.append(title)
        if subtitle:
            lines.append(subtitle)

        if not table.data:
            lines.append(self.empty_message)
            return "\n".join(lines)

        names = [f.name for f in table.schema]
        label_width = max(len(name) for name in names) + 1

        for index, row in enumerate(table.data):
            if index > 0:
                lines.append("")
            for name, cell in zip(names, row):
                label = f"{name}:".ljust(label_width)
                value_lines = format_cell(cell).split("\n")
                lines.append(f"  {label}  {value_lines[0]}".rstrip())
                indent = " " * (label_width + 4)
                for extra in value_lines[1:]:
                    lines.append(f"{indent}{extra}".rstrip())

        return "\n".join(lines)
