"""
CsvRenderer — Render table rows as CSV

Header row with the field names, then one line per row.
Cells are formatted the same way as in the human-readable grid.
"""

import csv
import io
import json
from typing import TYPE_CHECKING, Any, Dict, List

from .base import BaseRenderer
from .schema import format_cell

if TYPE_CHECKING:
    from . import Table


class CsvRenderer(BaseRenderer):
    """Render rows as comma-separated values."""

    def render(self, table: "Table", title: str = "", subtitle: str = "") -> str:
        headers = [f.name for f in table.schema]
        rows = [[format_cell(cell) for cell in row] for row in table.data]
        return dump_csv(headers, rows)


def dump_csv(headers: List[str], rows: List[List[Any]]) -> str:
    """Write a header and rows as CSV text."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue().rstrip("\n")


def raw_cell(value: Any) -> str:
    """Format a raw-dump cell; lists and mappings are written as JSON."""
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return format_cell(value)


def flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """
    Flatten nested mappings into dotted keys.

    Lists are kept whole, as single cells.
    """
    flat = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(flatten(value, prefix=f"{name}."))
        else:
            flat[name] = value
    return flat
