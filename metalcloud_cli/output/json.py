"""
JsonRenderer — Render table rows as JSON for piping

One object per row, keyed by field name. Titles are not emitted so
the output parses back to exactly the row data.
"""

import json
from typing import TYPE_CHECKING, Any

from .base import BaseRenderer, to_plain

if TYPE_CHECKING:
    from . import Table


class JsonRenderer(BaseRenderer):
    """
    Render rows as a JSON array.

    Useful for:
    - Piping to jq or other tools
    - Machine-readable output
    """

    def __init__(self, *args, compact: bool = False, **kwargs):
        """
        Initialize JSON renderer.

        Args:
            compact: If True, output single line (no indentation)
            *args, **kwargs: Passed to BaseRenderer
        """
        super().__init__(*args, **kwargs)
        self.compact = compact

    def render(self, table: "Table", title: str = "", subtitle: str = "") -> str:
        """Render rows as a JSON array of objects."""
        return dump_json(self.records(table), compact=self.compact)


def dump_json(data: Any, compact: bool = False) -> str:
    """Serialize plain data as JSON, pretty-printed unless compact."""
    if compact:
        return json.dumps(data, default=to_plain, ensure_ascii=False)
    return json.dumps(data, indent=2, default=to_plain, ensure_ascii=False)
