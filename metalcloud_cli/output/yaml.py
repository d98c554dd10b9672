"""
YamlRenderer — Render table rows as a YAML list of mappings
"""

from typing import TYPE_CHECKING, Any

import yaml

from .base import BaseRenderer

if TYPE_CHECKING:
    from . import Table


class YamlRenderer(BaseRenderer):
    """Render rows as YAML, one mapping per row, fields in schema order."""

    def render(self, table: "Table", title: str = "", subtitle: str = "") -> str:
        return dump_yaml(self.records(table))


def dump_yaml(data: Any) -> str:
    """Serialize plain data as block-style YAML, keeping key order."""
    return yaml.safe_dump(
        data,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True
    ).rstrip("\n")
