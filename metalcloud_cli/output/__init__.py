"""
Output Module — Schema-driven table rendering

Commands build a Table (schema + rows) and render it in the format the
operator asked for. The same Table renders as a human-readable grid, JSON,
YAML or CSV without the command knowing which.

Usage:
    from metalcloud_cli.output import Table, SchemaField, FieldType, TableSorter

    schema = [
        SchemaField("ID", FieldType.INT, 6),
        SchemaField("LABEL", FieldType.STRING, 30),
    ]
    TableSorter(schema).order_by("ID").sort(rows)
    print(Table(schema, rows).render_table("Secrets", "", fmt))

Formats:
    ""      human-readable grid (or vertical listing when transposed)
    "json"  array of objects keyed by field name
    "yaml"  list of mappings keyed by field name
    "csv"   header row plus one line per row

Every entry point is a pure function of its arguments.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from ..errors import InvalidArgument
from ..presentation.symbols import ASCII, SymbolSet
from .base import BaseRenderer, to_plain
from .csv import CsvRenderer, dump_csv, flatten, raw_cell
from .detail import TransposedRenderer
from .json import JsonRenderer, dump_json
from .schema import FieldType, SchemaField, TableSorter, format_cell
from .table import TableRenderer
from .yaml import YamlRenderer, dump_yaml


# =============================================================================
# Format Registry
# =============================================================================

HUMAN_FORMAT = ""

# Machine formats, by name
MACHINE_RENDERERS = {
    "json": JsonRenderer,
    "yaml": YamlRenderer,
    "csv": CsvRenderer,
}

# Valid format values for the -format flag
VALID_FORMATS = (HUMAN_FORMAT, "json", "yaml", "csv")


def check_format(format: str) -> str:
    """
    Validate an output format name.

    Raises:
        InvalidArgument: If format is not one of VALID_FORMATS
    """
    if format not in VALID_FORMATS:
        raise InvalidArgument(
            f"Invalid format '{format}'. Supported values are 'json','csv','yaml'. "
            "The default format is human readable."
        )
    return format


def get_renderer(
    format: str,
    transposed: bool = False,
    symbols: Optional[SymbolSet] = None,
    width: Optional[int] = None,
    fold: bool = False
) -> BaseRenderer:
    """
    Get appropriate renderer instance.

    Args:
        format: Format name from VALID_FORMATS
        transposed: Use the vertical listing for the human-readable format
        symbols: SymbolSet for borders (ASCII if None)
        width: Terminal width for the grid (None = unlimited)
        fold: Wrap instead of truncate when the grid is too wide

    Returns:
        Renderer instance

    Raises:
        InvalidArgument: If format is invalid
    """
    check_format(format)

    if format in MACHINE_RENDERERS:
        return MACHINE_RENDERERS[format](symbols=symbols)

    if transposed:
        return TransposedRenderer(symbols=symbols)

    return TableRenderer(symbols=symbols, width=width, fold=fold)


# =============================================================================
# Table — Data envelope for rendering
# =============================================================================

@dataclass
class Table:
    """
    Ordered schema fields plus ordered rows.

    Every row must have exactly one cell per schema field, in schema order.

    Attributes:
        schema: Column definitions
        data: Row lists
    """
    schema: List[SchemaField]
    data: List[list] = field(default_factory=list)

    def __post_init__(self):
        expected = len(self.schema)
        for index, row in enumerate(self.data):
            if len(row) != expected:
                raise ValueError(
                    f"Row {index} has {len(row)} cells, schema has {expected} fields"
                )

    def render_table(
        self,
        title: str,
        subtitle: str,
        format: str,
        width: Optional[int] = None,
        symbols: SymbolSet = ASCII
    ) -> str:
        """
        Render as a grid (human-readable) or as records (machine formats).

        With width set, an over-wide grid has its cells truncated.
        """
        renderer = get_renderer(format, symbols=symbols, width=width)
        return renderer.render(self, title, subtitle)

    def render_table_foldable(
        self,
        title: str,
        subtitle: str,
        format: str,
        width: Optional[int] = None,
        symbols: SymbolSet = ASCII
    ) -> str:
        """
        Render like render_table, wrapping over-wide cells instead of truncating.

        Machine formats are unaffected by folding.
        """
        renderer = get_renderer(format, symbols=symbols, width=width, fold=True)
        return renderer.render(self, title, subtitle)

    def render_transposed_table(
        self,
        title: str,
        subtitle: str,
        format: str,
        symbols: SymbolSet = ASCII
    ) -> str:
        """Render each row as a vertical key/value listing (human-readable only)."""
        renderer = get_renderer(format, transposed=True, symbols=symbols)
        return renderer.render(self, title, subtitle)


# =============================================================================
# Raw Objects
# =============================================================================

def render_raw_object(obj: Any, format: str, type_name: str) -> str:
    """
    Serialize a full object graph, bypassing the schema/row model.

    Args:
        obj: Model (with to_dict), dataclass, dict or list
        format: "json", "yaml" or "csv"
        type_name: Object kind, for error messages

    Returns:
        Serialized object

    Raises:
        InvalidArgument: For the human-readable format or an unknown format
    """
    if format == HUMAN_FORMAT:
        raise InvalidArgument(
            f"Raw {type_name} output only works with the json, yaml and csv formats",
            hint="Add -format json or -format yaml"
        )
    check_format(format)

    data = to_plain(obj)

    if format == "json":
        return dump_json(data)
    if format == "yaml":
        return dump_yaml(data)

    records = data if isinstance(data, list) else [data]
    flat = [flatten(r) if isinstance(r, dict) else {"value": r} for r in records]
    headers = []
    for record in flat:
        for key in record:
            if key not in headers:
                headers.append(key)
    rows = [[raw_cell(record.get(h)) for h in headers] for record in flat]
    return dump_csv(headers, rows)


__all__ = [
    'Table', 'SchemaField', 'FieldType', 'TableSorter',
    'TableRenderer', 'TransposedRenderer', 'JsonRenderer', 'YamlRenderer', 'CsvRenderer',
    'BaseRenderer', 'VALID_FORMATS', 'HUMAN_FORMAT',
    'check_format', 'get_renderer', 'render_raw_object', 'format_cell', 'to_plain',
]
