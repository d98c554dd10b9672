"""
Schema — Column definitions and ranked sorting for tables

A table is declared as an ordered list of SchemaField plus row lists whose
cells line up with the fields. The field type drives both sorting and
human-readable cell formatting.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Sequence


class FieldType(Enum):
    """Value kind of a table column."""
    INT = "int"
    STRING = "string"
    BOOL = "bool"
    INTERFACE = "interface"


@dataclass(frozen=True)
class SchemaField:
    """
    One table column.

    Attributes:
        name: Column name, used as header and as the key in machine formats
        type: Value kind (drives sorting and formatting)
        size: Display-width hint for the human-readable grid
    """
    name: str
    type: FieldType = FieldType.STRING
    size: int = 10


def format_cell(value: Any) -> str:
    """Format a cell value for human-readable and CSV output."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _sort_key(value: Any, field_type: FieldType):
    # None sorts before any value of the column
    if value is None:
        return (0, 0)
    if field_type == FieldType.INT:
        return (1, int(value))
    if field_type == FieldType.BOOL:
        return (1, bool(value))
    if field_type == FieldType.STRING:
        return (1, str(value))
    return (1, format_cell(value))


class TableSorter:
    """
    Stable multi-key sorter for table rows.

    Usage:
        TableSorter(schema).order_by("ID", "DATACENTER").sort(rows)

    Ties on an earlier key are broken by the next key, in declared order.
    Rows equal on every key keep their original relative order.
    """

    def __init__(self, schema: Sequence[SchemaField]):
        self.schema = list(schema)
        self._keys: List[int] = []

    def order_by(self, *field_names: str) -> 'TableSorter':
        """
        Set the ranked list of fields to sort by.

        Raises:
            ValueError: If a name is not a field of the schema
        """
        names = [f.name for f in self.schema]
        keys = []
        for name in field_names:
            if name not in names:
                raise ValueError(f"Unknown sort field '{name}'. Valid: {', '.join(names)}")
            keys.append(names.index(name))
        self._keys = keys
        return self

    def sort(self, rows: List[list]) -> List[list]:
        """Sort rows in place and return them."""
        keys = self._keys
        schema = self.schema
        rows.sort(key=lambda row: tuple(_sort_key(row[i], schema[i].type) for i in keys))
        return rows
