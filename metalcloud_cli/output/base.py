"""
BaseRenderer — Abstract base class for table renderers

All renderers inherit from this class and implement render().
Provides common utilities for truncation, record conversion and
plain-data conversion of arbitrary cell values.

Renderers hold no global state: symbols and width are passed in,
so the same inputs always produce the same output.
"""

import dataclasses
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..presentation.symbols import ASCII, SymbolSet

if TYPE_CHECKING:
    from . import Table


def to_plain(value: Any) -> Any:
    """
    Convert a value to plain JSON/YAML-compatible data.

    Handles models exposing to_dict(), dataclasses, enums, and
    nested dicts/lists. Falls back to str() for anything else.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if hasattr(value, "to_dict"):
        return to_plain(value.to_dict())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_plain(dataclasses.asdict(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return str(value)


class BaseRenderer(ABC):
    """
    Abstract base class for all table renderers.

    Subclasses must implement render() method.
    """

    def __init__(
        self,
        symbols: Optional[SymbolSet] = None,
        width: Optional[int] = None,
        fold: bool = False
    ):
        """
        Initialize renderer.

        Args:
            symbols: SymbolSet for borders and ellipsis (ASCII if None)
            width: Available terminal width (None = unlimited)
            fold: Wrap cells instead of truncating when width is short
        """
        self.symbols = symbols or ASCII
        self.width = width
        self.fold = fold

    @abstractmethod
    def render(self, table: "Table", title: str = "", subtitle: str = "") -> str:
        """
        Render a table to a formatted string.

        Args:
            table: Table with schema and rows
            title: Title line (human-readable formats only)
            subtitle: Subtitle line (human-readable formats only)

        Returns:
            Formatted string for output
        """

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def records(self, table: "Table") -> List[Dict[str, Any]]:
        """Convert rows to records keyed by field name, one per row."""
        names = [f.name for f in table.schema]
        return [
            {name: to_plain(cell) for name, cell in zip(names, row)}
            for row in table.data
        ]

    def truncate(self, text: str, length: int) -> str:
        """
        Truncate text to length, ending with the ellipsis symbol.

        Args:
            text: Text to truncate
            length: Max length

        Returns:
            Truncated text or original if it fits
        """
        if len(text) <= length:
            return text

        ellipsis = self.symbols.ellipsis
        if length <= len(ellipsis):
            return text[:length]

        return text[:length - len(ellipsis)] + ellipsis

    def format_count(self, count: int, singular: str, plural: str = None) -> str:
        """
        Format count with singular/plural noun.

        Args:
            count: The count
            singular: Singular form (e.g., "record")
            plural: Plural form (default: singular + "s")

        Returns:
            Formatted string (e.g., "3 records", "1 record")
        """
        if plural is None:
            plural = singular + "s"
        noun = singular if count == 1 else plural
        return f"{count} {noun}"
