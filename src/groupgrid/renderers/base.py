"""Base renderer, output formats and display formatting helpers."""

from enum import Enum
from typing import Any, Protocol, Sequence

from groupgrid.tree.model import ColumnDescriptor, Reference, ValueKind
from groupgrid.view.selection import SelectionStatus
from groupgrid.view.state import GridView


class OutputFormat(str, Enum):
    """Output format for rendering."""

    TABLE = "table"
    JSON = "json"


CHECKBOX_GLYPHS = {
    SelectionStatus.CHECKED: "[x]",
    SelectionStatus.UNCHECKED: "[ ]",
    SelectionStatus.INDETERMINATE: "[-]",
    SelectionStatus.DISABLED: "",
}


def format_cell(value: Any, column: ColumnDescriptor) -> str:
    """Format a raw field value for display in ``column``."""
    if value is None:
        return ""
    if isinstance(value, Reference):
        return value.name
    if column.value_kind == ValueKind.BOOLEAN:
        return "✓" if value else ""
    if column.value_kind == ValueKind.FILE_LIST and isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    if column.value_kind == ValueKind.COLOR:
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return f"{int(value):,}"
    if isinstance(value, int) and not isinstance(value, bool):
        return f"{value:,}"
    return str(value)


def footer_text(view: GridView) -> str:
    """Hit/selection summary line shown under the grid."""
    selected = (
        f"{view.selected_count} rows selected" if view.selected_count else "No rows selected"
    )
    return f"{view.hit_count} hits | {selected}"


class GridRenderer(Protocol):
    """Protocol for grid renderers."""

    format: OutputFormat

    def render(
        self,
        view: GridView,
        columns: Sequence[ColumnDescriptor],
        **options,
    ) -> str:
        """Render one grid view.

        Args:
            view: Rows and selection state to render
            columns: Column descriptors in display order
            **options: Additional format-specific options

        Returns:
            Rendered output
        """
        ...
