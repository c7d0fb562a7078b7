"""Table renderer using Rich for terminal output."""

import io
from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from groupgrid.renderers.base import CHECKBOX_GLYPHS, OutputFormat, footer_text, format_cell
from groupgrid.tree.model import ColumnDescriptor, DisplayNode, GroupNode, LeafNode, TotalNode
from groupgrid.view.selection import SelectionStatus
from groupgrid.view.state import GridView

INDENT = "  "


class TableRenderer:
    """Renders a GridView as a Rich table."""

    format = OutputFormat.TABLE

    def render(
        self,
        view: GridView,
        columns: Sequence[ColumnDescriptor],
        *,
        expanded: frozenset[str] = frozenset(),
        show_footer: bool = True,
        **options,
    ) -> str:
        """Render the view as a text table.

        Args:
            view: Rows and selection state to render
            columns: Column descriptors in display order
            expanded: Expanded group ids (for the ▾/▸ markers)
            show_footer: Append the hits/selection summary
            **options: Additional options (width, etc.)

        Returns:
            Plain text rendering of the table
        """
        table = Table(header_style="bold")
        # Text everywhere: checkbox glyphs and cell values must not parse as markup
        table.add_column(Text(CHECKBOX_GLYPHS[view.header_status]), no_wrap=True)
        table.add_column(Text("Group"), no_wrap=True)
        for column in columns:
            table.add_column(
                Text(column.label),
                justify="right" if column.is_aggregable else "left",
                no_wrap=True,
            )

        for node, status in view.rows:
            table.add_row(*self._cells(node, status, columns, expanded))

        console = Console(
            file=io.StringIO(),
            force_terminal=True,
            width=options.get("width", 160),
            record=True,
        )
        console.print(table)
        if show_footer:
            console.print(Text(footer_text(view)))

        return console.export_text()

    def _cells(
        self,
        node: DisplayNode,
        status: SelectionStatus,
        columns: Sequence[ColumnDescriptor],
        expanded: frozenset[str],
    ) -> list[Text]:
        checkbox = Text(CHECKBOX_GLYPHS[status])
        indent = INDENT * node.depth

        if isinstance(node, TotalNode):
            values = [
                format_cell(node.stats[c.id], c) if c.id in node.stats else ""
                for c in columns
            ]
            return [checkbox, Text(f"{indent}{node.label}", style="bold")] + [
                Text(v, style="bold") for v in values
            ]

        if isinstance(node, GroupNode):
            marker = "▾" if node.id in expanded else "▸"
            label = Text(f"{indent}{marker} {node.group_value}")
            label.append(f" ({node.item_count})", style="dim")
            return [checkbox, label] + [Text("") for _ in columns]

        assert isinstance(node, LeafNode)
        return [checkbox, Text(indent)] + [
            Text(format_cell(node.record.get(c.id), c)) for c in columns
        ]
