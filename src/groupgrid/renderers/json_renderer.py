"""JSON renderer for grid views."""

from typing import Any, Sequence

from groupgrid.renderers.base import OutputFormat, format_cell
from groupgrid.renderers.schemas import ColumnInfo, DisplayRow, GridDocument
from groupgrid.tree.model import ColumnDescriptor, DisplayNode, GroupNode, TotalNode
from groupgrid.view.selection import SelectionStatus
from groupgrid.view.state import GridView


class JSONRenderer:
    """Renders a GridView as JSON."""

    format = OutputFormat.JSON

    def render(
        self,
        view: GridView,
        columns: Sequence[ColumnDescriptor],
        *,
        expanded: frozenset[str] = frozenset(),
        **options,
    ) -> str:
        """Render the view as JSON.

        Leaf values are formatted the same way the table renderer shows them;
        total stats stay numeric.

        Args:
            view: Rows and selection state to render
            columns: Column descriptors in display order
            expanded: Expanded group ids
            **options: Additional options (indent, etc.)

        Returns:
            JSON string representation of the view
        """
        document = self.to_document(view, columns, expanded=expanded)
        indent = options.get("indent", 2)
        return document.model_dump_json(indent=indent)

    def to_document(
        self,
        view: GridView,
        columns: Sequence[ColumnDescriptor],
        *,
        expanded: frozenset[str] = frozenset(),
    ) -> GridDocument:
        return GridDocument(
            group_keys=list(view.group_keys),
            columns=[
                ColumnInfo(id=c.id, label=c.label, value_kind=c.value_kind.value)
                for c in columns
            ],
            rows=[self._row(node, status, columns, expanded) for node, status in view.rows],
            hit_count=view.hit_count,
            selected_count=view.selected_count,
            header_selection=view.header_status.value,
        )

    def _row(
        self,
        node: DisplayNode,
        status: SelectionStatus,
        columns: Sequence[ColumnDescriptor],
        expanded: frozenset[str],
    ) -> DisplayRow:
        base: dict[str, Any] = {
            "id": node.id,
            "kind": node.kind,
            "depth": node.depth,
            "selection": status.value,
        }
        if isinstance(node, TotalNode):
            return DisplayRow(**base, label=node.label, stats=dict(node.stats))
        if isinstance(node, GroupNode):
            return DisplayRow(
                **base,
                group_key=node.group_key,
                group_value=node.group_value,
                item_count=node.item_count,
                expanded=node.id in expanded,
            )
        return DisplayRow(
            **base,
            record_id=node.record.id,
            values={c.id: format_cell(node.record.get(c.id), c) for c in columns},
        )
