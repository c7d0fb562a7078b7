"""groupgrid - hierarchical grouping, subtotals and tri-state selection for tables.

Public API:
    - build_tree: records + group keys → tree of Group/Leaf nodes
    - flatten: tree + expanded ids → display rows with subtotals
    - status_of / toggle: tri-state selection over any display node
    - compute_view: all of the above for one GridState
    - render_view: GridView → table text or JSON

Example:
    from groupgrid import GridState, add_group_key, compute_view, render_view
    from groupgrid.constants import get_default_columns
    from groupgrid.mock import generate_mock_rows

    columns = get_default_columns()
    state = add_group_key(GridState(), "country")
    view = compute_view(generate_mock_rows(12), columns, state)
    print(render_view(view, columns))
"""

from typing import Sequence

from groupgrid.aggregation import aggregate
from groupgrid.renderers import JSONRenderer, OutputFormat, TableRenderer
from groupgrid.tree import (
    ColumnDescriptor,
    GroupNode,
    LeafNode,
    Record,
    Reference,
    TotalNode,
    ValueKind,
    build_tree,
)
from groupgrid.view import (
    GridState,
    GridView,
    SelectionStatus,
    add_group_key,
    clear_group_keys,
    collapse_all,
    compute_view,
    expand_all,
    flatten,
    leaf_ids_under,
    remove_group_key,
    status_of,
    toggle,
    toggle_all_selection,
    toggle_expansion,
    toggle_selection,
)

__version__ = "0.1.0"


def render_view(
    view: GridView,
    columns: Sequence[ColumnDescriptor],
    *,
    format: OutputFormat = OutputFormat.TABLE,
    expanded: frozenset[str] = frozenset(),
    **options,
) -> str:
    """Render a GridView to the specified format.

    Args:
        view: The view to render
        columns: Column descriptors in display order
        format: Output format (TABLE or JSON)
        expanded: Expanded group ids, for group markers
        **options: Format-specific options

    Returns:
        Rendered output
    """
    if format == OutputFormat.JSON:
        renderer = JSONRenderer()
    else:
        renderer = TableRenderer()

    return renderer.render(view, columns, expanded=expanded, **options)


__all__ = [
    # Models
    "ColumnDescriptor",
    "GroupNode",
    "LeafNode",
    "Record",
    "Reference",
    "TotalNode",
    "ValueKind",
    # State
    "GridState",
    "GridView",
    "SelectionStatus",
    "OutputFormat",
    # Core functions
    "aggregate",
    "build_tree",
    "flatten",
    "leaf_ids_under",
    "status_of",
    "toggle",
    "compute_view",
    "render_view",
    # Transitions
    "add_group_key",
    "remove_group_key",
    "clear_group_keys",
    "toggle_expansion",
    "collapse_all",
    "expand_all",
    "toggle_selection",
    "toggle_all_selection",
]
