# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Grid state and its copy-on-write transitions.

Every transition takes a ``GridState`` and returns a new one; nothing is
mutated in place, so a caller can hold on to old states freely.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from groupgrid.tree.builder import build_tree
from groupgrid.tree.keys import GroupingOptions
from groupgrid.tree.model import (
    ColumnDescriptor,
    DisplayNode,
    Node,
    Record,
    iter_tree_groups,
)
from groupgrid.view import selection
from groupgrid.view.flattener import flatten
from groupgrid.view.selection import SelectionStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridState:
    group_keys: tuple[str, ...] = ()
    expanded: frozenset[str] = field(default_factory=frozenset)
    selected: frozenset[str] = field(default_factory=frozenset)


def add_group_key(state: GridState, column_id: str) -> GridState:
    """Append a grouping level; a key already present leaves the state as is."""
    if column_id in state.group_keys:
        return state
    logger.debug("Grouping by %s (was %s)", column_id, list(state.group_keys))
    return replace(
        state,
        group_keys=state.group_keys + (column_id,),
        expanded=frozenset(),
    )


def remove_group_key(state: GridState, column_id: str) -> GridState:
    logger.debug("Removing group key %s", column_id)
    return replace(
        state,
        group_keys=tuple(k for k in state.group_keys if k != column_id),
        expanded=frozenset(),
    )


def clear_group_keys(state: GridState) -> GridState:
    return replace(state, group_keys=(), expanded=frozenset())


def toggle_expansion(state: GridState, node_id: str) -> GridState:
    return replace(state, expanded=state.expanded.symmetric_difference({node_id}))


def collapse_all(state: GridState) -> GridState:
    return replace(state, expanded=frozenset())


def expand_all(state: GridState, tree: Sequence[Node]) -> GridState:
    """Expand every group currently in ``tree``."""
    return replace(state, expanded=frozenset(g.id for g in iter_tree_groups(tree)))


def toggle_selection(state: GridState, node: DisplayNode) -> GridState:
    return replace(state, selected=selection.toggle(node, state.selected))


def toggle_all_selection(state: GridState, tree: Sequence[Node]) -> GridState:
    return replace(state, selected=selection.toggle_all(tree, state.selected))


@dataclass
class GridView:
    """Everything a renderer needs for one frame."""

    rows: list[tuple[DisplayNode, SelectionStatus]]
    hit_count: int
    selected_count: int
    header_status: SelectionStatus
    group_keys: tuple[str, ...] = ()

    @property
    def nodes(self) -> list[DisplayNode]:
        return [node for node, _ in self.rows]


def compute_view(
    records: Sequence[Record],
    columns: Sequence[ColumnDescriptor],
    state: GridState,
    *,
    options: GroupingOptions | None = None,
    tree: Sequence[Node] | None = None,
) -> GridView:
    """Build, flatten and derive selection for one render pass.

    Args:
        records: Already filtered records
        columns: Column descriptors
        state: Current grid state
        options: Group value resolution options
        tree: A tree already built from ``records`` and ``state.group_keys``

    Returns:
        GridView with one (node, status) pair per display row
    """
    if tree is None:
        tree = build_tree(records, state.group_keys, columns, options=options)
    nodes = flatten(tree, state.expanded, columns)
    rows = [(node, selection.status_of(node, state.selected)) for node in nodes]
    return GridView(
        rows=rows,
        hit_count=len(records),
        selected_count=selection.count_selected(tree, state.selected),
        header_status=selection.status_of_all(tree, state.selected),
        group_keys=state.group_keys,
    )
