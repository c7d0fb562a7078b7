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

"""Flattener - linearizes the group tree into display rows with totals."""

from __future__ import annotations

import logging
from collections.abc import Sequence, Set

from groupgrid.aggregation import aggregate
from groupgrid.tree.model import (
    ColumnDescriptor,
    DisplayNode,
    GroupNode,
    LeafNode,
    Node,
    Record,
    TotalNode,
    iter_tree_leaves,
)

logger = logging.getLogger(__name__)

GRAND_TOTAL_ID = "grand-total"
GRAND_TOTAL_LABEL = "Total"
TOTAL_ID_PREFIX = "total-"
TOTAL_LABEL_PREFIX = "Total "


class Flattener:
    """Walks a tree honoring expansion state.

    Leaf records per group are memoized by group id within one ``flatten``
    call, so nested totals reuse their descendants' leaf lists.
    """

    def __init__(self, columns: Sequence[ColumnDescriptor]) -> None:
        self.columns = list(columns)
        self._leaf_cache: dict[str, list[Record]] = {}

    def flatten(self, tree: Sequence[Node], expanded: Set[str]) -> list[DisplayNode]:
        self._leaf_cache = {}
        rows: list[DisplayNode] = []
        self._walk(tree, expanded, rows)

        if tree:
            records = [leaf.record for leaf in iter_tree_leaves(tree)]
            rows.append(
                TotalNode(
                    id=GRAND_TOTAL_ID,
                    label=GRAND_TOTAL_LABEL,
                    depth=0,
                    stats=aggregate(records, self.columns),
                )
            )

        logger.debug("Flattened %d top-level nodes into %d rows", len(tree), len(rows))
        return rows

    def _walk(
        self,
        nodes: Sequence[Node],
        expanded: Set[str],
        rows: list[DisplayNode],
    ) -> None:
        for node in nodes:
            rows.append(node)
            if isinstance(node, GroupNode) and node.id in expanded:
                self._walk(node.children, expanded, rows)
                rows.append(self._total_for(node))

    def _total_for(self, group: GroupNode) -> TotalNode:
        return TotalNode(
            id=f"{TOTAL_ID_PREFIX}{group.id}",
            label=f"{TOTAL_LABEL_PREFIX}{group.group_value}",
            depth=group.depth + 1,
            stats=aggregate(self._leaf_records(group), self.columns),
        )

    def _leaf_records(self, group: GroupNode) -> list[Record]:
        """All leaf records under ``group``, regardless of collapse state."""
        cached = self._leaf_cache.get(group.id)
        if cached is not None:
            return cached
        records: list[Record] = []
        for child in group.children:
            if isinstance(child, LeafNode):
                records.append(child.record)
            else:
                records.extend(self._leaf_records(child))
        self._leaf_cache[group.id] = records
        return records


def flatten(
    tree: Sequence[Node],
    expanded: Set[str],
    columns: Sequence[ColumnDescriptor],
) -> list[DisplayNode]:
    """Flatten a tree into the ordered display sequence.

    Expanded groups are followed by their children and a subtotal row; a
    collapsed group hides both. A grand total closes the sequence unless the
    tree is empty.

    Args:
        tree: Top-level nodes from the tree builder
        expanded: Ids of expanded groups
        columns: Column descriptors for aggregation

    Returns:
        Display nodes in pre-order, grand total last
    """
    return Flattener(columns).flatten(tree, expanded)
