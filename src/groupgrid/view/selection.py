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

"""Tri-state selection derived from the selected leaf ids."""

from __future__ import annotations

from collections.abc import Sequence, Set
from enum import Enum

from groupgrid.tree.model import DisplayNode, LeafNode, Node, TotalNode


class SelectionStatus(str, Enum):
    UNCHECKED = "unchecked"
    CHECKED = "checked"
    INDETERMINATE = "indeterminate"
    DISABLED = "disabled"


def leaf_ids_under(node: DisplayNode) -> tuple[str, ...]:
    if isinstance(node, LeafNode):
        return (node.id,)
    if isinstance(node, TotalNode):
        return ()
    return tuple(leaf.id for leaf in node.iter_leaves())


def _status_for_ids(ids: Sequence[str], selected: Set[str]) -> SelectionStatus:
    if not ids:
        return SelectionStatus.UNCHECKED
    count = sum(1 for leaf_id in ids if leaf_id in selected)
    if count == 0:
        return SelectionStatus.UNCHECKED
    if count == len(ids):
        return SelectionStatus.CHECKED
    return SelectionStatus.INDETERMINATE


def status_of(node: DisplayNode, selected: Set[str]) -> SelectionStatus:
    """Derive the checkbox status of any display node.

    Totals are never selectable. Group status is recomputed from its
    descendant leaves on every call; nothing is cached per group.
    """
    if isinstance(node, TotalNode):
        return SelectionStatus.DISABLED
    if isinstance(node, LeafNode):
        return SelectionStatus.CHECKED if node.id in selected else SelectionStatus.UNCHECKED
    return _status_for_ids(leaf_ids_under(node), selected)


def _toggle_ids(ids: Sequence[str], selected: Set[str]) -> frozenset[str]:
    if not ids:
        return frozenset(selected)
    if all(leaf_id in selected for leaf_id in ids):
        return frozenset(selected).difference(ids)
    return frozenset(selected).union(ids)


def toggle(node: DisplayNode, selected: Set[str]) -> frozenset[str]:
    """Toggle a node's whole leaf subtree and return the new selection.

    Fully selected subtrees are deselected; anything else (including a
    partially selected group) becomes fully selected. Totals are a no-op.
    """
    return _toggle_ids(leaf_ids_under(node), selected)


def _all_leaf_ids(tree: Sequence[Node]) -> tuple[str, ...]:
    ids: list[str] = []
    for node in tree:
        ids.extend(leaf_ids_under(node))
    return tuple(ids)


def status_of_all(tree: Sequence[Node], selected: Set[str]) -> SelectionStatus:
    """Header checkbox status over every leaf in the tree."""
    return _status_for_ids(_all_leaf_ids(tree), selected)


def toggle_all(tree: Sequence[Node], selected: Set[str]) -> frozenset[str]:
    """Header checkbox toggle, same select-all-on-partial policy as ``toggle``."""
    return _toggle_ids(_all_leaf_ids(tree), selected)


def count_selected(tree: Sequence[Node], selected: Set[str]) -> int:
    """Number of selected leaves currently present in the tree."""
    return sum(1 for leaf_id in _all_leaf_ids(tree) if leaf_id in selected)
