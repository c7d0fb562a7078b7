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

"""Tree builder - partitions records into nested Group/Leaf nodes."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from groupgrid.tree.keys import GroupingOptions, collation_key, group_value
from groupgrid.tree.model import ColumnDescriptor, GroupNode, LeafNode, Node, Record

logger = logging.getLogger(__name__)

ROOT_PATH = "root"


class GroupingError(Exception):
    """Raised when the input breaks a tree identity invariant."""

    pass


class DuplicateRecordError(GroupingError):
    """Raised when two records in one input set share an id."""

    pass


class NodeIdCollisionError(GroupingError):
    """Raised when two distinct nodes would receive the same id."""

    pass


class TreeBuilder:
    """Builds the group tree for one (records, group keys) pair.

    Holds the id registry for a single build so collisions across the whole
    tree are detected; create a fresh builder (or call ``build_tree``) per build.
    """

    def __init__(
        self,
        columns: Sequence[ColumnDescriptor] | None = None,
        options: GroupingOptions | None = None,
    ) -> None:
        self.columns = {c.id: c for c in columns or ()}
        self.options = options or GroupingOptions()
        self._seen_ids: set[str] = set()

    def build(
        self,
        records: Sequence[Record],
        group_keys: Sequence[str],
        depth: int = 0,
        path: str = ROOT_PATH,
    ) -> list[Node]:
        self._seen_ids = set()
        _check_unique_records(records)
        nodes = self._build_level(list(records), tuple(group_keys), depth, path)
        logger.info(
            "Built tree: %d records, %d group keys, %d top-level nodes",
            len(records), len(group_keys), len(nodes),
        )
        return nodes

    def _claim(self, node_id: str) -> str:
        if node_id in self._seen_ids:
            raise NodeIdCollisionError(f"Node id '{node_id}' produced twice")
        self._seen_ids.add(node_id)
        return node_id

    def _build_level(
        self,
        records: list[Record],
        group_keys: tuple[str, ...],
        depth: int,
        path: str,
    ) -> list[Node]:
        if not group_keys:
            return [
                LeafNode(id=self._claim(f"{path}|{r.id}"), record=r, depth=depth)
                for r in records
            ]

        key, remaining = group_keys[0], group_keys[1:]
        column = self.columns.get(key)

        partitions: dict[str, list[Record]] = {}
        for record in records:
            value = group_value(record, key, column, self.options)
            partitions.setdefault(value, []).append(record)

        logger.debug(
            "Partitioned %d records by %s at depth %d into %d groups",
            len(records), key, depth, len(partitions),
        )

        groups: list[Node] = []
        for value in sorted(partitions, key=collation_key):
            items = partitions[value]
            group_path = f"{path}/{value}"
            group_id = self._claim(group_path)
            groups.append(
                GroupNode(
                    id=group_id,
                    group_key=key,
                    group_value=value,
                    item_count=len(items),
                    depth=depth,
                    children=tuple(
                        self._build_level(items, remaining, depth + 1, group_path)
                    ),
                )
            )
        return groups


def _check_unique_records(records: Sequence[Record]) -> None:
    seen: set[str] = set()
    for record in records:
        if record.id in seen:
            raise DuplicateRecordError(f"Duplicate record id '{record.id}'")
        seen.add(record.id)


def build_tree(
    records: Sequence[Record],
    group_keys: Sequence[str],
    columns: Sequence[ColumnDescriptor] | None = None,
    *,
    depth: int = 0,
    path: str = ROOT_PATH,
    options: GroupingOptions | None = None,
) -> list[Node]:
    """Convenience function to build the group tree.

    Args:
        records: Filtered records, in display order
        group_keys: Column ids to group by, outermost first
        columns: Column descriptors (used for per-kind value resolution)
        depth: Depth of the top-level nodes
        path: Id prefix of the top-level nodes
        options: Group value resolution options

    Returns:
        Top-level nodes: groups sorted by value, or leaves in input order
    """
    builder = TreeBuilder(columns, options)
    return builder.build(records, group_keys, depth=depth, path=path)
