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

"""Grid tree model - records, columns and the Leaf/Group/Total node variants."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Union


class ValueKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    REFERENCE = "reference"
    COLOR = "color"
    FILE_LIST = "file-list"


@dataclass(frozen=True)
class ColumnDescriptor:
    id: str
    label: str
    value_kind: ValueKind = ValueKind.TEXT
    width: str | None = None  # display hint only

    @property
    def is_aggregable(self) -> bool:
        return self.value_kind == ValueKind.NUMBER

    def to_dict(self) -> dict:
        result = {"id": self.id, "label": self.label, "value_kind": self.value_kind.value}
        if self.width is not None:
            result["width"] = self.width
        return result

    @classmethod
    def from_dict(cls, data: dict) -> ColumnDescriptor:
        return cls(
            id=data["id"],
            label=data.get("label", data["id"]),
            value_kind=ValueKind(data.get("value_kind", "text")),
            width=data.get("width"),
        )


@dataclass(frozen=True)
class Reference:
    """A referenced entity (person, company) shown by its display name."""

    name: str
    initials: str | None = None

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Record:
    id: str
    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the caller's mapping so a record cannot change under the tree.
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __hash__(self) -> int:
        return hash(self.id)

    def get(self, column_id: str, default: Any = None) -> Any:
        return self.values.get(column_id, default)


@dataclass(frozen=True)
class LeafNode:
    id: str
    record: Record
    depth: int

    kind = "leaf"


@dataclass(frozen=True)
class GroupNode:
    id: str
    group_key: str
    group_value: str
    item_count: int
    depth: int
    children: tuple[Node, ...] = ()

    kind = "group"

    def iter_leaves(self) -> Iterator[LeafNode]:
        """Yield every leaf descendant in display order."""
        for child in self.children:
            if isinstance(child, LeafNode):
                yield child
            else:
                yield from child.iter_leaves()


@dataclass(frozen=True)
class TotalNode:
    """Synthetic subtotal row; only the flattener creates these."""

    id: str
    label: str
    depth: int
    stats: Mapping[str, float | int] = field(default_factory=dict)

    kind = "total"


Node = Union[LeafNode, GroupNode]
DisplayNode = Union[LeafNode, GroupNode, TotalNode]


def iter_tree_leaves(nodes: list[Node] | tuple[Node, ...]) -> Iterator[LeafNode]:
    """Yield every leaf reachable from a list of top-level nodes."""
    for node in nodes:
        if isinstance(node, LeafNode):
            yield node
        else:
            yield from node.iter_leaves()


def iter_tree_groups(nodes: list[Node] | tuple[Node, ...]) -> Iterator[GroupNode]:
    """Yield every group node in pre-order."""
    for node in nodes:
        if isinstance(node, GroupNode):
            yield node
            yield from iter_tree_groups(node.children)
