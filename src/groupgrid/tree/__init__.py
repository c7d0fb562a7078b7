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

"""Record model and tree building."""

from groupgrid.tree.builder import (
    DuplicateRecordError,
    GroupingError,
    NodeIdCollisionError,
    TreeBuilder,
    build_tree,
)
from groupgrid.tree.keys import GroupingOptions, group_value
from groupgrid.tree.model import (
    ColumnDescriptor,
    DisplayNode,
    GroupNode,
    LeafNode,
    Node,
    Record,
    Reference,
    TotalNode,
    ValueKind,
)

__all__ = [
    "ColumnDescriptor",
    "DisplayNode",
    "DuplicateRecordError",
    "GroupNode",
    "GroupingError",
    "GroupingOptions",
    "LeafNode",
    "Node",
    "NodeIdCollisionError",
    "Record",
    "Reference",
    "TotalNode",
    "TreeBuilder",
    "ValueKind",
    "build_tree",
    "group_value",
]
