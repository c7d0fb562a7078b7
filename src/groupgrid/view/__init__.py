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

"""Flattened display view, selection model and grid state."""

from groupgrid.view.flattener import GRAND_TOTAL_ID, Flattener, flatten
from groupgrid.view.selection import (
    SelectionStatus,
    leaf_ids_under,
    status_of,
    toggle,
)
from groupgrid.view.state import (
    GridState,
    GridView,
    add_group_key,
    clear_group_keys,
    collapse_all,
    compute_view,
    expand_all,
    remove_group_key,
    toggle_all_selection,
    toggle_expansion,
    toggle_selection,
)

__all__ = [
    "GRAND_TOTAL_ID",
    "Flattener",
    "GridState",
    "GridView",
    "SelectionStatus",
    "add_group_key",
    "clear_group_keys",
    "collapse_all",
    "compute_view",
    "expand_all",
    "flatten",
    "leaf_ids_under",
    "remove_group_key",
    "status_of",
    "toggle",
    "toggle_all_selection",
    "toggle_expansion",
    "toggle_selection",
]
