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

"""Pydantic schemas for the JSON grid output."""

from pydantic import BaseModel
from typing import Any, Dict, List, Literal, Optional


class ColumnInfo(BaseModel):
    id: str
    label: str
    value_kind: str


class DisplayRow(BaseModel):
    id: str
    kind: Literal["leaf", "group", "total"]
    depth: int
    selection: Literal["unchecked", "checked", "indeterminate", "disabled"]
    record_id: Optional[str] = None
    values: Dict[str, Any] = {}
    group_key: Optional[str] = None
    group_value: Optional[str] = None
    item_count: Optional[int] = None
    expanded: Optional[bool] = None
    label: Optional[str] = None
    stats: Dict[str, float | int] = {}


class GridDocument(BaseModel):
    group_keys: List[str]
    columns: List[ColumnInfo]
    rows: List[DisplayRow]
    hit_count: int
    selected_count: int
    header_selection: Literal["unchecked", "checked", "indeterminate", "disabled"]
