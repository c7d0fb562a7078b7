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

"""Tests for view/state.py."""

import dataclasses

import pytest

from groupgrid.tree.builder import build_tree
from groupgrid.view.selection import SelectionStatus
from groupgrid.view.state import (
    GridState,
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


def test_state_is_immutable():
    state = GridState()
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.group_keys = ("country",)


def test_add_group_key_appends_and_clears_expansion():
    state = GridState(group_keys=("country",), expanded=frozenset({"root/Germany"}))
    new = add_group_key(state, "manager")
    assert new.group_keys == ("country", "manager")
    assert new.expanded == frozenset()
    # the old state is untouched
    assert state.expanded == frozenset({"root/Germany"})


def test_add_existing_group_key_is_ignored():
    state = GridState(group_keys=("country",), expanded=frozenset({"root/Germany"}))
    assert add_group_key(state, "country") is state


def test_remove_group_key_clears_expansion():
    state = GridState(group_keys=("country", "manager"), expanded=frozenset({"root/Germany"}))
    new = remove_group_key(state, "country")
    assert new.group_keys == ("manager",)
    assert new.expanded == frozenset()


def test_clear_group_keys_keeps_selection():
    state = GridState(group_keys=("country",), selected=frozenset({"root/Germany|r2"}))
    new = clear_group_keys(state)
    assert new.group_keys == ()
    assert new.selected == state.selected


def test_toggle_expansion_twice_is_identity():
    state = GridState()
    once = toggle_expansion(state, "root/Germany")
    assert once.expanded == frozenset({"root/Germany"})
    assert toggle_expansion(once, "root/Germany") == state


def test_collapse_and_expand_all(people, columns):
    tree = build_tree(people, ["country", "manager"], columns)
    state = expand_all(GridState(group_keys=("country", "manager")), tree)
    assert len(state.expanded) == 7
    assert collapse_all(state).expanded == frozenset()


def test_toggle_selection_and_header(people, columns):
    tree = build_tree(people, ["country"], columns)
    state = toggle_selection(GridState(group_keys=("country",)), tree[1])
    assert state.selected == frozenset(
        {"root/Germany|r2", "root/Germany|r4", "root/Germany|r5"}
    )
    state = toggle_all_selection(state, tree)
    assert len(state.selected) == 5
    assert toggle_all_selection(state, tree).selected == frozenset()


class TestComputeView:
    """Tests for compute_view."""

    def test_grand_total_over_all_people(self, people, columns):
        view = compute_view(people, columns, GridState())
        total = view.nodes[-1]
        assert total.stats == {"age": 150}
        assert view.hit_count == 5
        assert view.selected_count == 0
        assert view.header_status == SelectionStatus.UNCHECKED

    def test_row_statuses(self, people, columns):
        state = GridState(
            group_keys=("country",),
            expanded=frozenset({"root/Germany"}),
            selected=frozenset({"root/Germany|r2"}),
        )
        view = compute_view(people, columns, state)
        statuses = {node.id: status for node, status in view.rows}
        assert statuses["root/Germany"] == SelectionStatus.INDETERMINATE
        assert statuses["root/Germany|r2"] == SelectionStatus.CHECKED
        assert statuses["root/Germany|r4"] == SelectionStatus.UNCHECKED
        assert statuses["root/Canada"] == SelectionStatus.UNCHECKED
        assert statuses["total-root/Germany"] == SelectionStatus.DISABLED
        assert statuses["grand-total"] == SelectionStatus.DISABLED
        assert view.selected_count == 1
        assert view.header_status == SelectionStatus.INDETERMINATE

    def test_changing_group_keys_hides_old_expansion(self, people, columns):
        state = GridState(group_keys=("country",), expanded=frozenset({"root/Germany"}))
        state = add_group_key(state, "manager")
        view = compute_view(people, columns, state)
        assert all(node.kind != "leaf" for node in view.nodes)

    def test_selection_survives_regrouping_only_for_matching_ids(self, people, columns):
        state = GridState(selected=frozenset({"root|r1"}))
        assert compute_view(people, columns, state).selected_count == 1
        regrouped = add_group_key(state, "country")
        view = compute_view(people, columns, regrouped)
        assert view.selected_count == 0
        assert regrouped.selected == frozenset({"root|r1"})

    def test_prebuilt_tree_is_used(self, people, columns):
        tree = build_tree(people, ["manager"], columns)
        view = compute_view(people, columns, GridState(group_keys=("manager",)), tree=tree)
        assert [n.id for n in view.nodes] == ["root/Lila", "root/Slaven", "grand-total"]

    def test_empty_records(self, columns):
        view = compute_view([], columns, GridState(group_keys=("country",)))
        assert view.rows == []
        assert view.hit_count == 0
        assert view.group_keys == ("country",)
