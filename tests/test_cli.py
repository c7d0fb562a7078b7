"""Tests for CLI commands: render, columns, config."""

import json

import pytest
from click.testing import CliRunner

from groupgrid.cli import main
from groupgrid.constants import CONFIG_FILE_NAME


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _render_json(*args):
    runner = CliRunner()
    result = runner.invoke(main, ["render", "--format", "json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def _row_ids(data):
    return [row["id"] for row in data["rows"]]


@pytest.fixture
def people_file(tmp_path):
    path = tmp_path / "people.json"
    path.write_text(json.dumps([
        {"id": "r1", "name": "Ed Metz", "age": 20, "country": "Norway", "manager": "Lila"},
        {"id": "r2", "name": "Marit Bjørgen", "age": 25, "country": "Germany", "manager": "Slaven"},
        {"id": "r3", "name": "Navid", "age": 40, "country": "Germany", "manager": "Lila"},
    ]))
    return path


@pytest.fixture
def narrow_config(tmp_path):
    """Project config with three short columns so table cells never truncate."""
    (tmp_path / CONFIG_FILE_NAME).write_text(json.dumps({
        "columns": [
            {"id": "name", "label": "Name"},
            {"id": "age", "label": "Age", "value_kind": "number"},
            {"id": "country", "label": "Country"},
        ],
        "search_fields": ["name"],
    }))


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_render_demo_grouped_collapsed():
    data = _render_json("--demo", "12", "-g", "country")
    assert _row_ids(data) == [
        "root/Canada",
        "root/Croatia",
        "root/Germany",
        "root/Iran",
        "root/Norway",
        "root/Zimbabwe",
        "grand-total",
    ]
    assert data["hit_count"] == 12


def test_render_demo_expand_group():
    data = _render_json("--demo", "12", "-g", "country", "-e", "root/Germany")
    assert len(data["rows"]) == 10
    assert _row_ids(data)[2:6] == [
        "root/Germany",
        "root/Germany|row-0",
        "root/Germany|row-6",
        "total-root/Germany",
    ]


def test_render_select_group(people_file):
    data = _render_json(str(people_file), "-g", "country", "-s", "root/Germany")
    assert data["selected_count"] == 2
    assert data["header_selection"] == "indeterminate"
    assert data["rows"][0]["selection"] == "checked"


def test_render_select_all_and_expand_all(people_file):
    data = _render_json(str(people_file), "-g", "country", "-g", "manager",
                        "--expand-all", "--select-all")
    assert data["selected_count"] == 3
    assert data["header_selection"] == "checked"
    assert "total-root/Germany/Lila" in _row_ids(data)


def test_render_unknown_selection_is_ignored(people_file):
    data = _render_json(str(people_file), "-s", "root|nope", "-s", "root|r1")
    assert data["selected_count"] == 1


def test_render_search(people_file, narrow_config):
    data = _render_json(str(people_file), "--search", "NAV")
    assert [r.get("record_id") for r in data["rows"][:-1]] == ["r3"]
    assert data["hit_count"] == 1


def test_render_grand_total(people_file):
    data = _render_json(str(people_file))
    assert data["rows"][-1]["stats"]["age"] == 85


def test_render_table(people_file, narrow_config):
    result = CliRunner().invoke(main, [
        "render", str(people_file), "-g", "country", "-e", "root/Germany",
    ])
    assert result.exit_code == 0, result.output
    assert "▾ Germany" in result.output
    assert "Total Germany" in result.output
    assert "65" in result.output
    assert "3 hits | No rows selected" in result.output


def test_render_group_by_from_config(people_file, tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text(json.dumps({
        "grouping": {"group_by": ["manager"]},
    }))
    data = _render_json(str(people_file))
    assert _row_ids(data) == ["root/Lila", "root/Slaven", "grand-total"]


def test_render_group_by_from_env(people_file, monkeypatch):
    monkeypatch.setenv("GROUPGRID_GROUP_BY", "country")
    data = _render_json(str(people_file))
    assert data["group_keys"] == ["country"]


def test_render_date_bucket_from_config(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text(json.dumps({
        "grouping": {"date_bucket": "year"},
    }))
    data = _render_json("--demo", "5", "-g", "birthday")
    assert [r["group_value"] for r in data["rows"][:-1]] == ["1975", "1988", "1992", "2001"]


def test_render_unknown_group_column(people_file):
    result = CliRunner().invoke(main, ["render", str(people_file), "-g", "planet"])
    assert result.exit_code == 1
    assert "Unknown column 'planet'" in result.output


def test_render_duplicate_ids(tmp_path):
    path = tmp_path / "dupes.json"
    path.write_text(json.dumps([{"id": "a"}, {"id": "a"}]))
    result = CliRunner().invoke(main, ["render", str(path)])
    assert result.exit_code == 1
    assert "Duplicate record id 'a'" in result.output


def test_render_bad_records_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{")
    result = CliRunner().invoke(main, ["render", str(path)])
    assert result.exit_code == 1
    assert "Invalid records file" in result.output


def test_render_requires_input():
    result = CliRunner().invoke(main, ["render"])
    assert result.exit_code == 1
    assert "RECORDS_FILE or --demo" in result.output


def test_render_invalid_config(people_file, tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text(json.dumps({
        "grouping": {"date_bucket": "decade"},
    }))
    result = CliRunner().invoke(main, ["render", str(people_file)])
    assert result.exit_code == 1
    assert "date_bucket" in result.output


# ---------------------------------------------------------------------------
# columns / config
# ---------------------------------------------------------------------------


def test_columns_lists_defaults():
    result = CliRunner().invoke(main, ["columns"])
    assert result.exit_code == 0
    assert "birthday" in result.output
    assert "Spirit Index" in result.output


def test_config_init_creates_project_file(tmp_path):
    result = CliRunner().invoke(main, ["config", "init"])
    assert result.exit_code == 0, result.output
    data = json.loads((tmp_path / CONFIG_FILE_NAME).read_text())
    assert data["grouping"]["date_bucket"] == "exact"


def test_config_init_refuses_overwrite(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text("{}")
    result = CliRunner().invoke(main, ["config", "init"])
    assert result.exit_code == 1
    assert "already exists" in result.output
    assert CliRunner().invoke(main, ["config", "init", "--force"]).exit_code == 0


def test_config_init_global(tmp_path):
    result = CliRunner().invoke(main, ["config", "init", "--global"])
    assert result.exit_code == 0
    assert (tmp_path / "home" / CONFIG_FILE_NAME).exists()


def test_config_show_merges_sources(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text(json.dumps({"display": {"width": 90}}))
    result = CliRunner().invoke(main, ["config", "show"])
    assert result.exit_code == 0
    assert json.loads(result.output)["display"]["width"] == 90


def test_config_show_explicit_path(tmp_path):
    path = tmp_path / "other.json"
    path.write_text(json.dumps({"grouping": {"group_by": ["age"]}}))
    result = CliRunner().invoke(main, ["--config", str(path), "config", "show"])
    assert json.loads(result.output)["grouping"]["group_by"] == ["age"]


def test_config_validate_ok(tmp_path):
    CliRunner().invoke(main, ["config", "init"])
    result = CliRunner().invoke(main, ["config", "validate"])
    assert result.exit_code == 0


def test_config_validate_reports_unknown_fields(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text(json.dumps({"colour": "blue"}))
    result = CliRunner().invoke(main, ["config", "validate"])
    assert result.exit_code == 1
    assert "✗" in result.output


def test_config_validate_reports_non_integer_width(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text(json.dumps({"display": {"width": "wide"}}))
    result = CliRunner().invoke(main, ["config", "validate"])
    assert result.exit_code == 1
    assert "✗" in result.output
    assert not isinstance(result.exception, TypeError)
