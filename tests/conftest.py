"""Pytest configuration and shared fixtures for groupgrid tests."""

import pytest

from groupgrid.tree.model import ColumnDescriptor, Record, Reference, ValueKind


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path, monkeypatch):
    """Keep user/project config files and env vars out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("GROUPGRID_GROUP_BY", "GROUPGRID_DATE_BUCKET",
                "GROUPGRID_OUTPUT_FORMAT", "GROUPGRID_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def columns():
    return [
        ColumnDescriptor("name", "Name", ValueKind.TEXT),
        ColumnDescriptor("age", "Age", ValueKind.NUMBER),
        ColumnDescriptor("country", "Country", ValueKind.TEXT),
        ColumnDescriptor("manager", "Manager", ValueKind.REFERENCE),
        ColumnDescriptor("birthday", "Birthday", ValueKind.DATE),
    ]


@pytest.fixture
def people():
    """Five people, ages 20..40.

    country: Canada(r3), Germany(r2, r4, r5), Norway(r1)
    manager: Lila(r1, r3, r4), Slaven(r2, r5)
    """
    return [
        Record("r1", {"name": "Ed Metz", "age": 20, "country": "Norway",
                      "manager": Reference("Lila", "L"), "birthday": "22.02.1992"}),
        Record("r2", {"name": "Marit Bjørgen", "age": 25, "country": "Germany",
                      "manager": Reference("Slaven", "S"), "birthday": "17.02.1992"}),
        Record("r3", {"name": "Kirsty Coventry", "age": 30, "country": "Canada",
                      "manager": Reference("Lila", "L"), "birthday": "03.11.1988"}),
        Record("r4", {"name": "Rudy Tremblay", "age": 35, "country": "Germany",
                      "manager": Reference("Lila", "L"), "birthday": "30.06.1975"}),
        Record("r5", {"name": "Navid", "age": 40, "country": "Germany",
                      "manager": Reference("Slaven", "S"), "birthday": "09.09.2001"}),
    ]
