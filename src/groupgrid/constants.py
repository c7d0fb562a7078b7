"""Constants for groupgrid configuration files and the built-in column set.

The default columns describe the people table used by the demo data; a
project config can replace them wholesale.
"""

from typing import Final

from groupgrid.tree.model import ColumnDescriptor, ValueKind

# Config file names
CONFIG_FILE_NAME: Final = ".groupgrid.json"

DEFAULT_COLUMNS: Final[list[ColumnDescriptor]] = [
    ColumnDescriptor("name", "Name", ValueKind.TEXT, "220px"),
    ColumnDescriptor("age", "Age", ValueKind.NUMBER, "50px"),
    ColumnDescriptor("birthday", "Birthday", ValueKind.DATE, "100px"),
    ColumnDescriptor("manager", "Manager", ValueKind.REFERENCE, "160px"),
    ColumnDescriptor("company", "Company", ValueKind.REFERENCE, "180px"),
    ColumnDescriptor("external", "Spirit Index", ValueKind.BOOLEAN, "70px"),
    ColumnDescriptor("country", "Country", ValueKind.TEXT, "100px"),
    ColumnDescriptor("favSongs", "Favourite Songs", ValueKind.TEXT, "250px"),
    ColumnDescriptor("favColor", "Favourite Colour", ValueKind.COLOR, "120px"),
    ColumnDescriptor("files", "Files", ValueKind.FILE_LIST, "80px"),
]

DEFAULT_SEARCH_FIELDS: Final[list[str]] = ["name", "company"]


def get_default_columns() -> list[ColumnDescriptor]:
    """Get a copy of the built-in column set.

    Returns:
        List of column descriptors in display order.
    """
    return DEFAULT_COLUMNS.copy()
