"""Deterministic sample people data for demos and tests."""

import random

from groupgrid.tree.model import Record, Reference

MANAGERS = [
    Reference("Lila", "L"),
    Reference("Slaven", "S"),
    Reference("Adrian", "A"),
    Reference("Viktoriya", "V"),
    Reference("Daniel", "D"),
]

COMPANIES = [
    Reference("Hintz, Schuppe and Lang"),
    Reference("Global Tech"),
    Reference("Alpha Solutions"),
]

NAMES = [
    "Ed Metz",
    "Marit Bjørgen",
    "Kirsty Coventry",
    "Rudy Tremblay",
    "Marlon Stolte",
    "Navid",
    "Adrian",
    "Slaven",
]

COUNTRIES = ["Germany", "Norway", "Zimbabwe", "Canada", "Iran", "Croatia"]
COLORS = ["#FF424C", "#C218FF", "#0078BD", "#4ADE80"]
SONGS = ["Nothing Compares 2 U", "Bohemian Rhapsody", "Imagine", "Purple Rain"]
BIRTHDAYS = ["22.02.1992", "03.11.1988", "17.02.1992", "30.06.1975", "09.09.2001"]


def generate_mock_rows(count: int, seed: int = 0) -> list[Record]:
    """Generate ``count`` sample records.

    Categorical fields cycle through fixed lists so group sizes are
    predictable; age and the external flag come from a seeded RNG.
    """
    rng = random.Random(seed)
    rows = []
    for i in range(count):
        rows.append(
            Record(
                id=f"row-{i}",
                values={
                    "name": NAMES[i % len(NAMES)],
                    "external": rng.random() > 0.5,
                    "age": 20 + rng.randrange(40),
                    "birthday": BIRTHDAYS[i % len(BIRTHDAYS)],
                    "manager": MANAGERS[i % len(MANAGERS)],
                    "company": COMPANIES[i % len(COMPANIES)],
                    "country": COUNTRIES[i % len(COUNTRIES)],
                    "favSongs": SONGS[i % len(SONGS)],
                    "favColor": COLORS[i % len(COLORS)],
                    "files": ("pdf", "doc", "xls"),
                },
            )
        )
    return rows
