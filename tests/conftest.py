"""Shared pytest fixtures for the beverage explorer."""

import pytest

from nutrition.data import dataset_from_rows
from nutrition.render import build_app_state


def make_row(name, prep="Grande", category="Classic Espresso Drinks", calories="100", sugar="10", caffeine="75"):
    return {
        "Beverage_category": category,
        "Beverage": name,
        "Beverage_prep": prep,
        "Calories": calories,
        " Sugars (g)": sugar,
        "Caffeine (mg)": caffeine,
    }


SAMPLE_ROWS = [
    make_row("Caffe Latte", "Short Nonfat Milk", calories="70", sugar="10", caffeine="75"),
    make_row("Caffe Latte", "Grande Nonfat Milk", calories="130", sugar="18", caffeine="150"),
    make_row("Brewed Coffee", "Tall", category="Coffee", calories="4", sugar="0", caffeine="260"),
    make_row("Tazo Tea", "Venti", category="Tazo Tea Drinks", calories="0", sugar="0", caffeine=""),
    make_row("Java Chip", "Venti Whole Milk", category="Frappuccino Blended Coffee", calories="510", sugar="84", caffeine="Varies"),
    make_row("Broken Row", "Tall", calories="abc", sugar="5"),
    make_row("Too Much", "Venti", category="Frappuccino Blended Coffee", calories="650", sugar="90", caffeine="100"),
]


@pytest.fixture
def sample_rows():
    return [dict(r) for r in SAMPLE_ROWS]


@pytest.fixture
def dataset(sample_rows):
    return dataset_from_rows(sample_rows)


@pytest.fixture
def state(dataset):
    return build_app_state(dataset)
