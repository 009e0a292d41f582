"""Tests for legend specs."""

from nutrition.filters import ControlState
from nutrition.legend import build_legend
from nutrition.render import ChartRenderer


def test_category_rows(state):
    legend = build_legend("category", state.colors)
    assert legend.title == "Color: Category"
    assert legend.rows == state.dataset.categories
    assert legend.row_height == 16
    assert legend.swatch_size == 10
    assert legend.gradient is None
    assert legend.labels == ()


def test_caffeine_gradient(state):
    legend = build_legend("caffeine", state.colors)
    assert legend.title == "Color: Caffeine (mg)"
    assert legend.rows == ()
    bar = legend.gradient
    assert (bar.width, bar.height) == (100, 12)
    assert [s.offset for s in bar.stops] == [0.0, 0.5, 1.0]
    assert [s.value for s in bar.stops] == [75.0, 167.5, 260.0]
    assert [(l.text, l.value) for l in legend.labels] == [("Low", 75.0), ("High", 260.0)]


def test_mode_round_trip_leaves_no_gradient(state):
    renderer = ChartRenderer()
    before = renderer.render(state, ControlState()).instructions.legend
    renderer.render(state, ControlState(color_mode="caffeine"))
    after = renderer.render(state, ControlState()).instructions.legend
    assert after == before
    assert after.gradient is None and after.labels == ()
