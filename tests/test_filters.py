"""Tests for control normalization and filtering."""

import pytest

from nutrition.filters import ControlState, filter_beverages, format_filter_summary, normalize_controls


class TestNormalizeControls:
    def test_defaults(self):
        assert normalize_controls({}) == ControlState(max_calories=600, selected_category="all", color_mode="category")

    def test_numeric_strings(self):
        assert normalize_controls({"max_calories": "250"}).max_calories == 250

    @pytest.mark.parametrize("bad", ["lots", None, float("nan")])
    def test_bad_numbers_fall_back(self, bad):
        assert normalize_controls({"max_calories": bad}).max_calories == 600

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("category", "category"),
            ("caffeine", "caffeine"),
            ("Beverage_category", "category"),
            ("Caffeine (mg)", "caffeine"),
            ("sparkles", "category"),
        ],
    )
    def test_color_mode_aliases(self, raw, expected):
        assert normalize_controls({"color_mode": raw}).color_mode == expected

    def test_blank_category_is_all(self):
        assert normalize_controls({"selected_category": ""}).selected_category == "all"

    def test_unknown_category_kept_without_catalog(self):
        assert normalize_controls({"selected_category": "Smoothies"}).selected_category == "Smoothies"

    def test_stale_category_reset_with_catalog(self):
        controls = normalize_controls({"selected_category": "Smoothies"}, categories=["Coffee"])
        assert controls.selected_category == "all"


class TestFilterBeverages:
    def test_calorie_bound_is_inclusive(self, dataset):
        out = filter_beverages(dataset.frame, ControlState(max_calories=130))
        assert sorted(out["calories"].tolist()) == [0, 4, 70, 130]

    def test_monotonic_in_max_calories(self, dataset):
        previous = set()
        for limit in [0, 4, 50, 130, 500, 600]:
            current = set(filter_beverages(dataset.frame, ControlState(max_calories=limit))["prep"])
            assert previous <= current
            previous = current

    def test_zero_calories_only_zero_records(self, dataset):
        out = filter_beverages(dataset.frame, ControlState(max_calories=0))
        assert out["name"].tolist() == ["Tazo Tea"]

    def test_category_exact_match(self, dataset):
        out = filter_beverages(dataset.frame, ControlState(selected_category="Coffee"))
        assert out["name"].tolist() == ["Brewed Coffee"]

    def test_category_case_sensitive(self, dataset):
        assert filter_beverages(dataset.frame, ControlState(selected_category="coffee")).empty

    def test_all_skips_category(self, dataset):
        assert len(filter_beverages(dataset.frame, ControlState(selected_category="all"))) == len(dataset)

    def test_returns_copy(self, dataset):
        out = filter_beverages(dataset.frame, ControlState())
        out.loc[:, "name"] = "x"
        assert "x" not in dataset.frame["name"].tolist()


def test_filter_summary_chips():
    html = format_filter_summary(ControlState(max_calories=250, selected_category="Coffee", color_mode="caffeine"))
    assert html.count("<span class='chip'>") == 3
    assert "Category: Coffee" in html
    assert "Color: Caffeine" in html
