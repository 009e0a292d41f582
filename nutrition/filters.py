from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Optional

import pandas as pd

from nutrition.config import ALL_CATEGORIES, COLOR_MODES, DEFAULT_MAX_CALORIES


ColorMode = Literal["category", "caffeine"]

# Column names are accepted as color-by values too.
COLOR_MODE_ALIASES = {
    "category": "category",
    "beverage_category": "category",
    "caffeine": "caffeine",
    "caffeine (mg)": "caffeine",
}


@dataclass(frozen=True)
class ControlState:
    max_calories: float = DEFAULT_MAX_CALORIES
    selected_category: str = ALL_CATEGORIES
    color_mode: ColorMode = "category"


def _as_float(value: object, default: float) -> float:
    try:
        out = float(value)  # type: ignore[arg-type]
    except Exception:
        return default
    if out != out:
        return default
    return out


def normalize_color_mode(value: object) -> ColorMode:
    key = str(value or "").strip().lower()
    mode = COLOR_MODE_ALIASES.get(key, "category")
    return mode if mode in COLOR_MODES else "category"  # type: ignore[return-value]


def normalize_controls(raw: dict, *, categories: Optional[Iterable[str]] = None) -> ControlState:
    max_calories = _as_float(raw.get("max_calories", DEFAULT_MAX_CALORIES), DEFAULT_MAX_CALORIES)

    selected_category = raw.get("selected_category")
    selected_category = ALL_CATEGORIES if selected_category in (None, "") else str(selected_category)
    if categories is not None and selected_category != ALL_CATEGORIES and selected_category not in set(categories):
        # Stale selection from a previous dataset; the widget no longer offers it.
        selected_category = ALL_CATEGORIES

    return ControlState(
        max_calories=max_calories,
        selected_category=selected_category,
        color_mode=normalize_color_mode(raw.get("color_mode")),
    )


def filter_beverages(df: pd.DataFrame, controls: ControlState) -> pd.DataFrame:
    if df.empty:
        return df.copy()
    filtered = df[df["calories"] <= controls.max_calories]
    if controls.selected_category != ALL_CATEGORIES:
        filtered = filtered[filtered["category"] == controls.selected_category]
    return filtered.copy()


def format_filter_summary(controls: ControlState) -> str:
    cat_chip = "Category: All" if controls.selected_category == ALL_CATEGORIES else f"Category: {controls.selected_category}"
    cal_chip = f"Calories: ≤ {controls.max_calories:,.0f}"
    color_chip = "Color: Category" if controls.color_mode == "category" else "Color: Caffeine"
    return "".join([f"<span class='chip'>{txt}</span>" for txt in [cat_chip, cal_chip, color_chip]])
