from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from nutrition.scales import ColorDomains


ROW_HEIGHT = 16
SWATCH_SIZE = 10
GRADIENT_WIDTH = 100
GRADIENT_HEIGHT = 12
GRADIENT_OFFSETS = (0.0, 0.5, 1.0)


@dataclass(frozen=True)
class GradientStop:
    offset: float
    value: float


@dataclass(frozen=True)
class GradientBar:
    width: float
    height: float
    stops: Tuple[GradientStop, ...]


@dataclass(frozen=True)
class LegendLabel:
    text: str
    value: float


@dataclass(frozen=True)
class LegendSpec:
    mode: str
    title: str
    rows: Tuple[str, ...] = ()
    row_height: float = ROW_HEIGHT
    swatch_size: float = SWATCH_SIZE
    gradient: Optional[GradientBar] = None
    labels: Tuple[LegendLabel, ...] = ()


def build_legend(color_mode: str, domains: ColorDomains) -> LegendSpec:
    """Legend for the given color mode, built from nothing on every call."""
    if color_mode == "category":
        return LegendSpec(mode="category", title="Color: Category", rows=tuple(domains.categories))

    lo, hi = domains.caffeine
    stops = tuple(GradientStop(offset=o, value=lo + o * (hi - lo)) for o in GRADIENT_OFFSETS)
    return LegendSpec(
        mode="caffeine",
        title="Color: Caffeine (mg)",
        gradient=GradientBar(width=GRADIENT_WIDTH, height=GRADIENT_HEIGHT, stops=stops),
        labels=(LegendLabel("Low", lo), LegendLabel("High", hi)),
    )
