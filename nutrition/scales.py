"""Scale domains for the scatterplot.

Only the domains are decided here. Vega-Lite owns the scales themselves:
nice rounding, tick placement, pixel ranges and the color schemes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from nutrition.config import DEFAULT_X_MAX, DEFAULT_Y_MAX
from nutrition.data import BeverageDataset


CATEGORY_SCHEME = "tableau10"
CAFFEINE_SCHEME = "yelloworangered"
DEFAULT_CAFFEINE_DOMAIN = (0.0, 1.0)


@dataclass(frozen=True)
class ColorDomains:
    categories: Tuple[str, ...]
    caffeine: Tuple[float, float]


@dataclass(frozen=True)
class ColorEncoding:
    """Scale type and scheme for the fill, plus the color for values the scale cannot take."""

    type: str
    scheme: str
    domain: Tuple
    missing: Optional[str] = None


def _max_or(values: Iterable[float], fallback: float) -> float:
    # A zero maximum falls back too, matching `max || default`.
    peak = max(values, default=0.0)
    return float(peak) if peak else fallback


def positional_domains(dataset: BeverageDataset) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """x/y domains from the full (unfiltered) dataset, so axes stay put while filtering."""
    x_max = _max_or((r.calories for r in dataset.records), DEFAULT_X_MAX)
    y_max = _max_or((r.sugar for r in dataset.records), DEFAULT_Y_MAX)
    return (0.0, x_max), (0.0, y_max)


def caffeine_domain(extent: Optional[Tuple[float, float]]) -> Tuple[float, float]:
    if extent is None:
        return DEFAULT_CAFFEINE_DOMAIN
    lo, hi = extent
    if lo == hi:
        # A single caffeine value sits at the middle of the ramp.
        return lo - 0.5, hi + 0.5
    return float(lo), float(hi)


def color_domains(dataset: BeverageDataset) -> ColorDomains:
    return ColorDomains(categories=tuple(dataset.categories), caffeine=caffeine_domain(dataset.caffeine_extent))


def color_encoding(color_mode: str, domains: ColorDomains, missing_fill: str) -> ColorEncoding:
    if color_mode == "category":
        return ColorEncoding(type="nominal", scheme=CATEGORY_SCHEME, domain=domains.categories)
    return ColorEncoding(
        type="quantitative",
        scheme=CAFFEINE_SCHEME,
        domain=domains.caffeine,
        missing=missing_fill,
    )
