from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


DATA_DIR = Path(__file__).resolve().parents[1]
DATA_FILE_NAME = "starbucks_drinkMenu_expanded.csv"

CALORIE_CAP = 600.0
DEFAULT_MAX_CALORIES = 600.0
DEFAULT_X_MAX = 600.0
DEFAULT_Y_MAX = 100.0

ALL_CATEGORIES = "all"
COLOR_MODES = ("category", "caffeine")


@dataclass(frozen=True)
class Margin:
    top: float = 40
    right: float = 160
    bottom: float = 60
    left: float = 60


@dataclass(frozen=True)
class MarkStyle:
    radius: float = 5
    opacity: float = 0.85
    missing_fill: str = "#b0b0b0"
    hover_stroke: str = "#111"
    hover_stroke_width: float = 1.2
    enter_duration_ms: int = 400
    exit_duration_ms: int = 300


@dataclass(frozen=True)
class ChartLayout:
    # None sizes the plot to its container.
    width: Optional[float] = None
    height: float = 520
    margin: Margin = field(default_factory=Margin)
    tick_count: int = 8
    marks: MarkStyle = field(default_factory=MarkStyle)

    @property
    def inner_width(self) -> Optional[float]:
        if self.width is None:
            return None
        return max(0.0, self.width - self.margin.left - self.margin.right)

    @property
    def inner_height(self) -> float:
        return max(0.0, self.height - self.margin.top - self.margin.bottom)
