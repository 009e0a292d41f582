"""Render instructions for the beverage scatterplot.

`build_render_instructions` is the pure part: it turns the loaded dataset and
the current control values into target marks, axes, a color encoding and a
legend. `ChartRenderer` keeps the marks currently on screen and reconciles
them against each new set of instructions by key, the way a keyed data join
does.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from nutrition.config import ChartLayout
from nutrition.data import BeverageDataset, BeverageRecord, to_records
from nutrition.filters import ColorMode, ControlState, filter_beverages
from nutrition.legend import LegendSpec, build_legend
from nutrition.scales import ColorDomains, ColorEncoding, color_domains, color_encoding, positional_domains


logger = logging.getLogger(__name__)

X_AXIS_TITLE = "Calories"
Y_AXIS_TITLE = "Sugar (g)"


@dataclass(frozen=True)
class AppState:
    """Everything loaded once per session; passed into every render."""

    dataset: BeverageDataset
    colors: ColorDomains
    layout: ChartLayout = field(default_factory=ChartLayout)


def build_app_state(dataset: BeverageDataset, layout: Optional[ChartLayout] = None) -> AppState:
    return AppState(dataset=dataset, colors=color_domains(dataset), layout=layout or ChartLayout())


@dataclass(frozen=True)
class AxisSpec:
    field: str
    title: str
    domain: Tuple[float, float]
    tick_count: int


@dataclass(frozen=True)
class Fill:
    """Value fed to the color scale, or a literal color when `scale` is None."""

    scale: Optional[str]
    value: Any


@dataclass(frozen=True)
class Mark:
    key: str
    record: BeverageRecord
    x: float
    y: float
    r: float
    opacity: float
    fill: Fill


@dataclass(frozen=True)
class RenderInstructions:
    controls: ControlState
    x_axis: AxisSpec
    y_axis: AxisSpec
    color: ColorEncoding
    marks: Tuple[Mark, ...]
    legend: LegendSpec


def mark_key(record: BeverageRecord) -> str:
    # Records sharing name and prep resolve to the same mark key.
    return record.name + record.prep


def fill_color(record: BeverageRecord, color_mode: ColorMode, missing_fill: str = "#b0b0b0") -> Fill:
    if color_mode == "category":
        return Fill(scale="category", value=record.category)
    if record.caffeine is None:
        return Fill(scale=None, value=missing_fill)
    return Fill(scale="caffeine", value=record.caffeine)


def _fmt_number(value: float) -> str:
    return f"{value:g}"


def tooltip_fields(record: BeverageRecord) -> Dict[str, str]:
    return {
        "name": record.name,
        "prep": record.prep,
        "category": record.category,
        "calories": _fmt_number(record.calories),
        "sugar": _fmt_number(record.sugar),
        "caffeine": "N/A" if record.caffeine is None else _fmt_number(record.caffeine),
    }


def build_render_instructions(state: AppState, controls: ControlState, layout: Optional[ChartLayout] = None) -> RenderInstructions:
    layout = layout or state.layout
    style = layout.marks
    filtered = to_records(filter_beverages(state.dataset.frame, controls))

    x_domain, y_domain = positional_domains(state.dataset)
    marks = tuple(
        Mark(
            key=mark_key(r),
            record=r,
            x=r.calories,
            y=r.sugar,
            r=style.radius,
            opacity=style.opacity,
            fill=fill_color(r, controls.color_mode, style.missing_fill),
        )
        for r in filtered
    )
    return RenderInstructions(
        controls=controls,
        x_axis=AxisSpec(field="calories", title=X_AXIS_TITLE, domain=x_domain, tick_count=layout.tick_count),
        y_axis=AxisSpec(field="sugar", title=Y_AXIS_TITLE, domain=y_domain, tick_count=layout.tick_count),
        color=color_encoding(controls.color_mode, state.colors, style.missing_fill),
        marks=marks,
        legend=build_legend(controls.color_mode, state.colors),
    )


@dataclass(frozen=True)
class JoinResult:
    """Index pairs into (existing, data): update pairs, entering data, exiting nodes."""

    update: Tuple[Tuple[int, int], ...]
    enter: Tuple[int, ...]
    exit: Tuple[int, ...]


def join_marks(existing_keys: Sequence[str], data_keys: Sequence[str]) -> JoinResult:
    by_key: Dict[str, int] = {}
    exit: List[int] = []
    for i, key in enumerate(existing_keys):
        if key in by_key:
            exit.append(i)
        else:
            by_key[key] = i

    update: List[Tuple[int, int]] = []
    enter: List[int] = []
    for j, key in enumerate(data_keys):
        node = by_key.pop(key, None)
        if node is None:
            enter.append(j)
        else:
            update.append((node, j))

    exit.extend(by_key.values())
    return JoinResult(update=tuple(update), enter=tuple(enter), exit=tuple(sorted(exit)))


@dataclass(frozen=True)
class Transition:
    key: str
    duration_ms: int
    start: Dict[str, Any]
    end: Dict[str, Any]
    remove: bool = False


@dataclass(frozen=True)
class RenderResult:
    instructions: RenderInstructions
    marks: Tuple[Mark, ...]
    entered: Tuple[str, ...]
    updated: Tuple[str, ...]
    exited: Tuple[str, ...]
    transitions: Tuple[Transition, ...]


def _attrs(mark: Mark) -> Dict[str, Any]:
    return {"x": mark.x, "y": mark.y, "r": mark.r, "opacity": mark.opacity, "fill": mark.fill}


class ChartRenderer:
    """Holds the marks currently drawn and reconciles them on every render.

    Transitions are descriptive only: they record how each mark moves from
    its previous state to its target. Vega-Lite redraws straight to the
    target state, and the next render replaces them wholesale.
    """

    def __init__(self, layout: Optional[ChartLayout] = None):
        self.layout = layout
        self.marks: Tuple[Mark, ...] = ()

    def render(self, state: AppState, controls: ControlState) -> RenderResult:
        layout = self.layout or state.layout
        style = layout.marks
        instructions = build_render_instructions(state, controls, layout)
        targets = instructions.marks
        current = self.marks

        join = join_marks([m.key for m in current], [m.key for m in targets])
        transitions: List[Transition] = []

        for i in join.exit:
            old = current[i]
            transitions.append(
                Transition(old.key, style.exit_duration_ms, _attrs(old), {**_attrs(old), "r": 0.0}, remove=True)
            )

        entering = set(join.enter)
        previous = {j: current[i] for i, j in join.update}
        for j, target in enumerate(targets):
            if j in entering:
                start = {**_attrs(target), "r": 0.0}
            else:
                start = _attrs(previous[j])
            transitions.append(Transition(target.key, style.enter_duration_ms, start, _attrs(target)))

        result = RenderResult(
            instructions=instructions,
            marks=targets,
            entered=tuple(targets[j].key for j in join.enter),
            updated=tuple(targets[j].key for _, j in join.update),
            exited=tuple(current[i].key for i in join.exit),
            transitions=tuple(transitions),
        )
        logger.debug(
            "Rendered %d marks (enter=%d update=%d exit=%d, color=%s)",
            len(targets),
            len(result.entered),
            len(result.updated),
            len(result.exited),
            controls.color_mode,
        )
        self.marks = targets
        return result
