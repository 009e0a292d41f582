from __future__ import annotations

import math
from typing import Any, Dict, Optional, Sequence

import altair as alt
import pandas as pd

from nutrition.config import ChartLayout
from nutrition.legend import LegendSpec
from nutrition.render import AxisSpec, Mark, RenderInstructions, tooltip_fields
from nutrition.scales import ColorEncoding

alt.data_transformers.disable_max_rows()

MARK_COLUMNS = ["key", "name", "prep", "category", "calories", "sugar", "caffeine_label", "fill_value", "opacity"]
_SHORT_TYPES = {"nominal": "N", "quantitative": "Q"}


def to_vega_spec(chart: alt.TopLevelMixin) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def marks_frame(marks: Sequence[Mark]) -> pd.DataFrame:
    rows = []
    for m in marks:
        rec = m.record
        rows.append(
            {
                "key": m.key,
                "name": rec.name,
                "prep": rec.prep,
                "category": rec.category,
                "calories": m.x,
                "sugar": m.y,
                "caffeine_label": tooltip_fields(rec)["caffeine"],
                # Literal fills are left empty so the chart falls back to the missing color.
                "fill_value": m.fill.value if m.fill.scale else None,
                "opacity": m.opacity,
            }
        )
    return pd.DataFrame(rows, columns=MARK_COLUMNS)


def _position(channel, axis: AxisSpec, grid: bool):
    return channel(
        f"{axis.field}:Q",
        title=axis.title,
        scale=alt.Scale(domain=list(axis.domain), nice=True),
        axis=alt.Axis(tickCount=axis.tick_count, grid=grid, gridDash=[4, 4]),
    )


def legend_config(legend: LegendSpec) -> alt.Legend:
    if legend.gradient is not None:
        bar = legend.gradient
        low, high = legend.labels[0], legend.labels[-1]
        return alt.Legend(
            title=legend.title,
            titleFontWeight=600,
            orient="right",
            direction="horizontal",
            gradientLength=bar.width,
            gradientThickness=bar.height,
            values=[s.value for s in bar.stops],
            labelExpr=(
                f"datum.value <= {low.value!r} ? '{low.text}' : "
                f"datum.value >= {high.value!r} ? '{high.text}' : ''"
            ),
        )

    kwargs: Dict[str, Any] = {}
    if legend.rows:
        kwargs["values"] = list(legend.rows)
    return alt.Legend(
        title=legend.title,
        titleFontWeight=600,
        orient="right",
        symbolType="square",
        symbolSize=legend.swatch_size ** 2,
        symbolOpacity=1,
        rowPadding=legend.row_height - legend.swatch_size,
        **kwargs,
    )


def color_channel(color: ColorEncoding, legend: LegendSpec):
    scale_kwargs: Dict[str, Any] = {"scheme": color.scheme}
    if color.domain:
        scale_kwargs["domain"] = list(color.domain)
    channel = alt.Color(
        f"fill_value:{_SHORT_TYPES[color.type]}",
        scale=alt.Scale(**scale_kwargs),
        legend=legend_config(legend),
    )
    if color.missing is None:
        return channel
    return alt.condition("isValid(datum.fill_value)", channel, alt.value(color.missing))


def build_chart(instructions: RenderInstructions, layout: Optional[ChartLayout] = None) -> alt.Chart:
    layout = layout or ChartLayout()
    style = layout.marks
    width = layout.inner_width if layout.inner_width is not None else "container"
    hover = alt.selection_point(fields=["key"], on="mouseover", clear="mouseout", empty=False)
    return (
        alt.Chart(marks_frame(instructions.marks))
        .mark_circle(size=math.pi * style.radius ** 2, invalid=None)
        .encode(
            x=_position(alt.X, instructions.x_axis, grid=False),
            y=_position(alt.Y, instructions.y_axis, grid=True),
            color=color_channel(instructions.color, instructions.legend),
            opacity=alt.Opacity("opacity:Q", scale=None),
            stroke=alt.condition(hover, alt.value(style.hover_stroke), alt.value("transparent")),
            strokeWidth=alt.condition(hover, alt.value(style.hover_stroke_width), alt.value(0)),
            tooltip=[
                alt.Tooltip("name:N", title="Beverage"),
                alt.Tooltip("prep:N", title="Prep"),
                alt.Tooltip("category:N", title="Category"),
                alt.Tooltip("calories:Q", title="Calories"),
                alt.Tooltip("sugar:Q", title="Sugar (g)"),
                alt.Tooltip("caffeine_label:N", title="Caffeine (mg)"),
            ],
        )
        .add_params(hover)
        .properties(width=width, height=layout.inner_height)
        .configure_view(strokeWidth=0)
    )
