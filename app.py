import logging
from typing import Optional

import pandas as pd
import streamlit as st

from nutrition.charts import build_chart
from nutrition.config import CALORIE_CAP, DEFAULT_MAX_CALORIES, ChartLayout
from nutrition.data import category_options, load_beverages
from nutrition.filters import filter_beverages, format_filter_summary, normalize_controls
from nutrition.render import ChartRenderer, build_app_state

logger = logging.getLogger(__name__)

COLOR_MODE_LABELS = {"Category": "category", "Caffeine": "caffeine"}


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e5e7eb;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #6b7280;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #111827;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        .readout {font-size: 0.9rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


def render_page_header(title: str, breadcrumb: str, filter_summary_html: str, export_df: Optional[pd.DataFrame] = None, export_name: str = "export.csv"):
    inject_base_styles()
    c1, c2 = st.columns([8, 2])
    with c1:
        st.markdown(
            f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
            unsafe_allow_html=True,
        )
    with c2:
        if export_df is not None and not export_df.empty:
            st.download_button(
                "Export CSV",
                data=export_df.to_csv(index=False).encode("utf-8"),
                file_name=export_name,
                mime="text/csv",
            )
    st.markdown(f"<div class='chip-row'>{filter_summary_html}</div>", unsafe_allow_html=True)


def get_renderer() -> ChartRenderer:
    # One renderer per browser session; it carries the marks from the previous run.
    if "renderer" not in st.session_state:
        st.session_state["renderer"] = ChartRenderer()
    return st.session_state["renderer"]


# ---------- UI setup ----------
st.set_page_config(page_title="Starbucks Drink Nutrition Explorer", layout="wide")
inject_base_styles()

try:
    dataset = load_beverages()
except Exception:
    logger.exception("loading beverages failed")
    raise
state = build_app_state(dataset, ChartLayout())

# ----- Sidebar: controls -----
with st.sidebar:
    st.markdown("### Filters")
    selected_category = st.selectbox("Category", options=category_options(dataset), index=0)
    max_calories = st.slider("Max calories", min_value=0, max_value=int(CALORIE_CAP), value=int(DEFAULT_MAX_CALORIES), step=10)
    st.markdown(f"<div class='readout'>Showing drinks up to <b>{max_calories}</b> calories</div>", unsafe_allow_html=True)
    color_label = st.selectbox("Color by", options=list(COLOR_MODE_LABELS), index=0)

controls = normalize_controls(
    {
        "max_calories": max_calories,
        "selected_category": selected_category,
        "color_mode": COLOR_MODE_LABELS[color_label],
    },
    categories=dataset.categories,
)

result = get_renderer().render(state, controls)

filtered_df = filter_beverages(dataset.frame, controls)
render_page_header(
    "Drink Nutrition Explorer",
    "Menu / Calories vs Sugar",
    format_filter_summary(controls),
    export_df=filtered_df,
    export_name="beverages_filtered.csv",
)

st.altair_chart(build_chart(result.instructions, state.layout), use_container_width=True)
st.caption(
    f"{len(result.marks)} of {len(dataset)} drinks shown ({len(result.entered)} added, {len(result.exited)} removed). "
    "Hover a point for details."
)

with st.expander("Filtered rows", expanded=False):
    st.dataframe(filtered_df, use_container_width=True)
