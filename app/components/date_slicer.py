"""Streamlit rendering of a DateSlicer instance."""

import streamlit as st
from datetime import date
from typing import Optional

from src.ranges.calculator import display_text
from src.ranges.models import RangeKind
from src.widget.slicer import DateSlicer
from src.widget.state import MessageLevel, UserMessage

RANGE_OPTIONS = [kind.value for kind in RangeKind]

MESSAGE_RENDERERS = {
    MessageLevel.INFO: st.info,
    MessageLevel.SUCCESS: st.success,
    MessageLevel.WARNING: st.warning,
    MessageLevel.ERROR: st.error,
}


def _show_message(message: Optional[UserMessage]) -> None:
    if message is not None:
        MESSAGE_RENDERERS[message.level](message.text)


def render_date_slicer(slicer: DateSlicer, key: str = "date_slicer") -> None:
    """
    Render range selector, custom inputs and action buttons.

    Args:
        slicer: Widget instance held in session state.
        key: Unique key prefix for the Streamlit widgets.
    """
    view = slicer.snapshot()
    settings = view["settings"]

    st.markdown(
        f"<div style='background:{settings['primary_color']};color:white;"
        f"padding:8px;border-radius:4px;font-size:{settings['font_size']}px'>"
        f"{view['range_text'] or 'No range selected'}</div>",
        unsafe_allow_html=True,
    )

    # Missing column is a persistent state, not a transient message
    _show_message(slicer.status_message)

    selected = st.selectbox(
        "Select Date Range:",
        options=RANGE_OPTIONS,
        index=RANGE_OPTIONS.index(view["selected_kind"]),
        format_func=display_text,
        key=f"{key}_kind",
    )
    if selected != view["selected_kind"]:
        slicer.select_preset(selected)

    if slicer.custom_mode:
        current = slicer.current_range
        col1, col2 = st.columns(2)
        with col1:
            start = st.date_input(
                "Start Date:",
                value=current.start_date.date() if current else date.today(),
                key=f"{key}_start",
            )
        with col2:
            end = st.date_input(
                "End Date:",
                value=current.end_date.date() if current else date.today(),
                key=f"{key}_end",
            )
        if current is None or (start, end) != (current.start_date.date(), current.end_date.date()):
            slicer.set_custom_range(start, end)

    col_apply, col_clear = st.columns(2)
    with col_apply:
        if st.button("Apply Filter", key=f"{key}_apply", type="primary", disabled=not slicer.can_filter):
            slicer.apply()
    with col_clear:
        if st.button("Clear Filter", key=f"{key}_clear", disabled=not slicer.can_filter):
            slicer.clear()

    _show_message(slicer.message)

    if settings["debug_mode"]:
        with st.expander("Debug Information"):
            st.code("\n".join(slicer.debug_lines()) or "(no entries)")
