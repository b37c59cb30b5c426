"""
Date Range Slicer - Streamlit demo

Drives one slicer instance against the in-process DataFrame host.

Run with: streamlit run app/main.py
"""

import streamlit as st
import pandas as pd
from datetime import datetime, timedelta
from pathlib import Path
import sys

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import config
from config.logging_config import setup_logging
from src.host import DataFrameHost
from src.widget import DateSlicer

from app.components.date_slicer import render_date_slicer

HOST_KEY = "slicer_demo_host"
SLICER_KEY = "slicer_demo_instance"


def build_sample_frame(days: int = 365) -> pd.DataFrame:
    """Daily order rows ending yesterday."""
    end = datetime.now().replace(hour=12, minute=0, second=0, microsecond=0) - timedelta(days=1)
    dates = pd.date_range(end=end, periods=days, freq="D")
    return pd.DataFrame({
        "OrderDate": dates,
        "Amount": [100 + (i * 37) % 250 for i in range(days)],
    })


def get_demo_objects(debug_mode: bool) -> dict:
    return {
        "dateSlicerSettings": {
            "defaultRange": config.widget.default_range,
            "debugMode": debug_mode,
        }
    }


def main():
    """Main application entry point."""
    st.set_page_config(page_title=config.app.name, layout="wide")
    setup_logging(config.app.log_level, log_file=config.app.log_file)

    if HOST_KEY not in st.session_state:
        st.session_state[HOST_KEY] = DataFrameHost(
            frame=build_sample_frame(),
            date_column="OrderDate",
            table_name="Sales",
        )
    host = st.session_state[HOST_KEY]

    if SLICER_KEY not in st.session_state:
        st.session_state[SLICER_KEY] = DateSlicer(host=host)
    slicer = st.session_state[SLICER_KEY]

    with st.sidebar:
        st.title("Date Range Slicer")
        st.caption(f"v{config.app.version}")
        bind_column = st.toggle("Bind date column", value=host.date_column is not None)
        debug_mode = st.toggle("Show debug log", value=config.widget.debug_mode)

    host.date_column = "OrderDate" if bind_column else None
    host.objects = get_demo_objects(debug_mode)
    slicer.update(host.build_payload())

    col_slicer, col_data = st.columns([1, 2])
    with col_slicer:
        render_date_slicer(slicer)
    with col_data:
        visible = host.filtered_frame()
        st.metric("Visible rows", len(visible), delta=len(visible) - len(host.frame))
        st.dataframe(visible, use_container_width=True)


if __name__ == "__main__":
    main()
