# file: src/capacity_index/dashboard.py
"""Streamlit page for the capacity index dashboard.

Provides:
- Index charts (rebased to 100) for each indicator pairing
- Capacity series in current US$
- Coverage table per indicator
- CSV download of the combined table

Run with:
    streamlit run src/capacity_index/dashboard.py
"""

import sys
from pathlib import Path

import streamlit as st

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from src.capacity_index.charts import CHART_PAIRINGS, LEVEL_CHART_KEY
from src.capacity_index.config import load_config
from src.capacity_index.context import SeriesContext
from src.capacity_index.fetch import fetch_context
from src.capacity_index.pipeline import run_pipeline

st.set_page_config(
    page_title="China Capacity vs Global Demand",
    page_icon="🏭",
    layout="wide",
)


@st.cache_data(show_spinner="Fetching World Bank indicators...", ttl=3600)
def load_context(start_year: int, end_year: int) -> SeriesContext:
    return fetch_context(load_config(start_year=start_year, end_year=end_year))


def main():
    st.title("🏭 China Manufacturing Capacity vs Global Demand")
    st.markdown("World Bank indicators, aligned on common years and rebased to 100.")

    # CAPACITY_* env overrides seed the sidebar
    defaults = load_config()

    with st.sidebar:
        st.header("Configuration")
        start_year, end_year = st.slider(
            "Years",
            min_value=min(1990, defaults.start_year),
            max_value=max(2024, defaults.end_year),
            value=(defaults.start_year, defaults.end_year),
        )
        base_year = st.number_input(
            "Base year (= 100)",
            min_value=start_year,
            max_value=end_year,
            value=min(max(defaults.base_year, start_year), end_year),
            step=1,
        )
        if st.button("🔄 Refresh Data", width="stretch"):
            load_context.clear()
            st.rerun()

    config = load_config(start_year=start_year, end_year=end_year, base_year=int(base_year))
    context = load_context(start_year, end_year)
    result = run_pipeline(config, context)

    empty = context.empty_keys()
    if empty:
        st.warning(f"No data returned for: {', '.join(empty)}")

    for pairing in CHART_PAIRINGS:
        fig = result.charts.get(pairing.key)
        if fig is None:
            continue
        st.plotly_chart(fig, width="stretch")

    level = result.charts.get(LEVEL_CHART_KEY)
    if level is not None:
        st.plotly_chart(level, width="stretch")

    if not result.charts:
        st.info("No charts to draw: the required series came back empty.")

    st.subheader("Coverage")
    st.dataframe(context.summary(), width="stretch")

    st.download_button(
        "⬇️ Download CSV",
        data=result.csv_text,
        file_name=config.csv_filename,
        mime="text/csv",
        disabled=not context.get(config.capacity_key),
    )


if __name__ == "__main__":
    main()
