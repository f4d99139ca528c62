"""
Capacity Index - China manufacturing capacity vs. global demand

Modules:
- capacity_index: World Bank fetch, alignment, index normalization,
  charts (plotly), CSV export, Typer CLI and Streamlit page
"""
