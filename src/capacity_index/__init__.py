"""
Capacity Index: China manufacturing capacity vs. global demand.

Modules:
- series: ObservationPoint / Series (immutable, strictly increasing years)
- config: indicator registry + dashboard settings (.env overrides)
- fetch: World Bank fetcher (requests, httpx + asyncio batch)
- context: SeriesContext handed to charts and export
- align: intersect two series on common years
- normalize: rebase a series to 100 at a base year
- charts: pure plotly chart descriptions
- export: combined CSV
- pipeline: fetch -> charts -> CSV
- cli: Typer CLI
- dashboard: Streamlit page
"""

from .align import align, common_years
from .config import INDICATORS, DashboardConfig, IndicatorSpec, load_config
from .context import SeriesContext
from .fetch import fetch_batch, fetch_context, fetch_series, fetch_series_async, parse_payload
from .normalize import IndexPair, align_and_normalize, normalize
from .series import ObservationPoint, Series

__all__ = [
    "ObservationPoint",
    "Series",
    "IndicatorSpec",
    "INDICATORS",
    "DashboardConfig",
    "load_config",
    "SeriesContext",
    "parse_payload",
    "fetch_series",
    "fetch_series_async",
    "fetch_batch",
    "fetch_context",
    "align",
    "common_years",
    "normalize",
    "align_and_normalize",
    "IndexPair",
]
