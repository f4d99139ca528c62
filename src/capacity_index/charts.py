# file: src/capacity_index/charts.py
"""
Chart descriptions for the dashboard.

Every builder is a pure function of (SeriesContext, config) that returns a
plotly Figure, or None when the required series leave nothing to draw.
Nothing here touches Streamlit; the page (or the CLI) decides where a
figure ends up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import plotly.graph_objects as go

from .config import DashboardConfig, IndicatorSpec
from .context import SeriesContext
from .normalize import align_and_normalize

logger = logging.getLogger(__name__)

BLUE = "#3b82f6"
RED = "#ff2d2d"
AMBER = "#f59e0b"
GREEN = "#22c55e"

_TEXT = "#d8deea"
_TICK = "#97a3b7"
_GRID = "rgba(255, 255, 255, 0.08)"


@dataclass(frozen=True)
class ChartPairing:
    key: str
    title: str
    left: str      # indicator key drawn first
    right: str
    left_color: str = BLUE
    right_color: str = RED


CHART_PAIRINGS: Tuple[ChartPairing, ...] = (
    ChartPairing(
        key="output_vs_demand",
        title="China manufacturing output vs. global demand",
        left="consumption",
        right="manufacturing",
    ),
    ChartPairing(
        key="emissions_vs_output",
        title="China CO2 emissions vs. manufacturing output",
        left="co2",
        right="manufacturing",
        left_color=AMBER,
    ),
    ChartPairing(
        key="exports_vs_output",
        title="China exports vs. manufacturing output",
        left="exports",
        right="manufacturing",
        left_color=GREEN,
    ),
)

LEVEL_CHART_KEY = "capacity_level"


def _apply_theme(fig: go.Figure, title: str, y_title: str) -> go.Figure:
    fig.update_layout(
        title=title,
        template="plotly_dark",
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        hovermode="x unified",
        font=dict(family="Inter", color=_TEXT),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0),
        hoverlabel=dict(bgcolor="#121212", bordercolor="rgba(255, 255, 255, 0.16)"),
        margin=dict(l=40, r=20, t=60, b=40),
    )
    fig.update_xaxes(title_text="Year", tickfont=dict(color=_TICK), gridcolor=_GRID, dtick=2)
    fig.update_yaxes(title_text=y_title, tickfont=dict(color=_TICK), gridcolor=_GRID)
    return fig


def _line(x, y, name: str, color: str) -> go.Scatter:
    return go.Scatter(
        x=x,
        y=y,
        name=name,
        mode="lines+markers",
        line=dict(color=color, width=3, shape="spline", smoothing=0.35),
        marker=dict(size=6),
    )


def build_index_chart(
    pairing: ChartPairing,
    context: SeriesContext,
    base_year: int,
    labels: Optional[Dict[str, str]] = None,
) -> Optional[go.Figure]:
    """Two aligned series rebased to 100; None when they share no years."""
    labels = labels or {}
    pair = align_and_normalize(context.get(pairing.left), context.get(pairing.right), base_year)
    if pair is None:
        logger.info("[charts] %s: nothing to draw", pairing.key)
        return None

    fig = go.Figure()
    fig.add_trace(_line(
        pair.years,
        pair.index_a.values(),
        f"{labels.get(pairing.left, pairing.left)} index",
        pairing.left_color,
    ))
    fig.add_trace(_line(
        pair.years,
        pair.index_b.values(),
        f"{labels.get(pairing.right, pairing.right)} index",
        pairing.right_color,
    ))
    return _apply_theme(fig, pairing.title, f"Index ({pair.base_year_used} = 100)")


def build_level_chart(spec: IndicatorSpec, context: SeriesContext) -> Optional[go.Figure]:
    """Raw values of one series, no rebasing."""
    series = context.get(spec.key)
    if not series:
        logger.info("[charts] %s: no data for level chart", spec.key)
        return None

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=series.years(),
        y=series.values(),
        name=spec.label,
        marker=dict(color=RED, opacity=0.8),
    ))
    return _apply_theme(fig, f"{spec.label} ({spec.unit})", spec.unit)


def build_charts(context: SeriesContext, config: DashboardConfig) -> Dict[str, go.Figure]:
    """All drawable charts keyed by name, index pairings first."""
    labels = {spec.key: spec.label for spec in config.indicators}
    charts: Dict[str, go.Figure] = {}

    for pairing in CHART_PAIRINGS:
        fig = build_index_chart(pairing, context, config.base_year, labels)
        if fig is not None:
            charts[pairing.key] = fig

    level = build_level_chart(config.capacity_indicator(), context)
    if level is not None:
        charts[LEVEL_CHART_KEY] = level

    logger.info("[charts] built %d charts: %s", len(charts), list(charts))
    return charts
