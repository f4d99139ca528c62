# file: src/capacity_index/pipeline.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

import plotly.graph_objects as go

from .charts import build_charts
from .config import DashboardConfig
from .context import SeriesContext
from .export import export_csv, write_csv
from .fetch import fetch_context

logger = logging.getLogger(__name__)


def _utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class PipelineResult:
    context: SeriesContext
    charts: Dict[str, go.Figure]
    csv_text: str


def run_pipeline(
    config: DashboardConfig,
    context: Optional[SeriesContext] = None,
) -> PipelineResult:
    """Fetch (unless a context is given), build charts and the CSV text."""
    if context is None:
        context = fetch_context(config)

    charts = build_charts(context, config)
    csv_text = export_csv(context, config)
    return PipelineResult(context=context, charts=charts, csv_text=csv_text)


def write_charts(charts: Dict[str, go.Figure], out_dir: Path) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for key, fig in charts.items():
        path = out_dir / f"{key}.html"
        fig.write_html(str(path), include_plotlyjs="cdn")
        written.append(path)
        logger.info("[charts] wrote %s", path)
    return written


def run_full_pipeline(
    config: DashboardConfig,
    context: Optional[SeriesContext] = None,
) -> Dict:
    """Run the pipeline and write CSV + chart HTML under config.output_dir."""
    started = _utc_iso()
    result = run_pipeline(config, context)

    csv_path = write_csv(result.context, config, config.csv_path())
    chart_paths = write_charts(result.charts, config.charts_path())

    return {
        "started_utc": started,
        "years": f"{config.start_year}-{config.end_year}",
        "base_year": config.base_year,
        "series_fetched": len(result.context.keys()),
        "empty_series": ", ".join(result.context.empty_keys()) or "-",
        "charts": len(chart_paths),
        "csv": str(csv_path),
        "charts_dir": str(config.charts_path()),
    }
