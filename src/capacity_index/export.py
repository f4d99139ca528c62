# file: src/capacity_index/export.py
from __future__ import annotations

import logging
import os
from pathlib import Path

import pandas as pd

from .config import DashboardConfig
from .context import SeriesContext

logger = logging.getLogger(__name__)

YEAR_COLUMN = "Year"


def export_columns(config: DashboardConfig) -> list[str]:
    return [YEAR_COLUMN] + [spec.csv_column for spec in config.indicators]


def build_export_frame(context: SeriesContext, config: DashboardConfig) -> pd.DataFrame:
    """
    One row per year of the capacity series; other indicators looked up by year.

    Years missing from a non-capacity series stay NaN (empty in the CSV).
    """
    columns = export_columns(config)
    capacity = context.get(config.capacity_key)
    if not capacity:
        logger.warning("[export] capacity series %s is empty, CSV has no rows", config.capacity_key)
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame({YEAR_COLUMN: capacity.years()})
    for spec in config.indicators:
        by_year = {p.year: p.value for p in context.get(spec.key)}
        df[spec.csv_column] = df[YEAR_COLUMN].map(by_year)

    return df[columns]


def export_csv(context: SeriesContext, config: DashboardConfig) -> str:
    df = build_export_frame(context, config)
    return df.to_csv(index=False, na_rep="", lineterminator="\n")


def write_csv(context: SeriesContext, config: DashboardConfig, path: Path) -> Path:
    """Atomic write: temp file in the same directory, then replace."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(export_csv(context, config), encoding="utf-8")
    os.replace(tmp, path)
    logger.info("[export] wrote %s", path)
    return path
