# file: src/capacity_index/cli.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pandas as pd
import typer
from rich.console import Console
from rich.table import Table

from .config import load_config
from .export import write_csv
from .fetch import fetch_context, fetch_series
from .pipeline import run_full_pipeline, run_pipeline, write_charts

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
app = typer.Typer(add_completion=False)
console = Console()


def _kv_table(title: str, rows: dict) -> Table:
    table = Table(title=title)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="green")
    for k, v in rows.items():
        table.add_row(str(k), str(v))
    return table


@app.command()
def run(
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
    base_year: Optional[int] = None,
):
    """Fetch everything, write the CSV and one HTML file per chart."""
    cfg = load_config(start_year=start_year, end_year=end_year, base_year=base_year)
    results = run_full_pipeline(cfg)
    console.print(_kv_table("Capacity Index Results", results))


@app.command()
def fetch(
    entity: str,
    indicator: str,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
):
    """Fetch a single indicator and print it."""
    cfg = load_config(start_year=start_year, end_year=end_year)
    series = fetch_series(entity, indicator, cfg.start_year, cfg.end_year, base_url=cfg.base_url)

    table = Table(title=f"{entity} / {indicator}")
    table.add_column("Year", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for point in series:
        table.add_row(str(point.year), f"{point.value:,.2f}")
    console.print(table)

    if not series:
        console.print("[yellow]No observations returned.[/yellow]")


@app.command()
def export(
    output: Optional[Path] = None,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
):
    """Write the combined CSV."""
    cfg = load_config(start_year=start_year, end_year=end_year)
    context = fetch_context(cfg)
    path = write_csv(context, cfg, output or cfg.csv_path())
    console.print(f"[green]CSV written:[/green] {path}")


@app.command()
def charts(
    output_dir: Optional[Path] = None,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
    base_year: Optional[int] = None,
):
    """Write one standalone HTML file per drawable chart."""
    cfg = load_config(start_year=start_year, end_year=end_year, base_year=base_year)
    result = run_pipeline(cfg)
    paths = write_charts(result.charts, output_dir or cfg.charts_path())
    if not paths:
        console.print("[yellow]No charts to draw: required series are empty.[/yellow]")
    for p in paths:
        console.print(f"[green]Chart written:[/green] {p}")


@app.command()
def summary(
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
):
    """Per-series coverage table."""
    cfg = load_config(start_year=start_year, end_year=end_year)
    df = fetch_context(cfg).summary()

    table = Table(title="Series Coverage")
    for col in df.columns:
        table.add_column(col, style="cyan" if col == "key" else "green")
    for row in df.itertuples(index=False):
        table.add_row(*["-" if pd.isna(v) else str(v) for v in row])
    console.print(table)


if __name__ == "__main__":
    app()
