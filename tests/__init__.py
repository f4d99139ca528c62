"""
Capacity Index Test Suite

Tests organized by module under tests/capacity_index/:
- test_series.py — Series invariants (fail loud)
- test_fetch.py — World Bank fetcher (mocked requests / httpx)
- test_align_normalize.py — alignment + rebasing to 100
- test_charts_export.py — chart descriptions + CSV export
- test_config_context.py — config loading + SeriesContext
- test_cli_pipeline.py — pipeline orchestration + Typer CLI
"""
