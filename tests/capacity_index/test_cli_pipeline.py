"""Pipeline orchestration and Typer CLI smoke tests (network mocked out)."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from src.capacity_index.cli import app
from src.capacity_index.config import DashboardConfig
from src.capacity_index.context import SeriesContext
from src.capacity_index.pipeline import run_full_pipeline, run_pipeline
from src.capacity_index.series import Series

runner = CliRunner()


def _context():
    years = [(2000, 100.0), (2001, 120.0), (2002, 150.0)]
    return SeriesContext({
        "manufacturing": Series.from_pairs(years),
        "consumption": Series.from_pairs([(2000, 10.0), (2002, 11.0)]),
        "co2": Series.from_pairs(years),
        "exports": Series.empty(),
    }, 2000, 2002)


@pytest.fixture
def config(tmp_path):
    return DashboardConfig(start_year=2000, end_year=2002, output_dir=str(tmp_path / "artifacts"))


class TestPipeline:
    def test_run_pipeline_with_context_skips_fetch(self, config):
        """A supplied context should skip the fetch"""
        with patch("src.capacity_index.pipeline.fetch_context") as mock_fetch:
            result = run_pipeline(config, _context())

        mock_fetch.assert_not_called()
        assert set(result.charts) == {"output_vs_demand", "emissions_vs_output", "capacity_level"}
        assert result.csv_text.splitlines()[1] == "2000,100.0,10.0,100.0,"

    @patch("src.capacity_index.pipeline.fetch_context")
    def test_run_pipeline_fetches_when_no_context(self, mock_fetch, config):
        """No context should trigger one fetch with the config"""
        mock_fetch.return_value = _context()

        result = run_pipeline(config)

        mock_fetch.assert_called_once_with(config)
        assert result.context is mock_fetch.return_value

    def test_run_full_pipeline_writes_artifacts(self, config):
        """Full pipeline should write the CSV and one HTML per chart"""
        results = run_full_pipeline(config, _context())

        assert config.csv_path().exists()
        html = sorted(p.name for p in config.charts_path().glob("*.html"))
        assert html == ["capacity_level.html", "emissions_vs_output.html", "output_vs_demand.html"]
        assert results["charts"] == 3
        assert results["empty_series"] == "exports"

    def test_all_empty_still_writes_csv(self, config):
        """An all-empty context should still write the CSV header"""
        results = run_full_pipeline(config, SeriesContext())

        assert results["charts"] == 0
        assert config.csv_path().read_text().startswith("Year,")


class TestCLI:
    @patch("src.capacity_index.cli.fetch_series")
    def test_fetch_prints_table(self, mock_fetch):
        """fetch should print one row per observation"""
        mock_fetch.return_value = Series.from_pairs([(2020, 1234.5)])

        result = runner.invoke(app, ["fetch", "CHN", "NV.IND.MANF.CD", "--start-year", "2020", "--end-year", "2020"])

        assert result.exit_code == 0, result.output
        assert "2020" in result.output
        assert "1,234.50" in result.output
        args = mock_fetch.call_args.args
        assert args == ("CHN", "NV.IND.MANF.CD", 2020, 2020)

    @patch("src.capacity_index.cli.fetch_series")
    def test_fetch_empty_warns(self, mock_fetch):
        """fetch should warn when nothing comes back"""
        mock_fetch.return_value = Series.empty()

        result = runner.invoke(app, ["fetch", "CHN", "BAD.CODE"])

        assert result.exit_code == 0
        assert "No observations" in result.output

    @patch("src.capacity_index.cli.fetch_context")
    def test_export_writes_csv(self, mock_fetch, tmp_path):
        """export should write the CSV to --output"""
        mock_fetch.return_value = _context()
        out = tmp_path / "export.csv"

        result = runner.invoke(app, ["export", "--output", str(out)])

        assert result.exit_code == 0, result.output
        assert out.read_text().splitlines()[0].startswith("Year,Manufacturing_VA_USD")

    @patch("src.capacity_index.pipeline.fetch_context")
    def test_charts_writes_html(self, mock_fetch, tmp_path):
        """charts should write HTML files to --output-dir"""
        mock_fetch.return_value = _context()

        result = runner.invoke(app, ["charts", "--output-dir", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "output_vs_demand.html").exists()

    @patch("src.capacity_index.pipeline.fetch_context")
    def test_charts_nothing_to_draw(self, mock_fetch, tmp_path):
        """charts should say so when nothing is drawable"""
        mock_fetch.return_value = SeriesContext()

        result = runner.invoke(app, ["charts", "--output-dir", str(tmp_path)])

        assert result.exit_code == 0
        assert "No charts to draw" in result.output

    @patch("src.capacity_index.cli.fetch_context")
    def test_summary(self, mock_fetch):
        """summary should list every series key"""
        mock_fetch.return_value = _context()

        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 0, result.output
        assert "manufacturing" in result.output
        assert "exports" in result.output

    @patch("src.capacity_index.cli.fetch_context")
    def test_summary_years_print_as_integers(self, mock_fetch):
        """Summary years should print without a decimal part"""
        mock_fetch.return_value = _context()

        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 0, result.output
        assert "2000" in result.output
        assert "2000.0" not in result.output

    @patch("src.capacity_index.cli.run_full_pipeline")
    def test_run_uses_env_years_when_no_options(self, mock_run, monkeypatch):
        """run without options should take years from CAPACITY_* env vars"""
        mock_run.return_value = {}
        monkeypatch.delenv("CAPACITY_BASE_YEAR", raising=False)
        monkeypatch.setattr("src.capacity_index.config.load_dotenv", lambda *a, **k: False)

        result = runner.invoke(app, ["run"], env={"CAPACITY_START_YEAR": "2010", "CAPACITY_END_YEAR": "2015"})

        assert result.exit_code == 0, result.output
        cfg = mock_run.call_args.args[0]
        assert (cfg.start_year, cfg.end_year, cfg.base_year) == (2010, 2015, 2010)

    @patch("src.capacity_index.cli.run_full_pipeline")
    def test_run_options_win_over_env(self, mock_run, monkeypatch):
        """run options should win over CAPACITY_* env vars"""
        mock_run.return_value = {}
        monkeypatch.setattr("src.capacity_index.config.load_dotenv", lambda *a, **k: False)

        result = runner.invoke(
            app,
            ["run", "--start-year", "2012", "--end-year", "2013", "--base-year", "2013"],
            env={"CAPACITY_START_YEAR": "2010", "CAPACITY_END_YEAR": "2015"},
        )

        assert result.exit_code == 0, result.output
        cfg = mock_run.call_args.args[0]
        assert (cfg.start_year, cfg.end_year, cfg.base_year) == (2012, 2013, 2013)
