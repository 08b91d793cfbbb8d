"""Tests for the command line exit-status contract."""

import json
from unittest.mock import patch

from typer.testing import CliRunner

from newsflow.cli.main import EXIT_FAILED, EXIT_SOURCE_UNAVAILABLE, app
from newsflow.services.renderer import SourceUnavailable

runner = CliRunner()

RESULT = {
    "total_items": 3,
    "new_items": 1,
    "baseline_available": True,
    "updated_at": "2026-10-19T12:00:00.000Z",
}


@patch("newsflow.cli.main.setup_logging")
class TestRunCommand:
    @patch("newsflow.cli.main.run_scrape")
    def test_success(self, mock_run, _logging) -> None:
        mock_run.return_value = RESULT

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 0
        assert "TOTAL_ITEMS=3" in result.output
        assert "NEW_ITEMS=1" in result.output

    @patch("newsflow.cli.main.run_scrape")
    def test_options_override_settings(self, mock_run, _logging, tmp_path) -> None:
        mock_run.return_value = RESULT

        runner.invoke(app, ["run", "--output-dir", str(tmp_path), "--max-items", "5"])

        s = mock_run.call_args[0][0]
        assert s.output_dir == str(tmp_path)
        assert s.max_items == 5

    @patch("newsflow.cli.main.run_scrape")
    def test_empty_run_succeeds(self, mock_run, _logging) -> None:
        mock_run.return_value = {**RESULT, "total_items": 0, "new_items": 0, "baseline_available": False}

        result = runner.invoke(app, ["run"])

        assert result.exit_code == 0
        assert "TOTAL_ITEMS=0" in result.output

    @patch("newsflow.cli.main.run_scrape")
    def test_source_unavailable_exit_status(self, mock_run, _logging) -> None:
        mock_run.side_effect = SourceUnavailable("Timed out")
        result = runner.invoke(app, ["run"])
        assert result.exit_code == EXIT_SOURCE_UNAVAILABLE

    @patch("newsflow.cli.main.run_scrape")
    def test_unexpected_fault_exit_status(self, mock_run, _logging) -> None:
        mock_run.side_effect = RuntimeError("boom")
        result = runner.invoke(app, ["run"])
        assert result.exit_code == EXIT_FAILED
        assert EXIT_FAILED != EXIT_SOURCE_UNAVAILABLE


@patch("newsflow.cli.main.setup_logging")
class TestSummaryCommand:
    def test_rewrites_summary(self, _logging, tmp_path) -> None:
        (tmp_path / "feed.json").write_text(json.dumps({"items": [{}, {}]}), encoding="utf-8")
        (tmp_path / "diff.json").write_text(json.dumps({"new_items": [{}]}), encoding="utf-8")

        result = runner.invoke(app, ["summary", "--output-dir", str(tmp_path)])

        assert result.exit_code == 0
        lines = (tmp_path / "scrape_summary.txt").read_text(encoding="utf-8").splitlines()
        assert lines[:2] == ["TOTAL_ITEMS=2", "NEW_ITEMS=1"]
