"""Tests for the collect and summary CLI commands."""

import json
import os
from pathlib import Path
from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from gh_health.cli.main import app
from gh_health.config import DEFAULT_USERNAME
from gh_health.github_client.models import RunReport

runner = CliRunner()


class TestCollectCommand:
    """Test the collect command."""

    @patch.dict(os.environ, {"GITHUB_TOKEN": "env_token"})
    def test_collect_builds_config(self, tmp_path: Path) -> None:
        """Test options and environment end up in the run config."""
        report = RunReport(
            username="octocat",
            repository_count=2,
            enriched_count=2,
            aggregate_path=tmp_path / "repos-octocat.json",
        )

        with patch(
            "gh_health.cli.collect.run_collection", new=AsyncMock(return_value=report)
        ) as mock_run:
            result = runner.invoke(
                app,
                [
                    "collect",
                    "--username",
                    "octocat",
                    "--output-dir",
                    str(tmp_path),
                    "--concurrency",
                    "5",
                    "--rate-limit",
                    "2",
                ],
            )

        assert result.exit_code == 0
        mock_run.assert_awaited_once()
        config = mock_run.call_args.args[0]
        assert config.username == "octocat"
        assert config.token == "env_token"
        assert config.output_dir == tmp_path
        assert config.concurrency == 5
        assert config.requests_per_second == 2.0
        assert "Summary: 2/2" in result.stdout

    @patch.dict(os.environ, {}, clear=True)
    def test_collect_defaults(self, tmp_path: Path) -> None:
        """Test the default user and an empty token are used when unset."""
        report = RunReport(username=DEFAULT_USERNAME)

        with patch(
            "gh_health.cli.collect.run_collection", new=AsyncMock(return_value=report)
        ) as mock_run:
            result = runner.invoke(app, ["collect", "--output-dir", str(tmp_path)])

        assert result.exit_code == 0
        config = mock_run.call_args.args[0]
        assert config.username == DEFAULT_USERNAME
        assert config.token == ""
        assert "GITHUB_TOKEN is not set" in result.stdout

    def test_collect_token_option(self, tmp_path: Path) -> None:
        """Test --token overrides the environment."""
        report = RunReport(username=DEFAULT_USERNAME)

        with patch(
            "gh_health.cli.collect.run_collection", new=AsyncMock(return_value=report)
        ) as mock_run:
            runner.invoke(
                app, ["collect", "--token", "cli_token", "-d", str(tmp_path)]
            )

        assert mock_run.call_args.args[0].token == "cli_token"

    def test_collect_repository_failure_exits_zero(self, tmp_path: Path) -> None:
        """Test API failures are reported without a failing exit code."""
        report = RunReport(username="ghost", repositories_stage_failed=True)

        with patch(
            "gh_health.cli.collect.run_collection", new=AsyncMock(return_value=report)
        ):
            result = runner.invoke(
                app, ["collect", "-u", "ghost", "-d", str(tmp_path)]
            )

        assert result.exit_code == 0
        assert "not fetched" in result.stdout

    def test_collect_rejects_negative_concurrency(self, tmp_path: Path) -> None:
        """Test option validation rejects negative concurrency."""
        result = runner.invoke(
            app, ["collect", "--concurrency", "-1", "-d", str(tmp_path)]
        )
        assert result.exit_code != 0


class TestSummaryCommand:
    """Test the summary command."""

    def write_aggregate(self, directory: Path, username: str, data: object) -> None:
        path = directory / f"repos-{username}.json"
        path.write_text(json.dumps({"data": data}), encoding="utf-8")

    def test_summary_counts(self, tmp_path: Path) -> None:
        """Test issue and pull request counts are shown per repository."""
        self.write_aggregate(
            tmp_path,
            "octocat",
            [
                {
                    "full_name": "octocat/alpha",
                    "issues": [{"id": 1}, {"id": 3}],
                    "pullrequests": [{"id": 2, "pull_request": {}}],
                },
                None,
            ],
        )

        result = runner.invoke(app, ["summary", "-u", "octocat", "-d", str(tmp_path)])

        assert result.exit_code == 0
        assert "octocat/alpha" in result.stdout
        assert "Total" in result.stdout
        assert "1 repositories have no issue data" in result.stdout

    def test_summary_failed_run(self, tmp_path: Path) -> None:
        """Test a run whose repository list failed is reported."""
        self.write_aggregate(tmp_path, "ghost", None)

        result = runner.invoke(app, ["summary", "-u", "ghost", "-d", str(tmp_path)])

        assert result.exit_code == 0
        assert "was not fetched" in result.stdout

    def test_summary_missing_file(self, tmp_path: Path) -> None:
        """Test a missing aggregate exits with an error."""
        result = runner.invoke(app, ["summary", "-u", "nobody", "-d", str(tmp_path)])

        assert result.exit_code == 1
        assert "No aggregate found" in result.stdout

    def test_summary_corrupt_file(self, tmp_path: Path) -> None:
        """Test an aggregate that is not valid JSON exits with an error."""
        (tmp_path / "repos-octocat.json").write_text('{"data": [', encoding="utf-8")

        result = runner.invoke(app, ["summary", "-u", "octocat", "-d", str(tmp_path)])

        assert result.exit_code == 1
        assert "Could not read aggregate" in result.stdout

    def test_summary_not_an_object(self, tmp_path: Path) -> None:
        """Test an aggregate whose top level is not an object exits with an error."""
        (tmp_path / "repos-octocat.json").write_text("[1, 2]", encoding="utf-8")

        result = runner.invoke(app, ["summary", "-u", "octocat", "-d", str(tmp_path)])

        assert result.exit_code == 1
        assert "Could not read aggregate" in result.stdout

    def test_summary_skips_non_object_entries(self, tmp_path: Path) -> None:
        """Test entries that are not objects count as missing repositories."""
        self.write_aggregate(
            tmp_path,
            "octocat",
            [{"full_name": "octocat/hello", "issues": [{}], "pullrequests": []}, 7],
        )

        result = runner.invoke(app, ["summary", "-u", "octocat", "-d", str(tmp_path)])

        assert result.exit_code == 0
        assert "octocat/hello" in result.stdout
        assert "1 repositories have no issue data" in result.stdout

    def test_summary_does_not_create_directory(self, tmp_path: Path) -> None:
        """Test a missing output directory is reported, not created."""
        missing_dir = tmp_path / "nowhere"

        result = runner.invoke(
            app, ["summary", "-u", "octocat", "-d", str(missing_dir)]
        )

        assert result.exit_code == 1
        assert "No aggregate found" in result.stdout
        assert not missing_dir.exists()
