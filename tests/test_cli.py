"""
Tests for the CLI — flags, exit codes and output.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from nvim_bootstrap.main import cli
from tests.provision.simulated_profiles import FEDORA, UBUNTU

_SIGNALS = "nvim_bootstrap.core.services.provision.orchestration.orchestrator.read_platform_signals"


@pytest.fixture
def env(bundle: Path, home: Path) -> dict:
    return {"NVB_BUNDLE_ROOT": str(bundle), "NVB_HOME": str(home), "NVB_LOG_LEVEL": "INFO"}


@pytest.fixture(autouse=True)
def _logging(restore_logging):
    yield


class TestCLIGlobal:
    def test_help(self):
        with patch("nvim_bootstrap.main.run_setup") as run:
            result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "--skip-deps" in result.output
        assert "--no-backup" in result.output
        run.assert_not_called()

    def test_short_help(self):
        result = CliRunner().invoke(cli, ["-h"])
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_unknown_flag_runs_nothing(self):
        with patch("nvim_bootstrap.main.run_setup") as run:
            result = CliRunner().invoke(cli, ["--frobnicate"])
        assert result.exit_code == 2
        assert "No such option" in result.output
        run.assert_not_called()


class TestRun:
    def test_full_run_with_skips(self, env, home, bundle):
        with patch(_SIGNALS, return_value=UBUNTU):
            result = CliRunner().invoke(
                cli, ["--skip-deps", "--skip-lazy", "--skip-sync"], env=env,
            )

        assert result.exit_code == 0, result.output
        assert (home / ".config" / "nvim" / "init.lua").is_file()
        # no archive in the bundle: skipped with a warning
        assert "jira-tool.tar.gz not found" in result.output
        assert "Ubuntu" in result.output

    def test_json_report(self, env, home):
        env["NVB_LOG_LEVEL"] = "ERROR"
        with patch(_SIGNALS, return_value=UBUNTU):
            result = CliRunner().invoke(
                cli,
                ["--skip-deps", "--skip-lazy", "--skip-sync", "--skip-jira", "--json"],
                env=env,
            )

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["platform"] == "Ubuntu"
        assert [s["status"] for s in data["stages"]] == [
            "skipped", "skipped", "skipped", "completed",
        ]
        assert data["degraded"] is False

    def test_existing_config_backed_up(self, env, home):
        old = home / ".config" / "nvim"
        old.mkdir(parents=True)
        (old / "init.vim").write_text("set number\n")
        with patch(_SIGNALS, return_value=UBUNTU):
            result = CliRunner().invoke(
                cli, ["--skip-deps", "--skip-lazy", "--skip-sync", "--skip-jira"], env=env,
            )
        assert result.exit_code == 0, result.output
        backups = [p for p in (home / ".config").iterdir() if p.name.startswith("nvim.backup.")]
        assert len(backups) == 1

    def test_unsupported_platform_exits_1(self, env):
        with patch(_SIGNALS, return_value=FEDORA):
            result = CliRunner().invoke(cli, [], env=env)
        assert result.exit_code == 1
        assert "❌ Unsupported OS. Exiting." in result.output

    def test_missing_config_source_exits_1(self, env, tmp_path):
        env["NVB_BUNDLE_ROOT"] = str(tmp_path / "nowhere")
        with patch(_SIGNALS, return_value=UBUNTU):
            result = CliRunner().invoke(
                cli, ["--skip-deps", "--skip-lazy", "--skip-jira"], env=env,
            )
        assert result.exit_code == 1
        assert "Configuration source not found" in result.output

    def test_bad_config_file_exits_1(self, env, tmp_path):
        result = CliRunner().invoke(cli, ["--config", str(tmp_path / "nope.yml")], env=env)
        assert result.exit_code == 1
        assert "Config file not found" in result.output
