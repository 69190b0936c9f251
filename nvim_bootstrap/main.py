"""
nvim-bootstrap — CLI entrypoint.

Usage:
    nvim-bootstrap --help
    nvim-bootstrap --skip-deps --skip-jira
    python -m nvim_bootstrap.main --no-backup
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click

from nvim_bootstrap import __version__
from nvim_bootstrap.core.config.loader import load_settings
from nvim_bootstrap.core.errors import ProvisionError
from nvim_bootstrap.core.models.run import RunOptions, RunReport
from nvim_bootstrap.core.observability.logging_config import setup_logging
from nvim_bootstrap.core.services.provision import run_setup

logger = logging.getLogger(__name__)

_STATUS_COLORS = {"completed": "green", "skipped": "white", "failed": "red"}


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="nvim-bootstrap")
@click.option("--skip-deps", is_flag=True, help="Skip dependency installation.")
@click.option("--skip-jira", is_flag=True, help="Skip jira-tool installation.")
@click.option("--skip-lazy", is_flag=True, help="Skip lazy.nvim installation.")
@click.option("--skip-sync", is_flag=True, help="Skip the headless plugin sync.")
@click.option("--no-backup", is_flag=True, help="Replace the existing config without a backup.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to nvim-bootstrap.yml (default: auto-detect).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the run report as JSON.")
def cli(
    skip_deps: bool,
    skip_jira: bool,
    skip_lazy: bool,
    skip_sync: bool,
    no_backup: bool,
    verbose: bool,
    config_path: str | None,
    as_json: bool,
) -> None:
    """Set up Neovim, its dependencies and configuration on this machine."""
    # ── Logging setup (once, at process start) ──────────────────
    level = "DEBUG" if verbose else os.environ.get("NVB_LOG_LEVEL", "INFO")
    setup_logging(
        level=level,
        log_file=os.environ.get("NVB_LOG_FILE"),
        log_file_level=os.environ.get("NVB_LOG_FILE_LEVEL"),
        quiet_third_party=not verbose,
    )

    options = RunOptions(
        skip_deps=skip_deps,
        skip_jira=skip_jira,
        skip_lazy=skip_lazy,
        skip_sync=skip_sync,
        no_backup=no_backup,
    )

    try:
        settings = load_settings(Path(config_path) if config_path else None)
        report = run_setup(options, settings)
    except ProvisionError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    _print_summary(report)


def _print_summary(report: RunReport) -> None:
    click.echo()
    click.secho(f"🖥️  {report.platform}", fg="cyan", bold=True)
    for stage in report.stages:
        colour = _STATUS_COLORS.get(stage.status, "white")
        click.echo(f"   {stage.name:<16}", nl=False)
        click.secho(stage.status, fg=colour)
        if stage.error:
            click.secho(f"      {stage.error}", fg="red")

    if report.install is not None:
        counts = report.install.summary()
        click.echo(
            f"   packages: {counts['installed']} installed, "
            f"{counts['already_present']} already present, {counts['failed']} failed"
        )

    if report.warnings:
        click.echo()
        click.secho(f"⚠️  {len(report.warnings)} warning(s):", fg="yellow", bold=True)
        for warning in report.warnings:
            click.echo(f"   • {warning}")
        return

    click.echo()
    click.secho("✅ Neovim setup complete", fg="green", bold=True)


if __name__ == "__main__":
    cli()
