"""
L5 Orchestration — The provisioning run.

Fixed linear sequence, no re-entry::

    detect platform
      → dependencies      (--skip-deps)
      → plugin manager    (--skip-lazy)
      → jira-tool         (--skip-jira, or no archive)
      → config            (always; --skip-sync / --no-backup tune it)

``ProvisionError`` subclasses propagate and end the run.
``StepFatalError`` subclasses fail only their own stage.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nvim_bootstrap.core.errors import ArchiveNotFoundError, StepFatalError
from nvim_bootstrap.core.models.platform import PlatformProfile
from nvim_bootstrap.core.models.run import (
    STAGE_ARCHIVE_TOOL,
    STAGE_DEPENDENCIES,
    STAGE_PLUGIN_MANAGER,
    RunOptions,
    RunReport,
    StageResult,
)
from nvim_bootstrap.core.services.provision.detection.platform import (
    PlatformSignals,
    detect_platform,
    read_platform_signals,
)
from nvim_bootstrap.core.services.provision.execution.archive import install_archive_tool
from nvim_bootstrap.core.services.provision.execution.installer import install_dependencies
from nvim_bootstrap.core.services.provision.execution.materialize import materialize_config
from nvim_bootstrap.core.services.provision.execution.plugin_manager import (
    bootstrap_plugin_manager,
)

if TYPE_CHECKING:
    from nvim_bootstrap.core.models.settings import Settings

logger = logging.getLogger(__name__)


def run_setup(
    options: RunOptions,
    settings: Settings,
    *,
    signals: PlatformSignals | None = None,
) -> RunReport:
    """Provision the editor environment end to end.

    Args:
        options: Which stages to skip and how to treat the old config.
        settings: Resolved paths and pinned versions.
        signals: Host identification; read from the system when omitted.

    Returns:
        RunReport with one StageResult per stage, in run order.

    Raises:
        ProvisionError: Any fatal condition.  Nothing after the failing
            stage has run.
    """
    profile = detect_platform(signals or read_platform_signals())
    logger.info("Starting Neovim setup...")
    logger.info("Detected %s", profile.label)

    report = RunReport(platform=profile.label)
    report.add(_dependencies_stage(profile, settings, options, report))
    report.add(_plugin_manager_stage(settings, options))
    report.add(_archive_stage(settings, options))
    report.add(
        materialize_config(
            settings,
            backup=not options.no_backup,
            sync=not options.skip_sync,
        )
    )

    logger.info("Neovim setup complete")
    if report.degraded:
        logger.warning("Finished with %d warning(s)", len(report.warnings))
    return report


def _dependencies_stage(
    profile: PlatformProfile,
    settings: Settings,
    options: RunOptions,
    report: RunReport,
) -> StageResult:
    if options.skip_deps:
        logger.info("Skipping dependency installation")
        return StageResult.skipped(STAGE_DEPENDENCIES, "--skip-deps")

    install = install_dependencies(profile, settings)
    report.install = install
    return StageResult(
        name=STAGE_DEPENDENCIES,
        warnings=install.warnings,
        details=install.summary(),
    )


def _plugin_manager_stage(settings: Settings, options: RunOptions) -> StageResult:
    if options.skip_lazy:
        logger.info("Skipping lazy.nvim installation")
        return StageResult.skipped(STAGE_PLUGIN_MANAGER, "--skip-lazy")

    outcome = bootstrap_plugin_manager(settings)
    return StageResult(
        name=STAGE_PLUGIN_MANAGER,
        details={"status": outcome.status, "path": str(settings.lazy_path)},
    )


def _archive_stage(settings: Settings, options: RunOptions) -> StageResult:
    if options.skip_jira:
        logger.info("Skipping jira-tool installation")
        return StageResult.skipped(STAGE_ARCHIVE_TOOL, "--skip-jira")

    try:
        return install_archive_tool(settings)
    except ArchiveNotFoundError as e:
        logger.warning("%s", e)
        return StageResult.skipped(STAGE_ARCHIVE_TOOL, str(e), warnings=[str(e)])
    except StepFatalError as e:
        logger.error("%s", e)
        return StageResult.failure(STAGE_ARCHIVE_TOOL, str(e))
