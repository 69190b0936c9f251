"""
L4 Execution — Dependency installation stage.

Order of operations:

    prerequisites  →  refresh  →  extra sources  →  package loop  →  extras
       (fatal)        (fatal)       (fatal)        (per-package)    (warn)

A single package failing never stops the loop; it becomes a
``failed`` outcome and a warning.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nvim_bootstrap.core.models.platform import PlatformProfile
from nvim_bootstrap.core.models.tool import InstallOutcome, InstallReport, ToolSpec
from nvim_bootstrap.core.services.provision.detection.prerequisites import check_prerequisites
from nvim_bootstrap.core.services.provision.detection.tools import (
    is_installed,
    is_tool_present,
)
from nvim_bootstrap.core.services.provision.execution.package_manager import (
    PackageManager,
    package_manager_for,
)
from nvim_bootstrap.core.services.provision.execution.subprocess_runner import _failure_detail

if TYPE_CHECKING:
    from nvim_bootstrap.core.models.settings import Settings

logger = logging.getLogger(__name__)


def install_tool(spec: ToolSpec, manager: PackageManager) -> InstallOutcome:
    """Install one tool if it is missing, then verify its command.

    Never raises: every failure mode is a ``failed`` outcome.
    """
    method = manager.name
    if is_tool_present(spec, manager):
        logger.info("%s is already installed.", spec.package)
        return InstallOutcome.already_present(spec.name, method=method)

    logger.info("Installing %s...", spec.package)
    result = manager.install(spec.package)
    if not result["ok"]:
        reason = _failure_detail(result)
        logger.warning("Failed to install %s, skipping... (%s)", spec.package, reason)
        return InstallOutcome.failure(spec.name, reason, method=method)

    if not is_installed(spec.command):
        reason = f"installed, but '{spec.command}' not found on PATH"
        logger.warning("%s: %s", spec.package, reason)
        return InstallOutcome.failure(spec.name, reason, method=method)

    return InstallOutcome.installed(spec.name, method=method)


def install_dependencies(
    profile: PlatformProfile,
    settings: Settings,
    *,
    manager: PackageManager | None = None,
) -> InstallReport:
    """Provision every tool the platform needs.

    Raises:
        MissingPrerequisiteError: git/tar/curl/... (or brew) missing.
        PreconditionError: index refresh or source registration failed.
    """
    manager = manager or package_manager_for(profile)
    check_prerequisites(profile)

    logger.info("Installing dependencies for %s...", profile.label)
    manager.refresh()
    added = manager.prepare_sources()
    if added:
        logger.debug("Registered package sources: %s", ", ".join(added))

    report = InstallReport()
    for spec in profile.tools:
        report.add(install_tool(spec, manager))

    for step in manager.extra_steps(settings):
        report.extend(step())

    counts = report.summary()
    logger.info(
        "Dependencies: %d installed, %d already present, %d failed",
        counts["installed"], counts["already_present"], counts["failed"],
    )
    return report
