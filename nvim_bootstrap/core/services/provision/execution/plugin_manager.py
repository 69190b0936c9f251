"""
L4 Execution — Plugin-manager bootstrap (lazy.nvim).

One clone, once. The editor config cannot load without it, so a
failed clone is fatal.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from nvim_bootstrap.core.errors import MissingPrerequisiteError, PluginManagerError
from nvim_bootstrap.core.models.tool import InstallOutcome
from nvim_bootstrap.core.services.provision.data.constants import CLONE_TIMEOUT
from nvim_bootstrap.core.services.provision.detection.tools import is_installed
from nvim_bootstrap.core.services.provision.execution.subprocess_runner import (
    _failure_detail,
    _run_subprocess,
)

if TYPE_CHECKING:
    from nvim_bootstrap.core.models.settings import Settings

logger = logging.getLogger(__name__)

PLUGIN_MANAGER = "lazy.nvim"


def bootstrap_plugin_manager(settings: Settings) -> InstallOutcome:
    """Clone lazy.nvim into its well-known path unless already there.

    Raises:
        MissingPrerequisiteError: git is not installed.
        PluginManagerError: The clone failed.
    """
    path = settings.lazy_path
    if path.is_dir():
        logger.info("lazy.nvim is already installed.")
        return InstallOutcome.already_present(PLUGIN_MANAGER, method="git")

    if not is_installed("git"):
        raise MissingPrerequisiteError(
            "git is required but not installed. Please install git first.",
            missing=["git"],
        )

    logger.info("Installing lazy.nvim...")
    path.parent.mkdir(parents=True, exist_ok=True)
    result = _run_subprocess(
        [
            "git", "clone", "--filter=blob:none",
            settings.lazy_repo, f"--branch={settings.lazy_ref}", str(path),
        ],
        timeout=CLONE_TIMEOUT,
    )
    if not result["ok"]:
        raise PluginManagerError(f"Failed to install lazy.nvim: {_failure_detail(result)}")

    return InstallOutcome.installed(PLUGIN_MANAGER, method="git")
