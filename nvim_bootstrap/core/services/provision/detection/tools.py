"""
L3 Detection — Installed/missing status of resolved tools.
"""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING

from nvim_bootstrap.core.models.platform import PlatformProfile
from nvim_bootstrap.core.models.tool import ToolSpec

if TYPE_CHECKING:
    from nvim_bootstrap.core.services.provision.execution.package_manager import (
        PackageManager,
    )

logger = logging.getLogger(__name__)


def is_installed(command: str) -> bool:
    """True when ``command`` resolves on PATH."""
    return shutil.which(command) is not None


def is_tool_present(spec: ToolSpec, manager: PackageManager | None = None) -> bool:
    """A tool is present if its command is on PATH, or the package
    manager reports the package installed."""
    if is_installed(spec.command):
        return True
    if manager is not None and manager.is_installed(spec.package):
        logger.debug("%s: package installed, command '%s' not on PATH", spec.package, spec.command)
        return True
    return False


def check_tools(
    profile: PlatformProfile,
    manager: PackageManager | None = None,
) -> dict[str, list[str]]:
    """Split the profile's tools into present and missing.

    Returns:
        ``{"present": ["git", ...], "missing": ["neovim", ...]}``
        (package names, in profile order)
    """
    present: list[str] = []
    missing: list[str] = []
    for spec in profile.tools:
        if is_tool_present(spec, manager):
            present.append(spec.package)
        else:
            missing.append(spec.package)
    return {"present": present, "missing": missing}
