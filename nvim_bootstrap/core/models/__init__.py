"""
Domain models — Pydantic types for the provisioning run.

All models are re-exported here for convenient access:

    from nvim_bootstrap.core.models import PlatformProfile, ToolSpec, RunReport
"""

from nvim_bootstrap.core.models.platform import PlatformKind, PlatformProfile
from nvim_bootstrap.core.models.run import (
    STAGE_ARCHIVE_TOOL,
    STAGE_CONFIG,
    STAGE_DEPENDENCIES,
    STAGE_ORDER,
    STAGE_PLUGIN_MANAGER,
    RunOptions,
    RunReport,
    StageResult,
)
from nvim_bootstrap.core.models.settings import Settings
from nvim_bootstrap.core.models.tool import InstallOutcome, InstallReport, ToolSpec

__all__ = [
    "STAGE_ARCHIVE_TOOL",
    "STAGE_CONFIG",
    "STAGE_DEPENDENCIES",
    "STAGE_ORDER",
    "STAGE_PLUGIN_MANAGER",
    # tool.py
    "InstallOutcome",
    "InstallReport",
    # platform.py
    "PlatformKind",
    "PlatformProfile",
    # run.py
    "RunOptions",
    "RunReport",
    # settings.py
    "Settings",
    "StageResult",
    "ToolSpec",
]
