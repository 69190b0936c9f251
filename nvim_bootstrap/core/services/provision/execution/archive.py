"""
L4 Execution — Bundled CLI tool installation (jira-tool archive).

Archive layout::

    jira-tool/
        bin/jira          CLI binary            (optional, warn if absent)
        zsh/jira.zsh      shell integration     (optional)

Sub-steps after extraction are independent: a missing binary does not
stop the config directory or shell integration from being set up.
The scratch directory is removed however the stage ends.
"""

from __future__ import annotations

import logging
import os
import shutil
import tarfile
from pathlib import Path
from typing import TYPE_CHECKING

from nvim_bootstrap.core.errors import (
    ArchiveExtractError,
    ArchiveInstallError,
    ArchiveLayoutError,
    ArchiveNotFoundError,
)
from nvim_bootstrap.core.models.run import STAGE_ARCHIVE_TOOL, StageResult
from nvim_bootstrap.core.services.provision.data.constants import (
    ARCHIVE_BINARY,
    ARCHIVE_CONFIG_SUBDIR,
    ARCHIVE_ROOT,
    ARCHIVE_SHELL_INTEGRATION,
)
from nvim_bootstrap.core.services.provision.data.profile_maps import ZSH_INTEGRATION_CANDIDATES
from nvim_bootstrap.core.services.provision.detection.shell import (
    file_mentions,
    local_bin_configured,
)
from nvim_bootstrap.core.services.provision.execution.download import _extract_tarball
from nvim_bootstrap.core.services.provision.execution.scratch import scratch_directory

if TYPE_CHECKING:
    from nvim_bootstrap.core.models.settings import Settings

logger = logging.getLogger(__name__)


def install_archive_tool(settings: Settings) -> StageResult:
    """Install the CLI tool shipped as a tarball next to the bundle.

    Raises:
        ArchiveNotFoundError: No archive; the caller skips the stage.
        ArchiveExtractError: Corrupt archive (step-fatal).
        ArchiveLayoutError: No ``jira-tool/`` root inside (step-fatal).
        ArchiveInstallError: Binary could not be copied (step-fatal).
    """
    archive = settings.archive_path
    if not archive.is_file():
        raise ArchiveNotFoundError(
            f"{archive.name} not found, skipping jira-tool installation."
        )

    logger.info("Installing jira-tool...")
    result = StageResult(name=STAGE_ARCHIVE_TOOL)

    with scratch_directory(prefix="jira-tool-") as scratch:
        try:
            _extract_tarball(archive, scratch)
        except (tarfile.TarError, OSError) as exc:
            raise ArchiveExtractError(f"Failed to extract {archive.name}: {exc}") from exc

        tool_root = scratch / ARCHIVE_ROOT
        if not tool_root.is_dir():
            raise ArchiveLayoutError(f"{ARCHIVE_ROOT} directory not found in archive.")

        _install_binary(tool_root, settings, result)
        _ensure_config_dir(settings, result)
        _install_shell_integration(tool_root, settings, result)

    _check_local_bin(settings, result)
    logger.info("jira-tool installation complete. Run 'jira setup' to configure credentials.")
    return result


def _install_binary(tool_root: Path, settings: Settings, result: StageResult) -> None:
    source = tool_root / ARCHIVE_BINARY
    if not source.is_file():
        result.warn("jira binary not found in archive.", log=logger)
        return

    dest = settings.local_bin / source.name
    if dest.exists():
        result.warn(f"jira binary already exists at {dest}, overwriting...", log=logger)

    try:
        settings.local_bin.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, dest)
        os.chmod(dest, 0o755)
    except OSError as exc:
        raise ArchiveInstallError(f"Failed to install jira CLI binary: {exc}") from exc

    logger.info("jira CLI installed to %s", dest)
    result.details["binary"] = str(dest)


def _ensure_config_dir(settings: Settings, result: StageResult) -> None:
    config_dir = settings.jira_config_dir
    (config_dir / ARCHIVE_CONFIG_SUBDIR).mkdir(parents=True, exist_ok=True)
    logger.info("jira config directory ready at %s", config_dir)
    result.details["config_dir"] = str(config_dir)


def pick_integration_dir(home: Path) -> tuple[Path, Path, bool]:
    """Choose where the shell integration script goes.

    Returns:
        ``(directory, profile_file, existed)``: the first existing
        candidate, or the first candidate (not yet created) when none
        exist.
    """
    for directory, profile in ZSH_INTEGRATION_CANDIDATES:
        if (home / directory).is_dir():
            return home / directory, home / profile, True
    directory, profile = ZSH_INTEGRATION_CANDIDATES[0]
    return home / directory, home / profile, False


def _install_shell_integration(tool_root: Path, settings: Settings, result: StageResult) -> None:
    source = tool_root / ARCHIVE_SHELL_INTEGRATION
    if not source.is_file():
        logger.debug("No shell integration in archive")
        return

    home = settings.home
    directory, profile, existed = pick_integration_dir(home)
    if not existed:
        directory.mkdir(parents=True, exist_ok=True)

    dest = directory / source.name
    try:
        shutil.copyfile(source, dest)
    except OSError as exc:
        result.warn(f"Could not install zsh integration to {dest}: {exc}", log=logger)
        return

    logger.info("Zsh integration installed to %s", _tilde(dest, home))
    result.details["shell_integration"] = str(dest)

    if not file_mentions(profile, source.name):
        shown = _tilde(dest, home)
        result.warn(
            f"Add to {_tilde(profile, home)}: [[ -f {shown} ]] && source {shown}",
            log=logger,
        )


def _check_local_bin(settings: Settings, result: StageResult) -> None:
    if not local_bin_configured(settings.home, settings.local_bin):
        result.warn(
            f"{_tilde(settings.local_bin, settings.home)} not in PATH. "
            'Add to your shell config: export PATH="$HOME/.local/bin:$PATH"',
            log=logger,
        )


def _tilde(path: Path, home: Path) -> str:
    """Render ``path`` with ``~`` in place of ``home``."""
    try:
        return "~/" + path.relative_to(home).as_posix()
    except ValueError:
        return str(path)
