"""
L4 Execution — Editor configuration materialization.

    validate source  →  backup / remove target  →  copy tree  →  plugin sync
        (fatal)              (fatal on error)        (fatal)        (warn)

The source is checked before the target is touched, so a broken
bundle never costs the user their existing configuration.
"""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING

from nvim_bootstrap.core.errors import ConfigCopyError, ConfigSourceError
from nvim_bootstrap.core.models.run import STAGE_CONFIG, StageResult
from nvim_bootstrap.core.services.provision.data.constants import SYNC_TIMEOUT
from nvim_bootstrap.core.services.provision.detection.tools import is_installed
from nvim_bootstrap.core.services.provision.execution.backup import backup_existing
from nvim_bootstrap.core.services.provision.execution.subprocess_runner import (
    _failure_detail,
    _run_subprocess,
)

if TYPE_CHECKING:
    from nvim_bootstrap.core.models.settings import Settings

logger = logging.getLogger(__name__)

SYNC_COMMAND = ["nvim", "--headless", "+Lazy! sync", "+qa"]


def materialize_config(
    settings: Settings,
    *,
    backup: bool = True,
    sync: bool = True,
) -> StageResult:
    """Replace the editor config directory with the bundled tree.

    Args:
        settings: Resolved run settings (source and target paths).
        backup: Rename an existing target aside instead of deleting it.
        sync: Run a headless plugin sync once the tree is in place.

    Raises:
        ConfigSourceError: The bundled source tree does not exist.
        ConfigCopyError: The existing target could not be moved, or the
            copy failed (the partial target is removed).
    """
    source = settings.source_dir
    target = settings.nvim_target
    result = StageResult(name=STAGE_CONFIG)

    if not source.is_dir():
        raise ConfigSourceError(f"Configuration source not found at {source}")
    if not (source / settings.entry_point).is_file():
        result.warn(f"{settings.entry_point} not found in {source}", log=logger)

    logger.info("Setting up Neovim configuration...")
    if target.exists() or target.is_symlink():
        try:
            if backup:
                dest = backup_existing(target)
                logger.warning("Existing Neovim config backed up to %s", dest)
                result.details["backup"] = str(dest)
            elif target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except OSError as exc:
            raise ConfigCopyError(f"Could not clear existing config at {target}: {exc}") from exc

    try:
        target.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source, target, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        shutil.rmtree(target, ignore_errors=True)
        raise ConfigCopyError(f"Failed to copy configuration to {target}: {exc}") from exc

    logger.info("Neovim configuration copied to %s", target)
    result.details["target"] = str(target)

    if sync:
        _sync_plugins(result)
    else:
        logger.info("Skipping plugin sync")
    return result


def _sync_plugins(result: StageResult) -> None:
    if not is_installed("nvim"):
        result.warn("nvim not found on PATH, skipping plugin sync.", log=logger)
        return

    logger.info("Syncing plugins...")
    outcome = _run_subprocess(SYNC_COMMAND, timeout=SYNC_TIMEOUT)
    if not outcome["ok"]:
        logger.debug("Lazy sync: %s", _failure_detail(outcome))
        result.warn(
            "Lazy sync encountered issues. You may need to run :Lazy sync manually in Neovim.",
            log=logger,
        )
        return
    result.details["synced"] = True
