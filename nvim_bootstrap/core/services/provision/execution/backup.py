"""
L4 Execution — Timestamped directory backup.

Moves an existing directory aside to a sibling named
``<name>.backup.YYYYmmdd_HHMMSS`` before it gets replaced.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from nvim_bootstrap.core.services.provision.data.constants import (
    BACKUP_INFIX,
    BACKUP_TIMESTAMP_FORMAT,
)

logger = logging.getLogger(__name__)


def backup_path_for(target: Path, timestamp: str | None = None) -> Path:
    """Pick a free sibling backup path for ``target``.

    Two backups inside the same second get ``-1``, ``-2``, ... suffixes
    rather than clobbering each other.
    """
    ts = timestamp or time.strftime(BACKUP_TIMESTAMP_FORMAT)
    candidate = target.with_name(f"{target.name}{BACKUP_INFIX}{ts}")
    n = 1
    while candidate.exists() or candidate.is_symlink():
        candidate = target.with_name(f"{target.name}{BACKUP_INFIX}{ts}-{n}")
        n += 1
    return candidate


def backup_existing(target: Path, timestamp: str | None = None) -> Path:
    """Rename ``target`` to its backup path and return that path.

    Raises:
        OSError: The rename failed; ``target`` is left where it was.
    """
    dest = backup_path_for(target, timestamp)
    target.rename(dest)
    logger.info("Backed up %s → %s", target, dest)
    return dest


def list_backups(target: Path) -> list[Path]:
    """Existing backups of ``target``, oldest first."""
    prefix = f"{target.name}{BACKUP_INFIX}"
    if not target.parent.is_dir():
        return []
    return sorted(p for p in target.parent.iterdir() if p.name.startswith(prefix))
