"""
L3 Detection — Shell environment checks.

Read-only checks against PATH and the user's shell rc files.
Nothing here ever writes a profile file.
"""

from __future__ import annotations

import os
from pathlib import Path

from nvim_bootstrap.core.services.provision.data.profile_maps import _PROFILE_MAP


def dir_on_path(directory: Path, path_env: str | None = None) -> bool:
    """True when ``directory`` is an entry of ``$PATH``."""
    path_env = os.environ.get("PATH", "") if path_env is None else path_env
    target = os.path.normpath(str(directory))
    return any(
        os.path.normpath(os.path.expanduser(entry)) == target
        for entry in path_env.split(os.pathsep)
        if entry
    )


def file_mentions(path: Path, needle: str) -> bool:
    """True when ``path`` is a readable file containing ``needle``."""
    try:
        return needle in path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False


def rc_files_mentioning(home: Path, needle: str) -> list[Path]:
    """Shell rc files under ``home`` that reference ``needle``."""
    found: list[Path] = []
    for entry in _PROFILE_MAP.values():
        rc = home / entry["rc_file"]
        if file_mentions(rc, needle):
            found.append(rc)
    return found


def local_bin_configured(home: Path, local_bin: Path, path_env: str | None = None) -> bool:
    """Whether ``local_bin`` is on PATH now or wired up in an rc file."""
    if dir_on_path(local_bin, path_env):
        return True
    return bool(rc_files_mentioning(home, ".local/bin"))
