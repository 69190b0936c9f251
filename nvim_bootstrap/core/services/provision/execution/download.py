"""
L4 Execution — File download and tarball extraction.
"""

from __future__ import annotations

import logging
import tarfile
import urllib.request
from pathlib import Path
from typing import Any

from nvim_bootstrap import __version__
from nvim_bootstrap.core.services.provision.data.constants import DOWNLOAD_TIMEOUT

logger = logging.getLogger(__name__)


def _download_file(
    url: str,
    dest: Path,
    *,
    timeout: int = DOWNLOAD_TIMEOUT,
) -> dict[str, Any]:
    """Stream ``url`` into ``dest``.

    Returns:
        ``{"ok": True, "path": "...", "size_bytes": N}`` or
        ``{"ok": False, "error": "..."}``.
    """
    logger.debug("Downloading %s → %s", url, dest)
    try:
        req = urllib.request.Request(
            url, headers={"User-Agent": f"nvim-bootstrap/{__version__}"},
        )
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            with open(dest, "wb") as f:
                while True:
                    chunk = resp.read(8192)
                    if not chunk:
                        break
                    f.write(chunk)
    except OSError as exc:
        # URLError and socket timeouts are OSError subclasses
        return {"ok": False, "error": f"Download failed: {exc}"}

    return {"ok": True, "path": str(dest), "size_bytes": dest.stat().st_size}


def _extract_tarball(archive: Path, dest: Path) -> None:
    """Extract a (possibly compressed) tarball into ``dest``.

    Members that would land outside ``dest`` are rejected by the
    ``data`` extraction filter.

    Raises:
        tarfile.TarError: Corrupt or unsupported archive.
        OSError: Unreadable archive or unwritable destination.
    """
    with tarfile.open(archive, "r:*") as tf:
        tf.extractall(dest, filter="data")
