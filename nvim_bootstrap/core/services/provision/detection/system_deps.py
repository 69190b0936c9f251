"""
L3 Detection — Package-manager install queries.

Read-only queries asking the package manager whether a package is
installed.  Used when a package's command is not on PATH (pip, or
packages whose binary lives somewhere unusual).
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable

from nvim_bootstrap.core.services.provision.data.constants import QUERY_TIMEOUT

logger = logging.getLogger(__name__)

# pm → (query command, "is installed" predicate on the finished process)
_QUERIES: dict[str, tuple[list[str], Callable[[subprocess.CompletedProcess], bool]]] = {
    "apt": (
        ["dpkg-query", "-W", "-f=${Status}"],
        lambda r: "install ok installed" in r.stdout,
    ),
    "brew": (
        ["brew", "ls", "--versions"],
        lambda r: r.returncode == 0 and bool(r.stdout.strip()),
    ),
}


def is_package_installed(pkg: str, pkg_manager: str) -> bool:
    """Ask ``pkg_manager`` whether ``pkg`` is installed.

    Returns:
        True if installed; False if not, if the manager is unknown, or
        if the query itself could not run (logged as a warning).
    """
    query = _QUERIES.get(pkg_manager)
    if query is None:
        logger.debug("No install query for pm=%s", pkg_manager)
        return False

    cmd, installed = query
    try:
        r = subprocess.run(
            [*cmd, pkg], capture_output=True, text=True, timeout=QUERY_TIMEOUT,
        )
    except FileNotFoundError:
        logger.warning("Package checker %s not found (checking %s)", cmd[0], pkg)
        return False
    except subprocess.TimeoutExpired:
        logger.warning("Timeout checking package %s with pm=%s", pkg, pkg_manager)
        return False
    except OSError as exc:
        logger.warning("OS error checking package %s with pm=%s: %s", pkg, pkg_manager, exc)
        return False

    return installed(r)
