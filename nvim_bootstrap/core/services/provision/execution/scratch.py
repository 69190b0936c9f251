"""
L4 Execution — Scratch directories with guaranteed cleanup.

``scratch_directory()`` owns a fresh ``mkdtemp`` directory for the
duration of a ``with`` block and removes it on every exit path:
normal return, exception, Ctrl-C, and SIGTERM (converted to
``KeyboardInterrupt`` while the block is open).
"""

from __future__ import annotations

import logging
import shutil
import signal
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


@contextmanager
def _sigterm_as_interrupt() -> Iterator[None]:
    """Raise ``KeyboardInterrupt`` on SIGTERM so ``finally`` blocks run."""
    if threading.current_thread() is not threading.main_thread():
        # signal handlers can only be installed from the main thread
        yield
        return

    def _handler(signum: int, frame: object) -> None:
        raise KeyboardInterrupt(f"terminated by signal {signum}")

    previous = signal.signal(signal.SIGTERM, _handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGTERM, previous)


@contextmanager
def scratch_directory(prefix: str = "nvim-bootstrap-") -> Iterator[Path]:
    """Create an exclusively owned temp dir and always remove it.

    Usage::

        with scratch_directory(prefix="jira-tool-") as scratch:
            extract(archive, scratch)
            ...
        # scratch is gone here, whatever happened inside
    """
    path = Path(tempfile.mkdtemp(prefix=prefix))
    logger.debug("Created scratch directory %s", path)
    try:
        with _sigterm_as_interrupt():
            yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        if path.exists():
            logger.warning("Could not remove scratch directory %s", path)
        else:
            logger.debug("Removed scratch directory %s", path)
