"""
L4 Execution — Core subprocess runner.

The SINGLE PLACE where ``subprocess.run`` is called for install
operations. Logging and error shaping are centralised here.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)

_TAIL = 2000


def _is_root() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0


def _run_subprocess(
    cmd: list[str],
    *,
    needs_sudo: bool = False,
    timeout: int = 120,
    input_text: str | None = None,
    env_overrides: dict[str, str] | None = None,
    cwd: str | None = None,
) -> dict[str, Any]:
    """Run a command and shape the result into a dict.

    Never raises for command failure: a missing executable, a non-zero
    exit and a timeout all come back as ``{"ok": False, ...}``.

    Args:
        cmd: Command list for ``subprocess.run()``.
        needs_sudo: Prefix with ``sudo`` unless already root.  sudo
            prompts on the controlling terminal when it needs a password.
        timeout: Seconds before the command is treated as failed.
        input_text: Data written to the command's stdin.
        env_overrides: Extra env vars merged over ``os.environ``.
        cwd: Working directory for the command.

    Returns:
        ``{"ok": True, "stdout": "...", "elapsed_ms": N}`` on success,
        ``{"ok": False, "error": "...", ...}`` on failure.
    """
    if needs_sudo and not _is_root():
        cmd = ["sudo"] + cmd

    env = None
    if env_overrides:
        env = os.environ.copy()
        for key, value in env_overrides.items():
            env[key] = os.path.expandvars(value)

    logger.debug("Running: %s", " ".join(cmd))
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            input=input_text,
            env=env,
            cwd=cwd,
        )
    except FileNotFoundError:
        return {"ok": False, "error": f"Command not found: {cmd[0]}"}
    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"Command timed out ({timeout}s)"}
    except OSError as e:
        logger.debug("Subprocess error: %s", cmd, exc_info=True)
        return {"ok": False, "error": str(e)}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    stdout = result.stdout[-_TAIL:] if result.stdout else ""

    if result.returncode == 0:
        return {"ok": True, "stdout": stdout, "elapsed_ms": elapsed_ms}

    stderr = result.stderr[-_TAIL:] if result.stderr else ""
    logger.debug("Command failed (exit %d): %s", result.returncode, stderr.strip())
    return {
        "ok": False,
        "error": f"Command failed (exit {result.returncode})",
        "returncode": result.returncode,
        "stderr": stderr,
        "stdout": stdout,
        "elapsed_ms": elapsed_ms,
    }


def _failure_detail(result: dict[str, Any]) -> str:
    """One-line description of a failed ``_run_subprocess`` result."""
    error = result.get("error", "unknown error")
    stderr = (result.get("stderr") or "").strip()
    if stderr:
        return f"{error}: {stderr.splitlines()[-1]}"
    return error
