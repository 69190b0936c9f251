"""
L3 Detection — Host platform.

``read_platform_signals`` is the only function here that touches the
system. ``detect_platform`` is a pure function of the signals, so the
same signals always produce the same profile.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from dataclasses import dataclass
from pathlib import Path

from nvim_bootstrap.core.errors import UnsupportedPlatformError
from nvim_bootstrap.core.models.platform import PlatformKind, PlatformProfile
from nvim_bootstrap.core.services.provision.data.tools import PACKAGE_MANAGERS
from nvim_bootstrap.core.services.provision.resolver.tool_resolution import tool_specs_for

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")

# os-release IDs that mean "apt works here"
_DEBIAN_IDS = frozenset({"debian", "ubuntu"})


@dataclass(frozen=True)
class PlatformSignals:
    """Raw OS identification signals."""

    sys_platform: str
    os_release: str = ""
    machine: str = ""
    euid: int = 0


def read_platform_signals(os_release_path: Path = OS_RELEASE_PATH) -> PlatformSignals:
    """Collect detection signals from the running host."""
    try:
        os_release = os_release_path.read_text(encoding="utf-8")
    except OSError:
        os_release = ""
    return PlatformSignals(
        sys_platform=sys.platform,
        os_release=os_release,
        machine=platform.machine(),
        euid=os.geteuid() if hasattr(os, "geteuid") else 0,
    )


def parse_os_release(text: str) -> dict[str, str]:
    """Parse ``/etc/os-release`` KEY=value lines (quotes stripped)."""
    fields: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        fields[key.strip()] = value.strip().strip('"').strip("'")
    return fields


def detect_platform(signals: PlatformSignals) -> PlatformProfile:
    """Classify the host and build its immutable profile.

    Returns:
        A macOS or Debian-family profile.

    Raises:
        UnsupportedPlatformError: For every other host.
    """
    if signals.sys_platform.startswith("darwin"):
        return _build_profile(PlatformKind.MACOS, signals, needs_sudo=False)

    if signals.sys_platform.startswith("linux"):
        release = parse_os_release(signals.os_release)
        ids = {release.get("ID", "").lower()}
        ids.update(release.get("ID_LIKE", "").lower().split())
        if ids & _DEBIAN_IDS:
            return _build_profile(
                PlatformKind.DEBIAN,
                signals,
                needs_sudo=signals.euid != 0,
                distro_id=release.get("ID", "").lower(),
                codename=(
                    release.get("VERSION_CODENAME")
                    or release.get("UBUNTU_CODENAME", "")
                ),
            )

    raise UnsupportedPlatformError("Unsupported OS. Exiting.")


def _build_profile(
    kind: PlatformKind,
    signals: PlatformSignals,
    *,
    needs_sudo: bool,
    distro_id: str = "",
    codename: str = "",
) -> PlatformProfile:
    return PlatformProfile(
        kind=kind,
        package_manager=PACKAGE_MANAGERS[kind],
        needs_sudo=needs_sudo,
        distro_id=distro_id,
        codename=codename,
        machine=signals.machine,
        tools=tool_specs_for(kind),
    )
