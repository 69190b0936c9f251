"""
L4 Execution — Tools installed outside the platform package manager.

Each installer follows the same contract:

    1. already installed?  → ``already_present``, nothing runs
    2. try the alternative mechanism (release download, cargo, npm)
    3. any failure         → warning + ``failed`` outcome, never raises
"""

from __future__ import annotations

import logging
import os
import shutil
import tarfile
from pathlib import Path
from typing import TYPE_CHECKING

from nvim_bootstrap.core.models.platform import PlatformProfile
from nvim_bootstrap.core.models.tool import InstallOutcome
from nvim_bootstrap.core.services.provision.data.constants import (
    _IARCH_MAP,
    INSTALL_TIMEOUT,
    LUA_LS_ARCH_MAP,
    LUA_LS_URL,
    QUERY_TIMEOUT,
    YQ_INSTALL_PATH,
    YQ_URL,
)
from nvim_bootstrap.core.services.provision.detection.tools import is_installed
from nvim_bootstrap.core.services.provision.execution.download import (
    _download_file,
    _extract_tarball,
)
from nvim_bootstrap.core.services.provision.execution.scratch import scratch_directory
from nvim_bootstrap.core.services.provision.execution.subprocess_runner import (
    _failure_detail,
    _run_subprocess,
)

if TYPE_CHECKING:
    from nvim_bootstrap.core.models.settings import Settings

logger = logging.getLogger(__name__)


def _failed(tool: str, reason: str, method: str) -> InstallOutcome:
    logger.warning("%s: %s", tool, reason)
    return InstallOutcome.failure(tool, reason, method=method)


def _symlink(source: Path, link: Path) -> None:
    """Point ``link`` at ``source``, replacing whatever was there."""
    link.parent.mkdir(parents=True, exist_ok=True)
    if link.is_symlink() or link.exists():
        link.unlink()
    link.symlink_to(source)


def _links_to(link: Path, source: Path) -> bool:
    return link.is_symlink() and link.resolve() == source.resolve()


# ── fd / bat (Debian ships them as fdfind / batcat) ─────────────


def _link_alias(alias: str, actual: str, settings: Settings) -> list[InstallOutcome]:
    """Expose the Debian-renamed ``actual`` as ``alias`` in ``~/.local/bin``."""
    tool, method = f"{alias}-link", "symlink"
    link = settings.local_bin / alias
    target = shutil.which(actual)

    if target is None:
        if is_installed(alias):
            return [InstallOutcome.already_present(tool, method=method)]
        return [_failed(tool, f"{actual} not installed, cannot create {alias} symlink", method)]

    if is_installed(alias) or _links_to(link, Path(target)):
        return [InstallOutcome.already_present(tool, method=method)]

    try:
        _symlink(Path(target), link)
    except OSError as exc:
        return [_failed(tool, f"Could not create {link}: {exc}", method)]
    logger.info("Created %s symlink.", alias)
    return [InstallOutcome.installed(tool, method=method)]


def link_fd(profile: PlatformProfile, settings: Settings) -> list[InstallOutcome]:
    """Expose ``fdfind`` as ``fd``."""
    return _link_alias("fd", "fdfind", settings)


def link_bat(profile: PlatformProfile, settings: Settings) -> list[InstallOutcome]:
    """Expose ``batcat`` as ``bat``."""
    return _link_alias("bat", "batcat", settings)


# ── lua-language-server (GitHub release) ────────────────────────


def install_lua_language_server(
    profile: PlatformProfile,
    settings: Settings,
) -> list[InstallOutcome]:
    """Install a pinned lua-language-server release under ``~/.local``."""
    tool, method = "lua-language-server", "github_release"
    link = settings.local_bin / tool
    binary = settings.lua_ls_dir / "bin" / tool

    if is_installed(tool) or _links_to(link, binary):
        return [InstallOutcome.already_present(tool, method=method)]

    arch = LUA_LS_ARCH_MAP.get(profile.machine.lower())
    if arch is None:
        return [_failed(tool, f"Unsupported architecture {profile.machine or 'unknown'}, skipping", method)]

    version = settings.lua_language_server_version
    url = LUA_LS_URL.format(version=version, arch=arch)
    logger.info("Installing lua-language-server %s via GitHub release...", version)

    with scratch_directory(prefix="lua-ls-") as scratch:
        tarball = scratch / "lua-language-server.tar.gz"
        result = _download_file(url, tarball)
        if not result["ok"]:
            return [_failed(tool, result["error"], method)]
        try:
            settings.lua_ls_dir.mkdir(parents=True, exist_ok=True)
            _extract_tarball(tarball, settings.lua_ls_dir)
        except (tarfile.TarError, OSError) as exc:
            return [_failed(tool, f"Extract failed: {exc}", method)]

    if not binary.is_file():
        return [_failed(tool, f"{binary} missing from release archive", method)]
    try:
        _symlink(binary, link)
    except OSError as exc:
        return [_failed(tool, f"Could not create {link}: {exc}", method)]

    logger.info("lua-language-server installed successfully")
    return [InstallOutcome.installed(tool, method=method)]


# ── yq (static binary) ──────────────────────────────────────────


def install_yq(
    profile: PlatformProfile,
    settings: Settings,
    *,
    install_path: Path = Path(YQ_INSTALL_PATH),
) -> list[InstallOutcome]:
    """Download the static yq binary for this architecture."""
    tool, method = "yq", "binary_download"
    if is_installed(tool) or install_path.is_file():
        return [InstallOutcome.already_present(tool, method=method)]

    machine = profile.machine
    arch = _IARCH_MAP.get(machine, machine.lower())
    url = YQ_URL.format(arch=arch)
    logger.info("Installing yq via GitHub release...")

    with scratch_directory(prefix="yq-") as scratch:
        downloaded = scratch / "yq"
        result = _download_file(url, downloaded)
        if not result["ok"]:
            return [_failed(tool, result["error"], method)]
        needs_sudo = profile.needs_sudo and not os.access(install_path.parent, os.W_OK)
        result = _run_subprocess(
            ["install", "-m", "0755", str(downloaded), str(install_path)],
            needs_sudo=needs_sudo,
            timeout=QUERY_TIMEOUT,
        )
        if not result["ok"]:
            return [_failed(tool, _failure_detail(result), method)]

    return [InstallOutcome.installed(tool, method=method)]


# ── eza (cargo) ─────────────────────────────────────────────────


def install_eza(profile: PlatformProfile, settings: Settings) -> list[InstallOutcome]:
    """Build eza from crates.io when cargo is available."""
    tool, method = "eza", "cargo"
    if is_installed(tool):
        return [InstallOutcome.already_present(tool, method=method)]
    if not is_installed("cargo"):
        return [_failed(tool, "cargo not installed, skipping eza installation.", method)]

    logger.info("Installing eza via cargo...")
    result = _run_subprocess(["cargo", "install", "eza"], timeout=INSTALL_TIMEOUT)
    if not result["ok"]:
        return [_failed(tool, _failure_detail(result), method)]
    return [InstallOutcome.installed(tool, method=method)]


# ── npm globals (language servers, mermaid) ─────────────────────


def _npm_global_installed(package: str) -> bool:
    result = _run_subprocess(
        ["npm", "ls", "-g", "--depth=0", package],
        timeout=QUERY_TIMEOUT,
    )
    return result["ok"]


def install_npm_globals(profile: PlatformProfile, settings: Settings) -> list[InstallOutcome]:
    """Install the configured npm packages globally, skipping present ones."""
    method = "npm"
    packages = list(settings.npm_packages)
    if not packages:
        return []
    if not is_installed("npm"):
        logger.warning("npm not found, skipping npm package installation")
        return [InstallOutcome.failure(p, "npm not found", method=method) for p in packages]

    outcomes: dict[str, InstallOutcome] = {}
    missing: list[str] = []
    for pkg in packages:
        if _npm_global_installed(pkg):
            outcomes[pkg] = InstallOutcome.already_present(pkg, method=method)
        else:
            missing.append(pkg)

    if missing:
        logger.info("Installing npm-based tools: %s", " ".join(missing))
        result = _run_subprocess(
            ["npm", "install", "-g", *missing],
            needs_sudo=profile.needs_sudo,
            timeout=INSTALL_TIMEOUT,
        )
        if result["ok"]:
            for pkg in missing:
                outcomes[pkg] = InstallOutcome.installed(pkg, method=method)
        else:
            reason = _failure_detail(result)
            logger.warning("Failed to install some npm packages: %s", reason)
            for pkg in missing:
                outcomes[pkg] = InstallOutcome.failure(pkg, reason, method=method)

    return [outcomes[p] for p in packages]
