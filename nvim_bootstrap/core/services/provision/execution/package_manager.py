"""
L4 Execution — Platform package managers.

A closed set of two implementations behind one interface.  The
orchestrator never branches on the platform itself; it asks
``package_manager_for(profile)`` and talks to the result.

    refresh()            update package indexes          (fatal)
    prepare_sources()    register extra package sources  (fatal)
    is_installed(pkg)    query-installed                 (read-only)
    install(pkg)         install one package             (result dict)
    extra_steps(...)     out-of-repo installers          (warn only)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING, Any

from nvim_bootstrap.core.errors import PreconditionError, UnsupportedPlatformError
from nvim_bootstrap.core.models.platform import PlatformKind, PlatformProfile
from nvim_bootstrap.core.models.tool import InstallOutcome
from nvim_bootstrap.core.services.provision.data.constants import (
    HASHICORP_KEY_URL,
    HASHICORP_KEYRING,
    HASHICORP_LIST,
    HASHICORP_REPO,
    INSTALL_TIMEOUT,
    NEOVIM_PPA,
    REFRESH_TIMEOUT,
)
from nvim_bootstrap.core.services.provision.detection.system_deps import is_package_installed
from nvim_bootstrap.core.services.provision.detection.tools import is_installed
from nvim_bootstrap.core.services.provision.execution.download import _download_file
from nvim_bootstrap.core.services.provision.execution.extras import (
    install_eza,
    install_lua_language_server,
    install_npm_globals,
    install_yq,
    link_bat,
    link_fd,
)
from nvim_bootstrap.core.services.provision.execution.scratch import scratch_directory
from nvim_bootstrap.core.services.provision.execution.subprocess_runner import (
    _failure_detail,
    _run_subprocess,
)

if TYPE_CHECKING:
    from nvim_bootstrap.core.models.settings import Settings

logger = logging.getLogger(__name__)

ExtraStep = Callable[[], list[InstallOutcome]]


class PackageManager(ABC):
    """Installation actions for one platform."""

    name: str = ""

    def __init__(self, profile: PlatformProfile) -> None:
        self.profile = profile

    @property
    def needs_sudo(self) -> bool:
        return self.profile.needs_sudo

    @abstractmethod
    def refresh(self) -> None:
        """Update package indexes.

        Raises:
            PreconditionError: The refresh command failed.
        """

    def prepare_sources(self) -> list[str]:
        """Register extra package sources; returns the ones added."""
        return []

    @abstractmethod
    def install_command(self, package: str) -> list[str]:
        """Command that installs ``package`` (without sudo)."""

    def is_installed(self, package: str) -> bool:
        return is_package_installed(package, self.name)

    def install(self, package: str) -> dict[str, Any]:
        return _run_subprocess(
            self.install_command(package),
            needs_sudo=self.needs_sudo,
            timeout=INSTALL_TIMEOUT,
        )

    def extra_steps(self, settings: Settings) -> list[ExtraStep]:
        """Installers for tools the package source does not carry."""
        return []

    def _precondition(self, cmd: list[str], description: str, **kwargs: Any) -> None:
        kwargs.setdefault("needs_sudo", self.needs_sudo)
        kwargs.setdefault("timeout", REFRESH_TIMEOUT)
        result = _run_subprocess(cmd, **kwargs)
        if not result["ok"]:
            raise PreconditionError(f"{description} failed: {_failure_detail(result)}")


class BrewPackageManager(PackageManager):
    """Homebrew on macOS (never sudo)."""

    name = "brew"

    @property
    def needs_sudo(self) -> bool:
        return False

    def refresh(self) -> None:
        logger.info("Updating Homebrew...")
        self._precondition(["brew", "update"], "brew update")

    def install_command(self, package: str) -> list[str]:
        return ["brew", "install", package]

    def extra_steps(self, settings: Settings) -> list[ExtraStep]:
        return [partial(install_npm_globals, self.profile, settings)]


class AptPackageManager(PackageManager):
    """apt on Debian and Ubuntu derivatives."""

    name = "apt"

    def refresh(self) -> None:
        logger.info("Updating apt package index...")
        self._precondition(["apt-get", "update"], "apt-get update")

    def install_command(self, package: str) -> list[str]:
        return ["apt-get", "install", "-y", package]

    def prepare_sources(self) -> list[str]:
        added: list[str] = []

        if not is_installed("nvim"):
            if self.profile.distro_id == "debian":
                logger.info("Neovim PPA is Ubuntu-only; using the Debian neovim package")
            else:
                logger.info("Adding Neovim PPA...")
                self._precondition(
                    ["add-apt-repository", "-y", NEOVIM_PPA], "Adding Neovim PPA",
                )
                self.refresh()
                added.append(NEOVIM_PPA)

        if not is_installed("terraform"):
            logger.info("Adding HashiCorp repository...")
            self._add_hashicorp_repo()
            added.append(HASHICORP_REPO)

        return added

    def _add_hashicorp_repo(self) -> None:
        codename = self.profile.codename
        if not codename:
            raise PreconditionError(
                "Adding HashiCorp repository failed: release codename unknown "
                "(no VERSION_CODENAME in /etc/os-release)"
            )

        self._precondition(
            ["apt-get", "install", "-y", "gnupg", "software-properties-common"],
            "Installing gnupg",
            timeout=INSTALL_TIMEOUT,
        )
        with scratch_directory(prefix="hashicorp-") as scratch:
            key = scratch / "hashicorp.asc"
            result = _download_file(HASHICORP_KEY_URL, key)
            if not result["ok"]:
                raise PreconditionError(f"Fetching HashiCorp signing key failed: {result['error']}")
            self._precondition(
                ["gpg", "--dearmor", "--yes", "-o", HASHICORP_KEYRING, str(key)],
                "Installing HashiCorp keyring",
            )

        line = f"deb [signed-by={HASHICORP_KEYRING}] {HASHICORP_REPO} {codename} main\n"
        self._precondition(
            ["tee", HASHICORP_LIST], "Writing HashiCorp source list", input_text=line,
        )
        self.refresh()

    def extra_steps(self, settings: Settings) -> list[ExtraStep]:
        return [
            partial(step, self.profile, settings)
            for step in (
                link_fd,
                link_bat,
                install_lua_language_server,
                install_yq,
                install_eza,
                install_npm_globals,
            )
        ]


_MANAGERS: dict[PlatformKind, type[PackageManager]] = {
    PlatformKind.MACOS: BrewPackageManager,
    PlatformKind.DEBIAN: AptPackageManager,
}


def package_manager_for(profile: PlatformProfile) -> PackageManager:
    """Instantiate the package manager for a detected profile."""
    cls = _MANAGERS.get(profile.kind)
    if cls is None:
        raise UnsupportedPlatformError(f"No package manager for platform '{profile.kind}'")
    return cls(profile)
