"""
L2 Resolver — Package → command resolution.

Pure functions of (platform, package). No side effects, no PATH
lookups; detection happens one layer up.
"""

from __future__ import annotations

from nvim_bootstrap.core.errors import UnsupportedPlatformError
from nvim_bootstrap.core.models.platform import PlatformKind
from nvim_bootstrap.core.models.tool import ToolSpec
from nvim_bootstrap.core.services.provision.data.tools import (
    COMMAND_NAMES,
    PLATFORM_COMMAND_OVERRIDES,
    PLATFORM_PACKAGES,
    TOOL_NAMES,
)


def command_name(kind: PlatformKind, package: str) -> str:
    """Resolve the executable a package installs.

    Platform overrides win over the shared table; unknown packages
    are assumed to install a command of the same name.

    >>> command_name(PlatformKind.DEBIAN, "fd-find")
    'fdfind'
    >>> command_name(PlatformKind.MACOS, "ripgrep")
    'rg'
    """
    override = PLATFORM_COMMAND_OVERRIDES.get(kind, {})
    if package in override:
        return override[package]
    return COMMAND_NAMES.get(package, package)


def tool_spec(kind: PlatformKind, package: str) -> ToolSpec:
    """Build the ToolSpec for one package on one platform."""
    return ToolSpec(
        name=TOOL_NAMES.get(package, package),
        package=package,
        command=command_name(kind, package),
    )


def tool_specs_for(kind: PlatformKind) -> tuple[ToolSpec, ...]:
    """Ordered ToolSpecs for a platform.

    Raises:
        UnsupportedPlatformError: No package list exists for ``kind``.
    """
    packages = PLATFORM_PACKAGES.get(kind)
    if packages is None:
        raise UnsupportedPlatformError(f"No package mapping for platform '{kind}'")
    return tuple(tool_spec(kind, pkg) for pkg in packages)
