"""
L3 Detection — Hard prerequisites.

Tools the installer itself shells out to. Missing any of them is fatal
because nothing downstream can work around it.
"""

from __future__ import annotations

import logging

from nvim_bootstrap.core.errors import MissingPrerequisiteError
from nvim_bootstrap.core.models.platform import PlatformKind, PlatformProfile
from nvim_bootstrap.core.services.provision.data.tools import REQUIRED_TOOLS
from nvim_bootstrap.core.services.provision.detection.tools import is_installed

logger = logging.getLogger(__name__)


def check_prerequisites(profile: PlatformProfile) -> None:
    """Raise if a hard prerequisite is missing.

    Raises:
        MissingPrerequisiteError: Homebrew missing on macOS, or any of
            the platform's required tools missing.
    """
    if profile.kind == PlatformKind.MACOS and not is_installed("brew"):
        raise MissingPrerequisiteError(
            "Homebrew is not installed. Please install it from https://brew.sh",
            missing=["brew"],
        )

    missing = [t for t in REQUIRED_TOOLS.get(profile.kind, ()) if not is_installed(t)]
    if missing:
        raise MissingPrerequisiteError(
            f"Missing required tools: {' '.join(missing)}. Please install them first.",
            missing=missing,
        )
    logger.debug("Prerequisites present for %s", profile.label)
