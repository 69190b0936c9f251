"""
Platform model — the host profile detected once at process start.

The profile is frozen: every stage receives it explicitly and none
can mutate it.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from nvim_bootstrap.core.models.tool import ToolSpec


class PlatformKind(StrEnum):
    """Host OS classes."""

    MACOS = "macos"
    DEBIAN = "debian"
    UNSUPPORTED = "unsupported"


_LABELS: dict[PlatformKind, str] = {
    PlatformKind.MACOS: "macOS",
    PlatformKind.DEBIAN: "Debian/Ubuntu",
    PlatformKind.UNSUPPORTED: "Unsupported",
}


class PlatformProfile(BaseModel):
    """Immutable description of the host and what to install on it."""

    model_config = ConfigDict(frozen=True)

    kind: PlatformKind
    package_manager: Literal["brew", "apt"]
    needs_sudo: bool = False
    distro_id: str = ""
    codename: str = ""
    machine: str = ""
    tools: tuple[ToolSpec, ...] = ()

    @property
    def label(self) -> str:
        """Human-readable platform name."""
        if self.kind == PlatformKind.DEBIAN and self.distro_id:
            return self.distro_id.capitalize()
        return _LABELS[self.kind]
