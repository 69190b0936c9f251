"""
Settings model — where things come from and where they go.

Every path the run touches is derived from two roots:

    bundle_root  the checkout holding ``configs/`` and the tool archive
    home         the user's home directory (tests point it at tmp_path)
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from nvim_bootstrap.core.services.provision.data.constants import (
    ARCHIVE_NAME,
    CONFIG_ENTRY_POINT,
    CONFIGS_DIR,
    LAZY_REF,
    LAZY_REPO,
    LUA_LS_VERSION,
    NPM_PACKAGES,
)


def _default_bundle_root() -> Path:
    """The checkout directory that contains this package."""
    return Path(__file__).resolve().parents[3]


class Settings(BaseModel):
    """Resolved configuration for one run."""

    bundle_root: Path = Field(default_factory=_default_bundle_root)
    home: Path = Field(default_factory=Path.home)

    configs_dir: str = CONFIGS_DIR
    entry_point: str = CONFIG_ENTRY_POINT
    archive_name: str = ARCHIVE_NAME
    target_dir: Path | None = None   # default: <home>/.config/nvim

    lazy_repo: str = LAZY_REPO
    lazy_ref: str = LAZY_REF
    lua_language_server_version: str = LUA_LS_VERSION
    npm_packages: list[str] = Field(default_factory=lambda: list(NPM_PACKAGES))

    # ── Derived paths ───────────────────────────────────────────

    @property
    def source_dir(self) -> Path:
        return self.bundle_root / self.configs_dir

    @property
    def archive_path(self) -> Path:
        return self.bundle_root / self.archive_name

    @property
    def nvim_target(self) -> Path:
        return self.target_dir or self.home / ".config" / "nvim"

    @property
    def local_bin(self) -> Path:
        return self.home / ".local" / "bin"

    @property
    def lazy_path(self) -> Path:
        return self.home / ".local" / "share" / "nvim" / "lazy" / "lazy.nvim"

    @property
    def lua_ls_dir(self) -> Path:
        return self.home / ".local" / "share" / "lua-language-server"

    @property
    def jira_config_dir(self) -> Path:
        return self.home / ".jira"
