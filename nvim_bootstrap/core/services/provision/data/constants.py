"""
L0 Data — Module-level constants.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# ── Plugin manager ──────────────────────────────────────────────

LAZY_REPO = "https://github.com/folke/lazy.nvim.git"
LAZY_REF = "stable"

# ── Bundled archive layout ──────────────────────────────────────

ARCHIVE_NAME = "jira-tool.tar.gz"
ARCHIVE_ROOT = "jira-tool"
ARCHIVE_BINARY = "bin/jira"
ARCHIVE_SHELL_INTEGRATION = "zsh/jira.zsh"
ARCHIVE_CONFIG_SUBDIR = "templates"

# ── Config tree ─────────────────────────────────────────────────

CONFIGS_DIR = "configs"
CONFIG_ENTRY_POINT = "init.lua"
BACKUP_INFIX = ".backup."
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

# ── Debian package sources ──────────────────────────────────────

NEOVIM_PPA = "ppa:neovim-ppa/unstable"
HASHICORP_KEY_URL = "https://apt.releases.hashicorp.com/gpg"
HASHICORP_KEYRING = "/usr/share/keyrings/hashicorp-archive-keyring.gpg"
HASHICORP_LIST = "/etc/apt/sources.list.d/hashicorp.list"
HASHICORP_REPO = "https://apt.releases.hashicorp.com"

# ── Extra (non-repo) tools ──────────────────────────────────────

LUA_LS_VERSION = "3.7.4"
LUA_LS_URL = (
    "https://github.com/LuaLS/lua-language-server/releases/download/"
    "{version}/lua-language-server-{version}-{arch}.tar.gz"
)
# uname -m → lua-language-server release suffix
LUA_LS_ARCH_MAP: dict[str, str] = {
    "x86_64": "linux-x64",
    "amd64": "linux-x64",
    "aarch64": "linux-arm64",
    "arm64": "linux-arm64",
}

YQ_URL = "https://github.com/mikefarah/yq/releases/latest/download/yq_linux_{arch}"
YQ_INSTALL_PATH = "/usr/local/bin/yq"

NPM_PACKAGES: tuple[str, ...] = (
    "@mermaid-js/mermaid-cli",
    "yaml-language-server",
    "vscode-langservers-extracted",
)

# Architecture name normalization (Go-style, as used by yq assets).
_IARCH_MAP: dict[str, str] = {
    "x86_64": "amd64",
    "AMD64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "i686": "386",
    "i386": "386",
}

# ── Timeouts (seconds) ──────────────────────────────────────────

INSTALL_TIMEOUT = 1800
REFRESH_TIMEOUT = 600
CLONE_TIMEOUT = 600
DOWNLOAD_TIMEOUT = 120
SYNC_TIMEOUT = 900
QUERY_TIMEOUT = 30
