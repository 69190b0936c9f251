"""
L0 Data — Tool catalog per platform.

Pure data. Package lists are ordered: the installer walks them in
this order and reports outcomes in the same order.
"""

from __future__ import annotations

from nvim_bootstrap.core.models.platform import PlatformKind

# Package name → executable name, where they differ.
COMMAND_NAMES: dict[str, str] = {
    "neovim": "nvim",
    "python": "python3",
    "python3": "python3",
    "python3-pip": "pip3",
    "nodejs": "node",
    "node": "node",
    "fd": "fd",
    "fd-find": "fd",
    "ripgrep": "rg",
    "lua-language-server": "lua-language-server",
    "bat": "bat",
}

# Per-platform exceptions to COMMAND_NAMES.
PLATFORM_COMMAND_OVERRIDES: dict[PlatformKind, dict[str, str]] = {
    # Debian renames both executables to avoid name clashes
    PlatformKind.DEBIAN: {"fd-find": "fdfind", "bat": "batcat"},
}

# Package name → abstract tool name, where they differ.
TOOL_NAMES: dict[str, str] = {
    "python3": "python",
    "python3-pip": "pip",
    "nodejs": "node",
    "fd-find": "fd",
}

PLATFORM_PACKAGES: dict[PlatformKind, tuple[str, ...]] = {
    PlatformKind.MACOS: (
        "neovim", "git", "python", "node", "ripgrep", "fzf", "fd", "jq",
        "terraform", "lua-language-server", "gh", "bat", "yq", "eza",
    ),
    PlatformKind.DEBIAN: (
        "neovim", "git", "python3", "python3-pip", "nodejs", "npm",
        "ripgrep", "fzf", "fd-find", "jq", "terraform", "gh", "bat",
    ),
}

# Hard prerequisites checked before any install (missing → fatal).
REQUIRED_TOOLS: dict[PlatformKind, tuple[str, ...]] = {
    PlatformKind.MACOS: ("git", "tar", "curl"),
    PlatformKind.DEBIAN: ("git", "tar", "curl", "wget"),
}

# Package manager per platform.
PACKAGE_MANAGERS: dict[PlatformKind, str] = {
    PlatformKind.MACOS: "brew",
    PlatformKind.DEBIAN: "apt",
}
