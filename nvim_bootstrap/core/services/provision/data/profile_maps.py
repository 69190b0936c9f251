"""
L0 Data — Shell profile/rc file mappings.

Paths are relative to the user's home directory.
"""

from __future__ import annotations

_PROFILE_MAP: dict[str, dict[str, str]] = {
    "bash": {"rc_file": ".bashrc"},
    "zsh": {"rc_file": ".zshrc"},
}

# Where the archive tool's zsh integration may go, in preference order.
# Each entry: (directory, profile file expected to source the script).
# The first existing directory wins; if none exists the first is created.
ZSH_INTEGRATION_CANDIDATES: tuple[tuple[str, str], ...] = (
    (".zsh/functions", ".zsh/functions.zsh"),
    (".zsh", ".zshrc"),
)
