"""
Provision — Platform detection and tool resolution.

Detection is a pure function of the simulated signals, so every test
here runs without touching the host.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from nvim_bootstrap.core.errors import UnsupportedPlatformError
from nvim_bootstrap.core.models.platform import PlatformKind
from nvim_bootstrap.core.services.provision.detection.platform import (
    detect_platform,
    parse_os_release,
    read_platform_signals,
)
from nvim_bootstrap.core.services.provision.resolver.tool_resolution import (
    command_name,
    tool_spec,
    tool_specs_for,
)
from tests.provision.simulated_profiles import (
    ARCH,
    DEBIAN_ROOT,
    FEDORA,
    MACOS,
    POP_OS,
    UBUNTU,
    WINDOWS,
)


class TestParseOsRelease:
    def test_strips_quotes_and_skips_comments(self):
        fields = parse_os_release('# comment\nNAME="Ubuntu"\nID=ubuntu\n\nbroken line\n')
        assert fields == {"NAME": "Ubuntu", "ID": "ubuntu"}

    def test_empty(self):
        assert parse_os_release("") == {}


class TestDetectPlatform:
    def test_macos(self):
        profile = detect_platform(MACOS)
        assert profile.kind == PlatformKind.MACOS
        assert profile.package_manager == "brew"
        assert profile.needs_sudo is False
        assert profile.label == "macOS"

    def test_ubuntu_non_root_needs_sudo(self):
        profile = detect_platform(UBUNTU)
        assert profile.kind == PlatformKind.DEBIAN
        assert profile.package_manager == "apt"
        assert profile.needs_sudo is True
        assert profile.distro_id == "ubuntu"
        assert profile.codename == "jammy"

    def test_debian_as_root_no_sudo(self):
        profile = detect_platform(DEBIAN_ROOT)
        assert profile.kind == PlatformKind.DEBIAN
        assert profile.needs_sudo is False
        assert profile.codename == "bookworm"

    def test_derivative_via_id_like(self):
        profile = detect_platform(POP_OS)
        assert profile.kind == PlatformKind.DEBIAN
        assert profile.label == "Pop"
        # falls back to UBUNTU_CODENAME
        assert profile.codename == "jammy"

    @pytest.mark.parametrize("signals", [FEDORA, ARCH, WINDOWS], ids=["fedora", "arch", "windows"])
    def test_unsupported(self, signals):
        with pytest.raises(UnsupportedPlatformError, match="Unsupported OS"):
            detect_platform(signals)

    def test_deterministic(self):
        assert detect_platform(UBUNTU) == detect_platform(UBUNTU)

    def test_profile_is_frozen(self):
        profile = detect_platform(MACOS)
        with pytest.raises(Exception):
            profile.needs_sudo = True

    def test_tools_follow_platform_package_order(self):
        profile = detect_platform(UBUNTU)
        packages = [t.package for t in profile.tools]
        assert packages[0] == "neovim"
        assert "fd-find" in packages
        assert "python3-pip" in packages
        assert next(t for t in profile.tools if t.name == "fd").command == "fdfind"

    def test_read_signals_missing_os_release(self, tmp_path: Path):
        signals = read_platform_signals(tmp_path / "nope")
        assert signals.os_release == ""


class TestToolResolution:
    def test_debian_fd_override(self):
        assert command_name(PlatformKind.DEBIAN, "fd-find") == "fdfind"

    def test_debian_bat_override(self):
        assert command_name(PlatformKind.DEBIAN, "bat") == "batcat"
        assert command_name(PlatformKind.MACOS, "bat") == "bat"

    def test_shared_mapping(self):
        assert command_name(PlatformKind.MACOS, "ripgrep") == "rg"
        assert command_name(PlatformKind.MACOS, "neovim") == "nvim"
        assert command_name(PlatformKind.DEBIAN, "python3-pip") == "pip3"

    def test_unknown_package_is_its_own_command(self):
        assert command_name(PlatformKind.MACOS, "jq") == "jq"

    def test_tool_spec_names(self):
        spec = tool_spec(PlatformKind.DEBIAN, "python3")
        assert (spec.name, spec.package, spec.command) == ("python", "python3", "python3")

    def test_unsupported_kind(self):
        with pytest.raises(UnsupportedPlatformError):
            tool_specs_for(PlatformKind.UNSUPPORTED)

    def test_macos_list_contains_extras_from_brew(self):
        packages = [s.package for s in tool_specs_for(PlatformKind.MACOS)]
        assert {"lua-language-server", "yq", "eza"} <= set(packages)
