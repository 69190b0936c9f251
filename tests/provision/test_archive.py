"""
Provision — jira-tool archive installation.

Archives are built for real under tmp_path; nothing is mocked except
where a test needs to observe or interrupt the scratch directory.
"""

from __future__ import annotations

import io
import stat
import tarfile
from pathlib import Path
from unittest.mock import patch

import pytest

from nvim_bootstrap.core.errors import (
    ArchiveExtractError,
    ArchiveLayoutError,
    ArchiveNotFoundError,
)
from nvim_bootstrap.core.services.provision.execution import archive as archive_mod
from nvim_bootstrap.core.services.provision.execution.archive import (
    install_archive_tool,
    pick_integration_dir,
)
from nvim_bootstrap.core.services.provision.execution.download import _extract_tarball

FULL = {
    "jira-tool/bin/jira": b"#!/bin/sh\necho jira\n",
    "jira-tool/zsh/jira.zsh": b"jira() { command jira \"$@\"; }\n",
}


def _make_archive(settings, members: dict[str, bytes]) -> Path:
    path = settings.archive_path
    with tarfile.open(path, "w:gz") as tf:
        for name, data in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o644
            tf.addfile(info, io.BytesIO(data))
    return path


@pytest.fixture
def local_bin_on_path(settings, monkeypatch):
    monkeypatch.setenv("PATH", str(settings.local_bin))


@pytest.fixture
def scratch_dirs():
    """Record every scratch directory the extractor writes into."""
    seen: list[Path] = []

    def _recording(archive, dest):
        seen.append(Path(dest))
        _extract_tarball(archive, dest)

    with patch.object(archive_mod, "_extract_tarball", side_effect=_recording):
        yield seen


class TestInstallArchiveTool:
    def test_full_install(self, settings, local_bin_on_path):
        _make_archive(settings, FULL)
        result = install_archive_tool(settings)

        binary = settings.local_bin / "jira"
        assert result.status == "completed"
        assert binary.read_bytes() == FULL["jira-tool/bin/jira"]
        assert stat.S_IMODE(binary.stat().st_mode) == 0o755
        assert (settings.home / ".jira" / "templates").is_dir()

        integration = settings.home / ".zsh" / "functions" / "jira.zsh"
        assert integration.is_file()
        assert result.details["shell_integration"] == str(integration)
        assert any(
            "[[ -f ~/.zsh/functions/jira.zsh ]] && source ~/.zsh/functions/jira.zsh" in w
            for w in result.warnings
        )

    def test_prefers_existing_zsh_dir_and_quiet_when_sourced(self, settings, local_bin_on_path):
        (settings.home / ".zsh").mkdir()
        (settings.home / ".zshrc").write_text("source ~/.zsh/jira.zsh\n")
        _make_archive(settings, FULL)

        result = install_archive_tool(settings)

        assert (settings.home / ".zsh" / "jira.zsh").is_file()
        assert not (settings.home / ".zsh" / "functions").exists()
        assert result.warnings == []

    def test_overwrite_warns(self, settings, local_bin_on_path):
        settings.local_bin.mkdir(parents=True)
        (settings.local_bin / "jira").write_text("old")
        _make_archive(settings, FULL)

        result = install_archive_tool(settings)

        assert (settings.local_bin / "jira").read_bytes() == FULL["jira-tool/bin/jira"]
        assert any("overwriting" in w for w in result.warnings)

    def test_missing_binary_continues(self, settings, local_bin_on_path):
        _make_archive(settings, {"jira-tool/zsh/jira.zsh": b"# zsh\n"})
        result = install_archive_tool(settings)

        assert result.status == "completed"
        assert "jira binary not found in archive." in result.warnings
        assert not (settings.local_bin / "jira").exists()
        assert (settings.home / ".jira" / "templates").is_dir()
        assert (settings.home / ".zsh" / "functions" / "jira.zsh").is_file()

    def test_path_advisory(self, settings, monkeypatch):
        monkeypatch.setenv("PATH", "/usr/bin")
        _make_archive(settings, FULL)
        result = install_archive_tool(settings)
        assert any('export PATH="$HOME/.local/bin:$PATH"' in w for w in result.warnings)

    def test_path_configured_in_rc_file(self, settings, monkeypatch):
        monkeypatch.setenv("PATH", "/usr/bin")
        (settings.home / ".bashrc").write_text('export PATH="$HOME/.local/bin:$PATH"\n')
        _make_archive(settings, FULL)
        result = install_archive_tool(settings)
        assert not any("not in PATH" in w for w in result.warnings)

    def test_missing_archive_skips(self, settings):
        with pytest.raises(ArchiveNotFoundError, match="jira-tool.tar.gz not found"):
            install_archive_tool(settings)
        assert not (settings.home / ".jira").exists()


class TestScratchCleanup:
    def test_removed_on_success(self, settings, local_bin_on_path, scratch_dirs):
        _make_archive(settings, FULL)
        install_archive_tool(settings)
        assert len(scratch_dirs) == 1
        assert not scratch_dirs[0].exists()

    def test_removed_on_layout_error(self, settings, scratch_dirs):
        _make_archive(settings, {"other/bin/jira": b"x"})
        with pytest.raises(ArchiveLayoutError):
            install_archive_tool(settings)
        assert not scratch_dirs[0].exists()

    def test_removed_on_corrupt_archive(self, settings, scratch_dirs):
        settings.archive_path.write_bytes(b"this is not a tarball")
        with pytest.raises(ArchiveExtractError):
            install_archive_tool(settings)
        assert not scratch_dirs[0].exists()

    def test_removed_on_interrupt(self, settings):
        _make_archive(settings, FULL)
        seen: list[Path] = []

        def _interrupt(archive, dest):
            seen.append(Path(dest))
            _extract_tarball(archive, dest)
            raise KeyboardInterrupt

        with patch.object(archive_mod, "_extract_tarball", side_effect=_interrupt):
            with pytest.raises(KeyboardInterrupt):
                install_archive_tool(settings)

        assert not seen[0].exists()


class TestPickIntegrationDir:
    def test_first_existing_wins(self, home):
        (home / ".zsh" / "functions").mkdir(parents=True)
        directory, profile, existed = pick_integration_dir(home)
        assert directory == home / ".zsh" / "functions"
        assert profile == home / ".zsh" / "functions.zsh"
        assert existed is True

    def test_none_exist(self, home):
        directory, _, existed = pick_integration_dir(home)
        assert directory == home / ".zsh" / "functions"
        assert existed is False
