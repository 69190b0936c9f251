"""
Provision — lazy.nvim bootstrap.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from nvim_bootstrap.core.errors import MissingPrerequisiteError, PluginManagerError
from nvim_bootstrap.core.services.provision.execution.plugin_manager import (
    bootstrap_plugin_manager,
)

_PLM = "nvim_bootstrap.core.services.provision.execution.plugin_manager"


class TestBootstrapPluginManager:
    def test_clones_pinned_ref(self, settings, on_path):
        on_path.add("git")
        with patch(f"{_PLM}._run_subprocess", return_value={"ok": True}) as mock_run:
            outcome = bootstrap_plugin_manager(settings)

        assert outcome.status == "installed"
        cmd = mock_run.call_args.args[0]
        assert cmd == [
            "git", "clone", "--filter=blob:none",
            "https://github.com/folke/lazy.nvim.git", "--branch=stable",
            str(settings.home / ".local" / "share" / "nvim" / "lazy" / "lazy.nvim"),
        ]
        assert settings.lazy_path.parent.is_dir()

    def test_already_present_is_noop(self, settings, on_path):
        settings.lazy_path.mkdir(parents=True)
        with patch(f"{_PLM}._run_subprocess") as mock_run:
            outcome = bootstrap_plugin_manager(settings)
        assert outcome.status == "already_present"
        mock_run.assert_not_called()

    def test_git_missing(self, settings, on_path):
        with pytest.raises(MissingPrerequisiteError, match="git is required"):
            bootstrap_plugin_manager(settings)

    def test_clone_failure_is_fatal(self, settings, on_path):
        on_path.add("git")
        failed = {
            "ok": False,
            "error": "Command failed (exit 128)",
            "stderr": "fatal: unable to access 'https://github.com/folke/lazy.nvim.git/'\n",
        }
        with patch(f"{_PLM}._run_subprocess", return_value=failed):
            with pytest.raises(PluginManagerError, match="unable to access"):
                bootstrap_plugin_manager(settings)

    def test_custom_ref(self, settings, on_path):
        on_path.add("git")
        settings.lazy_ref = "v11.14.1"
        with patch(f"{_PLM}._run_subprocess", return_value={"ok": True}) as mock_run:
            bootstrap_plugin_manager(settings)
        assert "--branch=v11.14.1" in mock_run.call_args.args[0]
