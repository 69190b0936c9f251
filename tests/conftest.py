"""
Shared test fixtures and configuration.
"""

import logging
import shutil
from pathlib import Path

import pytest

from nvim_bootstrap.core.models.settings import Settings


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Return an empty fake home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def bundle(tmp_path: Path) -> Path:
    """Return a bundle root holding a small editor config tree."""
    root = tmp_path / "bundle"
    configs = root / "configs"
    (configs / "lua" / "plugins").mkdir(parents=True)
    (configs / "init.lua").write_text('require("config.lazy")\n')
    (configs / "lua" / "plugins" / "editor.lua").write_text("return {}\n")
    (configs / "lazy-lock.json").write_text("{}\n")
    return root


@pytest.fixture
def settings(bundle: Path, home: Path) -> Settings:
    """Settings rooted entirely under tmp_path."""
    return Settings(bundle_root=bundle, home=home, npm_packages=[])


@pytest.fixture
def on_path(monkeypatch: pytest.MonkeyPatch) -> set[str]:
    """Control which commands ``shutil.which`` finds.

    Add names to the returned set to make them "installed"::

        on_path.update({"git", "nvim"})
    """
    available: set[str] = set()

    def _which(cmd, mode=None, path=None):
        return f"/usr/bin/{cmd}" if cmd in available else None

    monkeypatch.setattr(shutil, "which", _which)
    return available


@pytest.fixture
def restore_logging():
    """Drop the handlers setup_logging() installs and restore the root level."""
    root = logging.getLogger()
    before, level = set(root.handlers), root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in before:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
