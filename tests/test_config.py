"""
Tests for settings loading — nvim-bootstrap.yml parsing and env overrides.
"""

import textwrap
from pathlib import Path

import pytest

from nvim_bootstrap.core.config.loader import find_settings_file, load_settings
from nvim_bootstrap.core.errors import ConfigError
from nvim_bootstrap.core.models.settings import Settings


@pytest.fixture
def settings_yml(tmp_path: Path) -> Path:
    """Create a settings file in a temp directory."""
    content = textwrap.dedent("""\
        bundle_root: bundle
        lazy_ref: v11.14.1
        npm_packages:
          - yaml-language-server
    """)
    path = tmp_path / "nvim-bootstrap.yml"
    path.write_text(content)
    return path


class TestFindSettingsFile:
    def test_finds_in_current_dir(self, settings_yml: Path):
        assert find_settings_file(settings_yml.parent) == settings_yml

    def test_finds_walking_up(self, settings_yml: Path):
        nested = settings_yml.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_settings_file(nested) == settings_yml

    def test_none_when_absent(self, tmp_path: Path):
        assert find_settings_file(tmp_path) is None


class TestLoadSettings:
    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        settings = load_settings(env={})
        assert settings.lazy_ref == "stable"
        assert settings.archive_name == "jira-tool.tar.gz"
        assert settings.source_dir == settings.bundle_root / "configs"

    def test_file_values_and_relative_paths(self, settings_yml: Path):
        settings = load_settings(settings_yml, env={})
        assert settings.lazy_ref == "v11.14.1"
        assert settings.npm_packages == ["yaml-language-server"]
        assert settings.bundle_root == (settings_yml.parent / "bundle").resolve()

    def test_env_overrides_file(self, settings_yml: Path, tmp_path: Path):
        env = {"NVB_BUNDLE_ROOT": str(tmp_path / "other"), "NVB_HOME": str(tmp_path / "h")}
        settings = load_settings(settings_yml, env=env)
        assert settings.bundle_root == tmp_path / "other"
        assert settings.home == tmp_path / "h"
        assert settings.local_bin == tmp_path / "h" / ".local" / "bin"
        assert settings.nvim_target == tmp_path / "h" / ".config" / "nvim"

    def test_explicit_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Config file not found"):
            load_settings(tmp_path / "missing.yml", env={})

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "nvim-bootstrap.yml"
        path.write_text("lazy_ref: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(path, env={})

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "nvim-bootstrap.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_settings(path, env={})

    def test_invalid_field(self, tmp_path: Path):
        path = tmp_path / "nvim-bootstrap.yml"
        path.write_text("npm_packages: 42\n")
        with pytest.raises(ConfigError, match="Invalid settings"):
            load_settings(path, env={})

    def test_empty_file_is_defaults(self, tmp_path: Path):
        path = tmp_path / "nvim-bootstrap.yml"
        path.write_text("")
        assert load_settings(path, env={}).lazy_repo == Settings().lazy_repo


class TestSettingsPaths:
    def test_derived_paths(self, settings: Settings):
        home = settings.home
        assert settings.lazy_path == home / ".local" / "share" / "nvim" / "lazy" / "lazy.nvim"
        assert settings.jira_config_dir == home / ".jira"
        assert settings.archive_path == settings.bundle_root / "jira-tool.tar.gz"
