"""
Tests for configuration loading — mcdr-setup.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from mcdr_setup.core.config.loader import (
    CONFIG_ENV_VAR,
    CONFIG_FILE,
    ConfigError,
    WizardConfig,
    find_config_file,
    load_config,
)


class TestDefaults:
    def test_defaults_point_at_mirrors(self):
        config = WizardConfig()
        assert config.package_name == "mcdreforged"
        assert config.metadata_url.endswith("/pypi/web/json/mcdreforged")
        assert config.catalog_url == "https://registry.npmmirror.com/-/binary/python/"
        assert config.marker_files == ["permission.yml", "config.yml"]
        assert config.promote_previous_minor is True
        assert config.require_upgrade_before_init is False

    def test_installer_url(self):
        url = WizardConfig().installer_url("3.11.5")
        assert url == "https://registry.npmmirror.com/-/binary/python/3.11.5/python-3.11.5-amd64.exe"


class TestFindConfigFile:
    def test_none(self, tmp_path: Path):
        assert find_config_file(tmp_path) is None

    def test_in_directory(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("locale: en\n")
        assert find_config_file(tmp_path) == path

    def test_env_override(self, tmp_path: Path, monkeypatch):
        target = tmp_path / "elsewhere.yml"
        monkeypatch.setenv(CONFIG_ENV_VAR, str(target))
        assert find_config_file(tmp_path) == target


class TestLoadConfig:
    def test_no_file_gives_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_config() == WizardConfig()

    def test_overrides(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text(textwrap.dedent("""\
            pip_index_url: https://pypi.tuna.tsinghua.edu.cn/simple
            promote_previous_minor: false
            marker_files:
              - config.yml
            locale: zh-CN
        """))
        config = load_config(path)
        assert config.pip_index_url == "https://pypi.tuna.tsinghua.edu.cn/simple"
        assert config.promote_previous_minor is False
        assert config.marker_files == ["config.yml"]
        assert config.locale == "zh-CN"
        assert config.package_name == "mcdreforged"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("")
        assert load_config(path) == WizardConfig()

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml")

    def test_env_points_at_missing_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.yml"))
        with pytest.raises(ConfigError):
            load_config()

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("locale: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_wrong_type(self, tmp_path: Path):
        path = tmp_path / CONFIG_FILE
        path.write_text("marker_files: 3\n")
        with pytest.raises(ConfigError, match="Invalid wizard configuration"):
            load_config(path)
