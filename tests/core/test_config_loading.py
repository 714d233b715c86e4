"""Tests for configuration models, loaders and environment credentials."""

import os
import sys
from pathlib import Path

import pytest

from npmrc_shim.core.config import (
    PROJECT_CONFIG_NAME,
    ConfigError,
    _check_env_file_permissions,
    _deep_merge,
    _load_yaml_file,
    _mask_credential,
    credentials_from_env,
    get_config,
    load_config,
    load_config_with_project,
    load_env_file,
)
from npmrc_shim.core.config.models import NpmrcConfig

GLOBAL_YAML = """\
artifactory:
  url: https://acme.jfrog.io/artifactory/
  repo: npm-remote
npm:
  args: ["--userconfig", "/etc/npmrc"]
"""

PROJECT_YAML = """\
artifactory:
  repo: npm-virtual
npmrc:
  excluded_keys: [cache]
"""


@pytest.fixture
def global_config(tmp_path: Path) -> Path:
    path = tmp_path / "global" / "config.yaml"
    path.parent.mkdir()
    path.write_text(GLOBAL_YAML)
    return path


class TestDeepMerge:
    """Tests for _deep_merge."""

    def test_nested_merge(self) -> None:
        base = {"a": {"x": 1, "y": 2}, "b": [1]}
        result = _deep_merge(base, {"a": {"y": 3}, "b": [2]})
        assert result == {"a": {"x": 1, "y": 3}, "b": [2]}
        assert base == {"a": {"x": 1, "y": 2}, "b": [1]}


class TestLoadYamlFile:
    """Tests for _load_yaml_file."""

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert _load_yaml_file(path) == {}

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("artifactory: [unclosed")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            _load_yaml_file(path)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            _load_yaml_file(path)

    def test_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            _load_yaml_file(tmp_path)

    def test_too_large(self, tmp_path: Path) -> None:
        path = tmp_path / "big.yaml"
        path.write_text("a: " + "x" * 1_048_577)
        with pytest.raises(ConfigError, match="1MB"):
            _load_yaml_file(path)


class TestLoadConfig:
    """Tests for load_config and the singleton."""

    def test_get_before_load(self) -> None:
        with pytest.raises(ConfigError, match="not loaded"):
            get_config()

    def test_defaults(self) -> None:
        config = load_config({"artifactory": {"url": "https://a/"}})

        assert get_config() is config
        assert config.npm.executable is None
        assert config.npm.min_version == "5.4.0"
        assert config.npmrc.file_name == ".npmrc"
        assert config.npmrc.backup_name == "npmrc-shim.npmrc.backup"
        assert "_authToken" in config.npmrc.excluded_keys

    def test_missing_artifactory(self) -> None:
        with pytest.raises(ConfigError, match="validation failed"):
            load_config({})

    def test_backup_name_must_differ(self) -> None:
        with pytest.raises(ValueError):
            NpmrcConfig(file_name=".npmrc", backup_name=".npmrc")

    def test_secrets_hidden_from_repr(self) -> None:
        config = load_config({"artifactory": {"url": "https://a/", "access_token": "s3cret"}})
        assert "s3cret" not in repr(config)


class TestLoadConfigWithProject:
    """Tests for layered loading."""

    def test_project_overrides_global(self, project_dir: Path, global_config: Path) -> None:
        (project_dir / PROJECT_CONFIG_NAME).write_text(PROJECT_YAML)

        config = load_config_with_project(project_dir, global_config_path=global_config)

        assert config.artifactory.url == "https://acme.jfrog.io/artifactory/"
        assert config.artifactory.repo == "npm-virtual"
        assert config.npm.args == ["--userconfig", "/etc/npmrc"]
        assert config.npmrc.excluded_keys == ["cache"]

    def test_env_credentials(
        self, project_dir: Path, global_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NPMRC_SHIM_ACCESS_TOKEN", "env-token")

        config = load_config_with_project(project_dir, global_config_path=global_config)

        assert config.artifactory.access_token == "env-token"

    def test_overrides_win(self, project_dir: Path, global_config: Path) -> None:
        config = load_config_with_project(
            project_dir,
            global_config_path=global_config,
            overrides={"artifactory": {"repo": "cli-repo"}},
        )
        assert config.artifactory.repo == "cli-repo"

    def test_no_url(self, project_dir: Path, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="No Artifactory URL"):
            load_config_with_project(project_dir, global_config_path=tmp_path / "missing.yaml")


class TestEnvCredentials:
    """Tests for .env loading and credential helpers."""

    def test_mask_credential(self) -> None:
        assert _mask_credential(None) == "***"
        assert _mask_credential("short") == "***"
        assert _mask_credential("abcdefghijk") == "abcdefg***"

    def test_load_env_file(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = project_dir / ".env"
        env_file.write_text("NPMRC_SHIM_USER=dev\nNPMRC_SHIM_PASSWORD=pw\n")
        os.chmod(env_file, 0o600)

        assert load_env_file(project_dir) is True
        assert credentials_from_env() == {"user": "dev", "password": "pw"}

    def test_load_env_file_missing(self, project_dir: Path) -> None:
        assert load_env_file(project_dir) is False

    def test_existing_env_not_overridden(
        self, project_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NPMRC_SHIM_USER", "from-shell")
        (project_dir / ".env").write_text("NPMRC_SHIM_USER=from-file\n")

        load_env_file(project_dir, check_permissions=False)

        assert credentials_from_env()["user"] == "from-shell"

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_insecure_permissions_warn(
        self, project_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        env_file = project_dir / ".env"
        env_file.write_text("X=1\n")
        os.chmod(env_file, 0o644)

        _check_env_file_permissions(env_file)

        assert "insecure permissions" in caplog.text
