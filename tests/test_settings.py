"""
Tests for settings loading.
"""

from pathlib import Path

import pytest

from ifcfg_manager.errors import IfcfgError
from ifcfg_manager.settings import DEFAULT_LOCK_DIR, Settings, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in (
        "IFCFG_CONFIG_FILE",
        "IFCFG_CONFIG_DIR",
        "IFCFG_LOCK_DIR",
        "IFCFG_LOCK_TIMEOUT",
        "IFCFG_COMMAND_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)


class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert settings.config_dir == Path("/etc/sysconfig/network-scripts")
        assert settings.lock_dir == DEFAULT_LOCK_DIR
        assert settings.lock_timeout == 30
        assert settings.command_timeout == 60
        assert settings.ifup_command == "ifup"
        assert settings.ifdown_command == "ifdown"

    def test_to_dict(self):
        data = Settings().to_dict()

        assert data["config_dir"] == "/etc/sysconfig/network-scripts"
        assert data["ifup_command"] == "ifup"


class TestLoadSettings:
    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_settings(tmp_path / "missing.yaml") == Settings()

    def test_yaml_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "config_dir: /tmp/ifcfg\n"
            "lock_dir: /tmp/locks\n"
            "lock_timeout: 5\n"
            "command_timeout: 12.5\n"
            "ifup_command: /usr/sbin/ifup\n"
        )

        settings = load_settings(path)

        assert settings.config_dir == Path("/tmp/ifcfg")
        assert settings.lock_dir == Path("/tmp/locks")
        assert settings.lock_timeout == 5.0
        assert settings.command_timeout == 12.5
        assert settings.ifup_command == "/usr/sbin/ifup"
        assert settings.ifdown_command == "ifdown"

    def test_null_lock_dir_disables_file_lock(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("lock_dir: null\n")

        assert load_settings(path).lock_dir is None

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_settings(path) == Settings()

    def test_unknown_key_ignored(self, tmp_path, caplog):
        path = tmp_path / "config.yaml"
        path.write_text("colour: blue\n")

        assert load_settings(path) == Settings()
        assert "Ignoring unknown setting 'colour'" in caplog.text

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("config_dir: [unclosed\n")

        with pytest.raises(IfcfgError, match="Invalid settings file"):
            load_settings(path)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(IfcfgError, match="must contain a mapping"):
            load_settings(path)

    @pytest.mark.parametrize("value", ["soon", "0", "-3"])
    def test_bad_timeout(self, tmp_path, value):
        path = tmp_path / "config.yaml"
        path.write_text(f"lock_timeout: '{value}'\n")

        with pytest.raises(IfcfgError, match="lock_timeout"):
            load_settings(path)

    def test_empty_config_dir_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("config_dir:\n")

        with pytest.raises(IfcfgError, match="cannot be empty"):
            load_settings(path)

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("config_dir: /from/file\nlock_timeout: 5\n")
        monkeypatch.setenv("IFCFG_CONFIG_DIR", str(tmp_path / "scripts"))
        monkeypatch.setenv("IFCFG_COMMAND_TIMEOUT", "90")

        settings = load_settings(path)

        assert settings.config_dir == tmp_path / "scripts"
        assert settings.lock_timeout == 5.0
        assert settings.command_timeout == 90.0

    def test_config_file_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yaml"
        path.write_text("ifdown_command: /sbin/ifdown\n")
        monkeypatch.setenv("IFCFG_CONFIG_FILE", str(path))

        assert load_settings().ifdown_command == "/sbin/ifdown"

    def test_expands_user(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("IFCFG_LOCK_DIR", "~/locks")

        settings = load_settings(tmp_path / "missing.yaml")

        assert settings.lock_dir == tmp_path / "locks"
