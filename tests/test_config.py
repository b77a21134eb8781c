"""Tests for cloudlog.config."""

from __future__ import annotations

import pytest

from cloudlog.config import ConfigError, FormatterConfig, _parse_bool, load_config, load_yaml_config


class TestParseBool:
    def test_true_values(self) -> None:
        for val in ("true", "True", "1", "yes", " YES ", "on", True):
            assert _parse_bool(val) is True

    def test_false_values(self) -> None:
        for val in ("false", "0", "no", "", "random", False):
            assert _parse_bool(val) is False


class TestFormatterConfigDefaults:
    def test_defaults(self) -> None:
        cfg = FormatterConfig()
        assert cfg.project_id is None
        assert cfg.include_source_location is True
        assert cfg.local_time is False

    def test_frozen(self) -> None:
        cfg = FormatterConfig()
        with pytest.raises(AttributeError):
            cfg.project_id = "x"


class TestLoadConfig:
    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch) -> None:
        for name in ("GOOGLE_CLOUD_PROJECT", "CLOUDLOG_SOURCE_LOCATION", "CLOUDLOG_LOCAL_TIME"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self) -> None:
        assert load_config() == FormatterConfig()

    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "demo")
        monkeypatch.setenv("CLOUDLOG_SOURCE_LOCATION", "false")
        monkeypatch.setenv("CLOUDLOG_LOCAL_TIME", "yes")
        assert load_config() == FormatterConfig(
            project_id="demo", include_source_location=False, local_time=True
        )

    def test_yaml_overrides_env(self, monkeypatch) -> None:
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "from-env")
        cfg = load_config({"project_id": "from-yaml", "include_source_location": False})
        assert cfg.project_id == "from-yaml"
        assert cfg.include_source_location is False

    def test_empty_project_is_none(self, monkeypatch) -> None:
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "")
        assert load_config().project_id is None


class TestLoadYamlConfig:
    def test_no_path(self) -> None:
        assert load_yaml_config(None) == {}

    def test_missing_file_warns(self, tmp_path, caplog) -> None:
        path = tmp_path / "nope.yml"
        assert load_yaml_config(str(path)) == {}
        assert "not found" in caplog.text

    def test_valid_file(self, tmp_path) -> None:
        path = tmp_path / "cloudlog.yml"
        path.write_text("project_id: demo\nlocal_time: true\n", encoding="utf-8")
        data = load_yaml_config(str(path))
        assert data == {"project_id": "demo", "local_time": True}
        assert load_config(data).local_time is True

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")
        assert load_yaml_config(str(path)) == {}

    def test_invalid_yaml_raises(self, tmp_path) -> None:
        path = tmp_path / "bad.yml"
        path.write_text("project_id: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_yaml_config(str(path))

    def test_non_mapping_raises(self, tmp_path) -> None:
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_yaml_config(str(path))

    def test_unknown_keys_warn(self, tmp_path, caplog) -> None:
        path = tmp_path / "extra.yml"
        path.write_text("project_id: demo\ncolour: blue\n", encoding="utf-8")
        load_yaml_config(str(path))
        assert "colour" in caplog.text
