import pytest

from utils.config import DEFAULT_CONFIG, ConfigManager, _merge, config


@pytest.fixture
def isolated_config(monkeypatch):
    """Let a test reload settings without leaking them into other tests."""
    monkeypatch.setattr(config, "_config", config.get_all())
    monkeypatch.setattr(config, "source", config.source)
    return config


def test_singleton():
    assert ConfigManager() is config


def test_dot_path_lookup():
    assert config.get("syslog.app_name") == "eventrender"
    assert config.get("syslog.severity_by_level.medium") == "warning"
    assert config.get("syslog.missing", "fallback") == "fallback"
    assert config.get("syslog.app_name.deeper") is None


def test_merge_overlays_nested_keys():
    merged = _merge(DEFAULT_CONFIG, {"syslog": {"app_name": "ids"}})
    assert merged["syslog"]["app_name"] == "ids"
    assert merged["syslog"]["facility"] == "local0"
    assert DEFAULT_CONFIG["syslog"]["app_name"] == "eventrender"


def test_reload_partial_file(isolated_config, tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("syslog:\n  app_name: ids\n  facility: auth\n", encoding="utf-8")

    isolated_config.reload(str(path))

    assert isolated_config.get("syslog.app_name") == "ids"
    assert isolated_config.get("syslog.facility") == "auth"
    assert isolated_config.get("logging.level") == "INFO"
    assert isolated_config.source == path


def test_reload_missing_file(isolated_config, tmp_path):
    with pytest.raises(FileNotFoundError):
        isolated_config.reload(str(tmp_path / "missing.yaml"))


@pytest.mark.parametrize("text", ["syslog: [unclosed\n", "- a\n- b\n"])
def test_reload_invalid_file(isolated_config, tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        isolated_config.reload(str(path))


def test_get_all_is_a_copy():
    settings = config.get_all()
    settings["syslog"]["app_name"] = "changed"
    assert config.get("syslog.app_name") == "eventrender"
