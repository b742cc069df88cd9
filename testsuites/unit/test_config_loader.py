import pytest
import yaml

from harness_tools.common.config_loader import ConfigLoader, ConfigurationError, env_key_for
from testsuites.ui_testing.framework.browser_kind import BrowserKind
from testsuites.ui_testing.framework.settings import DEFAULT_BASE_URL, HarnessSettings


@pytest.fixture(autouse=True)
def _fresh_loader(monkeypatch):
    for name in ("BROWSER", "HEADLESS", "UI_BASE_URL", "PAGE_INIT_MAX_ATTEMPTS", "PAGE_INIT_RETRY_DELAY"):
        monkeypatch.delenv(name, raising=False)
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


def write_config(tmp_path, data):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump(data), encoding="utf-8")
    return config_path


def test_env_override_and_defaults(monkeypatch, tmp_path):
    config_path = write_config(tmp_path, {"ui": {"base_url": "http://example.com"}})

    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.base_url") == "http://example.com"
    assert loader.get("page_init.max_attempts", 3) == 3

    ConfigLoader.reset()
    monkeypatch.setenv("UI_BASE_URL", "http://env.example.com")
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("ui.base_url") == "http://env.example.com"


def test_env_values_are_coerced_to_default_type(monkeypatch, tmp_path):
    loader = ConfigLoader(config_path=write_config(tmp_path, {}))
    monkeypatch.setenv("PAGE_INIT_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("PAGE_INIT_RETRY_DELAY", "0.25")
    monkeypatch.setenv("HEADLESS", "yes")

    assert loader.get("page_init.max_attempts", 3) == 5
    assert loader.get("page_init.retry_delay", 0.5) == 0.25
    assert loader.get("headless", False) is True


def test_get_bool_accepts_strings(tmp_path):
    loader = ConfigLoader(config_path=write_config(tmp_path, {"headless": "on"}))

    assert loader.get_bool("headless") is True
    assert loader.get_bool("missing") is False


def test_reload_updates_values(tmp_path):
    config_path = write_config(tmp_path, {"page_init": {"retry_delay": 0.5}})
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("page_init.retry_delay") == 0.5

    config_path.write_text(yaml.dump({"page_init": {"retry_delay": 1.5}}), encoding="utf-8")
    loader.reload()
    assert loader.get("page_init.retry_delay") == 1.5


def test_missing_file_uses_defaults(tmp_path):
    loader = ConfigLoader(config_path=tmp_path / "absent.yaml")

    assert loader.get("browser", "chromium") == "chromium"


def test_invalid_yaml_raises(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("browser: [chromium\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


def test_non_mapping_root_raises(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- chromium\n- firefox\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


@pytest.mark.parametrize(
    "key, env_key",
    [
        ("headless", "HEADLESS"),
        ("ui.base_url", "UI_BASE_URL"),
        ("page_init.max_attempts", "PAGE_INIT_MAX_ATTEMPTS"),
    ],
)
def test_env_key_for(key, env_key):
    assert env_key_for(key) == env_key


def test_settings_from_config(tmp_path):
    loader = ConfigLoader(config_path=write_config(tmp_path, {
        "browser": "firefox",
        "headless": True,
        "page_init": {"max_attempts": 4, "attempt_timeout": 10, "retry_delay": 0.2},
    }))

    settings = HarnessSettings.from_config(loader)

    assert settings.browser is BrowserKind.FIREFOX
    assert settings.headless is True
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.retry_policy.max_attempts == 4
    assert settings.retry_policy.attempt_timeout == 10.0
    assert settings.retry_policy.retry_delay == 0.2


def test_settings_unknown_browser_env_falls_back_to_chromium(monkeypatch, tmp_path):
    loader = ConfigLoader(config_path=write_config(tmp_path, {"browser": "firefox"}))
    monkeypatch.setenv("BROWSER", "netscape")

    settings = HarnessSettings.from_config(loader)

    assert settings.browser is BrowserKind.CHROMIUM


def test_settings_defaults_without_config(tmp_path):
    settings = HarnessSettings.from_config(ConfigLoader(config_path=tmp_path / "absent.yaml"))

    assert settings.browser is BrowserKind.CHROMIUM
    assert settings.headless is False
    assert settings.retry_policy.max_attempts == 3
    assert settings.retry_policy.attempt_timeout == 20.0
    assert settings.retry_policy.retry_delay == 0.5
