"""Tests for configuration loading and saving."""

import pytest
import yaml

from text_assist.config import (
    DEFAULT_MAX_VISIBLE_ITEMS,
    ConfigError,
    TextAssistConfig,
    load_config,
    save_config,
    settings_path,
)


def test_defaults():
    """Test default config values."""
    config = TextAssistConfig()
    assert config.max_visible_items == DEFAULT_MAX_VISIBLE_ITEMS == 10
    assert config.words_file is None
    assert config.match == "prefix"
    assert config.case_sensitive is False


def test_missing_file_gives_defaults(tmp_path):
    """Test loading when no settings file exists."""
    assert load_config(tmp_path / "nope.yaml") == TextAssistConfig()


def test_save_and_load(tmp_path):
    """Test settings survive a save and load."""
    path = tmp_path / "nested" / "settings.yaml"
    config = TextAssistConfig(max_visible_items=5, words_file="/tmp/words.txt", match="substring")
    assert save_config(config, path) == path
    assert load_config(path) == config


def test_file_layout(tmp_path):
    """Test the sections written to the settings file."""
    path = tmp_path / "settings.yaml"
    save_config(TextAssistConfig(max_visible_items=7), path)
    settings = yaml.safe_load(path.read_text())
    assert settings["version"] == "1.0"
    assert settings["popup"] == {"max_visible_items": 7}
    assert settings["provider"] == {"match": "prefix", "case_sensitive": False}


def test_partial_file(tmp_path):
    """Missing keys fall back to defaults."""
    path = tmp_path / "settings.yaml"
    path.write_text("popup:\n  max_visible_items: 3\n")
    config = load_config(path)
    assert config.max_visible_items == 3
    assert config.match == "prefix"


def test_empty_file(tmp_path):
    """Test an empty settings file."""
    path = tmp_path / "settings.yaml"
    path.write_text("")
    assert load_config(path) == TextAssistConfig()


@pytest.mark.parametrize(
    "content",
    [
        "popup:\n  max_visible_items: 0\n",
        "popup:\n  max_visible_items: many\n",
        "popup:\n  max_visible_items: true\n",
        "provider:\n  match: fuzzy\n",
        "provider:\n  case_sensitive: maybe\n",
        "provider:\n  words_file: 5\n",
        "popup: [1, 2]\n",
        "- just\n- a list\n",
        "popup: {max_visible_items: 3\n",
    ],
)
def test_invalid_files(tmp_path, content):
    """Bad values and malformed YAML raise ConfigError."""
    path = tmp_path / "settings.yaml"
    path.write_text(content)
    with pytest.raises(ConfigError):
        load_config(path)


def test_settings_path_under_home(tmp_path, monkeypatch):
    """Test the settings file lives under the home directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    assert settings_path() == tmp_path / ".text-assist" / "settings.yaml"
