"""Text Assist configuration.

Settings live in ``~/.text-assist/settings.yaml``:

    version: "1.0"
    popup:
      max_visible_items: 10
    provider:
      words_file: ~/words.txt
      match: prefix
      case_sensitive: false
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .providers import MATCH_MODES

CONFIG_DIR_NAME = ".text-assist"
SETTINGS_FILE_NAME = "settings.yaml"

DEFAULT_MAX_VISIBLE_ITEMS = 10


def settings_path() -> Path:
    """Location of the user settings file."""
    return Path.home() / CONFIG_DIR_NAME / SETTINGS_FILE_NAME


class ConfigError(Exception):
    """Raised when the settings file cannot be read or holds bad values."""


@dataclass
class TextAssistConfig:
    """Configuration for the autocomplete controller and demo app.

    Attributes:
        max_visible_items: Candidates beyond this count are discarded
        words_file: Word list for the demo provider
        match: "prefix" or "substring" matching in the demo provider
        case_sensitive: Whether the demo provider matches case-sensitively
    """

    max_visible_items: int = DEFAULT_MAX_VISIBLE_ITEMS

    # Demo provider settings
    words_file: str | None = None
    match: str = "prefix"
    case_sensitive: bool = False

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check value types and ranges.

        Raises:
            ConfigError: If a value is invalid
        """
        if isinstance(self.max_visible_items, bool) or not isinstance(self.max_visible_items, int):
            raise ConfigError(f"max_visible_items must be an integer, got {self.max_visible_items!r}")
        if self.max_visible_items < 1:
            raise ConfigError(f"max_visible_items must be at least 1, got {self.max_visible_items}")
        if self.match not in MATCH_MODES:
            raise ConfigError(f"match must be one of {', '.join(MATCH_MODES)}, got {self.match!r}")
        if not isinstance(self.case_sensitive, bool):
            raise ConfigError(f"case_sensitive must be true or false, got {self.case_sensitive!r}")
        if self.words_file is not None and not isinstance(self.words_file, str):
            raise ConfigError(f"words_file must be a path, got {self.words_file!r}")

    @classmethod
    def from_dict(cls, settings: dict[str, Any] | None) -> TextAssistConfig:
        """Build a config from the settings file layout."""
        settings = settings or {}
        if not isinstance(settings, dict):
            raise ConfigError("Settings file must contain a mapping")

        popup = settings.get("popup") or {}
        provider = settings.get("provider") or {}
        if not isinstance(popup, dict) or not isinstance(provider, dict):
            raise ConfigError("'popup' and 'provider' sections must be mappings")

        return cls(
            max_visible_items=popup.get("max_visible_items", DEFAULT_MAX_VISIBLE_ITEMS),
            words_file=provider.get("words_file"),
            match=provider.get("match", "prefix"),
            case_sensitive=provider.get("case_sensitive", False),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the settings file layout."""
        settings: dict[str, Any] = {
            "version": "1.0",
            "popup": {
                "max_visible_items": self.max_visible_items,
            },
            "provider": {
                "match": self.match,
                "case_sensitive": self.case_sensitive,
            },
        }
        if self.words_file:
            settings["provider"]["words_file"] = self.words_file
        return settings


def load_config(path: Path | None = None) -> TextAssistConfig:
    """Load configuration, falling back to defaults when no file exists."""
    settings_file = path or settings_path()
    if not settings_file.exists():
        return TextAssistConfig()

    try:
        with open(settings_file) as f:
            settings = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read {settings_file}: {e}") from e

    return TextAssistConfig.from_dict(settings)


def save_config(config: TextAssistConfig, path: Path | None = None) -> Path:
    """Write configuration, creating the directory if needed."""
    settings_file = path or settings_path()
    settings_file.parent.mkdir(parents=True, exist_ok=True)
    with open(settings_file, "w") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
    return settings_file
