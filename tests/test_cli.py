"""Tests for the text-assist command line."""

import pytest
from click.testing import CliRunner

from text_assist import app as app_module
from text_assist.cli import main
from text_assist.config import TextAssistConfig, load_config, save_config, settings_path
from text_assist.providers import WordListProvider


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def runs(monkeypatch):
    """Capture demo launches instead of starting a terminal UI."""
    calls = []

    def fake_run(provider=None, config=None):
        calls.append((provider, config))

    monkeypatch.setattr(app_module, "run", fake_run)
    return calls


def test_version():
    """Test --version output."""
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_init_with_defaults(home):
    """Test init --yes writes default settings."""
    result = CliRunner().invoke(main, ["init", "--yes"])
    assert result.exit_code == 0, result.output
    assert settings_path().exists()
    assert load_config() == TextAssistConfig()


def test_init_with_options(home):
    """Test init options are saved."""
    result = CliRunner().invoke(main, ["init", "--yes", "--max-items", "4", "--match", "substring"])
    assert result.exit_code == 0, result.output
    config = load_config()
    assert config.max_visible_items == 4
    assert config.match == "substring"


def test_init_interactive(home):
    """Test init prompts for missing values."""
    result = CliRunner().invoke(main, ["init"], input="6\nprefix\n\n")
    assert result.exit_code == 0, result.output
    assert load_config().max_visible_items == 6


def test_init_rejects_bad_max_items(home):
    """Test init refuses an invalid popup limit."""
    result = CliRunner().invoke(main, ["init", "--yes", "--max-items", "0"])
    assert result.exit_code != 0
    assert "max_visible_items" in result.output
    assert not settings_path().exists()


def test_init_existing_without_force_declined(home):
    """Declining the overwrite prompt keeps existing settings."""
    save_config(TextAssistConfig(max_visible_items=3))
    result = CliRunner().invoke(main, ["init", "--max-items", "8"], input="n\n")
    assert result.exit_code == 0
    assert "already exists" in result.output
    assert load_config().max_visible_items == 3


def test_init_existing_with_force(home):
    """Test --force overwrites existing settings."""
    save_config(TextAssistConfig(max_visible_items=3))
    result = CliRunner().invoke(main, ["init", "--yes", "--force", "--max-items", "8"])
    assert result.exit_code == 0, result.output
    assert load_config().max_visible_items == 8


def test_config_without_file(home):
    """Test config --show before init."""
    result = CliRunner().invoke(main, ["config", "--show"])
    assert result.exit_code == 0
    assert "No configuration found" in result.output


def test_config_show(home):
    """Test config --show prints the settings."""
    save_config(TextAssistConfig(max_visible_items=5))
    result = CliRunner().invoke(main, ["config", "--show"])
    assert result.exit_code == 0
    assert "max_visible_items: 5" in result.output


def test_config_show_reports_invalid_file(home):
    """An invalid settings file is reported as a CLI error."""
    path = settings_path()
    path.parent.mkdir(parents=True)
    path.write_text("popup:\n  max_visible_items: -1\n")
    result = CliRunner().invoke(main, ["config", "--show"])
    assert result.exit_code != 0
    assert "max_visible_items" in result.output


def test_run_with_defaults(home, runs):
    """Test run with no settings file."""
    result = CliRunner().invoke(main, ["run"])
    assert result.exit_code == 0, result.output
    provider, config = runs[0]
    assert provider is None
    assert config == TextAssistConfig()


def test_default_command_runs(home, runs):
    """Running with no subcommand starts the demo."""
    result = CliRunner().invoke(main, [])
    assert result.exit_code == 0, result.output
    assert len(runs) == 1


def test_run_overrides_config(home, runs, tmp_path):
    """Command-line options override the settings file."""
    save_config(TextAssistConfig(max_visible_items=3, match="substring"))
    words = tmp_path / "words.txt"
    words.write_text("alpha\nbeta\nalphabet\n")

    result = CliRunner().invoke(main, ["run", "--words-file", str(words), "--max-items", "7"])
    assert result.exit_code == 0, result.output

    provider, config = runs[0]
    assert config.max_visible_items == 7
    assert config.match == "substring"
    assert isinstance(provider, WordListProvider)
    assert provider("bet") == ["beta", "alphabet"]


def test_run_missing_configured_word_list(home, runs):
    """A missing word list is reported before the demo starts."""
    save_config(TextAssistConfig(words_file=str(home / "missing.txt")))
    result = CliRunner().invoke(main, ["run"])
    assert result.exit_code != 0
    assert "Could not read word list" in result.output
    assert runs == []


def test_run_rejects_non_path_word_list(home, runs):
    """A words_file that is not a string is reported, not a traceback."""
    path = settings_path()
    path.parent.mkdir(parents=True)
    path.write_text("provider:\n  words_file: 5\n")
    result = CliRunner().invoke(main, ["run"])
    assert result.exit_code == 1
    assert "words_file" in result.output
    assert runs == []
