"""Text Assist CLI entry point.

Usage:
    text-assist                              # Launch with configured settings
    text-assist init                         # Initialize configuration
    text-assist run --words-file words.txt   # Run with explicit settings
    text-assist config --show                # Print current settings
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .config import ConfigError, TextAssistConfig, load_config, save_config, settings_path
from .providers import MATCH_MODES


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version="0.1.0")
def main(ctx: click.Context) -> None:
    """Text Assist - text input with autocomplete suggestions.

    Run without arguments to start the demo with configured settings.
    Use 'init' to configure, 'run' for explicit options.
    """
    if ctx.invoked_subcommand is None:
        _run_with_options(None, None, None, None)


# =============================================================================
# Init Command
# =============================================================================


@main.command("init")
@click.option("--max-items", type=int, default=None, help="Maximum suggestions shown")
@click.option(
    "--words-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Word list for suggestions (one per line)",
)
@click.option("--match", type=click.Choice(MATCH_MODES), default=None, help="Matching mode")
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
@click.option("--yes", "-y", is_flag=True, help="Accept defaults without prompting")
def init_config(
    max_items: int | None,
    words_file: str | None,
    match: str | None,
    force: bool,
    yes: bool,
) -> None:
    """Initialize the Text Assist configuration.

    Examples:

        # Interactive setup
        text-assist init

        # Non-interactive with defaults
        text-assist init --yes

        # Show at most 5 suggestions from a custom list
        text-assist init --max-items 5 --words-file ~/words.txt
    """
    settings_file = settings_path()

    # Check if already initialized
    if settings_file.exists() and not force:
        click.echo(f"Configuration already exists at {settings_file}")
        click.echo("Use --force to overwrite existing configuration.")
        if not yes and not click.confirm("Continue anyway?"):
            return

    if max_items is None:
        max_items = 10 if yes else click.prompt("Maximum suggestions shown", default=10, type=int)

    if match is None:
        match = (
            "prefix"
            if yes
            else click.prompt("Matching mode", default="prefix", type=click.Choice(MATCH_MODES))
        )

    if words_file is None and not yes:
        words_file = click.prompt("Word list file (empty for built-in)", default="", show_default=False)

    try:
        config = TextAssistConfig(
            max_visible_items=max_items,
            words_file=str(Path(words_file).expanduser()) if words_file else None,
            match=match,
        )
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    save_config(config, settings_file)

    click.echo(f"\n✓ Configuration saved to {settings_file}")
    click.echo(f"  Max suggestions:  {config.max_visible_items}")
    click.echo(f"  Matching mode:    {config.match}")
    click.echo(f"  Word list:        {config.words_file or '(built-in)'}")

    click.echo("\nTo start the demo:")
    click.echo("  text-assist           # Use configured settings")
    click.echo("  text-assist run       # Same as above")


# =============================================================================
# Run Command
# =============================================================================


@main.command("run")
@click.option(
    "--words-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Word list for suggestions (overrides config)",
)
@click.option("--max-items", type=int, default=None, help="Maximum suggestions shown")
@click.option("--match", type=click.Choice(MATCH_MODES), default=None, help="Matching mode")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write debug logs to this file",
)
def run_command(
    words_file: str | None,
    max_items: int | None,
    match: str | None,
    log_file: str | None,
) -> None:
    """Run the Text Assist demo.

    Command-line options override configuration.

    Examples:

        # Use configured settings
        text-assist run

        # Custom word list, substring matching
        text-assist run --words-file words.txt --match substring
    """
    _run_with_options(words_file, max_items, match, log_file)


# =============================================================================
# Config Command
# =============================================================================


@main.command("config")
@click.option("--show", is_flag=True, help="Show current configuration")
def config_command(show: bool) -> None:
    """View Text Assist configuration."""
    import yaml

    settings_file = settings_path()

    if not settings_file.exists():
        click.echo("No configuration found. Run 'text-assist init' to create one.")
        return

    config = _load_config_or_fail()
    click.echo(f"Configuration file: {settings_file}\n")
    if show:
        click.echo(yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False))


# =============================================================================
# Helper Functions
# =============================================================================


def _load_config_or_fail() -> TextAssistConfig:
    try:
        return load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


def build_config(
    words_file: str | None,
    max_items: int | None,
    match: str | None,
) -> TextAssistConfig:
    """Merge command-line overrides over the configured settings."""
    config = _load_config_or_fail()
    try:
        return TextAssistConfig(
            max_visible_items=max_items if max_items is not None else config.max_visible_items,
            words_file=words_file or config.words_file,
            match=match or config.match,
            case_sensitive=config.case_sensitive,
        )
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


def _run_with_options(
    words_file: str | None,
    max_items: int | None,
    match: str | None,
    log_file: str | None,
) -> None:
    """Run the demo with explicit options."""
    from .app import run
    from .providers import WordListProvider, load_words

    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    config = build_config(words_file, max_items, match)

    provider = None
    if config.words_file:
        try:
            words = load_words(Path(config.words_file).expanduser())
        except OSError as e:
            raise click.ClickException(f"Could not read word list: {e}") from e
        provider = WordListProvider(words, case_sensitive=config.case_sensitive, match=config.match)

    run(provider=provider, config=config)


if __name__ == "__main__":
    main()
