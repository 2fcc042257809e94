"""CLI entry point for the profile switcher."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from profile_switcher import __version__
from profile_switcher.config import load_settings, resolve_aws_config_path
from profile_switcher.exceptions import ProfileSwitcherError
from profile_switcher.logging_setup import configure_logging
from profile_switcher.session import ProfileSession, PromotionOutcome

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _run_tui(session: ProfileSession, *, watch: bool) -> PromotionOutcome | None:
    """Run the TUI until the user confirms or cancels."""
    from profile_switcher.tui.app import ProfileSwitcherApp

    app = ProfileSwitcherApp(session, watch=watch)
    return app.run()


@click.command()
@click.version_option(version=__version__, prog_name="aws-profile-switcher")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="AWS config file. Defaults to $AWS_CONFIG_FILE, then ~/.aws/config.",
)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to settings.toml for the switcher itself.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write logs here instead of the configured log file.",
)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level override.",
)
@click.option(
    "--no-watch",
    is_flag=True,
    default=False,
    help="Do not reload when the config file changes on disk.",
)
def cli(
    config_path: Path | None,
    settings_path: Path | None,
    log_file: Path | None,
    log_level: str | None,
    no_watch: bool,
) -> None:
    """Pick an AWS profile and copy it into the [default] section.

    Type to filter, move with the arrow keys, press Enter to promote
    the highlighted profile or Esc to leave the config untouched.
    """
    try:
        settings = load_settings(settings_path)
        log_warning = configure_logging(
            log_level or settings.logging.level,
            log_file or settings.log_file,
        )
        aws_path = resolve_aws_config_path(settings, config_path)
        session = ProfileSession.open(aws_path)
    except ProfileSwitcherError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if log_warning:
        click.echo(f"Warning: {log_warning}", err=True)
    logger.info(
        "Loaded %s: %d profiles, %d warnings",
        aws_path, len(session.all_profiles), len(session.warnings),
    )
    outcome = _run_tui(session, watch=settings.ui.watch and not no_watch)
    if outcome is None:
        return
    click.echo(outcome.message, err=not outcome.ok)
    if not outcome.ok:
        sys.exit(1)


if __name__ == "__main__":
    cli()
