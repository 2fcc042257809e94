"""Settings loader for the profile switcher.

Loads from settings.toml with sensible defaults when the file is absent.
Settings are loaded once at startup and passed to the app explicitly.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from profile_switcher.exceptions import SettingsError

DEFAULT_SETTINGS_PATH = Path("~/.aws-profile-switcher/settings.toml")
DEFAULT_AWS_CONFIG_PATH = "~/.aws/config"
AWS_CONFIG_ENV_VAR = "AWS_CONFIG_FILE"


@dataclass(frozen=True)
class AwsConfig:
    config_path: str = DEFAULT_AWS_CONFIG_PATH


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "WARNING"
    log_path: str = "~/.aws-profile-switcher/switcher.log"


@dataclass(frozen=True)
class UiConfig:
    watch: bool = True  # reload when the config file changes on disk


@dataclass(frozen=True)
class Settings:
    """Top-level switcher settings."""

    aws: AwsConfig = field(default_factory=AwsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    ui: UiConfig = field(default_factory=UiConfig)

    @property
    def log_file(self) -> Path:
        return Path(self.logging.log_path).expanduser()


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    If path is None, uses ~/.aws-profile-switcher/settings.toml.
    Returns default settings if no file is found.
    """
    if path is None:
        path = DEFAULT_SETTINGS_PATH.expanduser()

    if not path.exists():
        return Settings()

    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Cannot read settings {path}: {e}") from e

    aws_data = raw.get("aws", {})
    if not isinstance(aws_data, dict):
        raise SettingsError(f"[aws] in {path} must be a table")
    aws = AwsConfig(
        config_path=str(aws_data.get("config_path", DEFAULT_AWS_CONFIG_PATH)),
    )

    log_data = raw.get("logging", {})
    if not isinstance(log_data, dict):
        raise SettingsError(f"[logging] in {path} must be a table")
    logging_cfg = LoggingConfig(
        level=str(log_data.get("level", "WARNING")).upper(),
        log_path=str(
            log_data.get("log_path", "~/.aws-profile-switcher/switcher.log")
        ),
    )

    ui_data = raw.get("ui", {})
    if not isinstance(ui_data, dict):
        raise SettingsError(f"[ui] in {path} must be a table")
    ui = UiConfig(watch=bool(ui_data.get("watch", True)))

    return Settings(aws=aws, logging=logging_cfg, ui=ui)


def resolve_aws_config_path(
    settings: Settings, override: Path | None = None,
) -> Path:
    """Pick the AWS config file: flag, then $AWS_CONFIG_FILE, then settings."""
    if override is not None:
        return override.expanduser()
    env_path = os.environ.get(AWS_CONFIG_ENV_VAR, "").strip()
    if env_path:
        return Path(env_path).expanduser()
    return Path(settings.aws.config_path).expanduser()
