"""Profile switcher exception hierarchy.

Provides a structured exception tree so catch blocks can be specific
and callers can distinguish startup failures from runtime ones.
"""

from __future__ import annotations


class ProfileSwitcherError(Exception):
    """Base for all profile switcher exceptions."""


class StoreError(ProfileSwitcherError):
    """Config file load and save failures."""


class StoreReadError(StoreError):
    """Config file is missing or cannot be read."""


class StoreParseError(StoreError):
    """Config file content is not a valid section/key-value document."""


class StoreWriteError(StoreError):
    """Config file could not be written."""


class ProfileNotFoundError(ProfileSwitcherError):
    """The chosen profile has no matching section."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Profile {name!r} not found in config")
        self.name = name


class WatchError(ProfileSwitcherError):
    """File change subscription failures."""


class SettingsError(ProfileSwitcherError):
    """Raised when switcher settings loading or validation fails."""
