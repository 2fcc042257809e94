"""Interactive session state machine.

``ProfileSession`` owns every piece of mutable UI state: the loaded
document, the derived catalog, the filter query, the filtered list and
the cursor. Each public method handles one event to completion and
leaves the state consistent, so the TUI only has to translate raw
terminal events into method calls and re-render afterwards.

States: RUNNING -> QUITTING. Quitting happens on cancel or confirm; a
confirm runs the promotion first, whatever its outcome.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from profile_switcher.catalog import Profile, derive_catalog
from profile_switcher.exceptions import ProfileNotFoundError, StoreError
from profile_switcher.filtering import (
    filter_profiles,
    move_selection,
    reconcile_selection,
)
from profile_switcher.promote import promote
from profile_switcher.store import ConfigDocument, load

logger = logging.getLogger(__name__)

INFO_LINES: tuple[str, ...] = (
    "Only [profile ...] sections are listed",
    "The [default] section is overwritten with the chosen profile's values",
)


class SessionStatus(enum.Enum):
    RUNNING = "running"
    QUITTING = "quitting"


@dataclass(frozen=True)
class PromotionOutcome:
    """Result of a confirm action, reported after the TUI exits."""

    profile: str | None
    ok: bool
    message: str


class ProfileSession:
    """Single-writer owner of the switcher's state."""

    def __init__(
        self,
        path: Path,
        document: ConfigDocument,
        *,
        loader: Callable[[Path], ConfigDocument] = load,
        promoter: Callable[[ConfigDocument, str, Path], None] = promote,
    ) -> None:
        self.path = path
        self._loader = loader
        self._promoter = promoter

        self.document = document
        self.all_profiles: list[Profile] = []
        self.warnings: list[str] = []
        self.query = ""
        self.filtered_profiles: list[Profile] = []
        self.selection: int | None = None
        self.terminal_size: tuple[int, int] = (80, 24)
        self.status = SessionStatus.RUNNING
        self.error: str | None = None
        self.infos: tuple[str, ...] = INFO_LINES
        self.outcome: PromotionOutcome | None = None

        self._apply_document(document)

    @classmethod
    def open(cls, path: Path, **kwargs) -> ProfileSession:
        """Load ``path`` and start a session; StoreError propagates."""
        loader = kwargs.get("loader", load)
        return cls(path, loader(path), **kwargs)

    # --- derived views ---

    @property
    def quitting(self) -> bool:
        return self.status is SessionStatus.QUITTING

    def selected_profile(self) -> Profile | None:
        if self.selection is None:
            return None
        return self.filtered_profiles[self.selection]

    def selected_items(self) -> list[tuple[str, str]]:
        """Raw key/value pairs of the selected profile's section."""
        profile = self.selected_profile()
        if profile is None or not self.document.has_section(profile.section_name):
            return []
        return self.document.items(profile.section_name)

    # --- event handlers ---

    def set_query(self, text: str) -> bool:
        """Apply new filter text. Returns True when the query changed."""
        if self.quitting or text == self.query:
            return False
        self.query = text
        self._refilter(self.selection)
        return True

    def move(self, delta: int) -> None:
        if self.quitting:
            return
        self.selection = move_selection(self.filtered_profiles, self.selection, delta)

    def move_to_start(self) -> None:
        self.move(-len(self.filtered_profiles))

    def move_to_end(self) -> None:
        self.move(len(self.filtered_profiles))

    def resize(self, width: int, height: int) -> None:
        self.terminal_size = (width, height)

    def cancel(self) -> None:
        if self.quitting:
            return
        logger.debug("Cancelled without changes")
        self.status = SessionStatus.QUITTING

    def confirm(self) -> PromotionOutcome:
        """Promote the selected profile, then quit regardless of outcome."""
        if self.quitting:
            return self.outcome or PromotionOutcome(
                profile=None, ok=True, message="Cancelled; config left unchanged",
            )

        profile = self.selected_profile()
        if profile is None:
            outcome = PromotionOutcome(
                profile=None,
                ok=True,
                message="No profile selected; config left unchanged",
            )
        else:
            try:
                self._promoter(self.document, profile.name, self.path)
            except (ProfileNotFoundError, StoreError) as e:
                logger.error("Promoting %r failed: %s", profile.name, e)
                outcome = PromotionOutcome(
                    profile=profile.name,
                    ok=False,
                    message=f"Error setting default profile: {e}",
                )
            else:
                outcome = PromotionOutcome(
                    profile=profile.name,
                    ok=True,
                    message=f"Default profile set to {profile.name!r}",
                )

        self.outcome = outcome
        self.status = SessionStatus.QUITTING
        return outcome

    def reload(self) -> bool:
        """Re-read the config after an on-disk change.

        On failure the previous document and catalog stay in place and
        the error is kept for display.
        """
        try:
            document = self._loader(self.path)
        except StoreError as e:
            logger.warning("Reloading %s failed: %s", self.path, e)
            self.error = f"Error reloading config: {e}"
            return False
        self.error = None
        self._apply_document(document)
        logger.info(
            "Reloaded %s: %d profiles, %d warnings",
            self.path, len(self.all_profiles), len(self.warnings),
        )
        return True

    def watch_failed(self, error: Exception) -> None:
        logger.warning("Watching %s failed: %s", self.path, error)
        self.error = f"Stopped watching config for changes: {error}"

    # --- internals ---

    def _apply_document(self, document: ConfigDocument) -> None:
        catalog = derive_catalog(document)
        self.document = document
        self.all_profiles = catalog.profiles
        self.warnings = list(catalog.warnings)
        self._refilter(None)

    def _refilter(self, previous: int | None) -> None:
        self.filtered_profiles = filter_profiles(self.all_profiles, self.query)
        self.selection = reconcile_selection(self.filtered_profiles, previous)
