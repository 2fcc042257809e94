"""Profile switcher TUI.

Thin Textual shell around ``ProfileSession``: key, resize and watcher
messages are translated into session method calls, then every pane is
re-rendered from session state.

Layout:
  +----------------------------------------------------------+
  | ↑/↓ to navigate • Enter to select • ESC or Ctrl+C to quit |
  | [🔍 Type to filter...]                                   |
  | > work                    | [profile work]               |
  |   personal                | region = us-east-1           |
  |   staging                 | output = json                |
  +----------------------------------------------------------+
  | (info) ... / (warn) ... / errors                         |
  +----------------------------------------------------------+

The config watcher runs in a thread worker. It never touches the
session; it posts ``ConfigChanged`` or ``WatchFailed`` and the app
handles those on its own thread like any other event.
"""

from __future__ import annotations

import logging
from pathlib import Path

from textual import events, on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.message import Message
from textual.widgets import Input, Static
from textual.worker import get_current_worker

from profile_switcher.exceptions import WatchError
from profile_switcher.session import ProfileSession, PromotionOutcome
from profile_switcher.tui.render import (
    INSTRUCTIONS,
    list_rows,
    render_details,
    render_messages,
    render_profile_list,
)
from profile_switcher.tui.theme import DIM, SWITCHER_DARK
from profile_switcher.watcher import wait_for_change

logger = logging.getLogger(__name__)


class ConfigChanged(Message):
    """The watched config file was written."""


class WatchFailed(Message):
    """The config watcher could not subscribe or died."""

    def __init__(self, error: WatchError) -> None:
        super().__init__()
        self.error = error


class ProfileSwitcherApp(App[PromotionOutcome | None]):
    """Pick an AWS profile and promote it to ``[default]``."""

    TITLE = "AWS Profile Switcher"

    CSS = """
    #instructions {
        height: 1;
        margin: 0 1;
    }
    #filter {
        margin: 1 0 0 0;
    }
    #panes {
        height: 1fr;
        margin: 1 1 0 1;
    }
    #profile-list {
        width: 1fr;
        height: 100%;
        overflow: hidden;
    }
    #profile-details {
        width: 1fr;
        height: 100%;
        padding: 0 0 0 2;
        overflow: hidden;
    }
    #messages {
        height: auto;
        margin: 1 1 0 1;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Quit", priority=True),
        Binding("ctrl+c", "cancel", "Quit", show=False, priority=True),
        Binding("enter", "confirm", "Select", priority=True),
        Binding("up", "cursor(-1)", "Up", show=False, priority=True),
        Binding("down", "cursor(1)", "Down", show=False, priority=True),
        Binding("pageup", "page(-1)", "Page up", show=False, priority=True),
        Binding("pagedown", "page(1)", "Page down", show=False, priority=True),
        Binding("ctrl+home", "first", "First", show=False, priority=True),
        Binding("ctrl+end", "last", "Last", show=False, priority=True),
    ]

    def __init__(
        self,
        session: ProfileSession,
        *,
        watch: bool = True,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._session = session
        self._watch = watch

    @property
    def session(self) -> ProfileSession:
        return self._session

    def compose(self) -> ComposeResult:
        yield Static(f"[{DIM}]{INSTRUCTIONS}[/]", id="instructions")
        yield Input(placeholder="🔍 Type to filter...", id="filter")
        with Horizontal(id="panes"):
            yield Static("", id="profile-list")
            yield Static("", id="profile-details")
        yield Static("", id="messages")

    def on_mount(self) -> None:
        self.register_theme(SWITCHER_DARK)
        self.theme = "switcher-dark"
        self._session.resize(self.size.width, self.size.height)
        self.query_one("#filter", Input).focus()
        self._refresh_view()
        if self._watch:
            self._start_watch()

    # --- rendering ---

    def _refresh_view(self) -> None:
        """Push freshly rendered state into every pane."""
        if self._session.quitting:
            return
        try:
            profile_list = self.query_one("#profile-list", Static)
            details = self.query_one("#profile-details", Static)
            messages = self.query_one("#messages", Static)
        except NoMatches:
            # Resize can arrive before the screen is composed.
            return
        profile_list.update(render_profile_list(self._session))
        details.update(render_details(self._session))
        messages.update(render_messages(self._session))

    # --- terminal events ---

    def on_resize(self, event: events.Resize) -> None:
        self._session.resize(event.size.width, event.size.height)
        self._refresh_view()

    @on(Input.Changed, "#filter")
    def on_filter_changed(self, event: Input.Changed) -> None:
        if self._session.set_query(event.value):
            self._refresh_view()

    def action_cursor(self, delta: int) -> None:
        self._session.move(delta)
        self._refresh_view()

    def action_page(self, direction: int) -> None:
        self._session.move(direction * list_rows(self._session))
        self._refresh_view()

    def action_first(self) -> None:
        self._session.move_to_start()
        self._refresh_view()

    def action_last(self) -> None:
        self._session.move_to_end()
        self._refresh_view()

    def action_cancel(self) -> None:
        self._session.cancel()
        self.exit(None)

    def action_confirm(self) -> None:
        # The write runs here, on the app thread, so no keystroke is
        # handled while the document is being saved.
        outcome = self._session.confirm()
        self.exit(outcome)

    # --- config watching ---

    def _start_watch(self) -> None:
        self._watch_config(self._session.path)

    @work(thread=True, exclusive=True, group="config-watch", exit_on_error=False)
    def _watch_config(self, path: Path) -> None:
        """Block on one change of ``path`` and report it to the app."""
        worker = get_current_worker()
        try:
            changed = wait_for_change(path, should_stop=lambda: worker.is_cancelled)
        except WatchError as e:
            self.post_message(WatchFailed(e))
            return
        if changed:
            self.post_message(ConfigChanged())

    @on(ConfigChanged)
    def _handle_config_changed(self, _message: ConfigChanged) -> None:
        if self._session.quitting:
            return
        logger.debug("Config changed on disk, reloading %s", self._session.path)
        self._session.reload()
        self._refresh_view()
        if self._watch:
            self._start_watch()

    @on(WatchFailed)
    def _handle_watch_failed(self, message: WatchFailed) -> None:
        self._session.watch_failed(message.error)
        self._refresh_view()
