"""Pure renderers: session state in, Rich markup out.

Nothing here mutates the session; the app calls these after every
event and pushes the strings into its Static widgets.
"""

from __future__ import annotations

from rich.markup import escape

from profile_switcher.session import ProfileSession
from profile_switcher.tui.theme import (
    DIM,
    ERROR,
    INFO,
    INFO_ICON,
    SELECTED,
    WARN,
    WARN_ICON,
)

INSTRUCTIONS = "↑/↓ to navigate • Enter to select • ESC or Ctrl+C to quit"

# Instructions, filter input and pane spacing around the list.
_CHROME_ROWS = 6


def message_lines(session: ProfileSession) -> list[str]:
    """Info, warning and error lines, in display order."""
    lines = [
        f"[{INFO}]{INFO_ICON} (info) {escape(info)}[/]" for info in session.infos
    ]
    lines.extend(
        f"[{WARN}]{WARN_ICON} (warn) {escape(warning)}[/]"
        for warning in session.warnings
    )
    if session.error:
        lines.append(f"[bold {ERROR}]{escape(session.error)}[/]")
    return lines


def list_rows(session: ProfileSession) -> int:
    """How many profile rows fit on screen."""
    _width, height = session.terminal_size
    return max(3, height - _CHROME_ROWS - len(message_lines(session)))


def _window(total: int, selection: int | None, rows: int) -> tuple[int, int]:
    if total <= rows or selection is None:
        return 0, min(total, rows)
    start = min(max(0, selection - rows + 1), total - rows)
    return start, start + rows


def render_profile_list(session: ProfileSession) -> str:
    if not session.all_profiles:
        return f"[{DIM}]No {escape('[profile ...]')} sections found[/]"
    if not session.filtered_profiles:
        return f"[{DIM}]No profiles match '{escape(session.query)}'[/]"

    start, end = _window(
        len(session.filtered_profiles), session.selection, list_rows(session),
    )
    lines: list[str] = []
    for index in range(start, end):
        name = escape(session.filtered_profiles[index].name)
        if index == session.selection:
            lines.append(f"> [{SELECTED}]{name}[/]")
        else:
            lines.append(f"  {name}")
    return "\n".join(lines)


def render_details(session: ProfileSession) -> str:
    profile = session.selected_profile()
    if profile is None:
        return f"[{DIM}]No profile selected[/]"
    header = escape(f"[{profile.section_name}]")
    lines = [f"[bold]{header}[/bold]"]
    items = session.selected_items()
    if not items:
        lines.append(f"[{DIM}](no keys)[/]")
    for key, value in items:
        lines.append(f"{escape(key)} = {escape(value)}")
    return "\n".join(lines)


def render_messages(session: ProfileSession) -> str:
    return "\n".join(message_lines(session))
